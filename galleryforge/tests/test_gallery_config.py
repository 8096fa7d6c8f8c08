"""Tests for gallery and album configuration."""

from galleryforge.access_codes import hash_access_code
from galleryforge.errors import ConfigParseError
from galleryforge.gallery_config import (
    AlbumConfig,
    GalleryConfig,
    LoadStatus,
    load_json_object,
)


class TestLoadJsonObject:
    """Tests for load_json_object."""

    def test_missing_file(self, tmp_path):
        """Test missing file is a default, not an error."""
        result = load_json_object(tmp_path / 'nope.json')

        assert result.status is LoadStatus.DEFAULT
        assert result.value == {}
        assert result.error is None

    def test_valid_file(self, tmp_path, write_json):
        """Test valid object is found."""
        path = write_json(tmp_path / 'config.json', {'name': 'x'})

        result = load_json_object(path)

        assert result.found
        assert result.value == {'name': 'x'}

    def test_malformed_json(self, tmp_path):
        """Test malformed JSON yields an empty config and a ConfigParseError."""
        path = tmp_path / 'config.json'
        path.write_text('{"name": ', encoding='utf-8')

        result = load_json_object(path)

        assert result.status is LoadStatus.ERROR
        assert result.value == {}
        assert isinstance(result.error, ConfigParseError)
        assert result.error.path == str(path)

    def test_non_object(self, tmp_path, write_json):
        """Test a JSON array is rejected."""
        path = write_json(tmp_path / 'config.json', ['a'])

        result = load_json_object(path)

        assert result.status is LoadStatus.ERROR
        assert result.value == {}


class TestAlbumConfig:
    """Tests for AlbumConfig."""

    def test_defaults(self):
        """Test empty config defaults."""
        config = AlbumConfig.from_dict({})

        assert config.name is None
        assert config.categories == []
        assert config.cover_image is None
        assert config.locked is False
        assert config.unlock_hash is None
        assert config.includes == []

    def test_merge_key_trimmed(self):
        """Test configured name is trimmed."""
        config = AlbumConfig.from_dict({'name': '  Summer  '})

        assert config.merge_key('2023-summer') == 'Summer'

    def test_merge_key_falls_back_to_folder(self):
        """Test blank name falls back to the folder name."""
        assert AlbumConfig.from_dict({'name': '   '}).merge_key('folder') == 'folder'
        assert AlbumConfig.from_dict({}).merge_key('folder') == 'folder'

    def test_title_alias(self):
        """Test title is accepted when name is absent."""
        assert AlbumConfig.from_dict({'title': 'Trip'}).merge_key('f') == 'Trip'

    def test_category_string_wrapped(self):
        """Test a single category string becomes a list."""
        assert AlbumConfig.from_dict({'category': 'Travel'}).categories == ['Travel']

    def test_category_deduplicated(self):
        """Test repeated categories collapse."""
        config = AlbumConfig.from_dict({'category': ['A', 'B', 'A', '']})

        assert config.categories == ['A', 'B']

    def test_unlock_code_forces_locked(self):
        """Test an unlock code locks the album even when locked is false."""
        config = AlbumConfig.from_dict({'locked': False, 'unlockCode': 'secret'})

        assert config.is_locked is True
        assert config.unlock_hash == hash_access_code('secret')

    def test_locked_without_code(self):
        """Test explicit lock without a code."""
        config = AlbumConfig.from_dict({'locked': True})

        assert config.is_locked is True
        assert config.unlock_hash is None

    def test_load_malformed(self, tmp_path):
        """Test malformed config loads as empty with an error."""
        folder = tmp_path / 'album'
        folder.mkdir()
        (folder / 'config.json').write_text('not json', encoding='utf-8')

        result = AlbumConfig.load(folder)

        assert result.status is LoadStatus.ERROR
        assert result.value == AlbumConfig()


class TestGalleryConfig:
    """Tests for GalleryConfig."""

    def test_defaults(self):
        """Test empty config defaults."""
        config = GalleryConfig.from_dict({})

        assert config.layout == 'grid'
        assert config.thumbnail_size == 400
        assert config.master_hash is None
        assert config.category_covers == {}

    def test_unknown_layout(self, logger):
        """Test unknown layout falls back to grid."""
        assert GalleryConfig.from_dict({'layout': 'carousel'}, logger).layout == 'grid'

    def test_layout_case_insensitive(self):
        """Test layout names are lowercased."""
        assert GalleryConfig.from_dict({'layout': 'Masonry'}).layout == 'masonry'

    def test_invalid_thumbnail_size(self, logger):
        """Test non-positive thumbnail size falls back to default."""
        assert GalleryConfig.from_dict({'thumbnailSize': 0}, logger).thumbnail_size == 400
        assert GalleryConfig.from_dict({'thumbnailSize': 'big'}, logger).thumbnail_size == 400

    def test_manifest_dict_hides_master_code(self):
        """Test the master code is replaced by its hash."""
        config = GalleryConfig.from_dict({'masterCode': 'open-sesame', 'projectName': 'G'})

        data = config.to_manifest_dict()

        assert 'masterCode' not in data
        assert data['masterHash'] == hash_access_code('open-sesame')
        assert 'open-sesame' not in str(data)
        assert data['projectName'] == 'G'

    def test_branding_keys(self):
        """Test the viewer's branding keys reach the manifest."""
        raw = {
            'projectName': 'My Site',
            'projectLogo': 'assets/logo.png',
            'browserIcon': 'assets/favicon.ico',
            'masterCode': 'm',
        }
        config = GalleryConfig.from_dict(raw)

        data = config.to_manifest_dict()

        assert config.project_name == 'My Site'
        assert data['projectName'] == 'My Site'
        assert data['projectLogo'] == 'assets/logo.png'
        assert data['browserIcon'] == 'assets/favicon.ico'
        assert data['masterHash'] == hash_access_code('m')

    def test_unknown_fields_pass_through(self):
        """Test keys the builder does not model are kept for the viewer."""
        raw = {'bogus': 1, 'theme': {'accent': '#f00'}, 'thumbnailSize': 200}

        data = GalleryConfig.from_dict(raw).to_manifest_dict()

        assert data['bogus'] == 1
        assert data['theme'] == {'accent': '#f00'}
        assert data['thumbnailSize'] == 200

    def test_unset_options_omitted(self):
        """Test options not in the file are not invented."""
        data = GalleryConfig.from_dict({}).to_manifest_dict()

        assert data == {'layout': 'grid', 'masterHash': None}

    def test_layout_normalized_in_manifest(self, logger):
        """Test the manifest carries the layout actually used."""
        data = GalleryConfig.from_dict({'layout': 'Carousel'}, logger).to_manifest_dict()

        assert data['layout'] == 'grid'

    def test_load_missing(self, tmp_path):
        """Test missing gallery config gives defaults."""
        result = GalleryConfig.load(tmp_path)

        assert result.status is LoadStatus.DEFAULT
        assert result.value.layout == 'grid'

    def test_inline_dictionary(self, tmp_path):
        """Test inline dictionary is returned as-is."""
        config = GalleryConfig.from_dict({'dictionary': {'unlockBtn': 'Open'}})

        assert config.load_dictionary(tmp_path) == {'unlockBtn': 'Open'}

    def test_dictionary_file(self, tmp_path, write_json):
        """Test dictionary path is resolved against the root."""
        write_json(tmp_path / 'i18n' / 'en.json', {'unlockBtn': 'Unlock'})
        config = GalleryConfig.from_dict({'dictionary': 'i18n/en.json'})

        assert config.load_dictionary(tmp_path) == {'unlockBtn': 'Unlock'}

    def test_dictionary_file_missing(self, tmp_path, logger):
        """Test missing dictionary file gives an empty mapping."""
        config = GalleryConfig.from_dict({'dictionary': 'missing.json'})

        assert config.load_dictionary(tmp_path, logger) == {}

    def test_no_dictionary(self, tmp_path):
        """Test no dictionary option gives an empty mapping."""
        assert GalleryConfig().load_dictionary(tmp_path) == {}
