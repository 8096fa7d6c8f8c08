"""Tests for MetadataLoader class."""

from pathlib import Path

import pytest

from galleryforge.gallery_config import LoadStatus
from galleryforge.metadata import MetadataLoader, normalize_tags, split_front_matter


class TestSplitFrontMatter:
    """Tests for split_front_matter."""

    def test_with_front_matter(self):
        """Test front matter and body are separated."""
        front, body = split_front_matter("---\ntitle: A\n---\nBody text\n")

        assert front == 'title: A'
        assert body == 'Body text\n'

    def test_without_front_matter(self):
        """Test text without front matter is all body."""
        front, body = split_front_matter("Just text")

        assert front == ''
        assert body == 'Just text'

    def test_crlf(self):
        """Test Windows line endings."""
        front, body = split_front_matter("---\r\ntitle: A\r\n---\r\nBody")

        assert front == 'title: A'
        assert body == 'Body'


class TestNormalizeTags:
    """Tests for normalize_tags."""

    def test_string(self):
        """Test a single string tag."""
        assert normalize_tags('beach') == ['beach']

    def test_list_cleanup(self):
        """Test blanks and duplicates are removed, order kept."""
        assert normalize_tags(['b', ' a ', '', 'b', None, 3]) == ['b', 'a', '3']

    def test_none(self):
        """Test missing tags."""
        assert normalize_tags(None) == []


class TestMetadataLoader:
    """Tests for MetadataLoader class."""

    @pytest.fixture
    def loader(self, logger):
        return MetadataLoader(logger)

    def test_missing_sidecar(self, loader, tmp_path):
        """Test missing sidecar gives defaults."""
        result = loader.load(tmp_path / 'sunset.jpg')

        assert result.status is LoadStatus.DEFAULT
        assert result.value.title == 'sunset'
        assert result.value.tags == []
        assert result.value.description == ''
        assert result.value.content == ''

    def test_sidecar_is_directory(self, loader, tmp_path):
        """Test a directory where the sidecar should be gives defaults."""
        (tmp_path / 'sunset.md').mkdir()

        result = loader.load(tmp_path / 'sunset.jpg')

        assert result.status is LoadStatus.DEFAULT
        assert result.value.title == 'sunset'

    def test_full_sidecar(self, loader, tmp_path, write_sidecar):
        """Test front matter fields and rendered body."""
        image = tmp_path / 'sunset.jpg'
        write_sidecar(
            image,
            'title: Sunset at the pier\ntags: [beach, evening]\ndescription: Last light',
            'Golden **hour**.',
        )

        result = loader.load(image)

        assert result.status is LoadStatus.FOUND
        meta = result.value
        assert meta.title == 'Sunset at the pier'
        assert meta.tags == ['beach', 'evening']
        assert meta.description == 'Last light'
        assert '<strong>hour</strong>' in meta.content

    def test_missing_title_uses_stem(self, loader, tmp_path, write_sidecar):
        """Test found sidecar without title falls back to the filename."""
        image = tmp_path / 'waves.png'
        write_sidecar(image, 'tags: beach')

        result = loader.load(image)

        assert result.found
        assert result.value.title == 'waves'
        assert result.value.tags == ['beach']
        assert result.value.content == ''

    def test_invalid_yaml(self, loader, tmp_path, write_sidecar):
        """Test invalid front matter gives defaults and an error."""
        image = tmp_path / 'broken.jpg'
        write_sidecar(image, 'title: [unclosed', 'Body')

        result = loader.load(image)

        assert result.status is LoadStatus.ERROR
        assert result.error is not None
        assert result.value.title == 'broken'
        assert result.value.content == ''

    def test_body_only(self, loader, tmp_path):
        """Test sidecar without front matter renders its whole text."""
        image = tmp_path / 'plain.jpg'
        (tmp_path / 'plain.md').write_text('Hello *there*', encoding='utf-8')

        result = loader.load(image)

        assert result.found
        assert result.value.title == 'plain'
        assert '<em>there</em>' in result.value.content

    def test_sidecar_path(self):
        """Test sidecar shares the image base name."""
        assert MetadataLoader.sidecar_path(Path('a/b/c.JPG')) == Path('a/b/c.md')
