"""
Pytest fixtures for galleryforge tests.
"""

import json
import logging
from pathlib import Path

import pytest


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    return logging.getLogger('test')


@pytest.fixture
def make_image():
    """Fixture providing a function that writes a real image file."""
    from PIL import Image

    def _make(path, size=(64, 48), color='red'):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = 'RGBA' if path.suffix.lower() == '.png' else 'RGB'
        Image.new(mode, size, color=color).save(path)
        return path

    return _make


@pytest.fixture
def write_json():
    """Fixture providing a function that writes a JSON file."""
    def _write(path, data):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding='utf-8')
        return path

    return _write


@pytest.fixture
def write_sidecar():
    """Fixture providing a function that writes a Markdown sidecar."""
    def _write(image_path, front_matter, body=''):
        sidecar = Path(image_path).with_suffix('.md')
        sidecar.write_text(f"---\n{front_matter}\n---\n{body}", encoding='utf-8')
        return sidecar

    return _write


@pytest.fixture
def gallery_root(tmp_path):
    """Fixture providing an empty gallery source tree."""
    root = tmp_path / 'gallery'
    (root / 'albums').mkdir(parents=True)
    return root


@pytest.fixture
def output_dir(tmp_path):
    """Fixture providing an output directory path."""
    return tmp_path / 'public'


@pytest.fixture
def thumb_gen(logger):
    """Fixture providing a small grid thumbnail generator."""
    from galleryforge.thumbnail_generator import ThumbnailGenerator
    return ThumbnailGenerator(layout='grid', size=16, logger=logger)


@pytest.fixture
def deriver(output_dir, thumb_gen, logger):
    """Fixture providing an asset deriver that is closed after the test."""
    from galleryforge.deriver import AssetDeriver
    with AssetDeriver(output_dir, thumb_gen, workers=2, logger=logger) as d:
        yield d


@pytest.fixture
def sample_gallery(gallery_root, make_image, write_json, write_sidecar):
    """
    Fixture providing a small gallery:

        albums/2023-beach      name "Beach", category Travel, cover sunset.jpg
            sunset.jpg         tags beach, evening
            waves.jpg          tags beach
        albums/2024-beach      name "Beach" (merged), unlock code ignored
            sunset.jpg         duplicate, dropped
            dunes.jpg
        albums/city            category Travel + Urban, unlockCode "secret"
            street.png         tags evening
    """
    albums = gallery_root / 'albums'
    write_json(gallery_root / 'gallery.config.json', {
        'layout': 'grid',
        'projectName': 'My Gallery',
        'masterCode': 'master-key',
        'thumbnailSize': 16,
        'defaultCategoryCover': 'assets/default.jpg',
        'dictionary': {'unlockBtn': 'Open'},
    })

    write_json(albums / '2023-beach' / 'config.json', {
        'name': 'Beach',
        'category': ['Travel'],
        'coverImage': 'sunset.jpg',
    })
    sunset = make_image(albums / '2023-beach' / 'sunset.jpg', (40, 30))
    write_sidecar(sunset, 'title: Sunset\ntags: [beach, evening]', 'Golden **hour**.')
    waves = make_image(albums / '2023-beach' / 'waves.jpg', (30, 40))
    write_sidecar(waves, 'tags: beach')

    write_json(albums / '2024-beach' / 'config.json', {
        'name': ' Beach ',
        'unlockCode': 'ignored',
    })
    make_image(albums / '2024-beach' / 'sunset.jpg', (50, 50), color='blue')
    make_image(albums / '2024-beach' / 'dunes.jpg', (41, 20))

    write_json(albums / 'city' / 'config.json', {
        'category': ['Travel', 'Urban'],
        'coverImage': 'street.png',
        'unlockCode': 'secret',
    })
    street = make_image(albums / 'city' / 'street.png', (33, 21))
    write_sidecar(street, 'tags: [evening]')

    return gallery_root
