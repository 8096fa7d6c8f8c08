"""
Aggregation - Global tag and category indexes built after all albums are known.

Both indexes resolve "first" by album scan order, then image order within an
album, so the same source tree always yields the same covers.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .album import Album
from .deriver import THUMBNAIL_DIR
from .gallery_config import GalleryConfig


@dataclass
class TagInfo:
    """
    Usage of one tag across the gallery.

    Attributes:
        count: Number of images carrying the tag
        cover: Thumbnail of the first image found with the tag
    """
    count: int
    cover: str

    def to_dict(self) -> dict:
        return {'count': self.count, 'cover': self.cover}


class TagIndex:
    """Accumulates tag counts and representative covers."""

    def __init__(self):
        self.tags: Dict[str, TagInfo] = {}

    def add(self, tag: str, thumb: str) -> None:
        if not tag:
            return
        info = self.tags.get(tag)
        if info is None:
            info = TagInfo(count=0, cover=thumb)
            self.tags[tag] = info
        info.count += 1

    def add_albums(self, albums: Iterable[Album]) -> 'TagIndex':
        for album in albums:
            for image in album.images:
                for tag in image.meta.tags:
                    self.add(tag, image.thumb)
        return self

    def __len__(self) -> int:
        return len(self.tags)

    def to_dict(self) -> dict:
        return {name: info.to_dict() for name, info in self.tags.items()}


def aggregate_tags(albums: Iterable[Album]) -> TagIndex:
    """Build the tag index over albums in the given order."""
    return TagIndex().add_albums(albums)


def resolve_album_covers(
    albums: Iterable[Album],
    output_dir: Path,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Set album.cover for albums whose cover thumbnail exists on disk.

    The cover is stored as <albumId>/<filename>, relative to thumbnails/.
    """
    logger = logger or logging.getLogger(__name__)
    for album in albums:
        album.cover = None
        if not album.cover_image:
            continue
        cover = f"{album.id}/{album.cover_image}"
        if (Path(output_dir) / THUMBNAIL_DIR / album.id / album.cover_image).is_file():
            album.cover = cover
        else:
            logger.warning(f"Cover {album.cover_image} for album {album.id} has no thumbnail")


class CategoryResolver:
    """
    Resolves one cover per category.

    Precedence, highest first: explicit categoryCovers entry in config,
    cover of the first album in the category whose thumbnail exists,
    defaultCategoryCover, None.
    """

    def __init__(
        self,
        output_dir: Path,
        config: GalleryConfig,
        logger: Optional[logging.Logger] = None
    ):
        self.output_dir = Path(output_dir)
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def _album_cover(self, album: Album) -> Optional[str]:
        if not album.cover:
            return None
        path = self.output_dir / THUMBNAIL_DIR / Path(*album.cover.split('/'))
        if not path.is_file():
            return None
        return f"{THUMBNAIL_DIR}/{album.cover}"

    def resolve(self, albums: List[Album]) -> Dict[str, Optional[str]]:
        categories: Dict[str, Optional[str]] = {}

        for album in albums:
            for category in album.categories:
                if categories.get(category) is None:
                    categories[category] = self._album_cover(album)

        for category in categories:
            override = self.config.category_covers.get(category)
            if override:
                categories[category] = override
            elif categories[category] is None:
                categories[category] = self.config.default_category_cover

        unresolved = [name for name, cover in categories.items() if cover is None]
        if unresolved:
            self.logger.debug(f"Categories without a cover: {', '.join(unresolved)}")
        return categories
