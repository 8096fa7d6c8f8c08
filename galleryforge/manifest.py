"""
Manifest - The single structured artifact the viewer loads.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .album import Album
from .aggregation import TagIndex
from .errors import ManifestWriteFailure
from .gallery_config import GalleryConfig

MANIFEST_FILENAME = 'data.json'


@dataclass
class Manifest:
    """
    Complete gallery manifest.

    Attributes:
        config: Gallery config with the master code replaced by masterHash
        categories: Category name -> cover path or None
        tags: Tag name -> {'count', 'cover'}
        albums: Serialized albums in scan order
        dictionary: UI strings for the viewer
    """
    config: Dict[str, Any] = field(default_factory=dict)
    categories: Dict[str, Optional[str]] = field(default_factory=dict)
    tags: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    albums: List[Dict[str, Any]] = field(default_factory=list)
    dictionary: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        config: GalleryConfig,
        categories: Dict[str, Optional[str]],
        tags: TagIndex,
        albums: List[Album],
        dictionary: Optional[Dict[str, Any]] = None
    ) -> 'Manifest':
        """Create a manifest from build results."""
        return cls(
            config=config.to_manifest_dict(),
            categories=dict(categories),
            tags=tags.to_dict(),
            albums=[album.to_dict() for album in albums],
            dictionary=dict(dictionary or {}),
        )

    @property
    def total_albums(self) -> int:
        return len(self.albums)

    @property
    def total_images(self) -> int:
        return sum(len(album.get('images', [])) for album in self.albums)

    @property
    def locked_albums(self) -> List[str]:
        return [album['id'] for album in self.albums if album.get('locked')]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'config': self.config,
            'categories': self.categories,
            'tags': self.tags,
            'albums': self.albums,
            'dictionary': self.dictionary,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Manifest':
        """Create from dictionary."""
        return cls(
            config=data.get('config') or {},
            categories=data.get('categories') or {},
            tags=data.get('tags') or {},
            albums=data.get('albums') or [],
            dictionary=data.get('dictionary') or {},
        )

    def save(self, filepath: Path, logger: Optional[logging.Logger] = None) -> None:
        """
        Save manifest to a JSON file, replacing any previous version.

        The JSON is written to a temporary file in the same directory and
        renamed over the target, so readers never see a partial file.

        Raises:
            ManifestWriteFailure: If the file cannot be written
        """
        logger = logger or logging.getLogger(__name__)
        path = Path(filepath)
        tmp_path = None

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix='.manifest_', suffix='.json')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
                f.write('\n')
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise ManifestWriteFailure(f"Could not write manifest {path}: {e}") from e

        size_kb = path.stat().st_size / 1024
        logger.info(f"Manifest saved: {path} ({size_kb:.1f} KB)")

    @classmethod
    def load(cls, filepath: Path) -> 'Manifest':
        """Load manifest from JSON file."""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)
