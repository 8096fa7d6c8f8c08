"""
IncludeResolver - Pulls images from other locations into an album.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import MissingIncludeTarget

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png')


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS


def list_images(folder: Path) -> List[Path]:
    """Image files directly inside folder, sorted by name."""
    return sorted(
        (p for p in folder.iterdir() if is_image_file(p)),
        key=lambda p: p.name,
    )


class IncludeResolver:
    """
    Resolves an album's includes to source image paths.

    Each include is a path relative to the albums root naming either a
    directory (its images, non-recursive) or a single image file.
    """

    def __init__(self, albums_root: Path, logger: Optional[logging.Logger] = None):
        """
        Initialize include resolver.

        Args:
            albums_root: Directory include paths are relative to
            logger: Optional logger instance
        """
        self.albums_root = Path(albums_root)
        self.logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        album_id: str,
        includes: List[str]
    ) -> Tuple[List[Path], List[MissingIncludeTarget]]:
        """
        Resolve includes in order.

        Args:
            album_id: Id of the including album, for diagnostics
            includes: Include paths from the album config

        Returns:
            Tuple of (image paths, missing targets). Missing targets were
            skipped and logged.
        """
        images: List[Path] = []
        missing: List[MissingIncludeTarget] = []

        for include in includes:
            target = self._target_path(include)
            if target is not None and target.is_dir():
                found = list_images(target)
                self.logger.debug(f"Include {include} -> {len(found)} images for {album_id}")
                images.extend(found)
            elif target is not None and is_image_file(target):
                images.append(target)
            else:
                warning = MissingIncludeTarget(album_id, include)
                self.logger.warning(str(warning))
                missing.append(warning)

        return images, missing

    def _target_path(self, include: str) -> Optional[Path]:
        """Resolve an include path, refusing anything outside the albums root."""
        root = self.albums_root.resolve()
        target = (root / include).resolve()
        if target != root and root not in target.parents:
            return None
        return target
