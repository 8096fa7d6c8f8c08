"""
Scanner - Walks album folders and merges them into logical albums.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .album import Album, Image
from .deriver import AssetDeriver, split_rel_paths
from .errors import ConfigParseError, MissingIncludeTarget
from .gallery_config import AlbumConfig, LoadStatus
from .includes import IncludeResolver, list_images
from .metadata import MetadataLoader


@dataclass
class ScanResult:
    """
    Everything the scan stage produced.

    Attributes:
        albums: Logical albums in scan order
        folders_scanned: Number of source folders visited
        config_errors: Album configs that could not be parsed
        missing_includes: Include targets that were skipped
        duplicates_dropped: Images dropped because the name was taken
        split_collisions: Images dropped because another image in the album
            already writes the same split halves (same base name)
        metadata_status: Count of sidecar load outcomes by status
        scan_duration_seconds: How long the scan took
    """
    albums: List[Album] = field(default_factory=list)
    folders_scanned: int = 0
    config_errors: List[ConfigParseError] = field(default_factory=list)
    missing_includes: List[MissingIncludeTarget] = field(default_factory=list)
    duplicates_dropped: int = 0
    split_collisions: int = 0
    metadata_status: Counter = field(default_factory=Counter)
    scan_duration_seconds: float = 0.0

    @property
    def total_images(self) -> int:
        return sum(len(album.images) for album in self.albums)


class Scanner:
    """
    Scans albums/<folder> directories and builds the album list.

    Folders are visited in lexicographic order. The first folder for a
    merge key creates the album and fixes its identity; later folders with
    the same key only contribute images.
    """

    def __init__(
        self,
        albums_root: Path,
        deriver: AssetDeriver,
        metadata_loader: Optional[MetadataLoader] = None,
        include_resolver: Optional[IncludeResolver] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scanner.

        Args:
            albums_root: The albums/ directory of the source tree
            deriver: Asset deriver that schedules thumbnails and splits
            metadata_loader: Sidecar loader (default: new MetadataLoader)
            include_resolver: Include resolver (default: one rooted at albums_root)
            logger: Optional logger instance
        """
        self.albums_root = Path(albums_root)
        self.deriver = deriver
        self.logger = logger or logging.getLogger(__name__)
        self.metadata = metadata_loader or MetadataLoader(self.logger)
        self.includes = include_resolver or IncludeResolver(self.albums_root, self.logger)

    def list_folders(self) -> List[Path]:
        """Album source folders in deterministic order."""
        if not self.albums_root.is_dir():
            return []
        return sorted(
            (p for p in self.albums_root.iterdir() if p.is_dir()),
            key=lambda p: p.name,
        )

    def scan(self) -> ScanResult:
        """
        Scan every album folder.

        Returns:
            ScanResult with merged albums and diagnostics
        """
        start_time = time.time()
        result = ScanResult()
        by_key: Dict[str, Album] = {}

        if not self.albums_root.is_dir():
            self.logger.warning(f"No albums directory at {self.albums_root}")

        for folder in self.list_folders():
            result.folders_scanned += 1
            self._scan_folder(folder, by_key, result)

        result.scan_duration_seconds = time.time() - start_time
        self.logger.info(
            f"Scan complete: {result.folders_scanned} folders, "
            f"{len(result.albums)} albums, {result.total_images} images "
            f"({result.scan_duration_seconds:.1f}s)"
        )
        return result

    def _scan_folder(self, folder: Path, by_key: Dict[str, Album], result: ScanResult) -> None:
        loaded = AlbumConfig.load(folder)
        if loaded.status is LoadStatus.ERROR:
            self.logger.error(str(loaded.error))
            result.config_errors.append(loaded.error)
        config = loaded.value

        key = config.merge_key(folder.name)
        album = by_key.get(key)

        if album is None:
            album = Album(
                id=folder.name,
                title=key,
                categories=list(config.categories),
                cover_image=config.cover_image,
                locked=config.is_locked,
                unlock_hash=config.unlock_hash,
            )
            by_key[key] = album
            result.albums.append(album)
            self.logger.info(f"Scanning album: {key} (id {album.id})")

            self._add_images(album, list_images(folder), result)

            if config.includes:
                included, missing = self.includes.resolve(album.id, config.includes)
                result.missing_includes.extend(missing)
                self._add_images(album, included, result)
        else:
            self.logger.info(f"Merging folder {folder.name} into album {key} (id {album.id})")
            if config.categories or config.cover_image or config.is_locked or config.includes:
                self.logger.debug(f"Ignoring album settings in {folder.name}, album {key} already exists")
            self._add_images(album, list_images(folder), result)

    def _add_images(self, album: Album, sources: List[Path], result: ScanResult) -> None:
        for source in sources:
            if album.has_image(source.name):
                self.logger.debug(f"Dropping duplicate {source.name} in album {album.id}: {source}")
                result.duplicates_dropped += 1
                continue

            src_a, _ = split_rel_paths(album.id, source.name)
            if album.has_split(src_a):
                self.logger.warning(
                    f"Dropping {source} from album {album.id}: another image already uses {src_a}"
                )
                result.split_collisions += 1
                continue

            paths = self.deriver.derive(source, album.id, source.name)
            meta = self.metadata.load(source)
            result.metadata_status[meta.status] += 1

            album.add_image(Image(
                name=source.name,
                thumb=paths.thumb,
                src_a=paths.src_a,
                src_b=paths.src_b,
                meta=meta.value,
            ))
