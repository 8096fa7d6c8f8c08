"""
Builder - Runs one full build of a gallery source tree.

Stages, in order:
    1. Load gallery config
    2. Scan and merge albums (derivation tasks start here)
    3. Write serve config and copy static files
    4. Join derivation tasks
    5. Resolve album covers, aggregate tags, resolve category covers
    6. Write the manifest
    7. Render album and category pages
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .aggregation import CategoryResolver, aggregate_tags, resolve_album_covers
from .derivation_stats import DerivationStats
from .deriver import AssetDeriver
from .errors import ConfigParseError, ManifestWriteFailure, MissingIncludeTarget, SourceRootMissing
from .gallery_config import GalleryConfig, LoadStatus
from .manifest import MANIFEST_FILENAME, Manifest
from .pages import PageTemplater
from .scanner import Scanner, ScanResult
from .thumbnail_generator import ThumbnailGenerator


@dataclass
class BuildReport:
    """
    Outcome of a build.

    Attributes:
        manifest: The manifest that was (or should have been) written
        manifest_path: Where the manifest goes
        manifest_error: Set when the manifest could not be written
        scan: Scan stage results
        derivation: Derivation stage statistics
        config_errors: Gallery and album configs that failed to parse
        pages_written: Number of album and category pages written
        duration_seconds: Total build time
    """
    manifest: Manifest
    manifest_path: Path
    scan: ScanResult
    derivation: DerivationStats
    manifest_error: Optional[ManifestWriteFailure] = None
    config_errors: List[ConfigParseError] = field(default_factory=list)
    pages_written: int = 0
    duration_seconds: float = 0.0

    @property
    def warnings(self) -> List[MissingIncludeTarget]:
        return self.scan.missing_includes

    @property
    def ok(self) -> bool:
        """True when every stage completed without errors."""
        return (
            self.manifest_error is None
            and not self.config_errors
            and self.derivation.errors == 0
        )


class Builder:
    """
    Builds manifest, derived assets and pages from a source tree.

    Source layout:
        <root>/gallery.config.json
        <root>/albums/<folder>/config.json, images, sidecars
        <root>/pages/, <root>/assets/, <root>/app.js, <root>/style.css
    """

    def __init__(
        self,
        source_root: Path,
        output_dir: Optional[Path] = None,
        workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize builder.

        Args:
            source_root: Root of the gallery source tree
            output_dir: Output directory (default: <source_root>/public)
            workers: Derivation threads, overriding the gallery config
            logger: Optional logger instance
        """
        self.source_root = Path(source_root)
        self.output_dir = Path(output_dir) if output_dir else self.source_root / 'public'
        self.workers = workers
        self.logger = logger or logging.getLogger(__name__)

    def build(self) -> BuildReport:
        """
        Run the build.

        Returns:
            BuildReport describing what happened

        Raises:
            SourceRootMissing: If the source root does not exist
        """
        start_time = time.time()

        if not self.source_root.is_dir():
            raise SourceRootMissing(f"Source root not found: {self.source_root}")

        self.logger.info(f"Source: {self.source_root}")
        self.logger.info(f"Output: {self.output_dir}")

        loaded = GalleryConfig.load(self.source_root, self.logger)
        config = loaded.value
        config_errors: List[ConfigParseError] = []
        if loaded.status is LoadStatus.ERROR:
            self.logger.error(str(loaded.error))
            config_errors.append(loaded.error)
        elif loaded.status is LoadStatus.DEFAULT:
            self.logger.info("No gallery.config.json, using defaults")

        self.logger.info(f"Layout: {config.layout} ({config.thumbnail_size}px)")

        thumb_gen = ThumbnailGenerator(
            layout=config.layout,
            size=config.thumbnail_size,
            quality=config.thumbnail_quality,
            logger=self.logger,
        )
        templater = PageTemplater(self.source_root, self.output_dir, config, self.logger)
        workers = self.workers or config.workers

        with AssetDeriver(self.output_dir, thumb_gen, workers=workers, logger=self.logger) as deriver:
            scanner = Scanner(self.source_root / 'albums', deriver, logger=self.logger)
            scan = scanner.scan()
            config_errors.extend(scan.config_errors)

            templater.write_serve_config()
            templater.copy_static_files()

            derivation = deriver.join()
            self.logger.debug(f"Derivation stats: {derivation.to_dict()}")

        albums = scan.albums
        resolve_album_covers(albums, self.output_dir, self.logger)
        tags = aggregate_tags(albums)
        categories = CategoryResolver(self.output_dir, config, self.logger).resolve(albums)
        self.logger.info(f"Indexed {len(tags)} tags and {len(categories)} categories")

        manifest = Manifest.create(
            config=config,
            categories=categories,
            tags=tags,
            albums=albums,
            dictionary=config.load_dictionary(self.source_root, self.logger),
        )
        manifest_path = self.output_dir / MANIFEST_FILENAME
        report = BuildReport(
            manifest=manifest,
            manifest_path=manifest_path,
            scan=scan,
            derivation=derivation,
            config_errors=config_errors,
        )

        try:
            manifest.save(manifest_path, self.logger)
        except ManifestWriteFailure as e:
            self.logger.error(str(e))
            report.manifest_error = e

        pages = templater.render_album_pages(albums)
        pages += templater.render_category_pages(categories, albums)
        report.pages_written = len(pages)

        report.duration_seconds = time.time() - start_time
        self.logger.info(
            f"Build complete: {manifest.total_albums} albums, {manifest.total_images} images, "
            f"{derivation.generated} assets generated, {derivation.errors} errors "
            f"({report.duration_seconds:.1f}s)"
        )
        return report
