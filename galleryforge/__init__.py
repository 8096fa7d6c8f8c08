"""
Static Photo Gallery Build Package

Turns a tree of album folders into everything a static gallery viewer needs:
    1. Scan: merge album folders and pull in included images
    2. Derive: layout thumbnails and split halves, cached by modification time
    3. Index: tag counts and category covers
    4. Emit: data.json manifest and per-album / per-category HTML shells
"""

__version__ = "1.0.0"

from .errors import (
    GalleryBuildError,
    SourceRootMissing,
    ConfigParseError,
    MissingIncludeTarget,
    DerivationFailure,
    ManifestWriteFailure,
)
from .access_codes import hash_access_code
from .gallery_config import AlbumConfig, GalleryConfig, LoadResult, LoadStatus
from .album import Album, Image, ImageMeta
from .thumbnail_generator import ThumbnailGenerator
from .derivation_stats import DerivationStats
from .deriver import AssetDeriver, DerivationOutcome, DerivedPaths
from .metadata import MetadataLoader
from .includes import IncludeResolver
from .scanner import Scanner, ScanResult
from .aggregation import TagIndex, TagInfo, CategoryResolver, aggregate_tags
from .manifest import Manifest
from .pages import PageTemplater
from .builder import Builder, BuildReport
from .reporter import Reporter

__all__ = [
    "GalleryBuildError",
    "SourceRootMissing",
    "ConfigParseError",
    "MissingIncludeTarget",
    "DerivationFailure",
    "ManifestWriteFailure",
    "hash_access_code",
    "AlbumConfig",
    "GalleryConfig",
    "LoadResult",
    "LoadStatus",
    "Album",
    "Image",
    "ImageMeta",
    "ThumbnailGenerator",
    "DerivationStats",
    "AssetDeriver",
    "DerivationOutcome",
    "DerivedPaths",
    "MetadataLoader",
    "IncludeResolver",
    "Scanner",
    "ScanResult",
    "TagIndex",
    "TagInfo",
    "CategoryResolver",
    "aggregate_tags",
    "Manifest",
    "PageTemplater",
    "Builder",
    "BuildReport",
    "Reporter",
]
