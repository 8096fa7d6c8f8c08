"""
Errors - Exception types raised or recorded during a gallery build.
"""


class GalleryBuildError(Exception):
    """Base class for all build errors."""


class SourceRootMissing(GalleryBuildError):
    """The source root directory does not exist. Fatal."""


class ConfigParseError(GalleryBuildError):
    """A config file exists but is not valid JSON."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid JSON in {path}: {reason}")


class MissingIncludeTarget(GalleryBuildError):
    """An album include points at nothing usable."""

    def __init__(self, album_id: str, target: str):
        self.album_id = album_id
        self.target = target
        super().__init__(f"Include target not found for album {album_id}: {target}")


class DerivationFailure(GalleryBuildError):
    """A thumbnail or split could not be produced."""

    def __init__(self, source: str, target: str, reason: str):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to derive {target} from {source}: {reason}")


class ManifestWriteFailure(GalleryBuildError):
    """The manifest could not be written to disk."""
