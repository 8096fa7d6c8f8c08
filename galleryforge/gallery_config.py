"""
Configuration - Gallery-wide and per-album settings.

Both config files are optional JSON objects with camelCase keys. Every
recognized option has a default. Unknown album keys are ignored; unknown
gallery keys are carried into the manifest for the viewer.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from .access_codes import hash_optional_code
from .errors import ConfigParseError

T = TypeVar('T')

LAYOUTS = ('grid', 'masonry', 'justified')
DEFAULT_LAYOUT = 'grid'

# gallery.config.json keys re-emitted in normalized form (or hashed) by to_manifest_dict
KNOWN_KEYS = frozenset((
    'layout', 'projectName', 'projectLogo', 'browserIcon', 'masterCode',
    'categoryCovers', 'defaultCategoryCover', 'defaultAlbumCover',
))


class LoadStatus(Enum):
    """Which branch a best-effort load took."""
    FOUND = 'found'
    DEFAULT = 'default'
    ERROR = 'error'


@dataclass
class LoadResult(Generic[T]):
    """
    Outcome of loading an optional file.

    Attributes:
        value: Parsed value, or the default when status is not FOUND
        status: FOUND, DEFAULT (file absent) or ERROR (file unreadable)
        error: The error when status is ERROR
    """
    value: T
    status: LoadStatus
    error: Optional[Exception] = None

    @property
    def found(self) -> bool:
        return self.status is LoadStatus.FOUND


def load_json_object(path: Path) -> LoadResult[dict]:
    """
    Load a JSON object from path.

    A missing file gives an empty dict with status DEFAULT. Invalid JSON,
    or JSON that is not an object, gives an empty dict with status ERROR
    and a ConfigParseError.
    """
    if not path.is_file():
        return LoadResult({}, LoadStatus.DEFAULT)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (ValueError, UnicodeDecodeError) as e:
        return LoadResult({}, LoadStatus.ERROR, ConfigParseError(str(path), str(e)))

    if not isinstance(data, dict):
        error = ConfigParseError(str(path), f"expected an object, got {type(data).__name__}")
        return LoadResult({}, LoadStatus.ERROR, error)

    return LoadResult(data, LoadStatus.FOUND)


def _as_list(value: Any) -> List[str]:
    """Normalize a string-or-list field to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    result = []
    for item in value:
        text = str(item).strip()
        if text and text not in result:
            result.append(text)
    return result


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


@dataclass
class AlbumConfig:
    """
    Per-folder album settings from albums/<folder>/config.json.

    Attributes:
        name: Merge key override (None means use the folder name)
        categories: Category names the album belongs to
        cover_image: Filename of the image used as album cover
        locked: Explicit lock flag
        unlock_code: Plaintext access code (never serialized)
        includes: Paths, relative to the albums root, to pull images from
    """
    name: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    cover_image: Optional[str] = None
    locked: bool = False
    unlock_code: Optional[str] = None
    includes: List[str] = field(default_factory=list)

    def merge_key(self, folder_name: str) -> str:
        """Return the logical album name this folder belongs to."""
        if self.name and self.name.strip():
            return self.name.strip()
        return folder_name

    @property
    def unlock_hash(self) -> Optional[str]:
        return hash_optional_code(self.unlock_code)

    @property
    def is_locked(self) -> bool:
        """An unlock code always locks the album, whatever `locked` says."""
        return self.unlock_hash is not None or self.locked

    @classmethod
    def from_dict(cls, data: dict) -> 'AlbumConfig':
        """Create from a parsed config.json object."""
        name = data.get('name')
        if name is None:
            name = data.get('title')
        return cls(
            name=_as_optional_str(name),
            categories=_as_list(data.get('category')),
            cover_image=_as_optional_str(data.get('coverImage')),
            locked=bool(data.get('locked', False)),
            unlock_code=_as_optional_str(data.get('unlockCode')),
            includes=_as_list(data.get('includes')),
        )

    @classmethod
    def load(cls, folder: Path) -> LoadResult['AlbumConfig']:
        """Load config.json from an album folder."""
        raw = load_json_object(folder / 'config.json')
        return LoadResult(cls.from_dict(raw.value), raw.status, raw.error)


@dataclass
class GalleryConfig:
    """
    Gallery-wide settings from gallery.config.json.

    Attributes:
        layout: Thumbnail layout policy, one of grid, masonry, justified
        project_name: Site name the viewer shows in the navbar and title
        project_logo: Logo path, relative to the output directory
        browser_icon: Favicon path or URL
        master_code: Plaintext code that unlocks every album (never serialized)
        category_covers: Explicit cover per category name
        default_category_cover: Cover for categories with nothing resolvable
        default_album_cover: Cover the viewer shows for albums without one
        dictionary: Inline UI strings, or a path to a JSON file of them
        thumbnail_size: Thumbnail edge length in pixels
        thumbnail_quality: JPEG quality for derived assets
        workers: Derivation thread count (None lets the executor decide)
        extra: Every other key from the file, passed to the viewer unchanged
    """
    layout: str = DEFAULT_LAYOUT
    project_name: Optional[str] = None
    project_logo: Optional[str] = None
    browser_icon: Optional[str] = None
    master_code: Optional[str] = None
    category_covers: Dict[str, str] = field(default_factory=dict)
    default_category_cover: Optional[str] = None
    default_album_cover: Optional[str] = None
    dictionary: Union[Dict[str, Any], str, None] = None
    thumbnail_size: int = 400
    thumbnail_quality: int = 85
    workers: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def master_hash(self) -> Optional[str]:
        return hash_optional_code(self.master_code)

    @classmethod
    def from_dict(
        cls,
        data: dict,
        logger: Optional[logging.Logger] = None
    ) -> 'GalleryConfig':
        """Create from a parsed gallery.config.json object."""
        logger = logger or logging.getLogger(__name__)

        layout = str(data.get('layout') or DEFAULT_LAYOUT).lower()
        if layout not in LAYOUTS:
            logger.warning(f"Unknown layout '{layout}', using '{DEFAULT_LAYOUT}'")
            layout = DEFAULT_LAYOUT

        covers = data.get('categoryCovers') or {}
        if not isinstance(covers, dict):
            logger.warning("categoryCovers must be an object, ignoring")
            covers = {}

        dictionary = data.get('dictionary')
        if dictionary is not None and not isinstance(dictionary, (dict, str)):
            logger.warning("dictionary must be an object or a path, ignoring")
            dictionary = None

        return cls(
            layout=layout,
            project_name=_as_optional_str(data.get('projectName')),
            project_logo=_as_optional_str(data.get('projectLogo')),
            browser_icon=_as_optional_str(data.get('browserIcon')),
            master_code=_as_optional_str(data.get('masterCode')),
            category_covers={str(k): str(v) for k, v in covers.items() if v},
            default_category_cover=_as_optional_str(data.get('defaultCategoryCover')),
            default_album_cover=_as_optional_str(data.get('defaultAlbumCover')),
            dictionary=dictionary,
            thumbnail_size=_positive_int(data.get('thumbnailSize'), 400, 'thumbnailSize', logger),
            thumbnail_quality=_positive_int(data.get('thumbnailQuality'), 85, 'thumbnailQuality', logger),
            workers=_positive_int(data.get('workers'), None, 'workers', logger),
            extra={k: v for k, v in data.items() if k not in KNOWN_KEYS},
        )

    @classmethod
    def load(
        cls,
        root: Path,
        logger: Optional[logging.Logger] = None
    ) -> LoadResult['GalleryConfig']:
        """Load gallery.config.json from the source root."""
        raw = load_json_object(root / 'gallery.config.json')
        return LoadResult(cls.from_dict(raw.value, logger), raw.status, raw.error)

    def load_dictionary(
        self,
        root: Path,
        logger: Optional[logging.Logger] = None
    ) -> Dict[str, Any]:
        """
        Resolve the dictionary option to a mapping.

        Args:
            root: Source root that relative dictionary paths are resolved against
            logger: Optional logger instance

        Returns:
            The inline mapping, the contents of the referenced JSON file, or {}
        """
        logger = logger or logging.getLogger(__name__)
        if self.dictionary is None:
            return {}
        if isinstance(self.dictionary, dict):
            return dict(self.dictionary)

        path = root / self.dictionary
        result = load_json_object(path)
        if result.status is LoadStatus.DEFAULT:
            logger.warning(f"Dictionary file not found: {path}")
        elif result.status is LoadStatus.ERROR:
            logger.error(f"{result.error}")
        return result.value

    def to_manifest_dict(self) -> dict:
        """
        Serialize for the manifest.

        Keys outside KNOWN_KEYS pass through exactly as written. Options
        left unset are omitted, and the master code is replaced by its
        hash; plaintext never leaves this object.
        """
        data = dict(self.extra)
        data['layout'] = self.layout
        optional = {
            'projectName': self.project_name,
            'projectLogo': self.project_logo,
            'browserIcon': self.browser_icon,
            'defaultCategoryCover': self.default_category_cover,
            'defaultAlbumCover': self.default_album_cover,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        if self.category_covers:
            data['categoryCovers'] = dict(self.category_covers)
        data['masterHash'] = self.master_hash
        return data


def _positive_int(
    value: Any,
    default: Optional[int],
    key: str,
    logger: logging.Logger
) -> Optional[int]:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning(f"{key} must be an integer, using default")
        return default
    if number <= 0:
        logger.warning(f"{key} must be positive, using default")
        return default
    return number
