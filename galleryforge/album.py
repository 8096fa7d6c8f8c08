"""
Album - Logical albums and the images assigned to them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set


@dataclass
class ImageMeta:
    """
    Descriptive metadata for one image, from its sidecar file.

    Attributes:
        title: Display title (defaults to the filename without extension)
        tags: Tag names, de-duplicated in first-seen order
        description: Short plain-text description
        content: Sidecar body rendered to HTML
    """
    title: str
    tags: List[str] = field(default_factory=list)
    description: str = ''
    content: str = ''

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'tags': list(self.tags),
            'description': self.description,
            'content': self.content,
        }


@dataclass
class Image:
    """
    One image as it appears in the manifest.

    Paths are relative to the output directory and always use forward
    slashes.

    Attributes:
        name: Source filename, unique within the album
        thumb: Path of the layout thumbnail
        src_a: Path of the left split half
        src_b: Path of the right split half
        meta: Sidecar metadata
    """
    name: str
    thumb: str
    src_a: str
    src_b: str
    meta: ImageMeta

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'srcA': self.src_a,
            'srcB': self.src_b,
            'thumb': self.thumb,
            'meta': self.meta.to_dict(),
        }


@dataclass
class Album:
    """
    A logical album, possibly assembled from several source folders.

    Identity (id, categories, cover, lock) comes from the first folder that
    claims the title; later folders only add images.

    Attributes:
        id: Name of the first source folder with this title
        title: Merge key
        categories: Category names, first-seen order
        cover_image: Requested cover filename, before resolution
        cover: Resolved cover as <albumId>/<filename> under thumbnails/
        locked: Whether the viewer must ask for a code
        unlock_hash: SHA-256 hex digest of the unlock code
        images: Images in the order they were added
    """
    id: str
    title: str
    categories: List[str] = field(default_factory=list)
    cover_image: Optional[str] = None
    cover: Optional[str] = None
    locked: bool = False
    unlock_hash: Optional[str] = None
    images: List[Image] = field(default_factory=list)
    _names: Dict[str, Image] = field(default_factory=dict, init=False, repr=False)
    _splits: Set[str] = field(default_factory=set, init=False, repr=False)

    def has_image(self, name: str) -> bool:
        return name in self._names

    def has_split(self, src_a: str) -> bool:
        """True if an image already in the album writes its split to src_a."""
        return src_a in self._splits

    def add_image(self, image: Image) -> bool:
        """
        Append an image unless its name or its split path is already taken.

        Returns:
            True if the image was added, False if it was dropped as a duplicate
        """
        if image.name in self._names or image.src_a in self._splits:
            return False
        self._names[image.name] = image
        self._splits.add(image.src_a)
        self.images.append(image)
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'title': self.title,
            'categories': list(self.categories),
            'cover': self.cover,
            'locked': self.locked,
            'unlockHash': self.unlock_hash,
            'images': [image.to_dict() for image in self.images],
        }
