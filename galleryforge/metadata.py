"""
Metadata - Per-image sidecar files with YAML front matter and a Markdown body.

A sidecar sits next to its image and shares the base name:

    albums/summer/sunset.jpg
    albums/summer/sunset.md

    ---
    title: Sunset at the pier
    tags: [beach, evening]
    description: Last light
    ---
    Free-form **Markdown** rendered to HTML.
"""

import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Tuple

import markdown
import yaml

from .album import ImageMeta
from .gallery_config import LoadResult, LoadStatus

FRONT_MATTER_RE = re.compile(r'^\ufeff?---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)', re.DOTALL)

SIDECAR_SUFFIX = '.md'


def split_front_matter(text: str) -> Tuple[str, str]:
    """Split a sidecar into (front matter, body). Front matter may be empty."""
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return '', text
    return match.group(1), text[match.end():]


def normalize_tags(value: Any) -> List[str]:
    """Turn a front matter tags value into a de-duplicated list of names."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        value = [value]
    tags: List[str] = []
    for item in value:
        if item is None:
            continue
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def default_meta(image_path: Path) -> ImageMeta:
    """Metadata used when an image has no usable sidecar."""
    return ImageMeta(title=image_path.stem)


class MetadataLoader:
    """
    Loads sidecar metadata for source images.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize metadata loader.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def sidecar_path(image_path: Path) -> Path:
        return image_path.with_suffix(SIDECAR_SUFFIX)

    def load(self, image_path: Path) -> LoadResult[ImageMeta]:
        """
        Load metadata for an image.

        Args:
            image_path: Path of the source image

        Returns:
            LoadResult with status FOUND, DEFAULT (no sidecar, or the
            sidecar path is a directory) or ERROR (unreadable sidecar)
        """
        sidecar = self.sidecar_path(image_path)
        if not sidecar.exists() or sidecar.is_dir():
            return LoadResult(default_meta(image_path), LoadStatus.DEFAULT)

        try:
            text = sidecar.read_text(encoding='utf-8')
            meta = self.parse(text, image_path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            self.logger.warning(f"Could not parse metadata {sidecar}: {e}")
            return LoadResult(default_meta(image_path), LoadStatus.ERROR, e)

        return LoadResult(meta, LoadStatus.FOUND)

    def parse(self, text: str, image_path: Path) -> ImageMeta:
        """
        Parse sidecar text.

        Raises:
            yaml.YAMLError: If the front matter is not valid YAML
        """
        front, body = split_front_matter(text)
        data = yaml.safe_load(front) if front.strip() else {}
        if not isinstance(data, dict):
            data = {}

        title = data.get('title')
        description = data.get('description')
        return ImageMeta(
            title=str(title) if title else image_path.stem,
            tags=normalize_tags(data.get('tags')),
            description=str(description) if description else '',
            content=markdown.markdown(body) if body.strip() else '',
        )
