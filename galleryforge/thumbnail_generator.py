"""
ThumbnailGenerator - Handles image resizing, layout thumbnails and splits.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageOps

from .gallery_config import DEFAULT_LAYOUT, LAYOUTS


class ThumbnailGenerator:
    """
    Generates layout thumbnails and vertical split halves using Pillow.

    Layout policies:
        grid: center square crop, size x size
        masonry: fixed width of size, natural height
        justified: fixed height of size, natural width
    """

    def __init__(
        self,
        layout: str = DEFAULT_LAYOUT,
        size: int = 400,
        quality: int = 85,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize thumbnail generator.

        Args:
            layout: Layout policy, one of grid, masonry, justified
            size: Edge length driving the layout policy (default: 400)
            quality: JPEG quality for output (default: 85)
            logger: Optional logger instance
        """
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown layout: {layout}")
        self.layout = layout
        self.size = size
        self.quality = quality
        self.logger = logger or logging.getLogger(__name__)

    def thumbnail_dimensions(self, width: int, height: int) -> Tuple[int, int]:
        """Target thumbnail dimensions for a source of the given size."""
        if self.layout == 'masonry':
            return self.size, max(1, round(height * self.size / width))
        if self.layout == 'justified':
            return max(1, round(width * self.size / height)), self.size
        return self.size, self.size

    def make_thumbnail(self, source: Path, target: Path) -> Tuple[int, int]:
        """
        Write the layout thumbnail for source to target.

        Returns:
            (width, height) of the written thumbnail
        """
        with Image.open(source) as img:
            img = self._convert_color_mode(ImageOps.exif_transpose(img))

            if self.layout == 'grid':
                w, h = img.size
                side = min(w, h)
                left = (w - side) // 2
                top = (h - side) // 2
                img = img.crop((left, top, left + side, top + side))

            img = img.resize(self.thumbnail_dimensions(*img.size), Image.Resampling.LANCZOS)
            self._save(img, target, self._get_output_format(target.suffix))
            return img.size

    @staticmethod
    def split_boxes(width: int, height: int) -> Tuple[Tuple[int, int, int, int], Tuple[int, int, int, int]]:
        """
        Crop boxes for the two halves of a width x height image.

        The left half is floor(width / 2) wide; the right half takes the
        remainder, so odd widths put the extra column on the right.
        """
        half = width // 2
        return (0, 0, half, height), (half, 0, width, height)

    def make_split(self, source: Path, left_target: Path, right_target: Path) -> Tuple[int, int]:
        """
        Split source vertically into two JPEG halves.

        Returns:
            Widths of the (left, right) halves
        """
        with Image.open(source) as img:
            img = self._convert_color_mode(ImageOps.exif_transpose(img))
            width, height = img.size
            if width < 2:
                raise ValueError(f"Image too narrow to split: {width}px")

            left_box, right_box = self.split_boxes(width, height)
            left = img.crop(left_box)
            right = img.crop(right_box)
            self._save(left, left_target, 'JPEG')
            self._save(right, right_target, 'JPEG')
            return left.size[0], right.size[0]

    def _save(self, img: Image.Image, target: Path, output_format: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        if output_format == 'PNG':
            img.save(target, format='PNG', optimize=True)
        else:
            img.save(target, format='JPEG', quality=self.quality, optimize=True)

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to appropriate color mode for output."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode == 'P':
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img

    def _get_output_format(self, extension: str) -> str:
        """Determine output format based on original extension."""
        if extension.lower() == '.png':
            return 'PNG'
        return 'JPEG'
