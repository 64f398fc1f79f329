"""
Image preparation: decode, find content, crop and centre on a canvas.
"""

from sketch_score.imaging.bounds import background_mask, find_content_bounds, is_background_pixel
from sketch_score.imaging.decoder import DecodeError, ImageDecoder
from sketch_score.imaging.normalizer import (
    centering_offset,
    normalize_image,
    normalize_raster,
    to_grayscale,
)

__all__ = [
    "DecodeError",
    "ImageDecoder",
    "background_mask",
    "centering_offset",
    "find_content_bounds",
    "is_background_pixel",
    "normalize_image",
    "normalize_raster",
    "to_grayscale",
]
