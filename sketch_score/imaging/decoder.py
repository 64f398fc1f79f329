"""
Image decoding for drawings and reference logos.

Handles:
- Loading images from raw bytes, data URLs, or a file path
- Converting every supported format to RGBA
- Resizing to the square scoring canvas
- Encoding rasters back to PNG bytes
"""

import base64
import binascii
import logging
import re
from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from sketch_score.models import RasterImage

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")


class DecodeError(Exception):
    """Raised when bytes cannot be decoded as a supported image."""
    pass


class ImageDecoder:
    """Decode encoded image payloads into ``RasterImage`` values."""

    @classmethod
    def load_from_bytes(cls, image_bytes: bytes, size: int | None = None) -> RasterImage:
        """
        Decode raw image bytes.

        Args:
            image_bytes: Encoded image (PNG, JPEG, GIF, WebP, ...)
            size: If given, resize to a ``size x size`` canvas

        Returns:
            RasterImage in RGBA

        Raises:
            DecodeError: If the bytes are not a readable image
        """
        try:
            image = Image.open(BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Could not decode image: {e}") from e

        return cls._to_raster(image, size)

    @classmethod
    def load_from_data_url(cls, data_url: str, size: int | None = None) -> RasterImage:
        """
        Decode a base64 data URL such as ``data:image/png;base64,iVBOR...``.

        The ``data:image/<type>;base64,`` prefix is optional; a bare base64
        string is accepted as well.

        Raises:
            DecodeError: If the payload is not valid base64 or not an image
        """
        payload = _DATA_URL_PREFIX.sub("", data_url.strip(), count=1)
        try:
            image_bytes = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 image data: {e}") from e
        if not image_bytes:
            raise DecodeError("Data URL carries no image data")
        return cls.load_from_bytes(image_bytes, size)

    @classmethod
    def load_from_path(cls, file_path: str, size: int | None = None) -> RasterImage:
        """
        Decode an image file.

        Raises:
            FileNotFoundError: If the file does not exist
            DecodeError: If the file is not a readable image
        """
        with open(file_path, "rb") as f:
            return cls.load_from_bytes(f.read(), size)

    @classmethod
    def _to_raster(cls, image: Image.Image, size: int | None) -> RasterImage:
        """
        Convert a decoded PIL image to an RGBA raster.

        Operations:
        - Convert to RGBA (palette and grayscale transparency preserved)
        - Resize to ``size x size`` (bilinear) if requested
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")

        if size is not None and image.size != (size, size):
            logger.debug("Resizing %dx%d image to %dx%d", image.width, image.height, size, size)
            image = image.resize((size, size), Image.Resampling.BILINEAR)

        rgba = np.array(image, dtype=np.uint8)
        return RasterImage(width=image.width, height=image.height, rgba=rgba)

    @classmethod
    def resize(cls, raster: RasterImage, size: int) -> RasterImage:
        """Resample a raster to ``size x size``."""
        return cls._to_raster(cls.to_image(raster), size)

    @classmethod
    def to_image(cls, raster: RasterImage) -> Image.Image:
        """Wrap a raster as a PIL RGBA image."""
        return Image.fromarray(np.ascontiguousarray(raster.rgba))

    @classmethod
    def to_bytes(cls, raster: RasterImage, format: str = "PNG") -> bytes:
        """
        Encode a raster.

        Args:
            raster: RasterImage to encode
            format: Output format (PNG, WEBP, ...)

        Returns:
            Encoded image bytes
        """
        buffer = BytesIO()
        cls.to_image(raster).save(buffer, format=format)
        buffer.seek(0)
        return buffer.getvalue()
