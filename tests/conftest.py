import logging
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

# Configure logging for tests so the scoring breakdown is visible on failure.
handler = logging.StreamHandler()
formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
handler.setFormatter(formatter)
root = logging.getLogger()
if not root.handlers:
    root.addHandler(handler)
root.setLevel(logging.DEBUG)

# Reduce verbosity for noisy external libraries
logging.getLogger('PIL').setLevel(logging.WARNING)

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
TRANSPARENT = (0, 0, 0, 0)


def make_rgba(width, height, rects=(), background=WHITE, color=BLACK):
    """RGBA array with filled ``(x, y, w, h)`` rectangles."""
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[...] = background
    for x, y, w, h in rects:
        arr[y:y + h, x:x + w] = color
    return arr


def encode_png(arr, mode=None):
    img = Image.fromarray(arr)
    if mode is not None:
        img = img.convert(mode)
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


def make_png(width=256, height=None, rects=(), background=WHITE, color=BLACK, mode=None):
    """Encode a synthetic drawing as PNG bytes."""
    height = width if height is None else height
    return encode_png(make_rgba(width, height, rects, background, color), mode=mode)


@pytest.fixture
def png_factory():
    """Factory building PNG bytes from rectangles: png_factory(rects=[(x, y, w, h)])."""
    return make_png


@pytest.fixture
def rgba_factory():
    return make_rgba


@pytest.fixture
def square_logo():
    """40x40 filled square near the middle of a 256 canvas."""
    return make_png(rects=[(100, 100, 40, 40)])


@pytest.fixture
def ring_logo():
    """40x40 square outline, 4px stroke."""
    return make_png(rects=[
        (100, 100, 40, 4),
        (100, 136, 40, 4),
        (100, 104, 4, 32),
        (136, 104, 4, 32),
    ])


@pytest.fixture
def blank_png():
    return make_png()
