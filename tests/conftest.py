import io

import numpy as np
from PIL import Image

from asciiview.source import PixelSource


def encode(image: Image.Image, fmt: str = "PNG", **params) -> bytes:
    """Serialise a Pillow image to bytes in the given format."""
    buf = io.BytesIO()
    image.save(buf, format=fmt, **params)
    return buf.getvalue()


def gradient_image(width: int, height: int) -> Image.Image:
    """Diagonal grey gradient, dark at the top left."""
    img = Image.new("RGB", (width, height))
    pixels = img.load()
    for y in range(height):
        for x in range(width):
            gray = (x + y) * 255 // (width + height)
            pixels[x, y] = (gray, gray, gray)
    return img


def horizontal_gradient(width: int, height: int) -> Image.Image:
    """Black on the left to white on the right."""
    row = np.linspace(0, 255, width).round().astype(np.uint8)
    return Image.fromarray(np.tile(row, (height, 1)))


def make_source(rgba, width: int, height: int, fmt: str = "png") -> PixelSource:
    """Uniform PixelSource from an 8-bit RGBA tuple."""
    pixels = np.empty((height, width, 4), dtype=np.uint16)
    pixels[:, :] = np.array(rgba, dtype=np.uint16) * 257
    return PixelSource(pixels=pixels, format=fmt)


def source_from_array(gray: np.ndarray, fmt: str = "png") -> PixelSource:
    """Opaque grey PixelSource from a 2-D 8-bit array."""
    gray = np.asarray(gray, dtype=np.uint16) * 257
    alpha = np.full_like(gray, 65535)
    return PixelSource(pixels=np.stack([gray, gray, gray, alpha], axis=-1), format=fmt)
