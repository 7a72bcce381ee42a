from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Protocol

import numpy as np
from PIL import Image

# Channels are held on a 16-bit scale regardless of the source bit depth
MAX_SAMPLE = 65535

# 8-bit to 16-bit: 255 * 257 == 65535
_SCALE_8_TO_16 = 257

_WIDE_GRAY_MODES = ("I;16", "I;16L", "I;16B", "I")


class DecodeError(ValueError):
    """The buffer is not a decodable image."""


@dataclass(frozen=True, eq=False)
class PixelSource:
    pixels: np.ndarray  # (height, width, 4) uint16 RGBA, read-only
    format: str

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def sample(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)


class Decoder(Protocol):
    def decode(self, data: bytes) -> PixelSource:
        """Decode an encoded image into a PixelSource, raising DecodeError on failure."""
        ...


def _to_rgba16(image: Image.Image) -> np.ndarray:
    if image.mode in _WIDE_GRAY_MODES:
        gray = np.clip(np.asarray(image, dtype=np.int64), 0, MAX_SAMPLE).astype(np.uint16)
        alpha = np.full_like(gray, MAX_SAMPLE)
        return np.stack([gray, gray, gray, alpha], axis=-1)
    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint16)
    return rgba * _SCALE_8_TO_16


class PillowDecoder:
    """Decodes any format Pillow recognises. Only the first frame of animations is used."""

    def decode(self, data: bytes) -> PixelSource:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                fmt = (image.format or "unknown").lower()
                pixels = _to_rgba16(image)
        except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as ex:
            raise DecodeError(str(ex) or type(ex).__name__) from ex

        if pixels.ndim != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise DecodeError(f"Image has no pixels: {pixels.shape[1]}x{pixels.shape[0]}")
        pixels.setflags(write=False)
        return PixelSource(pixels=pixels, format=fmt)


DEFAULT_DECODER: Decoder = PillowDecoder()


def decode(data: bytes, decoder: Decoder | None = None) -> PixelSource:
    if not data:
        raise DecodeError("Empty image buffer")
    return (decoder or DEFAULT_DECODER).decode(data)
