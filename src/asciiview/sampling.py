import numpy as np

from asciiview.geometry import OutputGeometry
from asciiview.source import MAX_SAMPLE, PixelSource

# Rec. 601 luma weights in thousandths, so pure white sums to exactly 1.0
LUMA_WEIGHTS = np.array([299.0, 587.0, 114.0])
_LUMA_SCALE = LUMA_WEIGHTS.sum() * MAX_SAMPLE

MIN_WINDOW = 2
# Caps the area sample at 4x4 = 16 pixels per cell
MAX_WINDOW = 4

EDGE_WEIGHT = 0.3

_SOBEL_OFFSETS = np.arange(-1, 2)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Perceptual brightness in [0, 1] of RGBA samples, composited over white.

    `pixels` has RGBA on its last axis on the 16-bit scale; the result drops
    that axis. 0.0 is black, 1.0 is white or fully transparent.
    """
    pixels = pixels.astype(np.float64)
    alpha = pixels[..., 3:4] / MAX_SAMPLE
    rgb = pixels[..., :3] * alpha + MAX_SAMPLE * (1.0 - alpha)
    r, g, b = LUMA_WEIGHTS
    return (rgb[..., 0] * r + rgb[..., 1] * g + rgb[..., 2] * b) / _LUMA_SCALE


def window_size(geometry: OutputGeometry) -> int:
    """Side of the square area sample, grown with the horizontal downscale ratio."""
    size = MIN_WINDOW
    if geometry.x_scale > MIN_WINDOW:
        size = int(geometry.x_scale)
    return min(size, MAX_WINDOW)


def _gather(source: PixelSource, xs: np.ndarray, ys: np.ndarray, offsets: np.ndarray) -> np.ndarray:
    """Luminance of the offsets x offsets neighbourhood around each (x, y).

    Coordinates are clamped into the image, so border cells repeat their edge
    pixels. Returns shape xs.shape + (len(offsets), len(offsets)), indexed
    [..., dy, dx].
    """
    px = np.clip(xs[..., np.newaxis, np.newaxis] + offsets[np.newaxis, :], 0, source.width - 1)
    py = np.clip(ys[..., np.newaxis, np.newaxis] + offsets[:, np.newaxis], 0, source.height - 1)
    return luminance(source.pixels[py, px])


def area_intensity(source: PixelSource, xs: np.ndarray, ys: np.ndarray, size: int) -> np.ndarray:
    """Mean luminance over a size x size window at each point (anti-aliased downscale)."""
    offsets = np.arange(-(size // 2), size - size // 2)
    return _gather(source, xs, ys, offsets).mean(axis=(-2, -1))


def _smooth(column: np.ndarray) -> np.ndarray:
    # Sobel is separable: [1, 2, 1] across the [-1, 0, 1] derivative
    return column[..., 0] + 2.0 * column[..., 1] + column[..., 2]


def edge_magnitude(source: PixelSource, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Squared Sobel gradient at each point, capped at 1."""
    lum = _gather(source, xs, ys, _SOBEL_OFFSETS)
    gx = _smooth(lum[..., :, 2]) - _smooth(lum[..., :, 0])
    gy = _smooth(lum[..., 2, :]) - _smooth(lum[..., 0, :])
    return np.minimum(1.0, gx * gx + gy * gy)


def cell_intensity(
    source: PixelSource,
    geometry: OutputGeometry,
    cell_x: np.ndarray,
    cell_y: np.ndarray,
    edge_weight: float = EDGE_WEIGHT,
) -> np.ndarray:
    """Combined intensity for arrays of cell coordinates. 0 is darkest, 1 lightest.

    Each cell depends only on its own coordinates, so any subset of cells can
    be computed independently.
    """
    xs = geometry.source_x(np.asarray(cell_x, dtype=np.int64))
    ys = geometry.source_y(np.asarray(cell_y, dtype=np.int64))
    area = area_intensity(source, xs, ys, window_size(geometry))
    edges = edge_magnitude(source, xs, ys)
    return np.clip(area + edge_weight * edges, 0.0, 1.0)


def intensity_at(
    source: PixelSource,
    cell_x: int,
    cell_y: int,
    geometry: OutputGeometry,
    edge_weight: float = EDGE_WEIGHT,
) -> float:
    return float(cell_intensity(source, geometry, np.array(cell_x), np.array(cell_y), edge_weight))


def intensity_grid(source: PixelSource, geometry: OutputGeometry, edge_weight: float = EDGE_WEIGHT) -> np.ndarray:
    """Intensities for every output cell, shape (target_height, target_width)."""
    cell_y, cell_x = np.indices((geometry.target_height, geometry.target_width))
    return cell_intensity(source, geometry, cell_x, cell_y, edge_weight)
