import numpy as np

from asciiview.charsets import DEFAULT_RAMP

STEEPNESS = 6.0
MIDPOINT = 0.5

# Absorbs float error so that a contrasted 1.0 lands on the last glyph
_EPSILON = 1e-9


def _logistic(x, steepness: float):
    return 1.0 / (1.0 + np.exp(-steepness * (x - MIDPOINT)))


def enhance_contrast(intensity, steepness: float = STEEPNESS):
    """S-curve that pushes mid-tones towards the extremes.

    The logistic curve is rescaled so 0 stays 0 and 1 stays 1; without this
    pure white would never reach the blank end of the ramp.
    """
    low = _logistic(0.0, steepness)
    high = _logistic(1.0, steepness)
    return (_logistic(np.asarray(intensity, dtype=np.float64), steepness) - low) / (high - low)


def glyph_indices(intensity, ramp: str = DEFAULT_RAMP, steepness: float = STEEPNESS) -> np.ndarray:
    """Ramp index for each intensity, 0 being the densest glyph."""
    top = len(ramp) - 1
    contrasted = enhance_contrast(intensity, steepness)
    indices = np.floor(contrasted * top + _EPSILON).astype(np.int64)
    return np.clip(indices, 0, top)


def map_to_glyph(intensity: float, ramp: str = DEFAULT_RAMP, steepness: float = STEEPNESS) -> str:
    return ramp[int(glyph_indices(intensity, ramp, steepness))]
