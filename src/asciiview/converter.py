from loguru import logger

from asciiview.charsets import DEFAULT_RAMP
from asciiview.config import ConverterConfig
from asciiview.geometry import OutputGeometry, Viewport, plan
from asciiview.render import CellGrid, render
from asciiview.sampling import EDGE_WEIGHT, intensity_grid
from asciiview.sniff import classify
from asciiview.source import DecodeError, Decoder, PixelSource, decode
from asciiview.tone import STEEPNESS, glyph_indices

DEFAULT_CONFIG = ConverterConfig()


def image_to_ascii(
    source: PixelSource,
    geometry: OutputGeometry,
    ramp: str = DEFAULT_RAMP,
    steepness: float = STEEPNESS,
    edge_weight: float = EDGE_WEIGHT,
) -> CellGrid:
    """Sample every cell of an already decoded image and pick its glyph."""
    indices = glyph_indices(intensity_grid(source, geometry, edge_weight), ramp, steepness)
    return CellGrid(chars=["".join(ramp[i] for i in row) for row in indices])


def render_source(source: PixelSource, viewport: Viewport, config: ConverterConfig = DEFAULT_CONFIG) -> str:
    geometry = plan(source.width, source.height, viewport.max_width, viewport.max_height)
    cells = image_to_ascii(source, geometry, config.ramp, config.steepness, config.edge_weight)
    return render(source, geometry, cells, viewport)


def convert(
    data: bytes,
    filename: str | None,
    max_width: int,
    max_height: int,
    *,
    terminal_size: tuple[int, int] | None = None,
    config: ConverterConfig | None = None,
    decoder: Decoder | None = None,
) -> tuple[str, bool]:
    """Render image bytes as text art for a max_width x max_height viewport.

    Returns (text, was_image). Input that does not look like an image gives
    ("", False) without decoding; input that looks like one but cannot be
    decoded gives a short error message and False.
    """
    config = config or DEFAULT_CONFIG
    if not classify(data, filename):
        return "", False

    try:
        source = decode(data, decoder)
    except DecodeError as ex:
        logger.warning("Could not decode {!r}: {}", filename, ex)
        return f"Error converting image to ASCII: failed to decode image: {ex}", False

    viewport = config.bound(max_width, max_height, terminal_size)
    return render_source(source, viewport, config), True


def convert_for_terminal(
    data: bytes,
    filename: str | None,
    columns: int,
    rows: int,
    config: ConverterConfig | None = None,
) -> tuple[str, bool]:
    """convert() sized for a terminal, leaving room for the surrounding UI chrome."""
    config = config or DEFAULT_CONFIG
    return convert(
        data,
        filename,
        columns - config.margin_columns,
        rows - config.margin_rows,
        terminal_size=(columns, rows),
        config=config,
    )
