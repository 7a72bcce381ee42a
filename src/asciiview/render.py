from dataclasses import dataclass

from asciiview.geometry import OutputGeometry, Viewport
from asciiview.source import PixelSource


@dataclass
class CellGrid:
    chars: list[str]  # one string per row


def render_header(source: PixelSource, geometry: OutputGeometry, viewport: Viewport) -> list[str]:
    """Diagnostic lines describing the source, the grid, and the sampled coordinates."""
    sw, sh = geometry.source_width, geometry.source_height
    tw, th = geometry.target_width, geometry.target_height

    limits = f"max: {viewport.max_width}x{viewport.max_height}"
    if viewport.terminal_known:
        limits = f"term: {viewport.terminal_width}x{viewport.terminal_height}, {limits}"

    _, mid_x, last_x = geometry.sampling_range_x()
    _, mid_y, last_y = geometry.sampling_range_y()
    return [
        f"┌─ Image: {sw}x{sh} ({source.format}) ─┐",
        f"├─ ASCII: {tw}x{th} ({limits}) ─┤",
        f"├─ Sampling: X[0,{mid_x},{last_x}] Y[0,{mid_y},{last_y}] of {sw}x{sh} ─┤",
        "└" + "─" * (tw + 2) + "┘",
    ]


def render(source: PixelSource, geometry: OutputGeometry, cells: CellGrid, viewport: Viewport) -> str:
    """Header plus one line per grid row, every line newline-terminated."""
    if len(cells.chars) != geometry.target_height or any(len(row) != geometry.target_width for row in cells.chars):
        raise ValueError(
            f"Cell grid does not match geometry {geometry.target_width}x{geometry.target_height}"
        )
    lines = render_header(source, geometry, viewport) + cells.chars
    return "".join(line + "\n" for line in lines)
