from dataclasses import dataclass

from loguru import logger

# Width/height of a terminal glyph cell; cells are roughly twice as tall as wide
CHAR_ASPECT = 0.5


@dataclass(frozen=True)
class Viewport:
    max_width: int
    max_height: int
    terminal_width: int | None = None
    terminal_height: int | None = None

    @property
    def terminal_known(self) -> bool:
        return self.terminal_width is not None and self.terminal_height is not None


@dataclass(frozen=True)
class OutputGeometry:
    source_width: int
    source_height: int
    target_width: int
    target_height: int

    def source_x(self, cell_x):
        """Source column a cell column maps to. Works on ints and integer arrays."""
        return cell_x * self.source_width // self.target_width

    def source_y(self, cell_y):
        return cell_y * self.source_height // self.target_height

    @property
    def x_scale(self) -> float:
        return self.source_width / self.target_width

    @property
    def y_scale(self) -> float:
        return self.source_height / self.target_height

    def sampling_range_x(self) -> tuple[int, int, int]:
        """(first, middle, last) source columns sampled."""
        return 0, self.source_x(self.target_width // 2), self.source_x(self.target_width - 1)

    def sampling_range_y(self) -> tuple[int, int, int]:
        return 0, self.source_y(self.target_height // 2), self.source_y(self.target_height - 1)


def plan(source_width: int, source_height: int, max_width: int, max_height: int) -> OutputGeometry:
    """Fit the source into a max_width x max_height character grid.

    The source aspect ratio is divided by CHAR_ASPECT so that the glyphs, which
    are taller than wide, reproduce the visual proportions of the image.
    Degenerate inputs are clamped to 1 rather than rejected.
    """
    source_width = max(1, source_width)
    source_height = max(1, source_height)
    max_width = max(1, max_width)
    max_height = max(1, max_height)

    adjusted_ratio = (source_width / source_height) / CHAR_ASPECT

    if adjusted_ratio > max_width / max_height:
        target_width = max_width
        target_height = round(max_width / adjusted_ratio)
        constraint = "width"
    else:
        target_height = max_height
        target_width = round(max_height * adjusted_ratio)
        constraint = "height"

    target_width = min(max(1, target_width), max_width)
    target_height = min(max(1, target_height), max_height)
    logger.debug(
        "Planned {}x{} grid for {}x{} source ({}-constrained, max {}x{})",
        target_width,
        target_height,
        source_width,
        source_height,
        constraint,
        max_width,
        max_height,
    )
    return OutputGeometry(
        source_width=source_width,
        source_height=source_height,
        target_width=target_width,
        target_height=target_height,
    )
