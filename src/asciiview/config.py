"""Converter configuration: viewport bounds, tone ramp and curve constants.

Values are validated by pydantic; a YAML file can override any of them.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from asciiview.charsets import DEFAULT_RAMP
from asciiview.geometry import Viewport
from asciiview.sampling import EDGE_WEIGHT
from asciiview.tone import STEEPNESS


class ConverterConfig(BaseModel):
    """Tunables for one conversion. Defaults reproduce the stock rendering."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_width: int = Field(default=20, ge=1, description="Smallest grid width, in columns, ever planned.")
    min_height: int = Field(default=10, ge=1, description="Smallest grid height, in rows, ever planned.")
    large_columns: int = Field(
        default=200, ge=1, description="Viewports wider than this are treated as exceptionally large."
    )
    large_rows: int = Field(default=100, ge=1, description="Viewports taller than this are treated as exceptionally large.")
    ceiling_width: int = Field(default=180, ge=1, description="Width cap applied to exceptionally wide viewports.")
    ceiling_height: int = Field(default=80, ge=1, description="Height cap applied to exceptionally tall viewports.")
    margin_columns: int = Field(default=6, ge=0, description="Columns reserved for borders and scrollbar.")
    margin_rows: int = Field(default=8, ge=0, description="Rows reserved for headers and other UI chrome.")
    ramp: str = Field(default=DEFAULT_RAMP, min_length=2, description="Glyphs from densest to blank.")
    steepness: float = Field(default=STEEPNESS, gt=0.0, description="Steepness of the contrast S-curve.")
    edge_weight: float = Field(default=EDGE_WEIGHT, ge=0.0, description="Weight of the Sobel edge term.")

    def bound(
        self,
        max_width: int,
        max_height: int,
        terminal_size: tuple[int, int] | None = None,
    ) -> Viewport:
        """Clamp a requested grid size to the floors, and to the ceilings for huge viewports.

        When the terminal size is known it decides whether the viewport counts
        as exceptionally large; otherwise the requested size does.
        """
        width = max(max_width, self.min_width)
        height = max(max_height, self.min_height)

        columns, rows = terminal_size if terminal_size is not None else (max_width, max_height)
        if columns > self.large_columns:
            width = min(width, self.ceiling_width)
        if rows > self.large_rows:
            height = min(height, self.ceiling_height)

        if terminal_size is None:
            return Viewport(max_width=width, max_height=height)
        return Viewport(max_width=width, max_height=height, terminal_width=columns, terminal_height=rows)

    @classmethod
    def from_yaml(cls, path: str | Path, key_to_config: tuple[str, ...] = ("asciiview",)) -> ConverterConfig:
        """Load a config from YAML, following `key_to_config` into nested sections.

        Raises:
            OSError: the file cannot be read
            KeyError: a key in `key_to_config` is missing
            ValueError: a section is not a mapping
            yaml.YAMLError: the file is not valid YAML
            pydantic.ValidationError: a value fails validation
        """
        path = Path(path)

        for encoding in ["utf-8", "utf-8-sig"]:
            try:
                data = yaml.safe_load(path.read_text(encoding=encoding))
                break
            except UnicodeDecodeError:
                if encoding == "utf-8-sig":
                    raise

        config = data
        for key in key_to_config:
            if not isinstance(config, dict):
                raise ValueError(f"Expected a mapping containing {key!r} in {path}")
            config = config[key]

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError(f"Expected a mapping of settings in {path}")
        return cls.model_validate(config)
