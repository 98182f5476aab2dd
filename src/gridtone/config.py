"""
Configuration schema and loader for gridtone.

Defines Pydantic models for color analysis, rendering, overlays, import
and output settings, plus a TOML-based config loader with validation
support and a helper that layers CLI overrides on top.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

from gridtone.color_format import hex_to_rgb
from gridtone.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_CLUSTER_COUNT,
    DEFAULT_COLOR_MODE,
    DEFAULT_COLUMNS,
    DEFAULT_INCLUDE_OVERLAYS,
    DEFAULT_ITERATIONS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_OVERLAY_ALPHA,
    DEFAULT_OVERLAY_STYLE,
    DEFAULT_PIXEL_DENSITY,
    DEFAULT_RETAIN_MAX_SIDE,
    DEFAULT_SAMPLE_CAP,
    DEFAULT_SAMPLE_MAX_SIDE,
    DEFAULT_SHOW_COLORS,
    DEFAULT_SPACING,
    DEFAULT_STATE_PATH,
    DEFAULT_TILE_SIZE,
    PREVIEW_TILE_SIZE,
)
from gridtone.constants import JPEG_QUALITY_MAX, JPEG_QUALITY_MIN
from gridtone.items import coerce_rgb
from gridtone.type_defs import RGB, ColorMode, OverlayStyle


class AnalysisConfig(BaseModel):
    """Control sampling and clustering used for color extraction."""

    max_side: int = Field(DEFAULT_SAMPLE_MAX_SIDE, ge=1)
    k: int = Field(DEFAULT_CLUSTER_COUNT, ge=1)
    sample_cap: int = Field(DEFAULT_SAMPLE_CAP, ge=1)
    iterations: int = Field(DEFAULT_ITERATIONS, ge=0)


class RenderSpec(BaseModel):
    """Grid geometry and encoding settings for a composite render."""

    columns: int = Field(DEFAULT_COLUMNS, ge=1)
    tile_size: int = Field(DEFAULT_TILE_SIZE, gt=0)
    spacing: int = Field(DEFAULT_SPACING, ge=0)
    background: RGB = DEFAULT_BACKGROUND
    include_overlays: bool = DEFAULT_INCLUDE_OVERLAYS
    pixel_density: float = Field(DEFAULT_PIXEL_DENSITY, ge=1.0)
    jpeg_quality: int = Field(
        DEFAULT_JPEG_QUALITY,
        ge=JPEG_QUALITY_MIN,
        le=JPEG_QUALITY_MAX,
    )

    @field_validator("background", mode="before")
    @classmethod
    def _parse_background(cls, value: Any) -> Any:
        """Accept ``#rrggbb`` strings as well as three channel lists."""
        if isinstance(value, str):
            return hex_to_rgb(value)
        rgb = coerce_rgb(value)
        return value if rgb is None else rgb

    def preview(self) -> "RenderSpec":
        """Return a low resolution copy suited to on-screen previews."""
        return self.model_copy(
            update={"tile_size": PREVIEW_TILE_SIZE, "pixel_density": 1.0},
        )


class OverlayConfig(BaseModel):
    """Which colors to paint over tiles and how."""

    show: bool = DEFAULT_SHOW_COLORS
    color_mode: ColorMode = Field(DEFAULT_COLOR_MODE)
    overlay_style: OverlayStyle = Field(DEFAULT_OVERLAY_STYLE)
    alpha: float = Field(DEFAULT_OVERLAY_ALPHA, ge=0.0, le=1.0)


class ImportConfig(BaseModel):
    """Control how source images are decoded and retained."""

    retain_max_side: int = Field(DEFAULT_RETAIN_MAX_SIDE, ge=1)


class OutputConfig(BaseModel):
    """Configure output locations."""

    path: str = Field(DEFAULT_OUTPUT_PATH)
    state_path: str = Field(DEFAULT_STATE_PATH)


class GridtoneConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of gridtone.toml, grouping related parameters
    under logical categories.
    """

    # model_validate({}) populates defaults from the Field(...)
    # declarations, which keeps type checkers happy with zero-arg factories.
    analysis: AnalysisConfig = Field(
        default_factory=lambda: AnalysisConfig.model_validate({}),
    )
    render: RenderSpec = Field(
        default_factory=lambda: RenderSpec.model_validate({}),
    )
    overlay: OverlayConfig = Field(
        default_factory=lambda: OverlayConfig.model_validate({}),
    )
    importer: ImportConfig = Field(
        default_factory=lambda: ImportConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )


# CLI destination name -> (section, field)
CLI_FIELD_MAP: dict[str, tuple[str, str]] = {
    "max_side": ("analysis", "max_side"),
    "k": ("analysis", "k"),
    "sample_cap": ("analysis", "sample_cap"),
    "iterations": ("analysis", "iterations"),
    "columns": ("render", "columns"),
    "tile_size": ("render", "tile_size"),
    "spacing": ("render", "spacing"),
    "background": ("render", "background"),
    "include_overlays": ("render", "include_overlays"),
    "pixel_density": ("render", "pixel_density"),
    "jpeg_quality": ("render", "jpeg_quality"),
    "show": ("overlay", "show"),
    "color_mode": ("overlay", "color_mode"),
    "overlay_style": ("overlay", "overlay_style"),
    "alpha": ("overlay", "alpha"),
    "retain_max_side": ("importer", "retain_max_side"),
    "out": ("output", "path"),
    "state_path": ("output", "state_path"),
}


def build_config_from_cli(
    args: Mapping[str, Any],
    base_config: GridtoneConfig | None = None,
) -> GridtoneConfig:
    """
    Merge CLI overrides onto ``base_config`` (or defaults).

    Only keys present in ``args`` with a non-None value are applied, so
    options left at ``argparse.SUPPRESS`` keep the config file values.
    """
    base = base_config or GridtoneConfig()
    data = base.model_dump()
    for key, (section, field_name) in CLI_FIELD_MAP.items():
        value = args.get(key)
        if value is not None:
            data[section][field_name] = value
    return GridtoneConfig.model_validate(data)


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> GridtoneConfig:
        """
        Load a gridtone configuration from a TOML file.

        Returns a validated GridtoneConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return GridtoneConfig.model_validate(doc.unwrap())
