"""
Unit tests for the config module used in gridtone.

Covers:
- Successful loading of a valid gridtone.toml
- Default fallbacks for missing values
- Error handling for missing files and invalid values
- Layering CLI overrides on top of a loaded configuration
"""
import tempfile
from pathlib import Path
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import gridtone.config as gt_config
from gridtone.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_CLUSTER_COUNT,
    DEFAULT_COLOR_MODE,
    DEFAULT_COLUMNS,
    DEFAULT_ITERATIONS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_OVERLAY_ALPHA,
    DEFAULT_OVERLAY_STYLE,
    DEFAULT_SAMPLE_CAP,
    DEFAULT_SAMPLE_MAX_SIDE,
    DEFAULT_SPACING,
    DEFAULT_STATE_PATH,
    DEFAULT_TILE_SIZE,
    PREVIEW_TILE_SIZE,
)


def create_toml_file(data: dict[str, Any]) -> str:
    """Write a TOML string to a temporary file and return its path."""
    doc = tomlkit.document()
    doc.update(data)
    toml_str = tomlkit.dumps(doc)

    with tempfile.NamedTemporaryFile(
        delete=False,
        suffix=".toml",
        mode="w",
        encoding="utf-8",
    ) as temp:
        temp.write(toml_str)
        return temp.name


def test_load_valid_config() -> None:
    """Test that a well-formed gridtone.toml loads successfully."""
    config_data = {
        "analysis": {"k": 4, "iterations": 12},
        "render": {
            "columns": 4,
            "tile_size": 200,
            "background": "#102030",
            "include_overlays": False,
        },
        "overlay": {"show": True, "color_mode": "dominant",
                    "overlay_style": "half", "alpha": 0.8},
        "output": {"path": "out/grid.jpg"},
    }
    path = create_toml_file(config_data)
    cfg = gt_config.ConfigLoader.load(path)

    assert isinstance(cfg, gt_config.GridtoneConfig)
    assert cfg.analysis.k == 4  # noqa: PLR2004
    assert cfg.analysis.iterations == 12  # noqa: PLR2004
    assert cfg.analysis.sample_cap == DEFAULT_SAMPLE_CAP
    assert cfg.render.columns == 4  # noqa: PLR2004
    assert cfg.render.tile_size == 200  # noqa: PLR2004
    assert cfg.render.background == (0x10, 0x20, 0x30)
    assert cfg.render.include_overlays is False
    assert cfg.overlay.show is True
    assert cfg.overlay.color_mode == "dominant"
    assert cfg.overlay.overlay_style == "half"
    assert cfg.overlay.alpha == 0.8  # noqa: PLR2004
    assert cfg.output.path == "out/grid.jpg"
    assert cfg.output.state_path == DEFAULT_STATE_PATH


def test_missing_file_raises() -> None:
    """Ensure FileNotFoundError is raised for nonexistent config."""
    with pytest.raises(FileNotFoundError):
        gt_config.ConfigLoader.load("nonexistent_file.toml")


def test_loader_with_empty_toml_uses_all_defaults() -> None:
    """Empty TOML should yield a fully defaulted config object."""
    path = create_toml_file({})
    cfg = gt_config.ConfigLoader.load(path)

    assert cfg.analysis.max_side == DEFAULT_SAMPLE_MAX_SIDE
    assert cfg.analysis.k == DEFAULT_CLUSTER_COUNT
    assert cfg.analysis.sample_cap == DEFAULT_SAMPLE_CAP
    assert cfg.analysis.iterations == DEFAULT_ITERATIONS
    assert cfg.render.columns == DEFAULT_COLUMNS
    assert cfg.render.tile_size == DEFAULT_TILE_SIZE
    assert cfg.render.spacing == DEFAULT_SPACING
    assert cfg.render.background == DEFAULT_BACKGROUND
    assert cfg.render.jpeg_quality == DEFAULT_JPEG_QUALITY
    assert cfg.overlay.color_mode == DEFAULT_COLOR_MODE
    assert cfg.overlay.overlay_style == DEFAULT_OVERLAY_STYLE
    assert cfg.overlay.alpha == DEFAULT_OVERLAY_ALPHA
    assert cfg.output.path == DEFAULT_OUTPUT_PATH


def test_loader_raises_on_invalid_types() -> None:
    """Type errors in TOML should propagate as ValidationError."""
    path = create_toml_file({
        "render": {"columns": "not_an_int"},
    })
    with pytest.raises(ValidationError):
        gt_config.ConfigLoader.load(path)


def test_background_accepts_channel_list() -> None:
    """A three channel list is accepted and clamped into range."""
    spec = gt_config.RenderSpec.model_validate({"background": [1, 2, 300]})
    assert spec.background == (1, 2, 255)


def test_background_rejects_bad_hex() -> None:
    """Malformed hex strings are reported against the field."""
    with pytest.raises(ValidationError) as exc_info:
        gt_config.RenderSpec(background="#12")
    assert "background" in str(exc_info.value)


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("columns", 0),
        ("tile_size", 0),
        ("spacing", -1),
        ("pixel_density", 0.5),
        ("jpeg_quality", 0),
        ("jpeg_quality", 100),
    ],
)
def test_render_spec_bounds(field: str, value: Any) -> None:
    """Out of range geometry or quality raises ValidationError."""
    with pytest.raises(ValidationError) as exc_info:
        gt_config.RenderSpec.model_validate({field: value})
    assert field in str(exc_info.value)


def test_overlay_alpha_bounds() -> None:
    """Overlay alpha must stay within [0, 1]."""
    with pytest.raises(ValidationError) as exc_info:
        gt_config.OverlayConfig(alpha=1.5)
    assert "alpha" in str(exc_info.value)


def test_overlay_style_must_be_known() -> None:
    """Unknown overlay styles are rejected."""
    with pytest.raises(ValidationError):
        gt_config.OverlayConfig.model_validate({"overlay_style": "stripes"})


def test_preview_spec_keeps_layout_shape() -> None:
    """Preview lowers tile size and density but keeps other settings."""
    spec = gt_config.RenderSpec(columns=5, tile_size=400, spacing=3,
                                pixel_density=2.0)
    preview = spec.preview()
    assert preview.tile_size == PREVIEW_TILE_SIZE
    assert preview.pixel_density == 1.0
    assert preview.columns == 5  # noqa: PLR2004
    assert preview.spacing == 3  # noqa: PLR2004
    assert spec.tile_size == 400  # noqa: PLR2004


def test_build_config_from_cli_applies_overrides() -> None:
    """CLI values replace config values and None values are ignored."""
    base_cfg = gt_config.GridtoneConfig.model_validate({
        "render": {"columns": 5, "spacing": 2},
    })
    cfg = gt_config.build_config_from_cli(
        {
            "columns": 2,
            "spacing": None,
            "k": 5,
            "out": "elsewhere.jpg",
            "overlay_style": "full",
            "command": "render",
        },
        base_config=base_cfg,
    )
    assert cfg.render.columns == 2  # noqa: PLR2004
    assert cfg.render.spacing == 2  # noqa: PLR2004
    assert cfg.analysis.k == 5  # noqa: PLR2004
    assert cfg.output.path == "elsewhere.jpg"
    assert cfg.overlay.overlay_style == "full"
    assert base_cfg.render.columns == 5  # noqa: PLR2004


def test_build_config_from_cli_without_base_uses_defaults() -> None:
    """Without a base config the defaults are used."""
    cfg = gt_config.build_config_from_cli({})
    assert cfg == gt_config.GridtoneConfig()


def test_build_config_from_cli_validates_values() -> None:
    """Invalid CLI values fail validation like config values do."""
    with pytest.raises(ValidationError):
        gt_config.build_config_from_cli({"alpha": 2.0})


def test_default_config_fixture(
    default_config: gt_config.GridtoneConfig,
) -> None:
    """Fixture provides a default configuration."""
    assert default_config.overlay.show is False
    assert default_config.render.include_overlays is True
