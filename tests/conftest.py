"""
Test configuration and shared fixtures for gridtone.

This module defines reusable pytest fixtures for synthetic images, grid
items and on-disk image files. These fixtures support all test modules
in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from gridtone.config import GridtoneConfig, OverlayConfig, RenderSpec
from gridtone.constants import COLOR_MODE_RGB
from gridtone.items import GridItem, make_grid_item
from gridtone.logging_utils import logger

RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 100x100 red RGB PIL image."""
    return Image.new(COLOR_MODE_RGB, (100, 100), color="red")


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    """Factory for uniform RGB images of a given color and size."""

    def _make(
        color: tuple[int, int, int],
        size: tuple[int, int] = (64, 64),
    ) -> Image.Image:
        return Image.new(COLOR_MODE_RGB, size, color)

    return _make


@pytest.fixture
def red_blue_image() -> Image.Image:
    """A 100x100 image that is 70% pure red (left) and 30% pure blue."""
    img = Image.new(COLOR_MODE_RGB, (100, 100), BLUE)
    img.paste(Image.new(COLOR_MODE_RGB, (70, 100), RED), (0, 0))
    return img


@pytest.fixture
def make_item(
    solid_image: Callable[..., Image.Image],
) -> Callable[..., GridItem]:
    """
    Build GridItem instances with sensible defaults.

    The image defaults to a solid tile in the average color; pass
    ``image=None`` to simulate a missing image handle.
    """
    counter = {"n": 0}

    def _build(
        *,
        average: Any = (40, 80, 120),
        dominant: Any = ((200, 10, 10), (10, 200, 10), (10, 10, 200)),
        **overrides: Any,
    ) -> GridItem:
        counter["n"] += 1
        image = overrides.pop(
            "image", solid_image(tuple(average)[:3], (50, 50)),
        )
        return make_grid_item(
            image=image,
            average_color=average,
            dominant_colors=dominant,
            item_id=overrides.pop("item_id", f"item-{counter['n']}"),
            **overrides,
        )

    return _build


@pytest.fixture
def small_spec() -> RenderSpec:
    """A compact render spec with a black background."""
    return RenderSpec(
        columns=3,
        tile_size=40,
        spacing=4,
        background=(0, 0, 0),
    )


@pytest.fixture
def overlay_off() -> OverlayConfig:
    """Overlay settings with overlays hidden."""
    return OverlayConfig(show=False)


@pytest.fixture
def image_files(tmp_path: Path) -> list[Path]:
    """Write three solid images of different sizes and return the paths."""
    specs = [
        ("green.png", (0, 200, 0), (80, 40)),
        ("red.jpg", (220, 0, 0), (20, 20)),
        ("blue.bmp", (0, 0, 210), (40, 60)),
    ]
    paths = []
    for name, color, size in specs:
        path = tmp_path / name
        Image.new(COLOR_MODE_RGB, size, color).save(path)
        paths.append(path)
    return paths


@pytest.fixture
def default_config() -> GridtoneConfig:
    """Default root config."""
    return GridtoneConfig()


@pytest.fixture(autouse=True)
def _propagate_logs() -> Any:
    """Let caplog see records from the shared non-propagating logger."""
    logger.propagate = True
    yield
    logger.propagate = False
