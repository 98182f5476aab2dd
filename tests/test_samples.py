"""Tests for the built-in sample images."""

import pytest
from PIL import Image

from gridtone.config import AnalysisConfig
from gridtone.samples import (
    SAMPLE_RECIPES,
    gradient_image,
    render_sample,
    sample_images,
    sample_items,
)

SIZE = 60


def test_nine_distinct_recipes() -> None:
    """There are nine samples with unique names."""
    assert len(SAMPLE_RECIPES) == 9  # noqa: PLR2004
    assert len({r.name for r in SAMPLE_RECIPES}) == 9  # noqa: PLR2004


def test_gradient_endpoints() -> None:
    """A horizontal gradient starts and ends on its outer stops."""
    img = gradient_image(SIZE, "horizontal", ("#000000", "#FF0000"))
    assert img.getpixel((0, 0)) == (0, 0, 0)
    assert img.getpixel((SIZE - 1, 0)) == (255, 0, 0)


@pytest.mark.parametrize("recipe", SAMPLE_RECIPES, ids=lambda r: r.name)
def test_render_sample_shape(recipe) -> None:  # noqa: ANN001
    """Every sample renders as a square RGB image."""
    img = render_sample(recipe, SIZE)
    assert isinstance(img, Image.Image)
    assert img.mode == "RGB"
    assert img.size == (SIZE, SIZE)


def test_sample_images_are_different() -> None:
    """The samples do not repeat each other."""
    images = sample_images(SIZE)
    assert len({img.tobytes() for img in images}) == len(images)


def test_sample_items_are_analyzed() -> None:
    """Sample items carry colors, fresh ids and no source path."""
    items = sample_items(SIZE, AnalysisConfig(k=3, iterations=4))
    assert len(items) == len(SAMPLE_RECIPES)
    assert len({i.id for i in items}) == len(items)
    assert all(i.source is None for i in items)
    assert all(1 <= len(i.dominant_colors) <= 3 for i in items)  # noqa: PLR2004
    assert len({i.average_color for i in items}) > 1
