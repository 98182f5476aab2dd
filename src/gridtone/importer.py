"""
Batch image import: decode, analyze colors and build grid items.

Files are handled one at a time, smallest first, so only one decoded
bitmap is alive at any moment. The async entry point yields to the event
loop between files to keep the host responsive during large batches.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PIL import Image, ImageOps

from gridtone.analysis import analyze_image
from gridtone.config import AnalysisConfig, ImportConfig
from gridtone.constants import COLOR_MODE_RGB, IMAGE_SUFFIXES
from gridtone.errors import ImportFailure
from gridtone.items import GridItem, make_grid_item
from gridtone.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Iterator


class ProgressReporter(Protocol):
    """Protocol capturing the subset of tqdm's interface we rely on."""

    def update(self, n: float | None = 1) -> bool | None:
        """Advance the progress display by ``n`` units."""


@dataclass(slots=True)
class ImportResult:
    """Items built from a batch plus the number of files that failed."""

    items: list[GridItem] = field(default_factory=list)
    failed: int = 0
    skipped: int = 0


def is_image_path(path: Path) -> bool:
    """Return True if ``path`` has a recognised image suffix."""
    return path.suffix.lower() in IMAGE_SUFFIXES


def decode_image(path: Path) -> Image.Image:
    """
    Decode ``path`` into an upright RGB image fully loaded in memory.

    Raises:
        ImportFailure: If the file is missing or cannot be decoded.

    """
    try:
        with Image.open(path) as opened:
            upright = ImageOps.exif_transpose(opened)
            return upright.convert(COLOR_MODE_RGB)
    except FileNotFoundError as exc:
        msg = f"Image file not found: '{path}'"
        raise ImportFailure(msg) from exc
    except (OSError, Image.DecompressionBombError) as exc:
        msg = f"Error loading image '{path}': {exc!s}"
        raise ImportFailure(msg) from exc


def retain_image(
    image: Image.Image,
    settings: ImportConfig | None = None,
) -> Image.Image:
    """Shrink ``image`` in place so its longer side fits ``retain_max_side``."""
    settings = settings or ImportConfig()
    limit = settings.retain_max_side
    if max(image.size) > limit:
        image.thumbnail((limit, limit), Image.Resampling.LANCZOS)
    return image


def load_item(
    path: Path,
    analysis: AnalysisConfig | None = None,
    settings: ImportConfig | None = None,
) -> GridItem:
    """
    Decode ``path``, extract its colors and return a new grid item.

    Colors are computed from the full decoded image before the retained
    copy is shrunk to ``retain_max_side``.
    """
    image = decode_image(path)
    colors = analyze_image(image, analysis)
    return make_grid_item(
        image=retain_image(image, settings),
        average_color=colors.average,
        dominant_colors=colors.dominant,
        source=str(path),
    )


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _iter_items(
    paths: Iterable[Path | str],
    result: ImportResult,
    analysis: AnalysisConfig | None,
    settings: ImportConfig | None,
    progress: ProgressReporter | None,
) -> Iterator[GridItem | None]:
    """Yield one entry per input path, None for skipped or failed files."""
    ordered = sorted((Path(p) for p in paths), key=_file_size)
    for path in ordered:
        item: GridItem | None = None
        if not is_image_path(path):
            logger.debug("Skipping non-image file: %s", path)
            result.skipped += 1
        else:
            try:
                item = load_item(path, analysis, settings)
            except ImportFailure as exc:
                logger.warning("Failed to import image: %s", exc)
                result.failed += 1
            else:
                result.items.append(item)
        if progress is not None:
            progress.update(1)
        yield item


def import_paths(
    paths: Iterable[Path | str],
    analysis: AnalysisConfig | None = None,
    settings: ImportConfig | None = None,
    progress: ProgressReporter | None = None,
) -> ImportResult:
    """Import ``paths`` sequentially, skipping files that fail to decode."""
    result = ImportResult()
    for _ in _iter_items(paths, result, analysis, settings, progress):
        pass
    _log_summary(result)
    return result


async def import_files(
    paths: Iterable[Path | str],
    analysis: AnalysisConfig | None = None,
    settings: ImportConfig | None = None,
    progress: ProgressReporter | None = None,
) -> ImportResult:
    """Async variant of :func:`import_paths` that yields between files."""
    result = ImportResult()
    for _ in _iter_items(paths, result, analysis, settings, progress):
        await asyncio.sleep(0)
    _log_summary(result)
    return result


def _log_summary(result: ImportResult) -> None:
    logger.info("Imported %d image(s)", len(result.items))
    if result.failed:
        logger.warning(
            "Skipped %d file(s) due to errors.", result.failed,
        )
