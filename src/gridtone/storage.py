"""
Lightweight persistence for grid state.

Only a minimal payload is stored: item ids, the path each image was
imported from and its colors. Images are reopened on load; an image that
can no longer be read comes back as ``image=None`` and the renderer
leaves its cell empty.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gridtone.constants import STORAGE_KEY
from gridtone.errors import ImportFailure
from gridtone.importer import decode_image, retain_image
from gridtone.items import GridItem, make_grid_item
from gridtone.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from PIL import Image

    from gridtone.config import ImportConfig


def item_to_record(item: GridItem) -> dict[str, Any]:
    """Return the persisted shape of ``item``."""
    return {
        "id": item.id,
        "image_source": item.source or "",
        "average_color": list(item.average_color),
        "dominant_colors": [list(c) for c in item.dominant_colors],
    }


def _reopen(
    source: str,
    settings: ImportConfig | None = None,
) -> Image.Image | None:
    """
    Reopen a persisted image the same way the importer decoded it.

    Returns None if the file can no longer be read.
    """
    if not source:
        return None
    try:
        image = decode_image(Path(source))
    except ImportFailure as exc:
        logger.warning("Could not reopen image %s: %s", source, exc)
        return None
    return retain_image(image, settings)


def record_to_item(
    record: dict[str, Any],
    settings: ImportConfig | None = None,
) -> GridItem:
    """Rebuild a grid item, tolerating missing or short color data."""
    source = str(record.get("image_source") or "")
    return make_grid_item(
        image=_reopen(source, settings),
        average_color=record.get("average_color"),
        dominant_colors=record.get("dominant_colors") or (),
        item_id=str(record.get("id") or "") or None,
        source=source or None,
    )


def save_items(items: Sequence[GridItem], path: Path) -> Path:
    """Write ``items`` to ``path`` as JSON and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {STORAGE_KEY: [item_to_record(item) for item in items]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    logger.info("Saved %d item(s) to %s", len(items), path)
    return path


def load_items(
    path: Path,
    settings: ImportConfig | None = None,
) -> list[GridItem]:
    """
    Load items saved by :func:`save_items`.

    A missing or unreadable file yields an empty grid rather than an
    error, matching a fresh start. Images are reopened upright and shrunk
    to ``settings.retain_max_side`` like freshly imported ones.
    """
    if not path.is_file():
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable state file %s: %s", path, exc)
        return []

    records = payload.get(STORAGE_KEY) if isinstance(payload, dict) else None
    if not isinstance(records, list):
        logger.warning("State file %s has no %s entry", path, STORAGE_KEY)
        return []

    items: list[GridItem] = []
    seen: set[str] = set()
    for record in records:
        if not isinstance(record, dict):
            continue
        item = record_to_item(record, settings)
        if item.id in seen:
            logger.warning("Dropping duplicate item id %s", item.id)
            continue
        seen.add(item.id)
        items.append(item)
    return items
