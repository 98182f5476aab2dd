"""Tests for batch image import."""

import asyncio
import logging
from pathlib import Path

import pytest
from PIL import Image
from pytest_mock import MockerFixture

from gridtone.config import ImportConfig
from gridtone.errors import ImportFailure
from gridtone.importer import (
    decode_image,
    import_files,
    import_paths,
    is_image_path,
    load_item,
)


def _close(a: tuple[int, ...], b: tuple[int, ...], tol: int = 6) -> bool:
    return all(abs(x - y) <= tol for x, y in zip(a, b, strict=True))


class TestDecode:
    def test_is_image_path_case_insensitive(self) -> None:
        """Suffix matching ignores case and rejects other files."""
        assert is_image_path(Path("a.JPG"))
        assert is_image_path(Path("b.webp"))
        assert not is_image_path(Path("notes.txt"))

    def test_decode_converts_to_rgb(self, tmp_path: Path) -> None:
        """Palette and alpha images come back as RGB."""
        path = tmp_path / "alpha.png"
        Image.new("RGBA", (8, 8), (1, 2, 3, 128)).save(path)
        img = decode_image(path)
        assert img.mode == "RGB"
        assert img.size == (8, 8)

    def test_decode_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ImportFailure."""
        with pytest.raises(ImportFailure, match="Image file not found"):
            decode_image(tmp_path / "missing.png")

    def test_decode_corrupt_file(self, tmp_path: Path) -> None:
        """Undecodable content raises ImportFailure."""
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(ImportFailure, match="Error loading image"):
            decode_image(path)


class TestLoadItem:
    def test_colors_and_source(self, image_files: list[Path]) -> None:
        """A loaded item carries its colors and the path it came from."""
        green = image_files[0]
        item = load_item(green)
        assert item.average_color == (0, 200, 0)
        assert item.dominant_colors == ((0, 200, 0),)
        assert item.source == str(green)
        assert item.image is not None
        assert item.id

    def test_retained_image_is_shrunk(self, image_files: list[Path]) -> None:
        """Images larger than retain_max_side are thumbnailed."""
        item = load_item(image_files[0], settings=ImportConfig(
            retain_max_side=30,
        ))
        assert item.image is not None
        assert item.image.size == (30, 15)

    def test_small_image_kept_as_is(self, image_files: list[Path]) -> None:
        """Images within the limit keep their size."""
        item = load_item(image_files[1])
        assert item.image is not None
        assert item.image.size == (20, 20)


class TestImportPaths:
    def test_smallest_file_first(self, image_files: list[Path]) -> None:
        """Files are processed in ascending byte size."""
        expected = sorted(image_files, key=lambda p: p.stat().st_size)
        result = import_paths(image_files)
        assert [item.source for item in result.items] == [
            str(p) for p in expected
        ]
        assert result.failed == 0
        assert len({item.id for item in result.items}) == 3  # noqa: PLR2004

    def test_failures_are_skipped_not_fatal(
        self,
        image_files: list[Path],
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Bad files are counted and logged; the rest still import."""
        broken = tmp_path / "broken.jpg"
        broken.write_bytes(b"garbage")
        notes = tmp_path / "notes.txt"
        notes.write_text("hello", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="gridtone"):
            result = import_paths([*image_files, broken, notes])
        assert len(result.items) == 3  # noqa: PLR2004
        assert result.failed == 1
        assert result.skipped == 1
        assert "Failed to import image" in caplog.text
        assert "Skipped 1 file(s) due to errors." in caplog.text

    def test_progress_updates_per_file(
        self,
        image_files: list[Path],
        tmp_path: Path,
        mocker: MockerFixture,
    ) -> None:
        """Progress advances once for every input path, failed or not."""
        progress = mocker.Mock()
        import_paths([*image_files, tmp_path / "gone.png"], progress=progress)
        assert progress.update.call_count == 4  # noqa: PLR2004
        progress.update.assert_called_with(1)

    def test_jpeg_colors_are_close(self, image_files: list[Path]) -> None:
        """Lossy files still report colors near the source color."""
        result = import_paths([image_files[1]])
        assert _close(result.items[0].average_color, (220, 0, 0))

    def test_empty_batch(self) -> None:
        """No paths gives an empty result."""
        result = import_paths([])
        assert result.items == []
        assert result.failed == 0


class TestImportFiles:
    def test_async_matches_sync(self, image_files: list[Path]) -> None:
        """The async importer yields the same items in the same order."""
        sync_result = import_paths(image_files)
        async_result = asyncio.run(import_files(image_files))
        assert [i.source for i in async_result.items] == [
            i.source for i in sync_result.items
        ]
        assert [i.average_color for i in async_result.items] == [
            i.average_color for i in sync_result.items
        ]

    def test_async_yields_between_files(
        self,
        image_files: list[Path],
        mocker: MockerFixture,
    ) -> None:
        """Control returns to the event loop once per file."""
        sleep = mocker.patch(
            "gridtone.importer.asyncio.sleep", new=mocker.AsyncMock(),
        )
        asyncio.run(import_files(image_files))
        assert sleep.await_count == 3  # noqa: PLR2004
