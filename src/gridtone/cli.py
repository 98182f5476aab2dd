"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from tqdm import tqdm

import gridtone.config as gt_config
from gridtone.color_format import hex_to_rgb
from gridtone.composite import render_composite
from gridtone.errors import ExportError
from gridtone.importer import import_paths
from gridtone.items import GridItem, validate_order
from gridtone.logging_utils import logger
from gridtone.palette import format_palette, sort_by_hue
from gridtone.samples import sample_items
from gridtone.storage import load_items, save_items
from gridtone.type_defs import COLOR_MODES, OVERLAY_STYLES

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence


def _wrap_validator[T](
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def _add_source_args(p: argparse.ArgumentParser) -> None:
    source = p.add_argument_group("sources")
    source.add_argument(
        "images", nargs="*", type=Path,
        help="Image files to place in the grid, in addition to any state")
    source.add_argument(
        "--load-state", action="store_true",
        help="Start from the items saved in the state file")
    source.add_argument(
        "--samples", action="store_true",
        help="Add the nine built-in sample images")
    source.add_argument(
        "--state-path", type=str, default=argparse.SUPPRESS,
        help="State file used by --load-state and --save-state")
    source.add_argument(
        "--sort-hue", action="store_true",
        help="Reorder the grid by hue before rendering")

    analysis = p.add_argument_group("analysis")
    analysis.add_argument(
        "--max-side", type=int, default=argparse.SUPPRESS,
        help="Longest side of the bitmap sampled for colors")
    analysis.add_argument(
        "--clusters", dest="k", type=int, default=argparse.SUPPRESS,
        help="Number of dominant color clusters")
    analysis.add_argument(
        "--sample-cap", type=int, default=argparse.SUPPRESS,
        help="Maximum number of pixels fed to the clusterer")
    analysis.add_argument(
        "--iterations", type=int, default=argparse.SUPPRESS,
        help="Clustering iterations")
    analysis.add_argument(
        "--retain-max-side", type=int, default=argparse.SUPPRESS,
        help="Longest side kept for imported images")


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="gridtone",
        description="Arrange images in a grid and export color overlays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "gridtone render a.jpg b.jpg c.jpg --out grid.jpg\n"
            "gridtone render --samples --show-colors --style half "
            "--mode dominant\n"
            "gridtone palette photos/*.jpg --mode dominant"
        ),
    )

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to gridtone.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit")

    commands = p.add_subparsers(dest="command")

    render = commands.add_parser(
        "render", help="Render the grid to a JPEG composite")
    _add_source_args(render)

    layout = render.add_argument_group("layout")
    layout.add_argument(
        "--columns", type=int, default=argparse.SUPPRESS,
        help="Number of grid columns")
    layout.add_argument(
        "--tile-size", type=int, default=argparse.SUPPRESS,
        help="Tile edge length in pixels")
    layout.add_argument(
        "--spacing", type=int, default=argparse.SUPPRESS,
        help="Gap between tiles in pixels")
    layout.add_argument(
        "--background", type=_wrap_validator(hex_to_rgb),
        default=argparse.SUPPRESS,
        help="Background color as hex like #0f0f10")
    layout.add_argument(
        "--pixel-density", type=float, default=argparse.SUPPRESS,
        help="Output scale factor applied to the whole layout")
    layout.add_argument(
        "--jpeg-quality", type=int, default=argparse.SUPPRESS,
        help="JPEG quality (1-95)")
    layout.add_argument(
        "--no-overlays", dest="include_overlays", action="store_false",
        default=argparse.SUPPRESS,
        help="Export the photos without color overlays")

    overlay = render.add_argument_group("overlay")
    overlay.add_argument(
        "--show-colors", dest="show", action="store_true",
        default=argparse.SUPPRESS,
        help="Paint color overlays on tiles")
    overlay.add_argument(
        "--mode", dest="color_mode", choices=list(COLOR_MODES),
        default=argparse.SUPPRESS,
        help="Average color or three dominant colors")
    overlay.add_argument(
        "--style", dest="overlay_style", choices=list(OVERLAY_STYLES),
        default=argparse.SUPPRESS,
        help="Swatch dots, bottom half or full tile overlay")
    overlay.add_argument(
        "--alpha", type=float, default=argparse.SUPPRESS,
        help="Overlay opacity between 0 and 1")

    output = render.add_argument_group("output")
    output.add_argument(
        "--out", type=str, default=argparse.SUPPRESS,
        help="Output JPEG path")
    output.add_argument(
        "--preview", action="store_true",
        help="Render a low resolution preview instead of the full export")
    output.add_argument(
        "--save-state", action="store_true",
        help="Save the rendered grid to the state file")

    palette = commands.add_parser(
        "palette", help="Print the colors of each grid item")
    _add_source_args(palette)
    palette.add_argument(
        "--mode", dest="color_mode", choices=list(COLOR_MODES),
        default=argparse.SUPPRESS,
        help="Average color or three dominant colors")
    palette.add_argument(
        "--columns", type=int, default=argparse.SUPPRESS,
        help="Entries per line, matching the grid columns")

    return p


def log_parameters(cfg: gt_config.GridtoneConfig) -> None:
    """Log the effective render parameters."""
    spec = cfg.render
    logger.info("Columns: %d", spec.columns)
    logger.info("Tile Size: %d px (spacing %d px)", spec.tile_size,
                spec.spacing)
    logger.info("Pixel Density: %g", spec.pixel_density)
    logger.info("Overlays: %s",
                "Enabled" if spec.include_overlays and cfg.overlay.show
                else "Disabled")
    if cfg.overlay.show:
        logger.info("Overlay: %s / %s at alpha %.2f",
                    cfg.overlay.color_mode, cfg.overlay.overlay_style,
                    cfg.overlay.alpha)


def gather_items(
    args: argparse.Namespace,
    cfg: gt_config.GridtoneConfig,
) -> list[GridItem]:
    """Collect grid items from the state file, samples and image paths."""
    items: list[GridItem] = []
    if args.load_state:
        items.extend(load_items(Path(cfg.output.state_path), cfg.importer))
    if args.samples:
        items.extend(sample_items(analysis=cfg.analysis))
    if args.images:
        with tqdm(total=len(args.images), desc="Importing",
                  unit="img") as bar:
            result = import_paths(
                args.images, cfg.analysis, cfg.importer, progress=bar,
            )
        items.extend(result.items)
    validate_order(items)
    if args.sort_hue:
        items = sort_by_hue(items, cfg.overlay.color_mode)
    return items


def run_render(
    args: argparse.Namespace,
    cfg: gt_config.GridtoneConfig,
) -> int:
    """Render the requested grid and write it to the output path."""
    log_parameters(cfg)
    items = gather_items(args, cfg)
    spec = cfg.render.preview() if args.preview else cfg.render
    data = render_composite(items, spec, cfg.overlay)
    if data is None:
        logger.warning("No images to render")
        return 1

    out_path = Path(cfg.output.path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(data)
    logger.info("Grid image saved to: %s", out_path)

    if args.save_state:
        save_items(items, Path(cfg.output.state_path))
    return 0


def run_palette(
    args: argparse.Namespace,
    cfg: gt_config.GridtoneConfig,
) -> int:
    """Print the palette of the requested grid."""
    items = gather_items(args, cfg)
    if not items:
        logger.warning("No images to describe")
        return 1
    print(format_palette(items, cfg.overlay.color_mode, cfg.render.columns))
    return 0


def run_from_args(args: argparse.Namespace) -> int:
    """Dispatch a parsed command line."""
    base_cfg: gt_config.GridtoneConfig | None = None
    if args.config:
        base_cfg = gt_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return 0

    cfg = gt_config.build_config_from_cli(vars(args), base_config=base_cfg)

    if args.command == "palette":
        return run_palette(args, cfg)
    try:
        return run_render(args, cfg)
    except ExportError as exc:
        logger.error("Export failed, please retry: %s", exc)
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.validate_config_only and not args.config:
        parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and args.command is None:
        parser.error("a command is required: render or palette")

    return run_from_args(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
