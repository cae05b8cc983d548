"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pixel_grid.config import ConversionOptions, Method, PixelGridConfig
from pixel_grid.converter import convert
from pixel_grid.image_io import load_image, save_grid_png

app = typer.Typer(
    name="pixel-grid",
    help="Turn images into pixel-art grids.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger("pixel_grid")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def process_image(
    input_path: Path,
    output_path: Path,
    options: ConversionOptions,
    export_scale: int = 1,
    max_side: int = 1024,
) -> bool:
    """Convert one image file and write the rendered grid as a PNG.

    Returns:
        ``True`` on success; decode and write errors are logged and
        reported as ``False``.
    """
    try:
        source = load_image(input_path, max_side)
        h, w = source.shape[:2]
        grid = convert(source, (w, h), options)
        save_grid_png(grid, output_path, export_scale)
    except (OSError, ValueError) as exc:
        logger.error("Error processing %s: %s", input_path, exc)
        return False
    return True


def _positive(value: float) -> float:
    if value <= 0:
        msg = "must be greater than 0"
        raise typer.BadParameter(msg)
    return value


# Defaults come from PixelGridConfig - single source of truth
_DEFAULTS = PixelGridConfig()


@app.command()
def main(
    input_path: Path = typer.Option(
        ..., "--input", "-i", help="Source image or folder of images",
    ),
    output: Path = typer.Option(
        _DEFAULTS.output, "--output", "-o",
        help="Output image, or folder for batch processing",
    ),
    grid_width: int = typer.Option(
        _DEFAULTS.grid_width, "--gridWidth", "--grid-width", "-w",
        min=1, help="Grid width in cells",
    ),
    grid_height: int = typer.Option(
        _DEFAULTS.grid_height, "--gridHeight", "--grid-height", "-h",
        min=1, help="Grid height in cells",
    ),
    method: Method = typer.Option(
        _DEFAULTS.method, "--method", "-m", help="Colour reduction method",
    ),
    scale: float = typer.Option(
        _DEFAULTS.image_scale, "--scale", "-s",
        callback=_positive, help="Source image scale (zoom)",
    ),
    offset_x: float = typer.Option(
        _DEFAULTS.offset_x, "--offsetX", "--offset-x", "-x", help="Horizontal offset",
    ),
    offset_y: float = typer.Option(
        _DEFAULTS.offset_y, "--offsetY", "--offset-y", "-y", help="Vertical offset",
    ),
    export_scale: int = typer.Option(
        _DEFAULTS.export_scale, "--exportScale", "--export-scale",
        min=1, help="Output pixels per grid cell",
    ),
    canvas_width: float | None = typer.Option(
        None, "--canvasWidth", "--canvas-width",
        help="Editor canvas width (default: gridWidth x 4)",
    ),
    canvas_height: float | None = typer.Option(
        None, "--canvasHeight", "--canvas-height",
        help="Editor canvas height (default: gridHeight x 4)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Convert INPUT to pixel art; a folder is processed image by image."""
    _setup_logging(verbose)

    if not input_path.exists():
        console.print(f"[red]Error:[/red] {input_path} does not exist")
        raise typer.Exit(1)

    options = ConversionOptions(
        grid_width=grid_width,
        grid_height=grid_height,
        method=method,
        offset_x=offset_x,
        offset_y=offset_y,
        image_scale=scale,
        canvas_width=canvas_width or grid_width * _DEFAULTS.canvas_cell_size,
        canvas_height=canvas_height or grid_height * _DEFAULTS.canvas_cell_size,
    )
    logger.debug("Options: %s", options)

    if input_path.is_dir():
        _run_batch(input_path, output, options, export_scale)
    else:
        _run_single(input_path, output, options, export_scale)


def _run_batch(
    input_dir: Path,
    output_dir: Path,
    options: ConversionOptions,
    export_scale: int,
) -> None:
    images = _collect_images(input_dir, _DEFAULTS.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No image files found in {input_dir}/[/yellow]\n")
        raise typer.Exit(0)

    output_dir.mkdir(parents=True, exist_ok=True)

    console.print(Panel.fit(
        f"[bold]PIXEL GRID[/bold]  batch: {input_dir}\n"
        f"Grid: {options.grid_width}x{options.grid_height}  |  "
        f"Method: {options.method.value}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    success = 0
    failed = 0
    for idx, img_path in enumerate(images, 1):
        out_path = output_dir / f"{img_path.stem}_pixel.png"
        t0 = time.perf_counter()
        ok = process_image(img_path, out_path, options, export_scale, _DEFAULTS.max_side)
        elapsed = time.perf_counter() - t0
        if ok:
            success += 1
            console.print(
                f"[{idx}/{len(images)}] {img_path.name}  [green]✓[/green]"
                f"  [dim]{out_path.name}  time={elapsed:.1f}s[/dim]"
            )
        else:
            failed += 1
            console.print(f"[{idx}/{len(images)}] {img_path.name}  [red]✗[/red]")

    summary = f"[bold green]BATCH COMPLETE[/bold green]\nSuccess: {success}"
    if failed:
        summary += f"\n[red]Failed: {failed}[/red]"
    summary += f"\nOutput folder: [bold]{output_dir}/[/bold]"
    console.print(Panel.fit(summary, border_style="green"))


def _run_single(
    input_path: Path,
    output: Path,
    options: ConversionOptions,
    export_scale: int,
) -> None:
    # A suffix-less output is a folder
    if not output.suffix:
        output = output / f"{input_path.stem}_pixel.png"
    output.parent.mkdir(parents=True, exist_ok=True)

    if not process_image(input_path, output, options, export_scale, _DEFAULTS.max_side):
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]{options.grid_width}x{options.grid_height} grid, "
        f"{options.method.value}, x{export_scale}[/dim]"
    )


if __name__ == "__main__":
    app()
