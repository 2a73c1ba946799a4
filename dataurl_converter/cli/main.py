"""
Main CLI Application
Convert image files to data URLs from the terminal
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dataurl_converter import __version__
from dataurl_converter.config import settings
from dataurl_converter.core.constants import DEFAULT_QUALITY
from dataurl_converter.core.conversion.formats import (
    clamp_canvas_mime,
    is_image_mime,
    is_lossy_mime,
    resolve_target_mime,
)
from dataurl_converter.core.exceptions import ImageConverterError
from dataurl_converter.models.conversion import (
    ConvertOptions,
    ConvertResult,
    FitMode,
    ResizeOptions,
    SourceFile,
    TargetFormat,
)
from dataurl_converter.services.conversion_service import convert_file
from dataurl_converter.utils.logging import setup_logging

app = typer.Typer(
    name="dataurl-converter",
    help="Convert images to data URLs, with optional resize and re-encode",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)

# Payloads go to stdout; everything meant for humans goes to stderr
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{settings.app_name} {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level")
    ] = settings.log_level,
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Render logs as JSON")
    ] = settings.json_logs,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Data URL converter."""
    setup_logging(
        log_level=log_level,
        json_logs=json_logs,
        enable_file_logging=settings.logging_enabled,
        log_dir=settings.log_dir,
        max_log_size_mb=settings.max_log_size_mb,
        backup_count=settings.log_backup_count,
    )


def _summary_table(result: ConvertResult) -> Table:
    table = Table(title="Conversion Result", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("File", result.file_name or "-")
    table.add_row("Type", result.mime)
    table.add_row("Size", f"{result.size_bytes:,} bytes")
    if result.rendered:
        table.add_row("Dimensions", f"{result.width} x {result.height}")
    else:
        table.add_row("Dimensions", "unchanged (passthrough)")
    return table


@app.command()
def convert(
    input_path: Annotated[
        Path,
        typer.Argument(help="Input image file", exists=True, dir_okay=False),
    ],
    target: Annotated[
        Optional[TargetFormat],
        typer.Option("--to", "-t", help="Target format; omit to pass through"),
    ] = None,
    quality: Annotated[
        Optional[float],
        typer.Option(
            "--quality", "-q", min=0.1, max=1.0, help="Quality for jpeg/webp (0.1-1.0)"
        ),
    ] = None,
    max_width: Annotated[
        Optional[int], typer.Option("--max-width", min=1, help="Maximum width")
    ] = None,
    max_height: Annotated[
        Optional[int], typer.Option("--max-height", min=1, help="Maximum height")
    ] = None,
    fit: Annotated[
        FitMode, typer.Option("--fit", help="contain scales down, cover crops")
    ] = FitMode.CONTAIN,
    background: Annotated[
        Optional[str],
        typer.Option("--background", help="Background colour for jpeg output"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the decoded payload to this file, or into this directory"),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the full result as JSON")
    ] = False,
) -> None:
    """
    Convert an image file to a data URL

    Examples:
      dataurl-converter convert logo.svg
      dataurl-converter convert photo.png --to jpeg -q 0.8 --max-width 1024
      dataurl-converter convert banner.jpg --to webp --max-width 600 --max-height 200 --fit cover -o banner.webp
    """
    try:
        resize = None
        if max_width is not None or max_height is not None:
            resize = ResizeOptions(max_width=max_width, max_height=max_height, fit=fit)
        options = ConvertOptions(
            target_format=target,
            quality=quality,
            resize=resize,
            background=background,
        )
    except ValidationError as e:
        console.print(f"[red]Error: Invalid options: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(2)

    source = SourceFile.from_path(input_path)
    try:
        result = asyncio.run(convert_file(source, options))
    except ImageConverterError as e:
        console.print(f"[red]Error ({e.error_code}): {e.message}[/red]")
        raise typer.Exit(1)

    if output is not None:
        if output.is_dir():
            output = output / result.suggested_file_name()
        output.write_bytes(result.to_bytes())
        if not as_json:
            console.print(f"[green]Saved {result.size_bytes:,} bytes to {output}[/green]")

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    elif output is None:
        typer.echo(result.data_url)

    if not as_json:
        console.print(_summary_table(result))


@app.command()
def formats() -> None:
    """List target formats and the media type each one produces."""
    table = Table(title="Target Formats", show_header=True)
    table.add_column("Format", style="cyan")
    table.add_column("Requested Type", style="yellow")
    table.add_column("Rendered As", style="green")
    table.add_column("Quality", style="dim")

    for target in TargetFormat:
        requested = resolve_target_mime("", target)
        if is_image_mime(requested):
            rendered = clamp_canvas_mime(requested)
        else:
            rendered = "source type"
            requested = "source type"
        lossy = is_lossy_mime(rendered)
        table.add_row(
            target.value,
            requested,
            rendered,
            f"default {DEFAULT_QUALITY}" if lossy else "-",
        )

    console.print(table)


if __name__ == "__main__":
    app()
