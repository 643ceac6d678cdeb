"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from docshift.config import Settings, load_config
from docshift.core.errors import ConversionError, UnsupportedConversionError
from docshift.core.image import compress_image, image_dimensions, resize_image
from docshift.core.parse import discover_files
from docshift.core.pipeline import (
    SUPPORTED_EXTENSIONS,
    convert_file,
    file_category,
    format_file_size,
    supported_conversions,
)
from docshift.core.text import analyze_text, convert_line_endings, decode_text, remove_bom


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def _write(out_dir: Path, name: str, content: bytes) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    dest = out_dir / name
    dest.write_bytes(content)
    return dest


def configure_logging(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level (DEBUG, INFO, ...)")] = None,
    ):
    """Local document conversion between markdown, plain text and .docx."""
    settings = _settings(overrides={"log_level": log_level.upper() if log_level else None})
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def convert_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to convert")],
    to: Annotated[str, typer.Option("--to", help="Target extension: docx, md, txt, or an image format")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    encoding: Annotated[Optional[str], typer.Option("--encoding", help="Target encoding for txt -> txt")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    max_width: Annotated[Optional[int], typer.Option("--max-width", help="Shrink images to this width")] = None,
    max_height: Annotated[Optional[int], typer.Option("--max-height", help="Shrink images to this height")] = None,
    quality: Annotated[Optional[int], typer.Option("--quality", help="jpg / webp quality, 1-100")] = None,
    ):
    """Convert a file, or every supported file under a directory."""
    settings = _settings(overrides={
        "output_dir": out,
        "text_encoding": encoding,
        "parser_config": parser,
        "image_max_width": max_width,
        "image_max_height": max_height,
        "image_quality": quality,
    })
    source = Path(path)
    if not source.exists():
        _fail(f"Path not found: {source}")
    files = discover_files(source, SUPPORTED_EXTENSIONS)
    if not files:
        _fail(f"No convertible files found under {source}")

    target = to.lstrip(".").lower()
    output_dir = Path(settings.output_dir)
    out_root = output_dir.resolve()
    converted = 0
    for f in files:
        # earlier output written inside the source tree
        if source.is_dir() and out_root != source.resolve() and f.resolve().is_relative_to(out_root):
            continue
        try:
            result = convert_file(f, target, settings)
        except UnsupportedConversionError as e:
            if len(files) == 1:
                _fail(str(e))
            typer.echo(f"  skipped: {f} ({e})")
            continue
        except ConversionError as e:
            _fail(str(e))
        suffix = ".converted" if f.suffix.lower() == f".{target}" else ""
        dest = _write(output_dir, f"{f.stem}{suffix}.{result.extension}", result.content)
        typer.echo(f"  {f} -> {dest}")
        converted += 1
    typer.echo(f"Converted {converted} file(s) to {output_dir}/")


def formats_cmd(
    path: Annotated[str, typer.Argument(help="File name to look up")],
    ):
    """List the formats a file can be converted to."""
    name = Path(path).name
    targets = supported_conversions(name)
    if not targets:
        typer.echo(f"No conversions available for {name} ({file_category(name)}).")
        raise typer.Exit(1)
    for t in targets:
        typer.echo(t)


def analyze_cmd(
    path: Annotated[Path, typer.Argument(help="Text file to analyze")],
    ):
    """Print character, word, line and paragraph counts for a text file."""
    try:
        stats = analyze_text(_read(path))
    except ValueError as e:
        _fail(f"Cannot decode {path}", e)
    typer.echo(f"Characters:              {stats.characters}")
    typer.echo(f"Characters (no spaces):  {stats.characters_no_spaces}")
    typer.echo(f"Words:                   {stats.words}")
    typer.echo(f"Lines:                   {stats.lines}")
    typer.echo(f"Paragraphs:              {stats.paragraphs}")
    typer.echo(f"Encoding:                {stats.encoding}")
    typer.echo(f"Size:                    {format_file_size(stats.size)}")


def line_endings_cmd(
    path: Annotated[Path, typer.Argument(help="Text file to rewrite")],
    style: Annotated[str, typer.Option("--style", help="lf, crlf or cr")] = "lf",
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Rewrite every line terminator in a text file."""
    settings = _settings(overrides={"output_dir": out})
    data = _read(path)
    try:
        text = convert_line_endings(decode_text(data), style.lower())
    except ValueError as e:
        _fail(str(e))
    dest = _write(Path(settings.output_dir), path.name, text.encode("utf-8"))
    typer.echo(f"  {path} -> {dest}")


def strip_bom_cmd(
    path: Annotated[Path, typer.Argument(help="Text file to strip")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Remove a leading UTF-8 / UTF-16 byte order mark."""
    settings = _settings(overrides={"output_dir": out})
    data = _read(path)
    stripped = remove_bom(data)
    dest = _write(Path(settings.output_dir), path.name, stripped)
    typer.echo(f"  {path} -> {dest} ({len(data) - len(stripped)} byte(s) removed)")


def resize_cmd(
    path: Annotated[Path, typer.Argument(help="Image to resize")],
    width: Annotated[Optional[int], typer.Option("--width", min=1, help="Target width in pixels")] = None,
    height: Annotated[Optional[int], typer.Option("--height", min=1, help="Target height in pixels")] = None,
    keep_aspect: Annotated[bool, typer.Option("--keep-aspect/--stretch", help="Preserve the aspect ratio")] = True,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Resize an image; one dimension derives the other unless --stretch is given."""
    settings = _settings(overrides={"output_dir": out})
    if not width and not height:
        _fail("Give --width, --height or both")
    try:
        result = resize_image(_read(path), width, height, keep_aspect, settings.image_quality)
    except (OSError, ValueError) as e:
        _fail(f"Cannot resize {path}", e)
    dest = _write(Path(settings.output_dir), f"{path.stem}.resized.{result.extension}", result.content)
    typer.echo(f"  {path} -> {dest}")


def compress_cmd(
    path: Annotated[Path, typer.Argument(help="Image to compress")],
    max_size_mb: Annotated[float, typer.Option("--max-size-mb", min=0.01, help="Target size in megabytes")] = 1.0,
    max_dimension: Annotated[int, typer.Option("--max-dimension", min=1, help="Longest side in pixels")] = 1920,
    quality: Annotated[int, typer.Option("--quality", min=1, max=100, help="Starting jpg / webp quality")] = 85,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Shrink an image's dimensions and byte size."""
    settings = _settings(overrides={"output_dir": out})
    data = _read(path)
    try:
        result = compress_image(data, max_size_mb, max_dimension, quality)
    except (OSError, ValueError) as e:
        _fail(f"Cannot compress {path}", e)
    dest = _write(Path(settings.output_dir), f"{path.stem}.compressed.{result.extension}", result.content)
    typer.echo(f"  {path} -> {dest} ({format_file_size(len(data))} -> {format_file_size(len(result.content))})")


def dimensions_cmd(
    path: Annotated[Path, typer.Argument(help="Image to inspect")],
    ):
    """Print an image's width, height and format."""
    try:
        size = image_dimensions(_read(path))
    except OSError as e:
        _fail(f"Cannot read image {path}", e)
    typer.echo(f"{size.width}x{size.height} {size.format}")
