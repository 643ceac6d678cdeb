"""Conversion entry points and extension-pair dispatch"""

import logging
from pathlib import Path
from typing import Callable, Optional

from docshift.config import Settings
from docshift.core.convert.assemble import assemble
from docshift.core.errors import ConversionError, UnsupportedConversionError
from docshift.core.export.writer import DocxStyle, write_docx
from docshift.core.extract import docx_markdown, docx_text
from docshift.core.image import IMAGE_CONVERSIONS, IMAGE_FORMATS, IMAGE_MEDIA_TYPES, convert_image
from docshift.core.models import PADDING, BlockKind, ConversionResult, DocBlock, RichDocument, TextRun
from docshift.core.parse import parse_markup, render_html, strip_frontmatter
from docshift.core.text import convert_encoding, decode_text, markdown_to_txt, txt_to_markdown


logger = logging.getLogger(__name__)

LABELS = {"md": "Markdown", "docx": "DOCX", "txt": "TXT", **{ext: ext.upper() for ext in IMAGE_FORMATS}}
MEDIA_TYPES = {
    "md":   "text/markdown",
    "txt":  "text/plain",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    **IMAGE_MEDIA_TYPES,
}
DOCUMENT_EXTENSIONS = {".md", ".txt", ".docx"}
IMAGE_EXTENSIONS = {f".{ext}" for ext in IMAGE_FORMATS}
SUPPORTED_EXTENSIONS = DOCUMENT_EXTENSIONS | IMAGE_EXTENSIONS


def markdown_to_docx(data: bytes, settings: Settings) -> bytes:
    """Markdown -> markup tree -> RichDocument -> .docx bytes."""
    frontmatter, body = strip_frontmatter(decode_text(data))
    nodes = parse_markup(render_html(body, settings.parser_config))
    title = frontmatter.get("title")
    document = assemble(nodes, title=str(title) if title is not None else None)
    logger.debug("Assembled %d block(s) from %d top-level node(s)", len(document.blocks), len(nodes))
    return write_docx(document, DocxStyle.from_settings(settings))


def txt_to_docx(data: bytes, settings: Settings) -> bytes:
    """One paragraph per source line; empty lines keep their vertical space."""
    lines = decode_text(data).split("\n")
    blocks = tuple(
        DocBlock(BlockKind.paragraph, (TextRun(line.rstrip("\r") or PADDING),))
        for line in lines
    )
    return write_docx(RichDocument(blocks=blocks), DocxStyle.from_settings(settings))


def _markdown_to_txt(data: bytes, settings: Settings) -> bytes:
    return markdown_to_txt(decode_text(data)).encode("utf-8")


def _txt_to_markdown(data: bytes, settings: Settings) -> bytes:
    return txt_to_markdown(decode_text(data)).encode("utf-8")


def _docx_to_markdown(data: bytes, settings: Settings) -> bytes:
    return docx_markdown(data).encode("utf-8")


def _docx_to_txt(data: bytes, settings: Settings) -> bytes:
    return docx_text(data).encode("utf-8")


def _txt_to_txt(data: bytes, settings: Settings) -> bytes:
    return convert_encoding(data, settings.text_encoding)


def _image_to(target: str) -> Callable[[bytes, Settings], bytes]:
    def _convert(data: bytes, settings: Settings) -> bytes:
        return convert_image(data, target, settings.image_max_width, settings.image_max_height, settings.image_quality)
    return _convert


CONVERTERS: dict[tuple[str, str], Callable[[bytes, Settings], bytes]] = {
    ("md", "docx"):  markdown_to_docx,
    ("md", "txt"):   _markdown_to_txt,
    ("txt", "docx"): txt_to_docx,
    ("txt", "md"):   _txt_to_markdown,
    ("txt", "txt"):  _txt_to_txt,
    ("docx", "md"):  _docx_to_markdown,
    ("docx", "txt"): _docx_to_txt,
}
CONVERTERS.update({
    (src, dst): _image_to(dst) for src, targets in IMAGE_CONVERSIONS.items() for dst in targets
})


def file_extension(name: str) -> str:
    return Path(name).suffix.lstrip(".").lower()


def _normalize(ext: str) -> str:
    return ext.lstrip(".").lower()


def _converter(source: str, target: str) -> Callable[[bytes, Settings], bytes]:
    fn = CONVERTERS.get((source, target))
    if fn is None:
        raise UnsupportedConversionError(source, target)
    return fn


def _run(source: str, target: str, load: Callable[[], bytes], settings: Optional[Settings]) -> ConversionResult:
    fn = _converter(source, target)
    settings = settings or Settings()
    src_label, dst_label = LABELS[source], LABELS[target]
    logger.info("Converting %s -> %s", src_label, dst_label)
    try:
        content = fn(load(), settings)
    except Exception as e:
        logger.error("Conversion %s -> %s failed: %s", src_label, dst_label, e)
        raise ConversionError(src_label, dst_label, e) from e
    return ConversionResult(content=content, extension=target, media_type=MEDIA_TYPES[target])


def convert_bytes(data: bytes, source: str, target: str, settings: Settings = None) -> ConversionResult:
    """Convert in-memory content between two extensions (e.g. 'md' -> 'docx')."""
    return _run(_normalize(source), _normalize(target), lambda: data, settings)


def convert_file(path: Path, target: str, settings: Settings = None) -> ConversionResult:
    """Read path and convert it to the target extension."""
    return _run(file_extension(path.name), _normalize(target), path.read_bytes, settings)


def supported_conversions(name: str) -> list[str]:
    """Target extensions available for a file name, in declaration order."""
    source = file_extension(name)
    return [dst for src, dst in CONVERTERS if src == source]


def is_supported(name: str) -> bool:
    return f".{file_extension(name)}" in SUPPORTED_EXTENSIONS


def file_category(name: str) -> str:
    ext = f".{file_extension(name)}"
    if ext in DOCUMENT_EXTENSIONS:
        return "document"
    if ext in IMAGE_EXTENSIONS:
        return "image"
    return "unknown"


def format_file_size(size: int) -> str:
    """Human-readable size, two decimals at most: 1536 -> '1.5 KB'."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value, i = float(size), 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    return f"{round(value, 2):g} {units[i]}"
