"""Existing .docx -> plain text / markdown"""

import io
import re

import docx
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph
from docx.text.run import Run


MONOSPACE_FONTS = {"courier new", "courier", "consolas", "menlo", "monaco", "source code pro"}
_HEADING_RE = re.compile(r"^Heading (\d)$")
_LIST_LEVEL_RE = re.compile(r"(\d)$")


def _open(data: bytes):
    return docx.Document(io.BytesIO(data))


def docx_text(data: bytes) -> str:
    """Raw text of every body paragraph, one blank line between paragraphs."""
    return "\n\n".join(p.text for p in _open(data).paragraphs)


def _run_markdown(run: Run) -> str:
    text = run.text
    if not text.strip():
        return text
    font = (run.font.name or "").lower()
    if font in MONOSPACE_FONTS:
        return f"`{text}`"
    if run.font.strike:
        text = f"~~{text}~~"
    if run.italic:
        text = f"*{text}*"
    if run.bold:
        text = f"**{text}**"
    return text


def _inline_markdown(paragraph: Paragraph) -> str:
    parts = []
    for item in paragraph.iter_inner_content():
        if isinstance(item, Hyperlink):
            label = "".join(_run_markdown(r) for r in item.runs).strip()
            parts.append(f"[{label}]({item.url})" if label and item.url else label)
        else:
            parts.append(_run_markdown(item))
    return "".join(parts).strip()


def _list_depth(style_name: str) -> int:
    m = _LIST_LEVEL_RE.search(style_name)
    return int(m.group(1)) - 1 if m else 0


def docx_markdown(data: bytes) -> str:
    """Map paragraph styles to markdown: headings, bullet/numbered lists, quotes, body text."""
    lines: list[str] = []
    for p in _open(data).paragraphs:
        name = p.style.name if p.style is not None else ""
        text = _inline_markdown(p)
        if not text:
            continue
        if m := _HEADING_RE.match(name):
            lines.append(f"{'#' * min(int(m.group(1)), 6)} {text}")
        elif name.startswith("List Bullet"):
            lines.append(f"{'  ' * _list_depth(name)}- {text}")
        elif name.startswith("List Number"):
            lines.append(f"{'  ' * _list_depth(name)}1. {text}")
        elif name in ("Quote", "Intense Quote"):
            lines.append(f"> {text}")
        elif name == "Title":
            lines.append(f"# {text}")
        else:
            lines.append(text)

    out = []
    for i, line in enumerate(lines):
        # list items stay tight; every other pair of lines gets a blank separator
        if i and not (_is_item(line) and _is_item(lines[i - 1])):
            out.append("")
        out.append(line)
    return "\n".join(out) + "\n" if out else ""


def _is_item(line: str) -> bool:
    stripped = line.lstrip()
    return stripped.startswith("- ") or stripped.startswith("1. ")
