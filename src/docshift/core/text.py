"""Plain-text utilities: encoding and BOM handling, line endings, stats, md <-> txt"""

import re

from docshift.core.models import TextStats


BOMS: list[tuple[bytes, str]] = [
    (b"\xef\xbb\xbf", "utf-8"),
    (b"\xff\xfe",     "utf-16le"),
    (b"\xfe\xff",     "utf-16be"),
]
ENCODINGS = {"utf-8", "utf-16le", "utf-16be"}
LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}

MD_TO_TXT_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^#{1,6}\s+", re.M), ""),          # headers
    (re.compile(r"\*\*(.+?)\*\*"),    r"\1"),        # bold
    (re.compile(r"\*(.+?)\*"),        r"\1"),        # italic
    (re.compile(r"\[(.+?)\]\(.+?\)"), r"\1"),        # links
    (re.compile(r"`(.+?)`"),          r"\1"),        # inline code
    (re.compile(r"^[-*+]\s+", re.M),  "• "),         # bullet lists
    (re.compile(r"^\d+\.\s+", re.M),  "• "),         # numbered lists
]


def detect_encoding(data: bytes) -> str:
    """Encoding from the byte order mark; utf-8 when there is none."""
    for bom, encoding in BOMS:
        if data.startswith(bom):
            return encoding
    return "utf-8"


def remove_bom(data: bytes) -> bytes:
    for bom, _ in BOMS:
        if data.startswith(bom):
            return data[len(bom):]
    return data


def decode_text(data: bytes) -> str:
    """Decode with the detected encoding, without the BOM."""
    return remove_bom(data).decode(detect_encoding(data))


def convert_encoding(data: bytes, target: str) -> bytes:
    """Re-encode text to utf-8, utf-16le or utf-16be (no BOM is written)."""
    target = target.lower()
    if target not in ENCODINGS:
        raise ValueError(f"Unsupported encoding: {target}")
    return decode_text(data).encode(target)


def convert_line_endings(text: str, style: str) -> str:
    """Normalize every line terminator to lf, crlf or cr."""
    if style not in LINE_ENDINGS:
        raise ValueError(f"Unsupported line ending format: {style}")
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.replace("\n", LINE_ENDINGS[style])


def analyze_text(data: bytes) -> TextStats:
    text = decode_text(data)
    return TextStats(
        characters=len(text),
        characters_no_spaces=len(re.sub(r"\s", "", text)),
        words=len(text.split()),
        lines=len(text.split("\n")),
        paragraphs=len([p for p in re.split(r"\n\s*\n", text) if p.strip()]),
        encoding=detect_encoding(data),
        size=len(data),
        size_kb=f"{len(data) / 1024:.2f}",
    )


def txt_to_markdown(text: str) -> str:
    """Paragraphs split on blank lines, trimmed, empty ones dropped."""
    paragraphs = (p.strip() for p in text.split("\n\n"))
    return "\n\n".join(p for p in paragraphs if p)


def markdown_to_txt(text: str) -> str:
    """Strip common markdown syntax, keeping link labels and turning list markers into bullets."""
    for pattern, repl in MD_TO_TXT_RULES:
        text = pattern.sub(repl, text)
    return text
