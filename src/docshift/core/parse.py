"""File discovery, frontmatter extraction, and markdown -> markup tree rendering"""

import re
from pathlib import Path
from typing import Any

import yaml
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction
from markdown_it import MarkdownIt

from docshift.core.models import MarkupNode, NodeKind


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
HEADING_TAGS = {f'h{i}': i for i in range(1, 7)}

TAG_KIND_MAP: dict[str, NodeKind] = {
    'p':          NodeKind.paragraph,
    'ul':         NodeKind.bullet_list,
    'ol':         NodeKind.ordered_list,
    'li':         NodeKind.list_item,
    'blockquote': NodeKind.blockquote,
    'pre':        NodeKind.code_block,
    'strong':     NodeKind.strong,
    'b':          NodeKind.strong,
    'em':         NodeKind.emphasis,
    'i':          NodeKind.emphasis,
    'u':          NodeKind.underline,
    'del':        NodeKind.strike,
    's':          NodeKind.strike,
    'strike':     NodeKind.strike,
    'code':       NodeKind.code,
    'a':          NodeKind.link,
    'br':         NodeKind.line_break,
    'hr':         NodeKind.rule,
    'div':        NodeKind.container,
    'section':    NodeKind.container,
    'article':    NodeKind.container,
    'main':       NodeKind.container,
    'table':      NodeKind.table,
}

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def render_html(markdown: str, parser_config: str = 'gfm-like') -> str:
    """Render markdown source to HTML with markdown-it."""
    return _make_parser(parser_config).render(markdown)


def _string_node(element) -> MarkupNode | None:
    if isinstance(element, _SKIPPED_STRINGS) or not isinstance(element, NavigableString):
        return None
    return MarkupNode(kind=NodeKind.text, text=str(element))


def _element_node(tag: str, children: tuple[MarkupNode, ...]) -> MarkupNode:
    if tag in HEADING_TAGS:
        return MarkupNode(kind=NodeKind.heading, tag=tag, children=children, level=HEADING_TAGS[tag])
    return MarkupNode(kind=TAG_KIND_MAP.get(tag, NodeKind.other), tag=tag, children=children)


def _to_node(element) -> MarkupNode | None:
    """Convert one soup element, walking descendants with an explicit stack.

    Raw HTML can nest deeper than the interpreter recursion limit.
    """
    if not isinstance(element, Tag):
        return _string_node(element)

    # (tag name, child iterator, converted children)
    frames = [(element.name.lower(), iter(element.children), [])]
    while True:
        tag, children, built = frames[-1]
        child = next(children, None)
        if child is None:
            frames.pop()
            node = _element_node(tag, tuple(built))
            if not frames:
                return node
            frames[-1][2].append(node)
        elif isinstance(child, Tag):
            frames.append((child.name.lower(), iter(child.children), []))
        else:
            node = _string_node(child)
            if node is not None:
                built.append(node)


def parse_markup(html: str) -> list[MarkupNode]:
    """Parse an HTML fragment into top-level MarkupNodes, in document order."""
    soup = BeautifulSoup(html, 'html.parser')
    return [n for n in (_to_node(c) for c in soup.children) if n is not None]


def discover_files(path: Path, extensions: set[str]) -> list[Path]:
    """Return sorted files with a matching suffix under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in extensions else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in extensions)
