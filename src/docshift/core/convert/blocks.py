"""Markup node -> document block conversion"""

import logging
from dataclasses import replace
from typing import Callable

from docshift.core.convert.inline import accumulate_children, has_text
from docshift.core.convert.lists import LIST_KIND_MAP, ListNesting
from docshift.core.models import (
    PADDING,
    BlockKind,
    DocBlock,
    MarkupNode,
    NodeKind,
    Run,
    TextRun,
    padding_run,
)


logger = logging.getLogger(__name__)

RULE_TEXT = "_" * 50
TABLE_PLACEHOLDER = "[Table content - convert manually]"


def _padded(runs: list[Run]) -> tuple[Run, ...]:
    """Runs as a tuple, or the single padding run if there are none."""
    return tuple(runs) if runs else (padding_run(),)


def _trim(runs: list[Run]) -> list[Run]:
    """Drop whitespace at both ends of a run list (markup indentation between block tags)."""
    def blank(r: Run) -> bool:
        return isinstance(r, TextRun) and not r.text.strip()

    start, end = 0, len(runs)
    while start < end and blank(runs[start]):
        start += 1
    while end > start and blank(runs[end - 1]):
        end -= 1
    trimmed = runs[start:end]
    if trimmed and isinstance(trimmed[0], TextRun):
        trimmed[0] = replace(trimmed[0], text=trimmed[0].text.lstrip())
    if trimmed and isinstance(trimmed[-1], TextRun):
        trimmed[-1] = replace(trimmed[-1], text=trimmed[-1].text.rstrip())
    return trimmed


def _heading(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    runs = accumulate_children(node.children)
    return [DocBlock(BlockKind.heading, _padded(runs), level=node.level or 1)]


def _paragraph(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    return [DocBlock(BlockKind.paragraph, _padded(accumulate_children(node.children)))]


def _code_block(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    """One code line per source line, then a blank paragraph as separator.

    A single trailing line terminator does not produce an extra empty line.
    """
    source = node.find(NodeKind.code) or node
    lines = source.text_content().splitlines() or [""]
    blocks = [DocBlock(BlockKind.code_line, text=line or PADDING) for line in lines]
    blocks.append(DocBlock(BlockKind.paragraph, (padding_run(),)))
    return blocks


def _blockquote(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    """One quote block per block-level child; bare inline content is grouped into its own quote.

    Any child without a block rule (text, emphasis, <span>, <kbd>, ...) counts as inline.
    """
    blocks: list[DocBlock] = []
    pending: list[MarkupNode] = []

    def _flush() -> None:
        runs = accumulate_children(pending)
        pending.clear()
        if has_text(runs):
            blocks.append(DocBlock(BlockKind.quote, tuple(_trim(runs))))

    for child in node.children:
        if child.kind == NodeKind.text or child.kind not in BLOCK_HANDLERS:
            pending.append(child)
            continue
        _flush()
        runs = _trim(accumulate_children(child.children))
        if runs:
            blocks.append(DocBlock(BlockKind.quote, tuple(runs)))
    _flush()
    return blocks


def _list(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    """One list item block per <li>; lists nested in an item follow it one level deeper."""
    inner = nesting.enter(LIST_KIND_MAP[node.kind])
    blocks: list[DocBlock] = []

    for item in node.children:
        if item.kind != NodeKind.list_item:
            continue
        inline = [c for c in item.children if c.kind not in LIST_KIND_MAP]
        runs = _trim(accumulate_children(inline))
        blocks.append(DocBlock(
            BlockKind.list_item,
            _padded(runs),
            level=inner.level,
            list_kind=inner.kind,
        ))
        for sub in item.children:
            if sub.kind in LIST_KIND_MAP:
                blocks.extend(_list(sub, inner))

    return blocks


def _rule(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    return [DocBlock(BlockKind.rule, (TextRun(RULE_TEXT),))]


def _container(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    blocks: list[DocBlock] = []
    for child in node.children:
        blocks.extend(dispatch(child, nesting))
    return blocks


def _table(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    return [DocBlock(BlockKind.table, (TextRun(TABLE_PLACEHOLDER),))]


def _bare_text(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    text = node.text.strip()
    if not text:
        return []
    return [DocBlock(BlockKind.paragraph, (TextRun(text),))]


def _fallback(node: MarkupNode, nesting: ListNesting) -> list[DocBlock]:
    """Unrecognized element: keep its inline text as a plain paragraph."""
    if not node.children:
        return []
    logger.debug("No block rule for <%s>; treating as paragraph", node.tag or node.kind.value)
    runs = accumulate_children(node.children)
    if not runs:
        return []
    return [DocBlock(BlockKind.paragraph, tuple(runs))]


BLOCK_HANDLERS: dict[NodeKind, Callable[[MarkupNode, ListNesting], list[DocBlock]]] = {
    NodeKind.heading:      _heading,
    NodeKind.paragraph:    _paragraph,
    NodeKind.code_block:   _code_block,
    NodeKind.blockquote:   _blockquote,
    NodeKind.bullet_list:  _list,
    NodeKind.ordered_list: _list,
    NodeKind.rule:         _rule,
    NodeKind.container:    _container,
    NodeKind.table:        _table,
    NodeKind.text:         _bare_text,
}


def dispatch(node: MarkupNode, nesting: ListNesting = ListNesting()) -> list[DocBlock]:
    """Convert one markup node into zero or more document blocks, in document order."""
    return BLOCK_HANDLERS.get(node.kind, _fallback)(node, nesting)
