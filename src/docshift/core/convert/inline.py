"""Inline content -> flat list of formatted runs"""

from docshift.core.models import Formatting, LineBreak, MarkupNode, NodeKind, Run, TextRun


LINK_COLOR = "0000FF"

FLAG_MAP: dict[NodeKind, dict] = {
    NodeKind.strong:    {"bold": True},
    NodeKind.emphasis:  {"italic": True},
    NodeKind.underline: {"underline": True},
    NodeKind.strike:    {"strike": True},
    NodeKind.code:      {"code": True},
    NodeKind.link:      {"underline": True, "color": LINK_COLOR},
}


def accumulate(node: MarkupNode, formatting: Formatting = Formatting()) -> list[Run]:
    """Return the runs for node's subtree in left-to-right order.

    Emphasis-family elements turn their flag on for the whole subtree; any
    other element passes its children through with the context unchanged, so
    unknown inline tags never lose their text.
    """
    if node.is_text:
        if not node.text:
            return []
        # whitespace-only text still separates adjacent words
        return [TextRun(node.text, formatting)]

    if node.kind == NodeKind.line_break:
        return [LineBreak()]

    flags = FLAG_MAP.get(node.kind)
    if flags:
        formatting = formatting.merge(**flags)
    return accumulate_children(node.children, formatting)


def accumulate_children(children, formatting: Formatting = Formatting()) -> list[Run]:
    """Concatenate accumulate() over a sequence of sibling nodes."""
    runs: list[Run] = []
    for child in children:
        runs.extend(accumulate(child, formatting))
    return runs


def has_text(runs: list[Run]) -> bool:
    """True if any text run carries non-whitespace content."""
    return any(isinstance(r, TextRun) and r.text.strip() for r in runs)
