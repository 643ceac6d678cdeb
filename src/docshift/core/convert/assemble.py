"""Top-level markup nodes -> RichDocument"""

from typing import Iterable, Optional

from docshift.core.convert.blocks import dispatch
from docshift.core.models import BlockKind, DocBlock, MarkupNode, RichDocument, padding_run


def assemble(nodes: Iterable[MarkupNode], title: Optional[str] = None) -> RichDocument:
    """Convert nodes in order; an empty result becomes a single padding paragraph."""
    blocks: list[DocBlock] = []
    for node in nodes:
        blocks.extend(dispatch(node))

    if not blocks:
        blocks.append(DocBlock(BlockKind.paragraph, (padding_run(),)))
    return RichDocument(blocks=tuple(blocks), title=title)
