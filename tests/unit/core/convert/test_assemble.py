"""Unit tests for core/convert/assemble.py"""

from docshift.core.convert.assemble import assemble
from docshift.core.models import PADDING, BlockKind, ListKind, RichDocument, TextRun
from docshift.core.parse import parse_markup


def test_empty_tree_yields_padding_paragraph():
    """Zero top-level nodes produce exactly one padding paragraph."""
    doc = assemble([])
    assert isinstance(doc, RichDocument)
    assert len(doc.blocks) == 1
    assert doc.blocks[0].kind == BlockKind.paragraph
    assert doc.blocks[0].runs == (TextRun(PADDING),)


def test_whitespace_only_tree_yields_padding_paragraph():
    """A tree that produces no blocks still yields a non-empty document."""
    doc = assemble(parse_markup("\n\n<custom></custom>\n"))
    assert [b.kind for b in doc.blocks] == [BlockKind.paragraph]


def test_order_heading_paragraph_list(markup):
    """[heading, paragraph, list] keeps its order; list items follow the paragraph."""
    doc = assemble(markup("# Title\n\nBody text.\n\n- a\n- b\n"))
    assert [b.kind for b in doc.blocks] == [
        BlockKind.heading, BlockKind.paragraph, BlockKind.list_item, BlockKind.list_item,
    ]
    assert doc.blocks[2].list_kind == ListKind.unordered


def test_every_block_has_content(sample_nodes):
    """No block in the assembled document is structurally empty."""
    doc = assemble(sample_nodes)
    for block in doc.blocks:
        assert block.runs or block.text


def test_title_carried():
    """The optional title is stored on the document."""
    assert assemble([], title="Notes").title == "Notes"


def test_repeated_assembly_is_independent(markup):
    """Assembling the same tree twice gives equal documents."""
    nodes = markup("1. one\n   - two\n")
    assert assemble(nodes) == assemble(nodes)
