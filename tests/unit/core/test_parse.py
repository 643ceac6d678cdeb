"""Unit tests for core/parse.py"""

import sys

import pytest

from docshift.core.models import NodeKind
from docshift.core.parse import discover_files, parse_markup, render_html, strip_frontmatter


def test_strip_frontmatter_with_yaml():
    """strip_frontmatter extracts YAML header and returns body."""
    text = "---\ntitle: Hello\n---\n# Body\n"
    fm, body = strip_frontmatter(text)
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"


def test_strip_frontmatter_no_frontmatter():
    """strip_frontmatter returns empty dict and full text when no header."""
    text = "# No frontmatter\n"
    fm, body = strip_frontmatter(text)
    assert fm == {}
    assert body == text


def test_strip_frontmatter_not_a_mapping():
    """A frontmatter block that is not a mapping is rejected."""
    with pytest.raises(ValueError, match="expected a mapping"):
        strip_frontmatter("---\n- a\n- b\n---\nbody\n")


def test_render_html_gfm_table():
    """The default gfm-like preset renders pipe tables."""
    html = render_html("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<table>" in html


def test_parse_markup_kinds():
    """Tags map to their NodeKind; heading level comes from the tag."""
    nodes = parse_markup("<h3>T</h3><p>x</p><ul><li>i</li></ul><hr><custom>c</custom>")
    assert [n.kind for n in nodes] == [
        NodeKind.heading, NodeKind.paragraph, NodeKind.bullet_list, NodeKind.rule, NodeKind.other,
    ]
    assert nodes[0].level == 3
    assert nodes[4].tag == "custom"


@pytest.mark.parametrize("tag,expected", [
    ("b",      NodeKind.strong),
    ("strong", NodeKind.strong),
    ("i",      NodeKind.emphasis),
    ("em",     NodeKind.emphasis),
    ("u",      NodeKind.underline),
    ("del",    NodeKind.strike),
    ("s",      NodeKind.strike),
    ("strike", NodeKind.strike),
    ("code",   NodeKind.code),
    ("a",      NodeKind.link),
])
def test_parse_markup_inline_kinds(tag, expected):
    """Inline emphasis-family tags map to their NodeKind."""
    para = parse_markup(f"<p><{tag}>x</{tag}></p>")[0]
    assert para.children[0].kind == expected


def test_parse_markup_keeps_text_and_skips_comments():
    """Text nodes keep their raw content; HTML comments are dropped."""
    nodes = parse_markup("hello <!-- note --><p>world</p>")
    assert [n.kind for n in nodes] == [NodeKind.text, NodeKind.paragraph]
    assert nodes[0].text == "hello "


def test_parse_markup_void_break():
    """<br> is a childless line_break node between its text siblings."""
    para = parse_markup("<p>a<br>b</p>")[0]
    assert [c.kind for c in para.children] == [NodeKind.text, NodeKind.line_break, NodeKind.text]


def test_parse_markup_deep_nesting():
    """Nesting deeper than the recursion limit still parses into a full tree."""
    depth = sys.getrecursionlimit() + 500
    nodes = parse_markup("<div>" * depth + "x" + "</div>" * depth)
    node, levels = nodes[0], 1
    while not node.children[0].is_text:
        node = node.children[0]
        levels += 1
    assert levels == depth
    assert node.children[0].text == "x"


def test_text_content_and_find():
    """text_content concatenates descendants; find returns the first descendant of a kind."""
    pre = parse_markup("<pre><code>a\nb</code></pre>")[0]
    assert pre.text_content() == "a\nb"
    assert pre.find(NodeKind.code).tag == "code"
    assert pre.find(NodeKind.table) is None


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a matching file path."""
    f = tmp_path / "doc.md"
    f.write_text("# Hello")
    assert discover_files(f, {".md"}) == [f]


def test_discover_files_skips_other_suffixes(tmp_path):
    """discover_files ignores files whose suffix is not requested."""
    (tmp_path / "photo.png").write_bytes(b"")
    assert discover_files(tmp_path, {".md", ".txt"}) == []


def test_discover_files_dir(tmp_path):
    """discover_files finds matching files recursively, sorted."""
    (tmp_path / "a.md").write_text("a")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "b.TXT").write_text("b")
    files = discover_files(tmp_path, {".md", ".txt"})
    assert files == [tmp_path / "a.md", sub / "b.TXT"]
