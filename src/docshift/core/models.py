"""Intermediate data models for the markup tree and the rich document"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel


PADDING = " "


class NodeKind(str, Enum):
    """Tag identity of a markup node, as seen by the conversion engine"""
    text = "text"
    heading = "heading"
    paragraph = "paragraph"
    bullet_list = "bullet_list"
    ordered_list = "ordered_list"
    list_item = "list_item"
    blockquote = "blockquote"
    code_block = "code_block"
    strong = "strong"
    emphasis = "emphasis"
    underline = "underline"
    strike = "strike"
    code = "code"
    link = "link"
    line_break = "line_break"
    rule = "rule"
    container = "container"
    table = "table"
    other = "other"


@dataclass(frozen=True)
class MarkupNode:
    """A read-only node of the rendered markup tree (element or text)."""
    kind:     NodeKind
    tag:      str = ""
    children: tuple["MarkupNode", ...] = ()
    text:     str = ""              # text nodes only
    level:    Optional[int] = None  # heading level (1-6); None otherwise

    @property
    def is_text(self) -> bool:
        return self.kind == NodeKind.text

    def text_content(self) -> str:
        """Concatenated text of this node and all its descendants."""
        if self.is_text:
            return self.text
        return "".join(c.text_content() for c in self.children)

    def find(self, kind: NodeKind) -> Optional["MarkupNode"]:
        """First descendant of the given kind in document order, else None."""
        for child in self.children:
            if child.kind == kind:
                return child
            found = child.find(kind)
            if found is not None:
                return found
        return None


@dataclass(frozen=True)
class Formatting:
    """Inline formatting context; a new one is derived at every inline element."""
    bold:      bool = False
    italic:    bool = False
    underline: bool = False
    strike:    bool = False
    code:      bool = False
    color:     Optional[str] = None    # hex RGB, e.g. '0000FF'

    def merge(self, **flags) -> "Formatting":
        """Return a copy with the given flags turned on (never off)."""
        on = {k: v for k, v in flags.items() if v}
        return replace(self, **on) if on else self


@dataclass(frozen=True)
class TextRun:
    text:       str
    formatting: Formatting = field(default_factory=Formatting)


@dataclass(frozen=True)
class LineBreak:
    """Explicit line break inside a block; carries no text."""


Run = Union[TextRun, LineBreak]


def padding_run() -> TextRun:
    return TextRun(PADDING)


class BlockKind(str, Enum):
    """Restrict the types of document blocks to a predefined set"""
    heading = "heading"
    paragraph = "paragraph"
    list_item = "list_item"
    code_line = "code_line"
    quote = "quote"
    rule = "rule"
    table = "table"


class ListKind(str, Enum):
    unordered = "unordered"
    ordered = "ordered"


@dataclass(frozen=True)
class DocBlock:
    """One structural unit of the rich document."""
    kind:      BlockKind
    runs:      tuple[Run, ...] = ()
    level:     Optional[int] = None         # heading level (1-6) or zero-based list level
    list_kind: Optional[ListKind] = None    # list items only
    text:      Optional[str] = None         # code lines only


@dataclass(frozen=True)
class RichDocument:
    """Ordered, never-empty sequence of blocks handed to a serializer."""
    blocks: tuple[DocBlock, ...]
    title:  Optional[str] = None


class ConversionResult(BaseModel):
    """Serialized output of one conversion call."""
    content:    bytes
    extension:  str
    media_type: str


class TextStats(BaseModel):
    characters:           int
    characters_no_spaces: int
    words:                int
    lines:                int
    paragraphs:           int
    encoding:             str
    size:                 int
    size_kb:              str


class ImageSize(BaseModel):
    width:  int
    height: int
    format: str
