"""RichDocument -> .docx serialization with python-docx"""

import io
from typing import Optional

import docx
from docx.document import Document
from docx.enum.text import WD_UNDERLINE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor
from docx.text.paragraph import Paragraph
from pydantic import BaseModel

from docshift.config import Settings
from docshift.core.models import BlockKind, DocBlock, LineBreak, ListKind, RichDocument, Run


# schema order: these elements must come after w:shd / w:pBdr inside their parent
_RPR_AFTER_SHD = (
    "w:fitText", "w:vertAlign", "w:rtl", "w:cs", "w:em", "w:lang",
    "w:eastAsianLayout", "w:specVanish", "w:oMath",
)
_PPR_AFTER_SHD = (
    "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap", "w:overflowPunct",
    "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN", "w:bidi", "w:adjustRightInd",
    "w:snapToGrid", "w:spacing", "w:ind", "w:contextualSpacing", "w:mirrorIndents",
    "w:suppressOverlap", "w:jc", "w:textDirection", "w:textAlignment",
    "w:textboxTightWrap", "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr",
    "w:sectPr", "w:pPrChange",
)
_PPR_AFTER_PBDR = ("w:shd",) + _PPR_AFTER_SHD

LIST_STYLES = {ListKind.unordered: "List Bullet", ListKind.ordered: "List Number"}
MAX_LIST_STYLE_LEVEL = 3


class DocxStyle(BaseModel):
    """Presentation values the serializer applies to code and quote blocks."""
    code_font:          str = "Courier New"
    code_font_size:     int = 10
    code_shading:       str = "F3F4F6"
    quote_border_color: str = "CCCCCC"

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocxStyle":
        return cls(
            code_font=settings.code_font,
            code_font_size=settings.code_font_size,
            code_shading=settings.code_shading,
            quote_border_color=settings.quote_border_color,
        )


def _shading(fill: str):
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    return shd


def _shade_paragraph(paragraph: Paragraph, fill: str) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_pr.insert_element_before(_shading(fill), *_PPR_AFTER_SHD)


def _left_border(paragraph: Paragraph, color: str) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    left = OxmlElement("w:left")
    left.set(qn("w:val"), "single")
    left.set(qn("w:sz"), "6")
    left.set(qn("w:space"), "1")
    left.set(qn("w:color"), color)
    p_bdr.append(left)
    p_pr.insert_element_before(p_bdr, *_PPR_AFTER_PBDR)


def _spacing(paragraph: Paragraph, before: Optional[int] = None, after: Optional[int] = None) -> None:
    fmt = paragraph.paragraph_format
    if before is not None:
        fmt.space_before = Pt(before)
    if after is not None:
        fmt.space_after = Pt(after)


def _add_runs(paragraph: Paragraph, runs: tuple[Run, ...], style: DocxStyle) -> None:
    for r in runs:
        if isinstance(r, LineBreak):
            paragraph.add_run().add_break()
            continue
        f = r.formatting
        run = paragraph.add_run(r.text.replace("\r\n", " ").replace("\n", " "))
        if f.bold:
            run.bold = True
        if f.italic:
            run.italic = True
        if f.underline:
            run.underline = WD_UNDERLINE.SINGLE
        if f.strike:
            run.font.strike = True
        if f.color:
            run.font.color.rgb = RGBColor.from_string(f.color)
        if f.code:
            run.font.name = style.code_font
            run.font.size = Pt(style.code_font_size)
            run._r.get_or_add_rPr().insert_element_before(_shading(style.code_shading), *_RPR_AFTER_SHD)


def _list_style(block: DocBlock) -> str:
    base = LIST_STYLES[block.list_kind or ListKind.unordered]
    depth = min((block.level or 0) + 1, MAX_LIST_STYLE_LEVEL)
    return base if depth == 1 else f"{base} {depth}"


def _write_block(doc: Document, block: DocBlock, style: DocxStyle) -> None:
    kind = block.kind

    if kind == BlockKind.heading:
        p = doc.add_heading(level=block.level or 1)
        _add_runs(p, block.runs, style)
        _spacing(p, before=10, after=10)
    elif kind == BlockKind.list_item:
        p = doc.add_paragraph(style=_list_style(block))
        _add_runs(p, block.runs, style)
        _spacing(p, after=4)
    elif kind == BlockKind.code_line:
        p = doc.add_paragraph()
        run = p.add_run(block.text or " ")
        run.font.name = style.code_font
        run.font.size = Pt(style.code_font_size)
        _spacing(p, before=0, after=0)
        p.paragraph_format.left_indent = Inches(0.5)
        _shade_paragraph(p, style.code_shading)
    elif kind == BlockKind.quote:
        p = doc.add_paragraph(style="Quote")
        _add_runs(p, block.runs, style)
        p.paragraph_format.left_indent = Inches(0.5)
        _left_border(p, style.quote_border_color)
        _spacing(p, after=6)
    elif kind == BlockKind.rule:
        p = doc.add_paragraph()
        _add_runs(p, block.runs, style)
        _spacing(p, before=10, after=10)
    elif kind == BlockKind.table:
        p = doc.add_paragraph()
        _add_runs(p, block.runs, style)
        _spacing(p, after=10)
    else:
        p = doc.add_paragraph()
        _add_runs(p, block.runs, style)
        _spacing(p, after=6)


def write_docx(document: RichDocument, style: Optional[DocxStyle] = None) -> bytes:
    """Serialize a RichDocument to .docx bytes."""
    style = style or DocxStyle()
    doc = docx.Document()
    if document.title:
        doc.core_properties.title = document.title
    for block in document.blocks:
        _write_block(doc, block, style)

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()
