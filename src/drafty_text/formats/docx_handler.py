"""Microsoft Word (.docx) file handler."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from docx import Document as DocxDocument
from docx.shared import Pt, RGBColor

from drafty_text.config import get_settings
from drafty_text.formats.base import FormatHandler
from drafty_text.formats.txt_handler import to_markup
from drafty_text.formatting.ir import Content, Document, EntityKind, Style, StyleRange
from drafty_text.formatting.parser import parse
from drafty_text.formatting.renderer import render


LINK_COLOR = RGBColor(25, 118, 210)  # Blue
CODE_FONT = "Courier New"


@dataclass(frozen=True)
class TextRun:
    """A contiguous run of text with consistent styling.

    Attributes:
        text: The text content
        styles: Inline style tags applied to the run
        url: Link target, if the run is part of a link
        line_break: Whether the run is a line break
    """

    text: str = ""
    styles: frozenset[str] = frozenset()
    url: Optional[str] = None
    line_break: bool = False


class RunFormatter:
    """Flattens the render tree into a list of styled runs."""

    def apply(
        self, tag: Optional[str], data: Optional[dict], content: Content
    ) -> list[TextRun]:
        data = data or {}
        if content is None:
            runs: list[TextRun] = []
        elif isinstance(content, str):
            runs = [TextRun(text=content)] if content else []
        else:
            runs = [run for node in content for run in node]

        if tag is None:
            return runs
        if tag in (Style.BOLD, Style.ITALIC, Style.STRIKETHROUGH, Style.CODE):
            return [replace(run, styles=run.styles | {tag}) for run in runs]
        if tag == Style.LINE_BREAK:
            return [TextRun(line_break=True)]
        if tag == EntityKind.LINK:
            return [replace(run, url=data.get("url")) for run in runs]
        if tag == EntityKind.IMAGE:
            return [TextRun(text=f"[{data.get('name') or 'image'}]")]
        if tag == EntityKind.ATTACHMENT:
            return [TextRun(text=f"[{data.get('name') or 'attachment'}]")]
        if tag == EntityKind.BUTTON:
            return [TextRun(text=f"[{content}]", styles=frozenset({Style.BOLD}))]
        if tag == Style.HIDDEN:
            return []
        return runs


class DOCXHandler(FormatHandler):
    """Handler for Microsoft Word (.docx) files.

    Uses python-docx with run-level formatting for bold, italic,
    strikethrough and monospace text. Line breaks become breaks inside
    a single paragraph.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".docx",)

    def read(self, path: Path) -> Document:
        """Read DOCX paragraphs as lines of markup.

        Bold, italic, strikethrough and monospace runs are turned back into
        markup delimiters before parsing.
        """
        doc = DocxDocument(path)
        lines = [_paragraph_markup(para) for para in doc.paragraphs]
        return parse("\n".join(lines))

    def write(self, document: Document, path: Path) -> None:
        """Write document to a DOCX file."""
        settings = get_settings()
        doc = DocxDocument()

        # Set default font
        font = doc.styles["Normal"].font
        font.name = settings.docx_font_name
        font.size = Pt(settings.docx_font_size)

        para = doc.add_paragraph()
        for run_data in render(document, RunFormatter()):
            if run_data.line_break:
                para.add_run().add_break()
                continue
            run = para.add_run(run_data.text)
            run.bold = Style.BOLD in run_data.styles
            run.italic = Style.ITALIC in run_data.styles
            run.font.strike = Style.STRIKETHROUGH in run_data.styles
            if Style.CODE in run_data.styles:
                run.font.name = CODE_FONT
            if run_data.url:
                run.underline = True
                run.font.color.rgb = LINK_COLOR

        doc.save(path)


def _run_styles(run) -> frozenset[str]:
    """Inline styles set on a python-docx run."""
    styles = set()
    if run.bold:
        styles.add(Style.BOLD)
    if run.italic:
        styles.add(Style.ITALIC)
    if run.font.strike:
        styles.add(Style.STRIKETHROUGH)
    if run.font.name == CODE_FONT:
        styles.add(Style.CODE)
    return frozenset(styles)


def _paragraph_markup(para) -> str:
    """Rebuild inline markup from the runs of a paragraph.

    Consecutive runs sharing a style are merged into a single range.
    """
    text = ""
    ranges: list[StyleRange] = []
    opened: dict[str, int] = {}
    for run in para.runs:
        if not run.text:
            continue
        styles = _run_styles(run)
        for style in [s for s in opened if s not in styles]:
            start = opened.pop(style)
            ranges.append(StyleRange(start, len(text) - start, style))
        for style in styles:
            opened.setdefault(style, len(text))
        text += run.text

    for style, start in opened.items():
        ranges.append(StyleRange(start, len(text) - start, style))
    return to_markup(Document(text=text, ranges=ranges or None))
