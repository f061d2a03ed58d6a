"""Tests for HTML, JSON, DOCX and console output."""

import json
from pathlib import Path

import pytest

from drafty_text.formats import (
    SUPPORTED_EXTENSIONS,
    DOCXHandler,
    HTMLHandler,
    JSONHandler,
    TXTHandler,
    get_handler,
    to_console_text,
)
from drafty_text.formats.html_handler import to_html
from drafty_text.formats.json_handler import from_json, to_json
from drafty_text.formatting.ir import Document, EntityRange
from drafty_text.formatting.mutators import (
    attach_file,
    attach_json,
    insert_button,
    insert_image,
)
from drafty_text.formatting.parser import parse


class TestGetHandler:
    """Tests for handler lookup."""

    def test_known_extensions(self):
        """Test that every extension maps to a handler."""
        assert get_handler(".txt") is TXTHandler
        assert get_handler(".JSON") is JSONHandler
        assert get_handler(".html") is HTMLHandler
        assert get_handler(".docx") is DOCXHandler
        assert ".md" in SUPPORTED_EXTENSIONS

    def test_unknown_extension(self):
        """Test that unsupported formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported file format"):
            get_handler(".pdf")


class TestHTMLFormatter:
    """Tests for HTML rendering."""

    def test_styles_and_link(self):
        """Test inline styles and links."""
        html = to_html(parse("a *b* example.com"))

        assert html == 'a <b>b</b> <a href="http://example.com">example.com</a>'

    def test_nested_and_breaks(self):
        """Test nested elements and line breaks."""
        html = to_html(parse("*x ~y~*\n`z`"))

        assert html == "<b>x <del>y</del></b><br/><tt>z</tt>"

    def test_text_escaped(self):
        """Test that markup-significant characters are escaped."""
        assert to_html(parse("x < y & *z>*")) == "x &lt; y &amp; <b>z&gt;</b>"

    def test_mentions_and_hashtags(self):
        """Test mention and hashtag spans."""
        html = to_html(parse("@bob #news"))

        assert html == '<span class="mention">@bob</span> <span class="hashtag">#news</span>'

    def test_image_data_uri(self):
        """Test that inline image bytes become a data URI."""
        doc = insert_image(Document(text=" "), 0, mime="image/png", bits=b"abc",
                           width=2, height=3, fname="p.png")

        assert to_html(doc) == (
            '<img src="data:image/png;base64,YWJj" alt="p.png" width="2" height="3"/>'
        )

    def test_attachment_and_json(self):
        """Test that file attachments link and JSON stays hidden."""
        doc = Document(text="hi")
        attach_file(doc, refurl="/f/1.zip", fname="1.zip")
        attach_json(doc, {"a": 1})

        assert to_html(doc) == (
            '<a class="attachment" href="/f/1.zip" download="1.zip">1.zip</a>hi'
        )

    def test_button(self):
        """Test button rendering."""
        doc = insert_button(Document(text="OK!"), 0, 2, action_type="pub", name="ok")

        assert to_html(doc) == '<button data-act="pub" name="ok">OK</button>!'

    def test_hidden_range(self):
        """Test that HD ranges are not shown."""
        doc = Document(text="ab", ranges=[EntityRange(0, 1, 3)])

        assert to_html(doc) == "b"

    def test_write_page(self, tmp_path: Path):
        """Test writing a standalone HTML page."""
        output_path = tmp_path / "out.html"
        HTMLHandler().write(parse("*hi*"), output_path)

        content = output_path.read_text(encoding="utf-8")
        assert content.startswith("<!DOCTYPE html>")
        assert "<b>hi</b>" in content

    def test_html_cannot_be_read(self, tmp_path: Path):
        """Test that HTML is write-only."""
        with pytest.raises(NotImplementedError):
            HTMLHandler().read(tmp_path / "in.html")


class TestJSONHandler:
    """Tests for the JSON wire format."""

    def test_to_json(self):
        """Test serialization with explicit indentation."""
        assert json.loads(to_json(parse("*a*"), indent=0)) == {
            "txt": "a",
            "fmt": [{"at": 0, "len": 1, "tp": "ST"}],
        }

    def test_file_round_trip(self, tmp_path: Path, sample_markup: str):
        """Test writing and reading a document."""
        doc = attach_file(parse(sample_markup), bits=b"\x00\x01", fname="b.bin")
        path = tmp_path / "doc.json"

        JSONHandler().write(doc, path)

        assert JSONHandler().read(path) == doc

    def test_from_json(self):
        """Test reading a wire document."""
        doc = from_json('{"txt": "x", "fmt": [{"len": 1}], "ent": [{"tp": "MN", "data": {"val": "@x"}}]}')

        assert doc.ranges == [EntityRange(0, 1, 0)]
        assert doc.entities[0].data == {"val": "@x"}


class TestDOCXHandler:
    """Tests for DOCX output."""

    def test_write_creates_docx(self, tmp_path: Path):
        """Test run-level styles in the written document."""
        from docx import Document as DocxDocument

        output_path = tmp_path / "test.docx"
        DOCXHandler().write(parse("plain *bold* _it_ ~gone~"), output_path)

        assert output_path.exists()
        para = DocxDocument(output_path).paragraphs[0]
        runs = {run.text: run for run in para.runs}
        assert runs["bold"].bold is True
        assert runs["it"].italic is True
        assert runs["gone"].font.strike is True
        assert para.text == "plain bold it gone"

    def test_read_back(self, tmp_path: Path):
        """Test that written text can be read back."""
        output_path = tmp_path / "test.docx"
        handler = DOCXHandler()
        handler.write(parse("one *two*"), output_path)

        assert handler.read(output_path).text == "one two"

    def test_read_back_styles(self, tmp_path: Path):
        """Test that run formatting survives a write and read."""
        markup = "plain *bold* _it_ ~gone~ `code`\nnext *a _b_ c* end"
        output_path = tmp_path / "test.docx"
        handler = DOCXHandler()
        handler.write(parse(markup), output_path)

        assert handler.read(output_path) == parse(markup)

    def test_entities_as_placeholders(self, tmp_path: Path):
        """Test image and attachment placeholders."""
        from docx import Document as DocxDocument

        doc = insert_image(Document(text="x y"), 1, bits=b"i", fname="pic.png")
        attach_file(doc, bits=b"f", fname="f.txt")
        output_path = tmp_path / "test.docx"
        DOCXHandler().write(doc, output_path)

        text = DocxDocument(output_path).paragraphs[0].text
        assert text == "[f.txt]x[pic.png]y"


class TestConsoleFormatter:
    """Tests for terminal rendering."""

    def test_plain_text(self):
        """Test that styled text keeps its characters."""
        text = to_console_text(parse("a *b* c"))

        assert text.plain == "a b c"

    def test_bold_span(self):
        """Test that bold ranges become bold rich spans."""
        text = to_console_text(parse("a *b* c"))

        assert any(span.style == "bold" and (span.start, span.end) == (2, 3)
                   for span in text.spans)

    def test_line_break(self):
        """Test that BR becomes a newline."""
        assert to_console_text(parse("a\nb")).plain == "a\nb"

    def test_attachment_line(self):
        """Test attachments are listed by name."""
        doc = attach_file(Document(text="hi"), bits=b"x", fname="x.bin")

        assert to_console_text(doc).plain == "\n[attachment: x.bin]hi"
