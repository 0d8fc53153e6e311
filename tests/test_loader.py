import sys
import types
from pathlib import Path

import pytest

from vaeloris_forge.errors import ExtractionError, UnsupportedFileError
from vaeloris_forge.pipeline import loader
from vaeloris_forge.pipeline.loader import load_document, read_manuscript


def test_reads_markdown_and_text(tmp_path):
    md = tmp_path / "delta.md"
    md.write_text("## Chapter 1: Delta\nThe reeds.", encoding="utf-8")
    txt = tmp_path / "notes.TXT"
    txt.write_text("plain", encoding="utf-8")

    assert read_manuscript(md) == "## Chapter 1: Delta\nThe reeds."
    assert read_manuscript(txt) == "plain"


def test_docx_goes_through_extraction(tmp_path, monkeypatch):
    path = tmp_path / "book.docx"
    path.write_bytes(b"not really a docx")
    seen = []

    def fake_extract(p: Path) -> str:
        seen.append(p)
        return "# BOOK ONE\n\nText"

    monkeypatch.setattr(loader, "_extract_docx_text", fake_extract)
    assert read_manuscript(path) == "# BOOK ONE\n\nText"
    assert seen == [path]


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "book.pdf"
    path.write_bytes(b"%PDF")
    with pytest.raises(UnsupportedFileError):
        read_manuscript(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_manuscript(tmp_path / "absent.md")


def test_load_document_step(tmp_path):
    md = tmp_path / "delta.md"
    md.write_text("Hello", encoding="utf-8")
    assert load_document({"source_path": str(md)}) == {"content": "Hello", "source_name": "delta.md"}


class _Item:
    def __init__(self, text=None):
        if text is not None:
            self.text = text


class _FakeDocument:
    def iterate_items(self):
        yield _Item("# BOOK ONE"), 0
        yield _Item("   "), 1
        yield _Item(), 1
        yield _Item("  The reeds sway.  "), 1


def _install_converter(monkeypatch, converter_cls):
    module = types.ModuleType("docling.document_converter")
    module.DocumentConverter = converter_cls
    monkeypatch.setitem(sys.modules, "docling", types.ModuleType("docling"))
    monkeypatch.setitem(sys.modules, "docling.document_converter", module)


def test_docx_items_joined_with_blank_lines(tmp_path, monkeypatch):
    path = tmp_path / "book.docx"
    path.write_bytes(b"stub")
    converted = []

    class Converter:
        def convert(self, source):
            converted.append(source)
            return types.SimpleNamespace(document=_FakeDocument())

    _install_converter(monkeypatch, Converter)
    assert read_manuscript(path) == "# BOOK ONE\n\nThe reeds sway."
    assert converted == [str(path)]


def test_docx_conversion_failure_is_wrapped(tmp_path, monkeypatch):
    path = tmp_path / "broken.docx"
    path.write_bytes(b"stub")

    class Converter:
        def convert(self, source):
            raise ValueError("corrupt archive")

    _install_converter(monkeypatch, Converter)
    with pytest.raises(ExtractionError, match="broken.docx") as info:
        read_manuscript(path)
    assert isinstance(info.value.__cause__, ValueError)
