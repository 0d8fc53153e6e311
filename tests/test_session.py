import pytest
from docx import Document

from vaeloris_forge.elements import Chapter, DropCapParagraph
from vaeloris_forge.errors import SessionStateError, UnsupportedFileError
from vaeloris_forge.session import ForgeSession, ForgeStatus


@pytest.fixture
def manuscript(tmp_path):
    path = tmp_path / "delta.md"
    path.write_text("## Chapter 1: Delta\nThe reeds sway.", encoding="utf-8")
    return path


def test_starts_idle():
    session = ForgeSession()
    assert session.status is ForgeStatus.IDLE
    assert session.elements == []


def test_load_then_generate(tmp_path, manuscript):
    session = ForgeSession(output_dir=tmp_path / "out")
    elements = session.load(manuscript)

    assert session.status is ForgeStatus.READY
    assert elements == [Chapter("1", "Delta"), DropCapParagraph("The reeds sway.")]
    assert session.summary() == ["chapter: Delta", "dropCapParagraph: The reeds sway."]

    written = session.generate()
    assert written == tmp_path / "out" / "delta_VAELORIS.docx"
    assert session.status is ForgeStatus.COMPLETE
    assert "CHAPTER 1" in [p.text for p in Document(str(written)).paragraphs]


def test_custom_suffix_and_explicit_path(tmp_path, manuscript):
    session = ForgeSession(output_dir=tmp_path, output_suffix="_FORGED")
    session.load(manuscript)
    assert session.generate().name == "delta_FORGED.docx"
    assert session.generate(tmp_path / "x.docx") == tmp_path / "x.docx"


def test_load_text_and_preview():
    session = ForgeSession()
    session.load_text("Some **bold** claim", name="typed.md")
    assert session.status is ForgeStatus.READY
    assert "<strong>bold</strong>" in session.preview_html()


def test_failed_load_clears_state_and_reset_recovers(tmp_path, manuscript):
    session = ForgeSession()
    session.load(manuscript)

    bad = tmp_path / "book.pdf"
    bad.write_bytes(b"%PDF")
    with pytest.raises(UnsupportedFileError):
        session.load(bad)

    assert session.status is ForgeStatus.ERROR
    assert session.elements == []
    assert session.content == ""
    assert session.error

    session.reset()
    assert session.status is ForgeStatus.IDLE
    assert session.error is None


def test_failed_generate_moves_to_error(tmp_path, manuscript, monkeypatch):
    session = ForgeSession(output_dir=tmp_path)
    session.load(manuscript)

    def broken_save(doc, path):
        raise OSError("disk full")

    monkeypatch.setattr("vaeloris_forge.session.save_document", broken_save)
    with pytest.raises(OSError):
        session.generate()
    assert session.status is ForgeStatus.ERROR
    assert session.elements == []


def test_generate_requires_loaded_manuscript():
    session = ForgeSession()
    with pytest.raises(SessionStateError):
        session.generate()
    with pytest.raises(SessionStateError):
        session.preview_html()
