"""Tests for clausecheck.services.contract_loader."""

import io
from unittest.mock import MagicMock

import pytest
from docx import Document

from clausecheck.services.contract_loader import ContractLoader, get_contract_loader


@pytest.fixture
def loader():
    return ContractLoader()


def fake_pdf(page_texts):
    """pdfplumber.open() stand-in yielding pages with the given text."""
    pdf = MagicMock()
    pdf.pages = [MagicMock(extract_text=MagicMock(return_value=t)) for t in page_texts]
    pdf.__enter__.return_value = pdf
    pdf.__exit__.return_value = False
    return pdf


class TestTextInput:

    def test_load_text(self, loader):
        document = loader.load_text("Payment within 30 days.", file_name="pasted")
        assert document.text == "Payment within 30 days."
        assert document.metadata.file_name == "pasted"
        assert document.metadata.word_count == 4
        assert document.metadata.character_count == 23

    def test_load_txt_bytes(self, loader):
        document = loader.load_bytes("Clause one.\nClause two.".encode("utf-8"), "contract.txt")
        assert document.text == "Clause one.\nClause two."
        assert document.metadata.file_type == "text/plain"
        assert document.metadata.page_count is None

    def test_invalid_utf8_replaced(self, loader):
        document = loader.load_bytes(b"caf\xe9 terms", "contract.txt")
        assert "terms" in document.text

    def test_load_file(self, loader, tmp_path):
        path = tmp_path / "contract.TXT"
        path.write_text("1. Scope of work.", encoding="utf-8")
        document = loader.load_file(path)
        assert document.metadata.file_name == "contract.TXT"
        assert document.text == "1. Scope of work."

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load_file(tmp_path / "absent.txt")


class TestRejections:

    @pytest.mark.parametrize("name", ["contract.doc", "contract", "image.png"])
    def test_unsupported_type(self, loader, name):
        with pytest.raises(ValueError, match="Unsupported file type"):
            loader.load_bytes(b"content", name)

    def test_oversize_upload(self, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "10")
        from clausecheck.config import get_settings
        get_settings.cache_clear()

        with pytest.raises(ValueError, match="File must be under"):
            ContractLoader().load_bytes(b"x" * 11, "contract.txt")


class TestPdfInput:

    def test_pages_joined(self, loader, monkeypatch):
        pdf = fake_pdf(["Page one text.", "", "Page three text."])
        monkeypatch.setattr(
            "clausecheck.services.contract_loader.pdfplumber.open", lambda stream: pdf
        )

        document = loader.load_bytes(b"%PDF-1.4", "contract.pdf")

        assert document.text == "Page one text.\n\nPage three text."
        assert document.metadata.page_count == 3
        assert document.metadata.file_type == "application/pdf"

    def test_image_only_pdf(self, loader, monkeypatch):
        pdf = fake_pdf([None, "   "])
        monkeypatch.setattr(
            "clausecheck.services.contract_loader.pdfplumber.open", lambda stream: pdf
        )
        with pytest.raises(ValueError, match="empty or contains only images"):
            loader.load_bytes(b"%PDF-1.4", "scan.pdf")

    def test_corrupt_pdf(self, loader, monkeypatch):
        def broken(stream):
            raise RuntimeError("bad xref")

        monkeypatch.setattr("clausecheck.services.contract_loader.pdfplumber.open", broken)
        with pytest.raises(ValueError, match="PDF parsing failed"):
            loader.load_bytes(b"not a pdf", "broken.pdf")

def make_docx(paragraphs, table_rows=()):
    """Serialize a Word document with the given paragraphs and table rows."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestDocxInput:

    def test_paragraphs_extracted(self, loader):
        content = make_docx(["1. Scope of work.", "", "2. Payment within 30 days."])

        document = loader.load_bytes(content, "contract.docx")

        assert document.text == "1. Scope of work.\n\n2. Payment within 30 days."
        assert document.metadata.file_type.endswith("wordprocessingml.document")
        assert document.metadata.page_count is None

    def test_table_text_included(self, loader):
        content = make_docx(["Fee schedule"], table_rows=[("Milestone", "Amount")])
        document = loader.load_bytes(content, "contract.docx")
        assert document.text == "Fee schedule\n\nMilestone | Amount"

    def test_empty_document(self, loader):
        with pytest.raises(ValueError, match="DOCX appears to be empty"):
            loader.load_bytes(make_docx([]), "blank.docx")

    def test_corrupt_docx(self, loader):
        with pytest.raises(ValueError, match="DOCX parsing failed"):
            loader.load_bytes(b"PK\x03\x04 not a zip archive", "broken.docx")

    def test_risky_contract_from_docx(self, loader, risky_contract_text):
        content = make_docx(risky_contract_text.splitlines())
        document = loader.load_bytes(content, "contract.docx")
        assert "non-compete" in document.text.lower()



def test_singleton():
    assert get_contract_loader() is get_contract_loader()
