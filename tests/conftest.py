from __future__ import annotations

from typing import Callable

import fitz
import pytest

from pdfmerger.domain.models import PDF_CONTENT_TYPE, PendingDocument, RawFile


def _build_pdf(label: str, page_count: int) -> bytes:
    document = fitz.open()
    try:
        for index in range(page_count):
            page = document.new_page()
            page.insert_text((72, 72), f"{label} page {index + 1}")
        return document.tobytes(deflate=True, garbage=3)
    finally:
        document.close()


@pytest.fixture
def make_pdf() -> Callable[[str, int], bytes]:
    return _build_pdf


@pytest.fixture
def make_raw_file() -> Callable[..., RawFile]:
    def factory(
        label: str, page_count: int = 1, content_type: str = PDF_CONTENT_TYPE
    ) -> RawFile:
        return RawFile(
            name=f"{label}.pdf",
            content_type=content_type,
            content=_build_pdf(label, page_count),
        )

    return factory


@pytest.fixture
def make_pending() -> Callable[[str, int], PendingDocument]:
    def factory(label: str, page_count: int = 1) -> PendingDocument:
        raw = RawFile(
            name=f"{label}.pdf",
            content_type=PDF_CONTENT_TYPE,
            content=_build_pdf(label, page_count),
        )
        return PendingDocument(source=raw, name=raw.name, page_count=page_count)

    return factory


@pytest.fixture
def corrupt_pdf() -> RawFile:
    return RawFile(
        name="broken.pdf",
        content_type=PDF_CONTENT_TYPE,
        content=b"this is not a pdf document",
    )


@pytest.fixture
def encrypted_pdf() -> RawFile:
    document = fitz.open()
    try:
        for index in range(2):
            document.new_page().insert_text((72, 72), f"secret page {index + 1}")
        content = document.tobytes(
            encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="owner", user_pw="user"
        )
    finally:
        document.close()
    return RawFile(name="locked.pdf", content_type=PDF_CONTENT_TYPE, content=content)


@pytest.fixture
def zero_page_pdf() -> RawFile:
    content = (
        b"%PDF-1.4\n"
        b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
        b"2 0 obj\n<< /Type /Pages /Kids [] /Count 0 >>\nendobj\n"
        b"trailer\n<< /Root 1 0 R >>\n"
        b"%%EOF\n"
    )
    return RawFile(name="empty.pdf", content_type=PDF_CONTENT_TYPE, content=content)
