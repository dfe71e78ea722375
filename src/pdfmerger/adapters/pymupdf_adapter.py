from __future__ import annotations

import logging
from typing import Iterable, cast

import fitz  # type: ignore[import-untyped]

from pdfmerger.domain.errors import InvalidDocumentError, ParsingError

LOGGER = logging.getLogger(__name__)


class PyMuPdfAdapter:
    @staticmethod
    def _optimized_bytes(document: fitz.Document) -> bytes:
        return cast(
            bytes,
            document.tobytes(
                garbage=4,
                clean=True,
                deflate=True,
                deflate_images=True,
                deflate_fonts=True,
            ),
        )

    @staticmethod
    def _open(pdf_bytes: bytes, name: str) -> fitz.Document:
        try:
            document = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as exc:
            raise ParsingError(f'Unable to read PDF "{name}"') from exc
        if document.needs_pass:
            document.close()
            raise ParsingError(f'"{name}" is password protected')
        return document

    def get_page_count(self, pdf_bytes: bytes, name: str = "document") -> int:
        with self._open(pdf_bytes, name) as document:
            return int(document.page_count)

    def extract_text_by_page(self, pdf_bytes: bytes) -> list[str]:
        try:
            with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
                return [document[index].get_text("text") for index in range(document.page_count)]
        except Exception as exc:
            raise ParsingError("Unable to extract PDF text") from exc

    def concatenate(self, sources: Iterable[tuple[str, bytes]]) -> tuple[bytes, int]:
        """Append every page of each source, in order, to one new document.

        Returns the serialized document and its page count. Any source that
        cannot be opened or copied raises :class:`ParsingError` and nothing
        is serialized.
        """
        output = fitz.open()
        try:
            for name, pdf_bytes in sources:
                with self._open(pdf_bytes, name) as source_doc:
                    LOGGER.debug("Copying %d page(s) from %s", source_doc.page_count, name)
                    if source_doc.page_count == 0:
                        continue
                    try:
                        output.insert_pdf(source_doc)
                    except Exception as exc:
                        raise ParsingError(f'Unable to copy pages from "{name}"') from exc
            page_count = int(output.page_count)
            if page_count == 0:
                raise InvalidDocumentError("The selected PDFs contain no pages to merge.")
            try:
                return self._optimized_bytes(output), page_count
            except Exception as exc:
                raise ParsingError("Unable to serialize merged PDF") from exc
        finally:
            output.close()
