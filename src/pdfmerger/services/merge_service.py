from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterator, Sequence, cast

from pdfmerger.adapters.pymupdf_adapter import PyMuPdfAdapter
from pdfmerger.domain.errors import EmptyInputError, InvalidDocumentError, PdfMergerError
from pdfmerger.domain.models import (
    MergeOptions,
    MergeResult,
    MergeSource,
    PendingDocument,
    RawFile,
    SourceKind,
)
from pdfmerger.services.validation_service import is_pdf

LOGGER = logging.getLogger(__name__)

DownloadTrigger = Callable[[bytes, str], None]


def generate_filename(document_count: int, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).date().isoformat()
    return f"merged-{document_count}-pdfs-{stamp}.pdf"


def resolve_filename(options: MergeOptions, document_count: int) -> str:
    filename = (options.filename or "").strip()
    if not filename:
        return generate_filename(document_count)
    if not filename.lower().endswith(".pdf"):
        filename = f"{filename}.pdf"
    return filename


def _raw_file(source: MergeSource) -> RawFile:
    if source.kind == SourceKind.PROBED:
        return cast(PendingDocument, source).source
    return cast(RawFile, source)


def _checked_sources(raw_files: list[RawFile]) -> Iterator[tuple[str, bytes]]:
    # Checked lazily so a failure surfaces at its position in the merge order.
    for raw_file in raw_files:
        if not is_pdf(raw_file):
            raise InvalidDocumentError(f'"{raw_file.name}" is not a PDF.')
        yield raw_file.name, raw_file.content


class MergeService:
    def __init__(self, adapter: PyMuPdfAdapter) -> None:
        self.adapter = adapter

    def merge(
        self, documents: Sequence[MergeSource], options: MergeOptions | None = None
    ) -> MergeResult:
        options = options or MergeOptions()
        if not documents:
            raise EmptyInputError("At least one PDF is required to merge.")

        raw_files = [_raw_file(document) for document in documents]
        try:
            output, page_count = self.adapter.concatenate(_checked_sources(raw_files))
        except PdfMergerError:
            LOGGER.exception("Merging %d PDF(s) failed", len(raw_files))
            raise

        LOGGER.info("Merged %d PDF(s) into %d page(s)", len(raw_files), page_count)
        return MergeResult(
            output_name=resolve_filename(options, len(raw_files)),
            output_pdf=output,
            document_count=len(raw_files),
            merged_pages=page_count,
        )

    def merge_and_download(
        self,
        documents: Sequence[MergeSource],
        trigger: DownloadTrigger,
        options: MergeOptions | None = None,
    ) -> MergeResult:
        result = self.merge(documents, options)
        trigger(result.output_pdf, result.output_name)
        return result

    def merge_two(
        self, first: MergeSource, second: MergeSource, filename: str | None = None
    ) -> MergeResult:
        return self.merge([first, second], MergeOptions(filename=filename))
