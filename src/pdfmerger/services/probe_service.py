from __future__ import annotations

import logging

from pdfmerger.adapters.pymupdf_adapter import PyMuPdfAdapter
from pdfmerger.domain.errors import InvalidDocumentError, PdfMergerError, ValidationError
from pdfmerger.domain.models import (
    OperationMessage,
    PendingDocument,
    ProbeBatchResult,
    ProbeFailurePolicy,
    ProbeItemResult,
    RawFile,
    Status,
)
from pdfmerger.infrastructure.config import AppConfig
from pdfmerger.services.validation_service import is_pdf

LOGGER = logging.getLogger(__name__)


class ProbeService:
    def __init__(self, adapter: PyMuPdfAdapter, config: AppConfig) -> None:
        self.adapter = adapter
        self.config = config

    def probe(self, file: RawFile) -> PendingDocument:
        if not is_pdf(file):
            raise InvalidDocumentError(
                f'"{file.name}" is not a PDF (content type: {file.content_type or "unknown"})'
            )
        page_count = self.adapter.get_page_count(file.content, file.name)
        if page_count == 0:
            raise InvalidDocumentError(f'"{file.name}" has no pages')
        return PendingDocument(source=file, name=file.name, page_count=page_count)

    def _probe_item(self, file: RawFile) -> ProbeItemResult:
        try:
            if file.size_bytes > self.config.max_pdf_size_bytes:
                raise ValidationError(
                    f"{file.name} exceeds per-file limit of {self.config.max_pdf_size_mb} MB"
                )
            document = self.probe(file)
        except PdfMergerError as exc:
            if self.config.probe_failure_policy == ProbeFailurePolicy.ABORT:
                raise
            LOGGER.warning("Skipping %s: %s", file.name, exc)
            return ProbeItemResult(
                source_name=file.name,
                status=Status.ERROR,
                messages=[OperationMessage(level="error", text=str(exc))],
            )
        return ProbeItemResult(
            source_name=file.name,
            status=Status.SUCCESS,
            document=document,
            messages=[
                OperationMessage(level="info", text=f"{document.page_count} page(s) detected.")
            ],
        )

    def probe_batch(self, files: list[RawFile]) -> ProbeBatchResult:
        if not files:
            return ProbeBatchResult(items=[])

        total_size = sum(file.size_bytes for file in files)
        if total_size > self.config.max_batch_size_bytes:
            raise ValidationError(f"Batch size exceeds limit of {self.config.max_batch_size_mb} MB")

        # PyMuPDF is not thread-safe, so files are probed one at a time.
        items = [self._probe_item(file) for file in files]

        result = ProbeBatchResult(items=items)
        LOGGER.info(
            "Probed %d file(s): %d ok, %d failed",
            len(items),
            result.success_count,
            result.error_count,
        )
        return result

    @staticmethod
    def build_probe_summary(result: ProbeBatchResult) -> str:
        if not result.error_count:
            return f"Added {result.success_count} PDF(s)."
        lines = [f"Added {result.success_count} PDF(s). Skipped {result.error_count}:"]
        for item in result.items:
            if item.status == Status.ERROR:
                lines.extend(f"- {msg.text}" for msg in item.messages)
        return "\n".join(lines)
