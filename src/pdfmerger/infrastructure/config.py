from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pdfmerger.domain.models import ProbeFailurePolicy


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _get_policy_env(name: str, default: ProbeFailurePolicy) -> ProbeFailurePolicy:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return ProbeFailurePolicy(value.strip().lower())
    except ValueError:
        return default


def _get_log_level_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    level = value.strip().upper()
    return level if isinstance(logging.getLevelName(level), int) else default


@dataclass(frozen=True)
class AppConfig:
    max_pdf_size_mb: int = _get_int_env("PDF_MERGER_MAX_PDF_MB", 50)
    max_batch_size_mb: int = _get_int_env("PDF_MERGER_MAX_BATCH_MB", 200)
    min_merge_documents: int = _get_int_env("PDF_MERGER_MIN_DOCUMENTS", 2)
    probe_failure_policy: ProbeFailurePolicy = _get_policy_env(
        "PDF_MERGER_PROBE_FAILURE_POLICY", ProbeFailurePolicy.SKIP
    )
    log_level: str = _get_log_level_env("PDF_MERGER_LOG_LEVEL", "INFO")

    @property
    def max_pdf_size_bytes(self) -> int:
        return self.max_pdf_size_mb * 1024 * 1024

    @property
    def max_batch_size_bytes(self) -> int:
        return self.max_batch_size_mb * 1024 * 1024
