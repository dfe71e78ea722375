from __future__ import annotations

from typing import Iterable

from pdfmerger.domain.models import PDF_CONTENT_TYPE, Classification, RawFile


def is_pdf(file: RawFile) -> bool:
    return file.content_type == PDF_CONTENT_TYPE


def classify(files: Iterable[RawFile]) -> Classification:
    valid: list[RawFile] = []
    invalid: list[RawFile] = []
    for file in files:
        if is_pdf(file):
            valid.append(file)
        else:
            invalid.append(file)
    return Classification(valid=valid, invalid=invalid)
