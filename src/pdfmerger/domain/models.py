from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

PDF_CONTENT_TYPE = "application/pdf"


class Status(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class SourceKind(str, Enum):
    RAW = "raw"
    PROBED = "probed"


class ProbeFailurePolicy(str, Enum):
    SKIP = "skip"
    ABORT = "abort"


@dataclass(frozen=True)
class RawFile:
    name: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def kind(self) -> SourceKind:
        return SourceKind.RAW

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class PendingDocument:
    source: RawFile
    name: str
    page_count: int

    @property
    def kind(self) -> SourceKind:
        return SourceKind.PROBED


MergeSource = Union[RawFile, PendingDocument]


@dataclass(frozen=True)
class Classification:
    valid: list[RawFile]
    invalid: list[RawFile]


@dataclass(frozen=True)
class MergeOptions:
    filename: str | None = None


@dataclass(frozen=True)
class MergeResult:
    output_name: str
    output_pdf: bytes = field(repr=False)
    document_count: int
    merged_pages: int


@dataclass(frozen=True)
class OperationMessage:
    level: str
    text: str


@dataclass(frozen=True)
class ProbeItemResult:
    source_name: str
    status: Status
    document: PendingDocument | None = None
    messages: list[OperationMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ProbeBatchResult:
    items: list[ProbeItemResult]

    @property
    def documents(self) -> list[PendingDocument]:
        return [item.document for item in self.items if item.document is not None]

    @property
    def failed_names(self) -> list[str]:
        return [item.source_name for item in self.items if item.status == Status.ERROR]

    @property
    def success_count(self) -> int:
        return len([item for item in self.items if item.status == Status.SUCCESS])

    @property
    def error_count(self) -> int:
        return len([item for item in self.items if item.status == Status.ERROR])
