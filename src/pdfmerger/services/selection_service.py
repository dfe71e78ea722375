from __future__ import annotations

import threading
from typing import Iterable, Iterator

from pdfmerger.domain.models import PendingDocument


class SelectionList:
    """Ordered documents waiting to be merged.

    Order is the merge output order. Out-of-range indices passed to
    ``remove_at``, ``move_up`` and ``move_down`` are ignored. Mutations hold
    a lock so that overlapping callbacks cannot drop updates.
    """

    def __init__(self, documents: Iterable[PendingDocument] = ()) -> None:
        self._documents: list[PendingDocument] = list(documents)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def __iter__(self) -> Iterator[PendingDocument]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> PendingDocument:
        with self._lock:
            return self._documents[index]

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._documents)

    def add(self, documents: Iterable[PendingDocument]) -> None:
        with self._lock:
            self._documents.extend(documents)

    def remove_at(self, index: int) -> PendingDocument | None:
        with self._lock:
            if not self._in_range(index):
                return None
            return self._documents.pop(index)

    def move_up(self, index: int) -> None:
        with self._lock:
            if index == 0 or not self._in_range(index):
                return
            items = self._documents
            items[index - 1], items[index] = items[index], items[index - 1]

    def move_down(self, index: int) -> None:
        with self._lock:
            if not self._in_range(index + 1) or not self._in_range(index):
                return
            items = self._documents
            items[index], items[index + 1] = items[index + 1], items[index]

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()

    def total_pages(self) -> int:
        return sum(document.page_count for document in self.snapshot())

    def snapshot(self) -> tuple[PendingDocument, ...]:
        with self._lock:
            return tuple(self._documents)
