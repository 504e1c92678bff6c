"""Per-file record index with a build phase and a sealed, read-only phase.

Records are added file by file while parsing. Module back-filling searches
across every file, so it only accepts a SealedDocIndex: sealing is the point
after which no more files may be added.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .models import DocRecord, NgdocsError


class IndexSealedError(NgdocsError):
    """Raised when adding records to an index that has been sealed."""

    pass


class SealedDocIndex(Mapping):
    """Read-only view of file name -> records.

    The record lists are shared with the builder; back-filling mutates the
    records in place but never adds or removes entries.
    """

    def __init__(self, docs: dict[str, list[DocRecord]]) -> None:
        self._docs = docs

    def __getitem__(self, file_name: str) -> list[DocRecord]:
        return self._docs[file_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def records(self) -> Iterator[DocRecord]:
        for docs in self._docs.values():
            yield from docs


class DocIndex:
    """Build-phase index, populated with one call to add() per file."""

    def __init__(self) -> None:
        self._docs: dict[str, list[DocRecord]] = {}
        self._sealed: SealedDocIndex | None = None

    def add(self, file_name: str, records: list[DocRecord]) -> None:
        if self._sealed is not None:
            raise IndexSealedError(f"Cannot add {file_name}: index is sealed")
        self._docs[file_name] = records

    def __contains__(self, file_name: str) -> bool:
        return file_name in self._docs

    def __len__(self) -> int:
        return len(self._docs)

    def seal(self) -> SealedDocIndex:
        if self._sealed is None:
            self._sealed = SealedDocIndex(self._docs)
        return self._sealed
