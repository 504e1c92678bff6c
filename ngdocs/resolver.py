"""Module back-filling for records that do not declare @module.

A module is declared once (``@ngdoc module``), usually in the entry file of
a directory. Other records find it by searching their own directory and then
each ancestor directory.
"""

from __future__ import annotations

import logging
import re

from .index import SealedDocIndex
from .models import DocRecord

log = logging.getLogger(__name__)

_LAST_SEGMENT_RE = re.compile(r"[^/\\]+$")


def directory_of(file_name: str) -> str:
    """Strip the last path segment: "src/ng/http.js" -> "src/ng/"."""
    return _LAST_SEGMENT_RE.sub("", file_name)


def parent_folder(folder: str) -> str | None:
    """Step one directory up, or None once fewer than two "/" remain."""
    if folder.count("/") < 2:
        return None
    parts = folder.split("/")
    if not parts.pop():
        parts.pop()
    return "/".join(parts) + "/"


def _module_in_folder(folder: str, index: SealedDocIndex) -> tuple[bool, str | None]:
    """Return (found, name) for the first module declared directly in folder.

    A declaration without @name still counts as found.
    """
    for file_name, docs in index.items():
        if directory_of(file_name) != folder:
            continue
        for doc in docs:
            if doc.is_module:
                return True, doc.name
    return False, None


def _require_sealed(index) -> None:
    if not isinstance(index, SealedDocIndex):
        raise TypeError("Module resolution requires a sealed index; call seal() first")


def find_module_declaration(folder: str, index: SealedDocIndex) -> str | None:
    """Find the nearest module declared in ``folder`` or one of its ancestors."""
    _require_sealed(index)

    candidate: str | None = folder
    while candidate is not None:
        found, module = _module_in_folder(candidate, index)
        if found:
            return module
        candidate = parent_folder(candidate)
    return None


def guess_module(record: DocRecord, index: SealedDocIndex) -> str | None:
    return find_module_declaration(directory_of(record.file or ""), index)


def backfill(file_name: str, index: SealedDocIndex) -> None:
    """Fill in ``module`` (and ``parent_doc.module``) for one file's records."""
    _require_sealed(index)
    for doc in index[file_name]:
        if doc.ngdoc is None or doc.module:
            continue
        doc.module = guess_module(doc, index)
        if doc.module is None:
            log.debug("No module found for %s in %s", doc.name, file_name)
        if doc.parent_doc is not None and not doc.parent_doc.module:
            doc.parent_doc.module = doc.module


def backfill_all(index: SealedDocIndex) -> None:
    for file_name in index:
        backfill(file_name, index)
