"""Documentation extractors for @ngdoc comment blocks."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .markup import parse_markup
from .models import MODULE_DIALECT, DocRecord, ExtractorConfig, ParentDoc, SourceFile
from .params import ParamSyntaxError, parse_param

log = logging.getLogger(__name__)

# Dialects whose @name may be written as "parent#member" or "parent:member"
_MEMBER_DIALECTS = frozenset(
    {"method", "property", "event", "function", "type", "overview"}
)
_PARENT_TAGS = {
    "methodOf": "method_of",
    "propertyOf": "property_of",
    "eventOf": "event_of",
    "memberOf": "member_of",  # Non-standard, used for grouping
}

_COMMENT_BLOCK_RE = re.compile(r"/\*{2,}(?:(?!\*+/).)+", re.DOTALL)
_OPENER_RE = re.compile(r"^\s*/\*+[ \t]*")
_DECORATION_RE = re.compile(r"^[ \t]*\*[ \t]*", re.MULTILINE)
_TAG_RE = re.compile(r"@(\w+)\s*(.*)", re.DOTALL)
_PURE_DOC_TAG_LINE_RE = re.compile(r"^@[^\n\r]+", re.MULTILINE)
_PURE_DOC_DESCRIPTION_RE = re.compile(r"@description(.*)", re.DOTALL)


@dataclass
class TagSegment:
    key: str
    content: str


def extract_comment_blocks(content: str) -> list[str]:
    """Find ``/** ... */`` blocks, without the closing marker."""
    return _COMMENT_BLOCK_RE.findall(content)


def _strip_decoration(block: str) -> str:
    return _DECORATION_RE.sub("", _OPENER_RE.sub("", block, count=1))


def _raw_segments(block: str, pure_doc: bool) -> list[str]:
    if pure_doc:
        return _PURE_DOC_TAG_LINE_RE.findall(block)

    segments: list[list[str]] = []
    for line in _strip_decoration(block).splitlines():
        if line.startswith("@"):
            segments.append([line])
        elif segments:
            segments[-1].append(line)
    return ["\n".join(lines) for lines in segments]


def split_tag_segments(block: str, pure_doc: bool) -> list[TagSegment] | None:
    """Split a comment block into @tag segments.

    Returns None if any segment does not start with a ``@word`` key.
    """
    segments = []
    for raw in _raw_segments(block, pure_doc):
        match = _TAG_RE.match(raw)
        if not match:
            log.debug("Malformed tag segment %r", raw[:40])
            return None
        segments.append(TagSegment(key=match.group(1), content=match.group(2).rstrip()))
    return segments


def _resolve_dialect(segments: list[TagSegment]) -> str | None:
    dialect = None
    for segment in segments:
        if segment.key == "ngdoc":
            dialect = segment.content
    return dialect


def parse_documentation_chunk(
    block: str, pure_doc: bool = False, default_module: str | None = None
) -> DocRecord | None:
    """Build a DocRecord from one comment block.

    The block is interpreted in three passes: segments are collected, the
    @ngdoc dialect is resolved, then every segment is interpreted knowing
    the dialect. An @ngdoc tag written after @name therefore still decides
    how the name is split.

    Returns:
        The record, or None when the block has no @ngdoc tag or does not
        follow the tag grammar.
    """
    segments = split_tag_segments(block, pure_doc)
    if not segments:
        return None
    if not any(segment.key == "ngdoc" for segment in segments):
        return None

    dialect = _resolve_dialect(segments)
    record = DocRecord(ngdoc=dialect)
    parent_name: str | None = None

    for segment in segments:
        key, content = segment.key, segment.content

        if key == "description" and pure_doc:
            content = _PURE_DOC_DESCRIPTION_RE.search(block).group(1)

        if key == "param":
            try:
                record.params.append(parse_param(content))
            except ParamSyntaxError as e:
                log.debug("Skipping block: %s", e)
                return None
        elif key in ("description", "example"):
            setattr(record, key, parse_markup(content))
        elif key == "scope":
            log.debug("Found @scope")
            record.scope = True
        elif key in _PARENT_TAGS:
            setattr(record, _PARENT_TAGS[key], content)
            parent_name = content
        elif key == "name":
            if dialect in _MEMBER_DIALECTS and ("#" in content or ":" in content):
                parts = re.split(r"[#:]", content)
                parent_name, content = parts[0], parts[1]
            elif default_module and not parent_name:
                parent_name = default_module
            record.name = content
        elif key == "ngdoc":
            record.ngdoc = content
        elif key == "module":
            record.module = content
        else:
            record.tags[key] = content

    if record.ngdoc != MODULE_DIALECT:
        record.parent_doc = ParentDoc(module=record.module, name=parent_name)

    return record


def parse_file(
    source: SourceFile, pure_doc_extensions: tuple[str, ...] | None = None
) -> list[DocRecord] | None:
    """Extract every documentation record from a source file.

    Returns None when the file holds no candidate comment block at all, and
    a (possibly empty) list of records otherwise.
    """
    if pure_doc_extensions is None:
        pure_doc_extensions = ExtractorConfig.pure_doc_extensions
    pure_doc = source.extension in pure_doc_extensions
    if pure_doc:
        blocks = [source.content]
    else:
        blocks = extract_comment_blocks(source.content)

    if not blocks:
        return None

    records = []
    for block in blocks:
        record = parse_documentation_chunk(block, pure_doc, None)
        if record is not None:
            record.file = source.file_name
            records.append(record)
    return records
