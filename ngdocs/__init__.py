"""ngdocs - Extract @ngdoc documentation records from annotated sources."""

from ngdocs.extractors import parse_documentation_chunk, parse_file
from ngdocs.index import DocIndex, IndexSealedError, SealedDocIndex
from ngdocs.markup import parse_markup
from ngdocs.models import (
    DocRecord,
    ExampleBlock,
    FileBlock,
    NgdocsError,
    ParamField,
    ParentDoc,
    SourceFile,
)
from ngdocs.params import ParamSyntaxError, parse_param
from ngdocs.resolver import backfill, backfill_all

__all__ = [
    "DocIndex",
    "DocRecord",
    "ExampleBlock",
    "FileBlock",
    "IndexSealedError",
    "NgdocsError",
    "ParamField",
    "ParamSyntaxError",
    "ParentDoc",
    "SealedDocIndex",
    "SourceFile",
    "backfill",
    "backfill_all",
    "parse_documentation_chunk",
    "parse_file",
    "parse_markup",
    "parse_param",
]
