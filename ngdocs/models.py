"""Data models for ngdoc extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

DOC_TYPE = "ngdoc"
UNDEFINED_TYPE = "undefined"  # ParamField.type when no {type} token was given
MODULE_DIALECT = "module"


class NgdocsError(Exception):
    """Base exception for ngdocs operations."""

    pass


@dataclass(frozen=True)
class SourceFile:
    """One input file, as supplied by file discovery."""

    file_name: str  # "src/ng/http.js", also used as a directory path
    extension: str  # "js" | "ngdoc", no leading dot
    content: str


@dataclass
class ExtractorConfig:
    """Which files are scanned, and which are read as pure documentation."""

    source_extensions: tuple[str, ...] = ("js",)
    pure_doc_extensions: tuple[str, ...] = ("ngdoc",)
    exclude_dirs: tuple[str, ...] = ("node_modules", ".git", "bower_components")


@dataclass
class ParamType:
    name: str  # As written: "Function"
    type: str  # Normalized: "function"


@dataclass
class ParamField:
    """A parsed @param declaration."""

    type: list[ParamType] | str  # UNDEFINED_TYPE when no {...} token
    var_name: str
    description: str
    alt_name: str | None = None
    optional: bool = False
    default_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": (
                self.type
                if isinstance(self.type, str)
                else [{"name": t.name, "type": t.type} for t in self.type]
            ),
            "varName": self.var_name,
            "altName": self.alt_name,
            "description": self.description,
            "optional": self.optional,
            "defaultValue": self.default_value,
        }


@dataclass
class FileBlock:
    name: str | None
    content: str = ""
    src: str | None = None


@dataclass
class ExampleBlock:
    """An <example> container and its <file> children."""

    module: str | None = None
    deps: str | None = None
    files: list[FileBlock] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "module": self.module,
            "deps": self.deps,
            "files": [
                {"name": f.name, "content": f.content, "src": f.src}
                for f in self.files
            ],
        }


# Plain text runs are kept as str
MarkupSegment = Union[str, ExampleBlock]


@dataclass
class ParentDoc:
    module: str | None = None
    name: str | None = None


@dataclass
class DocRecord:
    """One documentation record built from a single comment block.

    Known tags get their own fields; every other tag lands in ``tags``
    verbatim.
    """

    ngdoc: str | None = None  # Dialect marker: "method", "module", "directive", ...
    name: str | None = None
    module: str | None = None
    file: str | None = None
    params: list[ParamField] = field(default_factory=list)
    description: list[MarkupSegment] | None = None
    example: list[MarkupSegment] | None = None
    scope: bool = False
    method_of: str | None = None
    property_of: str | None = None
    event_of: str | None = None
    member_of: str | None = None
    parent_doc: ParentDoc | None = None  # None only for module declarations
    tags: dict[str, str] = field(default_factory=dict)
    doc_type: str = DOC_TYPE

    @property
    def is_module(self) -> bool:
        return self.ngdoc == MODULE_DIALECT

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the renderer expects."""
        data: dict[str, Any] = dict(self.tags)
        data.update(
            {
                "docType": self.doc_type,
                "params": [p.to_dict() for p in self.params],
                "file": self.file,
            }
        )
        optional = {
            "ngdoc": self.ngdoc,
            "name": self.name,
            "module": self.module,
            "methodOf": self.method_of,
            "propertyOf": self.property_of,
            "eventOf": self.event_of,
            "memberOf": self.member_of,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        for key in ("description", "example"):
            segments = getattr(self, key)
            if segments is not None:
                data[key] = [
                    s if isinstance(s, str) else s.to_dict() for s in segments
                ]
        if self.scope:
            data["scope"] = True
        if self.parent_doc is not None:
            data["parentDoc"] = {
                "module": self.parent_doc.module,
                "name": self.parent_doc.name,
            }
        return data


@dataclass
class ValidationResult:
    """Results from record validation."""

    errors: list[str] = field(default_factory=list)  # CLI fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
