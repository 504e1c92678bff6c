"""Documentation extractor for @ngdoc annotated sources.

Usage:
    ngdocs src/                  - Print extracted records as JSON
    ngdocs src/ -o docs.json     - Write them to a file
    ngdocs src/ --strict         - Fail if a record has no module
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .extractors import parse_file
from .index import DocIndex, SealedDocIndex
from .models import ExtractorConfig, SourceFile
from .resolver import backfill_all
from .validators import compute_coverage, validate_records

log = logging.getLogger(__name__)


def discover_files(root: Path, config: ExtractorConfig) -> list[SourceFile]:
    """Read every source and .ngdoc file under root, sorted by path."""
    extensions = set(config.source_extensions) | set(config.pure_doc_extensions)
    files = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root)
        if any(part in config.exclude_dirs for part in rel.parts[:-1]):
            continue
        extension = path.suffix[1:]
        if extension not in extensions:
            continue
        files.append(
            SourceFile(
                file_name=rel.as_posix(),
                extension=extension,
                content=path.read_text(encoding="utf-8"),
            )
        )
    return files


def build_index(files: list[SourceFile], config: ExtractorConfig) -> SealedDocIndex:
    """Parse every file, seal the index, then back-fill modules."""
    index = DocIndex()
    for source in files:
        records = parse_file(source, config.pure_doc_extensions)
        if records is None:
            log.debug("No comment blocks in %s", source.file_name)
            continue
        index.add(source.file_name, records)

    sealed = index.seal()
    backfill_all(sealed)
    return sealed


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ngdocs", description="Extract @ngdoc documentation records."
    )
    parser.add_argument("root", type=Path, help="Directory to scan")
    parser.add_argument("-o", "--output", type=Path, help="JSON output file")
    parser.add_argument(
        "--ext",
        action="append",
        help="Source file extension to scan (repeatable, default: js)",
    )
    parser.add_argument(
        "--ngdoc-ext",
        action="append",
        help="Extension of pure documentation files (repeatable, default: ngdoc)",
    )
    parser.add_argument(
        "--exclude", action="append", default=[], help="Directory name to skip"
    )
    parser.add_argument(
        "--strict", action="store_true", help="Fail on records without a module"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Extract, validate and write documentation records."""
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ExtractorConfig()
    if args.ext:
        config.source_extensions = tuple(e.lstrip(".") for e in args.ext)
    if args.ngdoc_ext:
        config.pure_doc_extensions = tuple(e.lstrip(".") for e in args.ngdoc_ext)
    config.exclude_dirs = config.exclude_dirs + tuple(args.exclude)

    if not args.root.is_dir():
        print(f"✗ {args.root} is not a directory", file=sys.stderr)
        return 2

    print(f"Extracting docs from {args.root}...", file=sys.stderr)
    files = discover_files(args.root, config)
    index = build_index(files, config)

    record_count = sum(len(docs) for docs in index.values())
    print(
        f"  ✓ {record_count} records in {len(index)}/{len(files)} files",
        file=sys.stderr,
    )

    validation = validate_records(index, strict=args.strict)
    for warning in validation.warnings:
        print(f"  ⚠ {warning}", file=sys.stderr)
    if validation.errors:
        print("\nValidation errors:", file=sys.stderr)
        for err in validation.errors:
            print(f"  ✗ {err}", file=sys.stderr)
        return 1

    coverage = compute_coverage(index)
    print(f"\nModule coverage: {coverage['module']:.0%}", file=sys.stderr)

    payload = {
        file_name: [doc.to_dict() for doc in docs] for file_name, docs in index.items()
    }
    output = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        print(f"  {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
