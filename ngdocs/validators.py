"""Documentation validation and quality checks."""

from __future__ import annotations

from .index import SealedDocIndex
from .models import ValidationResult


def validate_records(index: SealedDocIndex, strict: bool = False) -> ValidationResult:
    """Validate back-filled records.

    Checks:
    1. Every record should belong to a module (warning in normal mode, error in strict)
    2. Every record should have a @name (warning)

    Args:
        index: Sealed index, after backfill
        strict: If True, unresolved modules are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for file_name, docs in index.items():
        for doc in docs:
            label = f"{file_name}: {doc.name or '<unnamed>'} ({doc.ngdoc})"

            if not doc.name:
                result.warnings.append(f"{label}: missing @name")

            if not doc.module and not doc.is_module:
                msg = f"{label}: no module declared or found in parent directories"
                if strict:
                    result.errors.append(msg)
                else:
                    result.warnings.append(msg)

    return result


def compute_coverage(index: SealedDocIndex) -> dict[str, float]:
    """Compute how many records ended up with a module.

    Returns:
        Dict with 'records', 'resolved' and 'module' coverage (0.0 - 1.0)
    """
    members = [doc for doc in index.records() if not doc.is_module]
    resolved = sum(1 for doc in members if doc.module)
    return {
        "records": len(members),
        "resolved": resolved,
        "module": resolved / len(members) if members else 1.0,
    }
