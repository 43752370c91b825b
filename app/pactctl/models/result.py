"""Result models for apply and sync operations.

Every attempted action produces exactly one Result. A batch of Results is
the unit handed to the presentation layer; batches are never aborted by a
single failing item.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResultCategory(str, Enum):
    """Kind of side effect a Result describes."""

    INSTALL = "install"
    CONFIGURE = "configure"
    FILE = "file"
    FONT = "font"
    EXTENSION = "extension"
    APP = "app"


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of one apply or sync operation.

    Attributes:
        category: Kind of side effect.
        module: Top-level manifest module the item belongs to.
        name: Item name (tool, file, setting key, ...).
        success: Whether the desired state was reached.
        skipped: True when nothing had to be done (already satisfied).
        message: Human-readable outcome.
        error: Error text when the operation failed.
    """

    category: ResultCategory
    module: str
    name: str
    success: bool
    skipped: bool = False
    message: str = ""
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success

    @property
    def applied(self) -> bool:
        """Check if the operation changed something."""
        return self.success and not self.skipped

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "category": self.category.value,
            "module": self.module,
            "name": self.name,
            "success": self.success,
            "skipped": self.skipped,
            "message": self.message,
            "error": self.error,
        }


def ok(category: ResultCategory, module: str, name: str, message: str) -> Result:
    """Create a Result for an applied change."""
    return Result(category=category, module=module, name=name, success=True, message=message)


def skipped(category: ResultCategory, module: str, name: str, message: str) -> Result:
    """Create a Result for an already-satisfied item."""
    return Result(
        category=category,
        module=module,
        name=name,
        success=True,
        skipped=True,
        message=message,
    )


def failed(category: ResultCategory, module: str, name: str, error: str) -> Result:
    """Create a Result for a failed operation."""
    return Result(category=category, module=module, name=name, success=False, error=error)


@dataclass(frozen=True, slots=True)
class ResultSummary:
    """Tally of a batch of Results."""

    applied: int
    skipped: int
    failed: int

    @property
    def total(self) -> int:
        """Total number of Results counted."""
        return self.applied + self.skipped + self.failed

    @property
    def has_failures(self) -> bool:
        """Check if any Result failed."""
        return self.failed > 0


def summarize_results(results: Iterable[Result]) -> ResultSummary:
    """Count applied, skipped and failed Results.

    Args:
        results: Results of one batch.

    Returns:
        ResultSummary with the three counts.
    """
    applied = skipped_count = failed_count = 0
    for result in results:
        if result.failed:
            failed_count += 1
        elif result.skipped:
            skipped_count += 1
        else:
            applied += 1
    return ResultSummary(applied=applied, skipped=skipped_count, failed=failed_count)
