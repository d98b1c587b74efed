"""
Fill diagnostics for rendered documents.

Compares a render's actual page count and fill ratio against the requested
target and suggests which way density should move on a re-render:

- Overflow (more pages than requested): tighten, density + 1
- Under-fill (fill ratio below the threshold without overflowing): loosen,
  density - 1

Diagnostics are hierarchical so per-page checks can hang off the document
level later without changing how callers read issues.
"""

from dataclasses import dataclass, field
from typing import List

DEFAULT_UNDERFILL_THRESHOLD = 0.85


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {intended})"
    UNDERFILLED = "Content fills {ratio:.0%} of {pages} page(s) (threshold {threshold:.0%})"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class FillDiagnostics(Diagnostics):
    """Document-level fit of one render against its target page count."""

    actual_pages: int = 0
    target_pages: int = 1
    fill_ratio: float = 0.0
    underfill_threshold: float = DEFAULT_UNDERFILL_THRESHOLD

    @property
    def overflowed(self) -> bool:
        return self.actual_pages > self.target_pages

    @property
    def underfilled(self) -> bool:
        return not self.overflowed and self.fill_ratio < self.underfill_threshold

    @property
    def suggested_density_step(self) -> int:
        """+1 to tighten, -1 to loosen, 0 to keep the current density."""
        if self.overflowed:
            return 1
        if self.underfilled:
            return -1
        return 0

    def get_issues(self) -> List[str]:
        issues = []
        if self.actual_pages != self.target_pages:
            issues.append(
                IssueTemplates.PAGE_COUNT_MISMATCH.format(
                    actual=self.actual_pages, intended=self.target_pages
                )
            )
        if self.underfilled:
            issues.append(
                IssueTemplates.UNDERFILLED.format(
                    ratio=self.fill_ratio,
                    pages=self.target_pages,
                    threshold=self.underfill_threshold,
                )
            )
        return issues


def analyze_fill(
    actual_pages: int,
    target_pages: int,
    fill_ratio: float,
    underfill_threshold: float = DEFAULT_UNDERFILL_THRESHOLD,
) -> FillDiagnostics:
    """
    Diagnose a render's fit.

    Example:
        >>> analyze_fill(2, 1, 1.0).suggested_density_step
        1
        >>> analyze_fill(1, 1, 0.95).is_valid
        True
    """
    return FillDiagnostics(
        actual_pages=actual_pages,
        target_pages=target_pages,
        fill_ratio=fill_ratio,
        underfill_threshold=underfill_threshold,
    )
