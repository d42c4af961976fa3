"""Findings handed to the result reporter for visual segment checks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Set


class Severity(Enum):
    """How serious a finding is."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorType(Enum):
    """Which kind of check produced a finding."""
    VISUAL = "visual"
    FILE_ERROR = "file_error"


class ErrorCategory(Enum):
    """Page-level problems detected by segment comparison."""
    UNPAIRED_SEGMENTS = "unpaired_segments"
    MISALIGNED_SEGMENTS = "misaligned_segments"
    SEGMENT_EXTRACTION_FAILED = "segment_extraction_failed"
    VISUAL_COMPARISON_FAILED = "visual_comparison_failed"


@dataclass
class Finding:
    """A single reportable problem and the pages it occurred on."""
    name: str
    description: str
    severity: Severity
    error_type: ErrorType
    pages: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            'name': self.name,
            'description': self.description,
            'severity': self.severity.value,
            'error_type': self.error_type.value,
            'pages': self.pages
        }


_CATEGORY_DETAILS = {
    ErrorCategory.UNPAIRED_SEGMENTS: (
        "Mismatch in detected points of interest",
        "The original or the converted document contains points of interest that could "
        "not be paired. Noise may have been added or removed, content may be missing or "
        "added, or the document structure differs substantially.",
        Severity.HIGH,
        ErrorType.VISUAL
    ),
    ErrorCategory.MISALIGNED_SEGMENTS: (
        "Misaligned points of interest",
        "Some segments of the document have moved further than allowed.",
        Severity.HIGH,
        ErrorType.VISUAL
    ),
    ErrorCategory.SEGMENT_EXTRACTION_FAILED: (
        "Error getting pages",
        "Segments could not be extracted for visual comparison. This is an internal "
        "error, possibly caused by an issue in the file.",
        Severity.MEDIUM,
        ErrorType.FILE_ERROR
    ),
    ErrorCategory.VISUAL_COMPARISON_FAILED: (
        "Visual segment comparison failed",
        "At least one segment failed the visual comparison.",
        Severity.HIGH,
        ErrorType.VISUAL
    ),
}


def write_findings(error_pages: Mapping[ErrorCategory, Iterable[int]]) -> List[Finding]:
    """Build one finding per category that has at least one affected page.

    Args:
        error_pages: Page indexes per problem category

    Returns:
        Findings in category declaration order, pages sorted
    """
    findings = []
    for category in ErrorCategory:
        pages: Set[int] = set(error_pages.get(category, ()))
        if not pages:
            continue
        name, description, severity, error_type = _CATEGORY_DETAILS[category]
        findings.append(Finding(
            name=name,
            description=description,
            severity=severity,
            error_type=error_type,
            pages=sorted(pages)
        ))
    return findings


def pages_with_unmatched(comparisons: Iterable) -> Set[int]:
    """Pages whose region matching left regions without a partner."""
    return {
        c.page_index for c in comparisons
        if c.match.ok and not c.match.value.fully_matched
    }


def pages_unavailable(comparisons: Iterable) -> Set[int]:
    """Pages where either side could not be segmented or matched."""
    return {c.page_index for c in comparisons if not c.available}


def pages_misaligned(comparisons: Iterable, min_alignment_iou: float) -> Set[int]:
    """Pages holding a matched pair whose overlap is below ``min_alignment_iou``."""
    return {
        c.page_index for c in comparisons
        if c.match.ok and any(m.iou < min_alignment_iou for m in c.match.value.matches)
    }


def collect_error_pages(comparisons: Iterable,
                        min_alignment_iou: Optional[float] = None) -> Dict[ErrorCategory, Set[int]]:
    """Group page comparison outcomes into finding categories.

    Args:
        comparisons: PageComparison objects
        min_alignment_iou: Matched pairs below this IoU count as misaligned;
            misalignment is not checked when omitted

    Returns:
        Page indexes per category
    """
    comparisons = list(comparisons)
    error_pages = {
        ErrorCategory.UNPAIRED_SEGMENTS: pages_with_unmatched(comparisons),
        ErrorCategory.SEGMENT_EXTRACTION_FAILED: pages_unavailable(comparisons),
    }
    if min_alignment_iou is not None:
        error_pages[ErrorCategory.MISALIGNED_SEGMENTS] = pages_misaligned(
            comparisons, min_alignment_iou
        )
    return error_pages
