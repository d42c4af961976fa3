"""Layout QA - visual region segmentation and matching for document conversion checks."""

__version__ = "1.0.0"

from .result import FailureKind, Outcome
from .preprocessing import ImagePreprocessor, Polarity
from .segmentation import DocumentSegmenter, Region, segment_document_image
from .matching import Match, MatchResult, RegionMatcher
from .cropping import RegionCropper, SegmentRelevanceClassifier
from .pipeline import LayoutComparisonPipeline, PageComparison, page_check_indexes
from .utils import load_config, setup_logging

__all__ = [
    "FailureKind",
    "Outcome",
    "ImagePreprocessor",
    "Polarity",
    "DocumentSegmenter",
    "Region",
    "segment_document_image",
    "Match",
    "MatchResult",
    "RegionMatcher",
    "RegionCropper",
    "SegmentRelevanceClassifier",
    "LayoutComparisonPipeline",
    "PageComparison",
    "page_check_indexes",
    "load_config",
    "setup_logging",
]
