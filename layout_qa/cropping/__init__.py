"""Region cropping module."""

from .cropper import RegionCropper
from .relevance import SegmentRelevanceClassifier

__all__ = ['RegionCropper', 'SegmentRelevanceClassifier']
