"""Page segmentation module.

Provides region extraction, deduplication and the segmentation pipeline.
"""

from .region import Region, RegionSet, iou
from .region_extractor import RegionExtractor
from .deduplication import RegionDeduplicator, deduplicate_and_order, order_regions, remove_nested
from .segmentation_pipeline import DocumentSegmenter, segment_document_image

__all__ = [
    'Region',
    'RegionSet',
    'iou',
    'RegionExtractor',
    'RegionDeduplicator',
    'deduplicate_and_order',
    'order_regions',
    'remove_nested',
    'DocumentSegmenter',
    'segment_document_image'
]
