"""Segmentation pipeline: page image in, ordered RegionSet out."""

import logging
from typing import Optional

from ..preprocessing import ImagePreprocessor, Polarity
from ..result import Outcome, ProcessingFailure
from ..utils import ImageSource, read_image
from .deduplication import deduplicate_and_order
from .region import RegionSet
from .region_extractor import RegionExtractor


class DocumentSegmenter:
    """Orchestrate binarization, region extraction and deduplication."""

    def __init__(self, config: dict = None):
        """Initialize segmentation pipeline.

        Args:
            config: Full configuration dictionary; the ``preprocessing`` and
                ``segmentation`` sections are used
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        segmentation_config = self.config.get('segmentation', {})
        self.preprocessor = ImagePreprocessor(self.config.get('preprocessing', {}))
        self.extractor = RegionExtractor(segmentation_config)

        # Work caps; None disables the cap
        self.max_regions = segmentation_config.get('max_regions')
        self.max_image_pixels = segmentation_config.get('max_image_pixels', 100_000_000)
        for name in ('max_regions', 'max_image_pixels'):
            cap = getattr(self, name)
            if cap is not None and cap < 1:
                raise ValueError(f"{name} must be at least 1 or null, got {cap}")

    def segment_regions(self, source: ImageSource,
                        polarity: Polarity = Polarity.AUTO,
                        dense_layout: bool = False) -> RegionSet:
        """Segment a page image, raising on failure.

        Args:
            source: Decoded array, encoded bytes, or image path
            polarity: Background polarity
            dense_layout: Whether the page has large, widely spaced blocks

        Returns:
            Regions in reading order
        """
        image = read_image(source)

        pixels = image.shape[0] * image.shape[1]
        if self.max_image_pixels is not None and pixels > self.max_image_pixels:
            raise ProcessingFailure(
                f"Image has {pixels} pixels, above the limit of {self.max_image_pixels}"
            )

        binarized = self.preprocessor.binarize(image, polarity)
        candidates = self.extractor.find_regions(binarized.binary, dense_layout)
        regions = deduplicate_and_order(candidates)

        if self.max_regions is not None and len(regions) > self.max_regions:
            self.logger.warning(f"Too many regions ({len(regions)}), limiting to {self.max_regions}")
            regions = regions[:self.max_regions]

        self.logger.debug(
            f"Segmented page into {len(regions)} regions "
            f"({len(candidates)} candidates, {binarized.polarity.value} background)"
        )
        return regions

    def segment(self, source: ImageSource,
                polarity: Polarity = Polarity.AUTO,
                dense_layout: bool = False) -> Outcome:
        """Segment a page image behind the fail-soft boundary.

        Args:
            source: Decoded array, encoded bytes, or image path
            polarity: Background polarity
            dense_layout: Whether the page has large, widely spaced blocks

        Returns:
            Outcome holding the RegionSet, or a failure
        """
        try:
            return Outcome.success(self.segment_regions(source, polarity, dense_layout))
        except Exception as e:
            self.logger.warning(f"Segmentation failed: {e}")
            return Outcome.from_exception(e)


def segment_document_image(source: ImageSource,
                           polarity: Polarity = Polarity.AUTO,
                           dense_layout: bool = False,
                           config: Optional[dict] = None) -> Outcome:
    """Convenience function to segment a single page image.

    Args:
        source: Decoded array, encoded bytes, or image path
        polarity: Background polarity
        dense_layout: Whether the page has large, widely spaced blocks
        config: Optional configuration dictionary

    Returns:
        Outcome holding the RegionSet, or a failure
    """
    segmenter = DocumentSegmenter(config)
    return segmenter.segment(source, polarity, dense_layout)
