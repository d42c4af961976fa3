"""Page comparison pipeline.

Coordinates all stages for a page pair: segmentation of both sides → region
matching → cropping of both sides.
"""

import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor, as_completed

from .utils import ImageSource, load_config, read_image, setup_logging
from .result import Outcome
from .preprocessing import Polarity
from .segmentation import DocumentSegmenter
from .matching import RegionMatcher
from .cropping import RegionCropper, SegmentRelevanceClassifier


@dataclass
class PageComparison:
    """Complete comparison result for one page pair."""
    page_index: int
    original: Outcome   # RegionSet of the original page
    converted: Outcome  # RegionSet of the converted page
    match: Outcome      # MatchResult
    original_segments: Optional[Outcome] = None   # PNG buffers per original region
    converted_segments: Optional[Outcome] = None  # PNG buffers per converted region
    processing_time: float = 0.0

    @property
    def available(self) -> bool:
        """Whether segmentation and matching succeeded for both sides."""
        return self.original.ok and self.converted.ok and self.match.ok

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization.

        Segment buffers are summarised by count; the buffers themselves stay
        with the caller.
        """
        def segment_count(outcome: Optional[Outcome]) -> Optional[int]:
            if outcome is None or not outcome.ok:
                return None
            return len(outcome.value)

        return {
            'page_index': self.page_index,
            'available': self.available,
            'original_regions': self.original.to_dict(),
            'converted_regions': self.converted.to_dict(),
            'match': self.match.to_dict(),
            'original_segment_count': segment_count(self.original_segments),
            'converted_segment_count': segment_count(self.converted_segments),
            'processing_time': self.processing_time
        }


def page_check_indexes(page_count: int, at_a_time: int) -> List[Tuple[int, int]]:
    """Split pages into inclusive (start, end) intervals of bounded length.

    Args:
        page_count: Number of pages in the document
        at_a_time: Maximum number of pages handled per interval

    Returns:
        Intervals covering every page index exactly once
    """
    if at_a_time < 1:
        raise ValueError(f"at_a_time must be positive, got {at_a_time}")

    intervals = []
    start = 0
    while start < page_count:
        end = min(start + at_a_time - 1, page_count - 1)
        intervals.append((start, end))
        start += at_a_time
    return intervals


class LayoutComparisonPipeline:
    """Main pipeline comparing the visual layout of page pairs."""

    def __init__(self, config_path: Union[str, Path, None] = None,
                 config: Optional[Dict] = None):
        """Initialize comparison pipeline.

        Args:
            config_path: Path to a YAML configuration file
            config: Configuration dictionary, used when no path is given
        """
        # Load configuration
        if config_path is not None:
            self.config = load_config(config_path)
        else:
            self.config = config or {}

        # Setup logging
        setup_logging(self.config.get('logging', {}))
        self.logger = logging.getLogger(__name__)

        # Initialize components
        self.segmenter = DocumentSegmenter(self.config)
        self.matcher = RegionMatcher(self.config.get('matching', {}))
        self.cropper = RegionCropper(self.config.get('cropping', {}))
        self.relevance = SegmentRelevanceClassifier(self.config.get('relevance', {}))

        self.logger.debug("Layout comparison pipeline initialized")

    def _load(self, source: ImageSource) -> Outcome:
        try:
            return Outcome.success(read_image(source))
        except Exception as e:
            self.logger.warning(f"Failed to read page image: {e}")
            return Outcome.from_exception(e)

    def _segment(self, loaded: Outcome, polarity: Polarity, dense_layout: bool) -> Outcome:
        if not loaded.ok:
            return loaded
        return self.segmenter.segment(loaded.value, polarity, dense_layout)

    def _crop(self, loaded: Outcome, regions: Outcome) -> Outcome:
        if not regions.ok:
            return regions
        if not regions.value:
            return Outcome.success([])
        return self.cropper.crop(loaded.value, regions.value)

    def compare_pages(self,
                      original: ImageSource,
                      converted: ImageSource,
                      page_index: int = 0,
                      polarity: Polarity = Polarity.AUTO,
                      dense_layout: bool = False,
                      crop_segments: bool = True) -> PageComparison:
        """Compare one original page image against its converted counterpart.

        Args:
            original: Page image of the original document
            converted: Page image of the converted document
            page_index: Index of the page, carried into the result
            polarity: Background polarity applied to both sides
            dense_layout: Whether the pages have large, widely spaced blocks
            crop_segments: Whether to produce PNG buffers for every region

        Returns:
            PageComparison object
        """
        start_time = time.time()

        original_image = self._load(original)
        converted_image = self._load(converted)

        original_regions = self._segment(original_image, polarity, dense_layout)
        converted_regions = self._segment(converted_image, polarity, dense_layout)

        if original_regions.ok and converted_regions.ok:
            match = self.matcher.match(original_regions.value, converted_regions.value)
        else:
            failed = original_regions if not original_regions.ok else converted_regions
            match = Outcome.from_failure(failed.failure, failed.message)

        original_segments = converted_segments = None
        if crop_segments:
            original_segments = self._crop(original_image, original_regions)
            converted_segments = self._crop(converted_image, converted_regions)

        comparison = PageComparison(
            page_index=page_index,
            original=original_regions,
            converted=converted_regions,
            match=match,
            original_segments=original_segments,
            converted_segments=converted_segments,
            processing_time=time.time() - start_time
        )

        if match.ok:
            result = match.value
            self.logger.info(
                f"Page {page_index}: {len(result.matches)} matched, "
                f"{len(result.unmatched_original)} unmatched original, "
                f"{len(result.unmatched_converted)} unmatched converted"
            )
        else:
            self.logger.warning(f"Page {page_index}: comparison unavailable ({match.message})")

        return comparison

    def relevant_segment_indexes(self, segments: Outcome) -> List[int]:
        """Indexes of cropped segments that merit pixel-level comparison.

        Segments whose relevance check fails are included so the scorer still
        sees them.
        """
        if segments is None or not segments.ok:
            return []

        indexes = []
        for index, segment in enumerate(segments.value):
            relevant = self.relevance.is_relevant(segment)
            if relevant.unwrap_or(True):
                indexes.append(index)
        return indexes

    def compare_documents(self,
                          original_pages: Sequence[ImageSource],
                          converted_pages: Sequence[ImageSource],
                          polarity: Polarity = Polarity.AUTO,
                          dense_layout: bool = False,
                          crop_segments: bool = True,
                          max_workers: Optional[int] = None) -> List[PageComparison]:
        """Compare page lists of two documents in parallel.

        Args:
            original_pages: Page images of the original document
            converted_pages: Page images of the converted document
            polarity: Background polarity applied to every page
            dense_layout: Whether the pages have large, widely spaced blocks
            crop_segments: Whether to produce PNG buffers for every region
            max_workers: Maximum number of parallel workers (default from config)

        Returns:
            List of PageComparison objects in page order
        """
        if max_workers is None:
            max_workers = self.config.get('batch', {}).get('max_workers', 4)

        if len(original_pages) != len(converted_pages):
            self.logger.warning(
                f"Page count differs ({len(original_pages)} original, "
                f"{len(converted_pages)} converted); comparing common pages only"
            )

        page_pairs = list(zip(original_pages, converted_pages))
        self.logger.info(f"Comparing {len(page_pairs)} pages with {max_workers} workers")

        results = {}

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_page = {
                executor.submit(
                    self.compare_pages, original, converted, index,
                    polarity, dense_layout, crop_segments
                ): index
                for index, (original, converted) in enumerate(page_pairs)
            }

            for future in as_completed(future_to_page):
                index = future_to_page[future]
                results[index] = future.result()

        return [results[index] for index in range(len(page_pairs))]
