"""Contour-based extraction of content blocks from a binary page image."""

import logging
from typing import List
import cv2
import numpy as np

from ..result import EmptyInput, Outcome, ProcessingFailure
from .region import Region


class RegionExtractor:
    """Merge nearby marks into blocks and box each block."""

    def __init__(self, config: dict = None):
        """Initialize region extractor.

        Args:
            config: Segmentation configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        # Get configuration parameters
        self.kernel_size = self.config.get('kernel_size', 5)
        self.dilation_iterations = self.config.get('dilation_iterations', 3)
        self.dense_dilation_iterations = self.config.get('dense_dilation_iterations', 4)
        self.min_region_size = self.config.get('min_region_size', 10)

        self.kernel = cv2.getStructuringElement(
            cv2.MORPH_RECT, (self.kernel_size, self.kernel_size), (-1, -1)
        )

    def dilate(self, binary: np.ndarray, dense_layout: bool = False) -> np.ndarray:
        """Bridge gaps between glyphs and strokes so they form blocks.

        Args:
            binary: Foreground-high binary image
            dense_layout: Use the extra iteration for slide-style pages

        Returns:
            Dilated binary image
        """
        iterations = self.dense_dilation_iterations if dense_layout else self.dilation_iterations
        return cv2.dilate(binary, self.kernel, anchor=(-1, -1), iterations=iterations)

    def is_noise(self, box: Region) -> bool:
        """Boxes this small are specks rather than content."""
        return box.width <= self.min_region_size or box.height <= self.min_region_size

    def find_regions(self, binary: np.ndarray, dense_layout: bool = False) -> List[Region]:
        """Extract candidate regions, raising on failure.

        Args:
            binary: Foreground-high single-channel binary image
            dense_layout: Whether the page has large, widely spaced blocks

        Returns:
            Unordered list of candidate regions
        """
        if binary is None or binary.size == 0:
            raise EmptyInput("Cannot extract regions from an empty image")
        if binary.ndim != 2:
            raise ProcessingFailure(f"Expected a single-channel image, got shape {binary.shape}")

        dilated = self.dilate(binary, dense_layout)

        # Outer contours only; holes and nested shapes are ignored
        contours, _ = cv2.findContours(dilated, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

        self.logger.debug(f"Found {len(contours)} contours")

        regions = []
        for contour in contours:
            box = Region.from_tuple(cv2.boundingRect(contour))
            if self.is_noise(box):
                continue
            regions.append(box)

        self.logger.debug(f"Kept {len(regions)} regions after noise filtering")
        return regions

    def extract(self, binary: np.ndarray, dense_layout: bool = False) -> Outcome:
        """Extract candidate regions behind the fail-soft boundary.

        Args:
            binary: Foreground-high binary image
            dense_layout: Whether the page has large, widely spaced blocks

        Returns:
            Outcome holding a list of regions, or a failure
        """
        try:
            return Outcome.success(self.find_regions(binary, dense_layout))
        except Exception as e:
            self.logger.warning(f"Region extraction failed: {e}")
            return Outcome.from_exception(e)
