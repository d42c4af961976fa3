"""Grayscale conversion, background polarity and Otsu binarization.

Content pixels always come out as the high value (255) regardless of whether
the page has a light or a dark background.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import cv2
import numpy as np

from ..result import EmptyInput, Outcome
from ..utils import ensure_grayscale


class Polarity(Enum):
    """Background polarity of a page."""
    AUTO = "auto"
    FORCE_LIGHT = "light"
    FORCE_DARK = "dark"


@dataclass
class BinarizedImage:
    """Binary page image with the decisions that produced it."""
    binary: np.ndarray
    polarity: Polarity  # resolved, never AUTO
    threshold: float
    mean_intensity: float

    @property
    def light_background(self) -> bool:
        return self.polarity is Polarity.FORCE_LIGHT


class ImagePreprocessor:
    """Turns a decoded page image into a foreground-high binary mask."""

    def __init__(self, config: dict = None):
        """Initialize preprocessor.

        Args:
            config: Preprocessing configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        # Mean grayscale intensity above which a page counts as light
        self.light_background_threshold = self.config.get('light_background_threshold', 130)

    def resolve_polarity(self, mean_intensity: float,
                         polarity: Polarity = Polarity.AUTO) -> Polarity:
        """Resolve AUTO into a concrete polarity from mean intensity."""
        if polarity is not Polarity.AUTO:
            return polarity
        if mean_intensity > self.light_background_threshold:
            return Polarity.FORCE_LIGHT
        return Polarity.FORCE_DARK

    def binarize(self, image: np.ndarray,
                 polarity: Optional[Polarity] = None) -> BinarizedImage:
        """Binarize an image, raising on failure.

        Args:
            image: Decoded image (gray, BGR or BGRA)
            polarity: Background polarity, AUTO when omitted

        Returns:
            BinarizedImage with content pixels set to 255
        """
        if image is None or image.size == 0:
            raise EmptyInput("Cannot binarize an empty image")

        gray = ensure_grayscale(image)
        if gray.dtype != np.uint8:
            gray = cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

        mean_intensity = float(cv2.mean(gray)[0])
        resolved = self.resolve_polarity(mean_intensity, polarity or Polarity.AUTO)

        # Light pages have dark content, so the threshold direction is inverted
        threshold_type = (cv2.THRESH_BINARY_INV if resolved is Polarity.FORCE_LIGHT
                          else cv2.THRESH_BINARY)
        threshold, binary = cv2.threshold(gray, 0, 255, threshold_type | cv2.THRESH_OTSU)

        self.logger.debug(
            f"Binarized {gray.shape[1]}x{gray.shape[0]} image: mean={mean_intensity:.1f}, "
            f"polarity={resolved.value}, otsu={threshold:.1f}"
        )

        return BinarizedImage(
            binary=binary,
            polarity=resolved,
            threshold=float(threshold),
            mean_intensity=mean_intensity
        )

    def process(self, image: np.ndarray,
                polarity: Polarity = Polarity.AUTO) -> Outcome:
        """Binarize an image behind the fail-soft boundary.

        Args:
            image: Decoded image
            polarity: Background polarity

        Returns:
            Outcome holding a BinarizedImage, or a failure
        """
        try:
            return Outcome.success(self.binarize(image, polarity))
        except Exception as e:
            self.logger.warning(f"Binarization failed: {e}")
            return Outcome.from_exception(e)
