"""Colour-cluster test deciding whether a segment merits pixel comparison."""

import logging
import warnings
from typing import Union
import cv2
import numpy as np
from sklearn.cluster import KMeans
from sklearn.exceptions import ConvergenceWarning

from ..result import Outcome
from ..utils import decode_image, ensure_color


class SegmentRelevanceClassifier:
    """Flag segments whose colours are not dominated by two clusters.

    Plain text on a flat background collapses into two colour clusters and is
    already covered by region matching; segments with richer colour content
    (figures, photos, charts) are the ones worth a pixel-level comparison.
    """

    def __init__(self, config: dict = None):
        """Initialize relevance classifier.

        Args:
            config: Relevance configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.clusters = self.config.get('clusters', 4)
        self.attempts = self.config.get('attempts', 2)
        self.max_iter = self.config.get('max_iter', 5)
        self.dominance_threshold = self.config.get('dominance_threshold', 0.8)
        self.random_state = self.config.get('random_state', 0)

    def dominance_ratio(self, segment: np.ndarray) -> float:
        """Share of pixels held by the two largest Lab colour clusters.

        Args:
            segment: Decoded segment image

        Returns:
            Ratio in (0, 1]
        """
        bgr = ensure_color(segment)
        lab = cv2.cvtColor(bgr, cv2.COLOR_BGR2Lab)
        pixels = lab.reshape(-1, 3).astype(np.float32)

        kmeans = KMeans(
            n_clusters=self.clusters,
            init='k-means++',
            n_init=self.attempts,
            max_iter=self.max_iter,
            random_state=self.random_state
        )
        # Flat segments hold fewer distinct colours than clusters
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', ConvergenceWarning)
            labels = kmeans.fit_predict(pixels)

        counts = np.sort(np.bincount(labels, minlength=self.clusters))[::-1]
        return float(counts[0] + counts[1]) / len(labels)

    def is_relevant(self, segment: Union[bytes, bytearray, np.ndarray]) -> Outcome:
        """Decide relevance behind the fail-soft boundary.

        Args:
            segment: Encoded segment buffer (as produced by the cropper) or array

        Returns:
            Outcome holding True when the segment should be compared pixel by pixel
        """
        try:
            image = segment if isinstance(segment, np.ndarray) else decode_image(segment)
            ratio = self.dominance_ratio(image)
            self.logger.debug(f"Segment dominance ratio: {ratio:.3f}")
            return Outcome.success(ratio < self.dominance_threshold)
        except Exception as e:
            self.logger.warning(f"Segment relevance check failed: {e}")
            return Outcome.from_exception(e)
