"""Overlap-based pairing of regions between original and converted pages."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple
import numpy as np
from scipy.optimize import linear_sum_assignment

from ..result import Outcome
from ..segmentation.region import Region


@dataclass(frozen=True)
class Match:
    """A paired region and its overlap score."""
    original: Region
    converted: Region
    iou: float

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            'original': self.original.to_dict(),
            'converted': self.converted.to_dict(),
            'iou': self.iou
        }


@dataclass(frozen=True)
class MatchResult:
    """Pairs plus the regions on each side that found no partner."""
    matches: Tuple[Match, ...] = ()
    unmatched_original: Tuple[Region, ...] = ()
    unmatched_converted: Tuple[Region, ...] = ()

    @property
    def fully_matched(self) -> bool:
        return not self.unmatched_original and not self.unmatched_converted

    @property
    def mean_iou(self) -> float:
        if not self.matches:
            return 0.0
        return sum(m.iou for m in self.matches) / len(self.matches)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            'matches': [m.to_dict() for m in self.matches],
            'unmatched_original': [r.to_dict() for r in self.unmatched_original],
            'unmatched_converted': [r.to_dict() for r in self.unmatched_converted],
            'mean_iou': self.mean_iou
        }


class RegionMatcher:
    """Pair regions across two RegionSets by Intersection over Union."""

    STRATEGIES = ('greedy', 'optimal')

    def __init__(self, config: dict = None):
        """Initialize region matcher.

        Args:
            config: Matching configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        # Pairs at or below this IoU are treated as false pairings
        self.iou_threshold = self.config.get('iou_threshold', 0.2)
        self.strategy = self.config.get('strategy', 'greedy')

        if self.strategy not in self.STRATEGIES:
            raise ValueError(f"Invalid matching strategy: {self.strategy}")

    def _pair_greedy(self, original: Sequence[Region],
                     converted: Sequence[Region]) -> List[Tuple[int, int, float]]:
        """Give each original region its best remaining partner, in order."""
        used = set()
        pairs = []

        for i, region in enumerate(original):
            best_index = -1
            best_iou = 0.0

            for j, candidate in enumerate(converted):
                if j in used:
                    continue
                score = region.iou(candidate)
                if score > best_iou:
                    best_iou = score
                    best_index = j

            if best_index != -1 and best_iou > self.iou_threshold:
                pairs.append((i, best_index, best_iou))
                used.add(best_index)

        return pairs

    def _pair_optimal(self, original: Sequence[Region],
                      converted: Sequence[Region]) -> List[Tuple[int, int, float]]:
        """Maximise total IoU over a one-to-one assignment."""
        if not original or not converted:
            return []

        scores = np.array([[a.iou(b) for b in converted] for a in original], dtype=float)
        rows, cols = linear_sum_assignment(scores, maximize=True)

        pairs = [
            (int(i), int(j), float(scores[i, j]))
            for i, j in zip(rows, cols)
            if scores[i, j] > self.iou_threshold
        ]
        return sorted(pairs)

    def pair(self, original: Sequence[Region],
             converted: Sequence[Region]) -> MatchResult:
        """Pair two region sets, raising on failure.

        Args:
            original: Regions from the original page, in reading order
            converted: Regions from the converted page, in reading order

        Returns:
            MatchResult in which every input region appears exactly once
        """
        original = tuple(original)
        converted = tuple(converted)

        if self.strategy == 'optimal':
            pairs = self._pair_optimal(original, converted)
        else:
            pairs = self._pair_greedy(original, converted)

        matched_original = {i for i, _, _ in pairs}
        matched_converted = {j for _, j, _ in pairs}

        result = MatchResult(
            matches=tuple(Match(original[i], converted[j], score) for i, j, score in pairs),
            unmatched_original=tuple(
                r for i, r in enumerate(original) if i not in matched_original
            ),
            unmatched_converted=tuple(
                r for j, r in enumerate(converted) if j not in matched_converted
            )
        )

        self.logger.debug(
            f"Matched {len(result.matches)} regions ({self.strategy}); "
            f"{len(result.unmatched_original)} original and "
            f"{len(result.unmatched_converted)} converted left unmatched"
        )
        return result

    def match(self, original: Sequence[Region],
              converted: Sequence[Region]) -> Outcome:
        """Pair two region sets behind the fail-soft boundary.

        Args:
            original: Regions from the original page
            converted: Regions from the converted page

        Returns:
            Outcome holding a MatchResult, or a failure
        """
        try:
            return Outcome.success(self.pair(original, converted))
        except Exception as e:
            self.logger.warning(f"Region matching failed: {e}")
            return Outcome.from_exception(e)


def match_regions(original: Sequence[Region],
                  converted: Sequence[Region],
                  config: dict = None) -> Outcome:
    """Convenience function to pair two region sets.

    Args:
        original: Regions from the original page
        converted: Regions from the converted page
        config: Optional matching configuration

    Returns:
        Outcome holding a MatchResult, or a failure
    """
    return RegionMatcher(config).match(original, converted)
