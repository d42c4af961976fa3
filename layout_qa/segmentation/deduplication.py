"""Nested-region removal and reading-order sorting."""

import logging
from typing import Iterable

from ..result import Outcome
from .region import Region, RegionSet


def remove_nested(regions: Iterable[Region]) -> RegionSet:
    """Drop every region fully contained in a larger kept region.

    Candidates are visited largest first, so each one is only checked against
    regions of greater or equal area.

    Args:
        regions: Candidate regions

    Returns:
        Surviving regions, largest first
    """
    by_area = sorted(regions, key=lambda r: r.area, reverse=True)

    kept = []
    for candidate in by_area:
        if not any(k.contains(candidate) for k in kept):
            kept.append(candidate)

    return tuple(kept)


def order_regions(regions: Iterable[Region]) -> RegionSet:
    """Sort regions top-to-bottom, then left-to-right."""
    return tuple(sorted(regions, key=lambda r: (r.y, r.x)))


def deduplicate_and_order(regions: Iterable[Region]) -> RegionSet:
    """Remove nested regions and return the rest in reading order."""
    return order_regions(remove_nested(regions))


class RegionDeduplicator:
    """Fail-soft wrapper turning candidate regions into a RegionSet."""

    def __init__(self, config: dict = None):
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

    def process(self, regions: Iterable[Region]) -> Outcome:
        """Deduplicate and order candidates.

        Args:
            regions: Candidate regions from the extractor

        Returns:
            Outcome holding the ordered RegionSet, or a failure
        """
        try:
            candidates = list(regions)
            region_set = deduplicate_and_order(candidates)
            self.logger.debug(f"Deduplicated {len(candidates)} regions to {len(region_set)}")
            return Outcome.success(region_set)
        except Exception as e:
            self.logger.warning(f"Region deduplication failed: {e}")
            return Outcome.from_exception(e)
