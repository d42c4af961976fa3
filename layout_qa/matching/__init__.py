"""Region matching module."""

from .matcher import Match, MatchResult, RegionMatcher, match_regions

__all__ = ['Match', 'MatchResult', 'RegionMatcher', 'match_regions']
