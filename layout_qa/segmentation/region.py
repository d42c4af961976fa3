"""Data structures for detected page regions."""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple


@dataclass(frozen=True)
class Region:
    """Axis-aligned content block in source-image pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        """Validate region geometry."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Region must have positive size, got {self.width}x{self.height}"
            )

    @classmethod
    def from_tuple(cls, box: Sequence[int]) -> 'Region':
        """Build a region from an (x, y, width, height) tuple."""
        x, y, w, h = box
        return cls(int(x), int(y), int(w), int(h))

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        """Calculate area of the region."""
        return self.width * self.height

    @property
    def center(self) -> tuple:
        """Calculate center point of the region."""
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio (width/height)."""
        return self.width / self.height

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_corners(self) -> Tuple[int, int, int, int]:
        """Convert to (x1, y1, x2, y2) corner coordinates."""
        return (self.x, self.y, self.right, self.bottom)

    def contains(self, other: 'Region') -> bool:
        """Check whether ``other`` lies entirely within this region's bounds."""
        return (self.x <= other.x and other.right <= self.right and
                self.y <= other.y and other.bottom <= self.bottom)

    def intersection_area(self, other: 'Region') -> int:
        """Area shared by both regions, 0 when they do not overlap."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return max(0, x2 - x1) * max(0, y2 - y1)

    def iou(self, other: 'Region') -> float:
        """Intersection over Union with another region.

        Args:
            other: Region to compare against

        Returns:
            IoU in [0, 1]
        """
        intersection = self.intersection_area(other)
        union = self.area + other.area - intersection
        return intersection / union if union > 0 else 0.0

    def to_dict(self) -> Dict:
        """Convert region to dictionary for serialization."""
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
        }


# Reading-ordered, immutable sequence of regions for one page side
RegionSet = Tuple[Region, ...]


def iou(a: Region, b: Region) -> float:
    """Intersection over Union of two regions."""
    return a.iou(b)
