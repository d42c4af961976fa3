"""Cropping of page regions into standalone image buffers."""

import logging
from typing import List, Sequence
import numpy as np

from ..result import EmptyInput, Outcome, ProcessingFailure
from ..segmentation.region import Region
from ..utils import ImageSource, encode_png, read_image


class RegionCropper:
    """Cut regions out of a page image and PNG-encode each one."""

    def __init__(self, config: dict = None):
        """Initialize region cropper.

        Args:
            config: Cropping configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _crop(image: np.ndarray, region: Region) -> np.ndarray:
        height, width = image.shape[:2]
        if region.x < 0 or region.y < 0 or region.right > width or region.bottom > height:
            raise ProcessingFailure(
                f"Region {region.to_tuple()} exceeds image bounds {width}x{height}"
            )
        return image[region.y:region.bottom, region.x:region.right]

    def crop_all(self, source: ImageSource, regions: Sequence[Region]) -> List[bytes]:
        """Crop every region, raising on failure.

        Args:
            source: Decoded array, encoded bytes, or image path
            regions: Regions to cut out

        Returns:
            PNG buffers in the same order as ``regions``
        """
        if not regions:
            raise EmptyInput("No regions to crop")

        image = read_image(source)
        return [encode_png(self._crop(image, region)) for region in regions]

    def crop(self, source: ImageSource, regions: Sequence[Region]) -> Outcome:
        """Crop regions behind the fail-soft boundary.

        Args:
            source: Decoded array, encoded bytes, or image path
            regions: Regions to cut out

        Returns:
            Outcome holding one PNG buffer per region, or a failure
        """
        try:
            segments = self.crop_all(source, regions)
            self.logger.debug(f"Cropped {len(segments)} segments")
            return Outcome.success(segments)
        except Exception as e:
            self.logger.warning(f"Cropping failed: {e}")
            return Outcome.from_exception(e)

    def crop_region(self, source: ImageSource, region: Region) -> Outcome:
        """Crop a single region.

        Args:
            source: Decoded array, encoded bytes, or image path
            region: Region to cut out

        Returns:
            Outcome holding one PNG buffer, or a failure
        """
        outcome = self.crop(source, [region])
        if not outcome.ok:
            return outcome
        return Outcome.success(outcome.value[0])
