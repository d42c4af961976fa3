"""Create synthetic page images for testing the segmentation engine.

Blocks are stacks of horizontal bars, close enough together to merge into one
region under dilation and far enough from neighbouring blocks to stay apart.
"""

from typing import List, Tuple
import cv2
import numpy as np


PAGE_HEIGHT = 1000
PAGE_WIDTH = 800

BLOCK_WIDTH = 120
BAR_HEIGHT = 14
BAR_GAP = 6
BARS_PER_BLOCK = 3
BLOCK_HEIGHT = BARS_PER_BLOCK * BAR_HEIGHT + (BARS_PER_BLOCK - 1) * BAR_GAP

MARGIN = 50
COLUMN_GAP = 60
ROW_GAP = 50

# 5x5 kernel, 3 iterations: every mark grows by 6 px on each side
DILATION_GROWTH = 6


def blank_page(dark: bool = False) -> np.ndarray:
    """Create an empty BGR page."""
    value = 0 if dark else 255
    return np.full((PAGE_HEIGHT, PAGE_WIDTH, 3), value, dtype=np.uint8)


def ink_value(dark: bool = False) -> int:
    return 255 if dark else 0


def draw_block(image: np.ndarray, x: int, y: int, width: int = BLOCK_WIDTH,
               bars: int = BARS_PER_BLOCK, value: int = 0) -> Tuple[int, int, int, int]:
    """Draw a text-like block and return its ink bounding box."""
    for i in range(bars):
        top = y + i * (BAR_HEIGHT + BAR_GAP)
        image[top:top + BAR_HEIGHT, x:x + width] = value
    height = bars * BAR_HEIGHT + (bars - 1) * BAR_GAP
    return (x, y, width, height)


def expected_region(box: Tuple[int, int, int, int],
                    growth: int = DILATION_GROWTH) -> Tuple[int, int, int, int]:
    """Region the segmenter reports for an ink box away from the page edges."""
    x, y, w, h = box
    return (x - growth, y - growth, w + 2 * growth, h + 2 * growth)


def make_layout_page(block_count: int, columns: int = 4,
                     dark: bool = False) -> Tuple[np.ndarray, List[Tuple[int, int, int, int]]]:
    """Create a page with ``block_count`` blocks laid out on a grid.

    Args:
        block_count: Number of separate content blocks
        columns: Blocks per row
        dark: Light content on a dark background when True

    Returns:
        (page image, ink boxes in reading order)
    """
    image = blank_page(dark)
    boxes = []
    for index in range(block_count):
        row, column = divmod(index, columns)
        x = MARGIN + column * (BLOCK_WIDTH + COLUMN_GAP)
        y = MARGIN + row * (BLOCK_HEIGHT + ROW_GAP)
        boxes.append(draw_block(image, x, y, value=ink_value(dark)))
    return image, boxes


def make_u_shape_page() -> np.ndarray:
    """Create a page with an open frame whose bounding box encloses a small block.

    The frame is open at the top, so the inner block is a separate outer
    contour whose box lies fully inside the frame's box.
    """
    image = blank_page()
    left, top, right, bottom, thickness = 200, 200, 500, 420, 8
    image[top:bottom, left:left + thickness] = 0
    image[top:bottom, right - thickness:right] = 0
    image[bottom - thickness:bottom, left:right] = 0
    draw_block(image, 290, 280)
    return image


def encode(image: np.ndarray, extension: str = '.png') -> bytes:
    """Encode an image to bytes."""
    ok, buffer = cv2.imencode(extension, image)
    assert ok
    return buffer.tobytes()


if __name__ == '__main__':
    from pathlib import Path

    output_dir = Path('test_images')
    output_dir.mkdir(exist_ok=True)

    for count in (2, 6, 8, 17):
        page, _ = make_layout_page(count)
        cv2.imwrite(str(output_dir / f'seg_test_{count}.png'), page)

    print(f"Test images created in {output_dir}/")
