"""Tests for grayscale conversion, polarity and binarization."""

import pytest
import numpy as np
import cv2
from layout_qa.preprocessing import ImagePreprocessor, Polarity
from layout_qa.result import FailureKind

from create_test_images import make_layout_page


@pytest.fixture
def preprocessor():
    """Preprocessor with default configuration."""
    return ImagePreprocessor()


@pytest.fixture
def light_page():
    """Dark blocks on a white page."""
    page, _ = make_layout_page(6)
    return page


@pytest.fixture
def dark_page():
    """Light blocks on a black page."""
    page, _ = make_layout_page(6, dark=True)
    return page


def test_resolve_polarity(preprocessor):
    """AUTO resolves from mean intensity; explicit values pass through."""
    assert preprocessor.resolve_polarity(200.0) is Polarity.FORCE_LIGHT
    assert preprocessor.resolve_polarity(131.0) is Polarity.FORCE_LIGHT
    assert preprocessor.resolve_polarity(130.0) is Polarity.FORCE_DARK
    assert preprocessor.resolve_polarity(20.0) is Polarity.FORCE_DARK
    assert preprocessor.resolve_polarity(20.0, Polarity.FORCE_LIGHT) is Polarity.FORCE_LIGHT
    assert preprocessor.resolve_polarity(200.0, Polarity.FORCE_DARK) is Polarity.FORCE_DARK


def test_light_threshold_configurable():
    """The light-background cutoff comes from configuration."""
    preprocessor = ImagePreprocessor({'light_background_threshold': 50})

    assert preprocessor.resolve_polarity(60.0) is Polarity.FORCE_LIGHT


def test_light_page_content_is_foreground(preprocessor, light_page):
    """Dark ink on a light page becomes the high value."""
    result = preprocessor.binarize(light_page)

    assert result.polarity is Polarity.FORCE_LIGHT
    assert result.light_background
    assert result.binary.ndim == 2
    assert result.binary[0, 0] == 0
    assert result.binary[55, 55] == 255
    assert set(np.unique(result.binary)) <= {0, 255}


def test_dark_page_content_is_foreground(preprocessor, dark_page):
    """Light ink on a dark page also becomes the high value."""
    result = preprocessor.binarize(dark_page)

    assert result.polarity is Polarity.FORCE_DARK
    assert result.binary[0, 0] == 0
    assert result.binary[55, 55] == 255


def test_auto_matches_forced_polarity(preprocessor, light_page, dark_page):
    """AUTO agrees with the explicit flag that fits the page."""
    auto_light = preprocessor.binarize(light_page, Polarity.AUTO).binary
    forced_light = preprocessor.binarize(light_page, Polarity.FORCE_LIGHT).binary
    auto_dark = preprocessor.binarize(dark_page, Polarity.AUTO).binary
    forced_dark = preprocessor.binarize(dark_page, Polarity.FORCE_DARK).binary

    assert np.array_equal(auto_light, forced_light)
    assert np.array_equal(auto_dark, forced_dark)


def test_forced_light_on_dark_page_inverts_foreground(preprocessor, dark_page):
    """A fixed light-background flag on a dark page treats the background as content.

    This is how a caller that always passes the light default behaves, and it
    disagrees with auto-detection on dark pages.
    """
    forced = preprocessor.binarize(dark_page, Polarity.FORCE_LIGHT).binary
    auto = preprocessor.binarize(dark_page, Polarity.AUTO).binary

    assert forced[0, 0] == 255
    assert forced[55, 55] == 0
    assert np.array_equal(forced, 255 - auto)


def test_accepts_grayscale_and_bgra(preprocessor, light_page):
    """Single-channel and four-channel inputs binarize identically to BGR."""
    expected = preprocessor.binarize(light_page).binary
    gray = cv2.cvtColor(light_page, cv2.COLOR_BGR2GRAY)
    bgra = cv2.cvtColor(light_page, cv2.COLOR_BGR2BGRA)

    assert np.array_equal(preprocessor.binarize(gray).binary, expected)
    assert np.array_equal(preprocessor.binarize(bgra).binary, expected)


def test_mean_intensity_reported(preprocessor):
    """The mean used for polarity is reported."""
    page = np.full((50, 50), 200, dtype=np.uint8)

    result = preprocessor.binarize(page)

    assert result.mean_intensity == pytest.approx(200.0)


def test_process_empty_image_fails_soft(preprocessor):
    """An empty image yields an EMPTY_INPUT outcome, not an exception."""
    outcome = preprocessor.process(np.zeros((0, 0, 3), dtype=np.uint8))

    assert not outcome.ok
    assert outcome.failure is FailureKind.EMPTY_INPUT
    assert outcome.unwrap_or('unavailable') == 'unavailable'


def test_process_unsupported_channels_fails_soft(preprocessor):
    """Two-channel images cannot be converted to grayscale."""
    outcome = preprocessor.process(np.zeros((10, 10, 2), dtype=np.uint8))

    assert not outcome.ok
    assert outcome.failure is FailureKind.PROCESSING_FAILURE


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
