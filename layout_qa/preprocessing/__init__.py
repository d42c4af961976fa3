"""Preprocessing module."""

from .binarization import BinarizedImage, ImagePreprocessor, Polarity

__all__ = ['BinarizedImage', 'ImagePreprocessor', 'Polarity']
