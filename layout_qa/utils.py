"""Utility functions for the layout QA engine."""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml
import cv2
import numpy as np
from PIL import Image

from .result import DecodeFailure, EmptyInput


ImageSource = Union[str, Path, bytes, bytearray, np.ndarray, Image.Image]


def load_config(config_path: Union[str, Path] = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Setup logging configuration.

    Args:
        config: Logging configuration dictionary

    Returns:
        Configured logger instance
    """
    if config is None:
        config = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        }

    log_format = config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Create logger
    logger = logging.getLogger('layout_qa')
    logger.setLevel(getattr(logging, config.get('level', 'INFO')))

    # Console handler, added once per process
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(console_handler)

    # File handler with rotation, one per log file
    log_file = config.get('file')
    if log_file and not any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and h.baseFilename == os.path.abspath(log_file)
        for h in logger.handlers
    ):
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.get('max_bytes', 10485760),
            backupCount=config.get('backup_count', 5)
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    return logger


def load_image(image_path: Union[str, Path]) -> np.ndarray:
    """Load image from file path.

    Args:
        image_path: Path to image file

    Returns:
        Image as numpy array in BGR format

    Raises:
        EmptyInput: If the path is empty
        DecodeFailure: If the file is missing or cannot be decoded
    """
    # Path("") normalises to "."
    if not image_path or (isinstance(image_path, Path) and image_path == Path("")):
        raise EmptyInput("Image path is empty")

    image_path = Path(image_path)
    if not image_path.exists():
        raise DecodeFailure(f"Image file not found: {image_path}")

    image = cv2.imread(str(image_path))
    if image is None:
        raise DecodeFailure(f"Failed to load image: {image_path}")

    return image


def decode_image(data: Union[bytes, bytearray]) -> np.ndarray:
    """Decode an encoded image buffer, keeping its channel layout.

    Args:
        data: Encoded image bytes (PNG, JPEG, ...)

    Returns:
        Decoded image as numpy array

    Raises:
        EmptyInput: If the buffer is empty
        DecodeFailure: If the buffer cannot be decoded
    """
    if len(data) == 0:
        raise EmptyInput("Image buffer is empty")

    buffer = np.frombuffer(bytes(data), dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise DecodeFailure("Failed to decode image buffer")

    return image


def read_image(source: ImageSource) -> np.ndarray:
    """Resolve any supported image source into a decoded array.

    Args:
        source: Decoded array, PIL image, encoded bytes, or path to an image file

    Returns:
        Decoded image as numpy array
    """
    if isinstance(source, np.ndarray):
        if source.size == 0:
            raise EmptyInput("Image array is empty")
        return source
    if isinstance(source, Image.Image):
        return pil_to_cv2(source)
    if isinstance(source, (bytes, bytearray)):
        return decode_image(source)
    return load_image(source)


def encode_png(image: np.ndarray) -> bytes:
    """Encode an image as a standalone PNG buffer."""
    ok, buffer = cv2.imencode('.png', image)
    if not ok:
        raise ValueError("PNG encoding failed")
    return buffer.tobytes()


def pil_to_cv2(pil_image: Image.Image) -> np.ndarray:
    """Convert PIL Image to OpenCV format.

    Rasterizers commonly hand pages over as PIL images.

    Args:
        pil_image: PIL Image object

    Returns:
        Image as numpy array in BGR format
    """
    # Convert PIL to RGB numpy array
    rgb_image = np.array(pil_image.convert('RGB'))
    # Convert RGB to BGR for OpenCV
    bgr_image = cv2.cvtColor(rgb_image, cv2.COLOR_RGB2BGR)
    return bgr_image


def ensure_grayscale(image: np.ndarray) -> np.ndarray:
    """Ensure image is in grayscale format.

    Args:
        image: Image as numpy array (gray, BGR or BGRA)

    Returns:
        Grayscale image
    """
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise ValueError(f"Unsupported channel count: {channels}")


def ensure_color(image: np.ndarray) -> np.ndarray:
    """Ensure image is in color (BGR) format.

    Args:
        image: Image as numpy array

    Returns:
        Color image in BGR format
    """
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    channels = image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if channels == 3:
        return image
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    raise ValueError(f"Unsupported channel count: {channels}")
