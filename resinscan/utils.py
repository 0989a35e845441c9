# resinscan/utils.py
"""
Photo loading and orientation helpers used by the text recognizer.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
import logging
import os

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# A photo reference: raw encoded bytes or a filesystem path
ImageRef = Union[bytes, str, os.PathLike]

# Quarter turns understood by cv2.rotate
_ROTATIONS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


# LOADING


def load_image_from_bytes(image_bytes: bytes) -> np.ndarray:
    """
    Decode an encoded photo (JPEG, PNG, ...) into a BGR array.

    Raises:
        ValueError: If the buffer is empty, not bytes, or not an image
    """
    if not isinstance(image_bytes, (bytes, bytearray)):
        raise ValueError(f"Expected photo bytes, got {type(image_bytes).__name__}")

    if len(image_bytes) == 0:
        raise ValueError("Photo buffer is empty")

    img = cv2.imdecode(np.frombuffer(image_bytes, np.uint8), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise ValueError("Photo data could not be decoded")

    logger.debug(f"Decoded photo {img.shape[1]}x{img.shape[0]}")
    return img


def load_image(image_ref: ImageRef) -> np.ndarray:
    """
    Load a photo given either its encoded bytes or a path to it.

    Raises:
        ValueError: If the file is missing or the data cannot be decoded
    """
    if isinstance(image_ref, (bytes, bytearray)):
        return load_image_from_bytes(bytes(image_ref))

    if not isinstance(image_ref, (str, os.PathLike)):
        raise ValueError(f"Unsupported image reference: {type(image_ref)}")

    path = Path(image_ref)
    if not path.is_file():
        raise ValueError(f"Image file not found: {path}")

    return load_image_from_bytes(path.read_bytes())


# ORIENTATION


def rotate_image(img: np.ndarray, angle: int) -> np.ndarray:
    """
    Turn a photo by a multiple of 90 degrees clockwise.

    Any other angle leaves the photo as it is. A new array is always returned.

    Raises:
        ValueError: If the photo is None or empty
    """
    if not isinstance(img, np.ndarray) or img.size == 0:
        raise ValueError("rotate_image: photo is None or empty")

    angle = angle % 360
    if angle in _ROTATIONS:
        return cv2.rotate(img, _ROTATIONS[angle])

    if angle != 0:
        logger.warning(f"Cannot rotate by {angle}°, keeping orientation")
    return img.copy()
