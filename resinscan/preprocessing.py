# resinscan/preprocessing.py
"""
Image preprocessing for recycling-symbol photos before OCR.

Resin codes are small, often embossed into the plastic with little
contrast, so the pipeline leans on local contrast enhancement.
"""

from datetime import datetime
from pathlib import Path
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


# DEBUG CONFIGURATION


# Set DEBUG_SAVE to dump every preprocessing stage as a PNG under DEBUG_DIR
DEBUG_SAVE = False
DEBUG_DIR = "intermediate"

# Photos are downscaled so the longest side does not exceed this
MAX_SIDE = 1600


def _save_debug_image(img: np.ndarray, stage: str) -> None:
    """Write one preprocessing stage to DEBUG_DIR/<timestamp>_<stage>.png."""
    if not DEBUG_SAVE or img is None:
        return

    try:
        out_dir = Path(DEBUG_DIR)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / f"{datetime.now():%Y%m%d_%H%M%S_%f}_{stage}.png"

        if cv2.imwrite(str(path), img):
            logger.debug(f"Saved {stage} stage to {path}")
        else:
            logger.warning(f"OpenCV could not write {path}")
    except Exception as e:
        logger.error(f"Error saving {stage} stage: {e}")


# UTILITY FUNCTIONS


def _to_gray(img: np.ndarray) -> np.ndarray:
    """
    Convert image to single-channel uint8 grayscale.

    Raises:
        ValueError: If image is None, empty or has an unexpected shape
    """
    if img is None or img.size == 0:
        raise ValueError("Input image is None or empty")

    if len(img.shape) == 2:
        gray = img
    elif len(img.shape) == 3:
        gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    else:
        raise ValueError(f"Invalid image shape: {img.shape}")

    if gray.dtype != np.uint8:
        gray = cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

    return gray


def _limit_size(img: np.ndarray, max_side: int = MAX_SIDE) -> np.ndarray:
    h, w = img.shape[:2]
    longest = max(h, w)
    if longest <= max_side:
        return img
    scale = max_side / float(longest)
    return cv2.resize(img, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_AREA)


# SYMBOL PREPROCESSING


def preprocess_for_symbol(img: np.ndarray, binarize: bool = False) -> np.ndarray:
    """
    Preprocessing for a close-up photo of a recycling symbol.

    Strategy:
      - Downscale very large photos
      - Grayscale conversion
      - Edge-preserving denoise (bilateral)
      - CLAHE contrast enhancement (embossed codes)
      - Optional OTSU binarization + morphological opening

    Args:
        img: Input image (BGR or grayscale)
        binarize: Also threshold to a binary image

    Returns:
        Preprocessed uint8 image

    Raises:
        ValueError: If image is None or empty
    """
    if img is None or img.size == 0:
        raise ValueError("preprocess_for_symbol: input image is None or empty")

    gray = _to_gray(_limit_size(img))
    _save_debug_image(gray, "00_symbol_gray")

    denoised = cv2.bilateralFilter(gray, d=7, sigmaColor=50, sigmaSpace=50)
    _save_debug_image(denoised, "01_symbol_bilateral")

    clahe = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8))
    enhanced = clahe.apply(denoised)
    _save_debug_image(enhanced, "02_symbol_clahe")

    if not binarize:
        return enhanced

    _, th = cv2.threshold(enhanced, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (2, 2))
    opened = cv2.morphologyEx(th, cv2.MORPH_OPEN, kernel, iterations=1)
    _save_debug_image(opened, "03_symbol_binary")
    return opened.astype(np.uint8)
