# resinscan/text_recognition.py
"""
Text recognition adapters.

The scan pipeline only depends on the TextRecognizer interface; any OCR
backend that turns a photo into a RecognitionResult can be plugged in.
PaddleTextRecognizer is the bundled PaddleOCR-backed implementation.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple
import logging

import numpy as np

from .detection_result import RecognitionResult, TextBlock
from .preprocessing import preprocess_for_symbol
from .utils import ImageRef, load_image, rotate_image

logger = logging.getLogger(__name__)

# CONFIGURATION


MIN_OCR_CONFIDENCE = 0.30   # drop lines PaddleOCR is unsure about
ROTATION_ANGLES: Tuple[int, ...] = (0,)


class RecognitionError(Exception):
    """Raised when a recognizer cannot produce text for an image."""


class TextRecognizer(ABC):
    """Abstract base class for an OCR backend."""

    @abstractmethod
    def recognize(self, image_ref: ImageRef) -> RecognitionResult:
        """
        Recognize text in a photo.

        Raises:
            RecognitionError: If the image cannot be read or OCR fails
        """


class PaddleTextRecognizer(TextRecognizer):
    """
    PaddleOCR-backed recognizer tuned for close-up recycling symbols.

    The PaddleOCR model is heavy, so it is created on first use and kept
    on the instance. Pass ``engine`` to reuse an existing PaddleOCR object.
    """

    def __init__(
        self,
        engine: Optional[Any] = None,
        lang: str = "en",
        rotation_angles: Sequence[int] = ROTATION_ANGLES,
        min_line_confidence: float = MIN_OCR_CONFIDENCE,
        binarize: bool = False,
        use_angle_cls: bool = False,
    ) -> None:
        self._engine = engine
        self.lang = lang
        self.rotation_angles = tuple(rotation_angles) or (0,)
        self.min_line_confidence = min_line_confidence
        self.binarize = binarize
        self.use_angle_cls = use_angle_cls

    def _get_engine(self) -> Any:
        """Lazy-load the PaddleOCR engine."""
        if self._engine is None:
            logger.info("Initializing PaddleOCR instance...")
            try:
                from paddleocr import PaddleOCR

                self._engine = PaddleOCR(
                    use_angle_cls=self.use_angle_cls,
                    lang=self.lang,
                    show_log=False,
                )
            except Exception as e:
                logger.error(f"PaddleOCR initialization failed: {e}", exc_info=True)
                raise RecognitionError(f"OCR engine unavailable: {e}") from e
        return self._engine

    def recognize(self, image_ref: ImageRef) -> RecognitionResult:
        """
        Run OCR on the photo, trying each configured rotation.

        The rotation whose lines have the highest mean OCR confidence wins.

        Raises:
            RecognitionError: If the image cannot be loaded or OCR fails
        """
        try:
            img = load_image(image_ref)
        except ValueError as e:
            logger.warning(f"Could not load image for OCR: {e}")
            raise RecognitionError(str(e)) from e

        best_blocks: List[TextBlock] = []
        best_score = -1.0

        for angle in self.rotation_angles:
            try:
                rotated = rotate_image(img, angle)
                processed = preprocess_for_symbol(rotated, binarize=self.binarize)
            except ValueError as e:
                raise RecognitionError(f"Preprocessing failed (angle={angle}): {e}") from e

            blocks = self._run_ocr(processed)
            score = float(np.mean([b.confidence for b in blocks])) if blocks else 0.0
            logger.debug(f"Angle {angle}°: {len(blocks)} lines, mean confidence {score:.3f}")

            if score > best_score:
                best_blocks, best_score = blocks, score

        text = "\n".join(block.text for block in best_blocks)
        logger.info(f"Recognized {len(best_blocks)} text line(s)")
        return RecognitionResult(text=text, blocks=tuple(best_blocks))

    def _run_ocr(self, img: np.ndarray) -> List[TextBlock]:
        """Run PaddleOCR on a preprocessed image and keep confident lines."""
        engine = self._get_engine()

        try:
            result = engine.ocr(img, cls=self.use_angle_cls)
        except Exception as e:
            logger.error(f"PaddleOCR error: {e}", exc_info=True)
            raise RecognitionError(f"OCR failed: {e}") from e

        if not result or not result[0]:
            logger.debug("No OCR results")
            return []

        blocks: List[TextBlock] = []
        for line in result[0]:
            try:
                box, (text, conf) = line[0], line[1]
                points = tuple((float(x), float(y)) for x, y in box)
                conf = float(conf)
            except (TypeError, ValueError, IndexError) as e:
                logger.warning(f"Skipping malformed OCR line {line!r}: {e}")
                continue

            text = str(text).strip()
            if not text or conf < self.min_line_confidence:
                continue

            blocks.append(TextBlock(text=text, confidence=conf, box=points))

        return blocks
