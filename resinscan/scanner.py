# resinscan/scanner.py
"""
Scan pipeline: photo -> text recognition -> resin code inference -> guidance.

Text recognition failures never reach the caller; the pipeline falls back
to the simulated detector and always returns a well-formed DetectionResult.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Optional, Sequence
import logging

import numpy as np

from .detection_result import DetectionMethod, DetectionResult, RecognitionResult
from .fallback import simulate
from .guidance import needs_guidance, tip_for
from .symbol_inference import infer_from_recognition
from .text_recognition import TextRecognizer
from .utils import ImageRef

logger = logging.getLogger(__name__)


def _coerce_recognition(raw: Any) -> RecognitionResult:
    """Turn whatever a recognizer returned into a RecognitionResult."""
    if isinstance(raw, RecognitionResult):
        return raw

    if isinstance(raw, Mapping):
        return RecognitionResult.from_raw(raw.get("text"), raw.get("blocks"))

    if not hasattr(raw, "text"):
        logger.warning(f"Recognizer returned {type(raw).__name__} without text, treating as empty")

    return RecognitionResult.from_raw(
        getattr(raw, "text", None),
        getattr(raw, "blocks", None),
    )


def _from_recognition(
    recognition: RecognitionResult,
    rng: Optional[np.random.Generator],
) -> DetectionResult:
    guess = infer_from_recognition(recognition)
    result = DetectionResult.from_guess(
        guess,
        raw_text=recognition.text,
        method=DetectionMethod.TEXT_RECOGNITION,
    )

    if not needs_guidance(result):
        logger.info(f"High confidence detection: code {result.code} ({result.confidence}%)")
        return result

    if result.is_detected:
        logger.info(f"Low confidence detection: code {result.code} ({result.confidence}%)")
    else:
        logger.info("No resin code in recognized text")
    return result.with_tip(tip_for(result, rng))


def _from_fallback(rng: Optional[np.random.Generator]) -> DetectionResult:
    result = DetectionResult.from_guess(
        simulate(rng),
        raw_text="",
        method=DetectionMethod.FALLBACK_SIMULATION,
    )
    if not result.is_detected:
        result = result.with_tip(tip_for(result, rng))
    return result


# MAIN PIPELINE


def scan_symbol(
    image_ref: ImageRef,
    recognizer: Optional[TextRecognizer] = None,
    rng: Optional[np.random.Generator] = None,
) -> DetectionResult:
    """
    Classify the recycling symbol in one photo.

    Flow:
      1. recognizer.recognize(image_ref)
      2. infer code + confidence from the text
      3. confidence > 75: return as-is; otherwise attach a tip
    If the recognizer is missing or raises, a simulated detection is
    returned instead (method=fallback-simulation, tip when no code).

    Args:
        image_ref: Photo bytes or path, passed through to the recognizer
        recognizer: OCR backend; None forces the fallback path
        rng: Random generator for the simulator and tip rotation

    Returns:
        DetectionResult (never raises for recognition failures)
    """
    if recognizer is None:
        logger.warning("No text recognizer configured, using fallback simulation")
        return _from_fallback(rng)

    try:
        recognition = recognizer.recognize(image_ref)
    except Exception as e:
        logger.warning(f"Text recognition failed, falling back to simulation: {e}")
        return _from_fallback(rng)

    recognition = _coerce_recognition(recognition)
    logger.debug(f"Recognized text: {recognition.text[:200]!r}")
    return _from_recognition(recognition, rng)


def analyze_text(
    text: Optional[str],
    blocks: Optional[Sequence[Any]] = None,
    rng: Optional[np.random.Generator] = None,
) -> DetectionResult:
    """Run the text-recognition path on text that was already recognized."""
    return _from_recognition(RecognitionResult.from_raw(text, blocks), rng)


# SERIALIZATION


def detection_to_dict(result: DetectionResult) -> Dict[str, Any]:
    """Convert a DetectionResult to a JSON-friendly dictionary."""
    info = result.resin_info
    return {
        "code": result.code,
        "confidence": result.confidence,
        "raw_text": result.raw_text,
        "method": result.method.value,
        "strategy": result.strategy.value if result.strategy else None,
        "tip": result.tip,
        "is_detected": result.is_detected,
        "resin": {
            "name": info.name,
            "full_name": info.full_name,
            "bin_type": info.bin_type,
            "recyclable": info.recyclable,
        } if info else None,
    }
