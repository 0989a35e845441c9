# resinscan/confidence.py
"""
Heuristic confidence scoring for an inferred resin code.

The score is not a calibrated probability. It rewards signals that the
photo was a clean, close-up capture of a recycling symbol and penalizes
long, noisy text.
"""

import re
import logging
from typing import Optional

from .detection_result import RecognitionResult

logger = logging.getLogger(__name__)

# CONFIGURATION


BASE_CONFIDENCE = 70
BLOCKS_BONUS = 10
KEYWORD_BONUS = 8
ISOLATED_DIGIT_BONUS = 15
LONG_TEXT_PENALTY = 15       # len > LONG_TEXT_LENGTH
MEDIUM_TEXT_PENALTY = 8      # len > MEDIUM_TEXT_LENGTH
SHORT_TEXT_BONUS = 10        # len < SHORT_TEXT_LENGTH

LONG_TEXT_LENGTH = 100
MEDIUM_TEXT_LENGTH = 50
SHORT_TEXT_LENGTH = 20

MIN_CONFIDENCE = 65
MAX_CONFIDENCE = 95

RECYCLING_KEYWORDS = (
    "\u267b",  # recycling glyph
    "PET",
    "HDPE",
    "PVC",
    "LDPE",
    "PP",
    "PS",
    "OTHER",
    "RESIN",
    "PLASTIC",
)


def _has_recycling_keyword(text: str) -> bool:
    upper = text.upper()
    return any(keyword in upper for keyword in RECYCLING_KEYWORDS)


def _has_isolated_code(text: str, code: str) -> bool:
    return re.search(rf"\b{re.escape(code)}\b", text, re.ASCII) is not None


def estimate_confidence(result: RecognitionResult, code: Optional[str]) -> int:
    """
    Score how much an inferred code can be trusted.

    Scoring:
        base 70
        +10 structured blocks present
        +8  any recycling keyword (once)
        +15 code printed as an isolated token
        -15 text longer than 100 chars (-8 if longer than 50)
        +10 text shorter than 20 chars
    then clamped to [65, 95].

    Args:
        result: Recognition result the code was inferred from
        code: Inferred resin code, or None

    Returns:
        Integer confidence; 0 when code is None
    """
    if not code:
        return 0

    text = result.text or ""
    confidence = BASE_CONFIDENCE

    if result.has_blocks:
        confidence += BLOCKS_BONUS

    if _has_recycling_keyword(text):
        confidence += KEYWORD_BONUS

    if _has_isolated_code(text, code):
        confidence += ISOLATED_DIGIT_BONUS

    if len(text) > LONG_TEXT_LENGTH:
        confidence -= LONG_TEXT_PENALTY
    elif len(text) > MEDIUM_TEXT_LENGTH:
        confidence -= MEDIUM_TEXT_PENALTY

    if len(text) < SHORT_TEXT_LENGTH:
        confidence += SHORT_TEXT_BONUS

    clamped = min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, confidence))
    logger.debug(f"Confidence for code {code}: raw={confidence}, clamped={clamped}")
    return clamped
