# resinscan/guidance.py
"""Tips shown to the user when a scan is missing a code or is unsure."""

from __future__ import annotations
import logging
from typing import Optional, Tuple

import numpy as np

from .detection_result import DetectionResult

logger = logging.getLogger(__name__)

# CONFIGURATION


# Results at or below this confidence get a tip
GUIDANCE_THRESHOLD = 75

# Recognized text is quoted up to this many characters
MAX_QUOTED_TEXT = 100

LOW_CONFIDENCE_TIP = (
    "Symbol detected but confidence is low. "
    "Try better lighting or move closer to the symbol."
)

REPOSITION_TIP = "Center the triangular recycling symbol in the frame and try again."

GENERAL_TIPS: Tuple[str, ...] = (
    "Look for the triangular ♻ symbol with a number inside",
    "Check the bottom of plastic containers",
    "Ensure good lighting on the recycling symbol",
    "Move closer to make the symbol larger in the frame",
    "Clean the surface if the symbol appears dirty or scratched",
    "Try a different angle to reduce glare on the symbol",
)


def needs_guidance(result: DetectionResult) -> bool:
    """True when the result has no code or its confidence is too low to trust."""
    return result.code is None or result.confidence <= GUIDANCE_THRESHOLD


def _quote(text: str) -> str:
    snippet = " ".join(text.split())
    if len(snippet) > MAX_QUOTED_TEXT:
        snippet = snippet[:MAX_QUOTED_TEXT].rstrip() + "..."
    return snippet


def tip_for(result: DetectionResult, rng: Optional[np.random.Generator] = None) -> str:
    """
    Pick a guidance message for a scan result.

    Args:
        result: Detection to advise on
        rng: Random generator for the general tip rotation

    Returns:
        Non-empty tip string
    """
    if result.code is not None:
        return LOW_CONFIDENCE_TIP

    if result.raw_text and result.raw_text.strip():
        return (
            f'No recycling code found in the detected text "{_quote(result.raw_text)}". '
            f"{REPOSITION_TIP}"
        )

    if rng is None:
        rng = np.random.default_rng()
    tip = GENERAL_TIPS[int(rng.integers(len(GENERAL_TIPS)))]
    logger.debug(f"Selected general tip: {tip}")
    return tip
