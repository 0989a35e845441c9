# resinscan/fallback.py
"""
Stand-in detector used when text recognition is unavailable or fails.

Draws a resin code from a fixed table reflecting how common each plastic
is in household waste. It never looks at the image.
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple

import numpy as np

from .detection_result import SymbolGuess

logger = logging.getLogger(__name__)

# CONFIGURATION


# (code, weight). The None row is the miss rate; the code rows (summing
# to 1.0) split the remaining hits.
FALLBACK_SCENARIOS: Tuple[Tuple[Optional[str], float], ...] = (
    ("1", 0.35),   # PET is most common
    ("2", 0.25),   # HDPE
    ("5", 0.20),   # PP
    ("4", 0.08),   # LDPE
    ("6", 0.06),   # PS
    ("3", 0.03),   # PVC
    ("7", 0.03),   # OTHER
    (None, 0.30),  # no detection
)

# Flat, lower than any text-recognition confidence
FALLBACK_CONFIDENCE = 60

MISS_RATE = sum(weight for code, weight in FALLBACK_SCENARIOS if code is None)
_HIT_CODES = tuple(code for code, _ in FALLBACK_SCENARIOS if code is not None)
_HIT_CUMULATIVE = np.cumsum([weight for code, weight in FALLBACK_SCENARIOS if code is not None])


def _draw_code(rng: np.random.Generator) -> Optional[str]:
    if rng.random() < MISS_RATE:
        return None

    # Cumulative-weight lookup over the code rows
    target = rng.random() * _HIT_CUMULATIVE[-1]
    idx = int(np.searchsorted(_HIT_CUMULATIVE, target, side="right"))
    return _HIT_CODES[min(idx, len(_HIT_CODES) - 1)]


def simulate(rng: Optional[np.random.Generator] = None) -> SymbolGuess:
    """
    Produce a weighted-random resin code guess.

    Args:
        rng: Random generator; a fresh one is created per call if omitted

    Returns:
        SymbolGuess with FALLBACK_CONFIDENCE for a hit, 0 for a miss
    """
    if rng is None:
        rng = np.random.default_rng()

    code = _draw_code(rng)
    if code is None:
        logger.info("Fallback simulation: no symbol detected")
        return SymbolGuess(code=None, confidence=0)

    logger.info(f"Fallback simulation detected symbol: {code}")
    return SymbolGuess(code=code, confidence=FALLBACK_CONFIDENCE)
