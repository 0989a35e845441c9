# resinscan/symbol_inference.py
"""
Resin code inference from recognized text.
Maps noisy OCR output of a recycling symbol photo to a resin code 1-7.
"""

import re
import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from .confidence import estimate_confidence
from .detection_result import MatchStrategy, RecognitionResult, SymbolGuess

logger = logging.getLogger(__name__)

# CONFIGURATION


# Standalone 1-7, not part of a longer number ("20", "12", "7B").
# Word boundaries are ASCII-only, so accented letters count as separators.
ISOLATED_DIGIT_REGEX = re.compile(r"\b([1-7])\b", re.ASCII)

# Any 1-7 at all (may be part of a price, date, address...)
LOOSE_DIGIT_REGEX = re.compile(r"[1-7]")

# Recycling glyph, with or without the emoji variation selector
_GLYPH = "\u267b\ufe0f?"

# Digit next to the glyph or a resin keyword, in either order
CONTEXT_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    re.compile(rf"{_GLYPH}\W*([1-7])|([1-7])\W*{_GLYPH}", re.ASCII),
    re.compile(r"RESIN\W*(?:(?:ID|CODE)\W*)?([1-7])|([1-7])\W*RESIN", re.ASCII),
    re.compile(r"PLASTIC\W*(?:(?:TYPE|CODE)\W*)?([1-7])|([1-7])\W*PLASTIC", re.ASCII),
)

# Abbreviation with its own digit, in either order
ABBREVIATION_DIGIT_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    re.compile(r"PETE?\W*(1)|(1)\W*PETE?", re.ASCII),
    re.compile(r"HDPE\W*(2)|(2)\W*HDPE", re.ASCII),
    re.compile(r"PVC\W*(3)|(3)\W*PVC", re.ASCII),
    re.compile(r"LDPE\W*(4)|(4)\W*LDPE", re.ASCII),
    re.compile(r"PP\W*(5)|(5)\W*PP", re.ASCII),
    re.compile(r"PS\W*(6)|(6)\W*PS", re.ASCII),
    re.compile(r"OTHER\W*(7)|(7)\W*OTHER", re.ASCII),
)

ABBREVIATION_CODES: Dict[str, str] = {
    "PET": "1",
    "PETE": "1",
    "HDPE": "2",
    "PVC": "3",
    "LDPE": "4",
    "PP": "5",
    "PS": "6",
    "OTHER": "7",
    "OTHERS": "7",
}

ABBREVIATION_REGEX = re.compile(
    r"\b(" + "|".join(sorted(ABBREVIATION_CODES, key=len, reverse=True)) + r")\b",
    re.ASCII,
)


# TEXT PREPARATION


class PreparedText(NamedTuple):
    """Views of the raw text that the strategies search."""
    upper: str       # original spacing, uppercased
    squashed: str    # whitespace removed, uppercased


def prepare_text(text: str) -> PreparedText:
    upper = text.upper()
    return PreparedText(upper=upper, squashed=re.sub(r"\s+", "", upper))


def _first_group(match: "re.Match[str]") -> Optional[str]:
    """First non-empty capture group of an alternation match."""
    return next((group for group in match.groups() if group), None)


def _earliest_match(patterns: Sequence["re.Pattern[str]"], text: str) -> Optional["re.Match[str]"]:
    """Match that starts first in the text; pattern order breaks ties."""
    best = None
    for pattern in patterns:
        m = pattern.search(text)
        if m and (best is None or m.start() < best.start()):
            best = m
    return best


# STRATEGIES


def _match_isolated_digit(prepared: PreparedText) -> Optional[str]:
    m = ISOLATED_DIGIT_REGEX.search(prepared.upper)
    return m.group(1) if m else None


def _match_contextual(prepared: PreparedText) -> Optional[str]:
    m = _earliest_match(CONTEXT_PATTERNS + ABBREVIATION_DIGIT_PATTERNS, prepared.upper)
    return _first_group(m) if m else None


def _match_abbreviation(prepared: PreparedText) -> Optional[str]:
    m = ABBREVIATION_REGEX.search(prepared.squashed)
    return ABBREVIATION_CODES[m.group(1)] if m else None


def _match_loose_digit(prepared: PreparedText) -> Optional[str]:
    # Low precision: stray digits in prices or addresses also match.
    m = LOOSE_DIGIT_REGEX.search(prepared.squashed)
    return m.group(0) if m else None


# Evaluated in order; the first strategy that yields a code wins.
STRATEGIES: Tuple[Tuple[MatchStrategy, Callable[[PreparedText], Optional[str]]], ...] = (
    (MatchStrategy.ISOLATED_DIGIT, _match_isolated_digit),
    (MatchStrategy.CONTEXTUAL, _match_contextual),
    (MatchStrategy.ABBREVIATION, _match_abbreviation),
    (MatchStrategy.LOOSE_DIGIT, _match_loose_digit),
)


# PATTERN MATCHING


def match_resin_code(text: Optional[str]) -> Optional[Tuple[str, MatchStrategy]]:
    """
    Find a resin code in OCR text using the ordered strategy list.

    Algorithm:
      1. Isolated digit 1-7 (word boundaries)
      2. Digit next to the recycling glyph, RESIN / PLASTIC keywords,
         or its own abbreviation (PET 1, 2 HDPE, ...)
      3. Bare abbreviation in whitespace-stripped text (PET, HDPE, ...)
      4. Any digit 1-7 in whitespace-stripped text

    Within a strategy the earliest match in the text wins. Conflicting
    candidates across strategies are not reconciled.

    Args:
        text: Raw OCR text

    Returns:
        (code, strategy) if found, None otherwise
    """
    if not text or not isinstance(text, str):
        logger.debug("No text to analyze")
        return None

    try:
        prepared = prepare_text(text)

        for strategy, extractor in STRATEGIES:
            code = extractor(prepared)
            if code:
                if strategy is MatchStrategy.LOOSE_DIGIT:
                    logger.warning(f"Possible resin code (loose digit, less reliable): {code}")
                else:
                    logger.info(f"Found resin code via {strategy.value}: {code}")
                return code, strategy

        logger.debug("No resin code found in text")
        return None

    except Exception as e:
        logger.error(f"Error in match_resin_code: {e}", exc_info=True)
        return None


def infer(text: Optional[str], blocks: Optional[Sequence[Any]] = None) -> SymbolGuess:
    """
    Infer the resin code and its confidence from recognized text.

    Never raises; text without a recognizable code yields
    SymbolGuess(code=None, confidence=0).

    Args:
        text: Raw OCR text (None / non-string treated as empty)
        blocks: Structured OCR regions, if the recognizer produced any

    Returns:
        SymbolGuess with code, confidence and matching strategy
    """
    return infer_from_recognition(RecognitionResult.from_raw(text, blocks))


def infer_from_recognition(result: RecognitionResult) -> SymbolGuess:
    """Same as infer(), for an already-built RecognitionResult."""
    match = match_resin_code(result.text)
    if match is None:
        return SymbolGuess(code=None, confidence=0)

    code, strategy = match
    return SymbolGuess(
        code=code,
        confidence=estimate_confidence(result, code),
        strategy=strategy,
    )
