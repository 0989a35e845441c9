# resinscan/detection_result.py
"""
Data types passed between the text recognizer, the inference engine and
callers of the scan pipeline.

A RecognitionResult is what an OCR backend saw in one photo.
A SymbolGuess is a bare {code, confidence} answer from either the
inference engine or the fallback simulator.
A DetectionResult is the final, validated answer handed to callers.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from .resin_codes import KNOWN_CODES, ResinCodeInfo, get_resin_code_info


# ENUMS


class DetectionMethod(Enum):
    """Which path produced a DetectionResult."""

    TEXT_RECOGNITION = "text-recognition"
    FALLBACK_SIMULATION = "fallback-simulation"


class MatchStrategy(Enum):
    """
    Inference strategy that matched, in priority order.

    Useful for:
        - traceability/debugging
        - reporting in serialized output
    """

    ISOLATED_DIGIT = "isolated_digit"   # standalone 1-7 token
    CONTEXTUAL = "contextual"           # digit next to glyph / keyword / abbreviation
    ABBREVIATION = "abbreviation"       # PET, HDPE, ... without digit
    LOOSE_DIGIT = "loose_digit"         # any 1-7 anywhere (low precision)


# RECOGNITION INPUT


@dataclass(frozen=True)
class TextBlock:
    """One line/region reported by the OCR backend."""
    text: str
    confidence: float
    box: Tuple[Tuple[float, float], ...] = ()


@dataclass(frozen=True)
class RecognitionResult:
    """
    Output of a text recognizer for a single photograph.

    Attributes:
        text: Full recognized text (may be empty)
        blocks: Structured regions, opaque to the inference engine
    """
    text: str = ""
    blocks: Tuple[Any, ...] = ()

    def __post_init__(self):
        # Adapters are loosely typed: non-string text reads as "" and
        # missing or non-iterable blocks read as ()
        if not isinstance(self.text, str):
            object.__setattr__(self, "text", "")

        if not isinstance(self.blocks, tuple):
            try:
                blocks = () if self.blocks is None else tuple(self.blocks)
            except TypeError:
                blocks = ()
            object.__setattr__(self, "blocks", blocks)

    @classmethod
    def from_raw(cls, text: Any = None, blocks: Optional[Sequence[Any]] = None) -> "RecognitionResult":
        """Build a result from loosely-typed adapter output."""
        return cls(text=text, blocks=blocks)

    @property
    def has_blocks(self) -> bool:
        return len(self.blocks) > 0


# GUESSES


@dataclass(frozen=True)
class SymbolGuess:
    """Resin code guess with its confidence (0 when code is None)."""
    code: Optional[str]
    confidence: int
    strategy: Optional[MatchStrategy] = None

    @property
    def is_detected(self) -> bool:
        return self.code is not None


# FINAL RESULT


@dataclass(frozen=True)
class DetectionResult:
    """
    Final outcome of one scan attempt.

    Attributes:
        code:       Resin code '1'..'7', or None
        confidence: Heuristic score 0-100 (exactly 0 when code is None)
        raw_text:   Recognized text the decision was based on
        method:     Path that produced the result
        tip:        Guidance for the user, when confidence is low or no code
        strategy:   Inference strategy that matched (text path only)
    """
    code: Optional[str]
    confidence: int
    raw_text: str
    method: DetectionMethod
    tip: Optional[str] = None
    strategy: Optional[MatchStrategy] = None

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if self.code is not None and self.code not in KNOWN_CODES:
            raise ValueError(f"code must be one of {KNOWN_CODES} or None, got {self.code!r}")

        if not isinstance(self.confidence, int) or isinstance(self.confidence, bool):
            raise ValueError(f"confidence must be int, got {type(self.confidence)}")

        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence must be within [0, 100], got {self.confidence}")

        if self.code is None and self.confidence != 0:
            raise ValueError(f"confidence must be 0 without a code, got {self.confidence}")

        if not isinstance(self.method, DetectionMethod):
            raise ValueError(f"method must be DetectionMethod, got {type(self.method)}")

    @classmethod
    def from_guess(
        cls,
        guess: SymbolGuess,
        raw_text: str,
        method: DetectionMethod,
    ) -> "DetectionResult":
        """Wrap a guess, forcing confidence to 0 when there is no code."""
        confidence = int(guess.confidence) if guess.code is not None else 0
        return cls(
            code=guess.code,
            confidence=confidence,
            raw_text=raw_text or "",
            method=method,
            strategy=guess.strategy if guess.code is not None else None,
        )

    @property
    def is_detected(self) -> bool:
        return self.code is not None

    @property
    def resin_info(self) -> Optional[ResinCodeInfo]:
        return get_resin_code_info(self.code)

    def with_tip(self, tip: Optional[str]) -> "DetectionResult":
        """Copy of this result carrying the given tip."""
        return replace(self, tip=tip)

    def pretty(self) -> str:
        """Verbose multi-line debug representation."""
        info = self.resin_info
        return (
            f"Resin Code   : {self.code or '-'}\n"
            f"Material     : {info.label if info else '-'}\n"
            f"Confidence   : {self.confidence}%\n"
            f"Method       : {self.method.value}\n"
            f"Strategy     : {self.strategy.value if self.strategy else '-'}\n"
            f"Tip          : {self.tip or '-'}\n"
            f"Raw OCR Text : {self.raw_text[:200]}\n"
        )
