# resinscan/waste_log.py
"""
Mapping from a scan result to the waste-log record the app stores.

Only the logical record is defined here; storing it is up to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict
import logging

from .detection_result import DetectionResult
from .resin_codes import GENERAL_WASTE, RECYCLING_BIN, SPECIAL_COLLECTION

logger = logging.getLogger(__name__)

UNKNOWN_WASTE_TYPE = "Unknown"

# Raw OCR text embedded in notes is cut to this length
MAX_NOTES_TEXT = 200


@dataclass(frozen=True)
class WasteLogEntry:
    """One row of the waste log (waste_type, quantity, bin_type, notes)."""
    waste_type: str
    quantity: int
    bin_type: str
    notes: str

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError(f"quantity must be a positive int, got {self.quantity!r}")

    @property
    def recyclable(self) -> bool:
        return self.bin_type in (RECYCLING_BIN, SPECIAL_COLLECTION)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "waste_type": self.waste_type,
            "quantity": self.quantity,
            "bin_type": self.bin_type,
            "notes": self.notes,
        }


def _build_notes(result: DetectionResult) -> str:
    parts = [
        f"Resin code: {result.code or 'none'}",
        f"Confidence: {result.confidence}%",
        f"Method: {result.method.value}",
    ]
    raw = " ".join(result.raw_text.split())
    if raw:
        parts.append(f"Detected text: {raw[:MAX_NOTES_TEXT]}")
    return " | ".join(parts)


def log_entry_from_detection(result: DetectionResult, quantity: int = 1) -> WasteLogEntry:
    """
    Build a waste-log entry for a scanned item.

    Args:
        result: Scan result to record
        quantity: Number of items disposed

    Returns:
        WasteLogEntry; undetected items are logged as Unknown / General Waste

    Raises:
        ValueError: If quantity is not a positive integer
    """
    info = result.resin_info
    entry = WasteLogEntry(
        waste_type=info.label if info else UNKNOWN_WASTE_TYPE,
        quantity=quantity,
        bin_type=info.bin_type if info else GENERAL_WASTE,
        notes=_build_notes(result),
    )
    logger.debug(f"Built waste log entry: {entry.waste_type} -> {entry.bin_type}")
    return entry
