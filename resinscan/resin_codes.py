# resinscan/resin_codes.py
"""
Static reference data for the seven plastic resin identification codes.
Loaded once at import time and exposed read-only.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


# DATA CLASSES


@dataclass(frozen=True)
class ResinCodeInfo:
    """
    Recycling facts for one resin code.

    Attributes:
        code (str): Resin code '1'..'7'
        name (str): Short abbreviation, e.g. 'PET'
        full_name (str): Polymer name, e.g. 'Polyethylene Terephthalate'
        material (str): Material family
        bin_type (str): Bin the item belongs in
        recyclable (bool): Whether standard programs accept it
        common_uses (Tuple[str, ...]): Typical products
        recycled_into (Tuple[str, ...]): Typical secondary products
        tips (Tuple[str, ...]): Disposal tips
        description (str): One-line summary
        color (str): Display color (hex)
    """
    code: str
    name: str
    full_name: str
    material: str
    bin_type: str
    recyclable: bool
    common_uses: Tuple[str, ...]
    recycled_into: Tuple[str, ...]
    tips: Tuple[str, ...]
    description: str
    color: str

    def __post_init__(self) -> None:
        """Validate record shape after initialization."""
        if self.code not in ("1", "2", "3", "4", "5", "6", "7"):
            raise ValueError(f"code must be '1'..'7', got {self.code!r}")

        if not self.color.startswith("#"):
            raise ValueError(f"color must be a hex string, got {self.color!r}")

    @property
    def label(self) -> str:
        """Human-readable label, e.g. 'PET (Polyethylene Terephthalate)'."""
        return f"{self.name} ({self.full_name})"


# BIN TYPES


RECYCLING_BIN = "Recycling Bin"
GENERAL_WASTE = "General Waste"
SPECIAL_COLLECTION = "Special Collection"
HAZARDOUS_WASTE = "Hazardous Waste"

BIN_TYPE_COLORS: Mapping[str, str] = MappingProxyType({
    RECYCLING_BIN: "#4CAF50",
    GENERAL_WASTE: "#757575",
    SPECIAL_COLLECTION: "#FF9800",
    HAZARDOUS_WASTE: "#F44336",
})

DEFAULT_BIN_COLOR = "#757575"


# RESIN CODE TABLE


_RECORDS = (
    ResinCodeInfo(
        code="1",
        name="PET",
        full_name="Polyethylene Terephthalate",
        material="Plastic",
        bin_type=RECYCLING_BIN,
        recyclable=True,
        common_uses=(
            "Water bottles",
            "Soft drink bottles",
            "Food containers",
            "Microwaveable food trays",
        ),
        recycled_into=(
            "New bottles",
            "Clothing fibers",
            "Carpeting",
            "Furniture stuffing",
        ),
        tips=(
            "Remove caps and lids",
            "Rinse clean",
            "Crush to save space",
            "Do not reuse for food storage",
        ),
        description="Most commonly recycled plastic. Clear, lightweight, and safe for single use.",
        color="#4CAF50",
    ),
    ResinCodeInfo(
        code="2",
        name="HDPE",
        full_name="High-Density Polyethylene",
        material="Plastic",
        bin_type=RECYCLING_BIN,
        recyclable=True,
        common_uses=(
            "Milk jugs",
            "Detergent bottles",
            "Yogurt containers",
            "Butter tubs",
        ),
        recycled_into=(
            "New containers",
            "Plastic lumber",
            "Playground equipment",
            "Trash cans",
        ),
        tips=(
            "Remove labels if possible",
            "Rinse thoroughly",
            "Keep caps on",
            "Safe to reuse",
        ),
        description="Very safe and commonly recycled. Often translucent white or colored.",
        color="#2196F3",
    ),
    ResinCodeInfo(
        code="3",
        name="PVC",
        full_name="Polyvinyl Chloride",
        material="Plastic",
        bin_type=GENERAL_WASTE,
        recyclable=False,
        common_uses=(
            "Plumbing pipes",
            "Credit cards",
            "Vinyl siding",
            "Medical tubing",
        ),
        recycled_into=(
            "Limited recycling options",
            "Industrial applications only",
        ),
        tips=(
            "Usually not accepted in curbside recycling",
            "Check local hazardous waste programs",
            "Avoid heating",
            "Contains chlorine compounds",
        ),
        description="Rarely recycled due to toxic additives. Avoid when possible.",
        color="#FF9800",
    ),
    ResinCodeInfo(
        code="4",
        name="LDPE",
        full_name="Low-Density Polyethylene",
        material="Plastic",
        bin_type=SPECIAL_COLLECTION,
        recyclable=True,
        common_uses=(
            "Plastic bags",
            "Food wraps",
            "Squeezable bottles",
            "Bread bags",
        ),
        recycled_into=(
            "New plastic bags",
            "Trash can liners",
            "Floor tiles",
            "Furniture",
        ),
        tips=(
            "Take bags to store collection bins",
            "Not accepted in curbside recycling",
            "Bundle together",
            "Keep dry and clean",
        ),
        description="Flexible plastic - take to special collection points at stores.",
        color="#9C27B0",
    ),
    ResinCodeInfo(
        code="5",
        name="PP",
        full_name="Polypropylene",
        material="Plastic",
        bin_type=RECYCLING_BIN,
        recyclable=True,
        common_uses=(
            "Yogurt containers",
            "Medicine bottles",
            "Bottle caps",
            "Straws",
        ),
        recycled_into=(
            "Auto parts",
            "Industrial fibers",
            "Food containers",
            "Rakes and scrapers",
        ),
        tips=(
            "Increasingly accepted in recycling",
            "Heat resistant",
            "Safe for food contact",
            "Remove any non-PP components",
        ),
        description="Growing acceptance in recycling programs. Heat resistant and safe.",
        color="#FF5722",
    ),
    ResinCodeInfo(
        code="6",
        name="PS",
        full_name="Polystyrene",
        material="Plastic",
        bin_type=GENERAL_WASTE,
        recyclable=False,
        common_uses=(
            "Styrofoam cups",
            "Take-out containers",
            "Disposable plates",
            "Packing peanuts",
        ),
        recycled_into=(
            "Very limited recycling",
            "Some specialty programs exist",
        ),
        tips=(
            "Avoid when possible",
            "Not accepted in most programs",
            "Breaks into small pieces easily",
            "Can leach chemicals",
        ),
        description="Difficult to recycle and potentially harmful. Avoid disposable forms.",
        color="#F44336",
    ),
    ResinCodeInfo(
        code="7",
        name="OTHER",
        full_name="Other Plastics",
        material="Mixed Plastic",
        bin_type=GENERAL_WASTE,
        recyclable=False,
        common_uses=(
            "Large containers",
            "Multi-layer packaging",
            "Mixed materials",
            "Some bottles",
        ),
        recycled_into=(
            "Very limited options",
            "Specialty processing required",
        ),
        tips=(
            "Usually not recyclable",
            "May contain BPA",
            "Check manufacturer for options",
            "Avoid heating",
        ),
        description="Catch-all category - usually not recyclable through standard programs.",
        color="#607D8B",
    ),
)

RESIN_CODES: Mapping[str, ResinCodeInfo] = MappingProxyType(
    {record.code: record for record in _RECORDS}
)

KNOWN_CODES: Tuple[str, ...] = tuple(RESIN_CODES)


# LOOKUPS


def get_resin_code_info(code: Optional[str]) -> Optional[ResinCodeInfo]:
    """
    Look up the record for a resin code.

    Args:
        code: Resin code ('1'..'7'); ints are accepted too

    Returns:
        ResinCodeInfo, or None for unknown / missing codes
    """
    if code is None:
        return None
    return RESIN_CODES.get(str(code).strip())


def get_all_resin_code_info() -> List[ResinCodeInfo]:
    """Return all seven records in code order."""
    return list(RESIN_CODES.values())


def get_bin_type_color(bin_type: Optional[str]) -> str:
    """Display color for a bin type, grey for anything unrecognized."""
    if not bin_type:
        return DEFAULT_BIN_COLOR
    return BIN_TYPE_COLORS.get(bin_type, DEFAULT_BIN_COLOR)


def get_recyclability_status(code: Optional[str]) -> str:
    """
    Summarize how an item with the given code is disposed of.

    Returns:
        'Easily Recyclable', 'Special Collection Required',
        'Not Recyclable' or 'Unknown'
    """
    info = get_resin_code_info(code)
    if info is None:
        logger.debug(f"No resin record for code {code!r}")
        return "Unknown"

    if info.recyclable and info.bin_type == RECYCLING_BIN:
        return "Easily Recyclable"
    if info.recyclable and info.bin_type == SPECIAL_COLLECTION:
        return "Special Collection Required"
    return "Not Recyclable"
