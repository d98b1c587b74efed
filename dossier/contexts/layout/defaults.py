"""
Base layout tables for DOSSIER documents.

Provides:
- BASE_LAYOUT: nominal typography and spacing at 1 page / density 3
- BASE_PAGE_MARGINS: page margins per target page count (density independent)
- DENSITY_MULTIPLIERS: spacing / line-height / margin scalars per density level
- COMPACT_LAYOUT: fixed tight profile for the density-independent template

Units: font sizes, spacing and margins are in points (pt); line heights are
unitless multiples of the font size. Spacing and margin base values are whole
points so density 3 reproduces them exactly.
"""

from typing import Dict

SUPPORTED_PAGE_COUNTS = (1, 2, 3)
DENSITY_LEVELS = (1, 2, 3, 4, 5)
DEFAULT_PAGE_COUNT = 1
DEFAULT_DENSITY = 3

# Nominal values at page count 1, density 3
BASE_LAYOUT = {
    "body_font_size": 10.5,
    "header_font_size": 20.0,
    "section_title_size": 12.0,
    "line_height": 1.4,
    "summary_line_height": 1.5,
    "skills_line_height": 1.6,
    "section_margin": 16,
    "item_margin": 12,
    "bullet_margin": 3,
    "header_margin": 12,
}

# One-page documents get the tightest margins, three-page the most generous
BASE_PAGE_MARGINS: Dict[int, Dict[str, int]] = {
    1: {"top": 28, "bottom": 36, "left": 50, "right": 50},
    2: {"top": 36, "bottom": 40, "left": 54, "right": 54},
    3: {"top": 44, "bottom": 48, "left": 58, "right": 58},
}

# Level 1 is spacious, level 5 compact; level 3 is the identity
DENSITY_MULTIPLIERS: Dict[int, Dict[str, float]] = {
    1: {"spacing": 1.4, "line_height": 1.3, "margins": 1.3},
    2: {"spacing": 1.2, "line_height": 1.15, "margins": 1.15},
    3: {"spacing": 1.0, "line_height": 1.0, "margins": 1.0},
    4: {"spacing": 0.8, "line_height": 0.92, "margins": 0.85},
    5: {"spacing": 0.6, "line_height": 0.85, "margins": 0.7},
}

# Which LayoutParameters fields each multiplier scales
SPACING_FIELDS = ("section_margin", "item_margin", "bullet_margin", "header_margin")
LINE_HEIGHT_FIELDS = ("line_height", "summary_line_height", "skills_line_height")
FONT_FIELDS = ("body_font_size", "header_font_size", "section_title_size")

COMPACT_LAYOUT = {
    "body_font_size": 10.0,
    "header_font_size": 16.0,
    "section_title_size": 11.0,
    "line_height": 1.2,
    "summary_line_height": 1.25,
    "skills_line_height": 1.3,
    "section_margin": 8,
    "item_margin": 6,
    "bullet_margin": 1,
    "header_margin": 6,
}

COMPACT_PAGE_MARGINS = {"top": 24, "bottom": 24, "left": 36, "right": 36}
