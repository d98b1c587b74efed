"""
Layout Parameter Resolution

Maps (target page count, density level) to a concrete LayoutParameters value
object via a multiplicative model over the base tables in defaults.py:

    value = base value × multiplier[density][kind]

Spacing and margins are rounded to whole points; font sizes and line heights
stay fractional. The result depends only on the inputs, so the same request
always produces the same parameters.

Examples:
    >>> resolve_layout(1, 3).page_margins.top
    28
    >>> resolve_layout("1", 5).page_margins.top
    20
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

from dossier.contexts.layout.defaults import (
    BASE_LAYOUT,
    BASE_PAGE_MARGINS,
    COMPACT_LAYOUT,
    COMPACT_PAGE_MARGINS,
    DEFAULT_DENSITY,
    DEFAULT_PAGE_COUNT,
    DENSITY_LEVELS,
    DENSITY_MULTIPLIERS,
    FONT_FIELDS,
    LINE_HEIGHT_FIELDS,
    SPACING_FIELDS,
    SUPPORTED_PAGE_COUNTS,
)
from dossier.contexts.layout.logger import _log_debug


class LayoutProfile(str, Enum):
    """Base profile a template is laid out with."""

    STANDARD = "standard"
    COMPACT = "compact"


@dataclass(frozen=True)
class PageMargins:
    """Page margins in points."""

    top: int
    bottom: int
    left: int
    right: int

    def to_css(self) -> str:
        """CSS shorthand (top right bottom left)."""
        return f"{self.top}pt {self.right}pt {self.bottom}pt {self.left}pt"

    def to_pdf_options(self) -> Dict[str, str]:
        return {side: f"{value}pt" for side, value in asdict(self).items()}


@dataclass(frozen=True)
class LayoutParameters:
    """
    Typographic and spacing parameters for one render.

    Attributes:
        target_pages: Page count the parameters were resolved for
        density: Density level the parameters were resolved for
        profile: Base profile used
        body_font_size .. section_title_size: Font sizes (pt)
        line_height, summary_line_height, skills_line_height: Unitless
        section_margin, item_margin, bullet_margin, header_margin: Gaps (pt)
        page_margins: Page margins (pt)
    """

    target_pages: int
    density: int
    profile: LayoutProfile
    body_font_size: float
    header_font_size: float
    section_title_size: float
    line_height: float
    summary_line_height: float
    skills_line_height: float
    section_margin: int
    item_margin: int
    bullet_margin: int
    header_margin: int
    page_margins: PageMargins

    def to_css_vars(self) -> Dict[str, str]:
        """CSS custom properties consumed by the templates."""
        css = {}
        for name in FONT_FIELDS:
            css[f"--{name.replace('_', '-')}"] = f"{getattr(self, name)}pt"
        for name in LINE_HEIGHT_FIELDS:
            css[f"--{name.replace('_', '-')}"] = str(getattr(self, name))
        for name in SPACING_FIELDS:
            css[f"--{name.replace('_', '-')}"] = f"{getattr(self, name)}pt"
        return css

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["profile"] = self.profile.value
        return data


def coerce_target_pages(target_pages: Any = None) -> int:
    """
    Read a target page count given as int or numeric string.

    None means the default (1). Raises ValueError for anything outside {1, 2, 3}.
    """
    if target_pages is None:
        return DEFAULT_PAGE_COUNT
    if isinstance(target_pages, bool):
        raise ValueError(f"Unsupported target page count: {target_pages!r}")
    try:
        pages = int(str(target_pages).strip())
    except ValueError as e:
        raise ValueError(f"Unsupported target page count: {target_pages!r}") from e
    if pages not in SUPPORTED_PAGE_COUNTS:
        raise ValueError(
            f"Unsupported target page count: {target_pages!r} (expected one of {SUPPORTED_PAGE_COUNTS})"
        )
    return pages


def coerce_density(density: Any = None) -> int:
    """
    Read a density level given as an integer (or integral string).

    None means the default (3). Raises ValueError outside 1..5 or for fractions.
    """
    if density is None:
        return DEFAULT_DENSITY
    if isinstance(density, bool):
        raise ValueError(f"Unsupported density: {density!r}")
    if isinstance(density, float):
        if not density.is_integer():
            raise ValueError(f"Density must be an integer, got {density!r}")
        density = int(density)
    try:
        level = int(str(density).strip())
    except ValueError as e:
        raise ValueError(f"Unsupported density: {density!r}") from e
    if level not in DENSITY_LEVELS:
        raise ValueError(f"Unsupported density: {density!r} (expected 1-5)")
    return level


def _scale_spacing(value: int, multiplier: float) -> int:
    return int(round(value * multiplier))


def _scale_line_height(value: float, multiplier: float) -> float:
    return round(value * multiplier, 3)


def resolve_layout(
    target_pages: Any = DEFAULT_PAGE_COUNT,
    density: Any = DEFAULT_DENSITY,
    profile: LayoutProfile = LayoutProfile.STANDARD,
) -> LayoutParameters:
    """
    Resolve layout parameters for a target page count and density.

    The COMPACT profile ignores both density and page count and returns its
    fixed tight values.

    Args:
        target_pages: 1, 2 or 3 (int or numeric string)
        density: 1 (spacious) .. 5 (compact)
        profile: Base profile for the chosen template

    Returns:
        LayoutParameters

    Raises:
        ValueError: If target_pages or density is unsupported
    """
    pages = coerce_target_pages(target_pages)
    level = coerce_density(density)

    if profile == LayoutProfile.COMPACT:
        _log_debug(f"Compact profile: density {level} and {pages} page(s) ignored")
        return LayoutParameters(
            target_pages=pages,
            density=level,
            profile=profile,
            page_margins=PageMargins(**COMPACT_PAGE_MARGINS),
            **COMPACT_LAYOUT,
        )

    multipliers = DENSITY_MULTIPLIERS[level]
    values: Dict[str, Any] = {name: BASE_LAYOUT[name] for name in FONT_FIELDS}
    for name in LINE_HEIGHT_FIELDS:
        values[name] = _scale_line_height(BASE_LAYOUT[name], multipliers["line_height"])
    for name in SPACING_FIELDS:
        values[name] = _scale_spacing(BASE_LAYOUT[name], multipliers["spacing"])

    margins = PageMargins(
        **{
            side: _scale_spacing(value, multipliers["margins"])
            for side, value in BASE_PAGE_MARGINS[pages].items()
        }
    )

    _log_debug(f"Resolved layout for {pages} page(s) at density {level}: margins {margins.to_css()}")
    return LayoutParameters(
        target_pages=pages,
        density=level,
        profile=profile,
        page_margins=margins,
        **values,
    )


def base_page_margins(target_pages: Any = DEFAULT_PAGE_COUNT) -> PageMargins:
    """Unscaled page margins for a target page count."""
    return PageMargins(**BASE_PAGE_MARGINS[coerce_target_pages(target_pages)])
