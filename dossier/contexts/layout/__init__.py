"""
Layout Context

Responsibilities:
- Holds the base typography/spacing tables and density multipliers
- Resolves (target pages, density) into LayoutParameters

Owns: Presentation tightness
Never: Changes the content that is rendered
"""

from dossier.contexts.layout.resolver import (
    LayoutParameters,
    LayoutProfile,
    PageMargins,
    base_page_margins,
    coerce_density,
    coerce_target_pages,
    resolve_layout,
)

__all__ = [
    "resolve_layout",
    "base_page_margins",
    "coerce_density",
    "coerce_target_pages",
    "LayoutParameters",
    "LayoutProfile",
    "PageMargins",
]
