"""
Document Renderer

Renders CanonicalContent into a self-contained HTML document using one of a
fixed set of template variants. Variant selection is a plain lookup from
TemplateId to TemplateSpec; unknown ids fall back to the default variant.

Per-variant section policy (which optional sections appear at which page
count) and the skills presentation choice are data in TEMPLATE_SPECS and
SKILLS_GRID_MIN_COUNT, not logic inside the templates.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from jinja2 import TemplateError

from dossier.contexts.content.content_data_structures import CanonicalContent
from dossier.contexts.layout.resolver import LayoutParameters, LayoutProfile, coerce_target_pages
from dossier.contexts.templating.exceptions import TemplateRenderError
from dossier.contexts.templating.logger import _log_debug, _log_warning
from dossier.contexts.templating.template_registry import TemplateRegistry


class TemplateId(str, Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"
    COMPACT = "compact"


DEFAULT_TEMPLATE = TemplateId.MODERN


class SkillsMode(str, Enum):
    LIST = "list"
    GRID = "grid"


@dataclass(frozen=True)
class TemplateSpec:
    """
    Static description of a template variant.

    Attributes:
        template_id: Variant id (also the template file stem)
        layout_profile: Base layout profile; COMPACT ignores density
        extras_min_pages: Smallest page count that shows certifications,
            awards, languages and publications
        education_details_min_pages: Smallest page count that shows field of
            study and coursework
        projects_min_pages: Smallest page count that shows projects
        supports_skills_grid: Whether the variant can lay skills out as a grid
        grid_columns: Grid column count when the grid is used
    """

    template_id: TemplateId
    layout_profile: LayoutProfile = LayoutProfile.STANDARD
    extras_min_pages: int = 2
    education_details_min_pages: int = 2
    projects_min_pages: int = 1
    supports_skills_grid: bool = True
    grid_columns: int = 3


TEMPLATE_SPECS: Dict[TemplateId, TemplateSpec] = {
    TemplateId.MODERN: TemplateSpec(TemplateId.MODERN),
    TemplateId.CLASSIC: TemplateSpec(TemplateId.CLASSIC),
    TemplateId.MINIMAL: TemplateSpec(
        TemplateId.MINIMAL,
        projects_min_pages=2,
        supports_skills_grid=False,
    ),
    TemplateId.COMPACT: TemplateSpec(
        TemplateId.COMPACT,
        layout_profile=LayoutProfile.COMPACT,
        education_details_min_pages=1,
        grid_columns=4,
    ),
}

# Minimum skill count that switches a grid-capable variant to the grid,
# keyed by target page count
SKILLS_GRID_MIN_COUNT = {1: 15, 2: 12, 3: 10}


def resolve_template(template_id: Any = None) -> TemplateSpec:
    """
    Look up a template variant, falling back to the default for unknown ids.

    Example:
        >>> resolve_template("classic").template_id
        <TemplateId.CLASSIC: 'classic'>
        >>> resolve_template("fancy").template_id
        <TemplateId.MODERN: 'modern'>
    """
    if isinstance(template_id, TemplateId):
        return TEMPLATE_SPECS[template_id]
    key = str(template_id or "").strip().lower()
    try:
        return TEMPLATE_SPECS[TemplateId(key)]
    except ValueError:
        if template_id:
            _log_warning(f"Unknown template '{template_id}', using '{DEFAULT_TEMPLATE.value}'")
        return TEMPLATE_SPECS[DEFAULT_TEMPLATE]


def choose_skills_mode(template_id: Any, target_pages: Any, n_skills: int) -> SkillsMode:
    """
    Pick the skills presentation for a variant, page count and skill count.

    Grid when the variant supports it and n_skills reaches
    SKILLS_GRID_MIN_COUNT[target_pages]; otherwise a delimited list.
    """
    spec = resolve_template(template_id)
    pages = coerce_target_pages(target_pages)
    if spec.supports_skills_grid and n_skills >= SKILLS_GRID_MIN_COUNT[pages]:
        return SkillsMode.GRID
    return SkillsMode.LIST


def section_visibility(spec: TemplateSpec, target_pages: int) -> Dict[str, bool]:
    """Optional-section switches for a variant at a page count."""
    return {
        "extras": target_pages >= spec.extras_min_pages,
        "education_details": target_pages >= spec.education_details_min_pages,
        "projects": target_pages >= spec.projects_min_pages,
    }


def render_markup(
    name: str,
    content: CanonicalContent,
    template_id: Any,
    target_pages: Any,
    layout: LayoutParameters,
    page_format: str = "Letter",
    registry: Optional[TemplateRegistry] = None,
) -> str:
    """
    Render canonical content into a self-contained HTML document.

    Args:
        name: Full name shown in the header
        content: Normalized content
        template_id: Variant id; unknown ids use the default variant
        target_pages: 1, 2 or 3
        layout: Resolved layout parameters
        page_format: CSS page size keyword (Letter, A4)
        registry: Template registry (a fresh one by default)

    Returns:
        HTML string with inline styles and no external resources

    Raises:
        TemplateRenderError: If the template is missing or fails to render
    """
    spec = resolve_template(template_id)
    pages = coerce_target_pages(target_pages)
    registry = registry or TemplateRegistry()
    skills_mode = choose_skills_mode(spec.template_id, pages, len(content.skills))
    show = section_visibility(spec, pages)

    _log_debug(
        f"Rendering '{spec.template_id.value}' for {pages} page(s): "
        f"skills={skills_mode.value}, extras={show['extras']}"
    )

    try:
        template = registry.get_template(spec.template_id.value)
        return template.render(
            name=name,
            content=content,
            layout=layout,
            css_vars=layout.to_css_vars(),
            template_id=spec.template_id.value,
            page_format=page_format,
            show=show,
            skills_mode=skills_mode.value,
            grid_columns=spec.grid_columns,
        )
    except TemplateError as e:
        raise TemplateRenderError(
            f"Failed to render template '{spec.template_id.value}'",
            template_id=spec.template_id.value,
            template_path=registry.get_template_path(spec.template_id.value),
            original_error=e,
        ) from e
