"""
Templating Context

Responsibilities:
- Dispatches a template id to one of the fixed template variants
- Decides per variant which optional sections appear at a page count
- Chooses the skills presentation (list or grid)
- Renders CanonicalContent + LayoutParameters into self-contained HTML

Owns: Markup generation and escaping
Never: Measures or paginates output
"""

from dossier.contexts.templating.exceptions import TemplateRenderError
from dossier.contexts.templating.renderer import (
    DEFAULT_TEMPLATE,
    SKILLS_GRID_MIN_COUNT,
    TEMPLATE_SPECS,
    SkillsMode,
    TemplateId,
    TemplateSpec,
    choose_skills_mode,
    render_markup,
    resolve_template,
    section_visibility,
)
from dossier.contexts.templating.template_registry import TemplateRegistry

__all__ = [
    "render_markup",
    "resolve_template",
    "choose_skills_mode",
    "section_visibility",
    "DEFAULT_TEMPLATE",
    "SKILLS_GRID_MIN_COUNT",
    "TEMPLATE_SPECS",
    "SkillsMode",
    "TemplateId",
    "TemplateSpec",
    "TemplateRegistry",
    "TemplateRenderError",
]
