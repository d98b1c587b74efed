"""
Render request validation.

A RenderRequest reaches the pipeline already validated: a non-blank name, a
target page count in {1, 2, 3} and an integer density in 1..5. Missing page
count and density take their defaults (1 and 3).
"""

from dataclasses import dataclass
from typing import Any, Mapping

from dossier.contexts.layout.defaults import DEFAULT_DENSITY, DEFAULT_PAGE_COUNT
from dossier.contexts.layout.resolver import coerce_density, coerce_target_pages
from dossier.contexts.rendering.exceptions import RenderRequestError
from dossier.contexts.templating.renderer import DEFAULT_TEMPLATE, TemplateId
from dossier.utils.text_processing import collapse_whitespace, first_present


@dataclass(frozen=True)
class RenderRequest:
    """
    Validated render request.

    Attributes:
        full_name: Name shown in the document header
        template_id: Template variant id (unknown ids fall back at render time)
        target_pages: 1, 2 or 3
        density: 1 (spacious) .. 5 (compact)
    """

    full_name: str
    template_id: str = DEFAULT_TEMPLATE.value
    target_pages: int = DEFAULT_PAGE_COUNT
    density: int = DEFAULT_DENSITY


def validate_render_request(
    full_name: Any,
    template_id: Any = None,
    target_pages: Any = None,
    density: Any = None,
) -> RenderRequest:
    """
    Build a RenderRequest from loosely-typed values.

    Raises:
        RenderRequestError: On a missing name or unsupported page count/density

    Example:
        >>> validate_render_request("Ada Lovelace", target_pages="2").target_pages
        2
    """
    if full_name is not None and not isinstance(full_name, str):
        raise RenderRequestError(f"expected a string, got {type(full_name).__name__}", "fullName")
    name = collapse_whitespace(full_name)
    if not name:
        raise RenderRequestError("name is required", "fullName")

    try:
        pages = coerce_target_pages(target_pages)
    except ValueError as e:
        raise RenderRequestError(str(e), "targetPages") from e

    try:
        level = coerce_density(density)
    except ValueError as e:
        raise RenderRequestError(str(e), "density") from e

    if isinstance(template_id, TemplateId):
        template_id = template_id.value
    template = collapse_whitespace(template_id).lower() or DEFAULT_TEMPLATE.value
    return RenderRequest(full_name=name, template_id=template, target_pages=pages, density=level)


def request_from_mapping(payload: Mapping[str, Any]) -> RenderRequest:
    """Validate a JSON-like request payload (camelCase or snake_case keys)."""
    if not isinstance(payload, Mapping):
        raise RenderRequestError(f"expected a mapping, got {type(payload).__name__}")
    return validate_render_request(
        full_name=first_present(payload, ("fullName", "full_name", "name")),
        template_id=first_present(payload, ("templateId", "template_id", "template")),
        target_pages=first_present(payload, ("targetPages", "target_pages", "pages")),
        density=first_present(payload, ("density",)),
    )
