"""
Resume Rendering Pipeline

Runs one render request end to end:

    raw AI content + user profile -> normalize_content -> resolve_layout
        -> render_markup -> render_to_document -> analyze_fill

followed by at most fit.max_adjustment_passes re-renders that move density
one step in the direction suggested by the fill diagnostics. A re-render that
overflows when the previous one fit is discarded and the loop stops. Passes
are layout tuning on a successful render, never retries after a failure.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from dossier.contexts.content.content_data_structures import CanonicalContent
from dossier.contexts.content.normalizer import normalize_content
from dossier.contexts.layout.defaults import DENSITY_LEVELS
from dossier.contexts.layout.resolver import LayoutParameters, LayoutProfile, resolve_layout
from dossier.contexts.rendering.browser_pool import BrowserPool
from dossier.contexts.rendering.fill_diagnostics import FillDiagnostics, analyze_fill
from dossier.contexts.rendering.logger import (
    _log_debug,
    log_adjustment,
    log_render_failure,
    log_render_result,
    log_render_start,
)
from dossier.contexts.rendering.page_fit import DocumentRender, render_to_document
from dossier.contexts.rendering.request import RenderRequest
from dossier.contexts.templating.renderer import TemplateSpec, render_markup, resolve_template
from dossier.contexts.templating.template_registry import TemplateRegistry
from dossier.utils.settings import load_settings


@dataclass
class RenderOutcome:
    """
    Result of a full pipeline run.

    Attributes:
        artifact: PDF bytes of the accepted render
        actual_pages: Page count of the artifact
        target_pages: Requested page count
        density: Requested density
        applied_density: Density of the accepted render
        fill_ratio: Fill ratio of the accepted render
        passes: Adjustment passes performed (0 if the first render was kept as is)
        template_id: Template variant actually used
        diagnostics: Fill diagnostics of the accepted render
    """

    artifact: bytes
    actual_pages: int
    target_pages: int
    density: int
    applied_density: int
    fill_ratio: float
    passes: int
    template_id: str
    diagnostics: FillDiagnostics

    def metrics(self) -> Dict[str, Any]:
        return {
            "actualPages": self.actual_pages,
            "targetPages": self.target_pages,
            "density": self.density,
            "appliedDensity": self.applied_density,
            "fillRatio": round(self.fill_ratio, 3),
            "passes": self.passes,
            "templateId": self.template_id,
            "issues": self.diagnostics.get_inherited_issues(),
        }


def render_request_markup(
    request: RenderRequest,
    content: CanonicalContent,
    density: Optional[int] = None,
    page_format: str = "Letter",
    registry: Optional[TemplateRegistry] = None,
) -> Tuple[str, LayoutParameters, TemplateSpec]:
    """Resolve layout and render markup for a request at a given density."""
    spec = resolve_template(request.template_id)
    layout = resolve_layout(
        request.target_pages,
        request.density if density is None else density,
        spec.layout_profile,
    )
    markup = render_markup(
        request.full_name,
        content,
        spec.template_id,
        request.target_pages,
        layout,
        page_format=page_format,
        registry=registry,
    )
    return markup, layout, spec


def _next_density(density: int, diagnostics: FillDiagnostics, step: int) -> int:
    candidate = density + diagnostics.suggested_density_step * step
    return max(min(DENSITY_LEVELS), min(max(DENSITY_LEVELS), candidate))


def _adjustment_reason(diagnostics: FillDiagnostics) -> str:
    if diagnostics.overflowed:
        return f"{diagnostics.actual_pages} page(s) for target {diagnostics.target_pages}"
    return f"fill ratio {diagnostics.fill_ratio:.2f} below {diagnostics.underfill_threshold:.2f}"


async def build_resume(
    request: RenderRequest,
    ai_content: Any,
    user_profile: Any,
    settings=None,
    pool: Optional[BrowserPool] = None,
    registry: Optional[TemplateRegistry] = None,
) -> RenderOutcome:
    """
    Normalize, lay out, render and measure a résumé.

    Args:
        request: Validated render request
        ai_content: Raw AI-generated content (JSON-like)
        user_profile: Raw user profile (JSON-like)
        settings: Loaded settings (packaged defaults if omitted)
        pool: Browser pool (shared per-loop pool if omitted)
        registry: Template registry (fresh registry if omitted)

    Returns:
        RenderOutcome

    Raises:
        TemplateRenderError: If the template fails to render
        RenderEngineError: If the browser fails or times out
    """
    started = time.time()
    settings = settings or load_settings()
    registry = registry or TemplateRegistry()
    fit = settings.fit
    page_format = settings.page.format

    async def render_at(density: int) -> Tuple[DocumentRender, FillDiagnostics]:
        markup, layout, _ = render_request_markup(request, content, density, page_format, registry)
        render = await render_to_document(
            markup, request.target_pages, layout.page_margins, settings, pool
        )
        diagnostics = analyze_fill(
            render.actual_pages, request.target_pages, render.fill_ratio, fit.underfill_threshold
        )
        return render, diagnostics

    spec = resolve_template(request.template_id)
    log_render_start(request.full_name, spec.template_id.value, request.target_pages, request.density)

    try:
        content = normalize_content(ai_content, user_profile)

        density = request.density
        render, diagnostics = await render_at(density)
        passes = 0

        while passes < fit.max_adjustment_passes and diagnostics.suggested_density_step:
            if spec.layout_profile == LayoutProfile.COMPACT:
                _log_debug("Compact template ignores density; no adjustment")
                break
            next_density = _next_density(density, diagnostics, fit.density_step)
            if next_density == density:
                _log_debug(f"Density already at {density}; no adjustment")
                break

            log_adjustment(passes + 1, _adjustment_reason(diagnostics), density, next_density)
            candidate, candidate_diagnostics = await render_at(next_density)
            passes += 1

            if candidate_diagnostics.overflowed and not diagnostics.overflowed:
                _log_debug(f"Density {next_density} overflowed; keeping density {density}")
                break
            density, render, diagnostics = next_density, candidate, candidate_diagnostics

    except Exception as e:
        log_render_failure(e, time.time() - started)
        raise

    outcome = RenderOutcome(
        artifact=render.artifact,
        actual_pages=render.actual_pages,
        target_pages=request.target_pages,
        density=request.density,
        applied_density=density,
        fill_ratio=render.fill_ratio,
        passes=passes,
        template_id=spec.template_id.value,
        diagnostics=diagnostics,
    )
    log_render_result(outcome, time.time() - started)
    return outcome


def build_resume_sync(
    request: RenderRequest,
    ai_content: Any,
    user_profile: Any,
    settings=None,
) -> RenderOutcome:
    """Blocking wrapper around build_resume() for scripts."""
    return asyncio.run(build_resume(request, ai_content, user_profile, settings))
