"""
Integration tests for the rendering pipeline - tests real Chromium rendering.

Browser tests are skipped when Chromium cannot be launched (run
`playwright install chromium` or set DOSSIER_BROWSER_EXECUTABLE).
"""

import asyncio

import pytest

from dossier.contexts.content import normalize_content
from dossier.contexts.layout import resolve_layout
from dossier.contexts.rendering import (
    RenderEngineError,
    RenderRequest,
    ResponseChannel,
    build_resume_sync,
    render_to_document_sync,
    respond,
)
from dossier.contexts.templating import TemplateId, render_markup

AI_CONTENT = {
    "professionalSummary": "Delivery specialist with a record of arriving on time, mostly.",
    "experience": [
        {
            "jobTitle": "Delivery Boy",
            "companyName": "Planet Express",
            "location": "New New York",
            "startDate": "3000",
            "responsibilities": [f"Delivered package number {i} across the solar system" for i in range(6)],
        }
    ],
    "skills": ["Piloting", "Navigation", "Cargo handling", "Customer service"],
    "education": [{"institution": "Mars University", "degree": "Certificate", "year": "2999"}],
    "projects": [{"name": "Nibbler care", "description": "Kept a pet alive"}],
}

USER_PROFILE = {
    "fullName": "Philip J. Fry",
    "email": "fry@planetexpress.com",
    "certifications": [{"name": "Delivery License", "issuer": "DOOP"}],
}


@pytest.fixture(scope="module")
def chromium():
    """Skip the module's browser tests when Chromium cannot launch."""
    try:
        render_to_document_sync("<html><body><main id='resume'>check</main></body></html>", 1)
    except RenderEngineError as e:
        if e.stage == "launch":
            pytest.skip(f"Chromium not available: {e.original_error}")
        raise


@pytest.mark.integration
@pytest.mark.parametrize("template_id", [template.value for template in TemplateId])
def test_markup_end_to_end(template_id):
    """Raw inputs flow through normalization, layout and every template."""
    content = normalize_content(AI_CONTENT, USER_PROFILE)
    layout = resolve_layout(2, 3)

    markup = render_markup("Philip J. Fry", content, template_id, 2, layout)

    assert "Philip J. Fry" in markup
    assert "Planet Express" in markup
    assert "3000 - Present" in markup
    assert "Delivery License" in markup
    assert "fry@planetexpress.com" in markup


@pytest.mark.integration
@pytest.mark.browser
def test_single_page_render(chromium):
    outcome = build_resume_sync(RenderRequest(full_name="Philip J. Fry"), AI_CONTENT, USER_PROFILE)

    assert outcome.artifact.startswith(b"%PDF")
    assert outcome.actual_pages >= 1
    assert 0.0 <= outcome.fill_ratio <= 1.0
    assert outcome.passes <= 1


@pytest.mark.integration
@pytest.mark.browser
def test_long_content_overflows_single_page(chromium):
    long_content = dict(
        AI_CONTENT,
        experience=[
            dict(AI_CONTENT["experience"][0], jobTitle=f"Role {n}") for n in range(12)
        ],
    )
    outcome = build_resume_sync(
        RenderRequest(full_name="Philip J. Fry", density=5), long_content, USER_PROFILE
    )

    assert outcome.actual_pages > 1
    assert outcome.fill_ratio == 1.0
    assert not outcome.diagnostics.is_valid


@pytest.mark.integration
@pytest.mark.browser
def test_density_changes_content_height(chromium):
    content = normalize_content(AI_CONTENT, USER_PROFILE)
    heights = []
    for density in (1, 5):
        layout = resolve_layout(2, density)
        markup = render_markup("Philip J. Fry", content, "modern", 2, layout)
        heights.append(render_to_document_sync(markup, 2, layout.page_margins).content_height_px)

    spacious, compact = heights
    assert spacious > compact


@pytest.mark.integration
@pytest.mark.browser
def test_respond_delivers_pdf(chromium):
    channel = asyncio.run(
        respond(
            {"fullName": "Philip J. Fry", "targetPages": "1"},
            AI_CONTENT,
            USER_PROFILE,
            ResponseChannel(),
        )
    )

    assert channel.error is None
    assert channel.response.body.startswith(b"%PDF")
    assert channel.response.headers["X-Target-Pages"] == "1"
