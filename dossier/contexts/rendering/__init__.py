"""
Rendering Context

Responsibilities:
- Validates render requests
- Runs the normalize -> layout -> markup -> PDF pipeline
- Measures page count and fill ratio of each render
- Performs bounded density adjustment passes
- Manages the browser engine lifecycle (fresh instance per render)
- Delivers exactly one response per request

Owns: PDF artifacts and fit metrics
Never: Changes content or template section policy
"""

from dossier.contexts.rendering.browser_pool import BrowserPool, get_browser_pool
from dossier.contexts.rendering.exceptions import (
    ErrorReport,
    RenderEngineError,
    RenderRequestError,
    ResponseAlreadySentError,
    to_report,
)
from dossier.contexts.rendering.fill_diagnostics import FillDiagnostics, analyze_fill
from dossier.contexts.rendering.page_fit import (
    DocumentRender,
    compute_fill_ratio,
    count_pages,
    render_to_document,
    render_to_document_sync,
)
from dossier.contexts.rendering.pipeline import RenderOutcome, build_resume, build_resume_sync
from dossier.contexts.rendering.request import (
    RenderRequest,
    request_from_mapping,
    validate_render_request,
)
from dossier.contexts.rendering.response import RenderResponse, ResponseChannel, respond

__all__ = [
    "build_resume",
    "build_resume_sync",
    "render_to_document",
    "render_to_document_sync",
    "compute_fill_ratio",
    "count_pages",
    "analyze_fill",
    "validate_render_request",
    "request_from_mapping",
    "respond",
    "to_report",
    "BrowserPool",
    "get_browser_pool",
    "DocumentRender",
    "ErrorReport",
    "FillDiagnostics",
    "RenderEngineError",
    "RenderOutcome",
    "RenderRequest",
    "RenderRequestError",
    "RenderResponse",
    "ResponseAlreadySentError",
    "ResponseChannel",
]
