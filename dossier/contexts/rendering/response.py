"""
Single-response delivery.

A request gets exactly one response: either the PDF artifact with its metric
headers, or an ErrorReport. Once an artifact has been sent, a second artifact
is a protocol violation (ResponseAlreadySentError) and a late error is logged
and dropped instead of being written after the artifact.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from dossier.contexts.rendering.browser_pool import BrowserPool
from dossier.contexts.rendering.exceptions import ErrorReport, ResponseAlreadySentError, to_report
from dossier.contexts.rendering.logger import _log_error, _log_warning
from dossier.contexts.rendering.pipeline import RenderOutcome, build_resume
from dossier.contexts.rendering.request import RenderRequest, request_from_mapping

ARTIFACT_FILENAME = "resume.pdf"


@dataclass
class RenderResponse:
    """Artifact response: PDF body plus headers carrying the render metrics."""

    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_outcome(cls, outcome: RenderOutcome) -> "RenderResponse":
        return cls(
            body=outcome.artifact,
            headers={
                "Content-Type": "application/pdf",
                "Content-Disposition": f'attachment; filename="{ARTIFACT_FILENAME}"',
                "Content-Length": str(len(outcome.artifact)),
                "X-Actual-Pages": str(outcome.actual_pages),
                "X-Target-Pages": str(outcome.target_pages),
                "X-Density": str(outcome.density),
            },
        )


class ResponseChannel:
    """
    Holds the one response of a request.

    Subclasses hook delivery (e.g. writing to an HTTP response) by overriding
    _deliver_artifact / _deliver_error.
    """

    def __init__(self):
        self.response: Optional[RenderResponse] = None
        self.error: Optional[ErrorReport] = None

    @property
    def sent(self) -> bool:
        return self.response is not None or self.error is not None

    def send_artifact(self, response: RenderResponse) -> None:
        if self.sent:
            raise ResponseAlreadySentError("A response has already been sent on this channel")
        self.response = response
        self._deliver_artifact(response)

    def send_error(self, report: ErrorReport) -> bool:
        """Send an error report. Returns False if a response was already sent."""
        if self.sent:
            _log_warning(f"Dropping {report.kind} error after response was sent: {report.message}")
            return False
        self.error = report
        self._deliver_error(report)
        return True

    def _deliver_artifact(self, response: RenderResponse) -> None:
        pass

    def _deliver_error(self, report: ErrorReport) -> None:
        pass


async def respond(
    request: Union[RenderRequest, Mapping[str, Any]],
    ai_content: Any,
    user_profile: Any,
    channel: ResponseChannel,
    settings=None,
    pool: Optional[BrowserPool] = None,
) -> ResponseChannel:
    """
    Run the pipeline for a request and deliver exactly one response.

    Args:
        request: Validated RenderRequest or a raw request payload
        ai_content: Raw AI-generated content
        user_profile: Raw user profile
        channel: Where the response goes
        settings: Loaded settings (packaged defaults if omitted)
        pool: Browser pool (shared per-loop pool if omitted)

    Returns:
        The channel, holding either a RenderResponse or an ErrorReport
    """
    try:
        if not isinstance(request, RenderRequest):
            request = request_from_mapping(request)
        outcome = await build_resume(request, ai_content, user_profile, settings, pool)
    except Exception as e:
        report = to_report(e)
        if report.kind == "internal":
            _log_error(f"Unexpected {type(e).__name__}: {e}")
        channel.send_error(report)
        return channel

    channel.send_artifact(RenderResponse.from_outcome(outcome))
    return channel
