"""
Custom exceptions for the rendering context.

Every failure surfaced to a caller is reduced to an ErrorReport (kind +
message) via to_report(). Validation failures, template failures and engine
failures carry distinct kinds so callers can tell them apart.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

INTERNAL_ERROR_MESSAGE = "Internal error while rendering the document"


@dataclass(frozen=True)
class ErrorReport:
    """Structured failure handed back to the caller instead of an artifact."""

    kind: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RenderRequestError(ValueError):
    """
    Raised when a render request is malformed.

    Attributes:
        message: Error description
        field: Offending request field, if known
    """

    kind = "validation"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message if field is None else f"{field}: {message}")


class RenderEngineError(Exception):
    """
    Raised when the browser engine fails to launch, load, measure or paginate.

    Attributes:
        message: Error description
        stage: One of launch, load, measure, paginate, timeout
        original_error: The underlying exception
    """

    kind = "engine"

    def __init__(self, message: str, stage: str, original_error: Optional[Exception] = None):
        self.message = message
        self.stage = stage
        self.original_error = original_error

        parts = [f"{message} (stage: {stage})"]
        if original_error:
            parts.append(f"Original error: {original_error}")
        super().__init__("\n".join(parts))


class ResponseAlreadySentError(RuntimeError):
    """Raised when a second artifact is sent on a response channel."""


def to_report(error: BaseException) -> ErrorReport:
    """
    Reduce an exception to an ErrorReport.

    Engine failures get a generic message so browser internals never reach the
    caller; unknown exceptions are reported as kind "internal".
    """
    kind = getattr(error, "kind", None)
    if kind == RenderRequestError.kind:
        return ErrorReport(kind=kind, message=str(error))
    if kind == RenderEngineError.kind:
        return ErrorReport(kind=kind, message=f"Document rendering failed ({error.stage})")
    if kind == "template":
        return ErrorReport(kind=kind, message=error.message)
    return ErrorReport(kind="internal", message=INTERNAL_ERROR_MESSAGE)
