"""
Content context logger.

Provides logging interface for the content context with automatic [content] prefix.
All content modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[content]"


def _log_info(message: str) -> None:
    """Log info message with [content] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [content] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [content] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_normalization_summary(content) -> None:
    """Log section counts of a freshly normalized CanonicalContent."""
    _log_debug(
        "Normalized content: "
        f"{len(content.experiences)} experiences, "
        f"{len(content.skills)} skills, "
        f"{len(content.education)} education, "
        f"{len(content.projects)} projects, "
        f"{len(content.certifications)} certifications, "
        f"{len(content.awards)} awards, "
        f"{len(content.languages)} languages, "
        f"{len(content.publications)} publications"
    )
