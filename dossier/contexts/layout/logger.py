"""
Layout context logger.

Provides logging interface for the layout context with automatic [layout] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[layout]"


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
