"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from dossier.utils.logger import settings_provenance
from dossier.utils.logger import setup_logger as _setup_logger
from dossier.utils.settings import load_settings

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, settings=None, extra_provenance=None) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        settings: Loaded settings for the provenance header and console level
        extra_provenance: Request details (template, target pages, ...)

    Returns:
        Path to log file
    """
    settings = settings or load_settings()
    extra = {**settings_provenance(settings), **(extra_provenance or {})}
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance=extra,
        console_level=settings.logging.console_level,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(name: str, template_id: str, target_pages: int, density: int) -> None:
    """Log start of a render with request context."""
    _log_info(f"Starting render: {name}")
    _log_debug(f"  Template: {template_id}")
    _log_debug(f"  Target pages: {target_pages}, density: {density}")


def log_adjustment(pass_number: int, reason: str, old_density: int, new_density: int) -> None:
    _log_warning(f"Adjustment pass {pass_number}: {reason}, density {old_density} -> {new_density}")


def log_render_result(outcome, elapsed_time: float) -> None:
    """
    Log the final outcome of a render.

    Args:
        outcome: RenderOutcome from build_resume()
        elapsed_time: Wall time of the whole pipeline
    """
    summary = (
        f"{outcome.actual_pages}/{outcome.target_pages} page(s), "
        f"density {outcome.applied_density} (requested {outcome.density}), "
        f"fill {outcome.fill_ratio:.2f} ({elapsed_time:.2f}s)"
    )
    if outcome.diagnostics.is_valid:
        _log_success(f"Render succeeded: {summary}")
    else:
        _log_warning(f"Render finished off target: {summary}")
        for issue in outcome.diagnostics.get_inherited_issues():
            _log_warning(f"  {issue}")


def log_render_failure(error: BaseException, elapsed_time: float) -> None:
    _log_error(f"Render failed after {elapsed_time:.2f}s: {error}")
