"""
Session logging for DOSSIER runs.

One call per session configures loguru with a DEBUG file sink inside the
session directory and a colorized console sink, then writes a provenance
header describing the run (package and engine versions, effective rendering
settings). Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

import dossier

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

# Distributions whose installed versions go into every provenance header
PROVENANCE_PACKAGES = ("playwright", "jinja2", "PyPDF2")


def package_versions() -> Dict[str, str]:
    """Installed versions of the rendering stack ('not installed' if absent)."""
    versions = {}
    for name in PROVENANCE_PACKAGES:
        try:
            versions[name] = metadata.version(name)
        except metadata.PackageNotFoundError:
            versions[name] = "not installed"
    return versions


def settings_provenance(settings) -> Dict[str, Any]:
    """Flatten the settings that change render output into provenance lines."""
    return {
        "Page format": settings.page.format,
        "Browser executable": settings.engine.executable_path or "bundled chromium",
        "Max engine instances": settings.engine.max_instances,
        "Render timeout": f"{settings.engine.render_timeout_s}s",
        "Max adjustment passes": settings.fit.max_adjustment_passes,
        "Underfill threshold": settings.fit.underfill_threshold,
    }


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, Any]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Configure loguru for one DOSSIER session.

    Args:
        context_name: Context identifier, used as the log file stem ("render")
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level echoed to stdout; the file gets DEBUG

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Template": "modern"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level.upper(), colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, Any]] = None) -> None:
    """Write the session header: command line, versions, then extra context."""
    logger.info("=" * 80)
    logger.info(f"DOSSIER {dossier.__version__} ({context_name})")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    for name, version in package_versions().items():
        logger.info(f"{name}: {version}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
