"""
Settings loading for the rendering pipeline.

Packaged defaults live in dossier/config/rendering.yaml. An alternate file can
be layered on top via DOSSIER_SETTINGS_PATH, and a handful of environment
variables override individual keys.

Examples:
    >>> settings = load_settings()
    >>> settings.engine.content_timeout_ms
    15000

    >>> settings = load_settings(overrides={"fit": {"max_adjustment_passes": 2}})
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "config" / "rendering.yaml"

# Environment variable -> dotted settings key
ENV_OVERRIDES = {
    "DOSSIER_BROWSER_EXECUTABLE": "engine.executable_path",
    "DOSSIER_RENDER_TIMEOUT_S": "engine.render_timeout_s",
    "DOSSIER_MAX_ENGINE_INSTANCES": "engine.max_instances",
    "DOSSIER_MAX_ADJUSTMENT_PASSES": "fit.max_adjustment_passes",
    "DOSSIER_PAGE_FORMAT": "page.format",
    "DOSSIER_LOG_LEVEL": "logging.console_level",
}


def _env_overrides() -> DictConfig:
    dotlist = []
    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            dotlist.append(f"{key}={value}")
    return OmegaConf.from_dotlist(dotlist)


def load_settings(
    path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> DictConfig:
    """
    Load rendering settings.

    Merge order (later wins): packaged defaults, settings file (explicit `path`
    or DOSSIER_SETTINGS_PATH), environment variables, `overrides`.

    Args:
        path: Optional YAML file layered over the packaged defaults
        overrides: Optional nested dict applied last

    Returns:
        Read-only DictConfig
    """
    layers = [OmegaConf.load(DEFAULT_SETTINGS_PATH)]

    if path is None and os.getenv("DOSSIER_SETTINGS_PATH"):
        path = Path(os.getenv("DOSSIER_SETTINGS_PATH"))
    if path is not None:
        layers.append(OmegaConf.load(path))

    layers.append(_env_overrides())
    if overrides:
        layers.append(OmegaConf.create(overrides))

    settings = OmegaConf.merge(*layers)
    OmegaConf.set_readonly(settings, True)
    return settings
