"""
Shared utilities for DOSSIER.

Common functionality used across contexts:
- Text processing
- Logging setup
- Settings loading
- PDF inspection
"""

from dossier.utils.settings import load_settings
from dossier.utils.timestamp import now

__all__ = ["load_settings", "now"]
