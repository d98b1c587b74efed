"""
PDF inspection utilities.

Helper functions:
    page_count: Structural page count of a PDF given as bytes or a path.
"""

import io
from pathlib import Path
from typing import Optional, Union

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf: Union[bytes, Path, str]) -> Optional[int]:
    """Get page count from PDF bytes or a PDF path, or None if unreadable."""
    try:
        source = io.BytesIO(pdf) if isinstance(pdf, (bytes, bytearray)) else str(pdf)
        reader = PdfReader(source)
        return len(reader.pages)
    except (PdfReadError, OSError, ValueError):
        return None
