"""
DOSSIER - Density-Oriented Structured Summary Intake, Extraction and Rendering

A résumé assembly pipeline that reconciles AI-generated content with user
profile data and renders it to a page-count-targeted PDF.

Architecture:
- Content Context: Normalization of heterogeneous content shapes and project merging
- Layout Context: Density and page-count driven typographic parameters
- Templating Context: HTML template variants populated with canonical content
- Rendering Context: Headless browser pagination and fill measurement
"""

__version__ = "0.1.0"
