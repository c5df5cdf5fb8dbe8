"""
fios_stats.extract
==================
Sub-package: metric extraction from the router's stats documents.

    core.py     – extract() dispatcher
    anchors.py  – HTML / JSON label scanners
    coerce.py   – raw text -> typed value
    fields.py   – expected fields per page
"""

from .core import detect_format, extract
from .fields import PAGE_FIELDS, FieldSpec

__all__ = ["extract", "detect_format", "FieldSpec", "PAGE_FIELDS"]
