"""
Reporting Services

File exports of the reports served by the API.
"""

from .export_service import ExportService, MEDIA_TYPES

__all__ = [
    "ExportService",
    "MEDIA_TYPES",
]
