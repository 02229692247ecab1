"""
Column-selection templates keyed by format fingerprint.
"""

from .store import ColumnTemplate, TemplateStore

__all__ = ["ColumnTemplate", "TemplateStore"]
