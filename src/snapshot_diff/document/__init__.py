"""
Snapshot ingestion.

Loads a delimited export into a TabularDocument (header row + data rows).
"""

from .tabular import TabularDocument

__all__ = ["TabularDocument"]
