"""
snapshot-diff: reconcile two CSV snapshots of the same dataset.

Submodules:
- document: Parsed CSV snapshots
- compare: Identifier detection, format fingerprints and the reconciliation engine
- runner: Background execution with a minimum visible run time
- templates: Saved column selections keyed by format fingerprint
- report: Summaries and CSV / JSON / Excel exports
- cli: Command-line entry point
"""

__version__ = "1.0.0"

__all__ = [
    "document",
    "compare",
    "runner",
    "templates",
    "report",
    "cli",
    "config",
    "errors",
]
