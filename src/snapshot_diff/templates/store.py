"""
Saved column-selection templates.

A template remembers which columns a user wants to export for one file
layout. It is keyed by the layout's format fingerprint, so it applies to any
later snapshot with the same header row.
"""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
from opentelemetry import trace
from prometheus_client import Counter

from utils.metrics import get_or_create_metric
from utils.tracing import trace_operation

from ..compare import fingerprint
from ..errors import TemplateStoreError
from .schema import TEMPLATE_ENTRY_SCHEMA, TEMPLATE_FILE_SCHEMA

logger = logging.getLogger(__name__)

TEMPLATE_STORE_OPERATIONS = get_or_create_metric(
    lambda: Counter(
        "snapshot_template_store_operations_total",
        "Template store file operations",
        ["operation"],  # load, save, skip_invalid
    ),
    "snapshot_template_store_operations_total",
)


@dataclass(frozen=True)
class ColumnTemplate:
    """A named selection of column indices for one header layout."""

    header_id: str
    template_name: str
    indices: tuple[int, ...]

    @classmethod
    def from_headers(
        cls, template_name: str, headers: Sequence[str], indices: Sequence[int]
    ) -> "ColumnTemplate":
        """Build a template keyed by the fingerprint of ``headers``."""
        return cls(
            header_id=fingerprint(headers),
            template_name=template_name,
            indices=tuple(indices),
        )

    @classmethod
    def from_json(cls, payload: Any) -> "ColumnTemplate":
        """
        Decode one template entry.

        Raises:
            jsonschema.ValidationError: If a field is missing or mistyped;
                the error names the offending field
        """
        jsonschema.validate(instance=payload, schema=TEMPLATE_ENTRY_SCHEMA)
        return cls(
            header_id=payload["headerId"],
            template_name=payload["templateName"],
            indices=tuple(payload["indices"]),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "headerId": self.header_id,
            "templateName": self.template_name,
            "indices": list(self.indices),
        }


class TemplateStore:
    """
    Ordered list of ColumnTemplates persisted to a JSON file.

    ``add`` and the ``remove`` methods write the file immediately.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._templates: list[ColumnTemplate] = []

    @property
    def templates(self) -> tuple[ColumnTemplate, ...]:
        return tuple(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def load(self) -> int:
        """
        Replace the in-memory templates with the file's contents.

        A missing file leaves the store empty. Entries that fail validation
        are logged and skipped.

        Returns:
            Number of entries skipped as invalid

        Raises:
            TemplateStoreError: If the file cannot be read, is not JSON, or is
                not a JSON array
        """
        with trace_operation("load_templates", kind=trace.SpanKind.INTERNAL, path=self.path):
            if not self.path.exists():
                logger.debug(f"No template file at {self.path}, starting empty")
                self._templates = []
                return 0

            try:
                with open(self.path, encoding="utf-8") as f:
                    document = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise TemplateStoreError(f"Error reading template file {self.path}: {e}") from e

            try:
                jsonschema.validate(instance=document, schema=TEMPLATE_FILE_SCHEMA)
            except jsonschema.ValidationError as e:
                raise TemplateStoreError(
                    f"Template file {self.path} must contain a JSON array: {e.message}"
                ) from e

            templates = []
            skipped = 0
            for position, entry in enumerate(document):
                try:
                    templates.append(ColumnTemplate.from_json(entry))
                except jsonschema.ValidationError as e:
                    field = ".".join(str(part) for part in e.absolute_path) or "<entry>"
                    logger.warning(
                        f"Skipping template #{position} in {self.path}: {field}: {e.message}"
                    )
                    TEMPLATE_STORE_OPERATIONS.labels(operation="skip_invalid").inc()
                    skipped += 1

            self._templates = templates
            TEMPLATE_STORE_OPERATIONS.labels(operation="load").inc()
            logger.info(f"Loaded {len(templates)} template(s) from {self.path}")
            return skipped

    def save(self) -> None:
        """
        Write all templates to the file.

        Raises:
            TemplateStoreError: If the file cannot be written
        """
        with trace_operation("save_templates", kind=trace.SpanKind.INTERNAL, path=self.path):
            payload = [template.to_json() for template in self._templates]
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=4)
            except OSError as e:
                raise TemplateStoreError(f"Unable to write template file {self.path}: {e}") from e

            TEMPLATE_STORE_OPERATIONS.labels(operation="save").inc()
            logger.debug(f"Saved {len(payload)} template(s) to {self.path}")

    def add(self, header_id: str, template_name: str, indices: Sequence[int]) -> ColumnTemplate:
        """Append a template and persist the store."""
        template = ColumnTemplate(header_id, template_name, tuple(indices))
        self._templates.append(template)
        self.save()
        return template

    def remove_at(self, index: int) -> bool:
        """Remove the template at ``index``; out-of-range indices are ignored."""
        if not 0 <= index < len(self._templates):
            return False
        del self._templates[index]
        self.save()
        return True

    def remove(self, template: ColumnTemplate) -> bool:
        """Remove the first template equal to ``template``."""
        if template not in self._templates:
            return False
        self._templates.remove(template)
        self.save()
        return True

    def for_format(self, header_id: str) -> list[ColumnTemplate]:
        """Templates saved for the layout with this fingerprint."""
        return [template for template in self._templates if template.header_id == header_id]

    def find(self, header_id: str, template_name: str) -> ColumnTemplate | None:
        for template in self._templates:
            if template.header_id == header_id and template.template_name == template_name:
                return template
        return None

    def clear(self) -> None:
        """Drop every template from memory; the file is untouched until the next save."""
        self._templates.clear()
