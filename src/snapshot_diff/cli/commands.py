"""
CLI command implementations.

This module contains the implementation of the CLI commands:
- compare: Reconcile two snapshots and report or export the result
- fingerprint: Print the format fingerprint of a snapshot
- templates: List, add and remove saved column templates
"""

import argparse
import dataclasses
import logging
import sys

from ..compare import CombinedResult, fingerprint
from ..config import ReconciliationConfig
from ..document import TabularDocument
from ..errors import SnapshotDiffError
from ..report import (
    export_report_json,
    export_rows_csv,
    export_xlsx,
    format_report_console,
    generate_report,
)
from ..runner import AsyncReconciliationRunner
from ..templates import TemplateStore

logger = logging.getLogger(__name__)

EXIT_UNCHANGED = 0
EXIT_CHANGED = 1
EXIT_ERROR = 2


def build_config(args: argparse.Namespace) -> ReconciliationConfig:
    """Environment configuration with command-line overrides applied."""
    config = ReconciliationConfig.from_env()
    overrides = {}
    if getattr(args, 'min_time', None) is not None:
        overrides['minimum_execution_seconds'] = args.min_time
    if getattr(args, 'template_file', None):
        overrides['template_file'] = args.template_file
    return dataclasses.replace(config, **overrides) if overrides else config


def _resolve_columns(
    args: argparse.Namespace, config: ReconciliationConfig, result: CombinedResult
) -> list[int] | None:
    if args.columns is not None:
        return args.columns
    if not args.template:
        return None

    store = TemplateStore(config.template_file)
    store.load()
    template = store.find(result.format_fingerprint, args.template)
    if template is None:
        raise SnapshotDiffError(
            f"No template named {args.template!r} for this file format "
            f"({result.format_fingerprint[:16]})"
        )
    logger.info(f"Using template {template.template_name!r}: columns {list(template.indices)}")
    return list(template.indices)


def cmd_compare(args: argparse.Namespace) -> None:
    """
    Reconcile two snapshots

    Exits 0 when unchanged, 1 when rows were added or removed, 2 on error.

    Args:
        args: Parsed command-line arguments
    """
    if args.format != 'console' and not args.output:
        logger.error(f"Output file required for {args.format} format")
        sys.exit(EXIT_ERROR)

    try:
        config = build_config(args)
        with AsyncReconciliationRunner(config) as runner:
            result = runner.start(args.first, args.second).result()

        report = generate_report(result, args.first, args.second)
        columns = _resolve_columns(args, config, result)

        if args.format == 'console':
            print(format_report_console(report))
        elif args.format == 'json':
            export_report_json(report, args.output)
            logger.info(f"Report exported to {args.output}")
        elif args.format == 'csv':
            export_rows_csv(result, args.output, columns)
            logger.info(f"Rows exported to {args.output}")
        elif args.format == 'xlsx':
            written = export_xlsx(
                result, args.output, columns if columns is not None else range(result.column_count)
            )
            logger.info(f"Workbook exported to {written}")

    except SnapshotDiffError as e:
        logger.error(f"Reconciliation failed [{e.code}]: {e}")
        sys.exit(EXIT_ERROR)
    except (OSError, ValueError, IndexError) as e:
        logger.error(f"Compare failed: {e}")
        sys.exit(EXIT_ERROR)

    sys.exit(EXIT_CHANGED if result.has_changes else EXIT_UNCHANGED)


def cmd_fingerprint(args: argparse.Namespace) -> None:
    """
    Print the format fingerprint of a snapshot

    Args:
        args: Parsed command-line arguments
    """
    config = ReconciliationConfig.from_env()
    try:
        document = TabularDocument.from_path(
            args.file, delimiter=config.delimiter, encoding=config.encoding
        )
    except SnapshotDiffError as e:
        logger.error(f"Failed to read snapshot: {e}")
        sys.exit(EXIT_ERROR)

    print(fingerprint(document.headers))


def cmd_templates(args: argparse.Namespace) -> None:
    """
    List, add or remove saved column templates

    Args:
        args: Parsed command-line arguments
    """
    config = build_config(args)
    store = TemplateStore(config.template_file)

    try:
        store.load()

        if args.action == 'list':
            header_id = None
            if args.snapshot:
                document = TabularDocument.from_path(
                    args.snapshot, delimiter=config.delimiter, encoding=config.encoding
                )
                header_id = fingerprint(document.headers)

            for position, template in enumerate(store.templates):
                if header_id is not None and template.header_id != header_id:
                    continue
                indices = ",".join(str(index) for index in template.indices)
                print(f"{position}\t{template.template_name}\t{template.header_id[:16]}\t{indices}")

        elif args.action == 'add':
            document = TabularDocument.from_path(
                args.snapshot, delimiter=config.delimiter, encoding=config.encoding
            )
            for column in args.columns:
                if column >= document.column_count:
                    logger.error(
                        f"Column {column} is out of range for {document.column_count} columns"
                    )
                    sys.exit(EXIT_ERROR)
            template = store.add(fingerprint(document.headers), args.name, args.columns)
            logger.info(f"Saved template {template.template_name!r} to {store.path}")

        elif args.action == 'remove':
            if not store.remove_at(args.index):
                logger.error(f"No template at position {args.index}")
                sys.exit(EXIT_ERROR)
            logger.info(f"Removed template #{args.index} from {store.path}")

    except SnapshotDiffError as e:
        logger.error(f"Template operation failed [{e.code}]: {e}")
        sys.exit(EXIT_ERROR)
