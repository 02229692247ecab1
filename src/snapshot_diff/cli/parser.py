"""
Command-line argument parser configuration.

This module sets up the argument parser for the snapshot-diff CLI tool,
defining all commands and their options.
"""

import argparse


def parse_columns(value: str) -> list[int]:
    """Parse a comma-separated list of non-negative column indices."""
    columns = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            column = int(part)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid column index: {part!r}") from None
        if column < 0:
            raise argparse.ArgumentTypeError(f"column index cannot be negative: {column}")
        columns.append(column)

    if not columns:
        raise argparse.ArgumentTypeError("at least one column index is required")
    return columns


def non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="snapshot-diff",
        description="Reconcile two CSV snapshots of the same dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compare two snapshots and print a summary
  snapshot-diff compare monday.csv tuesday.csv

  # Export the classified rows as CSV
  snapshot-diff compare monday.csv tuesday.csv --format csv --output diff.csv

  # Export selected columns to Excel, Added/Removed rows highlighted
  snapshot-diff compare monday.csv tuesday.csv --format xlsx --output diff --columns 0,2,3

  # Save a column selection for this file layout and reuse it
  snapshot-diff templates add "Short view" --snapshot monday.csv --columns 0,2
  snapshot-diff compare monday.csv tuesday.csv --format xlsx --output diff --template "Short view"

  # Print the format fingerprint of a snapshot
  snapshot-diff fingerprint monday.csv

Exit status: 0 when nothing changed, 1 when rows were added or removed,
2 on error.
        """
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )
    parser.add_argument(
        '--log-json',
        action='store_true',
        help='Emit log records as JSON'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this rotating file'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ========== Compare command ==========
    compare_parser = subparsers.add_parser('compare', help='Reconcile two snapshots')
    compare_parser.add_argument('first', help='Older snapshot (CSV)')
    compare_parser.add_argument('second', help='Newer snapshot (CSV)')
    compare_parser.add_argument(
        '--format',
        choices=['console', 'json', 'csv', 'xlsx'],
        default='console',
        help='Output format (default: console)'
    )
    compare_parser.add_argument(
        '--output',
        help='Output file path (required for json, csv and xlsx formats)'
    )
    column_group = compare_parser.add_mutually_exclusive_group()
    column_group.add_argument(
        '--columns',
        type=parse_columns,
        help='Comma-separated column indices to export (default: all)'
    )
    column_group.add_argument(
        '--template',
        help='Name of a saved column template to export with'
    )
    compare_parser.add_argument(
        '--min-time',
        type=non_negative_float,
        help='Minimum run time in seconds (default: 0.4 or SNAPSHOT_DIFF_MIN_TIME)'
    )
    compare_parser.add_argument(
        '--template-file',
        help='Template store path (default: templates.json or SNAPSHOT_DIFF_TEMPLATE_FILE)'
    )

    # ========== Fingerprint command ==========
    fingerprint_parser = subparsers.add_parser(
        'fingerprint', help='Print the format fingerprint of a snapshot'
    )
    fingerprint_parser.add_argument('file', help='Snapshot (CSV)')

    # ========== Templates command ==========
    templates_parser = subparsers.add_parser('templates', help='Manage saved column templates')
    templates_parser.add_argument(
        '--template-file',
        help='Template store path (default: templates.json or SNAPSHOT_DIFF_TEMPLATE_FILE)'
    )
    template_actions = templates_parser.add_subparsers(dest='action', help='Template actions')

    list_parser = template_actions.add_parser('list', help='List saved templates')
    list_parser.add_argument(
        '--snapshot',
        help='Only list templates matching the layout of this snapshot'
    )

    add_parser = template_actions.add_parser('add', help='Save a column template')
    add_parser.add_argument('name', help='Template name')
    add_parser.add_argument(
        '--snapshot',
        required=True,
        help='Snapshot whose header row the template applies to'
    )
    add_parser.add_argument(
        '--columns',
        type=parse_columns,
        required=True,
        help='Comma-separated column indices'
    )

    remove_parser = template_actions.add_parser('remove', help='Delete a saved template')
    remove_parser.add_argument('index', type=int, help='Position shown by "templates list"')

    return parser
