"""
Command-line interface for snapshot reconciliation.

Available commands:
- compare: Reconcile two CSV snapshots and report or export the result
- fingerprint: Print the format fingerprint of a snapshot
- templates: Manage saved column templates
"""

import sys

from utils.logging import setup_logging

from .commands import EXIT_ERROR, cmd_compare, cmd_fingerprint, cmd_templates
from .parser import create_parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the snapshot-diff CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(level=args.log_level, log_file=args.log_file, json_format=args.log_json)

    # Execute command
    if args.command == 'compare':
        cmd_compare(args)
    elif args.command == 'fingerprint':
        cmd_fingerprint(args)
    elif args.command == 'templates':
        if not args.action:
            parser.error("templates requires an action: list, add or remove")
        cmd_templates(args)
    else:
        parser.print_help()
        sys.exit(EXIT_ERROR)


__all__ = [
    'main',
    'cmd_compare',
    'cmd_fingerprint',
    'cmd_templates',
    'create_parser',
]


if __name__ == '__main__':
    main()
