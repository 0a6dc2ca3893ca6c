"""
Command-line entry point for pin update checks.

Usage:
    pinwatch                     # Check now (always runs)
    pinwatch --auto              # Check only if the last check is 6h+ old
    pinwatch --json              # Machine readable output
    pinwatch --cwd path/to/project
"""

import argparse
import json
import sys

from .core.checker import check_package_updates
from .core.registry import load_settings
from .core.state_manager import StateManager
from .models.check_result import CheckResult
from .utils.formatting import format_detailed_updates, format_update_summary, format_unpinned
from .utils.logger import setup_logging, get_logger

UNPINNED_PREVIEW = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pinwatch',
        description='Check pinned npm and git packages for upstream updates'
    )
    parser.add_argument(
        '--cwd',
        type=str,
        default=None,
        help='Project directory holding .pi/settings.json (default: current directory)'
    )
    parser.add_argument(
        '--global-settings',
        type=str,
        default=None,
        help='User-wide settings file (default: ~/.pi/agent/settings.json)'
    )
    parser.add_argument(
        '--project-settings',
        type=str,
        default=None,
        help='Project settings file (overrides --cwd lookup)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Tool settings YAML (timeouts, registry, logging)'
    )
    parser.add_argument(
        '--auto',
        action='store_true',
        help='Automatic mode: run at most once per interval, quiet when nothing changed'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser


def render_report(result: CheckResult) -> str:
    """Text shown to the user for one check cycle."""
    if result.updates:
        message = (f"{len(result.updates)} update(s) available:\n"
                   f"{format_detailed_updates(result.updates)}")
        if result.skipped_unpinned:
            message += f"\n\nUnpinned (not checked): {format_unpinned(result.skipped_unpinned)}"
        return message

    if result.errors:
        return "Some checks failed:\n  " + "\n  ".join(result.errors)

    message = "All pinned packages are up to date."
    if result.skipped_unpinned:
        message += f"\n\nUnpinned (not checked): {format_unpinned(result.skipped_unpinned)}"
    return message


def render_auto_notice(result: CheckResult) -> str:
    """Short notice for automatic checks; empty when there is nothing to report."""
    if not result.updates:
        return ""
    return (f"Package updates available ({len(result.updates)}): "
            f"{format_update_summary(result.updates)}. Run pinwatch for details.")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    setup_logging(
        level='DEBUG' if args.verbose else None,
        settings=settings.get('logging'),
    )
    logger = get_logger('pinwatch')

    state_manager = StateManager(settings.get('auto_check', {}).get('cache_file'))

    if args.auto and not state_manager.should_run_auto_check():
        logger.info("Automatic check skipped: last check is recent")
        return 0

    # marked before checking so a failing remote is retried next interval only
    state_manager.mark_auto_check()

    result = check_package_updates(
        cwd=args.cwd,
        global_settings_path=args.global_settings,
        project_settings_path=args.project_settings,
        settings=settings,
    )

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    output = render_auto_notice(result) if args.auto else render_report(result)
    if output:
        print(output)

    if args.auto and result.skipped_unpinned:
        logger.info(f"Unpinned: {format_unpinned(result.skipped_unpinned, UNPINNED_PREVIEW)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
