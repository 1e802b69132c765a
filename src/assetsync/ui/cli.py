from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from assetsync.adapters.snapshot import SnapshotError
from assetsync.app import compare_snapshot, fetch_published_assets
from assetsync.config import (
    ComparisonSettings,
    ConfigurationError,
    configure_logging,
    get_comparison_settings,
)
from assetsync.domain.reconciliation import TriggerComparison

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from assetsync.app import SnapshotComparison
    from assetsync.domain.model import NumberFormat
    from assetsync.domain.reconciliation import DisplayTrigger

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare generated, local and published gamification assets"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Compare the copies held in a snapshot file")
    compare.add_argument("snapshot", type=Path, help="Path to the JSON snapshot file")
    compare.add_argument(
        "--commit",
        action="store_true",
        help="Promote the generated copy to the local slot when it differs",
    )
    compare.add_argument(
        "--validate-all",
        action="store_true",
        help="Run the optional validations when committing",
    )
    compare.add_argument(
        "--allocate-id",
        type=int,
        help="Candidate local id to share between the generated and local copies",
    )
    compare.add_argument(
        "--hex",
        action="store_true",
        default=None,
        help="Render constants in hexadecimal (defaults to ASSETSYNC_HEX_VALUES)",
    )

    fetch = subparsers.add_parser(
        "fetch-published",
        help="List the published achievements of a game",
    )
    fetch.add_argument("game_id", type=int, help="Identifier of the game")
    fetch.add_argument(
        "--core-only",
        action="store_true",
        help="Skip the unofficial achievement set",
    )

    return parser.parse_args(list(argv))


def _comparison_settings(args: argparse.Namespace) -> ComparisonSettings:
    if args.hex is not None:
        return ComparisonSettings(hex_values=args.hex)
    return get_comparison_settings()


def _validate_args(args: argparse.Namespace) -> None:
    if args.command == "compare":
        if args.allocate_id is not None and args.allocate_id <= 0:
            raise ValueError("--allocate-id must be a positive integer")
        if args.validate_all and not args.commit:
            raise ValueError("--validate-all requires --commit")
    elif args.command == "fetch-published" and args.game_id <= 0:
        raise ValueError("Game id must be a positive integer")


def _marker(trigger: TriggerComparison) -> str:
    if trigger.is_added:
        return "+"
    if trigger.is_removed:
        return "-"
    return "~" if trigger.is_modified else " "


def _describe_trigger(trigger: DisplayTrigger, number_format: NumberFormat) -> list[str]:
    if not isinstance(trigger, TriggerComparison):
        lines = [f"  {trigger.label}"]
        for group in trigger.groups:
            lines.append(f"    {group.label}")
            lines.extend(f"        {req.render(number_format)}" for req in group.requirements)
        return lines

    marker = _marker(trigger)
    lines = [f"{marker} {trigger.label}"]
    for group in trigger.groups:
        lines.append(f"    {group.label}")
        for requirement in group.requirements:
            if not requirement.is_modified:
                lines.append(f"        {requirement.definition}")
                continue
            if requirement.definition:
                lines.append(f"      + {requirement.definition}")
            if requirement.other_definition:
                lines.append(f"      - {requirement.other_definition}")
    return lines


def _report_comparison(comparison: SnapshotComparison) -> None:
    reconciler = comparison.reconciler
    result = comparison.result
    asset = reconciler.display_asset
    title = asset.title if asset is not None else ""

    log.info("%s %s: %s", reconciler.kind.display_name.title(), reconciler.id, title)
    log.info("State: %s (can update: %s)", result.state, result.can_update)
    if result.modification_message:
        log.info("%s", result.modification_message)
    if result.modified_fields:
        log.info("Modified: %s", ", ".join(sorted(result.modified_fields)))
    if reconciler.badge is not None:
        log.info("Badge: %s (%s)", reconciler.badge.badge_name, reconciler.badge.source)
    if comparison.allocated:
        log.info("Allocated local id %s", reconciler.id)

    log.info("Triggers (%s):", result.trigger_source)
    for trigger in result.triggers:
        for line in _describe_trigger(trigger, reconciler.context.number_format):
            log.info("%s", line)

    for warning in comparison.diagnostics:
        log.warning("%s", warning)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
        settings = _comparison_settings(parsed_args) if parsed_args.command == "compare" else None
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "compare":
            comparison = compare_snapshot(
                parsed_args.snapshot,
                settings=settings,
                allocate_id=parsed_args.allocate_id,
                commit=parsed_args.commit,
                validate_all=parsed_args.validate_all,
            )
            _report_comparison(comparison)
        elif parsed_args.command == "fetch-published":
            result = fetch_published_assets(
                parsed_args.game_id,
                include_unofficial=not parsed_args.core_only,
            )
            log.info("%s (%s)", result.game_title, result.game_id)
            for achievement in result.achievements:
                log.info(
                    "%s%s: %s (%s points)",
                    achievement.id,
                    " [unofficial]" if achievement.is_unofficial else "",
                    achievement.title,
                    achievement.points,
                )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except SnapshotError:
        log.exception("Unable to load snapshot")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
