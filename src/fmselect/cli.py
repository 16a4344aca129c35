"""Command-line interface for selecting a team from a player table and a role file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from fmselect.config_loader import load_config
from fmselect.errors import ErrorBuilder, ErrorCode, SelectorError
from fmselect.formatter import export_team_to_csv, format_assignment_summary, format_team_output
from fmselect.ingest import load_player_csv, parse_role_file
from fmselect.optimizer import find_optimal_assignments_with_filters


logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fm-team-selector",
        description="Find the player-to-role assignment that maximises the total team score",
    )
    parser.add_argument("players", type=Path, nargs="?", default=None, help="Path to player table CSV")
    parser.add_argument("-r", "--roles", type=Path, default=None, help="Path to role file")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to JSON config file")
    parser.add_argument(
        "--team-size",
        type=int,
        default=None,
        help="Number of roles the role file must list (0 disables the check)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "csv"),
        default=None,
        help="Output format (default from config, else text)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the team here instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> str:
    config = load_config(args.config)
    updates: dict[str, object] = {}
    if args.roles is not None:
        updates["role_file"] = args.roles
    if args.players is not None:
        updates["player_file"] = args.players
    if args.team_size is not None:
        updates["team_size"] = max(0, args.team_size)
    if args.format is not None:
        updates["output_format"] = args.format
    config = config.model_copy(update=updates)

    if config.role_file is None:
        raise ErrorBuilder(ErrorCode.E102).with_context("role file").build()
    if config.player_file is None:
        raise ErrorBuilder(ErrorCode.E102).with_context("player file").build()

    content = parse_role_file(config.role_file, config.expected_role_count)
    players = load_player_csv(config.player_file)
    logger.info("Loaded %d players from %s", len(players), config.player_file)

    team = find_optimal_assignments_with_filters(players, content.roles, content.filters)
    logger.info("%s", format_assignment_summary(team))

    if config.output_format == "csv":
        return export_team_to_csv(team)
    return format_team_output(team)


def _write_output(path: Path, output: str) -> None:
    try:
        path.write_text(output, encoding="utf-8")
    except OSError as exc:
        raise ErrorBuilder(ErrorCode.E104).with_context(f"'{path}': {exc}").build() from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        output = run(args)
        if args.output is not None:
            _write_output(args.output, output)
    except SelectorError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    if args.output is not None:
        print(f"Wrote team to {args.output}")
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
