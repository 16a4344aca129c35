"""Text and CSV rendering of a solved team."""

from __future__ import annotations

import csv
from io import StringIO

from fmselect.models import Team

CSV_HEADERS = ("role", "player", "footedness", "category", "score")


def format_team_output(team: Team) -> str:
    """One ``ROLE -> PLAYER (score: X)`` line per assignment in catalogue order, then the total."""

    lines = [
        f"{assignment.role.name} -> {assignment.player.name} (score: {assignment.score:.1f})"
        for assignment in team.sorted_by_role()
    ]
    lines.append(f"Total Score: {team.total_score():.1f}")
    return "\n".join(lines) + "\n"


def format_assignment_summary(team: Team) -> str:
    return f"Team of {len(team)} players with total score: {team.total_score():.1f}"


def export_team_to_csv(team: Team) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for assignment in team.sorted_by_role():
        player = assignment.player
        writer.writerow([
            assignment.role.name,
            player.name,
            player.footedness.value,
            player.category.value if player.category else "",
            f"{assignment.score:.1f}",
        ])
    return buffer.getvalue()


__all__ = ["CSV_HEADERS", "export_team_to_csv", "format_assignment_summary", "format_team_output"]
