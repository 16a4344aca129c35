"""Optimal player-to-role assignment.

The team is chosen as a maximum-weight bipartite matching between roles and
players, solved with the Hungarian method. Pairs that break eligibility carry
a penalty larger than any achievable score total, so the solver only uses
one when no complete eligible matching exists; such roles are reported as
unfillable.
"""

from __future__ import annotations

import logging
import math
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fmselect.config.roles import role_belongs_to_category
from fmselect.errors import ErrorBuilder, ErrorCode
from fmselect.models import (
    Assignment,
    PinFilter,
    Player,
    PlayerFilter,
    Role,
    Team,
    filters_allow,
)

from .scoring import calculate_assignment_score


logger = logging.getLogger(__name__)


def is_player_eligible_for_role(
    player: Player,
    role: Role,
    filters: Iterable[PlayerFilter] = (),
) -> bool:
    """True when the player's category, foot and every filter allow the role."""

    if player.category is not None and not role_belongs_to_category(role.name, player.category.value):
        return False
    if not player.footedness.satisfies(role.side):
        return False
    return filters_allow(filters, player, role)


def _check_unique_inputs(players: Sequence[Player], roles: Sequence[Role]) -> None:
    role_counts = Counter(role.name for role in roles)
    duplicate_roles = sorted(name for name, count in role_counts.items() if count > 1)
    if duplicate_roles:
        issues = [f"role '{name}' selected {role_counts[name]} times" for name in duplicate_roles]
        raise ErrorBuilder(ErrorCode.E506).with_context("; ".join(issues)).with_issues(issues).build()

    player_counts = Counter(player.name for player in players)
    duplicate_players = sorted(name for name, count in player_counts.items() if count > 1)
    if duplicate_players:
        issues = [f"duplicate player '{name}'" for name in duplicate_players]
        raise ErrorBuilder(ErrorCode.E511).with_context("; ".join(issues)).with_issues(issues).build()


def _check_pins(
    players: Sequence[Player],
    roles: Sequence[Role],
    filters: Sequence[PlayerFilter],
) -> None:
    pins = [f for f in filters if isinstance(f, PinFilter)]
    if not pins:
        return

    players_by_name = {player.name: player for player in players}
    roles_by_name = {role.name: role for role in roles}
    roles_per_player: Dict[str, List[str]] = defaultdict(list)
    players_per_role: Dict[str, List[str]] = defaultdict(list)

    for pin in pins:
        roles_per_player[pin.player_name].append(pin.role_name)
        players_per_role[pin.role_name].append(pin.player_name)

    for player_name, pinned_roles in roles_per_player.items():
        if len(pinned_roles) > 1:
            raise ErrorBuilder(ErrorCode.E507).with_context(
                f"{player_name} is pinned to {', '.join(pinned_roles)}"
            ).with_roles(pinned_roles).build()
    for role_name, pinned_players in players_per_role.items():
        if len(pinned_players) > 1:
            raise ErrorBuilder(ErrorCode.E507).with_context(
                f"{role_name} has several pinned players: {', '.join(pinned_players)}"
            ).with_roles([role_name]).build()

    for pin in pins:
        role = roles_by_name.get(pin.role_name)
        if role is None:
            raise ErrorBuilder(ErrorCode.E507).with_context(
                f"{pin.describe()}: role is not part of the selection"
            ).with_roles([pin.role_name]).build()
        player = players_by_name.get(pin.player_name)
        if player is None:
            raise ErrorBuilder(ErrorCode.E507).with_context(
                f"{pin.describe()}: unknown player"
            ).with_roles([pin.role_name]).build()
        if not is_player_eligible_for_role(player, role, filters):
            raise ErrorBuilder(ErrorCode.E507).with_context(
                f"{pin.describe()}: {player.name} is not eligible for {role.name}"
            ).with_roles([pin.role_name]).build()


def _hungarian(cost: Sequence[Sequence[float]]) -> List[int]:
    """Minimum-cost assignment of every row to a distinct column.

    Requires ``len(cost) <= len(cost[0])``. Returns the column chosen for each
    row. Among equal-cost choices, lower column indices win.
    """

    n = len(cost)
    if n == 0:
        return []
    m = len(cost[0])
    inf = math.inf
    u = [0.0] * (n + 1)
    v = [0.0] * (m + 1)
    p = [0] * (m + 1)
    way = [0] * (m + 1)

    for i in range(1, n + 1):
        p[0] = i
        j0 = 0
        minv = [inf] * (m + 1)
        used = [False] * (m + 1)
        while True:
            used[j0] = True
            i0 = p[j0]
            delta = inf
            j1 = 0
            row = cost[i0 - 1]
            for j in range(1, m + 1):
                if used[j]:
                    continue
                cur = row[j - 1] - u[i0] - v[j]
                if cur < minv[j]:
                    minv[j] = cur
                    way[j] = j0
                if minv[j] < delta:
                    delta = minv[j]
                    j1 = j
            for j in range(m + 1):
                if used[j]:
                    u[p[j]] += delta
                    v[j] -= delta
                else:
                    minv[j] -= delta
            j0 = j1
            if p[j0] == 0:
                break
        while True:
            j1 = way[j0]
            p[j0] = p[j1]
            j0 = j1
            if j0 == 0:
                break

    result = [-1] * n
    for j in range(1, m + 1):
        if p[j] != 0:
            result[p[j] - 1] = j - 1
    return result


def _score_table(
    players: Sequence[Player],
    roles: Sequence[Role],
    filters: Sequence[PlayerFilter],
) -> List[List[Optional[float]]]:
    """Scores per (role, player); ``None`` marks an ineligible pair."""

    table: List[List[Optional[float]]] = []
    for role in roles:
        row: List[Optional[float]] = []
        for player in players:
            if is_player_eligible_for_role(player, role, filters):
                row.append(calculate_assignment_score(player, role))
            else:
                row.append(None)
        table.append(row)
    return table


def _unfillable_error(
    unfillable: Sequence[Role],
    players: Sequence[Player],
    roles: Sequence[Role],
) -> Exception:
    names = [role.name for role in unfillable]
    if len(players) < len(roles):
        code = ErrorCode.E501
        context = (
            f"need {len(roles)} but only {len(players)} available; "
            f"unfillable roles: {', '.join(names)}"
        )
    else:
        code = ErrorCode.E504
        context = f"no eligible player left for roles: {', '.join(names)}"
    return ErrorBuilder(code).with_context(context).with_roles(names).build()


def find_optimal_assignments_with_filters(
    players: Sequence[Player],
    roles: Sequence[Role],
    filters: Sequence[PlayerFilter] = (),
) -> Team:
    """Select the team with the highest total score.

    Args:
        players: Candidate players; names must be unique.
        roles: Roles to fill; each at most once.
        filters: Filter predicates applied by conjunction.

    Returns:
        Team with one assignment per role, in the order the roles were given.

    Raises:
        RoleValidationError: Duplicate roles or duplicate player names.
        AssignmentError: A pin conflicts with eligibility or another filter,
            or some role cannot be filled by any remaining eligible player.
    """

    roles = list(roles)
    filters = list(filters)
    if not roles:
        return Team(())

    _check_unique_inputs(players, roles)
    _check_pins(players, roles, filters)

    # Canonical order makes ties resolve the same way on every run.
    ordered_players = sorted(players, key=lambda p: p.name)
    ordered_roles = sorted(roles, key=lambda r: r.catalogue_index)

    table = _score_table(ordered_players, ordered_roles, filters)

    no_candidates = [
        role for role, row in zip(ordered_roles, table) if all(score is None for score in row)
    ]

    eligible_scores = [score for row in table for score in row if score is not None]
    top_score = max(eligible_scores, default=0.0)
    # Eligible costs lie in [0, 1], so any full eligible matching costs less than one penalty.
    scale = max(top_score, 1.0)
    penalty = len(ordered_roles) + 1.0

    width = max(len(ordered_players), len(ordered_roles))
    cost: List[List[float]] = []
    for row in table:
        cost_row = [penalty if score is None else (top_score - score) / scale for score in row]
        cost_row.extend([penalty] * (width - len(row)))
        cost.append(cost_row)

    columns = _hungarian(cost)

    chosen: Dict[str, Tuple[Player, float]] = {}
    unfillable: List[Role] = []
    for role, row, column in zip(ordered_roles, table, columns):
        score = row[column] if column < len(row) else None
        if score is None:
            unfillable.append(role)
            continue
        chosen[role.name] = (ordered_players[column], score)

    if unfillable or no_candidates:
        missing = {role.name for role in unfillable} | {role.name for role in no_candidates}
        ordered_missing = [role for role in roles if role.name in missing]
        logger.warning("Unable to fill roles: %s", ", ".join(r.name for r in ordered_missing))
        raise _unfillable_error(ordered_missing, players, roles)

    assignments = []
    for role in roles:
        player, score = chosen[role.name]
        if not is_player_eligible_for_role(player, role, filters):
            raise ErrorBuilder(ErrorCode.E900).with_context(
                f"{player.name} selected for {role.name} but is not eligible"
            ).build()
        assignments.append(Assignment(player=player, role=role, score=score))

    team = Team(tuple(assignments))
    logger.info(
        "Selected %d players for %d roles, total score %.1f",
        len(team),
        len(roles),
        team.total_score(),
    )
    return team


def find_optimal_assignments(players: Sequence[Player], roles: Sequence[Role]) -> Team:
    return find_optimal_assignments_with_filters(players, roles, ())


__all__ = [
    "find_optimal_assignments",
    "find_optimal_assignments_with_filters",
    "is_player_eligible_for_role",
]
