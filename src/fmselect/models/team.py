"""Roles, assignments and the solved team."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from fmselect.config.roles import (
    category_for_role,
    role_family,
    role_index,
    role_side,
)
from fmselect.errors import ErrorBuilder, ErrorCode
from fmselect.validators import validate_role_name

from .player import Player


@dataclass(frozen=True)
class Role:
    name: str

    @classmethod
    def new(cls, name: str) -> "Role":
        """Create a role, validating the trimmed name against :data:`VALID_ROLES`."""

        name = name.strip()
        validate_role_name(name)
        return cls(name=name)

    @property
    def catalogue_index(self) -> int:
        return role_index(self.name)

    @property
    def category(self) -> Optional[str]:
        return category_for_role(self.name)

    @property
    def side(self) -> Optional[str]:
        return role_side(self.name)

    @property
    def family(self) -> str:
        return role_family(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Assignment:
    player: Player
    role: Role
    score: float

    def __post_init__(self) -> None:
        if not (self.score >= 0.0):
            raise ErrorBuilder(ErrorCode.E900).with_context(
                f"negative score {self.score!r} for {self.player.name} on {self.role.name}"
            ).build()

    def __str__(self) -> str:
        return f"{self.role} -> {self.player.name}"


def _saturating_sum(values: Sequence[float]) -> float:
    try:
        total = math.fsum(values)
    except OverflowError:
        return sys.float_info.max
    if math.isinf(total) or total > sys.float_info.max:
        return sys.float_info.max
    return total


@dataclass(frozen=True)
class Team:
    """Ordered assignments where every player and every role appears at most once."""

    assignments: Tuple[Assignment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "assignments", tuple(self.assignments))
        seen_players: set[str] = set()
        seen_roles: set[str] = set()
        for assignment in self.assignments:
            if assignment.player.name in seen_players:
                raise ErrorBuilder(ErrorCode.E900).with_context(
                    f"player {assignment.player.name} is assigned to multiple roles"
                ).build()
            if assignment.role.name in seen_roles:
                raise ErrorBuilder(ErrorCode.E900).with_context(
                    f"role {assignment.role.name} is assigned to multiple players"
                ).build()
            seen_players.add(assignment.player.name)
            seen_roles.add(assignment.role.name)

    def __len__(self) -> int:
        return len(self.assignments)

    def __iter__(self):
        return iter(self.assignments)

    def total_score(self) -> float:
        return _saturating_sum([assignment.score for assignment in self.assignments])

    def sorted_by_role(self) -> List[Assignment]:
        return sorted(self.assignments, key=lambda a: a.role.catalogue_index)

    def sorted_by_score(self) -> List[Assignment]:
        return sorted(self.assignments, key=lambda a: a.score, reverse=True)

    def player_for(self, role_name: str) -> Optional[Player]:
        for assignment in self.assignments:
            if assignment.role.name == role_name:
                return assignment.player
        return None

    def role_for(self, player_name: str) -> Optional[Role]:
        for assignment in self.assignments:
            if assignment.player.name == player_name:
                return assignment.role
        return None
