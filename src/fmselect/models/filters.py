"""Filters narrowing which players may fill which roles.

Each filter is a predicate over a ``(player, role)`` pair. The optimizer
combines them by conjunction: a pair is allowed only when every filter
allows it. Filters never modify players.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from .player import Footedness, Player, PlayerCategory
from .team import Role


class PlayerFilter:
    """Base class for filter predicates."""

    def allows(self, player: Player, role: Role) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def describe(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class CategoryFilter(PlayerFilter):
    """Restrict a player to roles from the listed categories."""

    player_name: str
    allowed_categories: Tuple[PlayerCategory, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_categories", tuple(self.allowed_categories))

    def allows(self, player: Player, role: Role) -> bool:
        if player.name != self.player_name:
            return True
        return any(role.name in category.roles for category in self.allowed_categories)

    def describe(self) -> str:
        cats = ", ".join(category.short_name for category in self.allowed_categories)
        return f"{self.player_name}: {cats}"


@dataclass(frozen=True)
class PinFilter(PlayerFilter):
    """Force a player onto one role; nobody else may take it."""

    player_name: str
    role_name: str

    def allows(self, player: Player, role: Role) -> bool:
        if role.name == self.role_name:
            return player.name == self.player_name
        return player.name != self.player_name

    def describe(self) -> str:
        return f"{self.role_name} | pin={self.player_name}"


@dataclass(frozen=True)
class ExcludeFilter(PlayerFilter):
    player_name: str

    def allows(self, player: Player, role: Role) -> bool:
        return player.name != self.player_name

    def describe(self) -> str:
        return f"exclude {self.player_name}"


@dataclass(frozen=True)
class FootednessFilter(PlayerFilter):
    """Require a role to be filled by a player with a compatible foot."""

    role_name: str
    footedness: Footedness

    def allows(self, player: Player, role: Role) -> bool:
        if role.name != self.role_name or self.footedness is Footedness.BOTH:
            return True
        return player.footedness.satisfies(self.footedness.value)

    def describe(self) -> str:
        return f"{self.role_name} | foot={self.footedness.value}"


def filters_allow(filters: Iterable[PlayerFilter], player: Player, role: Role) -> bool:
    return all(f.allows(player, role) for f in filters)


@dataclass(frozen=True)
class RoleFileContent:
    """Parsed role file: the roles to fill and the filters to honour."""

    roles: Tuple[Role, ...]
    filters: Tuple[PlayerFilter, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", tuple(self.roles))
        object.__setattr__(self, "filters", tuple(self.filters))

    @property
    def role_names(self) -> Tuple[str, ...]:
        return tuple(role.name for role in self.roles)
