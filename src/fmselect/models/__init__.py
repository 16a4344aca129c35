"""Domain models shared across ingestion, optimizer and formatter layers."""

from .filters import (
    CategoryFilter,
    ExcludeFilter,
    FootednessFilter,
    PinFilter,
    PlayerFilter,
    RoleFileContent,
    filters_allow,
)
from .player import Footedness, Player, PlayerCategory, PlayerType
from .team import Assignment, Role, Team

__all__ = [
    "Assignment",
    "CategoryFilter",
    "ExcludeFilter",
    "Footedness",
    "FootednessFilter",
    "PinFilter",
    "Player",
    "PlayerCategory",
    "PlayerFilter",
    "PlayerType",
    "Role",
    "RoleFileContent",
    "Team",
    "filters_allow",
]
