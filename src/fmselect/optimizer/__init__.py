"""Scoring and optimal assignment of players to roles."""

from .assignment import (
    find_optimal_assignments,
    find_optimal_assignments_with_filters,
    is_player_eligible_for_role,
)
from .scoring import ability_score, calculate_assignment_score

__all__ = [
    "ability_score",
    "calculate_assignment_score",
    "find_optimal_assignments",
    "find_optimal_assignments_with_filters",
    "is_player_eligible_for_role",
]
