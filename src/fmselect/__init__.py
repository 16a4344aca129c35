"""Football team selection: optimal assignment of players to roles."""

from fmselect.config import (
    ABILITIES,
    VALID_ROLES,
    get_roles_for_category,
    is_valid_category,
    role_belongs_to_category,
)
from fmselect.errors import (
    AssignmentError,
    ErrorBuilder,
    ErrorCode,
    InternalError,
    ParseError,
    ReadError,
    RoleValidationError,
    SelectorError,
)
from fmselect.formatter import export_team_to_csv, format_assignment_summary, format_team_output
from fmselect.ingest import parse_player_data, parse_role_file, parse_role_file_content
from fmselect.models import (
    Assignment,
    CategoryFilter,
    ExcludeFilter,
    Footedness,
    FootednessFilter,
    PinFilter,
    Player,
    PlayerCategory,
    PlayerFilter,
    PlayerType,
    Role,
    RoleFileContent,
    Team,
)
from fmselect.optimizer import (
    calculate_assignment_score,
    find_optimal_assignments,
    find_optimal_assignments_with_filters,
    is_player_eligible_for_role,
)
from fmselect.validators import validate_roles

__all__ = [
    "ABILITIES",
    "Assignment",
    "AssignmentError",
    "CategoryFilter",
    "ErrorBuilder",
    "ErrorCode",
    "ExcludeFilter",
    "Footedness",
    "FootednessFilter",
    "InternalError",
    "ParseError",
    "PinFilter",
    "Player",
    "PlayerCategory",
    "PlayerFilter",
    "PlayerType",
    "ReadError",
    "Role",
    "RoleFileContent",
    "RoleValidationError",
    "SelectorError",
    "Team",
    "VALID_ROLES",
    "calculate_assignment_score",
    "export_team_to_csv",
    "find_optimal_assignments",
    "find_optimal_assignments_with_filters",
    "format_assignment_summary",
    "format_team_output",
    "get_roles_for_category",
    "is_player_eligible_for_role",
    "is_valid_category",
    "parse_player_data",
    "parse_role_file",
    "parse_role_file_content",
    "role_belongs_to_category",
    "validate_roles",
]
