"""Semantic checks for role selections, filters and raw player tables."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Mapping, Optional, Sequence

from fmselect.config.roles import is_valid_category, is_valid_role
from fmselect.errors import ErrorBuilder, ErrorCode


logger = logging.getLogger(__name__)


def validate_role_name(role: str) -> None:
    if not is_valid_role(role):
        raise ErrorBuilder(ErrorCode.E500).with_context(f"'{role}'").with_issues(
            [f"unknown role '{role}'"]
        ).build()


def validate_roles(roles: Sequence[str], expected_count: Optional[int] = None) -> None:
    """Check that every role is known, none repeats and the count matches.

    All problems are reported together on a single ``RoleValidationError``;
    its ``code`` reflects the first kind of problem found (unknown role,
    duplicate role, then count mismatch).
    """

    names = [role.strip() for role in roles]
    issues: List[str] = []
    code: Optional[ErrorCode] = None

    unknown = [name for name in names if not is_valid_role(name)]
    for name in unknown:
        issues.append(f"unknown role '{name}'")
    if unknown:
        code = ErrorCode.E500

    counts = Counter(names)
    duplicates = [name for name, count in counts.items() if count > 1]
    for name in duplicates:
        issues.append(f"role '{name}' selected {counts[name]} times")
    if duplicates and code is None:
        code = ErrorCode.E506

    if expected_count is not None and len(names) != expected_count:
        issues.append(f"expected {expected_count} roles, found {len(names)}")
        if code is None:
            code = ErrorCode.E510

    if code is not None:
        logger.debug("Role validation failed: %s", issues)
        raise ErrorBuilder(code).with_context("; ".join(issues)).with_issues(issues).build()


def validate_filter_categories(filters: Mapping[str, Sequence[str]]) -> None:
    """Check raw ``player -> [category short names]`` filter input."""

    issues = [
        f"invalid category '{category}' for player '{player_name}'"
        for player_name, categories in filters.items()
        for category in categories
        if not is_valid_category(category)
    ]
    if issues:
        raise ErrorBuilder(ErrorCode.E508).with_context("; ".join(issues)).with_issues(issues).build()


def validate_player_table(rows: Sequence[Sequence[str]]) -> None:
    """Check that a raw player table is non-empty and rectangular."""

    if not rows:
        raise ErrorBuilder(ErrorCode.E105).with_context("no player data provided").build()

    expected_columns = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != expected_columns:
            raise ErrorBuilder(ErrorCode.E106).with_context(
                f"row {index + 1} has {len(row)} columns, expected {expected_columns}"
            ).build()


__all__ = [
    "validate_filter_categories",
    "validate_player_table",
    "validate_role_name",
    "validate_roles",
]
