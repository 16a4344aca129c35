"""Static role, ability and category catalogues."""

from .profiles import get_profile
from .roles import (
    ABILITIES,
    VALID_ROLES,
    CategoryRules,
    category_for_role,
    get_roles_for_category,
    get_valid_categories,
    is_valid_category,
    is_valid_role,
    role_belongs_to_category,
    role_family,
    role_index,
    role_side,
)

__all__ = [
    "ABILITIES",
    "VALID_ROLES",
    "CategoryRules",
    "category_for_role",
    "get_profile",
    "get_roles_for_category",
    "get_valid_categories",
    "is_valid_category",
    "is_valid_role",
    "role_belongs_to_category",
    "role_family",
    "role_index",
    "role_side",
]
