import pytest

from fmselect.config import (
    ABILITIES,
    VALID_ROLES,
    category_for_role,
    get_profile,
    get_roles_for_category,
    get_valid_categories,
    is_valid_category,
    role_belongs_to_category,
    role_family,
    role_index,
    role_side,
)
from fmselect.errors import ErrorCode, RoleValidationError
from fmselect.models import Role


def test_every_role_belongs_to_exactly_one_category():
    for role in VALID_ROLES:
        owners = [c for c in get_valid_categories() if role_belongs_to_category(role, c)]
        assert len(owners) == 1, role
        assert category_for_role(role) == owners[0]


def test_catalogue_sizes():
    assert len(VALID_ROLES) == 94
    assert len(set(VALID_ROLES)) == 94
    assert len(ABILITIES) == 47


def test_category_lookup_is_case_insensitive():
    assert is_valid_category(" CD ")
    assert "CD(d)" in get_roles_for_category("Cd")
    assert "GK" in get_roles_for_category("goal")


def test_unknown_category_has_no_roles():
    assert not is_valid_category("sweeper")
    assert get_roles_for_category("sweeper") == frozenset()
    assert not role_belongs_to_category("GK", "sweeper")


def test_role_side_and_family():
    assert role_side("WB(s) R") == "R"
    assert role_side("FB(d) L") == "L"
    assert role_side("CD(d)") is None
    assert role_side("L(s)") is None
    assert role_family("WB(s) R") == "WB"
    assert role_family("RD(A)") == "RD"
    assert role_family("BBM") == "BBM"


def test_role_index_unknown_raises():
    assert role_index("W(s) R") == 0
    with pytest.raises(KeyError):
        role_index("Sweeper")


def test_every_role_has_a_profile():
    for role in VALID_ROLES:
        weights = get_profile(role)
        assert weights
        assert set(weights) <= set(ABILITIES)


def test_role_new_validates_name():
    assert Role.new("  GK ").name == "GK"
    with pytest.raises(RoleValidationError) as exc:
        Role.new("Sweeper")
    assert exc.value.code is ErrorCode.E500
    assert exc.value.issues == ("unknown role 'Sweeper'",)
