"""Role and ability catalogues shared by the parser and the optimizer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


VALID_ROLES: Tuple[str, ...] = (
    "W(s) R", "W(s) L", "W(a) R", "W(a) L", "IF(s)", "IF(a)", "AP(s)", "AP(a)", "WTM(s)", "WTM(a)",
    "TQ(a)", "RD(A)", "IW(s)", "IW(a)", "DW(d)", "DW(s)", "WM(d)", "WM(s)", "WM(a)", "WP(s)",
    "WP(a)", "MEZ(s)", "MEZ(a)", "BWM(d)", "BWM(s)", "BBM", "CAR", "CM(d)", "CM(s)", "CM(a)",
    "DLP(d)", "DLP(s)", "RPM", "HB", "DM(d)", "DM(s)", "A", "SV(s)", "SV(a)", "RGA", "CD(d)",
    "CD(s)", "CD(c)", "NCB(d)", "WCB(d)", "WCB(s)", "WCB(a)", "BPD(d)", "BPD(s)", "BPD(c)", "L(s)",
    "L(a)", "FB(d) R", "FB(s) R", "FB(a) R", "FB(d) L", "FB(s) L", "FB(a) L", "IFB(d) R",
    "IFB(d) L", "WB(d) R", "WB(s) R", "WB(a) R", "WB(d) L", "WB(s) L", "WB(a) L", "IWB(d) R",
    "IWB(s) R", "IWB(a) R", "IWB(d) L", "IWB(s) L", "IWB(a) L", "CWB(s) R", "CWB(a) R", "CWB(s) L",
    "CWB(a) L", "PF(d)", "PF(s)", "PF(a)", "TM(s)", "TM(a)", "AF", "P", "DLF(s)", "DLF(a)",
    "CF(s)", "CF(a)", "F9", "SS", "EG", "SK(d)", "SK(s)", "SK(a)", "GK",
)

ABILITIES: Tuple[str, ...] = (
    "Cor", "Cro", "Dri", "Fin", "Fir", "Fre", "Hea", "Lon", "L Th", "Mar", "Pas", "Pen", "Tck",
    "Tec", "Agg", "Ant", "Bra", "Cmp", "Cnt", "Dec", "Det", "Fla", "Ldr", "OtB", "Pos", "Tea",
    "Vis", "Wor", "Acc", "Agi", "Bal", "Jum", "Nat", "Pac", "Sta", "Str", "Aer", "Cmd", "Com",
    "Ecc", "Han", "Kic", "1v1", "Pun", "Ref", "Rus", "Thr",
)


@dataclass(frozen=True)
class CategoryRules:
    short_name: str
    description: str
    roles: FrozenSet[str]


_CATEGORY_RULES: Dict[str, CategoryRules] = {
    "goal": CategoryRules(
        short_name="goal",
        description="Goalkeeper",
        roles=frozenset({"GK", "SK(d)", "SK(s)", "SK(a)"}),
    ),
    "cd": CategoryRules(
        short_name="cd",
        description="Central defender",
        roles=frozenset({
            "CD(d)", "CD(s)", "CD(c)", "BPD(d)", "BPD(s)", "BPD(c)", "NCB(d)",
            "WCB(d)", "WCB(s)", "WCB(a)", "L(s)", "L(a)",
        }),
    ),
    "wb": CategoryRules(
        short_name="wb",
        description="Full back / wing back",
        roles=frozenset({
            "FB(d) R", "FB(s) R", "FB(a) R", "FB(d) L", "FB(s) L", "FB(a) L",
            "WB(d) R", "WB(s) R", "WB(a) R", "WB(d) L", "WB(s) L", "WB(a) L",
            "IFB(d) R", "IFB(d) L", "IWB(d) R", "IWB(s) R", "IWB(a) R",
            "IWB(d) L", "IWB(s) L", "IWB(a) L", "CWB(s) R", "CWB(a) R",
            "CWB(s) L", "CWB(a) L",
        }),
    ),
    "dm": CategoryRules(
        short_name="dm",
        description="Defensive midfielder",
        roles=frozenset({
            "DM(d)", "DM(s)", "HB", "BWM(d)", "BWM(s)", "A", "SV(s)", "SV(a)", "RGA",
        }),
    ),
    "cm": CategoryRules(
        short_name="cm",
        description="Central midfielder",
        roles=frozenset({
            "CM(d)", "CM(s)", "CM(a)", "DLP(d)", "DLP(s)", "RPM", "BBM", "CAR",
            "MEZ(s)", "MEZ(a)",
        }),
    ),
    "wing": CategoryRules(
        short_name="wing",
        description="Winger / wide midfielder",
        roles=frozenset({
            "WM(d)", "WM(s)", "WM(a)", "WP(s)", "WP(a)", "W(s) R", "W(s) L",
            "W(a) R", "W(a) L", "IF(s)", "IF(a)", "IW(s)", "IW(a)", "WTM(s)",
            "WTM(a)", "RD(A)", "DW(d)", "DW(s)",
        }),
    ),
    "am": CategoryRules(
        short_name="am",
        description="Attacking midfielder",
        roles=frozenset({"SS", "EG", "AP(s)", "AP(a)", "TQ(a)"}),
    ),
    "str": CategoryRules(
        short_name="str",
        description="Striker",
        roles=frozenset({
            "AF", "P", "DLF(s)", "DLF(a)", "CF(s)", "CF(a)", "F9", "TM(s)", "TM(a)",
            "PF(d)", "PF(s)", "PF(a)",
        }),
    ),
}


def _build_role_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for rules in _CATEGORY_RULES.values():
        for role in rules.roles:
            if role in index:
                raise RuntimeError(
                    f"Role {role!r} listed under both {index[role]!r} and {rules.short_name!r}"
                )
            index[role] = rules.short_name
    missing = set(VALID_ROLES) - set(index)
    if missing:
        raise RuntimeError(f"Roles without a category: {sorted(missing)}")
    return index


_ROLE_CATEGORY: Mapping[str, str] = _build_role_index()
_ROLE_INDEX: Mapping[str, int] = {role: idx for idx, role in enumerate(VALID_ROLES)}

_SIDE_SUFFIX = re.compile(r"\s+([LR])$")
_DUTY = re.compile(r"\([A-Za-z]\)")


def get_valid_categories() -> Tuple[str, ...]:
    return tuple(_CATEGORY_RULES)


def is_valid_category(category: str) -> bool:
    return category.strip().lower() in _CATEGORY_RULES


def get_roles_for_category(category: str) -> FrozenSet[str]:
    """Return the roles a player of ``category`` may occupy (empty when unknown)."""

    rules = _CATEGORY_RULES.get(category.strip().lower())
    if rules is None:
        return frozenset()
    return rules.roles


def role_belongs_to_category(role_name: str, category: str) -> bool:
    return role_name.strip() in get_roles_for_category(category)


def category_for_role(role_name: str) -> Optional[str]:
    return _ROLE_CATEGORY.get(role_name.strip())


def is_valid_role(role_name: str) -> bool:
    return role_name.strip() in _ROLE_INDEX


def role_index(role_name: str) -> int:
    """Position of a role in :data:`VALID_ROLES`, raising KeyError when unknown."""

    key = role_name.strip()
    if key not in _ROLE_INDEX:
        raise KeyError(f"Unknown role {role_name!r}")
    return _ROLE_INDEX[key]


def role_side(role_name: str) -> Optional[str]:
    """Return ``"L"`` or ``"R"`` for side-bound roles, ``None`` otherwise."""

    match = _SIDE_SUFFIX.search(role_name.strip())
    return match.group(1) if match else None


def role_family(role_name: str) -> str:
    """Strip duty and side from a role name: ``"WB(s) R"`` -> ``"WB"``."""

    base = _SIDE_SUFFIX.sub("", role_name.strip())
    return _DUTY.sub("", base).strip()


__all__ = [
    "ABILITIES",
    "CategoryRules",
    "VALID_ROLES",
    "category_for_role",
    "get_roles_for_category",
    "get_valid_categories",
    "is_valid_category",
    "is_valid_role",
    "role_belongs_to_category",
    "role_family",
    "role_index",
    "role_side",
]
