"""Ability weighting per role family, used when a player has no precomputed role rating."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from .roles import ABILITIES, VALID_ROLES, role_family

KEY_WEIGHT = 1.0
PREFERRED_WEIGHT = 0.5


def _profile(key: Iterable[str], preferred: Iterable[str] = ()) -> Mapping[str, float]:
    weights: Dict[str, float] = {name: PREFERRED_WEIGHT for name in preferred}
    weights.update({name: KEY_WEIGHT for name in key})
    return weights


_ROLE_PROFILES: Dict[str, Mapping[str, float]] = {
    # Goalkeepers
    "GK": _profile(
        ("Aer", "Cmd", "Com", "Han", "Kic", "Ref", "Cnt", "Pos", "Agi"),
        ("1v1", "Thr", "Ant", "Dec"),
    ),
    "SK": _profile(
        ("Cmd", "Kic", "1v1", "Ref", "Ant", "Cmp", "Cnt", "Pos", "Agi"),
        ("Aer", "Com", "Fir", "Han", "Pas", "Rus", "Thr", "Dec", "Vis", "Acc"),
    ),
    # Central defenders
    "CD": _profile(("Hea", "Mar", "Tck", "Pos", "Jum", "Str"), ("Agg", "Ant", "Bra", "Cmp", "Cnt", "Dec", "Pac")),
    "BPD": _profile(("Hea", "Mar", "Pas", "Tck", "Cmp", "Pos", "Jum", "Str"), ("Fir", "Tec", "Vis", "Ant", "Bra", "Cnt", "Dec", "Pac")),
    "NCB": _profile(("Hea", "Mar", "Tck", "Pos", "Jum", "Str"), ("Agg", "Ant", "Bra", "Cnt")),
    "WCB": _profile(("Hea", "Mar", "Tck", "Pos", "Jum", "Str"), ("Cro", "Dri", "Pas", "Tec", "Agg", "Ant", "OtB", "Wor", "Pac", "Sta")),
    "L": _profile(("Mar", "Tck", "Cmp", "Dec", "Pos", "Tea"), ("Fir", "Hea", "Pas", "Tec", "Ant", "Bra", "Cnt", "Vis", "Acc", "Jum", "Pac")),
    # Full backs and wing backs
    "FB": _profile(("Mar", "Tck", "Ant", "Cnt", "Pos", "Tea"), ("Cro", "Pas", "Dec", "Wor", "Pac", "Sta")),
    "IFB": _profile(("Hea", "Mar", "Tck", "Pos", "Str"), ("Agg", "Ant", "Bra", "Cmp", "Cnt", "Dec", "Wor", "Jum", "Pac")),
    "WB": _profile(("Cro", "Dri", "Mar", "Tck", "OtB", "Tea", "Wor", "Acc", "Sta"), ("Fir", "Pas", "Tec", "Ant", "Cnt", "Dec", "Pos", "Agi", "Bal", "Pac")),
    "IWB": _profile(("Pas", "Tck", "Cmp", "Dec", "Tea"), ("Fir", "Mar", "Tec", "Ant", "Cnt", "OtB", "Pos", "Vis", "Wor", "Acc", "Agi", "Sta")),
    "CWB": _profile(("Cro", "Dri", "Tec", "OtB", "Tea", "Wor", "Acc", "Sta"), ("Fir", "Mar", "Pas", "Tck", "Ant", "Dec", "Fla", "Agi", "Bal", "Pac")),
    # Defensive midfielders
    "DM": _profile(("Tck", "Ant", "Cnt", "Pos", "Tea"), ("Mar", "Pas", "Agg", "Cmp", "Str", "Dec", "Wor", "Sta")),
    "HB": _profile(("Mar", "Tck", "Ant", "Cmp", "Cnt", "Dec", "Pos", "Tea"), ("Fir", "Pas", "Agg", "Bra", "Wor", "Jum", "Sta", "Str")),
    "BWM": _profile(("Tck", "Agg", "Ant", "Tea", "Wor", "Sta"), ("Mar", "Bra", "Cnt", "Pos", "Agi", "Pac", "Str")),
    "A": _profile(("Mar", "Tck", "Ant", "Cnt", "Dec", "Pos"), ("Cmp", "Tea", "Str")),
    "SV": _profile(("Mar", "Pas", "Tck", "OtB", "Pos", "Wor", "Sta"), ("Fin", "Fir", "Lon", "Ant", "Cmp", "Cnt", "Dec", "Acc", "Bal", "Pac", "Str")),
    "RGA": _profile(("Fir", "Pas", "Tec", "Cmp", "Dec", "Fla", "OtB", "Tea", "Vis"), ("Dri", "Lon", "Ant", "Bal")),
    # Central midfielders
    "CM": _profile(("Fir", "Pas", "Tck", "Dec", "Tea"), ("Tec", "Ant", "Cmp", "Cnt", "OtB", "Vis", "Wor", "Sta")),
    "DLP": _profile(("Pas", "Tec", "Cmp", "Dec", "Tea", "Vis"), ("Fir", "Ant", "OtB", "Pos", "Bal")),
    "RPM": _profile(("Fir", "Pas", "Tec", "Ant", "Cmp", "Dec", "OtB", "Tea", "Vis", "Wor", "Acc", "Sta"), ("Dri", "Lon", "Cnt", "Agi", "Bal", "Pac")),
    "BBM": _profile(("Pas", "Tck", "OtB", "Tea", "Wor", "Sta"), ("Dri", "Fin", "Fir", "Lon", "Tec", "Agg", "Ant", "Cmp", "Dec", "Pos", "Acc", "Bal", "Pac", "Str")),
    "CAR": _profile(("Fir", "Pas", "Tck", "Dec", "Pos", "Tea", "Sta"), ("Tec", "Ant", "Cmp", "Cnt", "OtB", "Vis", "Wor")),
    "MEZ": _profile(("Pas", "Tec", "Dec", "OtB", "Wor", "Acc"), ("Dri", "Fir", "Lon", "Ant", "Cmp", "Vis", "Bal", "Sta")),
    # Wide players
    "WM": _profile(("Pas", "Tck", "Cnt", "Dec", "Pos", "Tea", "Wor"), ("Cro", "Fir", "Tec", "Ant", "Cmp", "OtB", "Vis", "Sta")),
    "WP": _profile(("Fir", "Pas", "Tec", "Cmp", "Dec", "Tea", "Vis"), ("Dri", "OtB", "Agi")),
    "W": _profile(("Cro", "Dri", "Tec", "Acc", "Agi"), ("Fir", "Pas", "OtB", "Wor", "Bal", "Pac", "Sta")),
    "DW": _profile(("Cro", "Tec", "Ant", "OtB", "Pos", "Tea", "Wor", "Sta"), ("Dri", "Fir", "Mar", "Tck", "Agg", "Cnt", "Dec", "Acc")),
    "IW": _profile(("Cro", "Dri", "Pas", "Tec", "Acc", "Agi"), ("Fir", "Lon", "Cmp", "Dec", "OtB", "Vis", "Wor", "Bal", "Pac", "Sta")),
    "IF": _profile(("Dri", "Fin", "Fir", "Tec", "OtB", "Acc", "Agi"), ("Lon", "Pas", "Ant", "Cmp", "Fla", "Wor", "Bal", "Pac", "Sta")),
    "WTM": _profile(("Hea", "Bra", "Tea", "Jum", "Str"), ("Cro", "Fir", "Ant", "OtB", "Wor", "Bal", "Sta")),
    "RD": _profile(("Ant", "Cmp", "Cnt", "Dec", "OtB", "Bal"), ("Fin", "Fir", "Tec", "Acc")),
    # Attacking midfielders and forwards
    "AP": _profile(("Fir", "Pas", "Tec", "Cmp", "Dec", "OtB", "Tea", "Vis"), ("Dri", "Ant", "Fla", "Agi")),
    "TQ": _profile(("Dri", "Fir", "Pas", "Tec", "Cmp", "Fla", "OtB", "Vis"), ("Fin", "Ant", "Dec", "Acc", "Agi", "Bal")),
    "SS": _profile(("Dri", "Fin", "Fir", "Ant", "Cmp", "OtB", "Wor", "Acc", "Sta"), ("Pas", "Tec", "Cnt", "Dec", "Agi", "Bal", "Pac")),
    "EG": _profile(("Fir", "Pas", "Tec", "Cmp", "Dec", "Tea", "Vis"), ("Dri", "Ant", "Fla", "OtB", "Agi")),
    "AF": _profile(("Dri", "Fin", "Fir", "Tec", "Cmp", "OtB", "Acc"), ("Pas", "Ant", "Dec", "Wor", "Agi", "Bal", "Pac", "Sta")),
    "P": _profile(("Fin", "Ant", "Cmp", "OtB"), ("Fir", "Hea", "Tec", "Dec", "Acc")),
    "DLF": _profile(("Fir", "Pas", "Tec", "Cmp", "Dec", "OtB", "Tea"), ("Fin", "Ant", "Fla", "Vis", "Bal", "Str")),
    "CF": _profile(("Dri", "Fin", "Fir", "Hea", "Lon", "Pas", "Tec", "Ant", "Cmp", "OtB", "Vis", "Acc", "Agi", "Str"), ("Dec", "Tea", "Wor", "Bal", "Jum", "Pac", "Sta")),
    "F9": _profile(("Dri", "Fir", "Pas", "Tec", "Cmp", "Dec", "OtB", "Vis", "Acc", "Agi"), ("Fin", "Ant", "Fla", "Tea", "Bal")),
    "TM": _profile(("Hea", "Bra", "Tea", "Jum", "Str"), ("Fin", "Fir", "Agg", "Ant", "Cmp", "OtB", "Bal")),
    "PF": _profile(("Agg", "Ant", "Bra", "Dec", "Tea", "Wor", "Acc", "Pac", "Sta"), ("Fir", "Cmp", "Cnt", "Agi", "Bal", "Str")),
}


def _check_profiles() -> None:
    families = {role_family(role) for role in VALID_ROLES}
    missing = families - set(_ROLE_PROFILES)
    if missing:
        raise RuntimeError(f"Role families without a profile: {sorted(missing)}")
    known = set(ABILITIES)
    for family, weights in _ROLE_PROFILES.items():
        unknown = set(weights) - known
        if unknown:
            raise RuntimeError(f"Profile {family!r} references unknown abilities {sorted(unknown)}")


_check_profiles()


def get_profile(role_name: str) -> Mapping[str, float]:
    """Return the ability weights for the family of ``role_name``."""

    family = role_family(role_name)
    if family not in _ROLE_PROFILES:
        raise KeyError(f"No ability profile for role {role_name!r}")
    return _ROLE_PROFILES[family]


__all__ = ["KEY_WEIGHT", "PREFERRED_WEIGHT", "get_profile"]
