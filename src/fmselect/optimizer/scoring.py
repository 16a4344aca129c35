"""Player/role scoring."""

from __future__ import annotations

import math
import sys

from fmselect.config.profiles import get_profile
from fmselect.models import Player, Role


def _saturate(value: float) -> float:
    if math.isinf(value) or value > sys.float_info.max:
        return sys.float_info.max
    return max(0.0, value)


def ability_score(player: Player, role: Role) -> float:
    """Weighted mean of the player's abilities under the role family's profile."""

    weights = get_profile(role.name)
    total_weight = math.fsum(weights.values())
    try:
        weighted = math.fsum(
            weight / total_weight * player.get_ability(name) for name, weight in weights.items()
        )
    except OverflowError:
        return sys.float_info.max
    return _saturate(weighted)


def calculate_assignment_score(player: Player, role: Role) -> float:
    """Score for putting ``player`` in ``role``.

    A precomputed rating from the player table wins; otherwise the score is
    derived from the player's abilities. Always finite and non-negative.
    """

    rating = player.get_role_rating(role.name)
    if rating is not None:
        return _saturate(rating)
    return ability_score(player, role)


__all__ = ["ability_score", "calculate_assignment_score"]
