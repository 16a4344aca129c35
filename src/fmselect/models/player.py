"""Player model and the closed variant sets that describe a player."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from fmselect.config.roles import ABILITIES, VALID_ROLES, get_roles_for_category
from fmselect.errors import ErrorBuilder, ErrorCode, invalid_category


class PlayerType(str, Enum):
    GOALKEEPER = "goalkeeper"
    FIELD_PLAYER = "field_player"


class Footedness(str, Enum):
    LEFT = "L"
    RIGHT = "R"
    BOTH = "RL"

    @classmethod
    def from_token(cls, token: str) -> "Footedness":
        key = token.strip().upper()
        if key in {"L", "LEFT"}:
            return cls.LEFT
        if key in {"R", "RIGHT"}:
            return cls.RIGHT
        if key in {"RL", "LR", "B", "BOTH"}:
            return cls.BOTH
        raise ErrorBuilder(ErrorCode.E509).with_context(
            f"'{token}' must be R, L, or RL"
        ).build()

    def satisfies(self, side: Optional[str]) -> bool:
        """True when this foot can play a role bound to ``side`` (``"L"``, ``"R"`` or ``None``)."""

        if side is None or self is Footedness.BOTH:
            return True
        return self.value == side

    def __str__(self) -> str:
        return self.value


class PlayerCategory(str, Enum):
    GOAL = "goal"
    CENTRAL_DEFENDER = "cd"
    WING_BACK = "wb"
    DEFENSIVE_MIDFIELDER = "dm"
    CENTRAL_MIDFIELDER = "cm"
    WINGER = "wing"
    ATTACKING_MIDFIELDER = "am"
    STRIKER = "str"

    @classmethod
    def from_short_name(cls, short: str) -> "PlayerCategory":
        key = short.strip().lower()
        for category in cls:
            if category.value == key:
                return category
        raise invalid_category(short)

    @property
    def short_name(self) -> str:
        return self.value

    @property
    def roles(self):
        return get_roles_for_category(self.value)

    def __str__(self) -> str:
        return self.value


class Player(BaseModel):
    """A squad member with abilities and, optionally, precomputed role ratings."""

    name: str = Field(..., min_length=1)
    age: int = Field(default=0, ge=0)
    footedness: Footedness = Footedness.RIGHT
    category: Optional[PlayerCategory] = None
    abilities: Dict[str, float] = Field(default_factory=dict)
    dna_score: Optional[float] = None
    role_ratings: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("player name must not be blank")
        return value

    @field_validator("abilities")
    @classmethod
    def _check_abilities(cls, value: Dict[str, float]) -> Dict[str, float]:
        known = set(ABILITIES)
        for name, rating in value.items():
            if name not in known:
                raise ValueError(f"unknown ability {name!r}")
            if rating < 0:
                raise ValueError(f"ability {name!r} has negative rating {rating}")
        return value

    @field_validator("role_ratings")
    @classmethod
    def _check_role_ratings(cls, value: Dict[str, float]) -> Dict[str, float]:
        known = set(VALID_ROLES)
        for name, rating in value.items():
            if name not in known:
                raise ValueError(f"unknown role {name!r}")
            if rating < 0:
                raise ValueError(f"role {name!r} has negative rating {rating}")
        return value

    @property
    def player_type(self) -> PlayerType:
        if self.category is PlayerCategory.GOAL:
            return PlayerType.GOALKEEPER
        return PlayerType.FIELD_PLAYER

    def get_ability(self, ability: str) -> float:
        """Rating for ``ability``; missing ratings count as zero."""

        return float(self.abilities.get(ability, 0.0))

    def get_role_rating(self, role_name: str) -> Optional[float]:
        rating = self.role_ratings.get(role_name)
        return None if rating is None else float(rating)
