"""Player table parsing.

Rows follow the team sheet layout: name, age, foot, the 47 abilities in
``ABILITIES`` order, the DNA score, one rating per role in ``VALID_ROLES``
order, then an optional category short name. Trailing columns may be absent.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from fmselect.config.roles import ABILITIES, VALID_ROLES
from fmselect.errors import ErrorBuilder, ErrorCode, SelectorError
from fmselect.models import Footedness, Player, PlayerCategory
from fmselect.validators import validate_player_table


logger = logging.getLogger(__name__)

NAME_COL = 0
AGE_COL = 1
FOOT_COL = 2
ABILITIES_START_COL = 3
DNA_COL = ABILITIES_START_COL + len(ABILITIES)
ROLE_RATINGS_START_COL = DNA_COL + 1
CATEGORY_COL = ROLE_RATINGS_START_COL + len(VALID_ROLES)
TOTAL_COLUMNS = CATEGORY_COL + 1


def _cell(row: Sequence[str], index: int) -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index]).strip()
    return ""


def _parse_float(raw: str) -> Optional[float]:
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _parse_age(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return 0


def _parse_footedness(raw: str, row_num: int, name: str) -> Footedness:
    if not raw:
        return Footedness.RIGHT
    try:
        return Footedness.from_token(raw)
    except SelectorError as exc:
        raise ErrorBuilder(ErrorCode.E509).with_context(
            f"row {row_num} ({name}): '{raw}' must be R, L, or RL"
        ).build() from exc


def _parse_category(raw: str, row_num: int, name: str) -> Optional[PlayerCategory]:
    if not raw:
        return None
    try:
        return PlayerCategory.from_short_name(raw)
    except SelectorError as exc:
        raise ErrorBuilder(ErrorCode.E508).with_context(
            f"row {row_num} ({name}): unknown category '{raw}'"
        ).with_issues([f"unknown category '{raw}' for player '{name}'"]).build() from exc


def _parse_row(row: Sequence[str], row_num: int) -> Player:
    name = _cell(row, NAME_COL)

    abilities: Dict[str, float] = {}
    for offset, ability in enumerate(ABILITIES):
        value = _parse_float(_cell(row, ABILITIES_START_COL + offset))
        if value is not None:
            abilities[ability] = value

    role_ratings: Dict[str, float] = {}
    for offset, role in enumerate(VALID_ROLES):
        value = _parse_float(_cell(row, ROLE_RATINGS_START_COL + offset))
        if value is not None:
            role_ratings[role] = value

    try:
        return Player(
            name=name,
            age=_parse_age(_cell(row, AGE_COL)),
            footedness=_parse_footedness(_cell(row, FOOT_COL), row_num, name),
            category=_parse_category(_cell(row, CATEGORY_COL), row_num, name),
            abilities=abilities,
            dna_score=_parse_float(_cell(row, DNA_COL)),
            role_ratings=role_ratings,
        )
    except ValidationError as exc:
        raise ErrorBuilder(ErrorCode.E304).with_context(
            f"player '{name}' on row {row_num}: {exc.errors()[0]['msg']}"
        ).build() from exc


def parse_player_data(rows: Sequence[Sequence[str]]) -> List[Player]:
    """Convert raw sheet rows into players, skipping rows without a name.

    Raises:
        ParseError: A row has an unknown foot or an invalid rating.
        RoleValidationError: A category is unknown or a name repeats.
    """

    players: List[Player] = []
    seen: Dict[str, int] = {}
    for row_num, row in enumerate(rows, start=1):
        if not _cell(row, NAME_COL):
            continue
        player = _parse_row(row, row_num)
        if player.name in seen:
            raise ErrorBuilder(ErrorCode.E511).with_context(
                f"'{player.name}' on rows {seen[player.name]} and {row_num}"
            ).with_issues([f"duplicate player '{player.name}'"]).build()
        seen[player.name] = row_num
        players.append(player)

    logger.info("Parsed %d players from %d rows", len(players), len(rows))
    return players


def load_player_csv(path: Union[str, Path]) -> List[Player]:
    """Read a player table from CSV; a leading ``Name`` header row is skipped."""

    path = Path(path)
    try:
        with path.open("r", newline="", encoding="utf-8-sig") as f:
            rows = [row for row in csv.reader(f) if row]
    except (OSError, UnicodeDecodeError) as exc:
        raise ErrorBuilder(ErrorCode.E104).with_context(f"'{path}': {exc}").build() from exc

    if rows and _cell(rows[0], NAME_COL).lower() == "name":
        rows = rows[1:]
    validate_player_table(rows)
    return parse_player_data(rows)


def player_to_row(player: Player) -> List[str]:
    """Inverse of the sheet layout, used when writing player tables."""

    def fmt(value: Optional[float]) -> str:
        if value is None:
            return ""
        return repr(value)

    row = [
        player.name,
        str(player.age),
        player.footedness.value,
    ]
    row.extend(fmt(player.abilities.get(ability)) for ability in ABILITIES)
    row.append(fmt(player.dna_score))
    row.extend(fmt(player.role_ratings.get(role)) for role in VALID_ROLES)
    row.append(player.category.value if player.category else "")
    return row


def player_table_header() -> List[str]:
    return ["Name", "Age", "Foot", *ABILITIES, "DNA", *VALID_ROLES, "Category"]


__all__ = [
    "ABILITIES_START_COL",
    "CATEGORY_COL",
    "DNA_COL",
    "ROLE_RATINGS_START_COL",
    "TOTAL_COLUMNS",
    "load_player_csv",
    "parse_player_data",
    "player_table_header",
    "player_to_row",
]
