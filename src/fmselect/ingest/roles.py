"""Role file parsing.

A role file lists the roles to fill, one per line. The sectioned format adds
player filters::

    [roles]
    GK
    CD(d) | pin=John Smith
    WB(s) R | foot=R
    ...

    [filters]
    Jane Doe: cd, wb

    [exclude]
    Injured Player

``#`` starts a comment. ``pin=`` takes the rest of the line, so a pinned name
may contain commas. A file without section headers is read as a plain role
list (legacy format).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from fmselect.errors import (
    ErrorBuilder,
    ErrorCode,
    player_filter_error,
    role_file_format_error,
)
from fmselect.models import (
    CategoryFilter,
    ExcludeFilter,
    Footedness,
    FootednessFilter,
    PinFilter,
    PlayerCategory,
    PlayerFilter,
    Role,
    RoleFileContent,
)
from fmselect.validators import validate_filter_categories, validate_roles


logger = logging.getLogger(__name__)

_SECTIONS = ("roles", "filters", "exclude")
_HINT_SEPARATOR = "|"
# Canonical order; pin comes last because a pinned name runs to the end of the line.
_HINT_KEYS = ("foot", "pin")
_PIN_KEY = "pin"

_Line = Tuple[int, str]


def _clean_lines(text: str) -> List[_Line]:
    lines: List[_Line] = []
    for line_num, raw in enumerate(text.splitlines(), start=1):
        without_comment = raw.split("#", 1)[0].strip()
        if without_comment:
            lines.append((line_num, without_comment))
    return lines


def _is_header(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def _split_sections(lines: List[_Line]) -> Dict[str, List[_Line]]:
    sections: Dict[str, List[_Line]] = {name: [] for name in _SECTIONS}
    current: Optional[str] = None
    for line_num, line in lines:
        if _is_header(line):
            name = line[1:-1].strip().lower()
            if name not in sections:
                raise role_file_format_error(line_num, f"unknown section '{line}'")
            current = name
            continue
        if current is None:
            raise role_file_format_error(line_num, f"content found outside of section: '{line}'")
        sections[current].append((line_num, line))
    return sections


def _parse_hints(line_num: int, text: str) -> Dict[str, str]:
    hints: Dict[str, str] = {}
    rest = text.strip()
    while rest:
        chunk, _, rest = rest.partition(",")
        chunk = chunk.strip()
        if chunk.split("=", 1)[0].strip().lower() == _PIN_KEY and rest:
            chunk = f"{chunk},{rest}".strip()
            rest = ""
        rest = rest.strip()
        if not chunk:
            continue
        if "=" not in chunk:
            raise role_file_format_error(line_num, f"invalid hint '{chunk}', expected key=value")
        key, value = chunk.split("=", 1)
        key = key.strip().lower()
        value = value.strip()
        if key not in _HINT_KEYS:
            raise role_file_format_error(line_num, f"unknown hint '{key}'")
        if not value:
            raise role_file_format_error(line_num, f"hint '{key}' has no value")
        if key in hints:
            raise role_file_format_error(line_num, f"hint '{key}' given twice")
        hints[key] = value
    return hints


def _parse_roles_section(
    lines: List[_Line],
    expected_count: Optional[int],
) -> Tuple[List[Role], List[PlayerFilter]]:
    names: List[str] = []
    hints_by_line: List[Tuple[int, Dict[str, str]]] = []
    for line_num, line in lines:
        name, _, hint_text = line.partition(_HINT_SEPARATOR)
        names.append(name.strip())
        hints_by_line.append((line_num, _parse_hints(line_num, hint_text)))

    validate_roles(names, expected_count)

    roles = [Role.new(name) for name in names]
    filters: List[PlayerFilter] = []
    for role, (line_num, hints) in zip(roles, hints_by_line):
        # Filters come out pin first whatever order the hints were written in.
        if "pin" in hints:
            filters.append(PinFilter(player_name=hints["pin"], role_name=role.name))
        if "foot" in hints:
            filters.append(
                FootednessFilter(role_name=role.name, footedness=Footedness.from_token(hints["foot"]))
            )
    return roles, filters


def _parse_filters_section(lines: List[_Line]) -> List[PlayerFilter]:
    filters: List[PlayerFilter] = []
    seen_players: Set[str] = set()

    for line_num, line in lines:
        if ":" not in line:
            raise player_filter_error(
                line, line_num, "expected 'PLAYER_NAME: CATEGORY_LIST'"
            )
        player_name, categories_text = (part.strip() for part in line.split(":", 1))
        if not player_name:
            raise player_filter_error(player_name, line_num, "empty player name")
        if player_name in seen_players:
            raise ErrorBuilder(ErrorCode.E505).with_context(
                f"'{player_name}' on line {line_num}"
            ).with_issues([f"duplicate filter for '{player_name}'"]).build()
        seen_players.add(player_name)

        tokens = [token.strip() for token in categories_text.split(",") if token.strip()]
        if not tokens:
            raise player_filter_error(player_name, line_num, "no categories specified")
        validate_filter_categories({player_name: tokens})
        categories = tuple(PlayerCategory.from_short_name(token) for token in tokens)
        filters.append(CategoryFilter(player_name=player_name, allowed_categories=categories))

    return filters


def _parse_exclude_section(lines: List[_Line]) -> List[PlayerFilter]:
    filters: List[PlayerFilter] = []
    seen: Set[str] = set()
    for line_num, player_name in lines:
        if player_name in seen:
            raise ErrorBuilder(ErrorCode.E505).with_context(
                f"'{player_name}' excluded twice (line {line_num})"
            ).with_issues([f"duplicate exclusion for '{player_name}'"]).build()
        seen.add(player_name)
        filters.append(ExcludeFilter(player_name=player_name))
    return filters


def parse_role_file_content(text: str, expected_count: Optional[int] = None) -> RoleFileContent:
    """Parse role file text into roles and filters.

    Args:
        text: Raw role file content.
        expected_count: When given, the number of roles the file must list.

    Returns:
        Parsed and validated RoleFileContent.

    Raises:
        ParseError: Malformed sections, hints or filter lines.
        RoleValidationError: Unknown or duplicate roles, bad categories,
            duplicate filters, or a role count mismatch.
    """

    lines = _clean_lines(text)
    if not lines:
        raise role_file_format_error(0, "role file is empty or contains no valid lines")

    if not any(_is_header(line) for _, line in lines):
        roles, filters = _parse_roles_section(lines, expected_count)
        logger.warning("Role file has no sections; reading it as a plain role list")
        return RoleFileContent(roles=tuple(roles), filters=tuple(filters))

    sections = _split_sections(lines)
    if not sections["roles"]:
        raise role_file_format_error(0, "no [roles] section found in role file")

    roles, filters = _parse_roles_section(sections["roles"], expected_count)
    if sections["filters"]:
        filters.extend(_parse_filters_section(sections["filters"]))
    else:
        logger.warning("No [filters] section found in role file")
    filters.extend(_parse_exclude_section(sections["exclude"]))

    logger.debug("Parsed %d roles and %d filters", len(roles), len(filters))
    return RoleFileContent(roles=tuple(roles), filters=tuple(filters))


def parse_role_file(
    path: Union[str, Path],
    expected_count: Optional[int] = None,
) -> RoleFileContent:
    """Read and parse a role file from disk."""

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ErrorBuilder(ErrorCode.E104).with_context(f"'{path}': {exc}").build() from exc

    content = parse_role_file_content(text, expected_count)
    logger.info(
        "Loaded %d roles and %d filters from %s",
        len(content.roles),
        len(content.filters),
        path,
    )
    return content


def _writable_name(name: str, forbidden: str) -> str:
    if any(ch in name for ch in forbidden) or _is_header(name.strip()):
        raise ErrorBuilder(ErrorCode.E502).with_context(
            f"player name '{name}' cannot be written to a role file"
        ).build()
    return name


def render_role_file(content: RoleFileContent) -> str:
    """Write ``content`` back out in the sectioned format."""

    hints: Dict[str, List[str]] = {role.name: [] for role in content.roles}
    category_lines: List[str] = []
    exclude_lines: List[str] = []
    for f in content.filters:
        if isinstance(f, PinFilter) and f.role_name in hints:
            hints[f.role_name].append(f"pin={_writable_name(f.player_name, '#')}")
        elif isinstance(f, FootednessFilter) and f.role_name in hints:
            hints[f.role_name].append(f"foot={f.footedness.value}")
        elif isinstance(f, CategoryFilter):
            _writable_name(f.player_name, "#:")
            category_lines.append(f.describe())
        elif isinstance(f, ExcludeFilter):
            exclude_lines.append(_writable_name(f.player_name, "#"))

    out = ["[roles]"]
    for role in content.roles:
        role_hints = sorted(hints[role.name], key=lambda h: _HINT_KEYS.index(h.split("=", 1)[0]))
        if role_hints:
            out.append(f"{role.name} {_HINT_SEPARATOR} {', '.join(role_hints)}")
        else:
            out.append(role.name)
    if category_lines:
        out.append("")
        out.append("[filters]")
        out.extend(category_lines)
    if exclude_lines:
        out.append("")
        out.append("[exclude]")
        out.extend(exclude_lines)
    return "\n".join(out) + "\n"


__all__ = ["parse_role_file", "parse_role_file_content", "render_role_file"]
