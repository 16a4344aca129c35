"""Input adapters for role files and player tables."""

from .players import load_player_csv, parse_player_data, player_table_header, player_to_row
from .roles import parse_role_file, parse_role_file_content, render_role_file

__all__ = [
    "load_player_csv",
    "parse_player_data",
    "parse_role_file",
    "parse_role_file_content",
    "player_table_header",
    "player_to_row",
    "render_role_file",
]
