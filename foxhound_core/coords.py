from __future__ import annotations

import string
from typing import Tuple

from .errors import FormatError

Position = Tuple[int, int]  # (x, y), 0-indexed; x is the column, y the row

_COLUMNS = string.ascii_uppercase
_DIGITS = frozenset(string.digits)


def is_position_text(text: object) -> bool:
    """Checks `text` against the position grammar: one letter A-Z, then one or two digits."""
    if not isinstance(text, str) or not 2 <= len(text) <= 3:
        return False
    return text[0] in _COLUMNS and all(ch in _DIGITS for ch in text[1:])


def parse_position(text: str) -> Position:
    """Converts a board position such as 'B1' or 'C10' to cartesian (x, y)."""
    if not is_position_text(text):
        raise FormatError(f'Given position invalid: {text!r}')
    return ord(text[0]) - ord('A'), int(text[1:]) - 1


def format_position(x: int, y: int) -> str:
    """Converts cartesian coordinates back to text. No bounds checking."""
    return f"{chr(ord('A') + x)}{y + 1}"


def is_black_square(x: int, y: int) -> bool:
    return (x % 2) != (y % 2)


def on_board(pos: Position, dimension: int) -> bool:
    x, y = pos
    return 0 <= x < dimension and 0 <= y < dimension


def diagonal_neighbors(pos: Position) -> Tuple[Position, ...]:
    """The four diagonal neighbours, row-decreasing ones first. May lie off the board."""
    x, y = pos
    return (
        (x - 1, y - 1),
        (x + 1, y - 1),
        (x - 1, y + 1),
        (x + 1, y + 1),
    )
