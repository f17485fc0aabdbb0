from __future__ import annotations

from typing import List

from .coords import Position, is_black_square
from .state import BoardState, check_dimension, hound_count


def initial_layout(dimension: int) -> BoardState:
    """Creates the starting position: hounds on the first row, the fox on the last row near the centre."""
    check_dimension(dimension)
    # Hounds take every other square of row 0, starting at column B.
    hounds: List[Position] = [(1 + 2 * i, 0) for i in range(hound_count(dimension))]

    # 1-based fox column, moved one to the right when it lands on a white square.
    column = dimension // 2 + (1 if dimension % 2 else 0)
    fox: Position = (column - 1, dimension - 1)
    if not is_black_square(*fox):
        fox = (column, dimension - 1)
    return BoardState(dimension=dimension, hounds=hounds, fox=fox)
