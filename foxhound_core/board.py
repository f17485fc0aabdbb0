from __future__ import annotations

from typing import Dict, List

from .coords import Position, format_position
from .state import BoardState, FigureKind


def _cells(state: BoardState) -> Dict[Position, str]:
    cells = {pos: FigureKind.HOUND.value for pos in state.hounds}
    cells[state.fox] = FigureKind.FOX.value
    return cells


def render_board(state: BoardState) -> str:
    """
    Generates a human-readable string representation of the board: column letters above
    and below, row numbers on both sides (zero-padded from 10 rows on), '.' for empty
    squares, 'H' for hounds and 'F' for the fox.
    """
    dim = state.dimension
    width = 2 if dim >= 10 else 1
    letters = ''.join(format_position(x, 0)[0] for x in range(dim))
    header = ' ' * (width + 1) + letters
    cells = _cells(state)
    lines: List[str] = [header, '']
    for y in range(dim):
        label = str(y + 1).zfill(width)
        row = ''.join(cells.get((x, y), '.') for x in range(dim))
        lines.append(f"{label} {row} {label}")
    lines.extend(['', header])
    return '\n'.join(lines)
