from __future__ import annotations

from enum import Enum

from .coords import diagonal_neighbors, format_position, on_board, parse_position
from .moves import is_valid_move
from .state import BoardState, FigureKind


class GameStatus(Enum):
    IN_PROGRESS = 'in_progress'
    FOX_WINS = 'fox_wins'
    HOUNDS_WIN = 'hounds_win'


def next_mover(figure: FigureKind) -> FigureKind:
    """Swaps between fox and hounds."""
    return FigureKind.HOUND if figure is FigureKind.FOX else FigureKind.FOX


def is_fox_win(fox_pos: str) -> bool:
    """The fox wins once it reaches the first row."""
    _, y = parse_position(fox_pos)
    return y == 0


def is_hound_win(state: BoardState) -> bool:
    """
    The hounds win when the fox has no legal move left. Only the fox's immediate
    diagonal neighbours are looked at; off-board neighbours are skipped before
    the validator is asked.
    """
    state.check_invariants()
    fox = format_position(*state.fox)
    for cand in diagonal_neighbors(state.fox):
        if not on_board(cand, state.dimension):
            continue
        if is_valid_move(state, FigureKind.FOX, fox, format_position(*cand)):
            return False
    return True


def game_status(state: BoardState) -> GameStatus:
    # A fox on the first row wins even if it is also boxed in.
    if is_fox_win(format_position(*state.fox)):
        return GameStatus.FOX_WINS
    if is_hound_win(state):
        return GameStatus.HOUNDS_WIN
    return GameStatus.IN_PROGRESS
