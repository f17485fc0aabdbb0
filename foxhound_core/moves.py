from __future__ import annotations

from typing import List

from .coords import diagonal_neighbors, format_position, is_black_square, on_board, parse_position
from .errors import ContractError, FormatError
from .state import BoardState, FigureKind, Move


def _check_figure(figure: FigureKind) -> None:
    if not isinstance(figure, FigureKind):
        raise FormatError(f'Given figure field invalid: {figure!r}')


def _is_diagonal_step(figure: FigureKind, dx: int, dy: int) -> bool:
    if figure is FigureKind.HOUND:
        # Hounds only ever advance toward higher rows.
        return abs(dx) == 1 and dy == 1
    return abs(dx) == 1 and abs(dy) == 1


def is_valid_move(state: BoardState, figure: FigureKind, origin: str, dest: str) -> bool:
    """
    Decides whether `figure` may move from `origin` to `dest` on `state`.
    Malformed input (dimension, position count, figure, position text) raises a
    ContractError subclass; an illegal move just returns False.
    Rules are checked in order: diagonal step, black squares, bounds, free destination,
    and finally that the origin holds a figure of the given kind.
    """
    state.check_invariants()
    _check_figure(figure)
    ox, oy = parse_position(origin)
    tx, ty = parse_position(dest)

    if not _is_diagonal_step(figure, tx - ox, ty - oy):
        return False
    if not is_black_square(ox, oy) or not is_black_square(tx, ty):
        return False
    if not on_board((ox, oy), state.dimension) or not on_board((tx, ty), state.dimension):
        return False
    if state.occupied((tx, ty)):
        return False
    if figure is FigureKind.HOUND:
        return (ox, oy) in state.hounds
    return (ox, oy) == state.fox


def apply_move(state: BoardState, move: Move) -> None:
    """Moves one figure in place. The caller must have validated `move` with is_valid_move."""
    origin = parse_position(move.origin)
    dest = parse_position(move.destination)
    if move.figure is FigureKind.FOX:
        if state.fox != origin:
            raise ContractError(f'No fox on {move.origin}')
        state.fox = dest
        return
    try:
        idx = state.hounds.index(origin)
    except ValueError:
        raise ContractError(f'No hound on {move.origin}') from None
    state.hounds[idx] = dest


def legal_moves(state: BoardState, figure: FigureKind) -> List[Move]:
    """Calculates all legal moves for one side, ordered by origin then destination."""
    _check_figure(figure)
    origins = [state.fox] if figure is FigureKind.FOX else sorted(state.hounds)
    moves: List[Move] = []
    for pos in origins:
        origin = format_position(*pos)
        for cand in sorted(diagonal_neighbors(pos)):
            if not on_board(cand, state.dimension):
                continue
            dest = format_position(*cand)
            if is_valid_move(state, figure, origin, dest):
                moves.append(Move(figure, origin, dest))
    return moves
