from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

from .board import render_board
from .coords import format_position, is_position_text, on_board, parse_position
from .errors import ContractError, SaveConflict
from .layout import initial_layout
from .moves import apply_move, is_valid_move, legal_moves
from .persistence import SAVE_DIM, load_state, save_game
from .rules import GameStatus, game_status, next_mover
from .state import DEFAULT_DIM, MAX_DIM, MIN_DIM, BoardState, FigureKind, Move

MENU_MOVE = 1
MENU_SAVE = 2
MENU_LOAD = 3
MENU_EXIT = 4
MENU_ENTRIES = 4
MAIN_MENU = "\n1. Move\n2. Save\n3. Load\n4. Exit\n\nEnter 1 - 2 - 3 - 4:"


def _error(msg: str) -> None:
    print(f"ERROR: {msg}", file=sys.stderr)


def parse_dimension_arg(text: Optional[str]) -> int:
    """Board size from the command line; anything other than 1-2 digits within range keeps the default."""
    if text is None or not 1 <= len(text) <= 2 or not all(ch in '0123456789' for ch in text):
        return DEFAULT_DIM
    value = int(text)
    return value if MIN_DIM <= value <= MAX_DIM else DEFAULT_DIM


def main_menu_query(figure_to_move: FigureKind) -> int:
    """Prints the main menu and asks until a valid entry is chosen."""
    while True:
        print(f"{figure_to_move.label} to move")
        print(MAIN_MENU)
        text = input().strip()
        if text.isdecimal() and 0 < int(text) <= MENU_ENTRIES:
            return int(text)
        print('Please enter valid number.')


def position_query(dim: int) -> Tuple[str, str]:
    """Asks for an origin and a destination, both on the board, separated by one space."""
    last = format_position(dim - 1, dim - 1)
    prompt = f"Provide origin and destination coordinates.\nEnter two positions between A1-{last}:"
    print(prompt)
    while True:
        parts = input().strip().split(' ')
        if len(parts) == 2 and all(is_position_text(p) for p in parts):
            origin, dest = parts
            if on_board(parse_position(origin), dim) and on_board(parse_position(dest), dim):
                return origin, dest
        _error('Please enter valid coordinate pair separated by space.')
        print()
        print(prompt)


def file_query() -> str:
    print('Enter file path:')
    return input().strip()


def _format_moves(moves: List[Move]) -> str:
    return ', '.join(f"{m.origin}-{m.destination}" for m in moves)


def _play_move(state: BoardState, turn: FigureKind) -> None:
    moves = legal_moves(state, turn)
    print('Legal moves:', _format_moves(moves))
    while True:
        origin, dest = position_query(state.dimension)
        if is_valid_move(state, turn, origin, dest):
            apply_move(state, Move(turn, origin, dest))
            return
        _error('Invalid move. Try again!')
        print()


def _save(state: BoardState, turn: FigureKind) -> None:
    if state.dimension != SAVE_DIM:
        _error(f'Only {SAVE_DIM}x{SAVE_DIM} games can be saved.')
        return
    path = file_query()
    try:
        saved = save_game(state.copy(), turn, path)
    except SaveConflict as e:
        _error(str(e))
        return
    if not saved:
        _error('Saving file failed.')


def _announce_result(state: BoardState) -> bool:
    """Prints the final board and the winner if the game is decided."""
    status = game_status(state)
    if status is GameStatus.IN_PROGRESS:
        return False
    print(render_board(state))
    print('The Fox wins!' if status is GameStatus.FOX_WINS else 'The Hounds win!')
    return True


def game_loop(state: BoardState) -> None:
    """Main loop of the console game. Every game starts with the fox."""
    turn = FigureKind.FOX
    while True:
        print('\n#################################')
        print(render_board(state))
        print()
        print(state.positions_text())
        print()

        choice = main_menu_query(turn)
        if choice == MENU_MOVE:
            if turn is FigureKind.HOUND and not legal_moves(state, turn):
                print(f"{turn.label} cannot move; the turn passes.")
                turn = next_mover(turn)
                continue
            if turn is FigureKind.FOX and not legal_moves(state, turn):
                _announce_result(state)
                return
            _play_move(state, turn)
            if _announce_result(state):
                return
            turn = next_mover(turn)
        elif choice == MENU_SAVE:
            _save(state, turn)
        elif choice == MENU_LOAD:
            loaded = load_state(file_query())
            if loaded is None:
                _error('Loading from file failed')
                continue
            turn, state = loaded
            if _announce_result(state):
                return
        elif choice == MENU_EXIT:
            return


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Fox and Hounds console game')
    parser.add_argument('dimension', nargs='?', default=None,
                        help=f'Board size (NxN), {MIN_DIM}-{MAX_DIM}; anything else falls back to {DEFAULT_DIM}')
    args = parser.parse_args(argv)

    state = initial_layout(parse_dimension_arg(args.dimension))
    try:
        game_loop(state)
    except (EOFError, KeyboardInterrupt):
        print()
    except ContractError as e:
        # Only reachable through a broken board state.
        _error(f'internal error: {e}')
        sys.exit(1)
