from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .coords import is_black_square, on_board, parse_position
from .errors import FormatError, RangeError, SaveConflict
from .state import BoardState, FigureKind, NUM_FOX, hound_count

# The save format only covers the 8x8 board: four hounds and the fox.
SAVE_DIM = 8
SAVE_POSITIONS = hound_count(SAVE_DIM) + NUM_FOX
LOAD_FAILED = '#'

# Per-token grammar of the save line. Columns up to J and row digit 0 pass the
# grammar and are then rejected by the bounds check.
_SAVE_COLUMNS = frozenset('ABCDEFGHIJ')
_SAVE_ROWS = frozenset('012345678')
_FIGURE_TOKENS = {kind.value: kind for kind in FigureKind}
# Longer than any valid save line; reading stops there.
_MAX_LINE = 64


@dataclass(frozen=True)
class SaveRecord:
    """One save line: the figure kind to move next and the flat hound-then-fox positions."""
    next_mover: FigureKind
    positions: Tuple[str, ...]


def _trace(msg: str) -> None:
    if os.getenv('FOXHOUND_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on'):
        print(f"[io] {msg}", file=sys.stderr)


def _is_save_token(token: str) -> bool:
    return len(token) == 2 and token[0] in _SAVE_COLUMNS and token[1] in _SAVE_ROWS


def encode_record(record: SaveRecord) -> str:
    """Builds the save line, e.g. 'F B1 D1 F1 H1 E8'. No trailing newline."""
    return ' '.join([record.next_mover.value, *record.positions])


def decode_record(line: str) -> Optional[SaveRecord]:
    """
    Parses and validates a save line. Returns None on any deviation: token count,
    figure token, per-token grammar, squares that are white or off the 8x8 board,
    or two figures on the same square.
    """
    tokens = line.rstrip('\r\n').split(' ')
    if len(tokens) != 1 + SAVE_POSITIONS:
        _trace(f"rejected: expected {1 + SAVE_POSITIONS} tokens, got {len(tokens)}")
        return None
    figure_token, position_tokens = tokens[0], tokens[1:]
    figure = _FIGURE_TOKENS.get(figure_token)
    if figure is None:
        _trace(f"rejected: figure token {figure_token!r}")
        return None
    seen = set()
    for token in position_tokens:
        if not _is_save_token(token):
            _trace(f"rejected: position token {token!r}")
            return None
        pos = parse_position(token)
        if not on_board(pos, SAVE_DIM) or not is_black_square(*pos):
            _trace(f"rejected: {token} is not a black square on the {SAVE_DIM}x{SAVE_DIM} board")
            return None
        if pos in seen:
            _trace(f"rejected: {token} occupied twice")
            return None
        seen.add(pos)
    return SaveRecord(next_mover=figure, positions=tuple(position_tokens))


def _read_record(path: Union[str, os.PathLike]) -> Optional[SaveRecord]:
    if not os.path.isfile(path):
        _trace(f"rejected: {path} does not exist")
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            line = f.readline(_MAX_LINE)
    except (OSError, UnicodeDecodeError) as e:
        _trace(f"loading from {path} failed: {e}")
        return None
    return decode_record(line)


def _discard(path: Union[str, os.PathLike]) -> None:
    try:
        os.remove(path)
    except OSError as e:
        _trace(f"could not remove partial save {path}: {e}")


def _check_save_state(state: BoardState) -> None:
    if state.dimension != SAVE_DIM:
        raise RangeError(f'Only {SAVE_DIM}x{SAVE_DIM} boards can be saved or loaded: {state.dimension}')
    state.check_invariants()


def load_state(path: Union[str, os.PathLike]) -> Optional[Tuple[FigureKind, BoardState]]:
    """Loads a save file into a fresh 8x8 BoardState. Returns None if the file is missing or invalid."""
    record = _read_record(path)
    if record is None:
        return None
    return record.next_mover, BoardState.from_positions(SAVE_DIM, record.positions)


def load_game(players: List[str], path: Union[str, os.PathLike]) -> Union[FigureKind, str]:
    """
    Loads a save file into the caller's flat list of positions (hounds first, fox last).
    Returns the figure kind to move next, or LOAD_FAILED ('#') when the file is missing
    or its content is invalid. The list is only written when the whole file is valid.
    Raises a ContractError subclass if `players` does not hold five valid 8x8 positions.
    """
    if players is None or len(players) != SAVE_POSITIONS:
        raise RangeError(f'Given length of players array not equal to {SAVE_POSITIONS}: '
                         f'{None if players is None else len(players)}')
    _check_save_state(BoardState.from_positions(SAVE_DIM, players))
    record = _read_record(path)
    if record is None:
        return LOAD_FAILED
    players[:] = list(record.positions)
    return record.next_mover


def save_game(state: BoardState, next_mover: FigureKind, path: Union[str, os.PathLike]) -> bool:
    """
    Saves `state` and the figure kind to move next as a single line. Never overwrites:
    an existing `path` raises SaveConflict. An invalid state, a board other than 8x8 or a
    bad figure raises a ContractError subclass. Returns False if writing fails, after
    removing whatever part of the file was written.
    """
    if os.path.exists(path):
        raise SaveConflict(f'Given file already exists: {path}')
    _check_save_state(state)
    if not isinstance(next_mover, FigureKind):
        raise FormatError(f'Given figure field invalid: {next_mover!r}')

    line = encode_record(SaveRecord(next_mover=next_mover, positions=tuple(state.positions_text())))
    try:
        # 'x' refuses to clobber a file created after the exists() check.
        f = open(path, 'x', encoding='utf-8')
    except FileExistsError:
        raise SaveConflict(f'Given file already exists: {path}') from None
    except OSError as e:
        _trace(f"saving to {path} failed: {e}")
        return False
    try:
        with f:
            f.write(line)
    except OSError as e:
        _trace(f"saving to {path} failed: {e}")
        _discard(path)
        return False
    _trace(f"saved {line!r} to {path}")
    return True
