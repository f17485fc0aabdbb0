from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from .coords import Position, format_position, is_black_square, on_board, parse_position
from .errors import ContractError, RangeError

DEFAULT_DIM = 8
MIN_DIM = 4
MAX_DIM = 26
NUM_FOX = 1


class FigureKind(Enum):
    """The two figure kinds. The value is the token used by the save format and the API."""
    FOX = 'F'
    HOUND = 'H'

    @property
    def label(self) -> str:
        return 'Fox' if self is FigureKind.FOX else 'Hounds'


@dataclass(frozen=True)
class Move:
    figure: FigureKind
    origin: str
    destination: str


def check_dimension(dimension: int) -> None:
    if not isinstance(dimension, int) or not MIN_DIM <= dimension <= MAX_DIM:
        raise RangeError(f'Given dimension invalid: {dimension}')


def hound_count(dimension: int) -> int:
    return dimension // 2


@dataclass
class BoardState:
    """Where every figure stands on one board. Mutated only through moves.apply_move."""
    dimension: int
    hounds: List[Position] = field(default_factory=list)
    fox: Position = (0, 0)

    @classmethod
    def from_positions(cls, dimension: int, positions: Sequence[str]) -> 'BoardState':
        """Builds a state from the flat text form: hounds first, the fox last."""
        if not positions:
            raise RangeError('Given positions are empty')
        parsed = [parse_position(p) for p in positions]
        return cls(dimension=dimension, hounds=parsed[:-1], fox=parsed[-1])

    def positions(self) -> List[Position]:
        return list(self.hounds) + [self.fox]

    def positions_text(self) -> List[str]:
        return [format_position(x, y) for (x, y) in self.positions()]

    def occupied(self, pos: Position) -> bool:
        return pos == self.fox or pos in self.hounds

    def copy(self) -> 'BoardState':
        return BoardState(dimension=self.dimension, hounds=list(self.hounds), fox=self.fox)

    def check_invariants(self) -> None:
        """Raises a ContractError subclass unless colour, bounds, overlap and count invariants hold."""
        check_dimension(self.dimension)
        expected = hound_count(self.dimension) + NUM_FOX
        if len(self.hounds) + NUM_FOX != expected:
            raise RangeError(f'Given number of positions is incorrect: {len(self.hounds) + NUM_FOX} (expected {expected})')
        seen = set()
        for i, pos in enumerate(self.positions()):
            who = 'the fox' if i == len(self.hounds) else 'one of the hounds'
            if not on_board(pos, self.dimension):
                raise RangeError(f'Given position of {who} not on the grid: {format_position(*pos)}')
            if not is_black_square(*pos):
                raise ContractError(f'Given position of {who} not on a black square: {format_position(*pos)}')
            if pos in seen:
                raise ContractError(f'Two figures share the square {format_position(*pos)}')
            seen.add(pos)
