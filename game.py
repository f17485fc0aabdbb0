from __future__ import annotations

# Facade module that re-exports the Fox and Hounds core.
# Used by the Flask app, the tests and "python game.py [dimension]".
# Single-responsibility modules live under foxhound_core/*.

# Prefer the relative import when loaded as part of a package, then the installed package.
try:
    from .foxhound_core.coords import (  # type: ignore
        Position,
        is_position_text,
        parse_position,
        format_position,
        is_black_square,
        on_board,
        diagonal_neighbors,
    )
    from .foxhound_core.errors import ContractError, FormatError, RangeError, SaveConflict  # type: ignore
    from .foxhound_core.state import (  # type: ignore
        DEFAULT_DIM,
        MIN_DIM,
        MAX_DIM,
        BoardState,
        FigureKind,
        Move,
        check_dimension,
        hound_count,
    )
    from .foxhound_core.layout import initial_layout  # type: ignore
    from .foxhound_core.moves import is_valid_move, apply_move, legal_moves  # type: ignore
    from .foxhound_core.rules import (  # type: ignore
        GameStatus,
        next_mover,
        is_fox_win,
        is_hound_win,
        game_status,
    )
    from .foxhound_core.persistence import (  # type: ignore
        SAVE_DIM,
        LOAD_FAILED,
        SaveRecord,
        encode_record,
        decode_record,
        load_game,
        load_state,
        save_game,
    )
    from .foxhound_core.board import render_board  # type: ignore
except ImportError:
    from foxhound_core.coords import (  # type: ignore
        Position,
        is_position_text,
        parse_position,
        format_position,
        is_black_square,
        on_board,
        diagonal_neighbors,
    )
    from foxhound_core.errors import ContractError, FormatError, RangeError, SaveConflict  # type: ignore
    from foxhound_core.state import (  # type: ignore
        DEFAULT_DIM,
        MIN_DIM,
        MAX_DIM,
        BoardState,
        FigureKind,
        Move,
        check_dimension,
        hound_count,
    )
    from foxhound_core.layout import initial_layout  # type: ignore
    from foxhound_core.moves import is_valid_move, apply_move, legal_moves  # type: ignore
    from foxhound_core.rules import (  # type: ignore
        GameStatus,
        next_mover,
        is_fox_win,
        is_hound_win,
        game_status,
    )
    from foxhound_core.persistence import (  # type: ignore
        SAVE_DIM,
        LOAD_FAILED,
        SaveRecord,
        encode_record,
        decode_record,
        load_game,
        load_state,
        save_game,
    )
    from foxhound_core.board import render_board  # type: ignore


def main() -> None:
    # CLI driver delegated to foxhound_core.cli
    try:
        from .foxhound_core.cli import main as _main  # type: ignore
    except ImportError:
        from foxhound_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
