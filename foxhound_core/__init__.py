"""
Fox and Hounds core Python package.

This package contains the rule engine for the game and the single-line save
format. Every module is pure logic except persistence.py (file I/O) and
cli.py (console front end).
Modules:
- coords.py: Position, text <-> cartesian conversion, colour/bounds checks
- errors.py: ContractError and its subclasses
- state.py: FigureKind, Move, BoardState
- layout.py: initial_layout
- moves.py: is_valid_move, apply_move, legal_moves
- rules.py: is_fox_win, is_hound_win, game_status
- persistence.py: save_game, load_game, load_state
- board.py: render_board
- cli.py: console game loop
"""
