import errno
import io
import os
import tempfile
import unittest
from unittest.mock import patch

from game import (
    BoardState,
    FigureKind,
    Move,
    ContractError,
    FormatError,
    RangeError,
    SaveConflict,
    LOAD_FAILED,
    SaveRecord,
    initial_layout,
    apply_move,
    encode_record,
    decode_record,
    load_game,
    load_state,
    save_game,
)


def _write(path, text):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)


def _read(path):
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


class _FullDiskFile:
    """Wraps a real file whose writes fail with ENOSPC."""

    def __init__(self, f):
        self._f = f

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._f.close()
        return False

    def write(self, text):
        raise OSError(errno.ENOSPC, 'No space left on device')


def _open_full_disk(path, mode='r', **kwargs):
    return _FullDiskFile(open(path, mode, **kwargs))


class TestSaveRecordCodec(unittest.TestCase):
    def test_given_record_when_encoding_then_single_line_without_newline(self):
        rec = SaveRecord(next_mover=FigureKind.FOX, positions=('B1', 'D1', 'F1', 'H1', 'E8'))
        self.assertEqual(encode_record(rec), 'F B1 D1 F1 H1 E8')

    def test_given_valid_line_when_decoding_then_record_with_mover_and_positions(self):
        rec = decode_record('H A2 D1 F1 H1 E8\n')
        self.assertIsNotNone(rec)
        assert rec is not None
        self.assertIs(rec.next_mover, FigureKind.HOUND)
        self.assertEqual(rec.positions, ('A2', 'D1', 'F1', 'H1', 'E8'))

    def test_given_malformed_lines_when_decoding_then_none(self):
        bad_lines = [
            '',
            'F B1 D1 F1 H1',             # too few tokens
            'F B1 D1 F1 H1 E8 A2',       # too many tokens
            'F  B1 D1 F1 H1 E8',         # doubled space
            'X B1 D1 F1 H1 E8',          # unknown figure
            'f B1 D1 F1 H1 E8',          # lowercase figure
            '| B1 D1 F1 H1 E8',
            'FH B1 D1 F1 H1 E8',
            'F K1 D1 F1 H1 E8',          # column outside A-J
            'F B9 D1 F1 H1 E8',          # row digit outside 0-8
            'F B10 D1 F1 H1 E8',
            'F b1 D1 F1 H1 E8',
            'F B1 D1 F1 H1 E7',          # white square
            'F I2 D1 F1 H1 E8',          # black but off the 8x8 board
            'F B0 D1 F1 H1 E8',          # row 0 is off the board
            'F B1 B1 F1 H1 E8',          # two figures on one square
        ]
        for line in bad_lines:
            with self.subTest(line=line):
                self.assertIsNone(decode_record(line))


class TestSaveAndLoad(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.dir = self._td.name

    def tearDown(self):
        self._td.cleanup()

    def test_given_played_state_when_save_then_load_then_positions_and_mover_reproduced(self):
        state = initial_layout(8)
        apply_move(state, Move(FigureKind.FOX, 'E8', 'D7'))
        apply_move(state, Move(FigureKind.HOUND, 'B1', 'C2'))
        path = os.path.join(self.dir, 'game.txt')

        self.assertTrue(save_game(state, FigureKind.FOX, path))
        self.assertEqual(_read(path), 'F C2 D1 F1 H1 D7')

        players = initial_layout(8).positions_text()
        figure = load_game(players, path)
        self.assertIs(figure, FigureKind.FOX)
        self.assertEqual(players, state.positions_text())

    def test_given_saved_file_when_load_state_then_fresh_board_state_returned(self):
        state = initial_layout(8)
        path = os.path.join(self.dir, 'fresh.txt')
        save_game(state, FigureKind.HOUND, path)
        loaded = load_state(path)
        self.assertIsNotNone(loaded)
        assert loaded is not None
        figure, loaded_state = loaded
        self.assertIs(figure, FigureKind.HOUND)
        self.assertEqual(loaded_state, state)
        self.assertIsNot(loaded_state, state)
        self.assertIsNot(loaded_state.hounds, state.hounds)

    def test_given_file_with_trailing_newline_when_loading_then_accepted(self):
        path = os.path.join(self.dir, 'newline.txt')
        _write(path, 'H B1 D1 F1 H1 E8\n')
        players = initial_layout(8).positions_text()
        self.assertIs(load_game(players, path), FigureKind.HOUND)

    def test_given_malformed_file_when_loading_then_sentinel_and_players_untouched(self):
        for i, content in enumerate(['F B1 D1 F1 H1', 'F K1 D1 F1 H1 E8', 'X B1 D1 F1 H1 E8', 'F B1 D1 F1 H1 E7', '']):
            with self.subTest(content=content):
                path = os.path.join(self.dir, f'bad{i}.txt')
                _write(path, content)
                players = ['A2', 'D1', 'F1', 'H1', 'E8']
                before = list(players)
                self.assertEqual(load_game(players, path), LOAD_FAILED)
                self.assertEqual(players, before)
                self.assertIsNone(load_state(path))

    def test_given_missing_file_or_directory_when_loading_then_sentinel(self):
        players = initial_layout(8).positions_text()
        self.assertEqual(load_game(players, os.path.join(self.dir, 'nope.txt')), '#')
        self.assertEqual(load_game(players, self.dir), '#')
        self.assertIsNone(load_state(os.path.join(self.dir, 'nope.txt')))

    def test_given_invalid_players_array_when_loading_then_contract_error(self):
        path = os.path.join(self.dir, 'ok.txt')
        _write(path, 'F B1 D1 F1 H1 E8')
        with self.assertRaises(RangeError):
            load_game(['B1', 'D1', 'F1', 'E8'], path)
        with self.assertRaises(ContractError):
            load_game(['A1', 'D1', 'F1', 'H1', 'E8'], path)
        with self.assertRaises(FormatError):
            load_game(['b1', 'D1', 'F1', 'H1', 'E8'], path)

    def test_given_existing_file_when_saving_then_save_conflict_and_file_untouched(self):
        path = os.path.join(self.dir, 'taken.txt')
        _write(path, 'keep me')
        with self.assertRaises(SaveConflict):
            save_game(initial_layout(8), FigureKind.FOX, path)
        self.assertEqual(_read(path), 'keep me')
        # SaveConflict is a contract error
        with self.assertRaises(ContractError):
            save_game(initial_layout(8), FigureKind.FOX, path)

    def test_given_invalid_state_or_mover_when_saving_then_contract_error_and_nothing_written(self):
        path = os.path.join(self.dir, 'invalid.txt')
        with self.assertRaises(RangeError):
            save_game(initial_layout(6), FigureKind.FOX, path)
        with self.assertRaises(ContractError):
            save_game(BoardState.from_positions(8, ['A1', 'D1', 'F1', 'H1', 'E8']), FigureKind.FOX, path)
        with self.assertRaises(ContractError):
            save_game(BoardState.from_positions(8, ['B1', 'B1', 'F1', 'H1', 'E8']), FigureKind.FOX, path)
        with self.assertRaises(FormatError):
            save_game(initial_layout(8), 'F', path)  # type: ignore[arg-type]
        self.assertFalse(os.path.exists(path))

    def test_given_unwritable_location_when_saving_then_false_instead_of_exception(self):
        path = os.path.join(self.dir, 'missing-dir', 'game.txt')
        self.assertFalse(save_game(initial_layout(8), FigureKind.FOX, path))

    def test_given_write_failing_midway_when_saving_then_false_and_no_file_left_behind(self):
        path = os.path.join(self.dir, 'full-disk.txt')
        with patch('foxhound_core.persistence.open', _open_full_disk, create=True):
            self.assertFalse(save_game(initial_layout(8), FigureKind.FOX, path))
        self.assertFalse(os.path.exists(path))
        # The same path can be saved to afterwards
        self.assertTrue(save_game(initial_layout(8), FigureKind.FOX, path))
        self.assertEqual(_read(path), 'F B1 D1 F1 H1 E8')

    def test_given_huge_file_without_newline_when_loading_then_sentinel(self):
        path = os.path.join(self.dir, 'huge.txt')
        _write(path, 'F B1 D1 F1 H1 E8' + ' A2' * 100000)
        players = initial_layout(8).positions_text()
        self.assertEqual(load_game(players, path), LOAD_FAILED)
        self.assertIsNone(load_state(path))

    def test_given_debug_env_when_load_rejected_then_reason_traced_to_stderr(self):
        path = os.path.join(self.dir, 'trace.txt')
        _write(path, 'F K1 D1 F1 H1 E8')
        with patch.dict(os.environ, {'FOXHOUND_DEBUG': '1'}), patch('sys.stderr', new_callable=io.StringIO) as err:
            self.assertIsNone(load_state(path))
        self.assertIn('[io] rejected', err.getvalue())
        self.assertIn('K1', err.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
