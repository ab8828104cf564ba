"""
Tests for the Board grid and its placement rule.
"""

import pytest

from engine.constants import BOARD_CELLS, EMPTY, MARK_A, MARK_B


class TestSetCell:
    """Placement succeeds exactly once per empty, in-range cell."""

    @pytest.mark.parametrize("index", range(BOARD_CELLS))
    def test_every_cell_accepts_a_marker(self, board, index):
        assert board.set_cell(index, MARK_A) is True
        assert board.get_cells()[index] == MARK_A

    def test_only_the_target_cell_changes(self, board):
        board.set_cell(4, MARK_B)

        cells = board.get_cells()
        assert cells[4] == MARK_B
        assert [c for i, c in enumerate(cells) if i != 4] == [EMPTY] * 8

    @pytest.mark.parametrize("second", [MARK_A, MARK_B])
    def test_occupied_cell_keeps_first_marker(self, board, second):
        assert board.set_cell(2, MARK_A) is True

        assert board.set_cell(2, second) is False
        assert board.get_cells()[2] == MARK_A

    @pytest.mark.parametrize("index", [-1, -9, 9, 10, 100])
    def test_out_of_range_index_is_refused(self, board, index):
        assert board.set_cell(index, MARK_A) is False
        assert board.get_cells() == (EMPTY,) * BOARD_CELLS

    @pytest.mark.parametrize("index", ["0", 1.0, None, True])
    def test_non_integer_index_is_refused(self, board, index):
        assert board.set_cell(index, MARK_A) is False
        assert board.get_cells() == (EMPTY,) * BOARD_CELLS

    @pytest.mark.parametrize("value", [EMPTY, "Z", "x", None])
    def test_value_must_be_a_marker(self, board, value):
        assert board.set_cell(0, value) is False
        assert board.get_cells()[0] == EMPTY


class TestSnapshot:
    def test_fresh_board_is_empty(self, board):
        assert board.get_cells() == (EMPTY,) * BOARD_CELLS

    def test_snapshot_cannot_corrupt_board(self, board):
        snapshot = board.get_cells()
        assert isinstance(snapshot, tuple)

        copy = list(snapshot)
        copy[0] = MARK_B

        assert board.get_cells()[0] == EMPTY
        assert board.set_cell(0, MARK_A) is True

    def test_old_snapshot_does_not_follow_board(self, board):
        before = board.get_cells()
        board.set_cell(0, MARK_A)

        assert before[0] == EMPTY
        assert board.get_cells()[0] == MARK_A


class TestReset:
    def test_reset_clears_every_cell(self, board):
        for i, marker in enumerate([MARK_A, MARK_B, MARK_A, MARK_B, MARK_A]):
            board.set_cell(i, marker)

        board.reset()

        assert board.get_cells() == (EMPTY,) * BOARD_CELLS
        assert board.is_full() is False

    def test_reset_allows_replacing_markers(self, board):
        board.set_cell(0, MARK_A)
        board.reset()

        assert board.set_cell(0, MARK_B) is True
        assert board.get_cells()[0] == MARK_B


class TestIsFull:
    def test_full_only_after_last_cell(self, board):
        assert board.is_full() is False

        for i in range(BOARD_CELLS - 1):
            board.set_cell(i, MARK_A if i % 2 == 0 else MARK_B)
        assert board.is_full() is False

        board.set_cell(8, MARK_A)
        assert board.is_full() is True
