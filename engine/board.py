"""
Board storage: the 9-cell grid and its single placement rule.

The board knows nothing about players or turns. It stores markers, refuses to
overwrite an occupied cell, and can be cleared. Everything that interprets the
cells (whose turn it is, who won) lives in engine.game.
"""

from engine.constants import BOARD_CELLS, EMPTY, MARKERS


class Board:
    """
    A 3x3 Tic-Tac-Toe grid stored as a flat list of 9 cells.

    Each cell holds EMPTY or one of the two markers. A cell changes from EMPTY
    to a marker at most once between resets.

    Attributes:
        _cells: Internal cell list. Never handed out directly; callers get an
                immutable snapshot from get_cells().
    """

    def __init__(self) -> None:
        self._cells: list[str] = [EMPTY] * BOARD_CELLS

    def get_cells(self) -> tuple[str, ...]:
        """
        Return a read-only snapshot of the 9 cells in row-major order.

        The snapshot is a tuple, so callers cannot corrupt the board through
        it. Later placements are not reflected in an old snapshot.
        """
        return tuple(self._cells)

    def set_cell(self, index: int, value: str) -> bool:
        """
        Place a marker on an empty cell.

        Args:
            index: Cell index, 0-8.
            value: The marker to place. Must be one of MARKERS.

        Returns:
            True if the cell was written. False, with the board untouched, if
            the index is not an int in range, the cell is occupied, or the
            value is not a marker.
        """
        # bool is an int subclass; True/False are not cell indices
        if not isinstance(index, int) or isinstance(index, bool):
            return False
        if not 0 <= index < BOARD_CELLS:
            return False
        if value not in MARKERS:
            return False
        if self._cells[index] != EMPTY:
            return False

        self._cells[index] = value
        return True

    def reset(self) -> None:
        """Clear every cell back to EMPTY."""
        self._cells = [EMPTY] * BOARD_CELLS

    def is_full(self) -> bool:
        return EMPTY not in self._cells
