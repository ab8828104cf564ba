"""
Engine constants: cell markers, board geometry, and the winning lines.

Every module that needs to know what an empty cell looks like, how big the
board is, or which triples of cells form a line imports it from here.

Cells are indexed 0-8 in row-major order:

     0 | 1 | 2
    ---+---+---
     3 | 4 | 5
    ---+---+---
     6 | 7 | 8
"""

# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------
# Player 1 always plays MARK_A and moves first.

EMPTY: str = ""
MARK_A: str = "X"
MARK_B: str = "O"

MARKERS: tuple[str, str] = (MARK_A, MARK_B)

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

BOARD_SIDE: int = 3
BOARD_CELLS: int = BOARD_SIDE * BOARD_SIDE

# ---------------------------------------------------------------------------
# Winning lines
# ---------------------------------------------------------------------------
# The order matters: outcome evaluation returns the first complete line, so
# rows are scanned before columns and columns before the diagonals.

ROWS: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
)

COLUMNS: tuple[tuple[int, int, int], ...] = (
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
)

DIAGONALS: tuple[tuple[int, int, int], ...] = (
    (0, 4, 8),
    (2, 4, 6),
)

WINNING_LINES: tuple[tuple[int, int, int], ...] = ROWS + COLUMNS + DIAGONALS
