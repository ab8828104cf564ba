"""
Game engine: players, turn order, game-over state, and outcome evaluation.

This module defines the stable public interface that web/app.py and
interface/console.py depend on:

    start_game(name1, name2)
    play_round(index) -> bool
    check_outcome() -> Outcome
    get_current_player() -> Player
    is_game_over() -> bool
    reset_game()

Expected failures (a bad index, an occupied cell, a move after the game has
ended) are reported through return values, never exceptions. The only
exception raised on purpose is UninitializedSessionError, for asking who is
playing before anyone has been seated.

Session state machine:

    NOT_STARTED --start_game--> IN_PROGRESS
    IN_PROGRESS --play_round (no result yet)--> IN_PROGRESS
    IN_PROGRESS --play_round (win or tie)--> OVER
    OVER --reset_game / start_game--> IN_PROGRESS
"""

import logging
from dataclasses import dataclass
from enum import Enum

from engine.board import Board
from engine.constants import EMPTY, MARK_A, MARK_B, WINNING_LINES

_log = logging.getLogger(__name__)


class UninitializedSessionError(RuntimeError):
    """Raised when the engine is queried before start_game() was ever called."""


@dataclass(frozen=True)
class Player:
    """
    A seated player.

    Attributes:
        name:   Display name as entered by the user.
        marker: MARK_A for the first player, MARK_B for the second.
    """

    name: str
    marker: str


class OutcomeKind(Enum):
    WIN = "win"
    TIE = "tie"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True)
class Outcome:
    """
    Result of evaluating the board.

    Build instances through the win(), tie() and in_progress() constructors.
    marker is only set for a WIN and names the winning marker.
    """

    kind: OutcomeKind
    marker: str | None = None

    @classmethod
    def win(cls, marker: str) -> "Outcome":
        return cls(OutcomeKind.WIN, marker)

    @classmethod
    def tie(cls) -> "Outcome":
        return cls(OutcomeKind.TIE)

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(OutcomeKind.IN_PROGRESS)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS


class SessionState(Enum):
    """Lifecycle of one GameEngine."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    OVER = "over"


def _find_winning_line(cells: tuple[str, ...]) -> tuple[int, int, int] | None:
    """
    Return the first complete line in scan order, or None.

    Scan order is rows, then columns, then diagonals (see WINNING_LINES). A
    line is complete when its three cells hold the same non-empty marker.
    """
    for line in WINNING_LINES:
        a, b, c = (cells[i] for i in line)
        if a != EMPTY and a == b == c:
            return line
    return None


class GameEngine:
    """
    Rules engine for one two-player game session.

    Owns its Board exclusively; views read the board through the board
    property and mutate it only via play_round(), reset_game() and
    start_game().

    Attributes:
        _board:         The grid, owned by this engine.
        _players:       (player1, player2) once start_game() has run, else ().
        _current_index: 0 or 1, index into _players of the player to move.
        _game_over:     Set by the move that produced a win or tie.
    """

    def __init__(self) -> None:
        self._board: Board = Board()
        self._players: tuple[Player, ...] = ()
        self._current_index: int = 0
        self._game_over: bool = False

    # -----------------------------------------------------------------------
    # Read-only views
    # -----------------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self._board

    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    @property
    def current_player_index(self) -> int:
        return self._current_index

    @property
    def state(self) -> SessionState:
        if not self._players:
            return SessionState.NOT_STARTED
        if self._game_over:
            return SessionState.OVER
        return SessionState.IN_PROGRESS

    # -----------------------------------------------------------------------
    # Session control
    # -----------------------------------------------------------------------

    def start_game(self, name1: str, name2: str) -> None:
        """
        Seat two new players and begin a fresh game.

        Player 1 gets MARK_A and moves first. Any previous players are
        replaced. Names are stored exactly as given.

        Args:
            name1: Display name of the first player.
            name2: Display name of the second player.
        """
        self._players = (Player(name1, MARK_A), Player(name2, MARK_B))
        self._current_index = 0
        self._game_over = False
        self._board.reset()
        _log.debug("Game started: %s (%s) vs %s (%s)", name1, MARK_A, name2, MARK_B)

    def reset_game(self) -> None:
        """
        Clear the board and hand the first move back to player 1.

        Unlike start_game(), the seated players are kept. Before the first
        start_game() this only clears the board; the engine stays NOT_STARTED.
        """
        self._current_index = 0
        self._game_over = False
        self._board.reset()
        _log.debug("Game reset")

    # -----------------------------------------------------------------------
    # Play
    # -----------------------------------------------------------------------

    def play_round(self, index: int) -> bool:
        """
        Place the current player's marker at index.

        On a placement that leaves the game undecided the turn passes to the
        other player. On a placement that wins or fills the board the game is
        marked over and the turn does NOT pass, so get_current_player() still
        names the player who made the final move.

        Args:
            index: Target cell, 0-8.

        Returns:
            True if a marker was placed (whether or not the game ended).
            False, with no state change, if the game is not started or
            already over, or if the board rejected the placement.
        """
        if not self._players or self._game_over:
            return False

        marker = self._players[self._current_index].marker
        if not self._board.set_cell(index, marker):
            return False

        outcome = self.check_outcome()
        if outcome.is_terminal:
            self._game_over = True
            _log.debug("Cell %d -> %s ends the game: %s", index, marker, outcome.kind.value)
        else:
            self._current_index = 1 - self._current_index
            _log.debug("Cell %d -> %s", index, marker)
        return True

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def check_outcome(self) -> Outcome:
        """
        Evaluate the board without changing anything.

        Returns:
            Outcome.win(marker) for the first complete line in scan order,
            Outcome.tie() if no line is complete and no cell is EMPTY,
            Outcome.in_progress() otherwise.

        Raises:
            UninitializedSessionError: start_game() has never been called.
        """
        self._require_started()
        cells = self._board.get_cells()
        line = _find_winning_line(cells)
        if line is not None:
            return Outcome.win(cells[line[0]])
        if self._board.is_full():
            return Outcome.tie()
        return Outcome.in_progress()

    def winning_line(self) -> tuple[int, int, int] | None:
        """
        The cell indices of the winning line, or None if nobody has won.

        Raises:
            UninitializedSessionError: start_game() has never been called.
        """
        self._require_started()
        return _find_winning_line(self._board.get_cells())

    def get_winner(self) -> Player | None:
        """
        The player whose marker completed a line, or None.

        Raises:
            UninitializedSessionError: start_game() has never been called.
        """
        outcome = self.check_outcome()
        if outcome.kind is not OutcomeKind.WIN:
            return None
        for player in self._players:
            if player.marker == outcome.marker:
                return player
        return None

    def get_current_player(self) -> Player:
        """
        The player whose turn it is (or who made the final move).

        Raises:
            UninitializedSessionError: start_game() has never been called.
        """
        self._require_started()
        return self._players[self._current_index]

    def is_game_over(self) -> bool:
        return self._game_over

    def _require_started(self) -> None:
        if not self._players:
            raise UninitializedSessionError("start_game() must be called first")


def describe_status(engine: GameEngine) -> str:
    """
    One-line status for a started game, shared by the web page and console.

    "<name>'s Turn" while playing, "It's a tie!" on a full board with no
    line, "<name> Wins!" once somebody completed a line.

    Raises:
        UninitializedSessionError: start_game() has never been called.
    """
    outcome = engine.check_outcome()
    if outcome.kind is OutcomeKind.TIE:
        return "It's a tie!"
    if outcome.kind is OutcomeKind.WIN:
        return f"{engine.get_winner().name} Wins!"
    return f"{engine.get_current_player().name}'s Turn"
