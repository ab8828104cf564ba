"""
Tic-Tac-Toe rules engine package.

This package holds the game state and rules: the board, the players, turn
order, and win/tie evaluation. It has no knowledge of how the game is shown;
web/ and interface/ drive it through the GameEngine contract.

Modules:
    constants: Markers, board size, and the winning lines in scan order
    board:     The 9-cell grid and its placement rule
    game:      GameEngine, Player, Outcome, and the session state machine
"""

from engine.board import Board
from engine.game import (
    GameEngine,
    Outcome,
    OutcomeKind,
    Player,
    SessionState,
    UninitializedSessionError,
    describe_status,
)

__all__ = [
    "Board",
    "GameEngine",
    "Outcome",
    "OutcomeKind",
    "Player",
    "SessionState",
    "UninitializedSessionError",
    "describe_status",
]
