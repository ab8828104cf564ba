"""
Line-oriented console front end for the Tic-Tac-Toe engine.

Two people share one terminal (or a script pipes commands in). The handler
reads one command per line from stdin and writes replies to stdout; anything
diagnostic goes to stderr so stdout stays machine-readable.

Protocol:
    new <name1> <name2>   Seat two players, player 1 plays X and moves first
    play <index>          Place the current player's marker on cell 0-8
    reset                 Clear the board, keep the players
    board                 Print the board
    status                Print the status line
    quit                  Exit

Replies:
    After new, play and reset: the board (three rows like "X|O| ") followed
    by a status line ("Ann's Turn", "It's a tie!", "Ann Wins!").
    A refused move prints "rejected <index>" before the board.
    Malformed commands print "error <reason>" and the loop carries on.
"""

import sys
from typing import Iterable

from engine.game import GameEngine, SessionState, describe_status

NOT_STARTED_MESSAGE = "no game: use 'new <name1> <name2>'"


def _send(line: str) -> None:
    """Write a reply line to stdout and flush it right away."""
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic line to stderr, keeping stdout for replies."""
    print(message, file=sys.stderr, flush=True)


def format_board(cells: tuple[str, ...]) -> list[str]:
    """
    Render 9 cells as three text rows.

    Empty cells become a space, so an empty board prints as three " | | "
    rows.
    """
    return [
        "|".join(cell or " " for cell in cells[start:start + 3])
        for start in (0, 3, 6)
    ]


class ConsoleHandler:
    """
    Stateful handler for the console protocol.

    Attributes:
        engine: The rules engine driven by this console, one per process.
    """

    def __init__(self, engine: GameEngine | None = None) -> None:
        self.engine: GameEngine = engine if engine is not None else GameEngine()

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_new(self, tokens: list[str]) -> None:
        """
        Start a game with two players.

        Args:
            tokens: Exactly two names. Names cannot contain spaces.
        """
        if len(tokens) != 2:
            _send("error usage: new <name1> <name2>")
            return
        self.engine.start_game(tokens[0].strip(), tokens[1].strip())
        self._send_position()

    def handle_play(self, tokens: list[str]) -> None:
        """
        Play a round at the given cell.

        Args:
            tokens: A single integer cell index.
        """
        if self.engine.state is SessionState.NOT_STARTED:
            _send(f"error {NOT_STARTED_MESSAGE}")
            return
        if len(tokens) != 1:
            _send("error usage: play <index>")
            return
        try:
            index = int(tokens[0])
        except ValueError:
            _send(f"error not a cell index: {tokens[0]}")
            return

        if not self.engine.play_round(index):
            _send(f"rejected {index}")
        self._send_position()

    def handle_reset(self) -> None:
        if self.engine.state is SessionState.NOT_STARTED:
            _send(f"error {NOT_STARTED_MESSAGE}")
            return
        self.engine.reset_game()
        self._send_position()

    def handle_board(self) -> None:
        for row in format_board(self.engine.board.get_cells()):
            _send(row)

    def handle_status(self) -> None:
        _send(self.status_line())

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def status_line(self) -> str:
        """Same wording as the web page's status header."""
        if self.engine.state is SessionState.NOT_STARTED:
            return NOT_STARTED_MESSAGE
        return describe_status(self.engine)

    def _send_position(self) -> None:
        self.handle_board()
        self.handle_status()


def run_console_loop(stream: Iterable[str] | None = None) -> None:
    """
    Main console loop.

    Reads lines from stream (stdin by default) and dispatches each command to
    a ConsoleHandler until "quit" or end of input.

    Error handling:
        Each command is wrapped in a try/except so that a bug in one handler
        does not end the session. The error is logged to stderr and the loop
        continues.
    """
    handler = ConsoleHandler()
    lines = stream if stream is not None else sys.stdin

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0].lower()
        args = tokens[1:]

        try:
            if command == "new":
                handler.handle_new(args)
            elif command == "play":
                handler.handle_play(args)
            elif command == "reset":
                handler.handle_reset()
            elif command == "board":
                handler.handle_board()
            elif command == "status":
                handler.handle_status()
            elif command == "quit":
                break
            else:
                _send(f"error unknown command: {command}")
                _log(f"console: ignoring unknown command: {command!r}")

        except Exception as e:
            _send("error internal")
            _log(f"console: unhandled error for command {command!r}: {e}")


def main() -> None:
    run_console_loop()


if __name__ == "__main__":
    main()
