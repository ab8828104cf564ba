"""
FastAPI web application for the Tic-Tac-Toe engine.

Exposes the GameEngine contract as JSON endpoints and serves the browser
frontend from web/static. The page keeps a game_id for its own session and
re-renders the whole board from the state returned by every call.

Endpoints:
    POST   /api/games                  Seat two players, start a game
    GET    /api/games/{game_id}        Current state
    POST   /api/games/{game_id}/moves  Play a round at a cell index
    POST   /api/games/{game_id}/reset  Clear the board, keep the players
    POST   /api/games/{game_id}/new    Seat new players on the same session
    DELETE /api/games/{game_id}        Drop the session
    GET    /api/health                 Liveness check

Architecture notes:
- Sync endpoints: FastAPI runs them in a thread pool; sessions.py holds the
  locks that keep each engine single-threaded.
- A rejected move is not an HTTP error. The engine reports it with a boolean
  and the response carries accepted=false plus the unchanged state.
- Static files mounted LAST: route registration is first-match, so API routes
  must be registered before the StaticFiles catch-all.
"""

import logging
import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, StrictInt, field_validator

from engine.game import SessionState, describe_status
from web.sessions import GameSession, GameSessionStore

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("TICTACTOE_LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=LOG_LEVEL)
_log = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"

MAX_NAME_LENGTH = 40

NOT_STARTED_MESSAGE = "Enter player names to start"

app = FastAPI(title="Tic-Tac-Toe", version="1.0.0")

_store = GameSessionStore()


def get_store() -> GameSessionStore:
    """Dependency hook for the session store (overridden in tests)."""
    return _store


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class StartGameRequest(BaseModel):
    """
    Names submitted from the player form.

    Fields:
        player1: Name of the player who plays X and moves first.
        player2: Name of the player who plays O.

    Surrounding whitespace is stripped. Empty names are accepted.
    """

    player1: str
    player2: str

    @field_validator("player1", "player2")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters")
        return v


class MoveRequest(BaseModel):
    """
    A click on a board cell.

    Fields:
        index: Cell index 0-8, a JSON integer. Booleans and numeric strings
               are refused with a 422 rather than coerced. Out-of-range
               integers are passed through to the engine, which rejects them
               like any other invalid move.
    """

    index: StrictInt


class PlayerModel(BaseModel):
    name: str
    marker: str


class OutcomeModel(BaseModel):
    kind: str
    marker: str | None = None


class GameStateResponse(BaseModel):
    """
    Everything the page needs to re-render.

    Fields:
        game_id:        Session identifier to use in later calls.
        cells:          The 9 cells in row-major order ("", "X" or "O").
        players:        The two seated players, player 1 first.
        current_player: Player to move, or the one who made the final move.
        state:          "not_started", "in_progress" or "over".
        outcome:        Board evaluation, null before the first game.
        game_over:      True once a move has won or tied the game.
        winning_line:   Indices of the completed line, if any.
        message:        Status text for the page header.
    """

    game_id: str
    cells: list[str]
    players: list[PlayerModel]
    current_player: PlayerModel | None
    state: str
    outcome: OutcomeModel | None
    game_over: bool
    winning_line: list[int] | None
    message: str


class MoveResponse(GameStateResponse):
    """
    State after a move attempt.

    Fields:
        accepted: False if the move was rejected (bad index, occupied cell,
                  game over). The state is then unchanged.
    """

    accepted: bool


class HealthResponse(BaseModel):
    status: str
    sessions: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _state_response(session: GameSession) -> dict:
    """Serialize a session's engine into GameStateResponse fields."""
    engine = session.engine
    started = engine.state is not SessionState.NOT_STARTED

    current = outcome = line = None
    if started:
        player = engine.get_current_player()
        current = PlayerModel(name=player.name, marker=player.marker)
        result = engine.check_outcome()
        outcome = OutcomeModel(kind=result.kind.value, marker=result.marker)
        winning = engine.winning_line()
        line = list(winning) if winning is not None else None

    return {
        "game_id": session.game_id,
        "cells": list(engine.board.get_cells()),
        "players": [PlayerModel(name=p.name, marker=p.marker) for p in engine.players],
        "current_player": current,
        "state": engine.state.value,
        "outcome": outcome,
        "game_over": engine.is_game_over(),
        "winning_line": line,
        "message": describe_status(engine) if started else NOT_STARTED_MESSAGE,
    }


def _require_session(store: GameSessionStore, game_id: str) -> GameSession:
    session = store.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return session


# ---------------------------------------------------------------------------
# API routes (registered BEFORE StaticFiles mount)
# ---------------------------------------------------------------------------


@app.get("/api/health", response_model=HealthResponse)
def api_health(store: GameSessionStore = Depends(get_store)) -> HealthResponse:
    return HealthResponse(status="ok", sessions=len(store))


@app.post("/api/games", response_model=GameStateResponse, status_code=201)
def api_create_game(
    request: StartGameRequest,
    store: GameSessionStore = Depends(get_store),
) -> GameStateResponse:
    """
    Create a session for this page and start its first game.

    Args:
        request: The two player names.

    Returns:
        GameStateResponse with a fresh game_id; player 1 to move.
    """
    session = store.create()
    with session.lock:
        session.engine.start_game(request.player1, request.player2)
        _log.info(
            "Game %s created: %r vs %r", session.game_id, request.player1, request.player2
        )
        return GameStateResponse(**_state_response(session))


@app.get("/api/games/{game_id}", response_model=GameStateResponse)
def api_get_game(
    game_id: str,
    store: GameSessionStore = Depends(get_store),
) -> GameStateResponse:
    session = _require_session(store, game_id)
    with session.lock:
        return GameStateResponse(**_state_response(session))


@app.post("/api/games/{game_id}/moves", response_model=MoveResponse)
def api_play_round(
    game_id: str,
    request: MoveRequest,
    store: GameSessionStore = Depends(get_store),
) -> MoveResponse:
    """
    Play the current player's marker at request.index.

    Args:
        game_id: Session identifier.
        request: MoveRequest with the clicked cell index.

    Returns:
        MoveResponse; accepted is False when the engine refused the move.

    Raises:
        HTTPException 404: Unknown game_id.
        HTTPException 500: The engine raised unexpectedly.
    """
    session = _require_session(store, game_id)
    with session.lock:
        try:
            accepted = session.engine.play_round(request.index)
            state = _state_response(session)
        except Exception as exc:
            _log.exception("Move failed for game=%s index=%d", game_id, request.index)
            raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    _log.info(
        "Game=%s index=%d accepted=%s state=%s",
        game_id,
        request.index,
        accepted,
        state["state"],
    )
    return MoveResponse(accepted=accepted, **state)


@app.post("/api/games/{game_id}/reset", response_model=GameStateResponse)
def api_reset_game(
    game_id: str,
    store: GameSessionStore = Depends(get_store),
) -> GameStateResponse:
    """Clear the board and give player 1 the first move; names are kept."""
    session = _require_session(store, game_id)
    with session.lock:
        session.engine.reset_game()
        _log.info("Game %s reset", game_id)
        return GameStateResponse(**_state_response(session))


@app.post("/api/games/{game_id}/new", response_model=GameStateResponse)
def api_new_game(
    game_id: str,
    request: StartGameRequest,
    store: GameSessionStore = Depends(get_store),
) -> GameStateResponse:
    """Seat new players on an existing session and start over."""
    session = _require_session(store, game_id)
    with session.lock:
        session.engine.start_game(request.player1, request.player2)
        _log.info(
            "Game %s restarted: %r vs %r", game_id, request.player1, request.player2
        )
        return GameStateResponse(**_state_response(session))


@app.delete("/api/games/{game_id}", status_code=204)
def api_end_game(
    game_id: str,
    store: GameSessionStore = Depends(get_store),
) -> Response:
    if not store.remove(game_id):
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    _log.info("Game %s ended", game_id)
    return Response(status_code=204)


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    """Serve the game page."""
    return FileResponse(_STATIC_DIR / "index.html")


# ---------------------------------------------------------------------------
# Static file mount: MUST be last (catch-all for /static/* assets)
# ---------------------------------------------------------------------------

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")


def main() -> None:
    """Run the app under uvicorn (the tictactoe-web console script)."""
    import uvicorn

    host = os.getenv("TICTACTOE_HOST", "127.0.0.1")
    port = int(os.getenv("TICTACTOE_PORT", "8000"))
    uvicorn.run(app, host=host, port=port, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
