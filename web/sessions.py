"""
In-memory game sessions for the web view.

Each browser page load creates one session holding its own GameEngine. Nothing
is persisted: sessions live in a dict for the lifetime of the process and are
dropped when the page asks for it or when the store is full.

Threading model:
    FastAPI runs sync handlers in a thread pool, so two requests can reach the
    store at the same time. The store's lock guards the dict; each session's
    own lock serializes the engine calls for that session. An engine is never
    touched by two threads at once.
"""

import logging
import os
import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field

from engine.game import GameEngine

_log = logging.getLogger(__name__)

# Upper bound on live sessions; the least recently used one is evicted first.
MAX_SESSIONS: int = int(os.getenv("TICTACTOE_MAX_SESSIONS", "1000"))


@dataclass
class GameSession:
    """
    One browser's game.

    Attributes:
        game_id:    Opaque identifier handed to the browser.
        engine:     The rules engine for this session.
        created_at: Wall-clock creation time (time.time()).
        lock:       Held while a request drives the engine.
    """

    game_id: str
    engine: GameEngine = field(default_factory=GameEngine)
    created_at: float = field(default_factory=time.time)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class GameSessionStore:
    """
    Thread-safe LRU map of game_id -> GameSession.

    Args:
        max_sessions: Capacity. Creating a session beyond it evicts the
                      session that was used least recently.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be positive, got {max_sessions}")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, GameSession] = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> GameSession:
        """Register and return a new session with a fresh, unstarted engine."""
        session = GameSession(game_id=uuid.uuid4().hex)
        with self._lock:
            self._sessions[session.game_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                _log.info("Evicted session %s (store full)", evicted_id)
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Look up a session and mark it as recently used."""
        with self._lock:
            session = self._sessions.get(game_id)
            if session is not None:
                self._sessions.move_to_end(game_id)
            return session

    def remove(self, game_id: str) -> bool:
        """Drop a session. Returns False if it was not present."""
        with self._lock:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._sessions
