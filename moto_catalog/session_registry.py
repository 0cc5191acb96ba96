from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Callable, List, Optional

from .session import BrowserSession

logger = logging.getLogger("motocat.sessions")


class SessionRegistry:
    """In-memory registry of live browser sessions, capped by least-recent use."""

    def __init__(self, factory: Callable[[Optional[str]], BrowserSession], max_sessions: Optional[int] = None) -> None:
        """Purpose: Initialize an empty registry.
        Inputs/Outputs: Inputs are a session factory and an optional cap; no return.
        Side Effects / State: None; nothing is read from or written to disk.
        Testing Notes: With max_sessions=2, creating a third session evicts the
            least recently used one.
        """
        self._factory = factory
        self._max_sessions = max_sessions
        self._sessions: "OrderedDict[str, BrowserSession]" = OrderedDict()
        self._touched: dict = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, session_id: Optional[str] = None) -> BrowserSession:
        session = self._factory(session_id)
        self._sessions[session.session_id] = session
        self._touch(session.session_id)
        self._prune_sessions()
        logger.info("session=%s created live=%d", session.session_id, len(self._sessions))
        return session

    def get(self, session_id: str) -> BrowserSession:
        """Return a live session, marking it as recently used; KeyError if unknown."""
        session = self._sessions[session_id]
        self._touch(session_id)
        return session

    def list_ids(self) -> List[str]:
        """Session ids, most recently used first."""
        return list(reversed(self._sessions.keys()))

    def last_used(self, session_id: str) -> float:
        return self._touched[session_id]

    def _touch(self, session_id: str) -> None:
        self._sessions.move_to_end(session_id)
        self._touched[session_id] = time.time()

    def _prune_sessions(self) -> bool:
        """Purpose: Enforce max_sessions by dropping the least recently used sessions.
        Inputs/Outputs: No inputs; returns True if any session was removed.
        Failure Modes: None; no-op when max_sessions is unset or not exceeded.
        """
        if not self._max_sessions or self._max_sessions <= 0:
            return False
        removed = []
        while len(self._sessions) > self._max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            self._touched.pop(session_id, None)
            removed.append(session_id)
        for session_id in removed:
            logger.info("session=%s evicted", session_id)
        return bool(removed)
