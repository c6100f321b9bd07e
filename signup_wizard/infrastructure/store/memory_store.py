from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from signup_wizard.application.exceptions import SessionNotFoundError
from signup_wizard.application.ports.session_store import WizardSessionStorePort
from signup_wizard.domain.entities.wizard_session import WizardSession


class MemoryWizardSessionStore(WizardSessionStorePort):
    """
    Process-local sessions. Nothing survives a restart.
    Sessions idle longer than ttl_seconds are evicted the next time a session is created.
    """

    def __init__(self, ttl_seconds: float = 3600, clock: Callable[[], float] = time.monotonic) -> None:
        self._sessions: dict[str, WizardSession] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._touched: dict[str, float] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        # Locks exist only for created sessions; unknown ids never add an entry
        with self._lock_lock:
            lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFoundError(session_id)
        return lock

    def _expired(self, session_id: str, now: float) -> bool:
        return now - self._touched.get(session_id, now) > self._ttl_seconds

    def _evict_idle(self) -> None:
        now = self._clock()
        with self._lock_lock:
            stale = [sid for sid in self._sessions if self._expired(sid, now)]
            for sid in stale:
                self._sessions.pop(sid, None)
                self._locks.pop(sid, None)
                self._touched.pop(sid, None)
        if stale:
            self._logger.info("Evicted idle wizard sessions", extra={"action": "evict", "status": len(stale)})

    def create(self, session: WizardSession) -> WizardSession:
        self._evict_idle()
        with self._lock_lock:
            self._sessions[session.session_id] = session
            self._locks[session.session_id] = threading.Lock()
            self._touched[session.session_id] = self._clock()
        return session

    def get(self, session_id: str) -> WizardSession:
        session = self._sessions.get(session_id)
        if session is None or self._expired(session_id, self._clock()):
            raise SessionNotFoundError(session_id)
        self._touched[session_id] = self._clock()
        return session

    def update(self, session_id: str, mutate: Callable[[WizardSession], WizardSession]) -> WizardSession:
        with self._get_lock(session_id):
            updated = mutate(self.get(session_id))
            self._sessions[session_id] = updated
            self._touched[session_id] = self._clock()
            return updated

    def delete(self, session_id: str) -> None:
        with self._get_lock(session_id):
            self._sessions.pop(session_id, None)
        with self._lock_lock:
            self._locks.pop(session_id, None)
            self._touched.pop(session_id, None)

    @property
    def lock_count(self) -> int:
        return len(self._locks)

    def __len__(self) -> int:
        return len(self._sessions)
