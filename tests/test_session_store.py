"""
Tests for the in-memory wizard session store.
"""

from __future__ import annotations

import threading
from dataclasses import replace

import pytest

from signup_wizard.application.exceptions import SessionNotFoundError
from signup_wizard.application.utils.option_labels import DEFAULT_FORM_OPTIONS
from signup_wizard.domain.entities.wizard_session import WizardSession
from signup_wizard.infrastructure.store.memory_store import MemoryWizardSessionStore


def make_session(session_id: str = "s1") -> WizardSession:
    return WizardSession(session_id=session_id, form_options=DEFAULT_FORM_OPTIONS)


def test_create_get_delete():
    store = MemoryWizardSessionStore()
    store.create(make_session())

    assert store.get("s1").session_id == "s1"
    assert len(store) == 1

    store.delete("s1")
    assert len(store) == 0
    with pytest.raises(SessionNotFoundError):
        store.get("s1")


def test_failed_update_leaves_session_unchanged():
    store = MemoryWizardSessionStore()
    store.create(make_session())

    def explode(session: WizardSession) -> WizardSession:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        store.update("s1", explode)
    assert store.get("s1").revision == 0


def test_concurrent_updates_are_serialized():
    store = MemoryWizardSessionStore()
    store.create(make_session())

    def bump():
        for _ in range(200):
            store.update("s1", lambda s: replace(s, revision=s.revision + 1))

    threads = [threading.Thread(target=bump) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.get("s1").revision == 1000


def test_update_unknown_session():
    store = MemoryWizardSessionStore()

    with pytest.raises(SessionNotFoundError):
        store.update("missing", lambda s: s)


def test_unknown_ids_do_not_accumulate_locks():
    store = MemoryWizardSessionStore()

    for i in range(1000):
        with pytest.raises(SessionNotFoundError):
            store.update(f"bogus-{i}", lambda s: s)
        with pytest.raises(SessionNotFoundError):
            store.delete(f"bogus-{i}")

    assert store.lock_count == 0


def test_idle_sessions_are_evicted_on_create():
    """An abandoned session disappears once it has been idle past the TTL."""
    now = [0.0]
    store = MemoryWizardSessionStore(ttl_seconds=60, clock=lambda: now[0])
    store.create(make_session("idle"))
    store.create(make_session("active"))

    now[0] = 50.0
    store.update("active", lambda s: replace(s, revision=s.revision + 1))

    now[0] = 90.0
    store.create(make_session("fresh"))

    assert len(store) == 2
    assert store.lock_count == 2
    assert store.get("active").revision == 1
    with pytest.raises(SessionNotFoundError):
        store.get("idle")


def test_expired_session_is_not_found_before_sweep():
    now = [0.0]
    store = MemoryWizardSessionStore(ttl_seconds=60, clock=lambda: now[0])
    store.create(make_session())

    now[0] = 61.0
    with pytest.raises(SessionNotFoundError):
        store.get("s1")
