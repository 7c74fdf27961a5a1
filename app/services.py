"""
Service layer for the IDX Screener terminal.

Settings and the snapshot store are created once per process via
@st.cache_resource. Each browser session owns its own ``ScreenerSession``
held in ``st.session_state``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any

import streamlit as st

from app.utils import run_in_thread
from idx_screener.engines import FetchInProgressError, ScreenerSession, SnapshotFetchError
from idx_screener.observability import configure_logging
from idx_screener.settings import ScreenerSettings, load_settings
from idx_screener.snapshot import SnapshotAccessor, open_store

logger = logging.getLogger(__name__)

_SESSION_KEY = "idx_session"
_FUTURE_KEY = "idx_fetch_future"


@st.cache_resource(show_spinner=False)
def get_settings() -> ScreenerSettings:
    """Load settings once and configure logging from them."""
    settings = load_settings()
    configure_logging(settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
    logger.info("Screener settings loaded (env=%s, snapshot=%s)", settings.environment, settings.snapshot_path)
    return settings


@st.cache_resource(show_spinner=False)
def get_store(snapshot_path: str) -> SnapshotAccessor:
    return open_store(snapshot_path)


def get_session() -> ScreenerSession:
    """Return this browser session's ``ScreenerSession``, creating it on first use."""
    session = st.session_state.get(_SESSION_KEY)
    if session is None:
        settings = get_settings()
        try:
            store = get_store(settings.snapshot_path)
        except SnapshotFetchError as exc:
            st.error(exc.user_message)
            st.stop()
        session = ScreenerSession.from_settings(store, settings)
        st.session_state[_SESSION_KEY] = session
    return session


def start_fetch(session: ScreenerSession) -> bool:
    """Kick off a background snapshot fetch; ``False`` if one is already running."""
    try:
        session.begin_fetch()
    except FetchInProgressError:
        return False
    st.session_state[_FUTURE_KEY] = run_in_thread(session.store.fetch_latest_snapshot)
    return True


def poll_fetch(session: ScreenerSession) -> bool:
    """Hand a finished fetch back to the session. Returns ``True`` while still running."""
    future: Future[Any] | None = st.session_state.get(_FUTURE_KEY)
    if future is None:
        return False
    if not future.done():
        return True
    st.session_state[_FUTURE_KEY] = None
    try:
        snapshot = future.result()
    except SnapshotFetchError as exc:
        session.fail_fetch(exc.user_message)
        return False
    except Exception as exc:
        logger.exception("Unexpected snapshot fetch failure")
        session.fail_fetch(str(exc) or exc.__class__.__name__)
        return False
    session.complete_fetch(snapshot)
    return False


__all__ = ["get_session", "get_settings", "get_store", "poll_fetch", "start_fetch"]
