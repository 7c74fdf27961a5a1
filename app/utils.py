"""
Utility helpers for the IDX Screener terminal.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)

# ── concurrency ───────────────────────────────────────────────────────────────

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="idx_screener")


def run_in_thread(fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
    """
    Submit *fn* to a shared thread-pool executor.

    Returns a ``concurrent.futures.Future`` immediately.  Callers are
    responsible for polling it on later reruns.

    Example::

        future = run_in_thread(store.fetch_latest_snapshot)
        while not future.done():
            time.sleep(0.2)
            st.rerun()
        snapshot = future.result()
    """
    return _executor.submit(fn, *args, **kwargs)


# ── table selection ───────────────────────────────────────────────────────────


def pick_is_stale(pick: str | None, focused_code: str | None) -> bool:
    """A remembered table pick no longer matches the focused stock."""
    return pick is not None and pick != focused_code


# ── html helpers ──────────────────────────────────────────────────────────────


def css_span(text: str, css_class: str = "") -> str:
    """Wrap *text* in a span carrying one of the display tone classes."""
    if not css_class:
        return f"<span>{text}</span>"
    return f'<span class="{css_class}">{text}</span>'


__all__ = [
    "css_span",
    "pick_is_stale",
    "run_in_thread",
]
