"""Focus/selection state machine over the current screen view.

States are ``NONE`` and ``FOCUSED(record, index)``. Every transition is a pure
function of (state, view), so repeated move events cannot push the index out of
``[0, len(view) - 1]``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from idx_screener.common.records import StockRecord
from idx_screener.engines.errors import SelectionMismatchError
from idx_screener.engines.pipeline import ScreenView

LOGGER = logging.getLogger("idx_screener.engines.selection")


@dataclass(frozen=True)
class Selection:
    record: StockRecord | None = None
    index: int = -1

    @property
    def is_none(self) -> bool:
        return self.record is None

    @property
    def code(self) -> str | None:
        return None if self.record is None else self.record.code

    def __repr__(self) -> str:
        if self.record is None:
            return "Selection(NONE)"
        return f"Selection(FOCUSED({self.record.code}, {self.index}))"


NONE = Selection()


def focused(view: ScreenView, index: int) -> Selection:
    return Selection(record=view[index], index=index)


def resolve(state: Selection, view: ScreenView) -> Selection:
    """Re-anchor ``state`` after the view was recomputed."""
    if view.is_empty:
        return NONE
    if state.record is None:
        return focused(view, 0)
    index = view.index_of(state.record.code)
    if index is None:
        return focused(view, 0)
    return focused(view, index)


def move(state: Selection, view: ScreenView, delta: int) -> Selection:
    if state.record is None or view.is_empty:
        return resolve(state, view)
    target = max(0, min(state.index + delta, len(view) - 1))
    if target == state.index and view[target].code == state.record.code:
        return state
    return focused(view, target)


def move_down(state: Selection, view: ScreenView) -> Selection:
    return move(state, view, 1)


def move_up(state: Selection, view: ScreenView) -> Selection:
    return move(state, view, -1)


def select(state: Selection, view: ScreenView, target: StockRecord | str, *, strict: bool = False) -> Selection:
    """Focus ``target`` (a record or a stock code).

    A target absent from the view is a caller error: it is logged and the state
    is returned unchanged, or ``SelectionMismatchError`` is raised when
    ``strict`` is set.
    """
    code = target.code if isinstance(target, StockRecord) else str(target)
    index = view.index_of(code)
    if index is None:
        if strict:
            raise SelectionMismatchError(
                f"Stock {code} is not in the current view",
                user_message=f"{code} is filtered out of the current view",
            )
        LOGGER.warning("Ignoring selection of %s: not in the current view", code)
        return state
    return focused(view, index)


class SelectionMachine:
    """Holds the current selection and applies transitions against a view."""

    def __init__(self) -> None:
        self.state: Selection = NONE
        self._view: ScreenView = ScreenView()

    @property
    def view(self) -> ScreenView:
        return self._view

    @property
    def record(self) -> StockRecord | None:
        return self.state.record

    @property
    def index(self) -> int:
        return self.state.index

    def on_view_changed(self, view: ScreenView) -> Selection:
        self._view = view
        self.state = resolve(self.state, view)
        return self.state

    def move_down(self) -> Selection:
        self.state = move_down(self.state, self._view)
        return self.state

    def move_up(self) -> Selection:
        self.state = move_up(self.state, self._view)
        return self.state

    def select(self, target: StockRecord | str, *, strict: bool = False) -> bool:
        """Return ``True`` when the target was focused, ``False`` when rejected."""
        code = target.code if isinstance(target, StockRecord) else str(target)
        self.state = select(self.state, self._view, code, strict=strict)
        return code in self._view

    def confirm(self) -> StockRecord | None:
        return self.state.record

    def reset(self) -> None:
        self.state = NONE
        self._view = ScreenView()
