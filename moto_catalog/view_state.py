from __future__ import annotations

import logging
from typing import Optional, Sized

from .models import Record, View

logger = logging.getLogger("motocat.view")


class ViewStateMachine:
    """Tracks the active screen and the record focused by the detail view.

    Every transition sets view and focus together, so the focus is set exactly
    when the view is DETAIL.
    """

    def __init__(self) -> None:
        self._view = View.LIST
        self._focus: Optional[Record] = None

    @property
    def view(self) -> View:
        return self._view

    @property
    def focus(self) -> Optional[Record]:
        return self._focus

    def select(self, record: Record) -> None:
        """Open the detail view for a record."""
        self._set(View.DETAIL, record)

    def back(self) -> None:
        """Leave the detail view for the list; ignored on other screens."""
        if self._view is View.DETAIL:
            self._set(View.LIST, None)

    def navigate(self, target: View) -> None:
        """Purpose: Switch to a top-level screen from any state.
        Inputs/Outputs: Input is the target View; no return value.
        Side Effects / State: Always clears the focus.
        Failure Modes: Raises ValueError for DETAIL, which needs a record and
            goes through select().
        """
        target = View(target)
        if target is View.DETAIL:
            raise ValueError("detail view requires a record; use select()")
        self._set(target, None)

    def show_compare_badge(self, selection: Sized) -> bool:
        """Derived: the floating compare entry point is shown while something is
        selected and the compare screen is not already open."""
        return len(selection) > 0 and self._view is not View.COMPARE

    def open_compare(self, selection: Sized) -> bool:
        """Activate the floating compare indicator; returns True if the view changed."""
        if not self.show_compare_badge(selection):
            return False
        self._set(View.COMPARE, None)
        return True

    def _set(self, view: View, focus: Optional[Record]) -> None:
        logger.debug(
            "view %s -> %s focus=%s",
            self._view.value,
            view.value,
            focus.id if focus else None,
        )
        self._view = view
        self._focus = focus
