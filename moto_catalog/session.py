from __future__ import annotations

"""Browser session: the single owner of all per-user interaction state."""

import asyncio
import logging
import uuid
from typing import Dict, Iterable, List, Optional, Sequence

from .advisory import DEFAULT_TIMEOUT, AdvisorySession, RecommendationService
from .catalog_loader import index_by_id, labelled_specs
from .filter_engine import FilterCriteria, parse_category
from .models import Record, SessionSnapshot, View
from .selection_set import SelectionSet
from .view_state import ViewStateMachine

logger = logging.getLogger("motocat.session")


class BrowserSession:
    """Filter criteria, comparison selection, view state and advisory chat for one user."""

    def __init__(
        self,
        catalog: Sequence[Record],
        service: RecommendationService,
        session_id: Optional[str] = None,
        advisor_timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._catalog = tuple(catalog)
        self._by_id: Dict[str, Record] = index_by_id(list(self._catalog))
        self.criteria = FilterCriteria()
        self.selection = SelectionSet()
        self.views = ViewStateMachine()
        self.advisory = AdvisorySession(service, timeout=advisor_timeout, session_id=self.session_id)

    @property
    def catalog(self) -> Sequence[Record]:
        return self._catalog

    # Intents

    def set_search(self, text: str) -> None:
        self.criteria.search = text

    def set_category(self, category: str) -> None:
        """Raises ValueError for a selector outside the category enumeration."""
        self.criteria.category = parse_category(category)

    def open_record(self, record_id: str) -> Record:
        """Focus a record in the detail view; raises KeyError for an unknown id."""
        record = self._by_id[record_id]
        self.views.select(record)
        logger.info("session=%s view=detail record=%s", self.session_id, record_id)
        return record

    def back(self) -> None:
        self.views.back()

    def navigate(self, target: View) -> None:
        self.views.navigate(target)
        logger.info("session=%s view=%s", self.session_id, self.views.view.value)

    def open_compare(self) -> bool:
        return self.views.open_compare(self.selection)

    def toggle_compare(self, record_id: str) -> bool:
        changed = self.selection.toggle(record_id)
        logger.info(
            "session=%s compare=%s changed=%s",
            self.session_id,
            ",".join(self.selection.ids),
            changed,
        )
        return changed

    def replace_compare(self, ids: Iterable[str]) -> None:
        self.selection.replace(ids)

    def set_chat_input(self, text: str) -> None:
        self.advisory.set_input(text)

    def submit_chat(self, text: Optional[str] = None) -> Optional[asyncio.Task]:
        return self.advisory.submit(text)

    # Derived views

    @property
    def visible_records(self) -> List[Record]:
        return self.criteria.apply(self._catalog)

    @property
    def focused_record(self) -> Optional[Record]:
        return self.views.focus

    @property
    def compare_records(self) -> List[Record]:
        return self.selection.resolve(self._by_id)

    @property
    def show_compare_badge(self) -> bool:
        return self.views.show_compare_badge(self.selection)

    def snapshot(self) -> SessionSnapshot:
        """Purpose: Collect the derived state the renderer draws from.
        Inputs/Outputs: No inputs; returns a SessionSnapshot.
        Side Effects / State: None; recomputes the filtered list each call.
        """
        visible = self.visible_records
        focus = self.focused_record
        return SessionSnapshot(
            session_id=self.session_id,
            view=self.views.view,
            search=self.criteria.search,
            category=self.criteria.category,
            visible_records=visible,
            no_match=not visible,
            focused_record=focus,
            detail_specs=labelled_specs(focus) if focus else [],
            compare_ids=list(self.selection.ids),
            compare_records=self.compare_records,
            show_compare_badge=self.show_compare_badge,
            chat_input=self.advisory.input,
            transcript=list(self.advisory.transcript),
            pending=self.advisory.pending,
        )
