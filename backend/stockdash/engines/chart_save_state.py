"""
Stockdash — Chart Save-State Tracker

Keeps the "unsaved changes" flag for a chart editor. Snapshots are compared
structurally (deep equality of plain data), so two states that differ only
in key order count as the same chart.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

import structlog
from pydantic import BaseModel

log = structlog.get_logger(__name__)


def _snapshot(state: Any) -> Any:
    """Detached plain-data copy of *state*."""
    if isinstance(state, BaseModel):
        return state.model_dump(mode="json")
    return copy.deepcopy(state)


class ChartSaveState:
    """Track whether the current chart differs from its saved copy.

    Until the chart is first saved, changes are measured against the first
    state ever observed. After ``mark_as_saved`` they are measured against
    the saved snapshot.
    """

    def __init__(self):
        self._initial: Optional[Any] = None
        self._has_initial = False
        self._last_saved: Optional[Any] = None
        self._has_saved = False
        self._entry_id: Optional[int | str] = None
        self._dirty = False

    # ── Read-only state ───────────────────────────────

    @property
    def has_unsaved_changes(self) -> bool:
        return self._dirty

    @property
    def last_saved_snapshot(self) -> Optional[Any]:
        return copy.deepcopy(self._last_saved) if self._has_saved else None

    @property
    def current_saved_entry_id(self) -> Optional[int | str]:
        return self._entry_id

    # ── Updates ───────────────────────────────────────

    def update_current_state(self, state: Any, has_saveable_content: bool = True) -> None:
        """Record the editor's current state and refresh the unsaved flag.

        Args:
            state: Chart state (plain data or a pydantic model).
            has_saveable_content: False while the chart is still empty; an
                unsaved, empty chart never counts as dirty.
        """
        current = _snapshot(state)

        if not self._has_initial:
            self._initial = current
            self._has_initial = True

        if self._has_saved:
            self._dirty = current != self._last_saved
        else:
            self._dirty = has_saveable_content and current != self._initial

    def mark_as_saved(self, entry_id: int | str, snapshot: Any) -> None:
        """Make *snapshot* the saved baseline for the persisted entry *entry_id*."""
        saved = _snapshot(snapshot)
        self._initial = saved
        self._has_initial = True
        self._last_saved = copy.deepcopy(saved)
        self._has_saved = True
        self._entry_id = entry_id
        self._dirty = False
        log.debug("chart_save_state.saved", entry_id=entry_id)

    def reset(self) -> None:
        """Forget all tracked state, e.g. when the user abandons edits."""
        self._initial = None
        self._has_initial = False
        self._last_saved = None
        self._has_saved = False
        self._entry_id = None
        self._dirty = False

    def check_for_changes(self, state: Any) -> bool:
        """Whether *state* differs from the baseline, without touching the flag."""
        current = _snapshot(state)
        if self._has_saved:
            return current != self._last_saved
        return current != self._initial
