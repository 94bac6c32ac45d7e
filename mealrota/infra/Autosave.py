"""Debounced autosave on top of StateRepository.

Every ``schedule(state)`` cancels the pending timer and arms a new one, so a
burst of edits produces one write once the quiescence window has passed.
``save_now(state)`` writes immediately and then drops the pending timer so it
cannot write an older snapshot afterwards. A save already in flight is never
cancelled.
"""
import logging
import time
from threading import Lock, Timer
from typing import Optional

from mealrota.domain.PlanningState import PlanningState
from mealrota.events.Event_Bus import GLOBAL_EVENT_BUS, STATE_SAVED, EventBus
from mealrota.infra.State_Repository import StateRepository
from mealrota.utilities.config import AUTOSAVE_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)


class Autosave:
    def __init__(self, repository: StateRepository, delay: float = AUTOSAVE_DEBOUNCE_SECONDS,
                 bus: EventBus = GLOBAL_EVENT_BUS):
        self.repository = repository
        self.delay = delay
        self.bus = bus
        self._lock = Lock()
        self._timer: Optional[Timer] = None
        self._pending: Optional[PlanningState] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def schedule(self, state: PlanningState) -> None:
        """(Re)arm the delayed save with the latest snapshot."""
        snapshot = state.copy()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = Timer(self.delay, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
            self._pending = snapshot
            timer.start()

    def save_now(self, state: PlanningState) -> bool:
        ok = self._save(state)
        self.cancel()
        return ok

    def flush(self) -> Optional[bool]:
        """Run the pending save right away; None when nothing was pending."""
        with self._lock:
            if self._timer is None:
                return None
            self._timer.cancel()
            snapshot = self._pending
            self._timer = None
            self._pending = None
        return self._save(snapshot)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return  # superseded or cancelled after this timer had already fired
            snapshot = self._pending
            self._timer = None
            self._pending = None
        if snapshot is not None:
            self._save(snapshot)

    def _save(self, state: PlanningState) -> bool:
        ok = self.repository.save(state)
        if ok:
            logger.debug("Planning state saved")
        else:
            logger.error("Planning state could not be saved")
        self.bus.publish(STATE_SAVED, {"ok": ok, "at": time.time()})
        return ok
