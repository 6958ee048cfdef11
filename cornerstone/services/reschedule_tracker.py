"""
Auto-Reschedule Tracker
Gates the full reschedule pass so it runs at most once per calendar day
"""
import threading
from datetime import date
from typing import Optional

from cornerstone.error_handlers.logging import reschedule_logger

from .scheduling_engine import SchedulingEngine


class RescheduleTracker:
    """
    Remembers the last day a full reschedule ran

    The check, the pass and the date update happen under one lock, so
    concurrent callers on the same day produce exactly one pass. A failed
    pass leaves ``last_run_date`` untouched and the next call retries.
    """

    def __init__(self, engine: Optional[SchedulingEngine] = None):
        self.engine = engine or SchedulingEngine()
        self.last_run_date: Optional[date] = None
        self._lock = threading.Lock()

    def ensure_daily_reschedule(self, store, today: date) -> Optional[int]:
        """
        Run the full reschedule if it has not run for ``today`` yet

        Args:
            store: Graph loader / date writer (see SchedulingEngine.auto_reschedule)
            today: Calendar date of the call

        Returns:
            Number of work items updated, or None when the pass already ran today

        Raises:
            Whatever the pipeline or the store raises; the tracker is not advanced
        """
        operation = f'daily reschedule {today.isoformat()}'
        with self._lock:
            if self.last_run_date == today:
                reschedule_logger.skipped(operation, 'already ran today')
                return None

            reschedule_logger.started(operation, f'last run: {self.last_run_date}')
            try:
                updated = self.engine.auto_reschedule(store, today)
            except Exception as e:
                reschedule_logger.failed(operation, e)
                raise

            self.last_run_date = today
            reschedule_logger.completed(operation, {'updated': updated})
            return updated

    def reset(self) -> None:
        """Forget the last run so the next check runs unconditionally"""
        with self._lock:
            self.last_run_date = None

    @property
    def has_run(self) -> bool:
        return self.last_run_date is not None


# Default process-wide tracker
reschedule_tracker = RescheduleTracker()


def get_reschedule_tracker() -> RescheduleTracker:
    """Tracker bound to the current app, or the process default outside one"""
    from flask import current_app, has_app_context
    if has_app_context():
        return current_app.extensions.get('reschedule_tracker', reschedule_tracker)
    return reschedule_tracker


def ensure_daily_reschedule(store, today: date, tracker: Optional[RescheduleTracker] = None) -> Optional[int]:
    return (tracker or get_reschedule_tracker()).ensure_daily_reschedule(store, today)


def reset_reschedule_tracker(tracker: Optional[RescheduleTracker] = None) -> None:
    (tracker or get_reschedule_tracker()).reset()
