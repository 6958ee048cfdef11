"""
Calendar Clamp & Override Resolver
Reconciles raw CPM dates with what has actually happened and with today's date
"""
from datetime import date

from cornerstone.utils.dates import add_days, diff_days

from .schedule_types import Resolution, ScheduleNode, WorkItemStatus


class CalendarResolver:
    """
    Applies the real-world date rules to one node's raw ES/EF

    Rules, in priority order:
    1. Completed items with both actual dates keep those dates.
    2. Not-started items whose start is in the past start today instead;
       the end moves by the same number of days.
    3. In-progress items whose end is in the past end today instead.

    Rules 2 and 3 only ever move dates later and mark the item as late.
    """

    ACTUAL_DATES = 'actual_dates'
    NOT_STARTED_FLOOR = 'not_started_floor'
    IN_PROGRESS_FLOOR = 'in_progress_floor'

    def __init__(self, today: date):
        self.today = today

    def resolve(self, node: ScheduleNode, raw_start: date, raw_end: date) -> Resolution:
        if (node.status == WorkItemStatus.COMPLETED
                and node.actual_start_date and node.actual_end_date):
            return Resolution(node.actual_start_date, node.actual_end_date,
                              is_late=False, rule=self.ACTUAL_DATES)

        if node.status == WorkItemStatus.NOT_STARTED and raw_start < self.today:
            shift = diff_days(raw_start, self.today)
            return Resolution(self.today, add_days(raw_end, shift),
                              is_late=True, rule=self.NOT_STARTED_FLOOR)

        if node.status == WorkItemStatus.IN_PROGRESS and raw_end < self.today:
            return Resolution(raw_start, self.today,
                              is_late=True, rule=self.IN_PROGRESS_FLOOR)

        return Resolution(raw_start, raw_end)
