"""
Schedule Response Assembler
Maps engine results onto the JSON shape returned to callers
"""
from typing import Any, Dict

from cornerstone.utils.dates import format_date

from .schedule_types import ScheduledItem, ScheduleResult, ScheduleWarning


def format_scheduled_item(item: ScheduledItem) -> Dict[str, Any]:
    return {
        'workItemId': item.work_item_id,
        'previousStartDate': format_date(item.previous_start_date),
        'previousEndDate': format_date(item.previous_end_date),
        'scheduledStartDate': format_date(item.scheduled_start_date),
        'scheduledEndDate': format_date(item.scheduled_end_date),
        'latestStartDate': format_date(item.latest_start_date),
        'latestFinishDate': format_date(item.latest_finish_date),
        'totalFloat': item.total_float,
        'isCritical': item.is_critical,
        'isLate': item.is_late,
    }


def format_warning(warning: ScheduleWarning) -> Dict[str, Any]:
    return {
        'workItemId': warning.work_item_id,
        'type': warning.type.value,
        'message': warning.message,
    }


def to_schedule_response(result: ScheduleResult) -> Dict[str, Any]:
    """
    Build the external response for a scheduling run.

    Returns:
        dict: {scheduledItems, criticalPath, warnings}
    """
    return {
        'scheduledItems': [format_scheduled_item(item) for item in result.scheduled_items],
        'criticalPath': list(result.critical_path),
        'warnings': [format_warning(w) for w in result.warnings],
    }
