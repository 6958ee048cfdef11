"""
Services package for the scheduling engine and its background tasks
"""

from .schedule_types import (
    WorkItemStatus,
    DependencyType,
    WarningType,
    ScheduleMode,
    ScheduleNode,
    DependencyEdge,
    ScheduleWarning,
    ScheduledItem,
    ScheduleRequest,
    ScheduleResult,
    DEFAULT_DURATION_DAYS
)

from .schedule_graph import ScheduleGraph
from .constraint_validator import ConstraintValidator
from .calendar_resolver import CalendarResolver
from .cpm_solver import CPMSolver
from .scheduling_engine import SchedulingEngine, schedule
from .schedule_response import to_schedule_response
from .schedule_store import WorkItemStore
from .reschedule_tracker import (
    RescheduleTracker,
    reschedule_tracker,
    get_reschedule_tracker,
    ensure_daily_reschedule,
    reset_reschedule_tracker
)

__all__ = [
    # Types
    'WorkItemStatus',
    'DependencyType',
    'WarningType',
    'ScheduleMode',
    'ScheduleNode',
    'DependencyEdge',
    'ScheduleWarning',
    'ScheduledItem',
    'ScheduleRequest',
    'ScheduleResult',
    'DEFAULT_DURATION_DAYS',
    # Services
    'ScheduleGraph',
    'ConstraintValidator',
    'CalendarResolver',
    'CPMSolver',
    'SchedulingEngine',
    'schedule',
    'to_schedule_response',
    'WorkItemStore',
    'RescheduleTracker',
    'reschedule_tracker',
    'get_reschedule_tracker',
    'ensure_daily_reschedule',
    'reset_reschedule_tracker',
]
