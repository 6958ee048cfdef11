"""
Scheduling types and data classes for the CPM scheduling engine
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional
from enum import Enum

from cornerstone.error_handlers.exceptions import ValidationException


# Duration used for work items with no duration estimate
DEFAULT_DURATION_DAYS = 0


class WorkItemStatus(str, Enum):
    """Lifecycle states of a work item"""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class DependencyType(str, Enum):
    """How a predecessor's dates constrain its successor"""
    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"


class WarningType(str, Enum):
    """Non-fatal conditions reported alongside a schedule"""
    START_BEFORE_VIOLATED = "start_before_violated"
    NO_DURATION = "no_duration"
    ALREADY_COMPLETED = "already_completed"


class ScheduleMode(str, Enum):
    """Scope of a scheduling run"""
    FULL = "full"
    CASCADE = "cascade"


@dataclass
class ScheduleNode:
    """A work item as seen by the scheduler"""
    id: str
    status: WorkItemStatus = WorkItemStatus.NOT_STARTED
    duration_days: Optional[int] = None
    start_date: Optional[date] = None  # currently persisted start
    end_date: Optional[date] = None  # currently persisted end
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    start_after: Optional[date] = None
    start_before: Optional[date] = None

    def __post_init__(self):
        self.status = WorkItemStatus(self.status)

    @property
    def has_duration(self) -> bool:
        return self.duration_days is not None

    @property
    def effective_duration(self) -> int:
        """Duration in days, falling back to DEFAULT_DURATION_DAYS when unset"""
        return self.duration_days if self.duration_days is not None else DEFAULT_DURATION_DAYS


@dataclass(frozen=True)
class DependencyEdge:
    """Directed edge predecessor -> successor"""
    predecessor_id: str
    successor_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lead_lag_days: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'dependency_type', DependencyType(self.dependency_type))


@dataclass
class ScheduleWarning:
    """A non-fatal warning produced during scheduling"""
    work_item_id: str
    type: WarningType
    message: str

    def __str__(self):
        return f"[{self.type.value}] {self.work_item_id}: {self.message}"


@dataclass
class Resolution:
    """Dates a node ends up with after the calendar rules are applied"""
    start: date
    end: date
    is_late: bool = False
    rule: Optional[str] = None  # 'actual_dates', 'not_started_floor', 'in_progress_floor'


@dataclass
class ScheduledItem:
    """A single work item as computed by the scheduler"""
    work_item_id: str
    previous_start_date: Optional[date]
    previous_end_date: Optional[date]
    scheduled_start_date: date  # ES
    scheduled_end_date: date  # EF
    latest_start_date: date  # LS
    latest_finish_date: date  # LF
    total_float: int
    is_critical: bool
    is_late: bool = False

    @property
    def dates_changed(self) -> bool:
        return (self.scheduled_start_date != self.previous_start_date
                or self.scheduled_end_date != self.previous_end_date)


@dataclass
class ScheduleRequest:
    """Input to a scheduling run"""
    nodes: List[ScheduleNode]
    edges: List[DependencyEdge]
    today: date
    mode: ScheduleMode = ScheduleMode.FULL
    anchor_work_item_id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.today, datetime):
            self.today = self.today.date()
        if not isinstance(self.today, date):
            raise ValidationException(
                f'today must be a calendar date, got {type(self.today).__name__}',
                details={'field': 'today'}
            )
        self.mode = ScheduleMode(self.mode)


@dataclass
class ScheduleResult:
    """Output of a scheduling run"""
    scheduled_items: List[ScheduledItem] = field(default_factory=list)
    critical_path: List[str] = field(default_factory=list)
    warnings: List[ScheduleWarning] = field(default_factory=list)

    def get_item(self, work_item_id: str) -> Optional[ScheduledItem]:
        for item in self.scheduled_items:
            if item.work_item_id == work_item_id:
                return item
        return None

    @property
    def changed_items(self) -> List[ScheduledItem]:
        return [item for item in self.scheduled_items if item.dates_changed]
