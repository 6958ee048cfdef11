"""
Constraint Validator Service
Validates the scheduling graph before and during a CPM run
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from cornerstone.error_handlers.exceptions import (
    ValidationException,
    CircularDependencyException
)
from cornerstone.utils.dates import format_date

from .schedule_graph import ScheduleGraph
from .schedule_types import (
    DependencyEdge,
    ScheduleNode,
    ScheduleWarning,
    WarningType,
    WorkItemStatus,
    DEFAULT_DURATION_DAYS
)

logger = logging.getLogger(__name__)


class ConstraintValidator:
    """
    Validates scheduling input and collects non-fatal warnings

    Handles:
    - Node invariants (unique ids, non-negative durations, ordered actual dates)
    - Cycle detection (fatal for the whole graph)
    - start_before / no_duration / already_completed warnings
    """

    def __init__(self):
        self.warnings: List[ScheduleWarning] = []

    def validate_nodes(self, nodes: Iterable[ScheduleNode]) -> None:
        """
        Check per-node invariants

        Raises:
            ValidationException: On the first node that breaks an invariant
        """
        seen = set()
        for node in nodes:
            if node.id in seen:
                raise ValidationException(
                    f'Duplicate work item id {node.id}',
                    details={'workItemId': node.id}
                )
            seen.add(node.id)

            if node.duration_days is not None and node.duration_days < 0:
                raise ValidationException(
                    f'Work item {node.id} has a negative duration ({node.duration_days} days)',
                    details={'workItemId': node.id, 'field': 'durationDays'}
                )

            if (node.actual_start_date and node.actual_end_date
                    and node.actual_end_date < node.actual_start_date):
                raise ValidationException(
                    f'Work item {node.id} has an actual end date before its actual start date',
                    details={'workItemId': node.id, 'field': 'actualEndDate'}
                )

    def check_acyclic(self, graph: ScheduleGraph) -> List[int]:
        """
        Topologically sort the graph or fail

        Returns:
            Node indices in topological order

        Raises:
            CircularDependencyException: If the graph contains a cycle
        """
        order, blocked = graph.topological_order()
        if blocked:
            cycle_nodes = [graph.node_id(i) for i in blocked]
            cycle_path = graph.find_cycle(blocked)
            logger.warning(f"Cycle detected among {len(cycle_nodes)} work item(s): {' -> '.join(cycle_path)}")
            raise CircularDependencyException(cycle_nodes, cycle_path)
        return order

    @staticmethod
    def find_cycle_for_new_edge(edges: Iterable[DependencyEdge], predecessor_id: str,
                                successor_id: str) -> Optional[List[str]]:
        """
        Check whether adding ``predecessor_id -> successor_id`` would close a cycle

        Walks the predecessors of ``predecessor_id``; reaching ``successor_id``
        means the new edge closes a loop.

        Returns:
            The cycle path starting at ``predecessor_id`` and ending at
            ``successor_id``, or None when the edge is safe
        """
        if predecessor_id == successor_id:
            return [predecessor_id, successor_id]

        predecessors_of = {}
        for edge in edges:
            predecessors_of.setdefault(edge.successor_id, []).append(edge.predecessor_id)

        visited = set()
        path = [predecessor_id]

        def dfs(current):
            if current == successor_id:
                return True
            if current in visited:
                return False
            visited.add(current)
            for pred_id in predecessors_of.get(current, []):
                path.append(pred_id)
                if dfs(pred_id):
                    return True
                path.pop()
            return False

        if dfs(predecessor_id):
            return path
        return None

    # ------------------------------------------------------------------
    # Warnings
    # ------------------------------------------------------------------

    def check_duration(self, node: ScheduleNode) -> None:
        if not node.has_duration:
            self._warn(
                node.id, WarningType.NO_DURATION,
                f'Work item has no duration set; scheduled as {DEFAULT_DURATION_DAYS}-day duration'
            )

    def check_start_before(self, node: ScheduleNode, scheduled_start: date) -> None:
        if node.start_before and scheduled_start > node.start_before:
            self._warn(
                node.id, WarningType.START_BEFORE_VIOLATED,
                f'Scheduled start date ({format_date(scheduled_start)}) exceeds '
                f'start-before constraint ({format_date(node.start_before)})'
            )

    def check_completed(self, node: ScheduleNode, scheduled_start: date, scheduled_end: date) -> None:
        """Flag completed items whose scheduled dates differ from the persisted ones"""
        if node.status != WorkItemStatus.COMPLETED:
            return
        start_would_change = node.start_date is not None and scheduled_start != node.start_date
        end_would_change = node.end_date is not None and scheduled_end != node.end_date
        if start_would_change or end_would_change:
            self._warn(
                node.id, WarningType.ALREADY_COMPLETED,
                'Work item is already completed; dates cannot be changed by the scheduler'
            )

    def _warn(self, work_item_id: str, warning_type: WarningType, message: str) -> None:
        warning = ScheduleWarning(work_item_id=work_item_id, type=warning_type, message=message)
        logger.debug(str(warning))
        self.warnings.append(warning)
