"""
Critical Path Method solver

Forward pass computes earliest start/finish, backward pass computes latest
start/finish, and total float = LS - ES. All arithmetic is in whole calendar
days.

Dependency rules (lag is signed; negative means overlap):

    finish_to_start   succ.ES >= pred.EF + lag
    start_to_start    succ.ES >= pred.ES + lag
    finish_to_finish  succ.EF >= pred.EF + lag
    start_to_finish   succ.EF >= pred.ES + lag

The backward pass mirrors them, and no latest finish exceeds the project end:

    finish_to_start   pred.LF <= succ.LS - lag
    start_to_start    pred.LS <= succ.LS - lag
    finish_to_finish  pred.LF <= succ.LF - lag
    start_to_finish   pred.LS <= succ.LF - lag
"""
import logging
from datetime import date
from typing import List, Optional

from cornerstone.utils.dates import add_days, diff_days

from .calendar_resolver import CalendarResolver
from .constraint_validator import ConstraintValidator
from .schedule_graph import ScheduleGraph
from .schedule_types import (
    DependencyEdge,
    DependencyType,
    ScheduledItem,
    ScheduleResult
)

logger = logging.getLogger(__name__)


def forward_constraint(edge: DependencyEdge, pred_start: date, pred_end: date,
                       succ_duration: int) -> date:
    """Earliest start a dependency allows for its successor"""
    lag = edge.lead_lag_days
    if edge.dependency_type == DependencyType.FINISH_TO_START:
        return add_days(pred_end, lag)
    if edge.dependency_type == DependencyType.START_TO_START:
        return add_days(pred_start, lag)
    if edge.dependency_type == DependencyType.FINISH_TO_FINISH:
        return add_days(pred_end, lag - succ_duration)
    # start_to_finish
    return add_days(pred_start, lag - succ_duration)


def backward_constraint(edge: DependencyEdge, succ_latest_start: date, succ_latest_finish: date,
                        pred_duration: int) -> date:
    """Latest finish a dependency allows for its predecessor"""
    lag = edge.lead_lag_days
    if edge.dependency_type == DependencyType.FINISH_TO_START:
        return add_days(succ_latest_start, -lag)
    if edge.dependency_type == DependencyType.START_TO_START:
        return add_days(succ_latest_start, pred_duration - lag)
    if edge.dependency_type == DependencyType.FINISH_TO_FINISH:
        return add_days(succ_latest_finish, -lag)
    # start_to_finish
    return add_days(succ_latest_finish, pred_duration - lag)


class CPMSolver:
    """
    Runs both CPM passes over an acyclic ScheduleGraph

    The calendar resolver is applied to each node as soon as its raw dates
    are known, so successors are scheduled from the dates their
    predecessors will actually carry.
    """

    def __init__(self, graph: ScheduleGraph, today: date,
                 resolver: Optional[CalendarResolver] = None,
                 validator: Optional[ConstraintValidator] = None):
        self.graph = graph
        self.today = today
        self.resolver = resolver or CalendarResolver(today)
        self.validator = validator or ConstraintValidator()

        size = len(graph)
        self.es: List[Optional[date]] = [None] * size
        self.ef: List[Optional[date]] = [None] * size
        self.ls: List[Optional[date]] = [None] * size
        self.lf: List[Optional[date]] = [None] * size
        self.late = [False] * size

    def solve(self, order: List[int]) -> ScheduleResult:
        """
        Args:
            order: Node indices in topological order

        Returns:
            ScheduleResult with one item per node, in ``order``
        """
        if not order:
            return ScheduleResult(warnings=self.validator.warnings)

        self.forward_pass(order)
        project_end = self.backward_pass(order)

        result = ScheduleResult(warnings=self.validator.warnings)
        for i in order:
            node = self.graph.nodes[i]
            total_float = max(0, diff_days(self.es[i], self.ls[i]))
            is_critical = total_float == 0
            if is_critical:
                result.critical_path.append(node.id)
            result.scheduled_items.append(ScheduledItem(
                work_item_id=node.id,
                previous_start_date=node.start_date,
                previous_end_date=node.end_date,
                scheduled_start_date=self.es[i],
                scheduled_end_date=self.ef[i],
                latest_start_date=self.ls[i],
                latest_finish_date=self.lf[i],
                total_float=total_float,
                is_critical=is_critical,
                is_late=self.late[i],
            ))

        logger.debug(
            f"CPM solved {len(order)} node(s); project end {project_end}, "
            f"{len(result.critical_path)} critical"
        )
        return result

    def forward_pass(self, order: List[int]) -> None:
        for i in order:
            node = self.graph.nodes[i]
            duration = node.effective_duration
            self.validator.check_duration(node)

            constraints = [
                forward_constraint(edge, self.es[p], self.ef[p], duration)
                for edge, p in self.graph.predecessors[i]
            ]
            for edge, outside in self.graph.external_predecessors[i]:
                if outside.start_date and outside.end_date:
                    constraints.append(forward_constraint(edge, outside.start_date, outside.end_date, duration))

            raw_start = max(constraints) if constraints else self.today
            if node.start_after and node.start_after > raw_start:
                raw_start = node.start_after
            raw_end = add_days(raw_start, duration)

            resolution = self.resolver.resolve(node, raw_start, raw_end)
            self.validator.check_completed(node, resolution.start, resolution.end)
            self.es[i] = resolution.start
            self.ef[i] = resolution.end
            self.late[i] = resolution.is_late

            if resolution.rule != CalendarResolver.ACTUAL_DATES:
                self.validator.check_start_before(node, resolution.start)

    def backward_pass(self, order: List[int]) -> date:
        """Fill LS/LF; returns the project end date"""
        project_end = max(self.ef[i] for i in order)

        for i in reversed(order):
            span = diff_days(self.es[i], self.ef[i])
            successors = self.graph.successors[i]
            # Nothing may finish after the project does, even when its only
            # successors are start-linked
            latest_finish = project_end
            for edge, s in successors:
                latest_finish = min(latest_finish, backward_constraint(edge, self.ls[s], self.lf[s], span))
            self.lf[i] = latest_finish
            self.ls[i] = add_days(latest_finish, -span)

        return project_end
