"""
Scheduling Engine - CPM scheduling pipeline
Orchestrates validation, the CPM passes and the calendar rules
"""
import logging
from datetime import date
from typing import Optional

from cornerstone.error_handlers.exceptions import (
    MissingAnchorException,
    AnchorNotFoundException
)

from .calendar_resolver import CalendarResolver
from .constraint_validator import ConstraintValidator
from .cpm_solver import CPMSolver
from .schedule_graph import ScheduleGraph
from .schedule_types import ScheduleMode, ScheduleRequest, ScheduleResult

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    CPM scheduling orchestrator

    Process:
    1. Validate node invariants
    2. Build the dependency graph (restricted to the anchor's downstream set
       in cascade mode)
    3. Topologically sort it, failing on any cycle
    4. Forward pass with calendar rules, then backward pass
    5. Return scheduled items, critical path and warnings

    ``schedule`` is a pure function of its request. ``auto_reschedule`` runs
    the same pipeline over a store and writes changed dates back.
    """

    def schedule(self, request: ScheduleRequest) -> ScheduleResult:
        """
        Run the scheduler over one snapshot

        Args:
            request: Nodes, edges, today's date and the run mode

        Returns:
            ScheduleResult

        Raises:
            ValidationException: If a node breaks an invariant
            MissingAnchorException: If cascade mode has no anchor
            AnchorNotFoundException: If the anchor is not among the nodes
            CircularDependencyException: If the scheduled graph has a cycle
        """
        validator = ConstraintValidator()
        validator.validate_nodes(request.nodes)

        graph = ScheduleGraph(request.nodes, request.edges)

        if request.mode == ScheduleMode.CASCADE:
            anchor_id = request.anchor_work_item_id
            if not anchor_id:
                raise MissingAnchorException()
            if anchor_id not in graph.index:
                raise AnchorNotFoundException(anchor_id)
            graph = graph.subgraph(graph.downstream_ids(anchor_id))

        if len(graph) == 0:
            return ScheduleResult()

        order = validator.check_acyclic(graph)

        solver = CPMSolver(graph, request.today, CalendarResolver(request.today), validator)
        result = solver.solve(order)

        logger.info(
            f"Scheduled {len(result.scheduled_items)} work item(s) "
            f"({request.mode.value}, today={request.today.isoformat()}): "
            f"{len(result.critical_path)} critical, {len(result.warnings)} warning(s)"
        )
        return result

    def auto_reschedule(self, store, today: date) -> int:
        """
        Recompute the whole project and persist changed dates

        Args:
            store: Object with ``load_graph()`` returning (nodes, edges) and
                ``write_dates(items)`` persisting scheduled start/end dates
            today: Calendar date the run is for

        Returns:
            Number of work items whose dates were written
        """
        nodes, edges = store.load_graph()
        if not nodes:
            return 0

        result = self.schedule(ScheduleRequest(
            nodes=nodes,
            edges=edges,
            today=today,
            mode=ScheduleMode.FULL,
        ))

        changed = result.changed_items
        if changed:
            store.write_dates(changed)
        return len(changed)


def schedule(request: ScheduleRequest, engine: Optional[SchedulingEngine] = None) -> ScheduleResult:
    """Convenience wrapper around SchedulingEngine.schedule"""
    return (engine or SchedulingEngine()).schedule(request)
