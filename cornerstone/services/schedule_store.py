"""
Work item store
Loads the scheduling graph from the database and writes rescheduled dates back
"""
import logging
from datetime import datetime
from typing import Iterable, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cornerstone.error_handlers.exceptions import DatabaseException

from .schedule_types import DependencyEdge, DependencyType, ScheduledItem, ScheduleNode

logger = logging.getLogger(__name__)


class WorkItemStore:
    """
    Graph loader and date writer backed by SQLAlchemy

    Milestone dependencies are expanded on load: when a work item depends on
    a milestone, each work item contributing to that milestone becomes a
    finish-to-start predecessor of it.
    """

    def __init__(self, db_session: Session, models: dict):
        """
        Args:
            db_session: SQLAlchemy database session
            models: Dictionary of model classes from the model registry
        """
        self.db = db_session
        self.WorkItem = models['WorkItem']
        self.WorkItemDependency = models['WorkItemDependency']
        self.MilestoneWorkItem = models.get('MilestoneWorkItem')
        self.WorkItemMilestoneDep = models.get('WorkItemMilestoneDep')

    def load_graph(self) -> Tuple[List[ScheduleNode], List[DependencyEdge]]:
        """
        Returns:
            (nodes, edges) for every work item and dependency in the database
        """
        work_items = self.db.query(self.WorkItem).order_by(self.WorkItem.id).all()
        nodes = [wi.to_schedule_node() for wi in work_items]

        dependencies = self.db.query(self.WorkItemDependency).all()
        edges = [dep.to_edge() for dep in dependencies]

        synthetic = self._milestone_edges({(e.predecessor_id, e.successor_id) for e in edges})
        if synthetic:
            logger.debug(f"Expanded milestone dependencies into {len(synthetic)} edge(s)")

        return nodes, edges + synthetic

    def _milestone_edges(self, existing: set) -> List[DependencyEdge]:
        if self.MilestoneWorkItem is None or self.WorkItemMilestoneDep is None:
            return []

        contributors = {}
        for link in self.db.query(self.MilestoneWorkItem).all():
            contributors.setdefault(link.milestone_id, []).append(link.work_item_id)

        edges = []
        for dep in self.db.query(self.WorkItemMilestoneDep).all():
            for contributor_id in contributors.get(dep.milestone_id, []):
                pair = (contributor_id, dep.work_item_id)
                if contributor_id == dep.work_item_id or pair in existing:
                    continue
                existing.add(pair)
                edges.append(DependencyEdge(
                    predecessor_id=contributor_id,
                    successor_id=dep.work_item_id,
                    dependency_type=DependencyType.FINISH_TO_START,
                    lead_lag_days=0,
                ))
        return edges

    def write_dates(self, items: Iterable[ScheduledItem]) -> int:
        """
        Persist scheduled start/end dates in one transaction

        Returns:
            Number of rows updated

        Raises:
            DatabaseException: If the write fails; the session is rolled back
        """
        now = datetime.utcnow()
        updated = 0
        try:
            for item in items:
                work_item = self.db.get(self.WorkItem, item.work_item_id)
                if work_item is None:
                    continue
                work_item.start_date = item.scheduled_start_date
                work_item.end_date = item.scheduled_end_date
                work_item.updated_at = now
                updated += 1
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to write rescheduled dates: {e}")
            raise DatabaseException('Failed to persist rescheduled dates', details={'reason': str(e)})

        logger.info(f"Persisted rescheduled dates for {updated} work item(s)")
        return updated
