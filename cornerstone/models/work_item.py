"""
Work item model
Represents a unit of project work that the scheduler places on the calendar
"""
from datetime import datetime
import uuid


def create_work_item_model(db):
    """Factory function to create WorkItem model with db instance"""

    class WorkItem(db.Model):
        """
        Work item with the scheduling-relevant fields

        start_date/end_date hold the currently scheduled dates and are the
        only columns the auto-reschedule pass writes.
        """
        __tablename__ = 'work_items'

        STATUSES = ('not_started', 'in_progress', 'completed', 'blocked')

        id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
        title = db.Column(db.String(200), nullable=False)
        status = db.Column(db.String(20), nullable=False, default='not_started')
        start_date = db.Column(db.Date, nullable=True)
        end_date = db.Column(db.Date, nullable=True)
        duration_days = db.Column(db.Integer, nullable=True)
        start_after = db.Column(db.Date, nullable=True)
        start_before = db.Column(db.Date, nullable=True)
        actual_start_date = db.Column(db.Date, nullable=True)
        actual_end_date = db.Column(db.Date, nullable=True)
        created_at = db.Column(db.DateTime, default=datetime.utcnow)
        updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

        __table_args__ = (
            db.CheckConstraint("status IN ('not_started', 'in_progress', 'completed', 'blocked')",
                               name='ck_work_items_status'),
            db.CheckConstraint('duration_days IS NULL OR duration_days >= 0',
                               name='ck_work_items_duration'),
            db.Index('idx_work_items_status', 'status'),
        )

        def to_schedule_node(self):
            """Snapshot of this row for the scheduling engine"""
            from cornerstone.services.schedule_types import ScheduleNode
            return ScheduleNode(
                id=self.id,
                status=self.status,
                duration_days=self.duration_days,
                start_date=self.start_date,
                end_date=self.end_date,
                actual_start_date=self.actual_start_date,
                actual_end_date=self.actual_end_date,
                start_after=self.start_after,
                start_before=self.start_before,
            )

        def __repr__(self):
            return f'<WorkItem {self.id}: {self.title} ({self.status})>'

    return WorkItem
