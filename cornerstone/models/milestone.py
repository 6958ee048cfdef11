"""
Milestone models
Milestones group contributing work items; other work items can depend on a
milestone as a whole.
"""
from datetime import datetime


def create_milestone_models(db):
    """
    Factory function to create milestone models

    Returns:
        tuple: (Milestone, MilestoneWorkItem, WorkItemMilestoneDep)
    """

    class Milestone(db.Model):
        __tablename__ = 'milestones'

        id = db.Column(db.Integer, primary_key=True, autoincrement=True)
        title = db.Column(db.String(200), nullable=False)
        target_date = db.Column(db.Date, nullable=False)
        is_completed = db.Column(db.Boolean, nullable=False, default=False)
        created_at = db.Column(db.DateTime, default=datetime.utcnow)

        def __repr__(self):
            return f'<Milestone {self.id}: {self.title}>'

    class MilestoneWorkItem(db.Model):
        """Work item contributing to a milestone"""
        __tablename__ = 'milestone_work_items'

        milestone_id = db.Column(db.Integer, db.ForeignKey('milestones.id', ondelete='CASCADE'),
                                 primary_key=True)
        work_item_id = db.Column(db.String(36), db.ForeignKey('work_items.id', ondelete='CASCADE'),
                                 primary_key=True)

    class WorkItemMilestoneDep(db.Model):
        """Work item that cannot start until a milestone's contributors finish"""
        __tablename__ = 'work_item_milestone_deps'

        work_item_id = db.Column(db.String(36), db.ForeignKey('work_items.id', ondelete='CASCADE'),
                                 primary_key=True)
        milestone_id = db.Column(db.Integer, db.ForeignKey('milestones.id', ondelete='CASCADE'),
                                 primary_key=True)

    return Milestone, MilestoneWorkItem, WorkItemMilestoneDep
