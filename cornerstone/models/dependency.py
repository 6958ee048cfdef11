"""
Work item dependency model - typed, lagged predecessor/successor edges
"""


def create_dependency_model(db):
    """Factory function to create WorkItemDependency model with db instance"""

    class WorkItemDependency(db.Model):
        """
        successor depends on predecessor

        lead_lag_days is signed: negative overlaps the pair, positive delays it.
        """
        __tablename__ = 'work_item_dependencies'

        DEPENDENCY_TYPES = ('finish_to_start', 'start_to_start', 'finish_to_finish', 'start_to_finish')

        predecessor_id = db.Column(db.String(36), db.ForeignKey('work_items.id', ondelete='CASCADE'),
                                   primary_key=True)
        successor_id = db.Column(db.String(36), db.ForeignKey('work_items.id', ondelete='CASCADE'),
                                 primary_key=True)
        dependency_type = db.Column(db.String(20), nullable=False, default='finish_to_start')
        lead_lag_days = db.Column(db.Integer, nullable=False, default=0)

        __table_args__ = (
            db.CheckConstraint('predecessor_id != successor_id', name='ck_dependency_not_self'),
            db.CheckConstraint("dependency_type IN ('finish_to_start', 'start_to_start', "
                               "'finish_to_finish', 'start_to_finish')",
                               name='ck_dependency_type'),
            db.Index('idx_dependencies_successor', 'successor_id'),
        )

        predecessor = db.relationship('WorkItem', foreign_keys=[predecessor_id], lazy=True)
        successor = db.relationship('WorkItem', foreign_keys=[successor_id], lazy=True)

        def to_edge(self):
            from cornerstone.services.schedule_types import DependencyEdge
            return DependencyEdge(
                predecessor_id=self.predecessor_id,
                successor_id=self.successor_id,
                dependency_type=self.dependency_type,
                lead_lag_days=self.lead_lag_days or 0,
            )

        def __repr__(self):
            return f'<WorkItemDependency {self.predecessor_id} -> {self.successor_id} ({self.dependency_type})>'

    return WorkItemDependency
