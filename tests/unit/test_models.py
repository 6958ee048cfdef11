"""
Unit tests for database models.

Tests cover:
- WorkItem model and its scheduling snapshot
- WorkItemDependency model and constraints
- Milestone models
"""
import pytest
from sqlalchemy.exc import IntegrityError

from conftest import day
from cornerstone.services.schedule_types import DependencyType, WorkItemStatus


class TestWorkItemModel:
    """Tests for WorkItem model."""

    @pytest.mark.unit
    def test_create_work_item(self, work_item_factory):
        item = work_item_factory(title='Pour foundation', duration_days=4)

        assert item.id is not None
        assert item.status == 'not_started'
        assert item.created_at is not None

    @pytest.mark.unit
    def test_generated_id(self, db_session, models):
        WorkItem = models['WorkItem']
        item = WorkItem(title='No id given')
        db_session.add(item)
        db_session.commit()

        assert len(item.id) == 36

    @pytest.mark.unit
    def test_to_schedule_node(self, work_item_factory):
        item = work_item_factory(
            id='wi-1', status='completed', duration_days=2,
            start_date=day(-4), end_date=day(-2),
            actual_start_date=day(-4), actual_end_date=day(-1),
            start_before=day(3),
        )

        node = item.to_schedule_node()

        assert node.id == 'wi-1'
        assert node.status == WorkItemStatus.COMPLETED
        assert node.duration_days == 2
        assert node.actual_end_date == day(-1)
        assert node.start_before == day(3)
        assert node.start_after is None

    @pytest.mark.unit
    def test_negative_duration_rejected(self, db_session, models):
        db_session.add(models['WorkItem'](id='wi-neg', title='Bad', duration_days=-2))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    @pytest.mark.unit
    def test_unknown_status_rejected(self, db_session, models):
        db_session.add(models['WorkItem'](id='wi-bad', title='Bad', status='archived'))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()


class TestWorkItemDependencyModel:
    """Tests for WorkItemDependency model."""

    @pytest.mark.unit
    def test_to_edge(self, work_item_factory, dependency_factory):
        a = work_item_factory()
        b = work_item_factory()
        dependency = dependency_factory(a, b, dependency_type='finish_to_finish', lead_lag_days=3)

        edge = dependency.to_edge()

        assert (edge.predecessor_id, edge.successor_id) == (a.id, b.id)
        assert edge.dependency_type == DependencyType.FINISH_TO_FINISH
        assert edge.lead_lag_days == 3
        assert dependency.predecessor is a

    @pytest.mark.unit
    def test_self_dependency_rejected(self, db_session, models, work_item_factory):
        a = work_item_factory()
        db_session.add(models['WorkItemDependency'](predecessor_id=a.id, successor_id=a.id))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    @pytest.mark.unit
    def test_unknown_dependency_type_rejected(self, db_session, models, work_item_factory):
        a = work_item_factory()
        b = work_item_factory()
        db_session.add(models['WorkItemDependency'](
            predecessor_id=a.id, successor_id=b.id, dependency_type='start_to_middle'
        ))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    @pytest.mark.unit
    def test_deleting_work_item_removes_dependencies(self, db_session, models, work_item_factory,
                                                     dependency_factory):
        a = work_item_factory()
        b = work_item_factory()
        dependency_factory(a, b)

        db_session.delete(a)
        db_session.commit()

        assert db_session.query(models['WorkItemDependency']).count() == 0


class TestMilestoneModels:
    """Tests for milestone models."""

    @pytest.mark.unit
    def test_milestone_links(self, db_session, models, work_item_factory, milestone_factory):
        a = work_item_factory()
        b = work_item_factory()
        milestone = milestone_factory(title='Framing done', contributors=[a], dependents=[b])

        assert milestone.id is not None
        assert milestone.is_completed is False
        assert db_session.query(models['MilestoneWorkItem']).filter_by(milestone_id=milestone.id).count() == 1
        assert db_session.query(models['WorkItemMilestoneDep']).filter_by(work_item_id=b.id).count() == 1
