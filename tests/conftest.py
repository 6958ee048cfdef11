"""
Pytest configuration and fixtures for the Cornerstone scheduler tests.

This module provides shared fixtures for:
- Flask application with test configuration
- Database setup and teardown
- Model factories for creating test data
- Plain scheduling node/edge builders for engine-level tests
"""
import pytest
from datetime import date, timedelta

from cornerstone import create_app
from cornerstone.extensions import db as _db
from cornerstone.services.schedule_types import DependencyEdge, ScheduleNode


# Fixed calendar day so date arithmetic in assertions is stable
TODAY = date(2026, 3, 2)


def day(offset):
    """TODAY shifted by ``offset`` days"""
    return TODAY + timedelta(days=offset)


@pytest.fixture(scope='session')
def app():
    """
    Create application for the tests.

    Uses TestingConfig with in-memory SQLite database.
    Scope is 'session' to reuse the same app across all tests.
    """
    app = create_app('testing')
    app.config.update({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'RATELIMIT_ENABLED': False,  # Disable rate limiting for tests
    })

    return app


@pytest.fixture(scope='function')
def db(app):
    """
    Create database for the tests.

    Creates all tables before each test function and drops them after.
    This ensures test isolation.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db_session(db):
    """Session bound to the per-test database."""
    return db.session


@pytest.fixture(scope='function')
def client(app, db):
    """
    Create a test client for the app.

    The client can be used to make requests to the application.
    """
    with app.test_client() as client:
        yield client


@pytest.fixture(scope='function')
def models(app, db):
    """Model classes registered by create_app()."""
    from cornerstone.models import get_models
    return get_models()


@pytest.fixture(autouse=True)
def reset_tracker(app):
    """Each test starts with a reschedule tracker that has never run."""
    app.extensions['reschedule_tracker'].reset()
    yield


# =============================================================================
# Model Factories
# =============================================================================

@pytest.fixture
def work_item_factory(models, db):
    """
    Factory for creating WorkItem rows.

    Usage:
        item = work_item_factory(id='wi-a', duration_days=3)
        item = work_item_factory(status='completed', actual_start_date=...)
    """
    counter = [0]

    def _create_work_item(**kwargs):
        WorkItem = models['WorkItem']
        counter[0] += 1
        defaults = {
            'id': f'wi-{counter[0]:03d}',
            'title': f'Work item {counter[0]}',
            'status': 'not_started',
            'duration_days': 1,
        }
        defaults.update(kwargs)
        work_item = WorkItem(**defaults)
        db.session.add(work_item)
        db.session.commit()
        return work_item

    return _create_work_item


@pytest.fixture
def dependency_factory(models, db):
    """
    Factory for creating WorkItemDependency rows.

    Usage:
        dependency_factory(a, b)
        dependency_factory(a, b, dependency_type='start_to_start', lead_lag_days=2)
    """
    def _create_dependency(predecessor, successor, **kwargs):
        WorkItemDependency = models['WorkItemDependency']
        defaults = {
            'predecessor_id': getattr(predecessor, 'id', predecessor),
            'successor_id': getattr(successor, 'id', successor),
            'dependency_type': 'finish_to_start',
            'lead_lag_days': 0,
        }
        defaults.update(kwargs)
        dependency = WorkItemDependency(**defaults)
        db.session.add(dependency)
        db.session.commit()
        return dependency

    return _create_dependency


@pytest.fixture
def milestone_factory(models, db):
    """
    Factory for creating a Milestone with its contributing work items.

    Usage:
        milestone = milestone_factory(contributors=[a, b], dependents=[c])
    """
    def _create_milestone(contributors=(), dependents=(), **kwargs):
        Milestone = models['Milestone']
        MilestoneWorkItem = models['MilestoneWorkItem']
        WorkItemMilestoneDep = models['WorkItemMilestoneDep']

        defaults = {
            'title': 'Test Milestone',
            'target_date': TODAY + timedelta(days=30),
        }
        defaults.update(kwargs)
        milestone = Milestone(**defaults)
        db.session.add(milestone)
        db.session.flush()

        for work_item in contributors:
            db.session.add(MilestoneWorkItem(milestone_id=milestone.id, work_item_id=work_item.id))
        for work_item in dependents:
            db.session.add(WorkItemMilestoneDep(milestone_id=milestone.id, work_item_id=work_item.id))
        db.session.commit()
        return milestone

    return _create_milestone


# =============================================================================
# Engine-level builders
# =============================================================================

@pytest.fixture
def make_node():
    """
    Builder for ScheduleNode snapshots.

    Usage:
        make_node('A', 3)
        make_node('B', 2, status='in_progress', start_after=day(4))
    """
    def _make_node(node_id, duration_days=1, **kwargs):
        return ScheduleNode(id=node_id, duration_days=duration_days, **kwargs)

    return _make_node


@pytest.fixture
def make_edge():
    """
    Builder for DependencyEdge values.

    Usage:
        make_edge('A', 'B')
        make_edge('A', 'B', 'start_to_start', 2)
    """
    def _make_edge(predecessor_id, successor_id, dependency_type='finish_to_start', lag=0):
        return DependencyEdge(
            predecessor_id=predecessor_id,
            successor_id=successor_id,
            dependency_type=dependency_type,
            lead_lag_days=lag,
        )

    return _make_edge
