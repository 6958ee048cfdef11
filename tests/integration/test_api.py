"""
Integration tests for API endpoints.

Tests cover:
- Schedule API (full and cascade runs, error responses)
- Auto-reschedule trigger
- Health check endpoints
"""
import pytest
import json

from conftest import TODAY, day


TODAY_ISO = TODAY.isoformat()


def post_json(client, url, payload=None):
    return client.post(url, data=json.dumps(payload or {}), content_type='application/json')


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.integration
    def test_ping(self, client):
        """Test ping endpoint."""
        response = client.get('/health/ping')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['status'] == 'ok'

    @pytest.mark.integration
    def test_ready(self, client):
        """Test readiness check endpoint."""
        response = client.get('/health/ready')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['checks']['database'] is True
        assert data['lastRescheduleDate'] is None


class TestScheduleEndpoint:
    """Tests for POST /api/schedule."""

    @pytest.fixture
    def chain(self, work_item_factory, dependency_factory):
        a = work_item_factory(id='wi-a', duration_days=2)
        b = work_item_factory(id='wi-b', duration_days=3)
        c = work_item_factory(id='wi-c', duration_days=1, start_before=day(1))
        dependency_factory(a, b)
        dependency_factory(b, c)
        return a, b, c

    @pytest.mark.integration
    def test_full_schedule(self, client, chain):
        response = post_json(client, '/api/schedule', {'mode': 'full', 'today': TODAY_ISO})

        assert response.status_code == 200
        data = json.loads(response.data)
        items = {item['workItemId']: item for item in data['scheduledItems']}
        assert list(items) == ['wi-a', 'wi-b', 'wi-c']
        assert items['wi-b']['scheduledStartDate'] == day(2).isoformat()
        assert items['wi-b']['scheduledEndDate'] == day(5).isoformat()
        assert items['wi-b']['previousStartDate'] is None
        assert items['wi-c']['totalFloat'] == 0
        assert items['wi-c']['isCritical'] is True
        assert items['wi-c']['isLate'] is False
        assert data['criticalPath'] == ['wi-a', 'wi-b', 'wi-c']
        assert data['warnings'] == [{
            'workItemId': 'wi-c',
            'type': 'start_before_violated',
            'message': f'Scheduled start date ({day(5).isoformat()}) exceeds '
                       f'start-before constraint ({day(1).isoformat()})',
        }]

    @pytest.mark.integration
    def test_schedule_is_read_only(self, client, models, db_session, chain):
        post_json(client, '/api/schedule', {'today': TODAY_ISO})

        item = db_session.get(models['WorkItem'], 'wi-b')
        assert item.start_date is None

    @pytest.mark.integration
    def test_cascade_schedule(self, client, chain):
        response = post_json(client, '/api/schedule', {
            'mode': 'cascade', 'anchorWorkItemId': 'wi-b', 'today': TODAY_ISO,
        })

        assert response.status_code == 200
        data = json.loads(response.data)
        assert [item['workItemId'] for item in data['scheduledItems']] == ['wi-b', 'wi-c']

    @pytest.mark.integration
    def test_cascade_without_anchor(self, client, chain):
        response = post_json(client, '/api/schedule', {'mode': 'cascade'})

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data['error'] == 'MissingAnchor'

    @pytest.mark.integration
    def test_cascade_unknown_anchor(self, client, chain):
        response = post_json(client, '/api/schedule', {'mode': 'cascade', 'anchorWorkItemId': 'wi-zzz'})

        assert response.status_code == 404
        data = json.loads(response.data)
        assert data['anchorWorkItemId'] == 'wi-zzz'

    @pytest.mark.integration
    def test_cycle_returns_conflict(self, client, work_item_factory, dependency_factory):
        a = work_item_factory(id='wi-a')
        b = work_item_factory(id='wi-b')
        dependency_factory(a, b)
        dependency_factory(b, a)

        response = post_json(client, '/api/schedule', {'today': TODAY_ISO})

        assert response.status_code == 409
        data = json.loads(response.data)
        assert data['code'] == 'CIRCULAR_DEPENDENCY'
        assert data['cycleNodes'] == ['wi-a', 'wi-b']
        assert data['cyclePath'] == ['wi-a', 'wi-b', 'wi-a']

    @pytest.mark.integration
    def test_invalid_mode(self, client):
        response = post_json(client, '/api/schedule', {'mode': 'partial'})

        assert response.status_code == 400
        assert json.loads(response.data)['field'] == 'mode'

    @pytest.mark.integration
    def test_invalid_today(self, client):
        response = post_json(client, '/api/schedule', {'today': '03/02/2026'})

        assert response.status_code == 400
        assert json.loads(response.data)['field'] == 'today'

    @pytest.mark.integration
    @pytest.mark.parametrize('today', ['', 20260302, ['2026-03-02']])
    def test_blank_or_non_string_today(self, client, work_item_factory, today):
        work_item_factory(id='wi-a', duration_days=2)

        response = post_json(client, '/api/schedule', {'mode': 'full', 'today': today})

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data['error'] == 'ValidationError'
        assert data['field'] == 'today'

    @pytest.mark.integration
    @pytest.mark.parametrize('anchor', [['wi-a'], {'id': 'wi-a'}, 7, ''])
    def test_anchor_must_be_non_empty_string(self, client, chain, anchor):
        response = post_json(client, '/api/schedule', {'mode': 'cascade', 'anchorWorkItemId': anchor})

        assert response.status_code == 400
        assert json.loads(response.data)['field'] == 'anchorWorkItemId'

    @pytest.mark.integration
    def test_body_must_be_object(self, client):
        response = post_json(client, '/api/schedule', ['full'])

        assert response.status_code == 400
        assert json.loads(response.data)['error'] == 'ValidationError'

    @pytest.mark.integration
    def test_empty_project(self, client):
        response = post_json(client, '/api/schedule')

        assert response.status_code == 200
        assert json.loads(response.data) == {'scheduledItems': [], 'criticalPath': [], 'warnings': []}


class TestAutoRescheduleEndpoint:
    """Tests for POST /api/schedule/auto-reschedule."""

    @pytest.mark.integration
    def test_runs_once_per_day(self, client, models, db_session, work_item_factory):
        work_item_factory(id='wi-stale', duration_days=2, start_date=day(-3), end_date=day(-1))

        first = json.loads(post_json(client, '/api/schedule/auto-reschedule', {'today': TODAY_ISO}).data)
        second = json.loads(post_json(client, '/api/schedule/auto-reschedule', {'today': TODAY_ISO}).data)

        assert first == {'ran': True, 'updatedCount': 1, 'lastRunDate': TODAY_ISO}
        assert second == {'ran': False, 'updatedCount': 0, 'lastRunDate': TODAY_ISO}

        db_session.expire_all()
        item = db_session.get(models['WorkItem'], 'wi-stale')
        assert (item.start_date, item.end_date) == (day(0), day(2))

    @pytest.mark.integration
    def test_force_reruns(self, client, work_item_factory):
        work_item_factory(id='wi-a', duration_days=1)

        post_json(client, '/api/schedule/auto-reschedule', {'today': TODAY_ISO})
        response = post_json(client, '/api/schedule/auto-reschedule', {'today': TODAY_ISO, 'force': True})

        data = json.loads(response.data)
        assert data['ran'] is True
        # Dates were written on the first run
        assert data['updatedCount'] == 0

    @pytest.mark.integration
    def test_blank_today_rejected(self, app, client, work_item_factory):
        work_item_factory(id='wi-a')

        response = post_json(client, '/api/schedule/auto-reschedule', {'today': ''})

        assert response.status_code == 400
        assert app.extensions['reschedule_tracker'].last_run_date is None

    @pytest.mark.integration
    def test_failure_leaves_tracker_due(self, app, client, work_item_factory, dependency_factory):
        a = work_item_factory(id='wi-a')
        b = work_item_factory(id='wi-b')
        dependency_factory(a, b)
        dependency_factory(b, a)

        response = post_json(client, '/api/schedule/auto-reschedule', {'today': TODAY_ISO})

        assert response.status_code == 409
        assert app.extensions['reschedule_tracker'].last_run_date is None
