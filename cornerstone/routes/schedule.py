"""
Schedule routes blueprint
Exposes the CPM scheduler and the daily auto-reschedule trigger
"""
from flask import Blueprint, request, jsonify, current_app

from cornerstone.error_handlers import handle_errors
from cornerstone.error_handlers.exceptions import ValidationException
from cornerstone.extensions import limiter
from cornerstone.models import get_models
from cornerstone.services.reschedule_tracker import get_reschedule_tracker
from cornerstone.services.schedule_response import to_schedule_response
from cornerstone.services.schedule_store import WorkItemStore
from cornerstone.services.schedule_types import ScheduleMode, ScheduleRequest
from cornerstone.services.scheduling_engine import SchedulingEngine
from cornerstone.utils.dates import format_date, parse_date, today_in_timezone

schedule_bp = Blueprint('schedule', __name__, url_prefix='/api/schedule')


def _schedule_rate_limit():
    return current_app.config.get('SCHEDULE_RATE_LIMIT', '30 per minute')


def _parse_today(data):
    """Optional 'today' override; defaults to the configured calendar's today"""
    raw = data.get('today')
    if raw is None:
        return today_in_timezone()
    try:
        today = parse_date(raw)
    except (TypeError, ValueError):
        today = None
    if today is None:
        raise ValidationException("Invalid today format. Use YYYY-MM-DD (e.g., 2025-10-15)",
                                  details={'field': 'today'})
    return today


def _get_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationException("Request body must be a JSON object")
    return data


def _get_store():
    db = current_app.extensions['sqlalchemy']
    return WorkItemStore(db.session, get_models())


@schedule_bp.route('', methods=['POST'])
@limiter.limit(_schedule_rate_limit)
@handle_errors
def run_schedule():
    """
    POST /api/schedule - Compute the proposed schedule (read-only).

    Request Body (JSON):
        {
            "mode": "full" | "cascade",
            "anchorWorkItemId": "wi-123",   # required for cascade
            "today": "2025-10-15"           # optional
        }

    Response (JSON):
        {"scheduledItems": [...], "criticalPath": [...], "warnings": [...]}
    """
    data = _get_body()

    mode = data.get('mode', ScheduleMode.FULL.value)
    if mode not in (ScheduleMode.FULL.value, ScheduleMode.CASCADE.value):
        raise ValidationException("mode must be 'full' or 'cascade'", details={'field': 'mode'})

    anchor_id = data.get('anchorWorkItemId')
    if anchor_id is not None and (not isinstance(anchor_id, str) or not anchor_id):
        raise ValidationException("anchorWorkItemId must be a non-empty string",
                                  details={'field': 'anchorWorkItemId'})

    today = _parse_today(data)
    nodes, edges = _get_store().load_graph()

    result = SchedulingEngine().schedule(ScheduleRequest(
        nodes=nodes,
        edges=edges,
        today=today,
        mode=mode,
        anchor_work_item_id=anchor_id,
    ))

    return jsonify(to_schedule_response(result)), 200


@schedule_bp.route('/auto-reschedule', methods=['POST'])
@handle_errors
def trigger_auto_reschedule():
    """
    POST /api/schedule/auto-reschedule - Run the daily reschedule if it is due.

    Request Body (JSON, optional):
        {"force": true}   # reset the tracker first

    Response (JSON):
        {"ran": bool, "updatedCount": int, "lastRunDate": "YYYY-MM-DD"}
    """
    data = _get_body()
    tracker = get_reschedule_tracker()

    if data.get('force'):
        current_app.logger.info("Forced auto-reschedule requested")
        tracker.reset()

    today = _parse_today(data)
    updated = tracker.ensure_daily_reschedule(_get_store(), today)

    return jsonify({
        'ran': updated is not None,
        'updatedCount': updated or 0,
        'lastRunDate': format_date(tracker.last_run_date),
    }), 200
