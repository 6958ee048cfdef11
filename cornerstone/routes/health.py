"""
Health Check Endpoints
"""
from flask import Blueprint, jsonify, current_app
from datetime import datetime

health_bp = Blueprint('health', __name__, url_prefix='/health')


@health_bp.route('/ping', methods=['GET'])
def ping():
    """
    Simple ping endpoint for basic connectivity checks.
    Returns: 200 OK with pong message
    """
    return jsonify({
        'status': 'ok',
        'message': 'pong',
        'timestamp': datetime.utcnow().isoformat()
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness():
    """
    Readiness check - database connectivity and reschedule tracker state.

    Returns:
        200: Application is ready
        503: Database is not reachable
    """
    from sqlalchemy import text
    from cornerstone.services.reschedule_tracker import get_reschedule_tracker
    from cornerstone.utils.dates import format_date

    db = current_app.extensions['sqlalchemy']
    checks = {'database': False}
    errors = []

    try:
        db.session.execute(text('SELECT 1'))
        checks['database'] = True
    except Exception as e:
        errors.append(f"Database: {str(e)}")

    tracker = get_reschedule_tracker()
    ready = all(checks.values())
    response = {
        'status': 'ready' if ready else 'not_ready',
        'checks': checks,
        'lastRescheduleDate': format_date(tracker.last_run_date),
        'timestamp': datetime.utcnow().isoformat()
    }
    if errors:
        response['errors'] = errors

    return jsonify(response), 200 if ready else 503
