"""
Error handling and logging utilities for the Cornerstone scheduling service
Provides centralized error handling, logging, and reschedule bookkeeping
"""
import logging
import traceback
from datetime import datetime
from flask import jsonify, request
import os


def setup_logging(app):
    """Configure application logging"""
    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO').upper())
    log_file = app.config.get('LOG_FILE', 'cornerstone.log')

    # Make log file path absolute if it's not
    if not os.path.isabs(log_file):
        basedir = os.path.abspath(os.path.dirname(os.path.dirname(os.path.dirname(__file__))))
        log_file = os.path.join(basedir, log_file)

    log_dir = os.path.dirname(log_file)
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    # app.logger is the 'cornerstone' logger, so service module loggers
    # (cornerstone.services.*) propagate into these handlers
    app.logger.setLevel(log_level)
    app.logger.addHandler(file_handler)
    app.logger.addHandler(console_handler)

    werkzeug_logger = logging.getLogger('werkzeug')
    werkzeug_logger.setLevel(log_level)

    return app.logger


def _wants_json():
    return request.is_json or request.content_type == 'application/json' or request.path.startswith('/api/')


def register_error_handlers(app):
    """Register global error handlers for the Flask app"""

    @app.errorhandler(400)
    def bad_request_error(error):
        """Handle 400 Bad Request errors"""
        app.logger.warning(f"Bad request from {request.remote_addr}: {request.url}")
        if _wants_json():
            return jsonify({
                'error': 'Bad Request',
                'message': 'The request could not be understood by the server',
                'status_code': 400
            }), 400
        return "Bad Request", 400

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 Not Found errors"""
        app.logger.info(f"404 Not Found: {request.url} from {request.remote_addr}")
        if _wants_json():
            return jsonify({
                'error': 'Not Found',
                'message': 'The requested resource was not found',
                'status_code': 404
            }), 404
        return "Not Found", 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 Method Not Allowed errors"""
        app.logger.warning(f"Method not allowed: {request.method} {request.url} from {request.remote_addr}")
        if _wants_json():
            return jsonify({
                'error': 'Method Not Allowed',
                'message': f'The {request.method} method is not allowed for this endpoint',
                'status_code': 405
            }), 405
        return "Method Not Allowed", 405

    @app.errorhandler(429)
    def rate_limited_error(error):
        """Handle 429 Too Many Requests errors"""
        app.logger.warning(f"Rate limit exceeded: {request.url} from {request.remote_addr}")
        return jsonify({
            'error': 'Too Many Requests',
            'message': str(getattr(error, 'description', 'Rate limit exceeded')),
            'status_code': 429
        }), 429

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error"""
        error_id = datetime.utcnow().strftime('%Y%m%d_%H%M%S_%f')
        app.logger.error(f"Internal Server Error [{error_id}]: {str(error)}")
        app.logger.error(f"Traceback [{error_id}]: {traceback.format_exc()}")
        app.logger.error(f"Request details [{error_id}]: {request.method} {request.url}")

        if _wants_json():
            return jsonify({
                'error': 'Internal Server Error',
                'message': 'An unexpected error occurred',
                'error_id': error_id,
                'status_code': 500
            }), 500
        return f"Internal Server Error (ID: {error_id})", 500


def handle_reschedule_error(operation, error, context=None):
    """Centralized reschedule error handling"""
    logger = logging.getLogger('cornerstone.reschedule')
    error_id = datetime.utcnow().strftime('%Y%m%d_%H%M%S_%f')

    log_message = f"RESCHEDULE ERROR [{error_id}] in {operation}: {str(error)}"
    if context:
        log_message += f" | Context: {context}"

    logger.error(log_message)
    logger.debug(f"RESCHEDULE ERROR TRACEBACK [{error_id}]: {traceback.format_exc()}")

    return {
        'error_id': error_id,
        'operation': operation,
        'error_message': str(error),
        'timestamp': datetime.utcnow().isoformat()
    }


class RescheduleLogger:
    """Specialized logger for auto-reschedule passes"""

    def __init__(self, name='cornerstone.reschedule'):
        self.logger = logging.getLogger(name)

    def started(self, operation, details=None):
        """Log reschedule pass start"""
        message = f"Started: {operation}"
        if details:
            message += f" | {details}"
        self.logger.info(message)

    def completed(self, operation, stats=None):
        """Log reschedule pass completion"""
        message = f"Completed: {operation}"
        if stats:
            message += f" | Stats: {stats}"
        self.logger.info(message)

    def skipped(self, operation, reason):
        """Log a pass that did not need to run"""
        self.logger.debug(f"Skipped: {operation} | {reason}")

    def failed(self, operation, error, context=None):
        """Log reschedule pass failure"""
        error_details = handle_reschedule_error(operation, error, context)
        return error_details['error_id']


# Global reschedule logger instance
reschedule_logger = RescheduleLogger()
