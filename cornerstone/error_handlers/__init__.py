"""
Unified Error Handling System

Provides centralized, consistent error handling across the service.

Usage:
    from cornerstone.error_handlers import handle_errors
    from cornerstone.error_handlers.exceptions import ValidationException

    @schedule_bp.route('/api/schedule', methods=['POST'])
    @handle_errors
    def run_schedule():
        if not valid:
            raise ValidationException('Invalid data')
        return jsonify(response)
"""
from .exceptions import (
    AppException,
    ValidationException,
    MissingAnchorException,
    ResourceNotFoundException,
    AnchorNotFoundException,
    ConflictException,
    CircularDependencyException,
    ConfigurationException,
    DatabaseException
)
from .decorators import handle_errors
from .logging import setup_logging, register_error_handlers, reschedule_logger, RescheduleLogger


__all__ = [
    # Exceptions
    'AppException',
    'ValidationException',
    'MissingAnchorException',
    'ResourceNotFoundException',
    'AnchorNotFoundException',
    'ConflictException',
    'CircularDependencyException',
    'ConfigurationException',
    'DatabaseException',
    # Decorators
    'handle_errors',
    # Logging
    'setup_logging',
    'register_error_handlers',
    'reschedule_logger',
    'RescheduleLogger',
]
