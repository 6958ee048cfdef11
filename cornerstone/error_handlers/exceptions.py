"""
Custom exception hierarchy for type-safe error handling

Provides a structured exception hierarchy that maps to HTTP status codes
and enables consistent error responses across the application.

Usage:
    from cornerstone.error_handlers.exceptions import ValidationException

    def build_request(data):
        if not data:
            raise ValidationException('Request body is required')

Exception Hierarchy:
    AppException (base)
    ├── ValidationException (400)
    │   └── MissingAnchorException (400)
    ├── ResourceNotFoundException (404)
    │   └── AnchorNotFoundException (404)
    ├── ConflictException (409)
    │   └── CircularDependencyException (409)
    ├── ConfigurationException (500)
    └── DatabaseException (500)
"""
from typing import Dict, Any, List, Optional


class AppException(Exception):
    """
    Base exception for all application errors

    All custom exceptions should inherit from this class to enable
    consistent error handling and response formatting.

    Attributes:
        status_code: HTTP status code for the error
        error_type: String identifier for the error type
        message: Human-readable error message
        details: Additional context about the error
    """
    status_code = 500
    error_type = 'ApplicationError'

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception

        Args:
            message: Human-readable error message
            status_code: Optional HTTP status code override
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to JSON-serializable dictionary

        Returns:
            Dictionary suitable for JSON response
        """
        result = {
            'error': self.error_type,
            'message': self.message,
            'status_code': self.status_code
        }

        if self.details:
            result.update(self.details)

        return result

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}('{self.message}', status_code={self.status_code})>"


class ValidationException(AppException):
    """
    Validation errors (HTTP 400)

    Raised when scheduling input fails validation checks.

    Example:
        >>> if node.duration_days < 0:
        ...     raise ValidationException('durationDays must be >= 0')
    """
    status_code = 400
    error_type = 'ValidationError'


class MissingAnchorException(ValidationException):
    """Cascade scheduling requested without an anchor work item (HTTP 400)"""
    error_type = 'MissingAnchor'

    def __init__(self, message: str = 'anchorWorkItemId is required for cascade mode'):
        super().__init__(message)


class ResourceNotFoundException(AppException):
    """
    Resource not found (HTTP 404)

    Raised when a requested resource doesn't exist.
    """
    status_code = 404
    error_type = 'NotFound'


class AnchorNotFoundException(ResourceNotFoundException):
    """Cascade anchor is not part of the scheduling graph (HTTP 404)"""
    error_type = 'AnchorNotFound'

    def __init__(self, anchor_id: str):
        super().__init__(
            f'Anchor work item {anchor_id} not found',
            details={'anchorWorkItemId': anchor_id}
        )
        self.anchor_id = anchor_id


class ConflictException(AppException):
    """
    Conflicting state (HTTP 409)

    Raised when the request cannot be satisfied by the current data.
    """
    status_code = 409
    error_type = 'Conflict'


class CircularDependencyException(ConflictException):
    """
    Dependency graph contains a cycle (HTTP 409)

    Scheduling fails for the whole graph: float and criticality are undefined
    inside a cycle, so no partial schedule is produced.

    Attributes:
        cycle_nodes: Every node that could not be topologically ordered
        cycle_path: One concrete cycle, first node repeated at the end
    """
    error_type = 'CircularDependency'

    def __init__(self, cycle_nodes: List[str], cycle_path: Optional[List[str]] = None):
        self.cycle_nodes = list(cycle_nodes)
        self.cycle_path = list(cycle_path or [])
        shown = self.cycle_path or self.cycle_nodes
        super().__init__(
            f"Circular dependency detected: {' -> '.join(shown)}",
            details={
                'code': 'CIRCULAR_DEPENDENCY',
                'cycleNodes': self.cycle_nodes,
                'cyclePath': self.cycle_path,
            }
        )


class ConfigurationException(AppException):
    """
    Configuration errors (HTTP 500)

    Raised when application is misconfigured.
    """
    status_code = 500
    error_type = 'ConfigurationError'


class DatabaseException(AppException):
    """
    Database operation errors (HTTP 500)

    Raised when database operations fail.
    """
    status_code = 500
    error_type = 'DatabaseError'
