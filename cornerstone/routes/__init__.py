"""
Routes package for the Cornerstone scheduling service
Centralizes all route blueprints
"""
from .schedule import schedule_bp
from .health import health_bp

__all__ = [
    'schedule_bp',
    'health_bp',
]
