"""
Utility modules for the Cornerstone scheduling service
"""
from .dates import parse_date, format_date, add_days, diff_days, today_in_timezone

__all__ = ['parse_date', 'format_date', 'add_days', 'diff_days', 'today_in_timezone']
