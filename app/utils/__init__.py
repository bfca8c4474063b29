"""
Utility functions for common operations
"""

from .exceptions import (
    AppException,
    ValidationError,
    InvalidScoreError,
    UnknownCategoryError,
    EmptyCategorySetError,
    NoEvaluationsError,
    SessionClosedError
)

from .datetime_utils import (
    get_current_timestamp,
    day_label,
    week_label,
    month_label,
    PERIOD_LABELLERS
)

__all__ = [
    # Exceptions
    "AppException",
    "ValidationError",
    "InvalidScoreError",
    "UnknownCategoryError",
    "EmptyCategorySetError",
    "NoEvaluationsError",
    "SessionClosedError",
    # Datetime utilities
    "get_current_timestamp",
    "day_label",
    "week_label",
    "month_label",
    "PERIOD_LABELLERS"
]
