"""
Custom exception classes for feedback scoring errors
Every kind names the offending field, category or scale in its details
"""

import math
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Base exception class for application errors
    """
    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """
    Exception for validation errors on caller-supplied records
    """
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class InvalidScoreError(ValidationError):
    """Raw score outside the valid range of its declared scale, or an undeclared scale"""
    kind = "InvalidScoreKind"

    def __init__(self, value: Any, scale: str, field: Optional[str] = None, allowed: Optional[list] = None):
        if allowed:
            message = f"Unknown scale {scale!r}; expected one of: {', '.join(allowed)}"
        else:
            target = f" for '{field}'" if field else ""
            message = f"Invalid score {value!r}{target}: outside the valid range of scale '{scale}'"
        # NaN/inf are not valid JSON, report them as text
        if isinstance(value, float) and not math.isfinite(value):
            value = str(value)
        details = {"kind": self.kind, "value": value, "scale": scale}
        if field:
            details["field"] = field
        if allowed:
            details["allowed"] = list(allowed)
        super().__init__(message, details=details)


class UnknownCategoryError(ValidationError):
    """Category string not in the recognized enumeration"""
    kind = "UnknownCategoryKind"

    def __init__(self, category: Any, allowed: Optional[list] = None):
        message = f"Unknown category {category!r}"
        details = {"kind": self.kind, "category": category}
        if allowed:
            message += f"; expected one of: {', '.join(allowed)}"
            details["allowed"] = list(allowed)
        super().__init__(message, details=details)


class EmptyCategorySetError(ValidationError):
    """Evaluation carries zero category scores"""
    kind = "EmptyCategorySetKind"

    def __init__(self, evaluation_id: Optional[str] = None):
        message = "Evaluation must carry at least one category score"
        details = {"kind": self.kind, "field": "category_scores"}
        if evaluation_id:
            message += f" (evaluation {evaluation_id})"
            details["evaluation_id"] = evaluation_id
        super().__init__(message, details=details)


class NoEvaluationsError(ValidationError):
    """Operation that needs at least one evaluation was given none"""
    kind = "NoEvaluationsKind"

    def __init__(self, operation: str):
        message = f"{operation} requires at least one evaluation"
        super().__init__(message, details={"kind": self.kind, "field": "evaluations", "operation": operation})


class SessionClosedError(AppException):
    """
    Exception for appending to a session that already has completed_at set
    """
    def __init__(self, session_id: str):
        super().__init__(
            f"Session {session_id} is completed and cannot accept new evaluations",
            status_code=409,
            details={"session_id": session_id},
        )
