"""
Pydantic schemas for feedback records and request/response validation
"""

from .feedback import (
    CategoryScore,
    Evaluation,
    Session,
    TrendPoint,
    Priority,
    ActionItem,
    TrendDirection,
    ImprovementArea,
    FeedbackSummary
)

from .submission import (
    RawCategoryRating,
    EvaluationSubmission,
    SessionSubmission,
    MentorActionItem,
    EvaluationBatchRequest,
    ActionItemsRequest
)

from .dashboard import (
    EvaluationBatchResponse,
    TrendsDashboardResponse,
    ActionItemsResponse,
    FeedbackDashboardResponse
)

__all__ = [
    # Feedback records
    "CategoryScore",
    "Evaluation",
    "Session",
    "TrendPoint",
    "Priority",
    "ActionItem",
    "TrendDirection",
    "ImprovementArea",
    "FeedbackSummary",
    # Submission schemas
    "RawCategoryRating",
    "EvaluationSubmission",
    "SessionSubmission",
    "MentorActionItem",
    "EvaluationBatchRequest",
    "ActionItemsRequest",
    # Dashboard schemas
    "EvaluationBatchResponse",
    "TrendsDashboardResponse",
    "ActionItemsResponse",
    "FeedbackDashboardResponse"
]
