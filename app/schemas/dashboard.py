"""
Dashboard schemas
Pydantic models for feedback dashboard responses
"""

from pydantic import BaseModel
from typing import List, Optional

from app.schemas.feedback import ActionItem, Evaluation, FeedbackSummary, ImprovementArea, TrendPoint


class EvaluationBatchResponse(BaseModel):
    """
    Schema for scored evaluations
    Time Complexity: O(1)
    Space Complexity: O(n) where n = number of evaluations
    """
    evaluations: List[Evaluation]
    aggregate_score: Optional[int] = None  # None when no evaluations were sent


class TrendsDashboardResponse(BaseModel):
    """
    Schema for trends dashboard response
    Time Complexity: O(1)
    Space Complexity: O(n) where n = number of trend data points
    """
    period: str
    trend_data: List[TrendPoint]


class ActionItemsResponse(BaseModel):
    """
    Schema for action item response, ordered high -> medium -> low
    """
    action_items: List[ActionItem]
    pending_count: int


class FeedbackDashboardResponse(BaseModel):
    """
    Schema for feedback overview dashboard response
    """
    summary: FeedbackSummary
    improvement_areas: List[ImprovementArea]
