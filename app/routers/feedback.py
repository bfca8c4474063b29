"""
Feedback routes
Stateless scoring endpoints: every request carries the records it needs,
persistence stays with the caller
"""

from fastapi import APIRouter, HTTPException, Query
from typing import Optional
import logging

from app.config.settings import settings
from app.schemas.dashboard import (
    EvaluationBatchResponse,
    TrendsDashboardResponse,
    ActionItemsResponse,
    FeedbackDashboardResponse
)
from app.schemas.feedback import Session
from app.schemas.submission import EvaluationBatchRequest, ActionItemsRequest, SessionSubmission
from app.services.action_items import derive_action_items, merge_action_items, pending_action_items
from app.services.score_aggregator import (
    compute_session_aggregate,
    compute_trend,
    compute_improvement_areas,
    summarize_feedback
)
from app.utils.datetime_utils import PERIOD_LABELLERS
from app.utils.exceptions import AppException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


def _resolve_period(period: Optional[str]) -> str:
    period = period or settings.default_trend_period
    if period not in PERIOD_LABELLERS:
        logger.warning(f"[FEEDBACK] Rejected trend period: {period}")
        raise HTTPException(
            status_code=400,
            detail=f"period must be one of: {', '.join(PERIOD_LABELLERS)}"
        )
    return period


@router.post("/evaluations/score", response_model=EvaluationBatchResponse)
async def score_evaluations(request: EvaluationBatchRequest):
    """
    Normalize raw category ratings and compute each evaluation's overall score
    """
    try:
        evaluations = request.to_evaluations()
    except AppException as e:
        logger.warning(f"[FEEDBACK][SCORE] Rejected evaluation payload: {e.message}")
        raise

    return EvaluationBatchResponse(
        evaluations=evaluations,
        aggregate_score=compute_session_aggregate(evaluations)
    )


@router.post("/sessions/aggregate", response_model=Session)
async def aggregate_session(request: SessionSubmission):
    """
    Rebuild a session from its evaluations in question order.
    aggregate_score is null while the session is empty.
    """
    try:
        session = request.to_session()
    except AppException as e:
        logger.warning(f"[FEEDBACK][SESSION] Rejected session payload: {e.message}")
        raise

    logger.info(f"[FEEDBACK][SESSION] Session {session.session_id}: {len(session.evaluations)} evaluations")
    return session


@router.post("/trends", response_model=TrendsDashboardResponse)
async def get_trends(
    request: EvaluationBatchRequest,
    period: Optional[str] = Query(None, description="Grouping period: day, week or month")
):
    """
    Score trend over time with AI and mentor breakdown per period
    """
    period = _resolve_period(period)
    evaluations = request.to_evaluations()
    return TrendsDashboardResponse(
        period=period,
        trend_data=compute_trend(evaluations, PERIOD_LABELLERS[period])
    )


@router.post("/action-items", response_model=ActionItemsResponse)
async def get_action_items(
    request: ActionItemsRequest,
    threshold: Optional[float] = Query(None, description="Categories scoring below this produce an item (0-100)")
):
    """
    Derive prioritized follow-up tasks and merge in mentor-written ones
    """
    evaluations = request.to_evaluations()
    derived = derive_action_items(evaluations, threshold=threshold)

    if request.mentor_items:
        mentor_items = [item.to_action_item() for item in request.mentor_items]
        items = merge_action_items(derived, mentor_items)
    else:
        items = derived

    return ActionItemsResponse(
        action_items=items,
        pending_count=len(pending_action_items(items))
    )


@router.post("/summary", response_model=FeedbackDashboardResponse)
async def get_feedback_summary(
    request: EvaluationBatchRequest,
    period: Optional[str] = Query(None, description="Period used to compare current and previous scores")
):
    """
    Headline numbers plus categories still below target
    """
    period = _resolve_period(period)
    evaluations = request.to_evaluations()
    return FeedbackDashboardResponse(
        summary=summarize_feedback(evaluations),
        improvement_areas=compute_improvement_areas(evaluations, PERIOD_LABELLERS[period])
    )
