"""
Score aggregation service
Turns category scores into evaluation, session and trend level scores.
All rounding happens once, at the final step of each aggregate.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from app.config.settings import settings
from app.schemas.feedback import (
    CategoryScore,
    Evaluation,
    FeedbackSummary,
    ImprovementArea,
    TrendDirection,
    TrendPoint,
)
from app.services.rating_model import Source, clamp_0_to_100, normalize_score
from app.utils.datetime_utils import month_label
from app.utils.exceptions import EmptyCategorySetError, NoEvaluationsError

logger = logging.getLogger(__name__)

PeriodFn = Callable[[datetime], str]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def compute_overall_score(category_scores: Sequence[CategoryScore]) -> int:
    """
    Unweighted mean of the categories present on one evaluation.

    Optional categories that were not rated (technicalAccuracy on a
    behavioral question) are simply not in the list, so they count in
    neither the sum nor the divisor.

    Time Complexity: O(n) where n = number of categories
    Space Complexity: O(1)
    """
    if not category_scores:
        raise EmptyCategorySetError()
    return clamp_0_to_100(_mean([cs.score for cs in category_scores]))


def compute_session_aggregate(evaluations: Sequence[Evaluation]) -> Optional[int]:
    """
    Mean overall score across a session's evaluations.
    None (not 0) while the session has no evaluations.
    """
    if not evaluations:
        return None
    return clamp_0_to_100(_mean([e.overall_score for e in evaluations]))


def _chronological(evaluations: Sequence[Evaluation]) -> List[Evaluation]:
    # sorted() is stable, so evaluations with equal timestamps keep input order
    return sorted(evaluations, key=lambda e: e.created_at)


def _group_by_period(evaluations: Sequence[Evaluation], period_fn: PeriodFn) -> Dict[str, List[Evaluation]]:
    groups: Dict[str, List[Evaluation]] = {}
    for evaluation in _chronological(evaluations):
        groups.setdefault(period_fn(evaluation.created_at), []).append(evaluation)
    return groups


def compute_trend(evaluations: Sequence[Evaluation], period_fn: PeriodFn = month_label) -> List[TrendPoint]:
    """
    One TrendPoint per period, in chronological order of first occurrence.

    ``source_breakdown`` carries the mean for each source that actually has
    evaluations in the period; a missing source is omitted rather than
    reported as 0.

    Time Complexity: O(n log n) where n = number of evaluations
    Space Complexity: O(n)
    """
    if not evaluations:
        return []

    trend = []
    for label, members in _group_by_period(evaluations, period_fn).items():
        breakdown = {}
        for source in Source:
            subset = [e for e in members if e.source == source]
            if subset:
                breakdown[source.value] = compute_session_aggregate(subset)

        trend.append(TrendPoint(
            period_label=label,
            aggregate_score=compute_session_aggregate(members),
            source_breakdown=breakdown,
            evaluation_count=len(members),
        ))

    logger.debug(f"[FEEDBACK][TREND] {len(evaluations)} evaluations -> {len(trend)} periods")
    return trend


def compute_category_averages(evaluations: Sequence[Evaluation]) -> Dict[str, int]:
    """
    Per-category mean over every evaluation that rated the category,
    in first-seen order
    """
    scores: Dict[str, List[float]] = {}
    for evaluation in evaluations:
        for cs in evaluation.category_scores:
            scores.setdefault(cs.category, []).append(cs.score)
    return {category: clamp_0_to_100(_mean(values)) for category, values in scores.items()}


def _direction(current: float, previous: Optional[float], tolerance: float) -> TrendDirection:
    if previous is None:
        return TrendDirection.STABLE
    delta = current - previous
    if delta > tolerance:
        return TrendDirection.UP
    if delta < -tolerance:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def compute_improvement_areas(
    evaluations: Sequence[Evaluation],
    period_fn: PeriodFn = month_label,
    target: Optional[float] = None,
    tolerance: Optional[float] = None,
) -> List[ImprovementArea]:
    """
    Categories whose latest-period score is still below target, weakest first.

    For each category the current score is its mean in the latest period it
    was rated in; the previous score is its mean in the period before that.
    The direction compares the unrounded means, and a move within
    ``tolerance`` points counts as stable.
    """
    if not evaluations:
        raise NoEvaluationsError("compute_improvement_areas")

    target = settings.action_item_threshold if target is None else target
    normalize_score(target, field="target_score")
    tolerance = settings.trend_tolerance if tolerance is None else tolerance

    by_category: Dict[str, Dict[str, List[float]]] = {}
    for label, members in _group_by_period(evaluations, period_fn).items():
        for evaluation in members:
            for cs in evaluation.category_scores:
                by_category.setdefault(cs.category, {}).setdefault(label, []).append(cs.score)

    areas = []
    for category, periods in by_category.items():
        means = [_mean(values) for values in periods.values()]
        current = means[-1]
        previous = means[-2] if len(means) > 1 else None
        if current >= target:
            continue
        areas.append(ImprovementArea(
            category=category,
            current_score=clamp_0_to_100(current),
            previous_score=clamp_0_to_100(previous) if previous is not None else None,
            target_score=clamp_0_to_100(target),
            trend=_direction(current, previous, tolerance),
        ))

    return sorted(areas, key=lambda a: a.current_score)


def summarize_feedback(evaluations: Sequence[Evaluation], threshold: Optional[float] = None) -> FeedbackSummary:
    """
    Dashboard headline numbers: counts, average score, strong and weak categories
    Time Complexity: O(n * k) where n = evaluations, k = categories per evaluation
    Space Complexity: O(k)
    """
    if not evaluations:
        raise NoEvaluationsError("summarize_feedback")

    threshold = settings.action_item_threshold if threshold is None else threshold
    category_averages = compute_category_averages(evaluations)

    ranked = sorted(category_averages.items(), key=lambda kv: kv[1], reverse=True)
    strong = [category for category, score in ranked if score >= threshold][:3]
    weak = [category for category, score in reversed(ranked) if score < threshold][:3]

    return FeedbackSummary(
        total_evaluations=len(evaluations),
        source_counts={source.value: sum(1 for e in evaluations if e.source == source) for source in Source},
        average_score=compute_session_aggregate(evaluations),
        category_averages=category_averages,
        strong_categories=strong,
        weak_categories=weak,
    )
