"""
Action item derivation
Turns low-scoring categories into a deduplicated, prioritized task list
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.config.settings import settings
from app.schemas.feedback import ActionItem, CategoryScore, Evaluation, Priority
from app.services.rating_model import category_label, normalize_score
from app.utils.exceptions import NoEvaluationsError

logger = logging.getLogger(__name__)


def _describe(category_score: CategoryScore) -> str:
    # First suggestion is the primary one
    if category_score.suggestions:
        return category_score.suggestions[0]
    if category_score.feedback_text.strip():
        return category_score.feedback_text.strip()
    return f"Improve your {category_label(category_score.category)}"


def _dedupe_key(item: ActionItem) -> Tuple:
    return (item.subject_id, item.related_category, item.description, item.completed)


def _dedupe(items: Iterable[ActionItem]) -> List[ActionItem]:
    """
    Collapse duplicates onto the first occurrence, keeping the worse priority
    and the earliest deadline
    """
    merged: Dict[Tuple, ActionItem] = {}
    for item in items:
        key = _dedupe_key(item)
        existing = merged.get(key)
        if existing is None:
            merged[key] = item
            continue

        update = {}
        if item.priority.rank > existing.priority.rank:
            update["priority"] = item.priority
        if item.deadline is not None and (existing.deadline is None or item.deadline < existing.deadline):
            update["deadline"] = item.deadline
        if update:
            # Reassigning an existing key keeps its insertion position
            merged[key] = existing.model_copy(update=update)
    return list(merged.values())


def _by_priority(items: Iterable[ActionItem]) -> List[ActionItem]:
    # Stable: input order is preserved within each tier
    return sorted(items, key=lambda item: -item.priority.rank)


def derive_action_items(
    evaluations: Sequence[Evaluation],
    threshold: Optional[float] = None,
    high_priority_cutoff: Optional[float] = None,
) -> List[ActionItem]:
    """
    Derive follow-up tasks from every category scoring below ``threshold``.

    Scores under the high-priority cutoff (50 by default) become ``high``,
    the rest of the weak band ``medium``. The deriver never emits ``low``;
    that tier belongs to mentor-authored items (see ``merge_action_items``).

    Raises NoEvaluationsError when there is nothing to analyze. An empty list
    means nothing fell under the threshold.

    Time Complexity: O(n * k) where n = evaluations, k = categories per evaluation
    Space Complexity: O(m) where m = number of weak categories
    """
    if not evaluations:
        raise NoEvaluationsError("derive_action_items")

    threshold = settings.action_item_threshold if threshold is None else threshold
    normalize_score(threshold, field="threshold")
    cutoff = settings.high_priority_cutoff if high_priority_cutoff is None else high_priority_cutoff
    normalize_score(cutoff, field="high_priority_cutoff")

    candidates = []
    for evaluation in evaluations:
        for category_score in evaluation.category_scores:
            if category_score.score >= threshold:
                continue
            candidates.append(ActionItem(
                priority=Priority.HIGH if category_score.score < cutoff else Priority.MEDIUM,
                description=_describe(category_score),
                related_category=category_score.category,
                subject_id=evaluation.subject_id,
            ))

    items = _by_priority(_dedupe(candidates))
    logger.debug(
        f"[FEEDBACK][ACTION-ITEMS] {len(evaluations)} evaluations, {len(candidates)} candidates -> {len(items)} items"
    )
    return items


def merge_action_items(*item_lists: Iterable[ActionItem]) -> List[ActionItem]:
    """
    Combine derived items with mentor-authored ones (which may be low priority
    and carry deadlines). Completed items are kept apart from pending ones: a
    weakness that comes back is a new item, not a reopened one.
    """
    combined = [item for items in item_lists for item in items]
    return _by_priority(_dedupe(combined))


def pending_action_items(items: Iterable[ActionItem]) -> List[ActionItem]:
    return [item for item in items if not item.completed]
