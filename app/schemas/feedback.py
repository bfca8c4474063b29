"""
Feedback record schemas
Pydantic models for evaluations, sessions, trend points and action items
"""

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, computed_field, field_validator

from app.services.rating_model import ScoreScale, Source, normalize_score, parse_category
from app.utils.datetime_utils import get_current_timestamp
from app.utils.exceptions import EmptyCategorySetError, SessionClosedError, ValidationError


def _new_id() -> str:
    return str(uuid.uuid4())


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CategoryScore(BaseModel):
    """
    One rated dimension, already on the canonical 0-100 scale
    Time Complexity: O(1)
    Space Complexity: O(n) where n = number of suggestions
    """
    model_config = ConfigDict(frozen=True)

    category: str
    score: float
    feedback_text: str = ""
    suggestions: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        return parse_category(v)

    @field_validator("score", mode="before")
    @classmethod
    def validate_score(cls, v, info: ValidationInfo):
        return normalize_score(v, ScoreScale.PERCENT, field=info.data.get("category"))

    @field_validator("feedback_text", mode="before")
    @classmethod
    def default_feedback_text(cls, v):
        return v if v is not None else ""

    @field_validator("suggestions", mode="before")
    @classmethod
    def default_suggestions(cls, v):
        return v if v is not None else ()

    @classmethod
    def from_raw(
        cls,
        category: str,
        raw: float,
        scale: str = ScoreScale.PERCENT,
        feedback_text: str = "",
        suggestions: Optional[List[str]] = None,
    ) -> "CategoryScore":
        """Build from a collaborator's raw rating on its declared scale"""
        category = parse_category(category)
        return cls(
            category=category,
            score=normalize_score(raw, scale, field=category),
            feedback_text=feedback_text or "",
            suggestions=tuple(suggestions or ()),
        )


class Evaluation(BaseModel):
    """
    One complete assessment of one artifact (answer, resume, portfolio).

    Immutable once created; ``acknowledge`` is the only way to attach the
    student's response afterwards. ``overall_score`` is always derived from
    ``category_scores``.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    subject_id: str
    session_id: Optional[str] = None
    source: Source = Source.AI
    category_scores: Tuple[CategoryScore, ...]
    strengths: Tuple[str, ...] = Field(default_factory=tuple)
    improvements: Tuple[str, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(default_factory=get_current_timestamp)
    student_response: Optional[str] = None

    @field_validator("category_scores")
    @classmethod
    def require_category_scores(cls, v, info: ValidationInfo):
        if not v:
            raise EmptyCategorySetError(info.data.get("id"))
        seen = set()
        for category_score in v:
            if category_score.category in seen:
                raise ValidationError(
                    f"Duplicate category '{category_score.category}' in category_scores",
                    details={"field": "category_scores", "category": category_score.category},
                )
            seen.add(category_score.category)
        return v

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v):
        return _as_utc(v)

    @computed_field
    @property
    def overall_score(self) -> int:
        from app.services.score_aggregator import compute_overall_score
        return compute_overall_score(self.category_scores)

    def acknowledge(self, response: str) -> "Evaluation":
        return self.model_copy(update={"student_response": response})


class Session(BaseModel):
    """
    Ordered evaluations from one interview or review encounter.
    Insertion order is question order. Frozen once completed_at is set.
    """
    model_config = ConfigDict(frozen=True)

    session_id: str = Field(default_factory=_new_id)
    subject_id: Optional[str] = None
    evaluations: Tuple[Evaluation, ...] = Field(default_factory=tuple)
    started_at: datetime = Field(default_factory=get_current_timestamp)
    completed_at: Optional[datetime] = None

    @field_validator("started_at", "completed_at")
    @classmethod
    def normalize_timestamps(cls, v):
        return _as_utc(v)

    @computed_field
    @property
    def aggregate_score(self) -> Optional[int]:
        from app.services.score_aggregator import compute_session_aggregate
        return compute_session_aggregate(self.evaluations)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def append(self, evaluation: Evaluation) -> "Session":
        """Return a new session with ``evaluation`` added at the end"""
        if self.is_completed:
            raise SessionClosedError(self.session_id)
        if evaluation.session_id is not None and evaluation.session_id != self.session_id:
            raise ValidationError(
                f"Evaluation {evaluation.id} belongs to session {evaluation.session_id}, not {self.session_id}",
                details={"field": "session_id", "evaluation_id": evaluation.id},
            )
        return self.model_copy(update={"evaluations": (*self.evaluations, evaluation)})

    def complete(self, at: Optional[datetime] = None) -> "Session":
        if self.is_completed:
            return self
        return self.model_copy(update={"completed_at": _as_utc(at) or get_current_timestamp()})


class TrendPoint(BaseModel):
    """
    One reporting period's aggregate plus per-source breakdown
    Sources with no evaluations in the period are absent from source_breakdown
    """
    period_label: str
    aggregate_score: int
    source_breakdown: Dict[str, int] = Field(default_factory=dict)
    evaluation_count: int


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Higher is more urgent"""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 2, Priority.MEDIUM: 1, Priority.LOW: 0}


class ActionItem(BaseModel):
    """
    Follow-up task owned by the student. pending -> completed only.
    """
    model_config = ConfigDict(frozen=True)

    priority: Priority
    description: str
    related_category: str
    subject_id: Optional[str] = None
    deadline: Optional[date] = None
    completed: bool = False

    @field_validator("related_category", mode="before")
    @classmethod
    def validate_category(cls, v):
        return parse_category(v)

    def mark_completed(self) -> "ActionItem":
        if self.completed:
            return self
        return self.model_copy(update={"completed": True})


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ImprovementArea(BaseModel):
    """
    Category still below target, with its latest score and direction
    """
    category: str
    current_score: int
    previous_score: Optional[int] = None
    target_score: int
    trend: TrendDirection


class FeedbackSummary(BaseModel):
    """
    Headline numbers for a student's feedback dashboard
    Time Complexity: O(1)
    Space Complexity: O(k) where k = number of categories
    """
    total_evaluations: int
    source_counts: Dict[str, int]
    average_score: int
    category_averages: Dict[str, int]
    strong_categories: List[str]  # Top 3 at or above threshold
    weak_categories: List[str]  # Bottom 3 below threshold, weakest first
