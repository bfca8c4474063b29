"""
Submission schemas
Payloads as collaborators send them: raw scores with a declared scale.
Conversion into feedback records goes through CategoryScore.from_raw.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

from app.schemas.feedback import ActionItem, CategoryScore, Evaluation, Priority, Session
from app.services.rating_model import ScoreScale, Source


class RawCategoryRating(BaseModel):
    """
    Schema for one raw category rating
    Time Complexity: O(1)
    Space Complexity: O(1)
    """
    category: str
    score: float
    scale: str = ScoreScale.PERCENT.value  # "0-100" (AI) or "0-5" (mentor stars)
    feedback_text: Optional[str] = ""
    suggestions: Optional[List[str]] = None

    def to_category_score(self) -> CategoryScore:
        return CategoryScore.from_raw(
            self.category,
            self.score,
            scale=self.scale,
            feedback_text=self.feedback_text or "",
            suggestions=self.suggestions,
        )


class EvaluationSubmission(BaseModel):
    """
    Schema for an evaluation produced by the LLM generator or a mentor form
    """
    id: Optional[str] = None
    subject_id: str
    session_id: Optional[str] = None
    source: Source = Source.AI
    scores: List[RawCategoryRating] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    student_response: Optional[str] = None

    def to_evaluation(self) -> Evaluation:
        fields = {
            "subject_id": self.subject_id,
            "session_id": self.session_id,
            "source": self.source,
            "category_scores": [rating.to_category_score() for rating in self.scores],
            "strengths": self.strengths,
            "improvements": self.improvements,
            "student_response": self.student_response,
        }
        if self.id:
            fields["id"] = self.id
        if self.created_at:
            fields["created_at"] = self.created_at
        return Evaluation(**fields)


class SessionSubmission(BaseModel):
    """
    Schema for a session replayed from persistence, evaluations in question order
    """
    session_id: Optional[str] = None
    subject_id: Optional[str] = None
    evaluations: List[EvaluationSubmission] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_session(self) -> Session:
        fields = {"subject_id": self.subject_id}
        if self.session_id:
            fields["session_id"] = self.session_id
        if self.started_at:
            fields["started_at"] = self.started_at
        session = Session(**fields)
        for submission in self.evaluations:
            session = session.append(submission.to_evaluation())
        if self.completed_at:
            session = session.complete(self.completed_at)
        return session


class MentorActionItem(BaseModel):
    """
    Schema for an action item written by a mentor
    """
    priority: Priority
    task: str
    related_category: str
    subject_id: Optional[str] = None
    deadline: Optional[date] = None
    completed: bool = False

    def to_action_item(self) -> ActionItem:
        return ActionItem(
            priority=self.priority,
            description=self.task,
            related_category=self.related_category,
            subject_id=self.subject_id,
            deadline=self.deadline,
            completed=self.completed,
        )


class EvaluationBatchRequest(BaseModel):
    """
    Schema for a batch of evaluations
    Time Complexity: O(1)
    Space Complexity: O(n) where n = number of evaluations
    """
    evaluations: List[EvaluationSubmission] = Field(default_factory=list)

    def to_evaluations(self) -> List[Evaluation]:
        return [submission.to_evaluation() for submission in self.evaluations]


class ActionItemsRequest(EvaluationBatchRequest):
    """
    Schema for action item derivation, optionally merged with mentor items
    """
    mentor_items: List[MentorActionItem] = Field(default_factory=list)
