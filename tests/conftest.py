"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Building evaluations from plain {category: score} mappings
- FastAPI test client
- Sample API payloads
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.schemas.feedback import CategoryScore, Evaluation


def build_evaluation(scores, source="ai", subject_id="student-1", created_at=None, suggestions=None, **kwargs):
    """
    Build an Evaluation from {category: score}.
    ``suggestions`` maps category -> list of suggestion strings.
    """
    suggestions = suggestions or {}
    category_scores = [
        CategoryScore(category=category, score=score, suggestions=suggestions.get(category, []))
        for category, score in scores.items()
    ]
    fields = {
        "subject_id": subject_id,
        "source": source,
        "category_scores": category_scores,
    }
    if created_at is not None:
        fields["created_at"] = created_at
    fields.update(kwargs)
    return Evaluation(**fields)


def at(year, month, day=1, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def make_evaluation():
    """Factory fixture wrapping build_evaluation"""
    return build_evaluation


@pytest.fixture
def client():
    """FastAPI test client"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_submission():
    """One AI-scored interview answer as the LLM collaborator sends it"""
    return {
        "id": "eval-1",
        "subject_id": "student-1",
        "session_id": "session-1",
        "source": "ai",
        "created_at": "2024-01-15T10:00:00Z",
        "scores": [
            {"category": "clarity", "score": 95, "suggestions": ["Keep answers concise"]},
            {"category": "confidence", "score": 90},
            {"category": "structure", "score": 60, "suggestions": ["Use the STAR method"]},
            {"category": "relevance", "score": 80},
        ],
        "strengths": ["Clear delivery"],
        "improvements": ["Answer structure"],
    }


@pytest.fixture
def mentor_submission():
    """A structured mentor review on the 0-5 star scale"""
    return {
        "id": "eval-2",
        "subject_id": "student-1",
        "source": "mentor",
        "created_at": "2024-02-10T09:00:00Z",
        "scores": [
            {"category": "format", "score": 4.5, "scale": "0-5"},
            {"category": "impact", "score": 2, "scale": "0-5", "suggestions": ["Quantify your achievements"]},
        ],
    }
