"""
Integration tests for the feedback endpoints.

Tests cover:
- Scoring raw submissions on both scales
- Session aggregation
- Trends, action items and summary dashboards
- Error responses naming the offending field
"""

import pytest


class TestScoreEvaluations:
    """Tests for POST /api/feedback/evaluations/score"""

    def test_scores_ai_and_mentor_submissions(self, client, sample_submission, mentor_submission):
        response = client.post("/api/feedback/evaluations/score", json={
            "evaluations": [sample_submission, mentor_submission]
        })

        assert response.status_code == 200
        data = response.json()
        ai_eval, mentor_eval = data["evaluations"]
        assert ai_eval["overall_score"] == 81
        assert [cs["score"] for cs in mentor_eval["category_scores"]] == [90, 40]
        assert mentor_eval["overall_score"] == 65
        assert data["aggregate_score"] == 73

    def test_empty_batch_has_no_aggregate(self, client):
        response = client.post("/api/feedback/evaluations/score", json={"evaluations": []})
        assert response.status_code == 200
        assert response.json()["aggregate_score"] is None

    def test_star_rating_above_five_is_rejected(self, client, mentor_submission):
        mentor_submission["scores"][0]["score"] = 6
        response = client.post("/api/feedback/evaluations/score", json={"evaluations": [mentor_submission]})

        assert response.status_code == 400
        data = response.json()
        assert data["details"]["kind"] == "InvalidScoreKind"
        assert data["details"]["field"] == "format"
        assert data["details"]["scale"] == "0-5"

    def test_unknown_category_is_rejected(self, client, sample_submission):
        sample_submission["scores"][0]["category"] = "clarty"
        response = client.post("/api/feedback/evaluations/score", json={"evaluations": [sample_submission]})

        assert response.status_code == 400
        assert response.json()["details"]["category"] == "clarty"

    def test_evaluation_without_scores_is_rejected(self, client, sample_submission):
        sample_submission["scores"] = []
        response = client.post("/api/feedback/evaluations/score", json={"evaluations": [sample_submission]})

        assert response.status_code == 400
        assert response.json()["details"]["kind"] == "EmptyCategorySetKind"


class TestSessionAggregate:
    """Tests for POST /api/feedback/sessions/aggregate"""

    def test_session_aggregate(self, client, sample_submission):
        second = dict(sample_submission, id="eval-3", scores=[{"category": "clarity", "score": 61}])
        response = client.post("/api/feedback/sessions/aggregate", json={
            "session_id": "session-1",
            "evaluations": [sample_submission, second],
            "completed_at": "2024-01-15T11:00:00Z"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["aggregate_score"] == 71
        assert [e["id"] for e in data["evaluations"]] == ["eval-1", "eval-3"]
        assert data["completed_at"] is not None

    def test_empty_session_aggregate_is_null(self, client):
        response = client.post("/api/feedback/sessions/aggregate", json={"session_id": "session-2"})
        assert response.status_code == 200
        assert response.json()["aggregate_score"] is None

    def test_evaluation_from_other_session_is_rejected(self, client, sample_submission):
        response = client.post("/api/feedback/sessions/aggregate", json={
            "session_id": "session-9",
            "evaluations": [sample_submission]
        })
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "session_id"


class TestDashboards:
    """Tests for trends, action items and summary"""

    def test_monthly_trend(self, client, sample_submission, mentor_submission):
        response = client.post("/api/feedback/trends?period=month", json={
            "evaluations": [mentor_submission, sample_submission]
        })

        assert response.status_code == 200
        trend = response.json()["trend_data"]
        assert [point["period_label"] for point in trend] == ["Jan 2024", "Feb 2024"]
        assert trend[0]["source_breakdown"] == {"ai": 81}
        assert trend[1]["source_breakdown"] == {"mentor": 65}

    def test_trend_of_nothing_is_empty(self, client):
        response = client.post("/api/feedback/trends", json={"evaluations": []})
        assert response.status_code == 200
        assert response.json()["trend_data"] == []

    def test_invalid_period(self, client):
        response = client.post("/api/feedback/trends?period=year", json={"evaluations": []})
        assert response.status_code == 400
        assert "period" in response.json()["error"]

    def test_action_items_with_mentor_items(self, client, sample_submission, mentor_submission):
        response = client.post("/api/feedback/action-items?threshold=70", json={
            "evaluations": [sample_submission, mentor_submission],
            "mentor_items": [
                {"priority": "low", "task": "Add a portfolio link", "related_category": "presentation",
                 "subject_id": "student-1", "deadline": "2024-03-01"}
            ]
        })

        assert response.status_code == 200
        data = response.json()
        assert [(i["related_category"], i["priority"]) for i in data["action_items"]] == [
            ("impact", "high"),
            ("structure", "medium"),
            ("presentation", "low"),
        ]
        assert data["pending_count"] == 3

    def test_action_items_require_evaluations(self, client):
        response = client.post("/api/feedback/action-items", json={"evaluations": []})
        assert response.status_code == 400
        assert response.json()["details"]["kind"] == "NoEvaluationsKind"

    @pytest.mark.parametrize("category", ["presentaton", "clarity2"])
    def test_mentor_item_with_unknown_category(self, client, sample_submission, category):
        response = client.post("/api/feedback/action-items", json={
            "evaluations": [sample_submission],
            "mentor_items": [{"priority": "low", "task": "Polish", "related_category": category}]
        })
        assert response.status_code == 400
        assert response.json()["details"]["category"] == category

    def test_summary(self, client, sample_submission, mentor_submission):
        response = client.post("/api/feedback/summary", json={
            "evaluations": [sample_submission, mentor_submission]
        })

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["total_evaluations"] == 2
        assert data["summary"]["source_counts"] == {"ai": 1, "mentor": 1}
        assert data["summary"]["weak_categories"] == ["impact", "structure"]
        assert [area["category"] for area in data["improvement_areas"]] == ["impact", "structure"]


class TestServiceEndpoints:
    """Tests for health and root endpoints"""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["api_base"] == "/api/feedback"
