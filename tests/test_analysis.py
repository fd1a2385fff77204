import json
import logging
import random

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch

from screener.models.training import TrainingConfigLookup
from screener.services.evaluator import Evaluator
from screener.services.fallback import FallbackScorer


def gateway_response(status_code, body=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.text = text or json.dumps(body or {})
    resp.json.return_value = body or {}
    return resp


@pytest.fixture
def test_app():
    from screener.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


@pytest.fixture
def use_evaluator(test_app, gateway_settings, lookup_loader):
    """Install an evaluator backed by the real gateway client and a fixed rule lookup"""
    from screener.routers.analysis import get_evaluator

    def install(lookup=None, settings=None):
        evaluator = Evaluator(
            settings or gateway_settings,
            fallback=FallbackScorer(random.Random(0)),
            config_loader=lookup_loader(lookup or TrainingConfigLookup()),
        )
        test_app.dependency_overrides[get_evaluator] = lambda: evaluator
        return evaluator
    return install


class TestAnalyzeResume:
    """Test cases for /analyze-resume"""

    @patch('screener.services.gateway.requests.post')
    def test_standalone_success(self, mock_post, client, use_evaluator, standalone_arguments):
        use_evaluator()
        mock_post.return_value = gateway_response(200, {"choices": [{"message": {"tool_calls": [
            {"function": {"name": "analyze_resume", "arguments": json.dumps(standalone_arguments)}}
        ]}}]})

        response = client.post("/analyze-resume", json={"resume_text": "Jane Doe, AE", "department": "Sales"})

        assert response.status_code == 200
        data = response.json()
        assert data["total_score"] == 75
        assert data["training_config_applied"] is False
        assert data["domain"] == "Sales"
        assert data["fallback_used"] is False

    @patch('screener.services.gateway.requests.post')
    def test_rate_limit_returns_fallback_with_200(self, mock_post, client, use_evaluator):
        use_evaluator()
        mock_post.return_value = gateway_response(429, text="slow down")

        response = client.post("/analyze-resume", json={"resume_text": "Jane Doe, AE", "department": "Sales"})

        assert response.status_code == 200
        data = response.json()
        assert "scores" in data
        assert "Fallback analysis" in data["reasoning"]
        assert data["fallback_used"] is True

    @patch('screener.services.gateway.requests.post')
    def test_rate_limit_surfaces_429_when_fallback_disabled(self, mock_post, client, use_evaluator, gateway_settings):
        use_evaluator(settings=gateway_settings.model_copy(update={"fallback_enabled": False}))
        mock_post.return_value = gateway_response(429, text="slow down")

        response = client.post("/analyze-resume", json={"resume_text": "Jane Doe, AE", "department": "Sales"})

        assert response.status_code == 429
        assert "Rate limit" in response.json()["error"]

    @patch('screener.services.gateway.requests.post')
    def test_malformed_success_returns_500(self, mock_post, client, use_evaluator):
        use_evaluator()
        mock_post.return_value = gateway_response(200, {"choices": [{"message": {"content": "hello"}}]})

        response = client.post("/analyze-resume", json={"resume_text": "Jane Doe, AE", "department": "Sales"})

        assert response.status_code == 500
        assert "analysis failed" in response.json()["error"].lower()

    @pytest.mark.parametrize("status", [401, 403])
    @patch('screener.services.gateway.requests.post')
    def test_auth_failure_propagates_status(self, mock_post, status, client, use_evaluator):
        use_evaluator()
        mock_post.return_value = gateway_response(status, text="bad key")

        response = client.post("/analyze-resume", json={"resume_text": "Jane Doe, AE", "department": "Sales"})

        assert response.status_code == status
        assert "bad key" in response.json()["error"]

    @patch('screener.services.gateway.requests.post')
    def test_scorecard_requires_assessment_complete(self, mock_post, client, use_evaluator):
        use_evaluator()
        mock_post.return_value = gateway_response(503, text="down")
        scorecard = {"experience_score": 75, "skills_score": 82, "total_score": 77}

        incomplete = client.post("/analyze-resume", json={
            "resume_text": "Jane Doe, AE", "department": "CRM", "user_scorecard": scorecard,
        })
        complete = client.post("/analyze-resume", json={
            "resume_text": "Jane Doe, AE", "department": "CRM", "user_scorecard": scorecard,
            "assessment_complete": True,
        })

        assert "scores" in incomplete.json()
        assert "ai_scores" in complete.json()
        assert complete.json()["user_total_score"] == 77

    @patch('screener.services.gateway.requests.post')
    def test_job_description_selects_quick_fitment(self, mock_post, client, use_evaluator):
        use_evaluator()
        mock_post.return_value = gateway_response(500, text="boom")

        response = client.post("/analyze-resume", json={
            "resume_text": "Jane Doe, AE", "department": "Sales",
            "job_description": "Senior account executive", "free_screen_mode": True,
        })

        assert response.status_code == 200
        assert response.json()["recommendation"] == "CONSIDER"
        tool_name = mock_post.call_args[1]["json"]["tool_choice"]["function"]["name"]
        assert tool_name == "free_screen_analysis"

    @patch('screener.services.gateway.requests.post')
    def test_display_flags_are_logged_not_used_for_mode(self, mock_post, client, use_evaluator, caplog):
        use_evaluator()
        mock_post.return_value = gateway_response(503, text="down")
        caplog.set_level(logging.INFO, logger="screener.routers.analysis")

        response = client.post("/analyze-resume", json={
            "resume_text": "Jane Doe, AE", "department": "Sales",
            "free_screen_mode": True, "basic_fitment_only": True,
        })

        assert response.status_code == 200
        assert "scores" in response.json()
        record = next(r for r in caplog.records if r.getMessage().startswith("Analyzing resume for"))
        assert record.mode == "standalone"
        assert record.free_screen_mode is True
        assert record.basic_fitment_only is True

    @patch('screener.services.gateway.requests.post')
    def test_legacy_body_is_accepted(self, mock_post, client, use_evaluator):
        use_evaluator()
        mock_post.return_value = gateway_response(502, text="bad gateway")

        response = client.post("/analyze-resume", json={
            "resumeText": "Jane Doe, AE", "candidateName": "Jane", "department": "Sales",
            "userScores": {"experience": 70, "skills": 60, "total_score": 65},
        })

        assert response.status_code == 200
        assert response.json()["user_total_score"] == 65
        user_message = mock_post.call_args[1]["json"]["messages"][1]["content"]
        assert user_message.startswith("Compare AI and User evaluations for Jane")

    def test_missing_fields_is_400(self, client, use_evaluator):
        use_evaluator()

        response = client.post("/analyze-resume", json={"department": "Sales"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_invalid_json_is_400(self, client, use_evaluator):
        use_evaluator()

        response = client.post(
            "/analyze-resume", content="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request data validation failed"

    def test_bare_options_returns_204(self, client):
        response = client.options("/analyze-resume")

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.parametrize("path,request_headers", [
        ("/analyze-resume", "content-type"),
        ("/generate-screening-questions", "authorization, content-type, x-supabase-client-platform"),
        ("/generate-screening-questions", "x-supabase-client-runtime, x-supabase-client-runtime-version"),
    ])
    def test_cors_preflight_returns_204(self, client, path, request_headers):
        response = client.options(path, headers={
            "Origin": "https://trainer.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": request_headers,
        })

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "x-supabase-client-platform" in response.headers["access-control-allow-headers"]

    def test_cors_preflight_rejects_unknown_header(self, client):
        response = client.options("/analyze-resume", headers={
            "Origin": "https://trainer.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "x-unknown-header",
        })

        assert response.status_code == 400


class TestScreeningQuestions:
    """Test cases for /generate-screening-questions"""

    @pytest.fixture(autouse=True)
    def override_gateway(self, test_app, gateway_settings):
        from screener.routers.analysis import get_gateway
        from screener.services.gateway import GatewayClient
        test_app.dependency_overrides[get_gateway] = lambda: GatewayClient(gateway_settings)

    @patch('screener.services.gateway.requests.post')
    def test_questions_success(self, mock_post, client):
        questions = [{"question_text": "Why CRM?", "category": "cultural_fit", "hint": "Look for motivation"}]
        mock_post.return_value = gateway_response(200, {"choices": [{"message": {"tool_calls": [
            {"function": {"name": "generate_questions", "arguments": json.dumps({"questions": questions})}}
        ]}}]})

        response = client.post("/generate-screening-questions", json={"resume_text": "resume", "department": "CRM"})

        assert response.status_code == 200
        assert response.json()["questions"] == questions
        assert mock_post.call_args[1]["json"]["model"] == "google/gemini-3-flash-preview"

    def test_questions_require_fields(self, client):
        response = client.post("/generate-screening-questions", json={"resume_text": "resume"})

        assert response.status_code == 400
        assert response.json()["questions"] == []

    @pytest.mark.parametrize("status", [429, 402])
    @patch('screener.services.gateway.requests.post')
    def test_questions_capacity_errors_surface(self, mock_post, status, client):
        mock_post.return_value = gateway_response(status, text="nope")

        response = client.post("/generate-screening-questions", json={"resume_text": "resume", "department": "CRM"})

        assert response.status_code == status
        assert response.json()["questions"] == []

    @pytest.mark.parametrize("status", [500, 401])
    @patch('screener.services.gateway.requests.post')
    def test_questions_other_failures_return_empty(self, mock_post, status, client):
        mock_post.return_value = gateway_response(status, text="nope")

        response = client.post("/generate-screening-questions", json={"resume_text": "resume", "department": "CRM"})

        assert response.status_code == 200
        assert response.json()["questions"] == []
