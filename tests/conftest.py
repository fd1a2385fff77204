import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LLM_GATEWAY_API_KEY", "test-key")

import pytest

from screener.models.training import CRMExtension, RuleConfig, TrainingConfigLookup
from screener.utils.settings import GatewaySettings


@pytest.fixture
def gateway_settings():
    return GatewaySettings(api_key="test-key", base_url="https://gateway.test/v1", timeout=5)


@pytest.fixture
def sales_config():
    return RuleConfig(
        domain="Sales",
        min_experience_years=3,
        preferred_backgrounds=["B2B Sales", "SaaS Sales"],
        required_skills=["Cold Calling", "Negotiation"],
        communication_indicators=["Active Listening"],
        achievement_indicators=["Quota Achievement"],
        red_flags=["Frequent Job Changes"],
        evaluation_notes="Prefer hunters over farmers.",
    )


@pytest.fixture
def crm_config():
    return RuleConfig(
        domain="CRM",
        crm=CRMExtension(
            crm_tools=["Zendesk"],
            ticketing_experience_required=True,
            customer_interaction_depth="high",
            conflict_handling_importance=80,
        ),
    )


@pytest.fixture
def standalone_arguments():
    return {
        "scores": {
            "experience": 80, "skills": 75, "progression": 70,
            "achievements": 65, "communication": 85, "cultural_fit": 72,
        },
        "total_score": 75,
        "strengths_aligned": ["Consistent quota attainment"],
        "gaps_identified": ["No CRM tooling mentioned"],
        "red_flags": [{"type": "gap", "description": "Eight month employment gap"}],
        "interview_questions": [{"type": "behavioral", "question": "Walk me through your biggest deal."}],
        "recommendation": "Proceed to interview",
        "reasoning": "Strong sales record with minor gaps.",
    }


@pytest.fixture
def lookup_loader():
    """Factory for async config loaders returning a fixed lookup"""
    def factory(lookup: TrainingConfigLookup):
        async def loader(domain):
            return lookup
        return loader
    return factory
