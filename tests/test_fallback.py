import random

import pytest

from screener.models.response import ComparativeResult, QuickFitmentResult, StandaloneResult
from screener.models.schemas import ComparativeRequest, QuickFitmentRequest, StandaloneRequest, UserScorecard
from screener.services.fallback import FallbackScorer, performance_tag, round_half_up

TRIALS = 1000


def _scores(result):
    scores = result.ai_scores if isinstance(result, ComparativeResult) else result.scores
    return [scores.experience, scores.skills, scores.progression,
            scores.achievements, scores.communication, scores.cultural_fit]


class TestFallbackScorer:
    """Test cases for the local fallback scorer"""

    def test_comparative_scores_stay_in_clamped_range(self):
        """Jittered scores land in [30, 95] even for extreme human scores"""
        scorer = FallbackScorer(random.Random(7))
        rng = random.Random(11)

        for _ in range(TRIALS):
            scorecard = UserScorecard(
                experience_score=rng.randint(0, 100),
                skills_score=rng.randint(0, 100),
                progression_score=rng.choice([0, 100]),
                achievements_score=rng.randint(0, 100),
                communication_score=rng.randint(0, 100),
                cultural_fit_score=rng.randint(0, 100),
                total_score=rng.randint(0, 100),
            )
            result = scorer.score(ComparativeRequest(resume_text="r", department="Sales", scorecard=scorecard))

            scores = _scores(result)
            assert all(30 <= s <= 95 for s in scores)
            assert result.ai_total_score == round_half_up(sum(scores) / 6)
            assert result.user_total_score == scorecard.total_score

    def test_comparative_scores_track_human_scores(self):
        """Scores inside the clamp window move at most 10 points"""
        scorer = FallbackScorer(random.Random(3))
        scorecard = UserScorecard(
            experience_score=60, skills_score=60, progression_score=60,
            achievements_score=60, communication_score=60, cultural_fit_score=60,
        )

        for _ in range(TRIALS):
            result = scorer.comparative(ComparativeRequest(resume_text="r", department="Sales", scorecard=scorecard))
            assert all(50 <= s <= 70 for s in _scores(result))

    def test_unscored_categories_start_from_baseline(self):
        """Categories left at 0 are jittered around 70, and the 0 is echoed back"""
        scorer = FallbackScorer(random.Random(13))
        scorecard = UserScorecard(experience_score=75, total_score=75)

        for _ in range(TRIALS):
            result = scorer.comparative(ComparativeRequest(resume_text="r", department="Sales", scorecard=scorecard))

            scores = result.ai_scores
            assert 65 <= scores.experience <= 85
            for value in (scores.skills, scores.progression, scores.achievements,
                          scores.communication, scores.cultural_fit):
                assert 60 <= value <= 80
            feedback = {f.category: f.user_score for f in result.comparative_feedback}
            assert feedback["Skills"] == 0
            assert feedback["Experience"] == 75

    def test_standalone_scores_are_uniform_in_range(self):
        """Standalone scores land in [50, 90]"""
        scorer = FallbackScorer(random.Random(5))

        for _ in range(TRIALS):
            result = scorer.score(StandaloneRequest(resume_text="r", department="CRM"))

            scores = _scores(result)
            assert isinstance(result, StandaloneResult)
            assert all(50 <= s <= 90 for s in scores)
            assert result.total_score == round_half_up(sum(scores) / 6)

    def test_quick_fitment_fallback(self):
        """Quick fitment degrades to a bounded estimate with a CONSIDER recommendation"""
        scorer = FallbackScorer(random.Random(9))

        for _ in range(TRIALS):
            result = scorer.score(QuickFitmentRequest(resume_text="r", department="Sales", job_description="jd"))
            assert isinstance(result, QuickFitmentResult)
            assert 50 <= result.fitment_score <= 90
            assert result.recommendation == "CONSIDER"

    @pytest.mark.parametrize("request_obj", [
        StandaloneRequest(resume_text="r", department="CRM"),
        ComparativeRequest(resume_text="r", department="CRM", scorecard=UserScorecard()),
        QuickFitmentRequest(resume_text="r", department="CRM", job_description="jd"),
    ])
    def test_results_disclose_fallback(self, request_obj):
        result = FallbackScorer(random.Random(1)).score(request_obj)

        assert result.fallback_used is True
        assert "Fallback analysis" in result.reasoning

    def test_comparative_feedback_covers_every_category(self):
        scorecard = UserScorecard(experience_score=70)
        result = FallbackScorer(random.Random(2)).comparative(
            ComparativeRequest(resume_text="r", department="Sales", scorecard=scorecard)
        )

        assert [f.category for f in result.comparative_feedback] == [
            "Experience", "Skills", "Progression", "Achievements", "Communication", "Cultural Fit",
        ]
        assert "Sales" in result.interview_questions[1].question


class TestHelpers:

    @pytest.mark.parametrize("value,expected", [(72.5, 73), (72.4, 72), (71.5, 72), (0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("user,ai,tag", [(70, 73, "excellent"), (70, 82, "good"), (40, 70, "needs_improvement")])
    def test_performance_tag(self, user, ai, tag):
        assert performance_tag(user, ai) == tag
