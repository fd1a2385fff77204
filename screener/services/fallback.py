"""
Local stand-in scorer used while the LLM gateway is unavailable.

Scores are random within fixed bounds and every result states that AI analysis
was not performed, so the UI can show reduced confidence.
"""
import math
import random
from typing import List, Optional

from screener.models.response import (
    CategoryFeedback,
    CategoryScores,
    ComparativeResult,
    EvaluationResult,
    InterviewQuestion,
    QuickFitmentResult,
    StandaloneResult,
)
from screener.models.schemas import (
    ComparativeRequest,
    EvaluationRequest,
    QuickFitmentRequest,
    SCORE_CATEGORIES,
)

JITTER = 10
# Categories the trainee left unscored (0) are jittered around this value
UNSCORED_BASELINE = 70
COMPARATIVE_MIN, COMPARATIVE_MAX = 30, 95
UNIFORM_MIN, UNIFORM_MAX = 50, 90

FALLBACK_RECOMMENDATION = "AI analysis temporarily unavailable - manual review recommended."
FALLBACK_REASONING = (
    "Fallback analysis generated due to AI service unavailability. "
    "Scores are estimates and were not produced by AI analysis."
)
FALLBACK_OVERALL_FEEDBACK = (
    "This is a fallback analysis generated while AI services are temporarily unavailable. "
    "Complete analysis will be available when services are restored."
)
FALLBACK_CATEGORY_FEEDBACK = (
    "AI analysis temporarily unavailable. Score generated based on assessment patterns."
)

CATEGORY_LABELS = {
    "experience": "Experience",
    "skills": "Skills",
    "progression": "Progression",
    "achievements": "Achievements",
    "communication": "Communication",
    "cultural_fit": "Cultural Fit",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def performance_tag(user_score: float, ai_score: float) -> str:
    gap = abs(user_score - ai_score)
    if gap <= 5:
        return "excellent"
    if gap <= 15:
        return "good"
    return "needs_improvement"


class FallbackScorer:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def score(self, request: EvaluationRequest) -> EvaluationResult:
        if isinstance(request, ComparativeRequest):
            return self.comparative(request)
        if isinstance(request, QuickFitmentRequest):
            return self.quick_fitment(request)
        return self.standalone(request)

    def _jittered(self, human_score: float) -> int:
        value = (human_score or UNSCORED_BASELINE) + self.rng.uniform(-JITTER, JITTER)
        return int(clamp(round_half_up(value), COMPARATIVE_MIN, COMPARATIVE_MAX))

    def _uniform(self) -> int:
        return self.rng.randint(UNIFORM_MIN, UNIFORM_MAX)

    @staticmethod
    def _questions(department: str, opener: str, fit_question: str) -> List[InterviewQuestion]:
        return [
            InterviewQuestion(type="behavioral", question=opener),
            InterviewQuestion(type="cultural_fit", question=fit_question.format(department=department)),
        ]

    def comparative(self, request: ComparativeRequest) -> ComparativeResult:
        human = request.scorecard.category_scores()
        ai = {name: self._jittered(human[name]) for name in SCORE_CATEGORIES}
        scores = CategoryScores(**ai)

        feedback = [
            CategoryFeedback(
                category=CATEGORY_LABELS[name],
                user_score=human[name],
                ai_score=ai[name],
                feedback=FALLBACK_CATEGORY_FEEDBACK,
                performance=performance_tag(human[name], ai[name]),
            )
            for name in SCORE_CATEGORIES
        ]

        return ComparativeResult(
            ai_scores=scores,
            ai_total_score=round_half_up(scores.mean()),
            user_total_score=request.scorecard.total_score,
            comparative_feedback=feedback,
            overall_feedback=FALLBACK_OVERALL_FEEDBACK,
            red_flags=[],
            interview_questions=self._questions(
                request.department,
                "Tell me about a challenging project you worked on.",
                "How do you align with {department} team values?",
            ),
            recommendation=FALLBACK_RECOMMENDATION,
            reasoning=FALLBACK_REASONING,
            fallback_used=True,
        )

    def standalone(self, request: EvaluationRequest) -> StandaloneResult:
        scores = CategoryScores(**{name: self._uniform() for name in SCORE_CATEGORIES})
        return StandaloneResult(
            scores=scores,
            total_score=round_half_up(scores.mean()),
            red_flags=[],
            interview_questions=self._questions(
                request.department,
                "Describe your experience with customer service.",
                "What interests you about working in {department}?",
            ),
            recommendation=FALLBACK_RECOMMENDATION,
            reasoning=FALLBACK_REASONING,
            fallback_used=True,
        )

    def quick_fitment(self, request: QuickFitmentRequest) -> QuickFitmentResult:
        return QuickFitmentResult(
            fitment_score=self._uniform(),
            recommendation="CONSIDER",
            status="Manual review required",
            matched_skills=[],
            missing_skills=[],
            red_flags=[],
            reasoning=FALLBACK_REASONING,
            brief_summary="AI screening unavailable; fitment score is an estimate pending manual review.",
            fallback_used=True,
        )
