from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional, Union
from enum import Enum

DEFAULT_CANDIDATE_NAME = "Candidate"


class EvaluationMode(str, Enum):
    COMPARATIVE = "comparative"
    QUICK_FITMENT = "quick_fitment"
    STANDALONE = "standalone"


# -------- Inbound payload --------
class UserScorecard(BaseModel):
    """Trainee's own scores for the resume"""
    experience_score: float = Field(default=0, ge=0, le=100)
    skills_score: float = Field(default=0, ge=0, le=100)
    progression_score: float = Field(default=0, ge=0, le=100)
    achievements_score: float = Field(default=0, ge=0, le=100)
    communication_score: float = Field(default=0, ge=0, le=100)
    cultural_fit_score: float = Field(default=0, ge=0, le=100)
    total_score: float = Field(default=0, ge=0, le=100)

    def category_scores(self) -> Dict[str, float]:
        """Sub-scores keyed by the category names used in AI results"""
        return {
            "experience": self.experience_score,
            "skills": self.skills_score,
            "progression": self.progression_score,
            "achievements": self.achievements_score,
            "communication": self.communication_score,
            "cultural_fit": self.cultural_fit_score,
        }


class AnalyzeResumePayload(BaseModel):
    """Request body for /analyze-resume

    ``free_screen_mode`` and ``basic_fitment_only`` are client display hints.
    Mode selection ignores them; they are only logged.
    """
    resume_text: str = Field(min_length=1)
    department: str = Field(min_length=1)
    candidate_name: str = DEFAULT_CANDIDATE_NAME
    job_description: Optional[str] = None
    free_screen_mode: bool = False
    basic_fitment_only: bool = False
    user_scorecard: Optional[UserScorecard] = None
    assessment_complete: bool = False

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "AnalyzeResumePayload":
        """Accept both the current body and the legacy camelCase one."""
        if body.get("resume_text") or "resumeText" not in body:
            return cls(**{k: v for k, v in body.items() if v is not None})

        legacy_scores = body.get("userScores")
        scorecard = None
        if legacy_scores:
            scorecard = UserScorecard(
                experience_score=legacy_scores.get("experience") or 0,
                skills_score=legacy_scores.get("skills") or 0,
                progression_score=legacy_scores.get("progression") or 0,
                achievements_score=legacy_scores.get("achievements") or 0,
                communication_score=legacy_scores.get("communication") or 0,
                cultural_fit_score=legacy_scores.get("cultural_fit") or 0,
                total_score=legacy_scores.get("total_score") or 0,
            )
        return cls(
            resume_text=body.get("resumeText") or "",
            department=body.get("department") or "",
            candidate_name=body.get("candidateName") or DEFAULT_CANDIDATE_NAME,
            user_scorecard=scorecard,
            # Legacy callers only sent scores once the assessment was done
            assessment_complete=scorecard is not None,
        )

    @property
    def effective_scorecard(self) -> Optional[UserScorecard]:
        if self.user_scorecard is not None and self.assessment_complete:
            return self.user_scorecard
        return None

    def to_request(self) -> "EvaluationRequest":
        common = {
            "resume_text": self.resume_text,
            "department": self.department,
            "candidate_name": self.candidate_name,
        }
        mode = select_mode(self.effective_scorecard, self.job_description)
        if mode == EvaluationMode.COMPARATIVE:
            return ComparativeRequest(scorecard=self.effective_scorecard, **common)
        if mode == EvaluationMode.QUICK_FITMENT:
            return QuickFitmentRequest(job_description=self.job_description, **common)
        return StandaloneRequest(**common)


class ScreeningQuestionsPayload(BaseModel):
    """Request body for /generate-screening-questions"""
    resume_text: Optional[str] = None
    department: Optional[str] = None


# -------- Evaluation requests --------
class BaseEvaluationRequest(BaseModel):
    resume_text: str
    department: str
    candidate_name: str = DEFAULT_CANDIDATE_NAME


class ComparativeRequest(BaseEvaluationRequest):
    mode: Literal[EvaluationMode.COMPARATIVE] = EvaluationMode.COMPARATIVE
    scorecard: UserScorecard


class QuickFitmentRequest(BaseEvaluationRequest):
    mode: Literal[EvaluationMode.QUICK_FITMENT] = EvaluationMode.QUICK_FITMENT
    job_description: str = Field(min_length=1)


class StandaloneRequest(BaseEvaluationRequest):
    mode: Literal[EvaluationMode.STANDALONE] = EvaluationMode.STANDALONE


EvaluationRequest = Union[ComparativeRequest, QuickFitmentRequest, StandaloneRequest]


def select_mode(scorecard: Optional[UserScorecard], job_description: Optional[str]) -> EvaluationMode:
    """Scorecard wins over job description; neither means standalone."""
    if scorecard is not None:
        return EvaluationMode.COMPARATIVE
    if job_description and job_description.strip():
        return EvaluationMode.QUICK_FITMENT
    return EvaluationMode.STANDALONE


SCORE_CATEGORIES: List[str] = [
    "experience",
    "skills",
    "progression",
    "achievements",
    "communication",
    "cultural_fit",
]
