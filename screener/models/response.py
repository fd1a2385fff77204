# models/response.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union


class CategoryScores(BaseModel):
    experience: float = Field(ge=0, le=100)
    skills: float = Field(ge=0, le=100)
    progression: float = Field(ge=0, le=100)
    achievements: float = Field(ge=0, le=100)
    communication: float = Field(ge=0, le=100)
    cultural_fit: float = Field(ge=0, le=100)

    def mean(self) -> float:
        values = [self.experience, self.skills, self.progression,
                  self.achievements, self.communication, self.cultural_fit]
        return sum(values) / len(values)


class CategoryFeedback(BaseModel):
    category: str
    user_score: float
    ai_score: float
    feedback: str
    performance: Literal["excellent", "good", "needs_improvement"]


class RedFlag(BaseModel):
    type: str
    description: str


class InterviewQuestion(BaseModel):
    type: Literal["behavioral", "cultural_fit"]
    question: str


class AnalysisMetadata(BaseModel):
    training_config_applied: bool = False
    domain: Optional[str] = None
    fallback_used: bool = False


class ComparativeResult(AnalysisMetadata):
    ai_scores: CategoryScores
    ai_total_score: float = Field(ge=0, le=100)
    user_total_score: float = Field(ge=0, le=100)
    comparative_feedback: List[CategoryFeedback]
    overall_feedback: str
    strengths_aligned: List[str] = Field(default_factory=list)
    gaps_identified: List[str] = Field(default_factory=list)
    red_flags: List[RedFlag]
    interview_questions: List[InterviewQuestion]
    recommendation: str
    reasoning: str
    suitability_summary: Optional[str] = None


class QuickFitmentResult(AnalysisMetadata):
    fitment_score: float = Field(ge=0, le=100)
    recommendation: Literal["RECOMMENDED", "CONSIDER", "NOT_RECOMMENDED"]
    status: str
    matched_skills: List[str]
    missing_skills: List[str]
    red_flags: List[str] = Field(default_factory=list)
    reasoning: str
    brief_summary: str


class StandaloneResult(AnalysisMetadata):
    scores: CategoryScores
    total_score: float = Field(ge=0, le=100)
    strengths_aligned: List[str] = Field(default_factory=list)
    gaps_identified: List[str] = Field(default_factory=list)
    red_flags: List[RedFlag]
    interview_questions: List[InterviewQuestion]
    recommendation: str
    reasoning: str
    suitability_summary: Optional[str] = None


EvaluationResult = Union[ComparativeResult, QuickFitmentResult, StandaloneResult]


# -------- Screening questions --------
class ScreeningQuestion(BaseModel):
    question_text: str
    category: Literal["behavioral", "cultural_fit"]
    hint: str


class ScreeningQuestionsResponse(BaseModel):
    questions: List[ScreeningQuestion] = Field(default_factory=list)
    error: Optional[str] = None
