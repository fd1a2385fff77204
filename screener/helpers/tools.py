"""
Function-call descriptors sent to the LLM gateway.

Each evaluation mode forces exactly one tool, so the gateway returns
schema-shaped arguments instead of free text.
"""
from typing import Any, Dict

from screener.models.schemas import EvaluationMode, SCORE_CATEGORIES

COMPARE_TOOL = "compare_assessment"
FREE_SCREEN_TOOL = "free_screen_analysis"
ANALYZE_TOOL = "analyze_resume"
QUESTIONS_TOOL = "generate_questions"

TOOL_NAMES = {
    EvaluationMode.COMPARATIVE: COMPARE_TOOL,
    EvaluationMode.QUICK_FITMENT: FREE_SCREEN_TOOL,
    EvaluationMode.STANDALONE: ANALYZE_TOOL,
}

_SCORE = {"type": "number", "minimum": 0, "maximum": 100}

_CATEGORY_SCORES = {
    "type": "object",
    "properties": {name: dict(_SCORE) for name in SCORE_CATEGORIES},
    "required": list(SCORE_CATEGORIES),
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

_RED_FLAGS = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "type": {"type": "string"},
            "description": {"type": "string"},
        },
        "required": ["type", "description"],
    },
}

_INTERVIEW_QUESTIONS = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "type": {"type": "string", "enum": ["behavioral", "cultural_fit"]},
            "question": {"type": "string"},
        },
        "required": ["type", "question"],
    },
}

_SUITABILITY = {
    "type": "string",
    "description": "Brief summary of candidate suitability for the specific role",
}


def _strengths() -> Dict[str, Any]:
    return dict(_STRING_LIST, description="Candidate strengths that align with company standards")


def _gaps() -> Dict[str, Any]:
    return dict(_STRING_LIST, description="Areas where candidate falls short of company standards")


def comparative_tool() -> Dict[str, Any]:
    return {
        "name": COMPARE_TOOL,
        "description": "Return comparative analysis between user and AI assessment",
        "parameters": {
            "type": "object",
            "properties": {
                "ai_scores": _CATEGORY_SCORES,
                "ai_total_score": _SCORE,
                "user_total_score": _SCORE,
                "comparative_feedback": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "category": {"type": "string"},
                            "user_score": {"type": "number"},
                            "ai_score": {"type": "number"},
                            "feedback": {"type": "string"},
                            "performance": {"type": "string", "enum": ["excellent", "good", "needs_improvement"]},
                        },
                        "required": ["category", "user_score", "ai_score", "feedback", "performance"],
                    },
                },
                "overall_feedback": {"type": "string"},
                "strengths_aligned": _strengths(),
                "gaps_identified": _gaps(),
                "red_flags": _RED_FLAGS,
                "interview_questions": _INTERVIEW_QUESTIONS,
                "recommendation": {"type": "string"},
                "reasoning": {"type": "string"},
                "suitability_summary": _SUITABILITY,
            },
            "required": [
                "ai_scores", "ai_total_score", "user_total_score", "comparative_feedback",
                "overall_feedback", "red_flags", "interview_questions", "recommendation", "reasoning",
            ],
            "additionalProperties": False,
        },
    }


def quick_fitment_tool() -> Dict[str, Any]:
    return {
        "name": FREE_SCREEN_TOOL,
        "description": "Return simplified resume analysis focused on job fitment screening",
        "parameters": {
            "type": "object",
            "properties": {
                "fitment_score": _SCORE,
                "recommendation": {"type": "string", "enum": ["RECOMMENDED", "CONSIDER", "NOT_RECOMMENDED"]},
                "status": {"type": "string"},
                "matched_skills": dict(_STRING_LIST, description="Skills/qualifications that match the job requirements"),
                "missing_skills": dict(_STRING_LIST, description="Important skills/qualifications missing from resume"),
                "red_flags": dict(_STRING_LIST, description="Any obvious concerns or red flags"),
                "reasoning": {"type": "string"},
                "brief_summary": {"type": "string", "description": "One sentence summary for quick decision making"},
            },
            "required": [
                "fitment_score", "recommendation", "status", "matched_skills",
                "missing_skills", "reasoning", "brief_summary",
            ],
            "additionalProperties": False,
        },
    }


def standalone_tool() -> Dict[str, Any]:
    return {
        "name": ANALYZE_TOOL,
        "description": (
            "Return structured resume analysis with scores and recommendations "
            "based on company-specific criteria"
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "scores": _CATEGORY_SCORES,
                "total_score": _SCORE,
                "strengths_aligned": _strengths(),
                "gaps_identified": _gaps(),
                "red_flags": _RED_FLAGS,
                "interview_questions": _INTERVIEW_QUESTIONS,
                "recommendation": {"type": "string"},
                "reasoning": {"type": "string"},
                "suitability_summary": _SUITABILITY,
            },
            "required": ["scores", "total_score", "red_flags", "interview_questions", "recommendation", "reasoning"],
            "additionalProperties": False,
        },
    }


def questions_tool() -> Dict[str, Any]:
    return {
        "name": QUESTIONS_TOOL,
        "description": "Generate tailored screening call questions for the candidate",
        "parameters": {
            "type": "object",
            "properties": {
                "questions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "question_text": {"type": "string", "description": "The interview question to ask the candidate"},
                            "category": {
                                "type": "string",
                                "enum": ["behavioral", "cultural_fit"],
                                "description": "Whether it's a behavioral or cultural fit question",
                            },
                            "hint": {"type": "string", "description": "A brief tip for the interviewer on what to listen for"},
                        },
                        "required": ["question_text", "category", "hint"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["questions"],
            "additionalProperties": False,
        },
    }


_BUILDERS = {
    EvaluationMode.COMPARATIVE: comparative_tool,
    EvaluationMode.QUICK_FITMENT: quick_fitment_tool,
    EvaluationMode.STANDALONE: standalone_tool,
}


def tool_for_mode(mode: EvaluationMode) -> Dict[str, Any]:
    return _BUILDERS[mode]()
