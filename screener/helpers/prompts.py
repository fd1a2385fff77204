from typing import List, Optional

from screener.models.schemas import (
    ComparativeRequest,
    EvaluationRequest,
    QuickFitmentRequest,
    StandaloneRequest,
)
from screener.models.training import RuleConfig

COMPARATIVE_SYSTEM_PROMPT = (
    "You are an expert HR professional specialized in resume screening. "
    "Compare the AI evaluation with the user's assessment and provide detailed comparative feedback."
)

ANALYST_SYSTEM_PROMPT = (
    "You are an expert HR professional specializing in resume screening for {department} positions. "
    "Analyze resumes objectively using structured criteria."
)

CLOSING_INSTRUCTION = (
    "IMPORTANT: Use the above company-specific criteria to evaluate the resume. "
    "Weight the scores according to the percentages provided. "
    "Identify red flags based on the company's specific concerns. "
    "Highlight strengths that align with company requirements and gaps where the candidate "
    "falls short of these standards."
)

QUESTIONS_SYSTEM_PROMPT = (
    "You are an expert HR interviewer. Based on the candidate's resume and the department they're "
    "applying to, generate 6 tailored screening call questions. Mix behavioral and cultural fit questions. "
    "Each question should be specific to what you see in the resume - reference their actual experience, "
    "skills, or gaps."
)

QUESTIONS_RESUME_LIMIT = 4000


def _fmt(value: float) -> str:
    """Render 75.0 as 75 and 72.5 as 72.5"""
    return str(int(value)) if float(value).is_integer() else str(value)


def _joined(items: List[str]) -> str:
    return ", ".join(items)


def build_training_prompt(config: RuleConfig) -> str:
    """Render a rule config into the block appended to the system prompt.

    Output only depends on the config, so equal configs render identically.
    """
    parts: List[str] = []

    parts.append(f"\n\n=== COMPANY-SPECIFIC EVALUATION CRITERIA FOR {config.domain.upper()} ROLES ===\n")

    if config.min_experience_years > 0:
        parts.append(f"MINIMUM EXPERIENCE REQUIRED: {config.min_experience_years} years")

    if config.preferred_backgrounds:
        parts.append(f"\nPREFERRED BACKGROUNDS: {_joined(config.preferred_backgrounds)}")

    if config.required_skills:
        parts.append(f"\nREQUIRED SKILLS (Weightage: {config.skill_weightage}%): {_joined(config.required_skills)}")

    if config.communication_indicators:
        parts.append(
            f"\nCOMMUNICATION INDICATORS (Weightage: {config.communication_weightage}%): "
            f"{_joined(config.communication_indicators)}"
        )

    if config.achievement_indicators:
        parts.append(
            f"\nACHIEVEMENT INDICATORS (Weightage: {config.achievement_weightage}%): "
            f"{_joined(config.achievement_indicators)}"
        )

    if config.preferred_industries:
        parts.append(f"\nPREFERRED INDUSTRIES: {_joined(config.preferred_industries)}")

    if config.preferred_roles:
        parts.append(f"\nPREFERRED PREVIOUS ROLES: {_joined(config.preferred_roles)}")

    if config.red_flags:
        parts.append(f"\nRED FLAGS TO WATCH FOR: {_joined(config.red_flags)}")

    if config.positive_keywords:
        parts.append(f"\nPOSITIVE KEYWORDS: {_joined(config.positive_keywords)}")

    if config.negative_keywords:
        parts.append(f"\nNEGATIVE KEYWORDS: {_joined(config.negative_keywords)}")

    if config.required_behavioral_traits:
        parts.append(f"\nREQUIRED BEHAVIORAL TRAITS: {_joined(config.required_behavioral_traits)}")

    if config.is_crm and config.crm is not None:
        crm = config.crm
        if crm.crm_tools:
            parts.append(f"\nREQUIRED CRM TOOLS: {_joined(crm.crm_tools)}")
        if crm.ticketing_experience_required:
            parts.append("\nTICKETING EXPERIENCE: Required")
        parts.append(f"\nCUSTOMER INTERACTION DEPTH: {crm.customer_interaction_depth.value}")
        parts.append(f"\nCONFLICT HANDLING IMPORTANCE: {crm.conflict_handling_importance}%")

    parts.append("\nWEIGHTAGE MODEL:")
    parts.append(f"- Experience: {config.experience_weightage}%")
    parts.append(f"- Skills: {config.skill_weightage}%")
    parts.append(f"- Communication: {config.communication_weightage}%")
    parts.append(f"- Achievements: {config.achievement_weightage}%")
    parts.append(f"- Career Progression: {config.progression_weightage}%")
    parts.append(f"- Cultural Fit: {config.cultural_fit_weightage}%")

    if config.evaluation_notes.strip():
        parts.append(f"\nADDITIONAL INSTRUCTIONS: {config.evaluation_notes.strip()}")

    parts.append("\n=== END OF COMPANY CRITERIA ===\n")
    parts.append(f"\n{CLOSING_INSTRUCTION}")

    return "\n".join(parts)


def base_system_prompt(request: EvaluationRequest) -> str:
    if isinstance(request, ComparativeRequest):
        return COMPARATIVE_SYSTEM_PROMPT
    return ANALYST_SYSTEM_PROMPT.format(department=request.department)


def build_system_prompt(request: EvaluationRequest, training_prompt: Optional[str] = None) -> str:
    base = base_system_prompt(request)
    return f"{base}{training_prompt}" if training_prompt else base


def build_comparative_user_prompt(request: ComparativeRequest, training_applied: bool) -> str:
    card = request.scorecard
    criteria = (
        "\nEvaluate based on the company-specific criteria provided. "
        "Consider the weightage model when calculating scores.\n"
        if training_applied else ""
    )
    return f"""Compare AI and User evaluations for {request.candidate_name} applying for {request.department} position.

Resume: {request.resume_text}

User's Assessment:
- Experience: {_fmt(card.experience_score)}/100
- Skills: {_fmt(card.skills_score)}/100
- Progression: {_fmt(card.progression_score)}/100
- Achievements: {_fmt(card.achievements_score)}/100
- Communication: {_fmt(card.communication_score)}/100
- Cultural Fit: {_fmt(card.cultural_fit_score)}/100
- Total: {_fmt(card.total_score)}/100
{criteria}
Provide AI scores and detailed comparative feedback for each category. Identify where the user assessed accurately vs where they over/underestimated. Be specific and educational."""


def build_quick_fitment_user_prompt(request: QuickFitmentRequest) -> str:
    return f"""Analyze this resume against the job description for quick fitment screening:

Resume: {request.resume_text}

Job Description: {request.job_description}

Provide a focused analysis for HR professionals doing initial screening:
1. Calculate overall fitment percentage (0-100) using industry standards: Skills Match (30%), Experience Level (25%), Education Requirements (20%), Cultural Fit Indicators (15%), Career Progression (10%)
2. Identify matched skills/qualifications from the job description
3. Identify missing skills/qualifications that are critical for the role
4. Provide clear recommendation (RECOMMENDED/CONSIDER/NOT_RECOMMENDED)
5. Brief reasoning for the recommendation focusing on job-specific fit
6. Flag any obvious red flags for HR consideration

Focus on practical hiring decisions rather than detailed category breakdowns. Be concise and actionable for busy HR professionals."""


def build_standalone_user_prompt(request: StandaloneRequest, training_applied: bool) -> str:
    prompt = f"""Analyze this resume for {request.candidate_name} applying for {request.department} position:

{request.resume_text}"""
    if training_applied:
        prompt += f"""

Evaluate based on the company-specific criteria provided. In your analysis:
1. Score each category according to the company's weightage model
2. Identify strengths that align with company requirements
3. Highlight gaps compared to company standards
4. Flag any red flags specific to company concerns
5. Include a suitability summary for {request.department} role"""
    return prompt


def build_user_prompt(request: EvaluationRequest, training_applied: bool) -> str:
    if isinstance(request, ComparativeRequest):
        return build_comparative_user_prompt(request, training_applied)
    if isinstance(request, QuickFitmentRequest):
        return build_quick_fitment_user_prompt(request)
    return build_standalone_user_prompt(request, training_applied)


def build_questions_user_prompt(resume_text: str, department: str) -> str:
    return f"Department: {department}\n\nResume Content:\n{resume_text[:QUESTIONS_RESUME_LIMIT]}"
