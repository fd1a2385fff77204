"""
Tailored screening-call questions for a resume.

Only rate limiting and billing errors reach the caller; every other failure
returns an empty list so the client can use its stored question bank.
"""
from typing import List

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError

from screener.helpers.prompts import QUESTIONS_SYSTEM_PROMPT, build_questions_user_prompt
from screener.helpers.tools import questions_tool
from screener.models.response import ScreeningQuestion
from screener.services.gateway import GatewayClient
from screener.utils.exceptions import GatewayError, PaymentRequiredError, RateLimitError
from screener.utils.logging_config import get_logger

logger = get_logger(__name__)


async def generate_screening_questions(gateway: GatewayClient, resume_text: str, department: str) -> List[ScreeningQuestion]:
    try:
        arguments = await run_in_threadpool(
            gateway.call_tool,
            QUESTIONS_SYSTEM_PROMPT,
            build_questions_user_prompt(resume_text, department),
            questions_tool(),
            gateway.settings.questions_model,
        )
    except (RateLimitError, PaymentRequiredError):
        raise
    except GatewayError as e:
        logger.error(f"Screening question generation failed, returning no questions: {e.message}")
        return []

    try:
        return [ScreeningQuestion(**item) for item in arguments.get("questions") or []]
    except (PydanticValidationError, TypeError) as e:
        logger.error(f"Screening questions did not match the expected shape: {e}")
        return []
