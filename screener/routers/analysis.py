from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.responses import JSONResponse

from screener.models.response import ScreeningQuestionsResponse
from screener.models.schemas import AnalyzeResumePayload, ScreeningQuestionsPayload
from screener.services.evaluator import Evaluator
from screener.services.gateway import GatewayClient
from screener.services.questions import generate_screening_questions
from screener.utils.exceptions import PaymentRequiredError, RateLimitError
from screener.utils.logging_config import get_logger
from screener.utils.settings import GatewaySettings, get_gateway_settings

router = APIRouter(tags=["analysis"])
logger = get_logger(__name__)


def get_evaluator(settings: GatewaySettings = Depends(get_gateway_settings)) -> Evaluator:
    return Evaluator(settings)


def get_gateway(settings: GatewaySettings = Depends(get_gateway_settings)) -> GatewayClient:
    return GatewayClient(settings)


@router.options("/analyze-resume")
@router.options("/generate-screening-questions")
async def preflight():
    """Bare OPTIONS; browser preflights are answered by the CORS middleware"""
    return Response(status_code=204)


@router.post("/analyze-resume")
async def analyze_resume(
    request: Request,
    body: Dict[str, Any] = Body(...),
    evaluator: Evaluator = Depends(get_evaluator),
):
    """Evaluate a resume in comparative, quick-fitment or standalone mode"""
    request_id = getattr(request.state, 'request_id', 'unknown')

    payload = AnalyzeResumePayload.from_body(body)
    evaluation_request = payload.to_request()

    logger.info(
        f"Analyzing resume for: {payload.candidate_name} Department: {payload.department}",
        extra={
            "request_id": request_id,
            "mode": evaluation_request.mode.value,
            "free_screen_mode": payload.free_screen_mode,
            "basic_fitment_only": payload.basic_fitment_only,
        }
    )

    result = await evaluator.evaluate(evaluation_request)

    logger.info(
        "Analysis complete",
        extra={"request_id": request_id, "fallback_used": result.fallback_used}
    )
    return JSONResponse(content=result.model_dump(exclude_none=True))


@router.post("/generate-screening-questions", response_model=ScreeningQuestionsResponse)
async def screening_questions(
    body: ScreeningQuestionsPayload,
    gateway: GatewayClient = Depends(get_gateway),
):
    """Generate six tailored screening-call questions for a resume"""
    if not body.resume_text or not body.department:
        return JSONResponse(
            status_code=400,
            content={"error": "resume_text and department are required", "questions": []},
        )

    try:
        questions = await generate_screening_questions(gateway, body.resume_text, body.department)
    except RateLimitError:
        return JSONResponse(
            status_code=429,
            content={"error": "Rate limit exceeded. Please try again in a moment.", "questions": []},
        )
    except PaymentRequiredError:
        return JSONResponse(
            status_code=402,
            content={"error": "AI credits exhausted. Please add credits.", "questions": []},
        )

    return ScreeningQuestionsResponse(questions=questions)
