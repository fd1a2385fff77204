"""
Resume evaluation pipeline: rules -> prompt -> gateway -> (result | fallback)
"""
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError

from screener.helpers.prompts import build_system_prompt, build_training_prompt, build_user_prompt
from screener.helpers.tools import tool_for_mode
from screener.models.response import (
    ComparativeResult,
    EvaluationResult,
    QuickFitmentResult,
    StandaloneResult,
)
from screener.models.schemas import EvaluationMode, EvaluationRequest
from screener.models.training import TrainingConfigLookup
from screener.services.fallback import FallbackScorer
from screener.services.gateway import GatewayClient
from screener.services.training_config import load_training_config
from screener.utils.exceptions import AnalysisFailedError, GatewayError
from screener.utils.logging_config import get_logger
from screener.utils.settings import GatewaySettings

logger = get_logger(__name__)

RESULT_MODELS = {
    EvaluationMode.COMPARATIVE: ComparativeResult,
    EvaluationMode.QUICK_FITMENT: QuickFitmentResult,
    EvaluationMode.STANDALONE: StandaloneResult,
}

ConfigLoader = Callable[[str], Awaitable[TrainingConfigLookup]]


class PreparedRequest(NamedTuple):
    system_prompt: str
    user_prompt: str
    tool: Dict[str, Any]


def prepare_request(request: EvaluationRequest, lookup: TrainingConfigLookup) -> PreparedRequest:
    """Compose the messages and forced tool for one evaluation."""
    training_prompt = build_training_prompt(lookup.config) if lookup.config is not None else None
    return PreparedRequest(
        system_prompt=build_system_prompt(request, training_prompt),
        user_prompt=build_user_prompt(request, lookup.applied),
        tool=tool_for_mode(request.mode),
    )


def parse_result(mode: EvaluationMode, arguments: Dict[str, Any]) -> EvaluationResult:
    model = RESULT_MODELS[mode]
    try:
        return model(**arguments)
    except PydanticValidationError as e:
        logger.error(f"Tool arguments do not match the {mode.value} result shape: {e}")
        raise AnalysisFailedError("AI analysis failed: response did not match the expected schema", cause=e)


class Evaluator:
    def __init__(
        self,
        settings: GatewaySettings,
        gateway: Optional[GatewayClient] = None,
        fallback: Optional[FallbackScorer] = None,
        config_loader: ConfigLoader = load_training_config,
    ):
        self.settings = settings
        self.gateway = gateway or GatewayClient(settings)
        self.fallback = fallback or FallbackScorer()
        self.config_loader = config_loader

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        lookup = await self.config_loader(request.department)
        if lookup.degraded:
            logger.warning(f"Evaluating {request.department} with default rules: {lookup.error}")
        logger.info(
            f"Analyzing resume mode={request.mode.value} department={request.department} "
            f"training_enabled={lookup.training_enabled} config_found={lookup.applied}"
        )

        prepared = prepare_request(request, lookup)

        try:
            arguments = await run_in_threadpool(
                self.gateway.call_tool, prepared.system_prompt, prepared.user_prompt, prepared.tool
            )
        except GatewayError as e:
            if not (e.fallback_eligible and self.settings.fallback_enabled):
                raise
            logger.warning(
                f"AI service unavailable ({e.error_code}), generating fallback analysis",
                extra={"gateway_error": e.to_dict()}
            )
            result = self.fallback.score(request)
        else:
            result = parse_result(request.mode, arguments)
            result.fallback_used = False

        result.training_config_applied = lookup.applied
        result.domain = request.department
        return result
