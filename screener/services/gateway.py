"""
LLM gateway client (OpenAI-style /chat/completions with forced tool calls)
"""
import json
from typing import Any, Dict, List, Optional

import requests

from screener.utils.exceptions import (
    AnalysisFailedError,
    PaymentRequiredError,
    RateLimitError,
    UpstreamError,
    UpstreamUnavailableError,
)
from screener.utils.logging_config import get_logger, PerformanceMonitor
from screener.utils.settings import GatewaySettings

logger = get_logger(__name__)


class GatewayClient:
    """Sends one schema-constrained request per call. No retries."""

    def __init__(self, settings: GatewaySettings):
        self.settings = settings

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, system_prompt: str, user_prompt: str, tool: Dict[str, Any],
                      model: Optional[str] = None) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return {
            "model": model or self.settings.model,
            "messages": messages,
            "tools": [{"type": "function", "function": tool}],
            "tool_choice": {"type": "function", "function": {"name": tool["name"]}},
        }

    def call_tool(self, system_prompt: str, user_prompt: str, tool: Dict[str, Any],
                  model: Optional[str] = None) -> Dict[str, Any]:
        """Return the parsed arguments of the forced tool call.

        Raises a GatewayError subclass describing why no arguments are available.
        """
        payload = self.build_payload(system_prompt, user_prompt, tool, model=model)
        logger.info(f"Making request to AI Gateway: model={payload['model']} tool={tool['name']}")

        try:
            with PerformanceMonitor(f"gateway {tool['name']}", logger, threshold_ms=15000):
                resp = requests.post(
                    self.settings.completions_url,
                    headers=self._headers(),
                    json=payload,
                    timeout=self.settings.timeout,
                )
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.error(f"AI Gateway unreachable: {e}")
            raise UpstreamUnavailableError(f"AI Gateway unreachable: {e}", cause=e)

        logger.info(f"AI Gateway response status: {resp.status_code}")

        if resp.status_code == 429:
            raise RateLimitError(body=resp.text)
        if resp.status_code == 402:
            raise PaymentRequiredError(body=resp.text)
        if resp.status_code >= 500:
            logger.error(f"AI Gateway error: {resp.status_code} {resp.text[:500]}")
            raise UpstreamUnavailableError(status_code=resp.status_code, body=resp.text)
        if not resp.ok:
            logger.error(f"AI Gateway error: {resp.status_code} {resp.text[:500]}")
            raise UpstreamError(
                f"AI Gateway error ({resp.status_code}): {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        return self._extract_arguments(resp, tool["name"])

    @staticmethod
    def _extract_arguments(resp: requests.Response, tool_name: str) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise AnalysisFailedError("AI analysis failed: gateway returned invalid JSON", cause=e)

        try:
            tool_call = data["choices"][0]["message"]["tool_calls"][0]
            raw_arguments = tool_call["function"]["arguments"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"No tool call in response for {tool_name}")
            raise AnalysisFailedError("AI analysis failed: no tool call in response", cause=e)

        if isinstance(raw_arguments, dict):
            return raw_arguments
        try:
            arguments = json.loads(raw_arguments)
        except (TypeError, ValueError) as e:
            raise AnalysisFailedError("AI analysis failed: tool arguments are not valid JSON", cause=e)
        if not isinstance(arguments, dict):
            raise AnalysisFailedError("AI analysis failed: tool arguments are not an object")
        return arguments
