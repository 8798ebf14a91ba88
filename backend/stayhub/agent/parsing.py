"""Parsing of the model's JSON intent analysis."""

import json
import logging
import re

from pydantic import ValidationError

from stayhub.agent.errors import LLMResponseError
from stayhub.schemas.agent import IntentAnalysis

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?|\n?```\s*$", re.IGNORECASE)

PARSE_ERROR_MESSAGE = "Failed to parse AI response. The AI returned invalid JSON. Please try again."


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json … ```) if present."""
    return _FENCE_RE.sub("", text.strip()).strip()


def parse_analysis(text: str) -> IntentAnalysis:
    """Parse the model's reply into an ``IntentAnalysis``.

    Raises:
        LLMResponseError: If the reply is not a JSON object of the expected shape.
    """
    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("JSON parse error: %s; response text: %r", e, cleaned[:500])
        raise LLMResponseError(PARSE_ERROR_MESSAGE) from e

    if not isinstance(payload, dict):
        logger.error("Expected a JSON object, got %s", type(payload).__name__)
        raise LLMResponseError(PARSE_ERROR_MESSAGE)

    try:
        return IntentAnalysis.model_validate(payload)
    except ValidationError as e:
        logger.error("Unexpected analysis shape: %s", e)
        raise LLMResponseError(PARSE_ERROR_MESSAGE) from e
