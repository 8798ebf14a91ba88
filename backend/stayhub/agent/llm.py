"""Language-model calls with bounded retries and model fallback.

The configured model is tried first. A model-not-found error moves on to
the next model in the fallback list; a connection error waits and retries,
up to ``llm_max_retries`` attempts in total. Anything else propagates.
"""

import asyncio
import logging
import os

import litellm
from langchain_core.messages import HumanMessage
from langchain_litellm import ChatLiteLLM

from stayhub.agent.errors import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMError,
    LLMModelNotFoundError,
)
from stayhub.config import settings

logger = logging.getLogger(__name__)

_CONNECTION_MARKERS = (
    "fetch failed",
    "econnrefused",
    "enotfound",
    "connection refused",
    "connection error",
    "name or service not known",
    "temporary failure in name resolution",
)


def classify_llm_error(exc: Exception, model: str | None = None) -> LLMError:
    """Map a provider/transport exception onto an ``LLMError`` subclass."""
    if isinstance(exc, LLMError):
        return exc

    message = str(exc)
    lowered = message.lower()

    if isinstance(exc, litellm.NotFoundError) or ("404" in message and "model" in lowered):
        return LLMModelNotFoundError(message, model=model)
    if isinstance(exc, (litellm.AuthenticationError, litellm.PermissionDeniedError)) or getattr(
        exc, "status_code", None
    ) in (401, 403):
        return LLMAuthenticationError(message)
    if isinstance(exc, (litellm.APIConnectionError, litellm.Timeout, ConnectionError, TimeoutError)) or any(
        marker in lowered for marker in _CONNECTION_MARKERS
    ):
        return LLMConnectionError(message)
    return LLMError(message)


def candidate_models(model_name: str, fallback_models: list[str]) -> list[str]:
    """Return the models to try, configured model first.

    When the configured model is in the fallback list, only the models after
    it are used as fallbacks.
    """
    if model_name in fallback_models:
        return fallback_models[fallback_models.index(model_name):]
    return [model_name, *[m for m in fallback_models if m != model_name]]


async def invoke_model(model: str, prompt: str) -> str:
    """Send a single prompt to ``model`` and return the reply text."""
    if settings.gemini_api_key:
        os.environ["GEMINI_API_KEY"] = settings.gemini_api_key

    llm = ChatLiteLLM(model=model, temperature=0.2, max_retries=1)
    try:
        response = await llm.ainvoke([HumanMessage(content=prompt)])
    except Exception as e:
        raise classify_llm_error(e, model=model) from e

    content = response.content
    return content if isinstance(content, str) else str(content)


async def generate_with_fallback(
    prompt: str,
    *,
    model_name: str | None = None,
    fallback_models: list[str] | None = None,
    max_retries: int | None = None,
    retry_delay: float | None = None,
) -> str:
    """Generate a reply, retrying transport errors and falling back on unknown models.

    Raises:
        LLMError: The last classified error once retries/fallbacks are exhausted,
            or immediately for errors that are not worth retrying.
    """
    model_name = model_name or settings.gemini_model_name
    fallback_models = settings.llm_fallback_models if fallback_models is None else fallback_models
    retries = settings.llm_max_retries if max_retries is None else max_retries
    delay = settings.llm_retry_delay_seconds if retry_delay is None else retry_delay

    models = candidate_models(model_name, fallback_models)
    model_index = 0

    while True:
        model = models[model_index]
        try:
            return await invoke_model(model, prompt)
        except LLMModelNotFoundError:
            if model_index < len(models) - 1:
                model_index += 1
                logger.warning("Model %r not found, trying fallback: %s", model, models[model_index])
                continue
            raise
        except LLMConnectionError:
            if retries > 1:
                retries -= 1
                logger.warning("Network error, retrying LLM call... (%d retries left)", retries)
                await asyncio.sleep(delay)
                continue
            raise
