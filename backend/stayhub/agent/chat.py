"""One assistant turn: run the graph and map failures to user-facing text."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.agent.errors import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMModelNotFoundError,
)
from stayhub.agent.graph import create_chat_graph
from stayhub.agent.nodes import Generate
from stayhub.config import settings
from stayhub.models.user import User

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "AI service is not configured. Please set GEMINI_API_KEY in your environment variables."
)
CONNECTION_MESSAGE = "Unable to connect to AI service. Please check your internet connection and API key."
AUTHENTICATION_MESSAGE = "AI service authentication failed. Please check your GEMINI_API_KEY."
GENERIC_MESSAGE = "I'm sorry, I encountered an error. Please try again or rephrase your question."


@dataclass
class ChatResult:
    message: str
    action_data: dict[str, Any] | None = None
    intent: str | None = None


async def run_chat(
    db: AsyncSession,
    message: str,
    history: list[dict],
    user: User | None = None,
    generate: Generate | None = None,
) -> ChatResult:
    """Analyse a message and run the matching intent handler."""
    graph = create_chat_graph(db, user, generate=generate)
    state = await graph.ainvoke({"message": message, "history": history})
    return ChatResult(
        message=state.get("response", ""),
        action_data=state.get("action_data"),
        intent=state["analysis"].intent,
    )


def describe_chat_error(exc: Exception) -> str:
    """Turn a failed chat turn into the message shown to the user."""
    if not settings.gemini_api_key:
        return NOT_CONFIGURED_MESSAGE
    if isinstance(exc, LLMConnectionError):
        return CONNECTION_MESSAGE
    if isinstance(exc, LLMModelNotFoundError):
        return f'AI model not found. Please check if "{settings.gemini_model_name}" is a valid model name.'
    if isinstance(exc, LLMAuthenticationError):
        return AUTHENTICATION_MESSAGE
    return GENERIC_MESSAGE
