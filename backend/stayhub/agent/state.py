"""Chat state schema for the LangGraph graph."""

from typing import Any, TypedDict

from stayhub.schemas.agent import IntentAnalysis


class ChatState(TypedDict, total=False):
    """State for one assistant turn.

    Nodes return partial updates; the last writer of ``response`` and
    ``action_data`` wins.
    """

    message: str
    history: list[dict]
    analysis: IntentAnalysis
    response: str
    action_data: dict[str, Any] | None
