"""LangGraph graph definition for the StayHub booking assistant.

Flow:
    START → analyze → [intent?]
                        ├─ search             ─┐
                        ├─ check_availability ─┤
                        ├─ book               ─┼─→ clarify → END
                        ├─ greeting           ─┤
                        └─ question / other   ─┘
"""

import logging

from langgraph.graph import END, START, StateGraph
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.agent.llm import generate_with_fallback
from stayhub.agent.nodes import (
    INTENT_NODES,
    Generate,
    clarify_node,
    create_analyze_node,
    create_availability_node,
    create_book_node,
    create_search_node,
    greeting_node,
    route_intent,
)
from stayhub.agent.state import ChatState
from stayhub.models.user import User

logger = logging.getLogger(__name__)


def create_chat_graph(db: AsyncSession, user: User | None = None, generate: Generate | None = None):
    """Build and compile the assistant graph for one request.

    Args:
        db: Request-scoped session used by the search/availability/book nodes.
        user: The signed-in user, or None for anonymous chat.
        generate: Prompt → reply-text coroutine; defaults to the LiteLLM
            call with retries and model fallback.
    """
    graph = StateGraph(ChatState)

    graph.add_node("analyze", create_analyze_node(generate or generate_with_fallback))
    graph.add_node("search", create_search_node(db, user))
    graph.add_node("check_availability", create_availability_node(db))
    graph.add_node("book", create_book_node(db, user))
    graph.add_node("greeting", greeting_node)
    graph.add_node("clarify", clarify_node)

    graph.add_edge(START, "analyze")
    graph.add_conditional_edges(
        "analyze",
        route_intent,
        {**{name: name for name in INTENT_NODES}, "clarify": "clarify"},
    )
    for name in INTENT_NODES:
        graph.add_edge(name, "clarify")
    graph.add_edge("clarify", END)

    return graph.compile()
