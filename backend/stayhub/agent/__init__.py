"""Booking assistant: intent analysis with a hosted model plus booking helpers."""

from stayhub.agent.chat import ChatResult, describe_chat_error, run_chat
from stayhub.agent.graph import create_chat_graph

__all__ = ["ChatResult", "create_chat_graph", "describe_chat_error", "run_chat"]
