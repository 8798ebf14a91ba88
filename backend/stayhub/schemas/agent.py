"""Pydantic v2 schemas for the booking assistant.

Request and response bodies use camelCase on the wire, matching the chat
client. ``IntentAnalysis`` describes the JSON object the language model is
asked to return.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ---------------------------------------------------------------------------
# Language-model analysis
# ---------------------------------------------------------------------------


def _optional_number(value: Any) -> float | None:
    """Best-effort number from a model-supplied value; None when unusable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().replace(",", ""))
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return None


class PriceRange(BaseModel):
    min: float | None = None
    max: float | None = None

    @field_validator("min", "max", mode="before")
    @classmethod
    def _lenient_bound(cls, value: Any) -> float | None:
        return _optional_number(value)


class ExtractedData(BaseModel):
    """Booking details the model pulled out of the user's message.

    The model's output is loosely typed, so a badly shaped field is dropped
    (or wrapped) instead of failing the whole turn.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    city: str | None = None
    room_type: str | None = None
    check_in_date: str | None = None
    check_out_date: str | None = None
    room_id: str | None = None
    guests: int | None = None
    price_range: PriceRange | None = None
    amenities: list[str] | None = None

    @field_validator("city", "room_type", "check_in_date", "check_out_date", "room_id", mode="before")
    @classmethod
    def _lenient_text(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value

    @field_validator("guests", mode="before")
    @classmethod
    def _lenient_guests(cls, value: Any) -> int | None:
        number = _optional_number(value)
        if number is None or number < 1:
            return None
        return int(number)

    @field_validator("price_range", mode="before")
    @classmethod
    def _lenient_price_range(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @field_validator("amenities", mode="before")
    @classmethod
    def _lenient_amenities(cls, value: Any) -> list[str] | None:
        if isinstance(value, str):
            return [value] if value.strip() else None
        if not isinstance(value, list):
            return None
        return [str(a) for a in value if isinstance(a, (str, int, float)) and str(a).strip()]


class IntentAnalysis(BaseModel):
    """The model's classification of a user message."""

    model_config = _camel

    intent: str = "question"
    extracted_data: ExtractedData = Field(default_factory=ExtractedData)
    needs_clarification: list[str] = Field(default_factory=list)
    response: str = ""

    @field_validator("intent", mode="before")
    @classmethod
    def _lenient_intent(cls, value: Any) -> Any:
        return value if isinstance(value, str) and value else "question"

    @field_validator("extracted_data", mode="before")
    @classmethod
    def _lenient_extracted_data(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, ExtractedData)) else {}

    @field_validator("needs_clarification", mode="before")
    @classmethod
    def _lenient_clarification(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value] if value else []
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if item not in (None, "")]

    @field_validator("response", mode="before")
    @classmethod
    def _lenient_response(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ChatHistoryEntry(BaseModel):
    role: str
    content: str = ""


class ChatRequest(BaseModel):
    """A chat turn plus the client-side conversation so far."""

    model_config = _camel

    message: str = ""
    conversation_history: list[ChatHistoryEntry] = Field(default_factory=list)


class AgentBookRequest(BaseModel):
    """Confirmation of a booking prepared by the assistant."""

    model_config = _camel

    room_id: str
    check_in_date: str
    check_out_date: str
    guests: int | None = 1


class PaymentRequest(BaseModel):
    model_config = _camel

    booking_id: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ChatResponse(BaseModel):
    model_config = _camel

    success: bool
    message: str
    action_data: dict[str, Any] | None = None
    intent: str | None = None


class BookingSummary(BaseModel):
    model_config = _camel

    id: str
    booking_id: str
    hotel_name: str
    check_in_date: str
    check_out_date: str
    total_price: float
    nights: int


class AgentBookResponse(BaseModel):
    model_config = _camel

    success: bool
    message: str
    booking: BookingSummary | None = None


class PaymentResponse(BaseModel):
    success: bool
    message: str | None = None
    url: str | None = None
