"""
Domain models for the add-commitment function.

Defines the commitment record schema accepted on the wire and the result
returned after a successful write. Field names are snake_case in Python and
camelCase (via aliases) in request bodies and store attributes.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import TypedDict

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
CURRENCY_CODE_LENGTH = 3


def _parses_as_datetime(value: str) -> bool:
    text = value.strip()
    if not text:
        return False
    try:
        datetime.fromisoformat(text)
        return True
    except ValueError:
        pass
    # Zone designators such as "+0000" are still ISO-8601 but older parsers reject them.
    try:
        datetime.strptime(text, "%Y-%m-%dT%H:%M:%S%z")
        return True
    except ValueError:
        pass
    try:
        date.fromisoformat(text)
        return True
    except ValueError:
        return False


class CommitmentRecord(BaseModel):
    """
    A validated payment commitment, ready to be written to the store.

    All fields are required strings. `amount` is kept as text here; it is
    converted to an exact decimal by the writer.
    """

    payment_id: str = Field(..., alias="paymentId", description="Store key (UUID).")
    user_id: str = Field(..., alias="userId", description="Paying party (UUID).")
    payment_timestamp: str = Field(
        ..., alias="paymentTimestamp", description="ISO-8601 time of payment."
    )
    description: str = Field(..., description="Free-form text.")
    currency: str = Field(..., description="3-letter ISO currency code.")
    amount: str = Field(..., description="Decimal amount as text.")

    model_config = {
        "frozen": True,
        "strict": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("payment_id", "user_id")
    @classmethod
    def _check_uuid(cls, value: str) -> str:
        if not UUID_PATTERN.fullmatch(value):
            raise PydanticCustomError("uuid_format", "Invalid uuid")
        return value

    @field_validator("payment_timestamp")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        if not _parses_as_datetime(value):
            raise PydanticCustomError(
                "timestamp_format", "Invalid date format, should be ISO 8601"
            )
        return value

    @field_validator("currency")
    @classmethod
    def _check_currency(cls, value: str) -> str:
        if len(value) != CURRENCY_CODE_LENGTH:
            raise PydanticCustomError(
                "currency_length", "Currency should be a 3-letter ISO code"
            )
        return value


class WriteResult(TypedDict):
    """Outcome of a successful store write, echoed in the success response."""

    paymentId: str
    amount: str
    currency: str


__all__ = ["CommitmentRecord", "WriteResult", "UUID_PATTERN", "CURRENCY_CODE_LENGTH"]
