"""
Shared pydantic building blocks.

Every payload travels with camelCase keys (``telegramId``,
``farmSize``...) which are also the column names in SQLite.  Models
declare snake_case attributes with camelCase aliases and accept both
forms on input.
"""

from typing import Optional, Union

from pydantic import BaseModel


class ApiModel(BaseModel):
    """Base model for request bodies, rows and response envelopes."""

    model_config = {
        "populate_by_name": True,
        # Telegram sends numeric ids; SQLite TEXT/DATE columns may hand back
        # numbers.  Both end up as strings on our side.
        "coerce_numbers_to_str": True,
    }


class ErrorResponse(ApiModel):
    """Failure envelope returned by every endpoint."""

    success: bool = False
    error: str


# Value of a column that SQLite may hold as a number or as text.  Request
# bodies are not type-checked: ``"age": "thirty"`` is stored as sent.
Scalar = Optional[Union[int, float, str]]
