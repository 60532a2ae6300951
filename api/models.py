"""
Response envelopes for the API.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Payload(BaseModel, Generic[T]):
    """Successful response body."""
    data: T = Field(..., description="Response data")


class ErrorResponse(BaseModel):
    """Error response body."""
    message: str = Field(..., description="Error message")
