"""Common schemas used across the API."""

from typing import Optional
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response schema."""
    status: str
    chat_service: bool
    product_service: bool
    llm: bool
    message: Optional[str] = None
