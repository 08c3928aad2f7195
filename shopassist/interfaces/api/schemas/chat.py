"""Classification and chat request/response schemas."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from shopassist.application.intent.models import IntentClassification
from shopassist.application.services.chat_service import EmailRequest


class ClassifyRequest(BaseModel):
    """Classification request schema."""
    query: str = Field(..., max_length=2000)


class ClassifyResponse(BaseModel):
    """Classification plus its plain-text rendering."""
    classification: IntentClassification
    summary: str


class ChatTurn(BaseModel):
    """One earlier message of the conversation."""
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Chat request schema."""
    message: str = Field(..., min_length=1, max_length=2000)
    conversation_history: List[ChatTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Chat response schema."""
    response_text: str
    classification: Optional[IntentClassification] = None
    enhanced: bool = False
    email_request: Optional[EmailRequest] = None
    success: bool = True
    error_message: Optional[str] = None
