"""Chat router: classify, enrich and answer a user message."""

from fastapi import APIRouter, Depends

from shopassist.application.services.chat_service import ChatService
from shopassist.config.logging_config import get_logger
from shopassist.interfaces.api.dependencies import get_chat_service
from shopassist.interfaces.api.schemas.chat import ChatRequest, ChatResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["chat"])


@router.post("/chat", response_model=ChatResponse, response_model_by_alias=True)
def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a chat message.

    Args:
        request: Message and optional conversation history
        chat_service: Chat service (injected)

    Returns:
        Reply text, the classification that drove it and, for e-mail
        requests, the e-mail payload instead of an LLM reply
    """
    logger.info(f"Generating response for message: {request.message[:50]}...")
    try:
        result = chat_service.generate_response(
            request.message,
            history=[turn.model_dump() for turn in request.conversation_history],
        )
        return ChatResponse(**result)

    except Exception as e:
        logger.error(f"Chat error: {e}")
        return ChatResponse(
            response_text="Something went wrong. Please try again.",
            success=False,
            error_message=str(e),
        )
