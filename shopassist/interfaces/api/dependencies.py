"""FastAPI dependencies for dependency injection."""

from typing import Optional

from shopassist.application.intent.classifier import IntentClassifier
from shopassist.application.services.chat_service import ChatService
from shopassist.application.services.product_search_service import ProductSearchService
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.groq_client import get_groq_client

logger = get_logger(__name__)

# Global service instances (initialized in lifespan)
_classifier: IntentClassifier = IntentClassifier()
_product_search_service: Optional[ProductSearchService] = None
_chat_service: Optional[ChatService] = None


def init_services():
    """Initialize global service instances.

    The catalog is optional: without it data-requiring messages are answered
    from the plain prompt.
    """
    global _product_search_service, _chat_service

    try:
        _product_search_service = ProductSearchService()
    except Exception as e:
        logger.warning(f"Product catalog unavailable, continuing without it: {e}")
        _product_search_service = None

    _chat_service = ChatService(
        product_service=_product_search_service,
        llm=get_groq_client(),
        classifier=_classifier,
    )


def get_classifier() -> IntentClassifier:
    return _classifier


def get_product_search_service() -> Optional[ProductSearchService]:
    return _product_search_service


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService instance
    """
    if _chat_service is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return _chat_service
