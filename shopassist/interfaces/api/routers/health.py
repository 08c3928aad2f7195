"""Health check router."""

from fastapi import APIRouter

from shopassist.interfaces.api.schemas.common import HealthResponse
from shopassist.interfaces.api.dependencies import (
    get_chat_service,
    get_product_search_service,
)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status of the application and services
    """
    try:
        chat_service = get_chat_service()
        product_service = get_product_search_service()

        degraded = product_service is None or chat_service.llm is None
        return HealthResponse(
            status="degraded" if degraded else "healthy",
            chat_service=True,
            product_service=product_service is not None,
            llm=chat_service.llm is not None,
            message="Running with fallbacks" if degraded else "All services operational"
        )
    except Exception as e:
        return HealthResponse(
            status="unhealthy",
            chat_service=False,
            product_service=False,
            llm=False,
            message=str(e)
        )
