"""Router exposing the intent classifier."""

from fastapi import APIRouter, Depends

from shopassist.application.intent.classifier import IntentClassifier
from shopassist.interfaces.api.dependencies import get_classifier
from shopassist.interfaces.api.schemas.chat import ClassifyRequest, ClassifyResponse
from shopassist.utils.formatters import format_intent_classification

router = APIRouter(prefix="/api/v1", tags=["classify"])


@router.post("/classify", response_model=ClassifyResponse, response_model_by_alias=True)
async def classify(
    request: ClassifyRequest,
    classifier: IntentClassifier = Depends(get_classifier),
) -> ClassifyResponse:
    """Classify a message without touching the catalog or the LLM."""
    classification = classifier.classify(request.query)
    return ClassifyResponse(
        classification=classification,
        summary=format_intent_classification(classification),
    )
