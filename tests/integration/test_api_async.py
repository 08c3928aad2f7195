import httpx
import pytest
import pytest_asyncio

from app.main import app
from shopassist.application.intent.classifier import IntentClassifier
from shopassist.application.intent.rules import RuleSet
from shopassist.interfaces.api.dependencies import get_classifier


@pytest_asyncio.fixture
async def async_client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_classify_over_async_client(async_client):
    response = await async_client.post("/api/v1/classify", json={"query": "phones under 2 lakhs"})

    assert response.status_code == 200
    classification = response.json()["classification"]
    assert classification["extractedEntities"]["priceRange"] == {"min": 0.0, "max": 200000.0}
    assert classification["extractedEntities"]["productCategory"] == "smartphone"


@pytest.mark.asyncio
async def test_classify_uses_injected_classifier(async_client):
    app.dependency_overrides[get_classifier] = lambda: IntentClassifier(RuleSet(min_confidence=0.5))

    response = await async_client.post("/api/v1/classify", json={"query": "Best USB cables under 500 rupees"})

    classification = response.json()["classification"]
    assert classification["intent"] == "general_question"
    assert classification["requiresData"] is False
    assert "below minimum confidence" in classification["reasoning"]
