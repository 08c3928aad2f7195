"""Shared test fixtures and configuration."""

import json
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from shopassist.application.intent.classifier import IntentClassifier
from shopassist.application.services.product_search_service import ProductSearchService
from shopassist.application.services.sentiment_service import SentimentService


class FakeCollection:
    """Stands in for a Chroma collection: returns stored items in insertion order."""

    def __init__(self, items: List[Dict[str, Any]]):
        self.items = items
        self.queries: List[Dict[str, Any]] = []

    def count(self) -> int:
        return len(self.items)

    def query(self, query_texts, n_results=10, where=None):
        self.queries.append({"query_texts": query_texts, "n_results": n_results, "where": where})
        hits = self.items[:n_results]
        return {
            "ids": [[item["id"] for item in hits]],
            "documents": [[json.dumps(item["document"]) for item in hits]],
            "metadatas": [[item["metadata"] for item in hits]],
            "distances": [[0.1 * i for i in range(len(hits))]],
        }


def make_product(product_id, title, price, mrp, rating, rating_count, category="headphone", reviews=None):
    return {
        "id": product_id,
        "document": {
            "title": title,
            "about": f"About {title}",
            "reviews": reviews or [],
        },
        "metadata": {
            "product_id": product_id,
            "title": title,
            "category": category,
            "brand": title.split()[0].lower(),
            "price": price,
            "mrp": mrp,
            "rating": rating,
            "rating_count": rating_count,
        },
    }


@pytest.fixture
def sample_reviews():
    return [
        {"user_name": "Asha", "title": "Great sound", "content": "Great bass and amazing battery life"},
        {"user_name": "Ravi", "title": "Broke fast", "content": "Terrible build, useless after a week"},
        {"user_name": "Meera", "title": "Okay", "content": "Does the job"},
    ]


@pytest.fixture
def catalog_items(sample_reviews):
    return [
        make_product("B001", "boAt Rockerz 450 Bluetooth Headphones", 1499.0, 3990.0, 4.1, 1200, reviews=sample_reviews),
        make_product("B002", "Sony WH-1000XM4 Headphones", 19990.0, 29990.0, 4.6, 8800),
        make_product("B003", "JBL Tune 510BT Headphones", 2999.0, 3999.0, 4.4, 15000),
    ]


@pytest.fixture
def fake_collection(catalog_items):
    return FakeCollection(catalog_items)


@pytest.fixture
def product_service(fake_collection):
    return ProductSearchService(collection=fake_collection)


@pytest.fixture
def classifier():
    return IntentClassifier()


@pytest.fixture
def mock_llm():
    """GroqClient double; tests set return values as needed."""
    llm = MagicMock()
    llm.chat_completion.return_value = "**Sure!** Here is what I found."
    llm.extract_json.side_effect = RuntimeError("sentiment disabled in tests")
    return llm


@pytest.fixture
def lexicon_sentiment_service():
    return SentimentService(llm=None)


@pytest.fixture
def empty_product_service():
    return ProductSearchService(collection=FakeCollection([]))
