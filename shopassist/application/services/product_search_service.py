"""Product catalog lookups over a ChromaDB collection."""

import json
from typing import Any, Dict, List, Optional

import chromadb
from chromadb.utils import embedding_functions

from shopassist.application.intent.models import ExtractedEntities
from shopassist.config.settings import settings
from shopassist.config.logging_config import get_logger

logger = get_logger(__name__)


class ProductSearchService:
    """Service for product retrieval using ChromaDB semantic search.

    Each catalog entry stores a JSON document (title, about, reviews) and
    flat metadata used for filtering: product_id, title, category, brand,
    price, mrp, rating, rating_count.
    """

    def __init__(self, collection=None):
        """Initialize ChromaDB client and embedding function.

        Args:
            collection: Pre-built collection, mainly for tests. When omitted
                the persistent collection from settings is opened.
        """
        if collection is not None:
            self.collection = collection
            return

        try:
            self.embedding_function = embedding_functions.SentenceTransformerEmbeddingFunction(
                model_name=settings.embedding_model
            )
            self.client = chromadb.PersistentClient(path=settings.chroma_db_dir)
            self.collection = self.client.get_or_create_collection(
                name=settings.collection_name,
                embedding_function=self.embedding_function
            )
            logger.info(f"ProductSearchService initialized: {self.collection.count()} vectors in collection")

        except Exception as e:
            logger.error(f"Failed to initialize ProductSearchService: {str(e)}")
            raise

    def build_chroma_filter(self, entities: Optional[ExtractedEntities]) -> dict:
        """
        Convert extracted entities to a Chroma-compatible where clause.

        Category maps to an equality filter; a price range maps to a
        ``$gte``/``$lte`` pair on the numeric ``price`` metadata.
        """
        if entities is None:
            return {}

        filters = []
        if entities.product_category:
            filters.append({"category": str(entities.product_category)})
        if entities.price_range:
            filters.append({"price": {"$gte": entities.price_range.min}})
            filters.append({"price": {"$lte": entities.price_range.max}})

        if not filters:
            return {}
        elif len(filters) == 1:
            return filters[0]
        else:
            return {"$and": filters}

    @staticmethod
    def _parse_document(raw: Optional[str]) -> dict:
        try:
            doc = json.loads(raw or "{}")
        except (TypeError, json.JSONDecodeError):
            return {"title": raw or ""}
        return doc if isinstance(doc, dict) else {}

    def _format_results(self, results: dict) -> List[Dict[str, Any]]:
        products = []
        if results.get("documents") and results["documents"][0]:
            for i, doc in enumerate(results["documents"][0]):
                products.append({
                    "document": self._parse_document(doc),
                    "metadata": results["metadatas"][0][i] if results.get("metadatas") and results["metadatas"][0] else {},
                    "id": results["ids"][0][i] if results.get("ids") and results["ids"][0] else None,
                    "distance": results["distances"][0][i] if results.get("distances") and results["distances"][0] else None,
                })
        return products

    def search_products(
        self,
        query: str,
        n_results: int = 5,
        entities: Optional[ExtractedEntities] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search products using semantic search with entity filtering.

        Args:
            query: Search text (product name or the raw message)
            n_results: Number of results to return
            entities: Classifier output used to narrow the search

        Returns:
            List of product dictionaries with parsed document and metadata
        """
        where_filter = self.build_chroma_filter(entities)
        if where_filter:
            logger.info(f"Chroma filter: {json.dumps(where_filter)}")

        try:
            results = self.collection.query(
                query_texts=[query.strip()],
                n_results=n_results,
                where=where_filter if where_filter else None
            )
        except Exception as e:
            logger.error(f"Error searching products: {str(e)}")
            raise

        return self._format_results(results)

    def get_product_price(self, query: str, limit: int = 3) -> List[Dict[str, Any]]:
        """Price, MRP and savings for the closest matches."""
        price_info = []
        for product in self.search_products(query, n_results=limit):
            metadata = product["metadata"]
            price = metadata.get("price")
            if price is None:
                continue
            mrp = metadata.get("mrp") or price
            price_info.append({
                "product_id": metadata.get("product_id", product["id"]),
                "title": metadata.get("title") or product["document"].get("title", "Unknown Product"),
                "price": price,
                "mrp": mrp,
                "savings": max(mrp - price, 0),
                "discount_percent": int(((mrp - price) / mrp) * 100) if mrp > price else 0,
            })
        return price_info

    def get_product_reviews(self, query: str, limit: int = 10) -> Optional[Dict[str, Any]]:
        """Best match for ``query`` together with its first ``limit`` reviews."""
        products = self.search_products(query, n_results=1)
        if not products:
            return None

        product = products[0]
        reviews = product["document"].get("reviews") or []
        return {"product": product, "reviews": reviews[:limit]}

    def get_top_reviews(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        result = self.get_product_reviews(query, limit)
        return result["reviews"] if result else []

    def get_top_rated_products(
        self,
        query: str,
        limit: int = 10,
        entities: Optional[ExtractedEntities] = None,
    ) -> List[Dict[str, Any]]:
        """Semantic matches re-ranked by rating, then by number of ratings."""
        candidates = self.search_products(query, n_results=max(limit * 3, 20), entities=entities)
        candidates.sort(
            key=lambda p: (
                float(p["metadata"].get("rating") or 0),
                int(p["metadata"].get("rating_count") or 0),
            ),
            reverse=True,
        )
        return candidates[:limit]

    def get_product_stats(self, query: str, sample_size: int = 100) -> Optional[Dict[str, Any]]:
        """Aggregate price and rating figures over the products matching ``query``."""
        products = self.search_products(query, n_results=sample_size)
        if not products:
            return None

        prices = [p["metadata"]["price"] for p in products if (p["metadata"].get("price") or 0) > 0]
        ratings = [float(p["metadata"].get("rating") or 0) for p in products]

        return {
            "total_products": len(products),
            "avg_price": sum(prices) / len(prices) if prices else None,
            "min_price": min(prices) if prices else None,
            "max_price": max(prices) if prices else None,
            "avg_rating": round(sum(ratings) / len(ratings), 1),
            "total_reviews": sum(len(p["document"].get("reviews") or []) for p in products),
        }
