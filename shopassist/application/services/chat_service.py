"""Chat orchestration: classify, enrich with catalog data, generate a reply."""

import re
from typing import Dict, List, Optional

from pydantic import BaseModel

from shopassist.application.intent.classifier import IntentClassifier
from shopassist.application.intent.models import IntentClassification, QueryIntent
from shopassist.application.services.product_search_service import ProductSearchService
from shopassist.application.services.sentiment_service import SentimentService, sentiment_stats
from shopassist.config.settings import settings
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.groq_client import GroqClient
from shopassist.infrastructure.llm.prompts import (
    CHAT_SYSTEM_PROMPT,
    CONCISE_INSTRUCTION,
    DATA_RESPONSE_INSTRUCTION,
    EMAIL_REQUEST_MESSAGE,
)
from shopassist.utils.formatters import clean_markdown_formatting, format_amount, format_price

logger = get_logger(__name__)

GENERIC_PRODUCT_REFERENCE = re.compile(r"^(?:this|that|it|the product)$", re.IGNORECASE)
SENTIMENT_MARKERS = {"positive": "[+]", "negative": "[-]", "neutral": "[~]"}


class EmailRequest(BaseModel):
    """Returned instead of a chat reply when the user asks for an e-mail."""
    product_name: str
    needs_context: bool
    message: str = EMAIL_REQUEST_MESSAGE


class EnhancedMessage(BaseModel):
    """The prompt sent to the LLM plus what the classifier decided."""
    classification: IntentClassification
    prompt: str
    enhanced: bool = False
    email_request: Optional[EmailRequest] = None


class ChatService:
    """Turns a user message into an LLM reply, adding catalog data when needed."""

    def __init__(
        self,
        product_service: Optional[ProductSearchService],
        llm: Optional[GroqClient] = None,
        sentiment_service: Optional[SentimentService] = None,
        classifier: Optional[IntentClassifier] = None,
    ):
        self.product_service = product_service
        self.llm = llm
        self.sentiment_service = sentiment_service or SentimentService(llm)
        self.classifier = classifier or IntentClassifier()

    # ------------------------------------------------------------------
    # Data blocks, one per data-requiring intent
    # ------------------------------------------------------------------

    def _price_block(self, name: str, classification: IntentClassification) -> str:
        price_list = self.product_service.get_product_price(name, limit=settings.max_context_products)
        if not price_list:
            return ""
        logger.info(f"[Data] Found {len(price_list)} products for pricing")
        lines = ["[PRODUCT DATA]"]
        for p in price_list:
            lines.append(
                f"- {p['title']}: {format_amount(p['price'])} "
                f"(was {format_amount(p['mrp'])}, save {format_amount(p['savings'])})"
            )
        return "\n".join(lines)

    def _reviews_block(self, name: str, classification: IntentClassification) -> str:
        limit = classification.extracted_entities.limit or settings.default_review_limit
        reviews = self.product_service.get_top_reviews(name, limit)
        if not reviews:
            return ""

        sentiments = self.sentiment_service.analyze_batch([r.get("content", "") for r in reviews])
        stats = sentiment_stats(sentiments)
        logger.info(f"[Data] Found {len(reviews)} reviews with sentiment analysis")

        snippet_chars = settings.review_snippet_chars
        lines = [
            "[PRODUCT REVIEWS]",
            f"Sentiment Analysis: {stats.positive_percent}% positive, "
            f"{stats.negative_percent}% negative, {stats.neutral_percent}% neutral",
            "",
        ]
        for i, (review, sentiment) in enumerate(zip(reviews, sentiments), 1):
            content = review.get("content", "")
            if len(content) > snippet_chars:
                content = content[:snippet_chars] + "..."
            lines.append(f'{i}. {SENTIMENT_MARKERS[sentiment.label]} "{review.get("title", "")}"')
            lines.append(f"   {content}")
            lines.append(f"   - {review.get('user_name', 'Anonymous')}")
        return "\n".join(lines)

    def _search_block(self, name: str, classification: IntentClassification) -> str:
        entities = classification.extracted_entities
        limit = entities.limit or settings.default_search_limit
        products = self.product_service.get_top_rated_products(name, limit, entities=entities)
        if not products:
            return ""
        logger.info(f"[Data] Found {len(products)} products in search")
        lines = ["[PRODUCT SEARCH RESULTS]"]
        for i, p in enumerate(products, 1):
            metadata = p["metadata"]
            lines.append(f"{i}. {metadata.get('title') or p['document'].get('title', 'Unknown Product')}")
            lines.append(
                f"   Price: {format_price(metadata)} | "
                f"Rating: {metadata.get('rating', 'n/a')}/5 ({metadata.get('rating_count', 0)} reviews)"
            )
        return "\n".join(lines)

    def _info_block(self, name: str, classification: IntentClassification) -> str:
        products = self.product_service.search_products(name, n_results=settings.max_context_products)
        if not products:
            return ""
        top = products[0]
        metadata = top["metadata"]
        title = metadata.get("title") or top["document"].get("title", "Unknown Product")
        lines = [
            "[PRODUCT INFORMATION]",
            f"Product: {title}",
            f"Price: {format_price(metadata)}",
            f"Rating: {metadata.get('rating', 'n/a')}/5 ({metadata.get('rating_count', 0)} reviews)",
            f"Category: {metadata.get('category', 'n/a')}",
        ]
        reviews = (top["document"].get("reviews") or [])[:3]
        if reviews:
            lines.append("")
            lines.append("Top Reviews:")
            for i, r in enumerate(reviews, 1):
                lines.append(f'{i}. {r.get("title", "")}: "{r.get("content", "")[:100]}..."')
        logger.info(f"[Data] Found product info for {title}")
        return "\n".join(lines)

    def _comparison_block(self, name: str, classification: IntentClassification) -> str:
        stats = self.product_service.get_product_stats(name)
        if not stats:
            return ""
        logger.info(f"[Data] Found stats for {name}")
        lines = [
            "[PRODUCT STATISTICS]",
            f"Total Products: {stats['total_products']}",
        ]
        if stats["avg_price"] is not None:
            lines.append(f"Average Price: {format_amount(round(stats['avg_price']))}")
            lines.append(
                f"Price Range: {format_amount(stats['min_price'])} - {format_amount(stats['max_price'])}"
            )
        lines.append(f"Average Rating: {stats['avg_rating']}/5")
        lines.append(f"Total Reviews: {stats['total_reviews']:,}")
        return "\n".join(lines)

    _BLOCK_BUILDERS = {
        QueryIntent.PRODUCT_PRICE: "_price_block",
        QueryIntent.PRODUCT_REVIEWS: "_reviews_block",
        QueryIntent.PRODUCT_SEARCH: "_search_block",
        QueryIntent.PRODUCT_INFO: "_info_block",
        QueryIntent.PRODUCT_COMPARISON: "_comparison_block",
    }

    # ------------------------------------------------------------------

    def build_email_request(self, classification: IntentClassification) -> EmailRequest:
        name = classification.extracted_entities.product_name
        if not name or GENERIC_PRODUCT_REFERENCE.match(name):
            name = None
        return EmailRequest(
            product_name=name or "the product we discussed",
            needs_context=name is None,
        )

    def enhance_message(self, message: str) -> EnhancedMessage:
        """
        Classify ``message`` and append catalog data for data-requiring intents.

        Lookup failures are logged and the plain message is used instead;
        they never fail the chat turn.
        """
        classification = self.classifier.classify(message)
        intent = QueryIntent(classification.intent)
        logger.info(f"[Intent] {intent.value} ({round(classification.confidence * 100)}% confident)")

        if not classification.requires_data:
            return EnhancedMessage(
                classification=classification,
                prompt=f"{message}\n\n{CONCISE_INSTRUCTION}",
            )

        if intent == QueryIntent.EMAIL_REQUEST:
            return EnhancedMessage(
                classification=classification,
                prompt=message,
                email_request=self.build_email_request(classification),
            )

        if self.product_service is None:
            logger.warning("Product catalog unavailable; answering without data")
            return EnhancedMessage(classification=classification, prompt=message)

        name = classification.extracted_entities.product_name or message
        builder = getattr(self, self._BLOCK_BUILDERS[intent])
        try:
            data_block = builder(name, classification)
        except Exception as e:
            logger.error(f"[Data Error] {e}")
            data_block = ""

        if not data_block:
            return EnhancedMessage(classification=classification, prompt=message)

        return EnhancedMessage(
            classification=classification,
            prompt=f"{message}\n\n{data_block}\n\n{DATA_RESPONSE_INSTRUCTION}",
            enhanced=True,
        )

    def generate_response(
        self,
        message: str,
        history: Optional[List[Dict[str, str]]] = None,
    ) -> Dict:
        """
        Generate the assistant reply for one chat turn.

        Args:
            message: Raw user message
            history: Earlier turns as ``{"role", "content"}`` dicts

        Returns:
            Dictionary with response_text, enhanced and email_request
        """
        enhanced = self.enhance_message(message)

        if enhanced.email_request is not None:
            logger.info("[EMAIL] Detected email request")
            return {
                "response_text": enhanced.email_request.message,
                "classification": enhanced.classification,
                "enhanced": False,
                "email_request": enhanced.email_request,
            }

        if not self.llm:
            return {
                "response_text": self._get_fallback_response(message),
                "classification": enhanced.classification,
                "enhanced": enhanced.enhanced,
                "email_request": None,
            }

        messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
        for turn in history or []:
            role = "assistant" if turn.get("role") == "assistant" else "user"
            messages.append({"role": role, "content": turn.get("content", "")})
        messages.append({"role": "user", "content": enhanced.prompt})

        try:
            reply = self.llm.chat_completion(messages, temperature=settings.chat_temperature)
            response_text = clean_markdown_formatting(reply) or self._get_fallback_response(message)
        except RuntimeError as e:
            logger.error(f"Error generating chat response: {e}")
            response_text = self._get_fallback_response(message)

        return {
            "response_text": response_text,
            "classification": enhanced.classification,
            "enhanced": enhanced.enhanced,
            "email_request": None,
        }

    def _get_fallback_response(self, message: str) -> str:
        return (
            f"I apologize, but I'm having trouble processing your message: '{message}'. "
            "Please try again or rephrase your question."
        )
