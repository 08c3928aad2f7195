"""Review sentiment scoring with a lexicon fallback."""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from shopassist.config.settings import settings
from shopassist.config.logging_config import get_logger
from shopassist.infrastructure.llm.groq_client import GroqClient
from shopassist.infrastructure.llm.prompts import SENTIMENT_PROMPT

logger = get_logger(__name__)

POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "love", "perfect", "best", "awesome")
NEGATIVE_WORDS = ("bad", "poor", "terrible", "awful", "hate", "worst", "disappointed", "useless")
WORD_WEIGHT = 0.3
LABEL_THRESHOLD = 0.2
BATCH_SIZE = 5

SentimentLabel = Literal["positive", "negative", "neutral"]


class SentimentResult(BaseModel):
    """Sentiment of a single review."""
    score: float = Field(..., ge=-1.0, le=1.0)
    label: SentimentLabel
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = ""
    key_phrases: List[str] = Field(default_factory=list)


class SentimentStats(BaseModel):
    """Aggregate view over a batch of reviews."""
    avg_score: float = 0.0
    avg_confidence: float = 0.0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    positive_percent: float = 0.0
    negative_percent: float = 0.0
    neutral_percent: float = 0.0


def label_for(score: float) -> SentimentLabel:
    if score > LABEL_THRESHOLD:
        return "positive"
    if score < -LABEL_THRESHOLD:
        return "negative"
    return "neutral"


def lexicon_sentiment(text: str) -> SentimentResult:
    """Word-list scoring used when the LLM is unavailable or misbehaves."""
    lowered = text.lower()
    positive_hits = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative_hits = sum(1 for word in NEGATIVE_WORDS if word in lowered)

    score = max(-1.0, min(1.0, (positive_hits - negative_hits) * WORD_WEIGHT))
    return SentimentResult(
        score=score,
        label=label_for(score),
        confidence=min(0.7, (positive_hits + negative_hits) * 0.2),
        reasoning="Fallback lexicon-based analysis",
    )


class SentimentService:
    """Scores review text with Groq, falling back to the lexicon scorer."""

    def __init__(self, llm: Optional[GroqClient] = None):
        self.llm = llm

    def analyze_sentiment(self, text: str) -> SentimentResult:
        if not self.llm:
            return lexicon_sentiment(text)

        try:
            parsed = self.llm.extract_json(
                system_prompt=SENTIMENT_PROMPT,
                user_query=f'Review: "{text}"',
                model=settings.sentiment_model,
            )
            score = max(-1.0, min(1.0, float(parsed.get("score", 0))))
            label = parsed.get("label")
            if label not in ("positive", "negative", "neutral"):
                label = label_for(score)
            key_phrases = parsed.get("key_phrases") or parsed.get("keyPhrases") or []
            return SentimentResult(
                score=score,
                label=label,
                confidence=max(0.0, min(1.0, float(parsed.get("confidence", 0.5)))),
                reasoning=str(parsed.get("reasoning") or "No reasoning provided"),
                key_phrases=[str(p) for p in key_phrases] if isinstance(key_phrases, list) else [],
            )
        except (RuntimeError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"LLM sentiment failed, using lexicon fallback: {e}")
            return lexicon_sentiment(text)

    def analyze_batch(self, texts: List[str]) -> List[SentimentResult]:
        """Score texts in groups of five, preserving input order."""
        if not texts:
            return []
        with ThreadPoolExecutor(max_workers=BATCH_SIZE) as executor:
            return list(executor.map(self.analyze_sentiment, texts))


def sentiment_stats(results: List[SentimentResult]) -> SentimentStats:
    if not results:
        return SentimentStats()

    total = len(results)
    positive = sum(1 for r in results if r.label == "positive")
    negative = sum(1 for r in results if r.label == "negative")
    neutral = total - positive - negative

    return SentimentStats(
        avg_score=sum(r.score for r in results) / total,
        avg_confidence=sum(r.confidence for r in results) / total,
        positive=positive,
        negative=negative,
        neutral=neutral,
        positive_percent=round(positive / total * 100, 1),
        negative_percent=round(negative / total * 100, 1),
        neutral_percent=round(neutral / total * 100, 1),
    )
