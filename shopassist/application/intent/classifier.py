"""
Rule-based query intent classifier.

Scores a chat message against the static intent table and decides what the
user wants, whether answering needs a catalog lookup, and which entities to
hand to that lookup. Classification is a pure function of the query and the
injected ``RuleSet``; it never raises for string input.
"""

from typing import Tuple

from shopassist.application.intent.extractors import extract_entities
from shopassist.application.intent.models import (
    ExtractedEntities,
    IntentClassification,
    QueryIntent,
)
from shopassist.application.intent.rules import (
    DEFAULT_RULES,
    KEYWORD_WEIGHT,
    PATTERN_BONUS,
    PRODUCT_FALLBACK_SCORE,
    QUESTION_FALLBACK_SCORE,
    IntentRule,
    RuleSet,
)


class IntentClassifier:
    """Keyword and pattern scoring over a fixed intent table.

    Strategy:
    - +2 for every keyword contained in the lowercased query.
    - +5 once if any of the intent's patterns matches the raw query.
    - Highest score wins; ties go to the intent declared first.
    - Nothing scored: product vocabulary means product_info, a leading
      question word means general_question, otherwise unknown.
    - confidence = min(score, 10) / 10; below 0.2 the intent is demoted
      unless it is a greeting or about_me.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules

    def score_rule(self, rule: IntentRule, query: str, lowered: str) -> int:
        score = KEYWORD_WEIGHT * sum(1 for kw in set(rule.keywords) if kw in lowered)
        if any(pattern.search(query) for pattern in rule.patterns):
            score += PATTERN_BONUS
        return score

    def best_intent(self, query: str) -> Tuple[QueryIntent, int]:
        lowered = query.lower()
        best, best_score = QueryIntent.UNKNOWN, 0

        for rule in self.rules.intent_rules:
            score = self.score_rule(rule, query, lowered)
            if score > best_score:
                best, best_score = rule.intent, score

        if best_score == 0:
            if any(kw in lowered for kw in self.rules.product_keywords):
                return QueryIntent.PRODUCT_INFO, PRODUCT_FALLBACK_SCORE
            if self.rules.interrogative.search(query):
                return QueryIntent.GENERAL_QUESTION, QUESTION_FALLBACK_SCORE

        return best, best_score

    def confidence_for(self, score: int) -> float:
        return round(min(score, self.rules.max_score) / self.rules.max_score, 2)

    def classify(self, query: str) -> IntentClassification:
        if not query or not query.strip():
            return IntentClassification(
                intent=QueryIntent.UNKNOWN,
                confidence=0.0,
                requires_data=False,
                extracted_entities=ExtractedEntities(),
                reasoning="Empty query",
            )

        intent, score = self.best_intent(query)
        confidence = self.confidence_for(score)
        reasoning = f"Matched {intent.value} with score {score}"

        if confidence < self.rules.min_confidence and intent not in self.rules.ungated:
            demoted = QueryIntent.GENERAL_QUESTION if score > 0 else QueryIntent.UNKNOWN
            if demoted != intent:
                reasoning += f"; below minimum confidence, treated as {demoted.value}"
            intent = demoted

        return IntentClassification(
            intent=intent,
            confidence=confidence,
            requires_data=intent in self.rules.data_requiring,
            extracted_entities=extract_entities(query, intent, self.rules),
            reasoning=reasoning,
        )


_default_classifier = IntentClassifier()


def classify_intent(query: str) -> IntentClassification:
    """Classify with the default rule tables."""
    return _default_classifier.classify(query)


__all__ = ["IntentClassifier", "classify_intent"]
