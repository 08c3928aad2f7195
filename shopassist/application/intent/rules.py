"""
Static keyword and pattern tables for the rule-based intent classifier.

The tables are built once at import time and bundled into a read-only
``RuleSet`` that is handed to the classifier. Rule order in
``INTENT_RULES`` is the tie-break order: when two intents reach the same
score, the one declared first wins.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Pattern, Tuple

from shopassist.application.intent.models import ProductCategory, QueryIntent

_FLAGS = re.IGNORECASE


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, _FLAGS) for p in patterns)


@dataclass(frozen=True)
class IntentRule:
    """Keywords and patterns that vote for one intent."""

    intent: QueryIntent
    keywords: Tuple[str, ...]
    patterns: Tuple[Pattern[str], ...] = ()


INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(
        intent=QueryIntent.PRODUCT_PRICE,
        keywords=("price", "cost", "expensive", "cheap", "rate", "mrp", "discount", "offer", "deal"),
        patterns=_compile(
            r"(?:what is|what's|show|tell|get)(?: the)? price (?:of|for) (.+)",
            r"how much (?:is|does|cost) (.+)",
            r"price of (.+)",
        ),
    ),
    IntentRule(
        intent=QueryIntent.PRODUCT_REVIEWS,
        keywords=("review", "comment", "feedback", "opinion", "rating", "testimonial", "experience"),
        patterns=_compile(
            r"(?:show|get|find)(?: me)?(?: the)? (?:reviews?|comments?) (?:of|on|for|about) (.+)",
            r"(?:what are|what's)(?: the)? (?:reviews?|comments?) (?:of|on|for) (.+)",
            r"top (?:\d+)? (?:reviews?|comments?) (?:of|on|for) (.+)",
        ),
    ),
    IntentRule(
        intent=QueryIntent.PRODUCT_INFO,
        keywords=("about", "detail", "specification", "spec", "feature", "information", "describe"),
        patterns=_compile(
            r"(?:tell me|what is|what's|show me) (?:about|more about) (.+)",
            r"(?:details?|info|information) (?:of|on|about|for) (.+)",
            r"(?:specifications?|specs?) (?:of|for) (.+)",
        ),
    ),
    IntentRule(
        intent=QueryIntent.PRODUCT_COMPARISON,
        keywords=("compare", "comparison", "vs", "versus", "difference", "better", "best between"),
        patterns=_compile(
            r"compare (.+) (?:and|vs|versus|with) (.+)",
            r"(?:which is|what's) better[,:]? (.+) or (.+)",
            r"difference between (.+) and (.+)",
        ),
    ),
    IntentRule(
        intent=QueryIntent.PRODUCT_SEARCH,
        keywords=("best", "top", "recommend", "suggest", "good", "popular", "trending"),
        patterns=_compile(
            r"(?:best|top) (?:\d+)? (.+)",
            r"recommend(?: me)?(?: some)? (.+)",
            r"(?:show|list) (?:top|best) (.+)",
        ),
    ),
    IntentRule(
        intent=QueryIntent.EMAIL_REQUEST,
        keywords=("email", "mail", "send", "forward", "share"),
        patterns=_compile(
            r"(?:email|mail|send)(?: me)?(?: the)? (?:details?|info|information) (?:of|on|about|for) (.+)",
            r"send (?:details?|info) (?:of|on|about) (.+) to (?:my )?(?:email|mail)",
            r"(?:email|mail|send) (?:me|this|that)(?: product| product details)?",
            r"share (.+) (?:via|through|by) email",
            r"(?:email|send|mail) me (?:about |details of )?(.+)",
        ),
    ),
    IntentRule(
        intent=QueryIntent.GREETING,
        keywords=("hello", "hi", "hey", "greetings", "good morning", "good afternoon", "good evening"),
        patterns=_compile(r"^(?:hi|hello|hey|greetings?)(?:\s|!|\.)*$"),
    ),
    IntentRule(
        intent=QueryIntent.ABOUT_ME,
        keywords=(
            "who made",
            "who created",
            "who owns",
            "made by",
            "created by",
            "who are you",
            "what are you",
            "tell me about yourself",
            "about you",
        ),
        patterns=_compile(
            r"(?:who made|who created|who built|who owns) (?:you|the assistant)",
            r"who (?:are you|is|made)",
            r"what (?:are you|is this assistant)",
            r"tell me about (?:yourself|you)",
            r"(?:about|creator|creator of) you",
        ),
    ),
    IntentRule(
        intent=QueryIntent.GENERAL_QUESTION,
        keywords=("what", "why", "how", "when", "where", "explain", "meaning", "define"),
        patterns=_compile(
            r"what is (.+)\?",
            r"how does (.+) work\??",
            r"why (?:is|does) (.+)\??",
            r"explain (.+)",
        ),
    ),
)

DATA_REQUIRING_INTENTS: FrozenSet[QueryIntent] = frozenset({
    QueryIntent.PRODUCT_PRICE,
    QueryIntent.PRODUCT_REVIEWS,
    QueryIntent.PRODUCT_INFO,
    QueryIntent.PRODUCT_COMPARISON,
    QueryIntent.PRODUCT_SEARCH,
    QueryIntent.EMAIL_REQUEST,
})

# Intents that are never demoted by the minimum-confidence gate
UNGATED_INTENTS: FrozenSet[QueryIntent] = frozenset({QueryIntent.GREETING, QueryIntent.ABOUT_ME})

PRODUCT_DOMAIN_KEYWORDS: Tuple[str, ...] = (
    "smartphone", "phone", "mobile", "cable", "charger", "adapter", "usb", "hdmi",
    "wire", "bluetooth", "speaker", "headphone", "earphone", "earbud", "tv",
    "television", "remote", "mouse", "keyboard", "laptop", "tablet", "watch",
    "camera", "boat", "amazon", "samsung", "mi", "oneplus", "apple", "iqoo", "brand",
)

INTERROGATIVE_PATTERN: Pattern[str] = re.compile(r"^(?:what|why|how|when|where|who)", _FLAGS)

# Most specific first: "headphone" must win over "phone", "phone case" is not a smartphone
CATEGORY_PATTERNS: Tuple[Tuple[Pattern[str], ProductCategory], ...] = (
    (re.compile(r"headphone|earphone|earbud|headset", _FLAGS), ProductCategory.HEADPHONE),
    (
        re.compile(r"smartphone|\bphone(?!\s*(?:charger|case|cover|holder|stand|mount))", _FLAGS),
        ProductCategory.SMARTPHONE,
    ),
    (re.compile(r"\btv\b|television", _FLAGS), ProductCategory.TV),
    (re.compile(r"speaker|audio", _FLAGS), ProductCategory.SPEAKER),
    (re.compile(r"laptop|notebook", _FLAGS), ProductCategory.LAPTOP),
    (re.compile(r"tablet|ipad", _FLAGS), ProductCategory.TABLET),
    (re.compile(r"watch|smartwatch", _FLAGS), ProductCategory.WATCH),
    (re.compile(r"camera", _FLAGS), ProductCategory.CAMERA),
)

KNOWN_BRANDS: Tuple[str, ...] = (
    "iqoo", "oneplus", "samsung", "mi", "boat", "sony", "apple", "realme", "redmi",
    "oppo", "vivo", "lg", "dell", "hp", "lenovo", "asus", "acer", "msi", "jbl",
    "bose", "philips", "amazon", "xiaomi", "motorola", "nokia",
)

# Brand name plus up to three trailing words
BRAND_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
    (brand, re.compile(rf"\b({re.escape(brand)}(?:\s+\w+){{0,3}})\b", _FLAGS))
    for brand in KNOWN_BRANDS
)

LIMIT_PATTERN: Pattern[str] = re.compile(
    r"\b(?:top|show|get|list|first)\s+(\d{1,6}|five|ten|twenty)\b", _FLAGS
)
LIMIT_WORDS = {"five": 5, "ten": 10, "twenty": 20}
MAX_LIMIT = 100

_AMOUNT = r"₹?\s*(\d+(?:\.\d+)?)\s*(?:(k|lakhs?|lacs?)(?![a-z]))?"

PRICE_BETWEEN_PATTERN: Pattern[str] = re.compile(
    rf"(?:between|from)\s+{_AMOUNT}(?:\s+(?:to|and)\s+|\s*-\s*){_AMOUNT}", _FLAGS
)
PRICE_UNDER_PATTERN: Pattern[str] = re.compile(rf"\bunder\s+{_AMOUNT}", _FLAGS)
PRICE_ABOVE_PATTERN: Pattern[str] = re.compile(rf"\babove\s+{_AMOUNT}", _FLAGS)
OPEN_PRICE_CEILING = 999999

LEADING_PHRASE_PATTERN: Pattern[str] = re.compile(
    r"^(?:what is|what's|show me|tell me|get|find)\s+", _FLAGS
)

MIN_CONFIDENCE = 0.2
MAX_SCORE = 10
KEYWORD_WEIGHT = 2
PATTERN_BONUS = 5
PRODUCT_FALLBACK_SCORE = 3
QUESTION_FALLBACK_SCORE = 2


@dataclass(frozen=True)
class RuleSet:
    """Everything the classifier needs, bundled so it can be swapped in tests."""

    intent_rules: Tuple[IntentRule, ...] = INTENT_RULES
    data_requiring: FrozenSet[QueryIntent] = DATA_REQUIRING_INTENTS
    ungated: FrozenSet[QueryIntent] = UNGATED_INTENTS
    product_keywords: Tuple[str, ...] = PRODUCT_DOMAIN_KEYWORDS
    interrogative: Pattern[str] = INTERROGATIVE_PATTERN
    min_confidence: float = MIN_CONFIDENCE
    max_score: int = MAX_SCORE

    def patterns_for(self, intent: QueryIntent) -> Tuple[Pattern[str], ...]:
        for rule in self.intent_rules:
            if rule.intent == intent:
                return rule.patterns
        return ()


DEFAULT_RULES = RuleSet()
