"""
Entity extractors for chat queries.

Each extractor is a pure function of the query (and, for product names,
the classified intent). Anything that cannot be parsed into a value that
satisfies its invariants is dropped and reported as ``None``.
"""

from typing import Optional

from shopassist.application.intent.models import (
    ExtractedEntities,
    PriceRange,
    ProductCategory,
    QueryIntent,
)
from shopassist.application.intent.rules import (
    BRAND_PATTERNS,
    CATEGORY_PATTERNS,
    DEFAULT_RULES,
    LEADING_PHRASE_PATTERN,
    LIMIT_PATTERN,
    LIMIT_WORDS,
    MAX_LIMIT,
    OPEN_PRICE_CEILING,
    PRICE_ABOVE_PATTERN,
    PRICE_BETWEEN_PATTERN,
    PRICE_UNDER_PATTERN,
    RuleSet,
)
from shopassist.utils.value_parsers import parse_amount, parse_count


def extract_limit(query: str) -> Optional[int]:
    """Pull a result count out of phrases like "top 5" or "show ten"."""
    match = LIMIT_PATTERN.search(query)
    if not match:
        return None

    limit = parse_count(match.group(1), LIMIT_WORDS)
    if limit is None or limit <= 0 or limit > MAX_LIMIT:
        return None
    return limit


def extract_category(query: str) -> Optional[ProductCategory]:
    for pattern, category in CATEGORY_PATTERNS:
        if pattern.search(query):
            return category
    return None


def _make_range(low: Optional[float], high: Optional[float]) -> Optional[PriceRange]:
    if low is None or high is None or low >= high:
        return None
    return PriceRange(min=low, max=high)


def extract_price_range(query: str) -> Optional[PriceRange]:
    """
    Extract a price range from "between/from A to B", "under A" or "above A".

    Amounts accept an optional rupee sign and a ``k`` (thousand) or
    ``lakh``/``lac`` (hundred thousand) suffix. In the between form a bare
    lower bound borrows the upper bound's suffix when it is the smaller
    number, so "between 10 to 20k" reads as 10,000 - 20,000.
    """
    match = PRICE_BETWEEN_PATTERN.search(query)
    if match:
        low_value, low_suffix, high_value, high_suffix = match.groups()
        if not low_suffix and high_suffix and float(low_value) < float(high_value):
            low_suffix = high_suffix
        return _make_range(
            parse_amount(low_value, low_suffix),
            parse_amount(high_value, high_suffix),
        )

    match = PRICE_UNDER_PATTERN.search(query)
    if match:
        return _make_range(0, parse_amount(*match.groups()))

    match = PRICE_ABOVE_PATTERN.search(query)
    if match:
        return _make_range(parse_amount(*match.groups()), OPEN_PRICE_CEILING)

    return None


def _first_capture(match) -> Optional[str]:
    groups = match.groups()
    if not groups or not groups[0]:
        return None
    captured = groups[0].strip().rstrip("?").rstrip()
    return captured or None


def extract_brand_name(query: str) -> Optional[str]:
    """Known brand plus up to three following words, e.g. "boat rockerz 450"."""
    lowered = query.lower()
    for brand, pattern in BRAND_PATTERNS:
        if brand not in lowered:
            continue
        match = pattern.search(query)
        if match:
            return match.group(1).strip()
    return None


def extract_product_name(
    query: str,
    intent: QueryIntent,
    rules: RuleSet = DEFAULT_RULES,
) -> Optional[str]:
    """
    Extract the product the user is talking about.

    Search queries only yield a name when a known brand is present, so that
    "best headphones" is left to category extraction. Other data-requiring
    intents use their own capture patterns, then fall back to the query with
    leading filler ("what is", "show me", ...) and a trailing "?" removed.
    Intents that never hit the catalog yield nothing.
    """
    intent = QueryIntent(intent)
    if intent not in rules.data_requiring:
        return None

    if intent == QueryIntent.PRODUCT_SEARCH:
        return extract_brand_name(query)

    for pattern in rules.patterns_for(intent):
        match = pattern.search(query)
        if match:
            captured = _first_capture(match)
            if captured:
                return captured

    cleaned = LEADING_PHRASE_PATTERN.sub("", query.strip(), count=1)
    if cleaned.endswith("?"):
        cleaned = cleaned[:-1]
    cleaned = cleaned.strip()
    return cleaned or None


def extract_entities(
    query: str,
    intent: QueryIntent,
    rules: RuleSet = DEFAULT_RULES,
) -> ExtractedEntities:
    return ExtractedEntities(
        product_name=extract_product_name(query, intent, rules),
        product_category=extract_category(query),
        limit=extract_limit(query),
        price_range=extract_price_range(query),
    )
