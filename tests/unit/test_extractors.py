import pytest

from shopassist.application.intent.extractors import (
    extract_brand_name,
    extract_category,
    extract_entities,
    extract_limit,
    extract_price_range,
    extract_product_name,
)
from shopassist.application.intent.models import ProductCategory, QueryIntent
from shopassist.utils.value_parsers import parse_amount, parse_count


@pytest.mark.parametrize(
    "query, expected",
    [
        ("Top 10 headphones", 10),
        ("show ten phones", 10),
        ("list FIVE laptops", 5),
        ("first twenty results", 20),
        ("get 100 cables", 100),
    ],
)
def test_extract_limit(query, expected):
    assert extract_limit(query) == expected


@pytest.mark.parametrize(
    "query",
    ["top 0 phones", "top 101 phones", "top 1234567 phones", "laptop 5 options", "best phones"],
)
def test_extract_limit_rejects_out_of_range_or_missing(query):
    assert extract_limit(query) is None


@pytest.mark.parametrize(
    "query, expected",
    [
        ("wireless headphones", ProductCategory.HEADPHONE),
        ("boat earbuds", ProductCategory.HEADPHONE),
        ("5G smartphone cover", ProductCategory.SMARTPHONE),
        ("cheap phones", ProductCategory.SMARTPHONE),
        ("Samsung TV 43 inch", ProductCategory.TV),
        ("bluetooth audio", ProductCategory.SPEAKER),
        ("gaming notebook", ProductCategory.LAPTOP),
        ("iPad air", ProductCategory.TABLET),
        ("smartwatch for running", ProductCategory.WATCH),
        ("action camera", ProductCategory.CAMERA),
    ],
)
def test_extract_category(query, expected):
    assert extract_category(query) == expected


@pytest.mark.parametrize("query", ["phone case", "phone charger", "usb cable", "stv box"])
def test_extract_category_ignores_accessories_and_partial_words(query):
    assert extract_category(query) is None


def test_headphone_wins_over_phone():
    assert extract_category("phone with headphones") == ProductCategory.HEADPHONE


@pytest.mark.parametrize(
    "query, expected",
    [
        ("between ₹10k to ₹20k phones", (10000, 20000)),
        ("from 10000 - 20000", (10000, 20000)),
        ("between 1.5 lakh and 2 lakh", (150000, 200000)),
        ("between 10 to 20k", (10000, 20000)),
        ("between 500 and 2k", (500, 2000)),
        ("under ₹20k", (0, 20000)),
        ("laptops under 2 lac", (0, 200000)),
        ("cables under 500 rupees", (0, 500)),
        ("above 5k", (5000, 999999)),
        ("under 5 kg speakers", (0, 5)),
        ("phones under 2 lakhs", (0, 200000)),
        ("laptops above 1 lakhs", (100000, 999999)),
        ("between 1 lacs and 2 lacs", (100000, 200000)),
        ("between 1 to 2 lakhs", (100000, 200000)),
    ],
)
def test_extract_price_range(query, expected):
    price_range = extract_price_range(query)

    assert (price_range.min, price_range.max) == expected


@pytest.mark.parametrize(
    "query",
    [
        "between 20k and 10k",
        "from 500 to 500",
        "under 0",
        "above 20 lakh",
        "cheap phones",
    ],
)
def test_extract_price_range_rejects_invalid(query):
    assert extract_price_range(query) is None


def test_between_takes_priority_over_under():
    price_range = extract_price_range("between 1k and 3k, ideally under 2k")

    assert (price_range.min, price_range.max) == (1000, 3000)


def test_search_product_name_requires_known_brand():
    assert extract_product_name("best wireless earbuds", QueryIntent.PRODUCT_SEARCH) is None
    assert extract_product_name("top oneplus nord ce 3 lite phones", QueryIntent.PRODUCT_SEARCH) == "oneplus nord ce 3"


def test_brand_must_be_a_whole_word():
    assert extract_brand_name("mini speakers") is None
    assert extract_brand_name("Redmi Note 12 Pro") == "Redmi Note 12 Pro"


def test_product_name_from_pattern_capture():
    assert extract_product_name("How much is the JBL Flip 6", QueryIntent.PRODUCT_PRICE) == "the JBL Flip 6"


def test_captured_product_name_drops_trailing_question_mark():
    assert extract_product_name("What is the price of boat rugged v3?", QueryIntent.PRODUCT_PRICE) == "boat rugged v3"
    assert extract_product_name("How much is the JBL Flip 6 ??", QueryIntent.PRODUCT_PRICE) == "the JBL Flip 6"


def test_product_name_falls_back_to_cleaned_query():
    assert extract_product_name("find boat airdopes 141?", QueryIntent.PRODUCT_REVIEWS) == "boat airdopes 141"


def test_product_name_fallback_strips_one_leading_phrase():
    assert extract_product_name("show me what is new?", QueryIntent.PRODUCT_INFO) == "what is new"


def test_product_name_empty_after_cleaning():
    assert extract_product_name("get ?", QueryIntent.PRODUCT_INFO) is None


@pytest.mark.parametrize("intent", [QueryIntent.GREETING, QueryIntent.GENERAL_QUESTION, QueryIntent.UNKNOWN])
def test_no_product_name_for_conversational_intents(intent):
    assert extract_product_name("hello sony", intent) is None


def test_product_name_accepts_plain_string_intent():
    assert extract_product_name("price of sony xb13", "product_price") == "sony xb13"


def test_extract_entities_combines_all_fields():
    entities = extract_entities("top 5 sony headphones under 10k", QueryIntent.PRODUCT_SEARCH)

    assert entities.product_name == "sony headphones under 10k"
    assert entities.product_category == "headphone"
    assert entities.limit == 5
    assert entities.price_range.max == 10000


def test_parse_amount_suffixes():
    assert parse_amount("10", "k") == 10000
    assert parse_amount("1.5", "LAKH") == 150000
    assert parse_amount("2", "Lakhs") == 200000
    assert parse_amount("3", "lacs") == 300000
    assert parse_amount("7") == 7
    assert parse_amount("abc") is None
    assert parse_amount("9" * 400) is None


def test_parse_count_words_and_digits():
    assert parse_count("Ten", {"ten": 10}) == 10
    assert parse_count("42", {}) == 42
    assert parse_count("4x", {}) is None
