"""Utility functions for formatting and display."""

import re

from shopassist.application.intent.models import IntentClassification


def format_amount(amount: float) -> str:
    """Rupee amount with thousands separators; whole numbers drop the decimals."""
    if float(amount).is_integer():
        return f"₹{int(amount):,}"
    return f"₹{amount:,.2f}"


def format_price(metadata: dict) -> str:
    """
    Format price with discount information.

    Args:
        metadata: Product metadata dictionary

    Returns:
        Formatted price string
    """
    price = metadata.get("price")
    mrp = metadata.get("mrp")

    if price is None:
        return "Price not available"

    price_str = format_amount(price)

    if mrp and mrp > price:
        discount = int(((mrp - price) / mrp) * 100)
        return f"{price_str} ({discount}% off)"

    return price_str


def format_intent_classification(classification: IntentClassification) -> str:
    """
    Render a classification for logs and debugging, one fact per line.

    Args:
        classification: Result of the intent classifier

    Returns:
        Multi-line plain-text summary
    """
    entities = classification.extracted_entities
    lines = [
        f"Intent: {classification.intent} ({round(classification.confidence * 100)}% confident)",
        f"Requires Data: {'Yes' if classification.requires_data else 'No'}",
    ]

    if entities.product_name:
        lines.append(f'Product: "{entities.product_name}"')
    if entities.product_category:
        lines.append(f"Category: {entities.product_category}")
    if entities.limit:
        lines.append(f"Limit: {entities.limit}")
    if entities.price_range:
        lines.append(
            f"Price Range: {format_amount(entities.price_range.min)} - "
            f"{format_amount(entities.price_range.max)}"
        )

    return "\n".join(lines) + "\n"


def clean_markdown_formatting(text: str) -> str:
    """Strip bold markers and turn asterisk bullets into "•" bullets."""
    text = text.replace("**", "")
    text = re.sub(r"^\* ", "• ", text, flags=re.MULTILINE)
    return text.replace("*", "")
