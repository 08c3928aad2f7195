import math
from typing import Optional

AMOUNT_MULTIPLIERS = {
    "k": 1_000,
    "lakh": 100_000,
    "lakhs": 100_000,
    "lac": 100_000,
    "lacs": 100_000,
}


def is_number(value: str) -> bool:
    try:
        float(value)
        return True
    except (TypeError, ValueError):
        return False


def parse_amount(value: str, suffix: Optional[str] = None) -> Optional[float]:
    """Resolve ``"10"`` + ``"k"`` style amounts to rupees; None when unusable."""
    if not is_number(value):
        return None

    amount = float(value)
    if suffix:
        multiplier = AMOUNT_MULTIPLIERS.get(suffix.lower())
        if multiplier is None:
            return None
        amount *= multiplier

    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def parse_count(value: str, words: dict) -> Optional[int]:
    """Resolve a digit string or a number word (``"ten"``) to an int."""
    lowered = value.lower()
    if lowered in words:
        return words[lowered]
    if not lowered.isdecimal():
        return None
    return int(lowered)
