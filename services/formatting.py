"""
Deterministic number and age formatting for alert text.

Numbers are rendered the way an en-US locale would (comma grouping, at most
three fraction digits) without depending on the host's locale settings.
"""
import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

_THOUSANDTH = Decimal("0.001")


def format_number(value) -> str:
    try:
        quantized = Decimal(str(value or 0)).quantize(_THOUSANDTH, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return "0"
    text = format(quantized, ",f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_price(price_usd: Optional[str]) -> str:
    try:
        price = float(price_usd)
    except (TypeError, ValueError):
        return "N/A"
    if math.isnan(price) or math.isinf(price):
        return "N/A"
    return f"{price:.8f}"


def _now_ms(now: Optional[datetime]) -> float:
    now = now or datetime.now(timezone.utc)
    return now.timestamp() * 1000


def pair_age_minutes(created_at_ms: Optional[int], now: Optional[datetime] = None) -> Optional[float]:
    """Minutes since the pair was created, or None when the creation time is unknown."""
    if not created_at_ms:
        return None
    return (_now_ms(now) - created_at_ms) / (1000 * 60)


def format_age(created_at_ms: Optional[int], now: Optional[datetime] = None) -> str:
    age = pair_age_minutes(created_at_ms, now)
    minutes = math.floor(age) if age is not None else 0
    if minutes < 1:
        return "Just now"
    return f"{minutes}m ago"
