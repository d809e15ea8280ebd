from datetime import datetime
from typing import Optional

from config import settings
from models import TradingPair
from services.formatting import pair_age_minutes

def quick_safety_check(pair: TradingPair, now: Optional[datetime] = None) -> bool:
    """
    Fast heuristic gate for a freshly listed pair.
    Rejects thin liquidity, zero volume, liquidity far above volume and pairs older than the age window.
    """
    liquidity = pair.liquidity_usd
    volume = pair.volume_24h
    age_minutes = pair_age_minutes(pair.pair_created_at, now)
    if age_minutes is None:
        age_minutes = settings.missing_age_minutes

    if liquidity < settings.min_liquidity_usd:
        return False
    if volume == 0:
        return False
    if liquidity / volume > settings.max_liquidity_volume_ratio:
        return False
    if age_minutes > settings.max_age_minutes:
        return False

    return True
