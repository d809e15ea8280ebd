import aiohttp
import logging
from typing import Iterable, List

from pydantic import ValidationError

from config import settings
from models import TradingPair

logger = logging.getLogger(__name__)

class MarketDataFetcher:
    def __init__(self, url: str = None, params: dict = None):
        self.url = url or settings.search_url
        self.params = params or settings.search_params
        self.session = None

    async def get_session(self):
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def fetch_pairs(self) -> List[TradingPair]:
        """
        Newest pairs for the configured search term.
        Network, HTTP and body decoding errors propagate; a single malformed pair is skipped.
        """
        session = await self.get_session()
        async with session.get(self.url, params=self.params) as resp:
            resp.raise_for_status()
            data = await resp.json()

        raw_pairs = (data or {}).get("pairs") or []
        logger.debug("Fetched %d pairs", len(raw_pairs))

        pairs = []
        for raw in raw_pairs:
            try:
                pairs.append(TradingPair.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping malformed pair: %s", e)
        return pairs

    async def close(self):
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None


def filter_pairs(pairs: Iterable[TradingPair], chain: str = None, limit: int = None) -> List[TradingPair]:
    """Pairs on the target chain, newest first, capped at `limit`."""
    chain = chain or settings.target_chain
    limit = settings.max_candidates if limit is None else limit

    on_chain = [p for p in pairs if p.chain_id == chain]
    on_chain.sort(key=lambda p: p.pair_created_at or 0, reverse=True)
    return on_chain[:limit]
