"""In-memory doubles for aiohttp sessions, market data, Telegram and UI clients."""
import asyncio
from datetime import datetime, timedelta, timezone

import aiohttp

from models import TradingPair


def make_pair(address="TokenAddr1111", chain="solana", liquidity=30000, volume=5000,
              age_minutes=5, now=None, symbol="TKN", name="Token", price="1.5", url=None) -> TradingPair:
    now = now or datetime.now(timezone.utc)
    created = None
    if age_minutes is not None:
        created = int((now - timedelta(minutes=age_minutes)).timestamp() * 1000)
    return TradingPair.model_validate({
        "chainId": chain,
        "baseToken": {"address": address, "symbol": symbol, "name": name},
        "priceUsd": price,
        "liquidity": {"usd": liquidity},
        "volume": {"h24": volume},
        "pairCreatedAt": created,
        "url": url,
    })


class FakeResponse:
    def __init__(self, status=200, payload=None, text="", text_error=None):
        self.status = status
        self.payload = payload
        self._text = text
        self.text_error = text_error

    async def json(self):
        return self.payload

    async def text(self):
        if self.text_error is not None:
            raise self.text_error
        return self._text

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientResponseError(None, (), status=self.status)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.closed = False
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    async def close(self):
        self.closed = True


class StubFetcher:
    """Returns one batch per call; the last batch repeats. Exceptions in a batch slot are raised."""

    def __init__(self, *batches):
        self.batches = list(batches) or [[]]
        self.calls = 0
        self.closed = False

    async def fetch_pairs(self):
        index = min(self.calls, len(self.batches) - 1)
        self.calls += 1
        await asyncio.sleep(0)
        batch = self.batches[index]
        if isinstance(batch, Exception):
            raise batch
        return list(batch)

    async def close(self):
        self.closed = True


class StubNotifier:
    def __init__(self, result=True):
        self.result = result
        self.sent = []
        self.closed = False

    async def send_alert(self, pair, config):
        self.sent.append((pair, config))
        return self.result

    async def close(self):
        self.closed = True


class RecordingClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.messages = []

    async def send_json(self, data):
        if self.fail:
            raise ConnectionError("client went away")
        self.messages.append(data)
