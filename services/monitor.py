import asyncio
import logging
from typing import Optional

from config import settings
from models import MonitoringConfig, NewToken, StartMonitoring, StatusUpdate
from services.broadcaster import ClientBroadcaster
from services.dedup import ProcessedTokens
from services.market_data import MarketDataFetcher, filter_pairs
from services.safety import quick_safety_check
from services.telegram_notifier import TelegramNotifier

logger = logging.getLogger(__name__)

class TokenMonitor:
    """
    Polls for new pairs, alerts on the ones that pass the safety check and keeps UI clients informed.

    One check runs immediately on start, then one per interval until stopped. Timer ticks do not
    wait for the previous check, so checks may overlap; `stop` only prevents future ticks.
    """

    def __init__(self, fetcher: MarketDataFetcher = None, notifier: TelegramNotifier = None,
                 broadcaster: ClientBroadcaster = None, interval: float = None):
        self.fetcher = fetcher or MarketDataFetcher()
        self.notifier = notifier or TelegramNotifier()
        self.broadcaster = broadcaster or ClientBroadcaster()
        self.interval = settings.check_interval_seconds if interval is None else interval

        self.config: Optional[MonitoringConfig] = None
        self.processed = ProcessedTokens()
        self.found_count = 0

        self._timer: Optional[asyncio.Task] = None
        self._generation = 0
        self._inflight = set()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def start(self, config: Optional[MonitoringConfig]):
        logger.info("Starting background monitoring")
        self.stop()
        generation = self._generation

        self.config = config
        await self.run_check()

        # No timer if a stop or another start arrived during the first check
        if generation == self._generation:
            self._timer = asyncio.create_task(self._tick())

        await self.broadcaster.broadcast(StatusUpdate(tokens_found=self.found_count))

    def stop(self):
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        logger.info("Monitoring stopped")

    async def _tick(self):
        while True:
            await asyncio.sleep(self.interval)
            self._spawn_check()

    def _spawn_check(self):
        task = asyncio.create_task(self.run_check())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def run_check(self):
        if self.config is None:
            return

        try:
            pairs = await self.fetcher.fetch_pairs()

            for pair in filter_pairs(pairs):
                address = pair.base_token.address
                if not address or address in self.processed:
                    continue
                if not quick_safety_check(pair):
                    continue

                # Marked before sending: a failed alert is never retried
                self.processed.mark_seen(address)
                self.found_count += 1
                logger.info("🚀 New token %s (%s) passed safety checks", pair.base_token.symbol, address)

                sent = await self.notifier.send_alert(pair, self.config)
                if not sent:
                    logger.warning("Alert for %s was not delivered", address)

                await self.broadcaster.broadcast(NewToken(symbol=pair.base_token.symbol, address=address))
                await self.broadcaster.broadcast(StatusUpdate(tokens_found=self.found_count))
        except Exception:
            logger.exception("Background check failed")

    async def periodic_sync(self, tag: str) -> bool:
        if tag != settings.periodic_sync_tag:
            logger.debug("Ignoring periodic sync with tag %r", tag)
            return False
        await self.run_check()
        return True

    async def handle_message(self, data: dict):
        msg_type = data.get("type") if isinstance(data, dict) else None

        if msg_type == "START_MONITORING":
            message = StartMonitoring.model_validate(data)
            await self.start(message.config)
        elif msg_type == "STOP_MONITORING":
            self.stop()
        else:
            logger.debug("Ignoring client message of type %r", msg_type)

    def status(self) -> dict:
        return {
            "running": self.running,
            "tokensFound": self.found_count,
            "processedTokens": len(self.processed),
        }

    async def close(self):
        self.stop()
        for task in list(self._inflight):
            task.cancel()
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)
        await self.fetcher.close()
        await self.notifier.close()
