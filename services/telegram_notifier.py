import aiohttp
import asyncio
import html
import logging
from datetime import datetime
from typing import Optional

from config import settings
from models import MonitoringConfig, TradingPair
from services.formatting import format_age, format_number, format_price

logger = logging.getLogger(__name__)

def chart_url(address: str) -> str:
    return f"{settings.chart_base_url}/{settings.target_chain}/{address}"

def build_alert_message(pair: TradingPair, now: Optional[datetime] = None) -> str:
    token = pair.base_token
    address = token.address or ""
    chart = chart_url(address)
    trade = pair.url or chart

    lines = [
        f"🚀 <b>NEW {settings.target_chain.upper()} TOKEN</b> 🚀",
        "",
        f"<b>Token:</b> {html.escape(token.symbol or '?')} ({html.escape(token.name or '?')})",
        f"<b>Price:</b> ${format_price(pair.price_usd)}",
        f"<b>Liquidity:</b> ${format_number(pair.liquidity_usd)}",
        f"<b>Volume:</b> ${format_number(pair.volume_24h)}",
        f"<b>Age:</b> {format_age(pair.pair_created_at, now)}",
        "",
        "<b>Contract Address:</b>",
        f"<code>{html.escape(address)}</code>",
        "",
        "<b>Links:</b>",
        f'🔗 <a href="{html.escape(chart)}">DexScreener Chart</a>',
        f'📊 <a href="{html.escape(trade)}">Trade Now</a>',
        "",
        "✅ <i>Passed safety checks</i>",
    ]
    return "\n".join(lines)

class TelegramNotifier:
    def __init__(self, api_url: str = None):
        self.api_url = api_url or settings.telegram_api_url
        self.session = None

    async def get_session(self):
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def send_message(self, config: MonitoringConfig, text: str) -> bool:
        url = f"{self.api_url}/bot{config.bot_token}/sendMessage"
        payload = {"chat_id": config.chat_id, "text": text, "parse_mode": "HTML"}
        try:
            session = await self.get_session()
            async with session.post(url, json=payload) as resp:
                if 200 <= resp.status < 300:
                    return True
                body = await resp.text()
                logger.error("Telegram alert rejected (%s): %s", resp.status, body[:200])
                return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Telegram alert failed: %s", e)
            return False
        except Exception:
            logger.exception("Telegram alert failed")
            return False

    async def send_alert(self, pair: TradingPair, config: MonitoringConfig) -> bool:
        return await self.send_message(config, build_alert_message(pair))

    async def close(self):
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None
