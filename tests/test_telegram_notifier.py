import asyncio
from datetime import datetime, timezone

import aiohttp

from helpers import FakeResponse, FakeSession, make_pair
from models import MonitoringConfig
from services.telegram_notifier import TelegramNotifier, build_alert_message

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
CONFIG = MonitoringConfig(botToken="123:abc", chatId="-100200")


def test_alert_message_contents():
    pair = make_pair(address="Mint111", symbol="CAT", name="Cat Coin", price="0.0012",
                     liquidity=42000, volume=9876.5, age_minutes=7, now=NOW,
                     url="https://dexscreener.com/solana/pair111")

    text = build_alert_message(pair, NOW)

    assert "<b>NEW SOLANA TOKEN</b>" in text
    assert "<b>Token:</b> CAT (Cat Coin)" in text
    assert "<b>Price:</b> $0.00120000" in text
    assert "<b>Liquidity:</b> $42,000" in text
    assert "<b>Volume:</b> $9,876.5" in text
    assert "<b>Age:</b> 7m ago" in text
    assert "<code>Mint111</code>" in text
    assert '<a href="https://dexscreener.com/solana/Mint111">DexScreener Chart</a>' in text
    assert '<a href="https://dexscreener.com/solana/pair111">Trade Now</a>' in text


def test_trade_link_falls_back_to_chart():
    pair = make_pair(address="Mint222", url=None, now=NOW)
    text = build_alert_message(pair, NOW)
    assert '<a href="https://dexscreener.com/solana/Mint222">Trade Now</a>' in text


def test_fresh_pair_reads_just_now():
    pair = make_pair(age_minutes=0.5, now=NOW)
    assert "<b>Age:</b> Just now" in build_alert_message(pair, NOW)


def test_token_names_are_html_escaped():
    pair = make_pair(symbol="<B>", name="A & B", now=NOW)
    assert "&lt;B&gt; (A &amp; B)" in build_alert_message(pair, NOW)


def test_send_alert_posts_html_message():
    notifier = TelegramNotifier(api_url="https://tg.example")
    notifier.session = FakeSession(FakeResponse(status=200))

    assert asyncio.run(notifier.send_alert(make_pair(), CONFIG)) is True

    method, url, kwargs = notifier.session.calls[0]
    assert method == "POST"
    assert url == "https://tg.example/bot123:abc/sendMessage"
    assert kwargs["json"]["chat_id"] == "-100200"
    assert kwargs["json"]["parse_mode"] == "HTML"
    assert "Passed safety checks" in kwargs["json"]["text"]


def test_send_alert_returns_false_on_rejection():
    notifier = TelegramNotifier()
    notifier.session = FakeSession(FakeResponse(status=401, text='{"ok":false}'))
    assert asyncio.run(notifier.send_alert(make_pair(), CONFIG)) is False


def test_send_alert_returns_false_on_network_error():
    notifier = TelegramNotifier()
    notifier.session = FakeSession(error=aiohttp.ClientConnectionError("boom"))
    assert asyncio.run(notifier.send_alert(make_pair(), CONFIG)) is False


def test_send_alert_returns_false_on_timeout():
    notifier = TelegramNotifier()
    notifier.session = FakeSession(error=asyncio.TimeoutError())
    assert asyncio.run(notifier.send_alert(make_pair(), CONFIG)) is False


def test_send_alert_returns_false_when_error_body_is_unreadable():
    notifier = TelegramNotifier()
    notifier.session = FakeSession(FakeResponse(
        status=502,
        text_error=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
    ))
    assert asyncio.run(notifier.send_alert(make_pair(), CONFIG)) is False
