import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    def __init__(self):
        # Polling
        self.check_interval_seconds = float(os.getenv("CHECK_INTERVAL_SECONDS", "60"))
        self.search_url = os.getenv("DEXSCREENER_SEARCH_URL", "https://api.dexscreener.com/latest/dex/search")
        self.search_query = os.getenv("SEARCH_QUERY", "SOL")
        self.search_limit = 50

        # Pair filter
        self.target_chain = os.getenv("TARGET_CHAIN", "solana")
        self.max_candidates = 20

        # === SAFETY CHECK ===
        self.min_liquidity_usd = 25_000
        self.max_liquidity_volume_ratio = 8
        self.max_age_minutes = 30
        self.missing_age_minutes = 999  # Used when a pair has no creation time

        # Telegram
        self.telegram_api_url = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
        self.telegram_bot_token = os.getenv("TELEGRAM_BOT_TOKEN", "")
        self.telegram_chat_id = os.getenv("TELEGRAM_CHAT_ID", "")
        self.chart_base_url = "https://dexscreener.com"

        # Platform hooks
        self.periodic_sync_tag = "solana-check"
        self.notification_icon = "/icon-192.png"
        self.notification_badge = "/icon-72.png"
        self.notification_vibrate = [200, 100, 200]
        self.notification_tag = "solana-alert"

        # Server
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "8000"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def search_params(self) -> dict:
        return {
            "q": self.search_query,
            "rankBy": "createdAt",
            "order": "desc",
            "limit": str(self.search_limit),
        }

    @property
    def has_telegram_credentials(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

settings = Settings()
