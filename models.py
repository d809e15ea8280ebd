from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional, Union

class BaseToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: Optional[str] = None
    symbol: Optional[str] = None
    name: Optional[str] = None

class Liquidity(BaseModel):
    model_config = ConfigDict(frozen=True)

    usd: Optional[float] = None

class Volume(BaseModel):
    model_config = ConfigDict(frozen=True)

    h24: Optional[float] = None

class TradingPair(BaseModel):
    """A DexScreener pair as returned by the search endpoint. Unknown fields are ignored."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chain_id: Optional[str] = Field(default=None, alias="chainId")
    base_token: BaseToken = Field(default_factory=BaseToken, alias="baseToken")
    price_usd: Optional[str] = Field(default=None, alias="priceUsd")
    liquidity: Optional[Liquidity] = None
    volume: Optional[Volume] = None
    pair_created_at: Optional[int] = Field(default=None, alias="pairCreatedAt")
    url: Optional[str] = None

    @property
    def liquidity_usd(self) -> float:
        return (self.liquidity.usd if self.liquidity else None) or 0

    @property
    def volume_24h(self) -> float:
        return (self.volume.h24 if self.volume else None) or 0

class MonitoringConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bot_token: Optional[str] = Field(default=None, alias="botToken")
    chat_id: Optional[Union[int, str]] = Field(default=None, alias="chatId")

# Inbound control messages

class StartMonitoring(BaseModel):
    type: Literal["START_MONITORING"] = "START_MONITORING"
    config: Optional[MonitoringConfig] = None

class StopMonitoring(BaseModel):
    type: Literal["STOP_MONITORING"] = "STOP_MONITORING"

class PeriodicSyncRequest(BaseModel):
    tag: str

class PushPayload(BaseModel):
    title: str = ""
    body: str = ""

# Outbound client messages

class StatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["STATUS_UPDATE"] = "STATUS_UPDATE"
    tokens_found: int = Field(alias="tokensFound")

class NewToken(BaseModel):
    type: Literal["NEW_TOKEN"] = "NEW_TOKEN"
    symbol: Optional[str] = None
    address: str

class NotificationOptions(BaseModel):
    body: str
    icon: str
    badge: str
    vibrate: List[int]
    tag: str

class Notification(BaseModel):
    type: Literal["NOTIFICATION"] = "NOTIFICATION"
    title: str
    options: NotificationOptions
