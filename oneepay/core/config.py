from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "OneEpay SDK"

    # Gateway
    API_URL: str = "https://api-dev.oneepay.com"
    CLIENT_ID: Optional[str] = None
    CLIENT_SECRET: Optional[str] = None
    TIMEOUT: float = 15.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ONEEPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

settings = Settings()


class ItemQtyStrategy(str, Enum):
    ORDER_TOTAL = "order_total"  # qty = totalQuantity
    SINGLE_UNIT = "single_unit"  # qty = 1


class ClientConfig(BaseModel):
    """Per-client defaults substituted into outgoing transactions."""
    default_ip: str = "Unknown IP"
    default_lat: str = "Unknown Latitude"
    default_lng: str = "Unknown Longitude"
    default_device_udid: str = "Unknown Device UDID"
    item_qty_strategy: ItemQtyStrategy = ItemQtyStrategy.ORDER_TOTAL
    currency_code: str = "USD"
    # Fetch a fresh token before every operation instead of reusing the held one.
    reauthenticate: bool = True
