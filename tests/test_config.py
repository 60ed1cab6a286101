import logging

from oneepay.core.config import ClientConfig, ItemQtyStrategy, Settings
from oneepay.common.logging import logger, setup_logging


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("ONEEPAY_API_URL", "https://api.oneepay.com")
    monkeypatch.setenv("ONEEPAY_CLIENT_ID", "env-id")
    monkeypatch.setenv("ONEEPAY_TIMEOUT", "5")

    env_settings = Settings()

    assert env_settings.API_URL == "https://api.oneepay.com"
    assert env_settings.CLIENT_ID == "env-id"
    assert env_settings.TIMEOUT == 5.0


def test_client_config_defaults():
    config = ClientConfig()
    assert config.default_ip == "Unknown IP"
    assert config.default_lat == "Unknown Latitude"
    assert config.default_lng == "Unknown Longitude"
    assert config.default_device_udid == "Unknown Device UDID"
    assert config.item_qty_strategy == ItemQtyStrategy.ORDER_TOTAL
    assert config.currency_code == "USD"
    assert config.reauthenticate is True


def test_setup_logging_is_idempotent():
    setup_logging("debug")
    setup_logging("warning")

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
