"""Unit tests for client configuration (catmint.pneuma.config)."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from catmint.pneuma.config import (
    ClientConfig,
    parse_coins,
    parse_gas_prices,
    resolve_broadcast_mode,
)


class TestParseGasPrices:
    def test_key_value(self) -> None:
        assert parse_gas_prices("uusd=0.35, uluna=0.01") == {
            "uusd": Decimal("0.35"),
            "uluna": Decimal("0.01"),
        }

    def test_cosmos_style(self) -> None:
        assert parse_gas_prices("0.15uusd,0.0133uluna") == {
            "uusd": Decimal("0.15"),
            "uluna": Decimal("0.0133"),
        }

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            parse_gas_prices(" , ")

    def test_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_gas_prices("uusd=cheap")


class TestParseCoins:
    def test_single(self) -> None:
        assert parse_coins("100000uluna") == {"uluna": 100000}

    def test_multiple_and_merge(self) -> None:
        assert parse_coins("1uluna,2uusd,3uluna") == {"uluna": 4, "uusd": 2}

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_coins("uluna100")


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.url == "https://fcd.terra.dev"
        assert config.chain_id == "columbus-5"
        assert config.gas_prices == {"uusd": Decimal("0.35")}
        assert config.gas_adjustment == Decimal("1.75")
        assert config.broadcast_mode == "BROADCAST_MODE_BLOCK"
        assert config.effective_fee_denoms == ("uusd",)

    def test_trailing_slash_and_float_prices(self) -> None:
        config = ClientConfig(url="https://lcd.example/", gas_prices={"uusd": 0.35})
        assert config.url == "https://lcd.example"
        assert config.gas_prices["uusd"] == Decimal("0.35")

    def test_fee_denom_needs_price(self) -> None:
        with pytest.raises(ValueError, match="uluna"):
            ClientConfig(gas_prices={"uusd": Decimal("0.35")}, fee_denoms=("uluna",))

    def test_bad_adjustment(self) -> None:
        with pytest.raises(ValueError):
            ClientConfig(gas_adjustment=Decimal("0"))

    def test_from_env(self, tmp_path: Path) -> None:
        env = {
            "TERRA_LCD_URL": "http://localhost:1317",
            "TERRA_CHAIN_ID": "localterra",
            "TERRA_GAS_PRICES": "uluna=0.015,uusd=0.15",
            "TERRA_FEE_DENOMS": "uluna",
            "TERRA_BROADCAST_MODE": "sync",
            "TERRA_TIMEOUT": "5",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ClientConfig.from_env(tmp_path / ".env")
        assert config.url == "http://localhost:1317"
        assert config.chain_id == "localterra"
        assert config.effective_fee_denoms == ("uluna",)
        assert config.broadcast_mode == "BROADCAST_MODE_SYNC"
        assert config.timeout == 5.0

    def test_from_env_file(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text("TERRA_CHAIN_ID=bombay-12\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            config = ClientConfig.from_env(env_path)
        assert config.chain_id == "bombay-12"
        assert config.url == "https://fcd.terra.dev"


def test_resolve_broadcast_mode() -> None:
    assert resolve_broadcast_mode("block") == "BROADCAST_MODE_BLOCK"
    assert resolve_broadcast_mode("BROADCAST_MODE_SYNC") == "BROADCAST_MODE_SYNC"
    with pytest.raises(ValueError):
        resolve_broadcast_mode("eventually")
