"""
Client configuration for the Terra LCD.

Values come from explicit arguments, or from the environment after
~/.catmint/.env is loaded with python-dotenv.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from ..sigil.key import load_env

DEFAULT_LCD_URL = "https://fcd.terra.dev"
DEFAULT_CHAIN_ID = "columbus-5"
DEFAULT_GAS_PRICES = "uusd=0.35"
DEFAULT_GAS_ADJUSTMENT = Decimal("1.75")
DEFAULT_TIMEOUT = 30.0

BROADCAST_MODES = {
    "block": "BROADCAST_MODE_BLOCK",
    "sync": "BROADCAST_MODE_SYNC",
    "async": "BROADCAST_MODE_ASYNC",
}

_COIN_RE = re.compile(r"^(\d+)([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


def parse_gas_prices(text: str) -> dict[str, Decimal]:
    """
    Parse a gas price table.

    Accepts "uusd=0.35,uluna=0.01" as well as the Cosmos style
    "0.35uusd,0.01uluna".
    """
    prices: dict[str, Decimal] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            denom, _, raw = part.partition("=")
        else:
            match = re.match(r"^([0-9.]+)([a-zA-Z].*)$", part)
            if not match:
                raise ValueError(f"Invalid gas price: {part!r}")
            raw, denom = match.groups()
        try:
            price = Decimal(raw.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid gas price for {denom.strip()}: {raw!r}") from exc
        if price < 0:
            raise ValueError(f"Gas price must not be negative: {part!r}")
        prices[denom.strip()] = price
    if not prices:
        raise ValueError("Gas price table is empty")
    return prices


def parse_coins(text: str) -> dict[str, int]:
    """Parse "100000uluna,5uusd" into {"uluna": 100000, "uusd": 5}."""
    coins: dict[str, int] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        match = _COIN_RE.match(part)
        if not match:
            raise ValueError(f"Invalid coin: {part!r}")
        amount, denom = match.groups()
        coins[denom] = coins.get(denom, 0) + int(amount)
    return coins


def resolve_broadcast_mode(mode: str) -> str:
    key = mode.strip().lower()
    if key in BROADCAST_MODES:
        return BROADCAST_MODES[key]
    if mode in BROADCAST_MODES.values():
        return mode
    raise ValueError(f"Unknown broadcast mode: {mode!r}")


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection parameters for a Terra LCD endpoint.

    Attributes:
        url: LCD base URL
        chain_id: Chain identifier; must match the node's
        gas_prices: denom -> price per gas unit
        gas_adjustment: Multiplier applied to simulated gas
        fee_denoms: Denoms the fee is paid in (default: all of gas_prices)
        broadcast_mode: BROADCAST_MODE_BLOCK / _SYNC / _ASYNC
        timeout: Per-request timeout in seconds
    """

    url: str = DEFAULT_LCD_URL
    chain_id: str = DEFAULT_CHAIN_ID
    gas_prices: dict[str, Decimal] = field(
        default_factory=lambda: parse_gas_prices(DEFAULT_GAS_PRICES)
    )
    gas_adjustment: Decimal = DEFAULT_GAS_ADJUSTMENT
    fee_denoms: tuple[str, ...] = ()
    broadcast_mode: str = BROADCAST_MODES["block"]
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("LCD url is required")
        if not self.chain_id:
            raise ValueError("chain_id is required")
        if self.gas_adjustment <= 0:
            raise ValueError("gas_adjustment must be positive")
        object.__setattr__(self, "url", self.url.rstrip("/"))
        object.__setattr__(
            self,
            "gas_prices",
            {denom: Decimal(str(price)) for denom, price in self.gas_prices.items()},
        )
        object.__setattr__(self, "gas_adjustment", Decimal(str(self.gas_adjustment)))
        object.__setattr__(self, "broadcast_mode", resolve_broadcast_mode(self.broadcast_mode))

        missing = [d for d in self.fee_denoms if d not in self.gas_prices]
        if missing:
            raise ValueError(f"No gas price for fee denom(s): {', '.join(missing)}")

    @property
    def effective_fee_denoms(self) -> tuple[str, ...]:
        return self.fee_denoms or tuple(sorted(self.gas_prices))

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "ClientConfig":
        """
        Build a config from TERRA_* environment variables.

        Args:
            env_path: Path to .env file (default: ~/.catmint/.env)
        """
        load_env(env_path)

        fee_denoms = os.environ.get("TERRA_FEE_DENOMS", "")
        return cls(
            url=os.environ.get("TERRA_LCD_URL", DEFAULT_LCD_URL),
            chain_id=os.environ.get("TERRA_CHAIN_ID", DEFAULT_CHAIN_ID),
            gas_prices=parse_gas_prices(os.environ.get("TERRA_GAS_PRICES", DEFAULT_GAS_PRICES)),
            gas_adjustment=Decimal(os.environ.get("TERRA_GAS_ADJUSTMENT", str(DEFAULT_GAS_ADJUSTMENT))),
            fee_denoms=tuple(d.strip() for d in fee_denoms.split(",") if d.strip()),
            broadcast_mode=os.environ.get("TERRA_BROADCAST_MODE", "block"),
            timeout=float(os.environ.get("TERRA_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
