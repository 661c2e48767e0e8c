"""Shared click options for commands that talk to the LCD."""

from __future__ import annotations

import functools
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

import click

from ..errors import KeyDerivationError
from ..pneuma.config import (
    DEFAULT_CHAIN_ID,
    DEFAULT_GAS_ADJUSTMENT,
    DEFAULT_GAS_PRICES,
    DEFAULT_LCD_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    parse_gas_prices,
)
from ..sigil.key import load_mnemonic


def lcd_options(func: Callable) -> Callable:
    @click.option("--lcd-url", envvar="TERRA_LCD_URL", default=DEFAULT_LCD_URL, show_default=True, help="Terra LCD URL")
    @click.option("--chain-id", envvar="TERRA_CHAIN_ID", default=DEFAULT_CHAIN_ID, show_default=True, help="Chain ID")
    @click.option(
        "--gas-prices",
        envvar="TERRA_GAS_PRICES",
        default=DEFAULT_GAS_PRICES,
        show_default=True,
        help="Gas price table, e.g. uusd=0.35,uluna=0.01",
    )
    @click.option(
        "--gas-adjustment",
        envvar="TERRA_GAS_ADJUSTMENT",
        default=str(DEFAULT_GAS_ADJUSTMENT),
        show_default=True,
        help="Multiplier applied to simulated gas",
    )
    @click.option(
        "--fee-denoms",
        envvar="TERRA_FEE_DENOMS",
        default="",
        help="Comma-separated denoms to pay the fee in (default: every gas price denom)",
    )
    @click.option(
        "--mode",
        envvar="TERRA_BROADCAST_MODE",
        type=click.Choice(["block", "sync", "async"]),
        default="block",
        show_default=True,
        help="Broadcast mode",
    )
    @click.option("--timeout", envvar="TERRA_TIMEOUT", type=float, default=DEFAULT_TIMEOUT, help="Request timeout (s)")
    @functools.wraps(func)
    def wrapper(
        lcd_url: str,
        chain_id: str,
        gas_prices: str,
        gas_adjustment: str,
        fee_denoms: str,
        mode: str,
        timeout: float,
        **kwargs,
    ):
        try:
            config = ClientConfig(
                url=lcd_url,
                chain_id=chain_id,
                gas_prices=parse_gas_prices(gas_prices),
                gas_adjustment=Decimal(gas_adjustment),
                fee_denoms=tuple(d.strip() for d in fee_denoms.split(",") if d.strip()),
                broadcast_mode=mode,
                timeout=timeout,
            )
        except (ValueError, ArithmeticError) as exc:
            raise click.BadParameter(str(exc)) from exc
        return func(config=config, **kwargs)

    return wrapper


def mnemonic_option(func: Callable) -> Callable:
    return click.option(
        "--mnemonic-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="File holding the mnemonic (default: MNEMONIC env / ~/.catmint/.env)",
    )(func)


def read_mnemonic(mnemonic_file: Optional[Path]) -> str:
    if mnemonic_file is None:
        return load_mnemonic()
    words = " ".join(mnemonic_file.read_text(encoding="utf-8").split())
    if not words:
        raise KeyDerivationError(f"Mnemonic file is empty: {mnemonic_file}")
    return words
