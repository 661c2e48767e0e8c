"""
Theurgy State - Query the cat-mint contract.

Shows the owner, the CAT token contract, the genesis time and the
price a mint costs right now.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone

import click

from ..errors import CatmintError
from ..pneuma.cat import (
    DEFAULT_CONTRACT,
    DEFAULT_MINT_AMOUNT,
    MICRO,
    mint_price,
    query_state,
    weeks_since_genesis,
)
from ..pneuma.config import ClientConfig
from ..pneuma.lcd import LCDClient
from .options import lcd_options


@click.command()
@click.option("--contract", envvar="CATMINT_CONTRACT", default=DEFAULT_CONTRACT, show_default=True, help="Cat-mint contract address")
@lcd_options
def state(config: ClientConfig, contract: str) -> None:
    """Query contract state and the current mint price."""
    try:
        contract_state = query_state(LCDClient(config), contract)
    except (CatmintError, ValueError, KeyError) as exc:
        click.secho(f"ERROR: Failed to read contract state: {exc}", fg="red")
        sys.exit(getattr(exc, "exit_code", 1))

    now = int(datetime.now(timezone.utc).timestamp())
    price = mint_price(contract_state.genesis_timestamp, now)

    click.echo(f"  Contract:    {contract}")
    click.echo(f"  ─────────────────────────────")
    click.echo(f"  Owner:       {contract_state.owner}")
    click.echo(f"  CAT Token:   {contract_state.cat_token_contract}")
    if contract_state.funds_wallet:
        click.echo(f"  Funds:       {contract_state.funds_wallet}")
    click.echo(f"  Genesis:     {contract_state.genesis.isoformat()}")
    click.echo(f"  Week:        {weeks_since_genesis(contract_state.genesis_timestamp, now)}")
    click.echo(f"  Mint Price:  {price}uluna ({price // MICRO} LUNA)")

    if DEFAULT_MINT_AMOUNT < price:
        click.echo("")
        click.secho(
            f"  ⚠ The default {DEFAULT_MINT_AMOUNT}uluna is below the current price; "
            "use 'catmint mint --auto-price'.",
            fg="yellow",
        )
