"""
Theurgy Mint - Execute the cat-mint contract.

Flow:
1. Derive the signing key from the mnemonic
2. Bind it to a wallet on the configured LCD
3. Build one MsgExecuteContract {"mint_cat": {}} with the attached uluna
4. Create and sign the transaction (fee estimated by simulation)
5. Broadcast it once

There is no retry and no deduplication: every run submits a new
transaction.
"""

from __future__ import annotations

import sys
from typing import Any, Mapping, Optional

import click

from ..errors import CatmintError
from ..pneuma.cat import (
    DEFAULT_CONTRACT,
    DEFAULT_MINT_AMOUNT,
    MINT_DENOM,
    mint_cat_msg,
    mint_price,
    query_state,
)
from ..pneuma.config import ClientConfig
from ..pneuma.lcd import LCDClient
from ..pneuma.msgs import BroadcastResult, Coins, Fee, MsgExecuteContract
from ..sigil.key import MnemonicKey, acquired_key
from .options import lcd_options, mnemonic_option, read_mnemonic


def execute_contract(
    config: ClientConfig,
    key: MnemonicKey,
    contract: str,
    execute_msg: dict[str, Any],
    funds: Optional[Mapping[str, int]] = None,
    fee: Optional[Fee] = None,
    memo: str = "",
    client: Optional[LCDClient] = None,
) -> BroadcastResult:
    """
    Sign and broadcast a single contract execution.

    Args:
        config: LCD endpoint, chain id and gas prices
        key: Signing key
        contract: Contract address
        execute_msg: JSON ExecuteMsg
        funds: denom -> amount attached to the call
        fee: Explicit fee (default: estimated)
        memo: Transaction memo
        client: Pre-built client (default: LCDClient(config))

    Returns:
        BroadcastResult of the accepted transaction
    """
    client = client or LCDClient(config)
    wallet = client.wallet(key)

    msg = MsgExecuteContract(
        sender=wallet.address,
        contract=contract,
        execute_msg=execute_msg,
        coins=Coins.from_mapping(funds),
    )
    tx = wallet.create_and_sign_tx([msg], fee=fee, memo=memo)
    return client.broadcast(tx)


def mint_cat(
    config: ClientConfig,
    key: MnemonicKey,
    contract: str = DEFAULT_CONTRACT,
    execute_msg: Optional[dict[str, Any]] = None,
    funds: Optional[Mapping[str, int]] = None,
    fee: Optional[Fee] = None,
    memo: str = "",
    client: Optional[LCDClient] = None,
) -> BroadcastResult:
    """Mint one CAT.  Defaults to {"mint_cat": {}} with 100000uluna attached."""
    return execute_contract(
        config,
        key,
        contract=contract,
        execute_msg=mint_cat_msg() if execute_msg is None else execute_msg,
        funds={MINT_DENOM: DEFAULT_MINT_AMOUNT} if funds is None else funds,
        fee=fee,
        memo=memo,
        client=client,
    )


@click.command()
@click.option("--contract", envvar="CATMINT_CONTRACT", default=DEFAULT_CONTRACT, show_default=True, help="Cat-mint contract address")
@click.option("--amount", type=click.IntRange(min=0), default=DEFAULT_MINT_AMOUNT, show_default=True, help="Amount to attach")
@click.option("--denom", default=MINT_DENOM, show_default=True, help="Denom to attach")
@click.option("--auto-price", is_flag=True, help="Attach the contract's current mint price")
@click.option("--memo", default="", help="Transaction memo")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@mnemonic_option
@lcd_options
def mint(
    config: ClientConfig,
    contract: str,
    amount: int,
    denom: str,
    auto_price: bool,
    memo: str,
    yes: bool,
    mnemonic_file,
) -> None:
    """
    Mint a CAT by executing the cat-mint contract.

    Sends one transaction from your wallet; the fee is paid from it too.
    """
    click.echo("=== catmint Mint ===")
    click.echo("")

    try:
        mnemonic = read_mnemonic(mnemonic_file)
        with acquired_key(mnemonic) as key:
            del mnemonic
            client = LCDClient(config)

            if auto_price:
                state = query_state(client, contract)
                amount = mint_price(state.genesis_timestamp)
                denom = MINT_DENOM

            click.echo(f"  Sender:   {key.acc_address}")
            click.echo(f"  Contract: {contract}")
            click.echo(f"  Chain:    {config.chain_id} @ {config.url}")
            click.echo(f"  Funds:    {amount}{denom}")
            click.echo("")

            if not yes:
                click.confirm("Broadcast this transaction?", abort=True)

            result = mint_cat(
                config,
                key,
                contract=contract,
                funds={denom: amount},
                memo=memo,
                client=client,
            )
    except (CatmintError, ValueError, KeyError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(getattr(exc, "exit_code", 1))

    click.secho("SUCCESS: Transaction accepted!", fg="green")
    click.echo(f"  TX:     {result.txhash}")
    if result.height:
        click.echo(f"  Height: {result.height}")
