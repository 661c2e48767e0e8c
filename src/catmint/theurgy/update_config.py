"""
Theurgy Update Config - Point the contract at a new CAT token.

Only the contract owner may do this; anyone else is rejected by the
contract with Unauthorized.
"""

from __future__ import annotations

import sys

import click

from ..errors import CatmintError
from ..pneuma.cat import DEFAULT_CONTRACT, update_config_msg
from ..pneuma.config import ClientConfig
from ..sigil.key import acquired_key, is_valid_address
from .mint import execute_contract
from .options import lcd_options, mnemonic_option, read_mnemonic


@click.command("update-config")
@click.option("--contract", envvar="CATMINT_CONTRACT", default=DEFAULT_CONTRACT, show_default=True, help="Cat-mint contract address")
@click.option("--cat-token", required=True, help="New CAT token contract address")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@mnemonic_option
@lcd_options
def update_config(
    config: ClientConfig,
    contract: str,
    cat_token: str,
    yes: bool,
    mnemonic_file,
) -> None:
    """Update the contract's CAT token address (owner only)."""
    if not is_valid_address(cat_token):
        click.secho(f"ERROR: Not a terra address: {cat_token}", fg="red")
        sys.exit(1)

    try:
        with acquired_key(read_mnemonic(mnemonic_file)) as key:
            click.echo(f"  Sender:    {key.acc_address}")
            click.echo(f"  Contract:  {contract}")
            click.echo(f"  CAT Token: {cat_token}")
            click.echo("")
            if not yes:
                click.confirm("Broadcast this transaction?", abort=True)
            result = execute_contract(
                config,
                key,
                contract=contract,
                execute_msg=update_config_msg(cat_token),
            )
    except CatmintError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    click.secho("SUCCESS: Config updated!", fg="green")
    click.echo(f"  TX: {result.txhash}")
