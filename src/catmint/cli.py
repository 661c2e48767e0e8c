"""
catmint CLI

Command-line interface for the Terra cat-mint contract.

Identity = a Terra account derived from a BIP39 mnemonic (MNEMONIC env
var or ~/.catmint/.env).  Every command that writes to chain sends exactly
one transaction.

Commands:
  mint           - Pay LUNA and mint a CAT
  state          - Show contract state and the current mint price
  update-config  - Change the CAT token contract (owner only)
  whoami         - Show the derived account address
  balance        - Show account balances
  info           - Show configuration
"""

from __future__ import annotations

import logging
import sys

import click

from .errors import CatmintError
from .pneuma.config import ClientConfig
from .pneuma.lcd import LCDClient
from .sigil import key as sigil_key
from .sigil.key import address_from_mnemonic, load_env, load_mnemonic
from .theurgy.mint import mint
from .theurgy.state import state
from .theurgy.update_config import update_config


# ============ Constants ============

VERSION = "0.1.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("C A T M I N T", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="catmint")
@click.option("--verbose", "-v", is_flag=True, help="Log LCD requests to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """catmint — mint CATs on Terra."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    # TERRA_* values in ~/.catmint/.env must be visible before subcommand options resolve
    load_env()
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

cli.add_command(mint)
cli.add_command(state)
cli.add_command(update_config)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the account address derived from the mnemonic."""
    try:
        address = address_from_mnemonic(load_mnemonic())
    except CatmintError as exc:
        click.echo(f"No wallet: {exc}")
        sys.exit(exc.exit_code)
    click.echo(f"Address: {address}")


@cli.command()
@click.argument("address", required=False)
def balance(address: str | None) -> None:
    """Show balances for ADDRESS (default: your account)."""
    try:
        config = ClientConfig.from_env()
        if address is None:
            address = address_from_mnemonic(load_mnemonic())
        coins = LCDClient(config).balance(address)
    except CatmintError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    click.echo(f"Address: {address}")
    if not coins:
        click.echo("  (no funds)")
    for coin in coins:
        click.echo(f"  {coin.amount:>20} {coin.denom}")


# ============ Info ============


@cli.command()
def info() -> None:
    """Show configuration."""
    _print_banner()

    config = ClientConfig.from_env()
    click.secho("  Network ────────────────────────────────", fg="cyan")
    click.echo(click.style("  LCD:         ", dim=True) + config.url)
    click.echo(click.style("  Chain ID:    ", dim=True) + config.chain_id)
    prices = ",".join(f"{d}={p}" for d, p in sorted(config.gas_prices.items()))
    click.echo(click.style("  Gas Prices:  ", dim=True) + prices)
    click.echo(click.style("  Adjustment:  ", dim=True) + str(config.gas_adjustment))
    click.echo(click.style("  Mode:        ", dim=True) + config.broadcast_mode)
    click.echo()

    click.secho("  Identity ───────────────────────────────", fg="cyan")
    try:
        address = address_from_mnemonic(load_mnemonic())
        click.echo(
            click.style("  Address:     ", dim=True)
            + click.style(address, fg="bright_white")
        )
    except CatmintError:
        click.echo(
            click.style("  Address:     ", dim=True)
            + click.style("not configured", fg="yellow")
            + click.style(f"  (set MNEMONIC in {sigil_key.CATMINT_ENV})", dim=True)
        )
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """catmint CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
