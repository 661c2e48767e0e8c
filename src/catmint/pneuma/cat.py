"""
Cat-mint contract interface.

ExecuteMsg:
    {"mint_cat": {}}                                  - pay LUNA, receive one CAT
    {"update_config": {"cat_token_contract": "..."}}  - owner only
QueryMsg:
    {"get_state": {}} -> {"state": {"owner", "cat_token_contract", "genesis_timestamp", ...}}

Minting accepts exactly one coin, in uluna, of at least
10**weeks_since_genesis LUNA.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from .lcd import LCDClient

DEFAULT_CONTRACT = "terra13jxycsgusne8rgzp4r2ua3n3qg0l5cufcrnxrl"
MINT_DENOM = "uluna"
DEFAULT_MINT_AMOUNT = 100_000

SECONDS_PER_WEEK = 604_800
MICRO = 10**6


def mint_cat_msg() -> dict[str, Any]:
    return {"mint_cat": {}}


def update_config_msg(cat_token_contract: Optional[str] = None) -> dict[str, Any]:
    return {"update_config": {"cat_token_contract": cat_token_contract}}


def get_state_msg() -> dict[str, Any]:
    return {"get_state": {}}


@dataclass(frozen=True)
class ContractState:
    owner: str
    cat_token_contract: str
    genesis_timestamp: int  # unix seconds
    funds_wallet: Optional[str] = None

    @classmethod
    def from_query(cls, result: dict[str, Any]) -> "ContractState":
        state = result.get("state") if "state" in result else result
        if not state:
            raise ValueError("Contract returned no state")
        # cosmwasm Timestamp serializes as a string of nanoseconds
        genesis_ns = int(state["genesis_timestamp"])
        return cls(
            owner=state["owner"],
            cat_token_contract=state["cat_token_contract"],
            genesis_timestamp=genesis_ns // 1_000_000_000,
            funds_wallet=state.get("funds_wallet"),
        )

    @property
    def genesis(self) -> datetime:
        return datetime.fromtimestamp(self.genesis_timestamp, tz=timezone.utc)


def weeks_since_genesis(genesis_timestamp: int, now: int) -> int:
    if now < genesis_timestamp:
        raise ValueError("now is before the contract genesis")
    return (now - genesis_timestamp) // SECONDS_PER_WEEK


def mint_price(genesis_timestamp: int, now: Optional[int] = None) -> int:
    """
    Current mint price in uluna.

    One LUNA in the first week, ten times more each following week.

    Args:
        genesis_timestamp: Contract genesis, unix seconds
        now: Unix seconds (default: current time)
    """
    if now is None:
        now = int(datetime.now(timezone.utc).timestamp())
    return 10 ** weeks_since_genesis(genesis_timestamp, now) * MICRO


def query_state(client: LCDClient, contract: str = DEFAULT_CONTRACT) -> ContractState:
    result = client.contract_query(contract, get_state_msg())
    return ContractState.from_query(result or {})
