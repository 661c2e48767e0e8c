"""
Transaction data types: coins, contract messages, fees, signed txs and
broadcast results.
"""

from __future__ import annotations

import base64
import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional

from . import proto


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def __post_init__(self) -> None:
        if not self.denom:
            raise ValueError("Coin denom is required")
        if int(self.amount) < 0:
            raise ValueError(f"Coin amount must not be negative: {self.amount}{self.denom}")
        object.__setattr__(self, "amount", int(self.amount))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def to_data(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}


@dataclass(frozen=True)
class Coins:
    """A set of coins, one per denom, kept sorted by denom."""

    coins: tuple[Coin, ...] = ()

    def __post_init__(self) -> None:
        merged: dict[str, int] = {}
        for c in self.coins:
            merged[c.denom] = merged.get(c.denom, 0) + c.amount
        object.__setattr__(
            self, "coins", tuple(Coin(d, merged[d]) for d in sorted(merged))
        )

    @classmethod
    def from_mapping(cls, amounts: Optional[Mapping[str, int]]) -> "Coins":
        return cls(tuple(Coin(d, a) for d, a in (amounts or {}).items()))

    @classmethod
    def from_data(cls, data: list[dict[str, Any]]) -> "Coins":
        return cls(tuple(Coin(c["denom"], int(c["amount"])) for c in data))

    def __iter__(self) -> Iterator[Coin]:
        return iter(self.coins)

    def __len__(self) -> int:
        return len(self.coins)

    def __str__(self) -> str:
        return ",".join(str(c) for c in self.coins)

    def get(self, denom: str) -> int:
        for c in self.coins:
            if c.denom == denom:
                return c.amount
        return 0

    def to_dict(self) -> dict[str, int]:
        return {c.denom: c.amount for c in self.coins}

    def pairs(self) -> list[tuple[str, int]]:
        return [(c.denom, c.amount) for c in self.coins]


@dataclass(frozen=True)
class MsgExecuteContract:
    """
    Invoke a CosmWasm contract.

    Attributes:
        sender: Bech32 address of the signer
        contract: Bech32 address of the contract
        execute_msg: JSON object matching the contract's ExecuteMsg
        coins: Funds attached to the call
    """

    sender: str
    contract: str
    execute_msg: dict[str, Any]
    coins: Coins = field(default_factory=Coins)

    def __post_init__(self) -> None:
        if not isinstance(self.coins, Coins):
            object.__setattr__(self, "coins", Coins.from_mapping(self.coins))

    def execute_msg_bytes(self) -> bytes:
        return json.dumps(self.execute_msg, separators=(",", ":"), sort_keys=True).encode("utf-8")

    def pack_any(self) -> proto.Any_pb:
        return proto.msg_execute_contract(
            self.sender, self.contract, self.execute_msg_bytes(), self.coins.pairs()
        )

    def to_data(self) -> dict[str, Any]:
        return {
            "@type": proto.TYPE_URL_MSG_EXECUTE_CONTRACT,
            "sender": self.sender,
            "contract": self.contract,
            "execute_msg": self.execute_msg,
            "coins": [c.to_data() for c in self.coins],
        }


@dataclass(frozen=True)
class Fee:
    gas_limit: int
    amount: Coins = field(default_factory=Coins)

    def to_proto(self) -> proto.Fee_pb:
        return proto.fee(self.amount.pairs(), self.gas_limit)

    def __str__(self) -> str:
        return f"{self.amount or '0'} (gas {self.gas_limit})"


@dataclass(frozen=True)
class AccountInfo:
    address: str
    account_number: int
    sequence: int


@dataclass(frozen=True)
class SignedTx:
    """A signed transaction ready for broadcast."""

    msgs: tuple[MsgExecuteContract, ...]
    fee: Fee
    memo: str
    body_bytes: bytes
    auth_info_bytes: bytes
    signatures: tuple[bytes, ...]

    def to_bytes(self) -> bytes:
        return proto.tx_raw(self.body_bytes, self.auth_info_bytes, self.signatures)

    def to_base64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @property
    def hash(self) -> str:
        """Uppercase hex SHA256 of TxRaw, as reported by the node."""
        return hashlib.sha256(self.to_bytes()).hexdigest().upper()


@dataclass(frozen=True)
class BroadcastResult:
    txhash: str
    height: int
    code: int
    codespace: str
    raw_log: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def success(self) -> bool:
        return self.code == 0

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "BroadcastResult":
        tx_response = data.get("tx_response") or {}
        return cls(
            txhash=tx_response.get("txhash", ""),
            height=int(tx_response.get("height") or 0),
            code=int(tx_response.get("code") or 0),
            codespace=tx_response.get("codespace", ""),
            raw_log=tx_response.get("raw_log", ""),
            raw=data,
        )
