from __future__ import annotations

import base64
import json
from decimal import Decimal
from typing import Any, Optional

import httpx
import pytest

from catmint.pneuma.config import ClientConfig
from catmint.pneuma.lcd import LCDClient
from catmint.sigil.key import MnemonicKey

# LocalTerra "test1" account
TEST_MNEMONIC = (
    "notice oak worry limit wrap speak medal online prefer cluster roof addict "
    "wrist behave treat actual wasp year salad speed social layer crew genius"
)
TEST_ADDRESS = "terra1x46rqay4d3cssq8gxxvqz8xt6nwlz4td20k38v"

CONTRACT = "terra13jxycsgusne8rgzp4r2ua3n3qg0l5cufcrnxrl"


class FakeLCD:
    """In-memory stand-in for a Terra LCD, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.account_number = 42
        self.sequence = 7
        self.account_exists = True
        self.gas_used = 100_000
        self.simulate_error: Optional[tuple[int, dict[str, Any]]] = None
        self.broadcast_code = 0
        self.broadcast_codespace = ""
        self.broadcast_raw_log = "[]"
        self.balances = [{"denom": "uluna", "amount": "5000000"}]
        self.query_result: Any = {
            "state": {
                "owner": TEST_ADDRESS,
                "cat_token_contract": "terra1cattokencontract",
                "genesis_timestamp": "1640995200000000000",
            }
        }
        self.transport = httpx.MockTransport(self.handler)

    # -- helpers for assertions --

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    def broadcasts(self) -> list[dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == "POST" and r.url.path == "/cosmos/tx/v1beta1/txs"
        ]

    # -- routing --

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith("/cosmos/auth/v1beta1/accounts/"):
            address = path.rsplit("/", 1)[-1]
            if not self.account_exists:
                return httpx.Response(
                    404,
                    json={"code": 5, "message": f"account {address} not found", "details": []},
                )
            return httpx.Response(
                200,
                json={
                    "account": {
                        "@type": "/cosmos.auth.v1beta1.BaseAccount",
                        "address": address,
                        "pub_key": None,
                        "account_number": str(self.account_number),
                        "sequence": str(self.sequence),
                    }
                },
            )

        if path == "/cosmos/tx/v1beta1/simulate":
            if self.simulate_error is not None:
                status, body = self.simulate_error
                return httpx.Response(status, json=body)
            return httpx.Response(
                200,
                json={
                    "gas_info": {"gas_wanted": "0", "gas_used": str(self.gas_used)},
                    "result": {"data": "", "log": "[]", "events": []},
                },
            )

        if path == "/cosmos/tx/v1beta1/txs":
            tx_bytes = base64.b64decode(json.loads(request.content)["tx_bytes"])
            txhash = f"{len(self.broadcasts()):064X}"
            if self.broadcast_code == 0:
                self.sequence += 1
            return httpx.Response(
                200,
                json={
                    "tx_response": {
                        "height": "6000000" if self.broadcast_code == 0 else "0",
                        "txhash": txhash,
                        "codespace": self.broadcast_codespace,
                        "code": self.broadcast_code,
                        "raw_log": self.broadcast_raw_log,
                        "gas_wanted": "175000",
                        "gas_used": str(self.gas_used),
                        "tx_size": len(tx_bytes),
                    }
                },
            )

        if path.startswith("/cosmos/bank/v1beta1/balances/"):
            return httpx.Response(200, json={"balances": self.balances, "pagination": {"total": "1"}})

        if path.startswith("/terra/wasm/v1beta1/contracts/") and path.endswith("/store"):
            return httpx.Response(200, json={"query_result": self.query_result})

        return httpx.Response(501, json={"code": 12, "message": f"Not Implemented: {path}"})


@pytest.fixture()
def fake_lcd() -> FakeLCD:
    return FakeLCD()


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(
        url="https://fcd.terra.dev",
        chain_id="columbus-5",
        gas_prices={"uusd": Decimal("0.35")},
    )


@pytest.fixture()
def client(config: ClientConfig, fake_lcd: FakeLCD) -> LCDClient:
    return LCDClient(config, transport=fake_lcd.transport)


@pytest.fixture()
def key() -> MnemonicKey:
    return MnemonicKey.from_mnemonic(TEST_MNEMONIC)
