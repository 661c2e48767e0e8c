"""
LCD Client for Terra.

Thin httpx wrapper over the Cosmos SDK REST gateway exposed by a Terra LCD
(e.g. https://fcd.terra.dev).  Covers the routes a contract call needs:
account lookup, simulation for fee estimation, broadcast, balances and
CosmWasm smart queries.
"""

from __future__ import annotations

import base64
import json
import logging
import math
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

import httpx

from ..errors import (
    InsufficientFundsError,
    NetworkError,
    classify_remote_error,
)
from .config import ClientConfig, resolve_broadcast_mode
from .msgs import AccountInfo, BroadcastResult, Coin, Coins, Fee, SignedTx

if TYPE_CHECKING:
    from .wallet import Wallet

logger = logging.getLogger(__name__)


class LCDClient:
    """
    REST client bound to one endpoint and chain.

    Args:
        config: Endpoint, chain id and fee settings
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport

    @property
    def chain_id(self) -> str:
        return self.config.chain_id

    def wallet(self, key: Any) -> "Wallet":
        from .wallet import Wallet

        return Wallet(self, key)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> tuple[int, dict]:
        url = f"{self.config.url}{path}"
        logger.debug("%s %s", method, url)
        try:
            with httpx.Client(timeout=self.config.timeout, transport=self._transport) as client:
                response = client.request(method, url, params=params, json=body)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Request to {url} timed out after {self.config.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Non-JSON response from {url} (HTTP {response.status_code})"
            ) from exc

        if response.status_code >= 500 and not _is_node_error(data):
            raise NetworkError(f"LCD error from {url}: HTTP {response.status_code}")
        return response.status_code, data

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        status, data = self._request("GET", path, params=params)
        if status >= 400:
            raise _node_error(data, status)
        return data

    def _post(self, path: str, body: dict) -> dict:
        status, data = self._request("POST", path, body=body)
        if status >= 400:
            raise _node_error(data, status)
        return data

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def account_info(self, address: str) -> AccountInfo:
        """
        Look up account number and sequence.

        Raises:
            InsufficientFundsError: If the account does not exist on chain
                (it has never received funds)
        """
        status, data = self._request("GET", f"/cosmos/auth/v1beta1/accounts/{address}")
        if status == 404 or (status >= 400 and "not found" in str(data.get("message", "")).lower()):
            raise InsufficientFundsError(
                f"Account {address} not found on chain; fund it before sending transactions",
                response=data,
            )
        if status >= 400:
            raise _node_error(data, status)

        account = data.get("account") or {}
        # Vesting accounts nest the BaseAccount
        base = account.get("base_vesting_account", {}).get("base_account") or account
        return AccountInfo(
            address=base.get("address", address),
            account_number=int(base.get("account_number") or 0),
            sequence=int(base.get("sequence") or 0),
        )

    def balance(self, address: str) -> Coins:
        data = self._get(f"/cosmos/bank/v1beta1/balances/{address}")
        return Coins.from_data(data.get("balances") or [])

    def contract_query(self, contract: str, query_msg: dict[str, Any]) -> Any:
        """
        Run a CosmWasm smart query.

        Args:
            contract: Contract address
            query_msg: JSON query, e.g. {"get_state": {}}

        Returns:
            Decoded query_result
        """
        encoded = base64.b64encode(
            json.dumps(query_msg, separators=(",", ":")).encode("utf-8")
        ).decode("ascii")
        data = self._get(
            f"/terra/wasm/v1beta1/contracts/{contract}/store",
            params={"query_msg": encoded},
        )
        return data.get("query_result")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def simulate(self, tx: SignedTx) -> int:
        """Simulate a transaction and return the gas it used."""
        data = self._post("/cosmos/tx/v1beta1/simulate", {"tx_bytes": tx.to_base64()})
        gas_used = int((data.get("gas_info") or {}).get("gas_used") or 0)
        logger.debug("Simulated gas used: %d", gas_used)
        return gas_used

    def fee_for_gas(self, gas_used: int) -> Fee:
        gas_limit = math.ceil(Decimal(gas_used) * self.config.gas_adjustment)
        amount = Coins(
            tuple(
                Coin(denom, math.ceil(self.config.gas_prices[denom] * gas_limit))
                for denom in self.config.effective_fee_denoms
            )
        )
        return Fee(gas_limit=gas_limit, amount=amount)

    def estimate_fee(self, tx: SignedTx) -> Fee:
        fee = self.fee_for_gas(self.simulate(tx))
        logger.debug("Estimated fee: %s", fee)
        return fee

    def broadcast(self, tx: SignedTx, mode: Optional[str] = None) -> BroadcastResult:
        """
        Submit a signed transaction.

        Args:
            tx: Signed transaction
            mode: block/sync/async (default: the config's broadcast_mode)

        Returns:
            BroadcastResult with code 0

        Raises:
            InsufficientFundsError / TransactionRejectedError: If the node
                returns a non-zero code; the result is attached as .result
            NetworkError: On transport failure
        """
        mode = resolve_broadcast_mode(mode) if mode else self.config.broadcast_mode
        data = self._post(
            "/cosmos/tx/v1beta1/txs", {"tx_bytes": tx.to_base64(), "mode": mode}
        )
        result = BroadcastResult.from_response(data)
        if not result.success:
            logger.info("Transaction %s rejected with code %d", result.txhash, result.code)
            raise classify_remote_error(
                f"Transaction rejected (codespace={result.codespace or 'sdk'}, "
                f"code={result.code}): {result.raw_log}",
                result=result,
                response=data,
            )
        logger.info("Broadcast %s at height %d", result.txhash, result.height)
        return result


def _is_node_error(data: Any) -> bool:
    return isinstance(data, dict) and "message" in data


def _node_error(data: Any, status: int):
    message = data.get("message") if isinstance(data, dict) else None
    return classify_remote_error(
        message or f"LCD request failed with HTTP {status}",
        response=data if isinstance(data, dict) else None,
    )
