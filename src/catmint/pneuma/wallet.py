"""
Wallet - Bind a signing key to an LCD client and author transactions.

create_and_sign_tx() fetches the account number and sequence, estimates
the fee through simulation when none is given, and signs in
SIGN_MODE_DIRECT.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..errors import TransactionRejectedError
from ..sigil.key import MnemonicKey
from . import proto
from .lcd import LCDClient
from .msgs import Fee, MsgExecuteContract, SignedTx

logger = logging.getLogger(__name__)

# Simulation runs on an unlimited gas meter; the value only keeps Fee on the wire
SIMULATION_GAS_LIMIT = 1_000_000


class Wallet:
    def __init__(self, client: LCDClient, key: MnemonicKey) -> None:
        self.client = client
        self.key = key

    @property
    def address(self) -> str:
        return self.key.acc_address

    def account_info(self):
        return self.client.account_info(self.address)

    def _build(
        self,
        msgs: Sequence[MsgExecuteContract],
        fee: Fee,
        memo: str,
        account_number: int,
        sequence: int,
        sign: bool,
    ) -> SignedTx:
        body_bytes = proto.tx_body([m.pack_any() for m in msgs], memo)
        auth_info_bytes = proto.auth_info(
            [proto.signer_info(self.key.public_key, sequence)], fee.to_proto()
        )
        if sign:
            doc = proto.sign_doc(body_bytes, auth_info_bytes, self.client.chain_id, account_number)
            signature = self.key.sign(doc)
        else:
            # Simulation skips signature checks but needs one slot per signer
            signature = b""
        return SignedTx(
            msgs=tuple(msgs),
            fee=fee,
            memo=memo,
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            signatures=(signature,),
        )

    def create_and_sign_tx(
        self,
        msgs: Sequence[MsgExecuteContract],
        fee: Optional[Fee] = None,
        memo: str = "",
        account_number: Optional[int] = None,
        sequence: Optional[int] = None,
    ) -> SignedTx:
        """
        Build and sign a transaction from this wallet.

        Args:
            msgs: Messages to include; every sender must be this wallet
            fee: Explicit fee (default: estimated via simulate)
            memo: Transaction memo
            account_number: Skip the account lookup when given with sequence
            sequence: Signer sequence

        Returns:
            SignedTx

        Raises:
            TransactionRejectedError: Empty msgs or a foreign sender
        """
        if not msgs:
            raise TransactionRejectedError("Transaction must contain at least one message")
        for msg in msgs:
            if msg.sender != self.address:
                raise TransactionRejectedError(
                    f"Message sender {msg.sender} does not match wallet address {self.address}"
                )

        if account_number is None or sequence is None:
            info = self.account_info()
            account_number = info.account_number if account_number is None else account_number
            sequence = info.sequence if sequence is None else sequence

        if fee is None:
            draft = self._build(
                msgs, Fee(gas_limit=SIMULATION_GAS_LIMIT), memo, account_number, sequence, sign=False
            )
            fee = self.client.estimate_fee(draft)

        logger.debug(
            "Signing %d msg(s) for %s (account %d, sequence %d, fee %s)",
            len(msgs), self.address, account_number, sequence, fee,
        )
        return self._build(msgs, fee, memo, account_number, sequence, sign=True)
