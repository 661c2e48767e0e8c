"""
Protobuf Transaction Types - Cosmos SDK / Terra messages from terra-proto.

Transactions are signed over their serialized bytes (SIGN_MODE_DIRECT) and
submitted as base64 TxRaw.  The message classes are the betterproto
bindings generated from the cosmos-sdk and terra core .proto files, so
field numbers always match the chain.
"""

from __future__ import annotations

from typing import Iterable

from betterproto.lib.google.protobuf import Any as Any_pb
from terra_proto.cosmos.base.v1beta1 import Coin as Coin_pb
from terra_proto.cosmos.crypto.secp256k1 import PubKey as PubKey_pb
from terra_proto.cosmos.tx.signing.v1beta1 import SignMode
from terra_proto.cosmos.tx.v1beta1 import (
    AuthInfo,
    Fee as Fee_pb,
    ModeInfo,
    ModeInfoSingle,
    SignDoc,
    SignerInfo,
    TxBody,
    TxRaw,
)
from terra_proto.terra.wasm.v1beta1 import MsgExecuteContract as MsgExecuteContract_pb

TYPE_URL_SECP256K1_PUBKEY = "/cosmos.crypto.secp256k1.PubKey"
TYPE_URL_MSG_EXECUTE_CONTRACT = "/terra.wasm.v1beta1.MsgExecuteContract"


def coin(denom: str, amount: int) -> Coin_pb:
    # amount is an sdk.Int, carried as a decimal string
    return Coin_pb(denom=denom, amount=str(amount))


def secp256k1_pubkey(key: bytes) -> Any_pb:
    return Any_pb(type_url=TYPE_URL_SECP256K1_PUBKEY, value=bytes(PubKey_pb(key=key)))


def msg_execute_contract(
    sender: str,
    contract: str,
    execute_msg: bytes,
    coins: Iterable[tuple[str, int]],
) -> Any_pb:
    """terra.wasm.v1beta1.MsgExecuteContract packed into an Any."""
    msg = MsgExecuteContract_pb(
        sender=sender,
        contract=contract,
        execute_msg=execute_msg,
        coins=[coin(d, a) for d, a in coins],
    )
    return Any_pb(type_url=TYPE_URL_MSG_EXECUTE_CONTRACT, value=bytes(msg))


def fee(amount: Iterable[tuple[str, int]], gas_limit: int) -> Fee_pb:
    return Fee_pb(amount=[coin(d, a) for d, a in amount], gas_limit=gas_limit)


def signer_info(public_key: bytes, sequence: int) -> SignerInfo:
    return SignerInfo(
        public_key=secp256k1_pubkey(public_key),
        mode_info=ModeInfo(single=ModeInfoSingle(mode=SignMode.SIGN_MODE_DIRECT)),
        sequence=sequence,
    )


def tx_body(messages: Iterable[Any_pb], memo: str = "", timeout_height: int = 0) -> bytes:
    return bytes(TxBody(messages=list(messages), memo=memo, timeout_height=timeout_height))


def auth_info(signer_infos: Iterable[SignerInfo], fee_pb: Fee_pb) -> bytes:
    return bytes(AuthInfo(signer_infos=list(signer_infos), fee=fee_pb))


def sign_doc(body_bytes: bytes, auth_info_bytes: bytes, chain_id: str, account_number: int) -> bytes:
    return bytes(
        SignDoc(
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            chain_id=chain_id,
            account_number=account_number,
        )
    )


def tx_raw(body_bytes: bytes, auth_info_bytes: bytes, signatures: Iterable[bytes]) -> bytes:
    return bytes(
        TxRaw(
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            signatures=list(signatures),
        )
    )
