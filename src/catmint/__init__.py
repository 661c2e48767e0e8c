__all__ = [
    # Errors
    "CatmintError",
    "NetworkError",
    "KeyDerivationError",
    "InsufficientFundsError",
    "TransactionRejectedError",
    # Keys
    "MnemonicKey",
    "acquired_key",
    "load_mnemonic",
    "address_from_mnemonic",
    "is_valid_address",
    # Client
    "ClientConfig",
    "LCDClient",
    "Wallet",
    # Messages
    "Coin",
    "Coins",
    "Fee",
    "MsgExecuteContract",
    "SignedTx",
    "BroadcastResult",
    # Contract
    "ContractState",
    "mint_price",
    "query_state",
    # Flow
    "execute_contract",
    "mint_cat",
]

from .errors import (
    CatmintError,
    InsufficientFundsError,
    KeyDerivationError,
    NetworkError,
    TransactionRejectedError,
)
from .sigil.key import (
    MnemonicKey,
    acquired_key,
    address_from_mnemonic,
    is_valid_address,
    load_mnemonic,
)
from .pneuma.config import ClientConfig
from .pneuma.lcd import LCDClient
from .pneuma.wallet import Wallet
from .pneuma.msgs import BroadcastResult, Coin, Coins, Fee, MsgExecuteContract, SignedTx
from .pneuma.cat import ContractState, mint_price, query_state
from .theurgy.mint import execute_contract, mint_cat
