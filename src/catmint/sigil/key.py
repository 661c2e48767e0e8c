"""
Mnemonic Key Management for Terra accounts.

A BIP39 mnemonic is expanded into a secp256k1 key along the Terra BIP44
path m/44'/330'/{account}'/0/{index}.  The account address is the bech32
encoding (prefix "terra") of RIPEMD160(SHA256(compressed public key)).

The mnemonic is read from the MNEMONIC environment variable, which may be
populated from ~/.catmint/.env.  It is never kept after derivation, and
acquired_key() wipes the derived private key when the block exits.

Dependencies: eth-account (BIP39/BIP32), eth-keys (secp256k1),
pycryptodome (RIPEMD160), bech32.
"""

from __future__ import annotations

import hashlib
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from bech32 import bech32_decode, bech32_encode, convertbits
from Crypto.Hash import RIPEMD160
from dotenv import load_dotenv
from eth_account.hdaccount import key_from_seed, seed_from_mnemonic
from eth_keys import keys
from eth_utils import ValidationError

from ..errors import KeyDerivationError


# Default config directory
CATMINT_DIR = Path.home() / ".catmint"
CATMINT_ENV = CATMINT_DIR / ".env"

TERRA_COIN_TYPE = 330
ACCOUNT_PREFIX = "terra"


def derivation_path(account: int = 0, index: int = 0, coin_type: int = TERRA_COIN_TYPE) -> str:
    return f"m/44'/{coin_type}'/{account}'/0/{index}"


def address_from_public_key(public_key: bytes, prefix: str = ACCOUNT_PREFIX) -> str:
    """
    Bech32 account address for a compressed secp256k1 public key.

    Args:
        public_key: 33-byte compressed public key
        prefix: Human readable part (default: "terra")

    Returns:
        Bech32 address, e.g. "terra1..."
    """
    digest = RIPEMD160.new(hashlib.sha256(public_key).digest()).digest()
    return bech32_encode(prefix, convertbits(digest, 8, 5))


def is_valid_address(address: str, prefix: str = ACCOUNT_PREFIX) -> bool:
    """Check bech32 checksum, prefix and the 20-byte payload length."""
    hrp, data = bech32_decode(address)
    if hrp != prefix or data is None:
        return False
    decoded = convertbits(data, 5, 8, False)
    return decoded is not None and len(decoded) == 20


class MnemonicKey:
    """
    secp256k1 signing key derived from a BIP39 mnemonic.

    Only the derived private key is retained.  Call wipe() (or use
    acquired_key()) once signing is done.
    """

    def __init__(self, private_key: bytes, prefix: str = ACCOUNT_PREFIX) -> None:
        if len(private_key) != 32:
            raise KeyDerivationError("Private key must be 32 bytes")
        try:
            key_obj = keys.PrivateKey(private_key)
        except (ValueError, ValidationError) as exc:
            raise KeyDerivationError(f"Invalid private key: {exc}") from exc

        self._private_key: Optional[bytearray] = bytearray(private_key)
        self.public_key: bytes = key_obj.public_key.to_compressed_bytes()
        self.acc_address: str = address_from_public_key(self.public_key, prefix)

    @classmethod
    def from_mnemonic(
        cls,
        mnemonic: str,
        account: int = 0,
        index: int = 0,
        coin_type: int = TERRA_COIN_TYPE,
        passphrase: str = "",
    ) -> "MnemonicKey":
        """
        Derive a key from a mnemonic phrase.

        Args:
            mnemonic: BIP39 mnemonic (12/15/18/21/24 words)
            account: BIP44 account index
            index: BIP44 address index
            coin_type: BIP44 coin type (330 for Terra)
            passphrase: Optional BIP39 passphrase

        Returns:
            MnemonicKey

        Raises:
            KeyDerivationError: If the phrase is not a valid BIP39 mnemonic
        """
        words = " ".join(mnemonic.split())
        if not words:
            raise KeyDerivationError("Mnemonic is empty")
        try:
            seed = seed_from_mnemonic(words, passphrase)
            private_key = key_from_seed(seed, derivation_path(account, index, coin_type))
        except (ValueError, ValidationError) as exc:
            raise KeyDerivationError(f"Invalid mnemonic: {exc}") from exc
        return cls(private_key)

    @property
    def wiped(self) -> bool:
        return self._private_key is None

    def sign(self, payload: bytes) -> bytes:
        """
        Sign SHA256(payload).

        Returns:
            64-byte compact signature r || s (low-S form)
        """
        if self._private_key is None:
            raise KeyDerivationError("Key has been wiped")
        digest = hashlib.sha256(payload).digest()
        signature = keys.PrivateKey(bytes(self._private_key)).sign_msg_hash(digest)
        return signature.to_bytes()[:64]

    def wipe(self) -> None:
        """Zero and drop the private key."""
        if self._private_key is not None:
            for i in range(len(self._private_key)):
                self._private_key[i] = 0
            self._private_key = None

    def __repr__(self) -> str:
        return f"MnemonicKey(acc_address={self.acc_address!r})"


def load_env(env_path: Optional[Path] = None) -> Path:
    """Load ~/.catmint/.env into os.environ without overriding exported vars."""
    env_path = env_path or CATMINT_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)
    return env_path


def load_mnemonic(env_path: Optional[Path] = None) -> str:
    """
    Load the mnemonic from .env file or environment.

    Args:
        env_path: Path to .env file (default: ~/.catmint/.env)

    Returns:
        Whitespace-normalized mnemonic phrase

    Raises:
        KeyDerivationError: If MNEMONIC is not set
    """
    env_path = load_env(env_path)

    mnemonic = os.environ.get("MNEMONIC", "")
    if not mnemonic.strip():
        raise KeyDerivationError(
            f"MNEMONIC not found. Export MNEMONIC or set it in {env_path}"
        )
    return " ".join(mnemonic.split())


@contextmanager
def acquired_key(
    mnemonic: Optional[str] = None,
    env_path: Optional[Path] = None,
    account: int = 0,
    index: int = 0,
) -> Iterator[MnemonicKey]:
    """
    Derive a key for the duration of a with-block.

    The key is wiped on exit, including when the block raises.
    """
    if mnemonic is None:
        mnemonic = load_mnemonic(env_path)
    key = MnemonicKey.from_mnemonic(mnemonic, account=account, index=index)
    del mnemonic
    try:
        yield key
    finally:
        key.wipe()


def address_from_mnemonic(mnemonic: str, account: int = 0, index: int = 0) -> str:
    """Derive the account address and discard the key."""
    with acquired_key(mnemonic, account=account, index=index) as key:
        return key.acc_address
