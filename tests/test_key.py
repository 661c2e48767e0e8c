"""Unit tests for mnemonic key derivation (catmint.sigil.key)."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from eth_keys import keys

from catmint.errors import KeyDerivationError
from catmint.sigil.key import (
    MnemonicKey,
    acquired_key,
    address_from_mnemonic,
    address_from_public_key,
    derivation_path,
    is_valid_address,
    load_mnemonic,
)

from conftest import CONTRACT, TEST_ADDRESS, TEST_MNEMONIC

SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class TestDerivation:
    def test_known_address(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        assert key.acc_address == TEST_ADDRESS

    def test_deterministic(self) -> None:
        first = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        second = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        assert first.acc_address == second.acc_address
        assert first.public_key == second.public_key

    def test_whitespace_is_normalized(self) -> None:
        messy = "  " + TEST_MNEMONIC.replace(" ", "\n  ", 3) + "\t"
        assert MnemonicKey.from_mnemonic(messy).acc_address == TEST_ADDRESS

    def test_other_index_gives_other_address(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC, index=1)
        assert key.acc_address != TEST_ADDRESS
        assert is_valid_address(key.acc_address)

    def test_compressed_public_key(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        assert len(key.public_key) == 33
        assert key.public_key[0] in (2, 3)

    def test_path(self) -> None:
        assert derivation_path() == "m/44'/330'/0'/0/0"
        assert derivation_path(account=2, index=5) == "m/44'/330'/2'/0/5"

    def test_invalid_checksum(self) -> None:
        with pytest.raises(KeyDerivationError):
            MnemonicKey.from_mnemonic(" ".join(["abandon"] * 12))

    def test_not_words(self) -> None:
        with pytest.raises(KeyDerivationError):
            MnemonicKey.from_mnemonic("YOUR KEY")

    def test_empty(self) -> None:
        with pytest.raises(KeyDerivationError):
            MnemonicKey.from_mnemonic("   ")

    def test_bad_private_key_length(self) -> None:
        with pytest.raises(KeyDerivationError):
            MnemonicKey(b"\x01" * 31)


class TestAddress:
    def test_prefix_and_length(self) -> None:
        pub = keys.PrivateKey(b"\x01" * 32).public_key.to_compressed_bytes()
        address = address_from_public_key(pub)
        assert address.startswith("terra1")
        assert len(address) == 44

    def test_validation(self) -> None:
        assert is_valid_address(TEST_ADDRESS)
        assert is_valid_address(CONTRACT)
        assert not is_valid_address(TEST_ADDRESS[:-1] + ("q" if TEST_ADDRESS[-1] != "q" else "p"))
        assert not is_valid_address("cosmos1x46rqay4d3cssq8gxxvqz8xt6nwlz4td20k38v")
        assert not is_valid_address("not-an-address")


class TestSigning:
    def test_signature_recovers_public_key(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        payload = b"sign doc bytes"
        signature = key.sign(payload)
        assert len(signature) == 64

        digest = hashlib.sha256(payload).digest()
        recovered = {
            keys.Signature(signature + bytes([v]))
            .recover_public_key_from_msg_hash(digest)
            .to_compressed_bytes()
            for v in (0, 1)
        }
        assert key.public_key in recovered

    def test_low_s(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        for i in range(8):
            s = int.from_bytes(key.sign(f"payload {i}".encode())[32:], "big")
            assert s <= SECP256K1_N // 2

    def test_deterministic_signature(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        assert key.sign(b"x") == key.sign(b"x")

    def test_wipe(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        key.wipe()
        assert key.wiped
        with pytest.raises(KeyDerivationError):
            key.sign(b"x")
        # address stays readable for display
        assert key.acc_address == TEST_ADDRESS

    def test_repr_hides_secret(self) -> None:
        key = MnemonicKey.from_mnemonic(TEST_MNEMONIC)
        assert "notice" not in repr(key)
        assert TEST_ADDRESS in repr(key)


class TestLoadMnemonic:
    def test_from_environment(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"MNEMONIC": TEST_MNEMONIC}):
            assert load_mnemonic(tmp_path / ".env") == TEST_MNEMONIC

    def test_from_env_file(self, tmp_path: Path) -> None:
        env_path = tmp_path / ".env"
        env_path.write_text(f'MNEMONIC="{TEST_MNEMONIC}"\n', encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert load_mnemonic(env_path) == TEST_MNEMONIC

    def test_missing(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(KeyDerivationError, match="MNEMONIC not found"):
                load_mnemonic(tmp_path / ".env")


class TestAcquiredKey:
    def test_wiped_on_exit(self) -> None:
        with acquired_key(TEST_MNEMONIC) as key:
            assert not key.wiped
            key.sign(b"x")
        assert key.wiped

    def test_wiped_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with acquired_key(TEST_MNEMONIC) as key:
                raise RuntimeError("boom")
        assert key.wiped

    def test_address_from_mnemonic(self) -> None:
        assert address_from_mnemonic(TEST_MNEMONIC) == TEST_ADDRESS
