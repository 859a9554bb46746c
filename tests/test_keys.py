"""secp256k1 secret keys and single-key addresses."""

from __future__ import annotations

import pytest

from ckb_address.crypto.blake2b import pubkey_hash
from ckb_address.keys import SecretKey, key_hash_address
from ckb_address.types import CodeHashByIndex, CodeHashIndex, Network, SimpleArgs

SECRET_ONE = bytes(31) + b"\x01"
GENERATOR = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")
SECP256K1_ORDER = bytes.fromhex("fffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141")


def test_secret_one_is_generator() -> None:
    with SecretKey(SECRET_ONE) as sk:
        assert sk.public_key() == GENERATOR
        assert sk.pubkey_hash() == pubkey_hash(GENERATOR)


def test_from_hex() -> None:
    sk = SecretKey.from_hex("0x" + SECRET_ONE.hex())
    assert sk.reveal_hex() == SECRET_ONE.hex()


@pytest.mark.parametrize(
    "data",
    [bytes(32), SECP256K1_ORDER, b"\xff" * 32, bytes(31), SECRET_ONE + b"\x00"],
    ids=["zero", "order", "above_order", "short", "long"],
)
def test_invalid_secret(data: bytes) -> None:
    with pytest.raises(ValueError):
        SecretKey(data)


def test_random_key_is_usable() -> None:
    with SecretKey.random() as sk:
        pk = sk.public_key()
        assert len(pk) == 33
        assert pk[0] in (0x02, 0x03)


def test_zeroize_clears_buffer() -> None:
    sk = SecretKey(SECRET_ONE)
    buf = sk._data
    sk.zeroize()
    assert buf == bytearray(32)
    assert sk.is_zeroized
    with pytest.raises(ValueError):
        sk.public_key()
    sk.zeroize()


def test_context_manager_zeroizes() -> None:
    with SecretKey(SECRET_ONE) as sk:
        buf = sk._data
        assert not sk.is_zeroized
    assert sk.is_zeroized
    assert buf == bytearray(32)


def test_secret_is_masked() -> None:
    sk = SecretKey(SECRET_ONE)
    assert repr(sk) == "SecretKey(_)"
    assert str(sk) == "SecretKey(_)"
    assert SECRET_ONE.hex() not in f"{sk!r} {sk}"


@pytest.mark.parametrize("network, prefix", [(Network.MAIN, "ckb1"), (Network.TEST, "ckt1")])
def test_key_address(network: Network, prefix: str) -> None:
    sk = SecretKey(SECRET_ONE)
    address = sk.address(network)
    assert address.network is network
    assert address.code_hash == CodeHashByIndex(CodeHashIndex.SECP256K1_BLAKE160)
    assert address.args == SimpleArgs(pubkey_hash(GENERATOR))
    assert str(address).startswith(prefix)
    assert address == key_hash_address(pubkey_hash(GENERATOR), network)


def test_context_manager_zeroizes_on_error() -> None:
    with pytest.raises(RuntimeError):
        with SecretKey(SECRET_ONE) as sk:
            buf = sk._data
            raise RuntimeError("boom")
    assert buf == bytearray(32)
    assert sk.is_zeroized


def test_bytearray_secret() -> None:
    sk = SecretKey(bytearray(SECRET_ONE))
    assert isinstance(sk._data, bytearray)
    assert sk.public_key() == GENERATOR
