"""secp256k1 key helpers for producing single-key addresses.

Secrets live in a ``bytearray`` that is overwritten with zeros when the key
leaves its ``with`` block, when ``zeroize()`` is called, or when the object
is collected.
"""

from __future__ import annotations

import secrets
from typing import Optional

import ecdsa

from .address import Address, AddressBuilder
from .crypto.blake2b import pubkey_hash
from .types import CodeHashIndex, Network

SECRET_KEY_SIZE = 32
COMPRESSED_PUBKEY_SIZE = 33

_ORDER = ecdsa.SECP256k1.order


def _check_secret(data: bytes) -> None:
    if len(data) != SECRET_KEY_SIZE:
        raise ValueError(f"secret key must be {SECRET_KEY_SIZE} bytes, got {len(data)}")
    if not 0 < int.from_bytes(data, "big") < _ORDER:
        raise ValueError("secret key is out of range for secp256k1")


class SecretKey:
    def __init__(self, data: bytes) -> None:
        _check_secret(data)
        self._data: Optional[bytearray] = bytearray(data)

    @classmethod
    def random(cls) -> "SecretKey":
        while True:
            candidate = bytearray(secrets.token_bytes(SECRET_KEY_SIZE))
            try:
                return cls(candidate)
            except ValueError:
                continue
            finally:
                candidate[:] = bytes(SECRET_KEY_SIZE)

    @classmethod
    def from_hex(cls, value: str) -> "SecretKey":
        if value.startswith("0x"):
            value = value[2:]
        raw = bytearray.fromhex(value)
        try:
            return cls(raw)
        finally:
            raw[:] = bytes(len(raw))

    def _secret(self) -> bytearray:
        if self._data is None:
            raise ValueError("secret key has been zeroized")
        return self._data

    def public_key(self) -> bytes:
        signing_key = ecdsa.SigningKey.from_string(self._secret(), curve=ecdsa.SECP256k1)
        return signing_key.get_verifying_key().to_string("compressed")

    def pubkey_hash(self) -> bytes:
        return pubkey_hash(self.public_key())

    def address(self, network: Network = Network.MAIN) -> Address:
        return key_hash_address(self.pubkey_hash(), network)

    def reveal_hex(self) -> str:
        return self._secret().hex()

    def zeroize(self) -> None:
        data = getattr(self, "_data", None)
        if data is not None:
            for i in range(len(data)):
                data[i] = 0
            self._data = None

    @property
    def is_zeroized(self) -> bool:
        return self._data is None

    def __enter__(self) -> "SecretKey":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.zeroize()

    def __del__(self) -> None:
        self.zeroize()

    def __repr__(self) -> str:
        return "SecretKey(_)"

    __str__ = __repr__


def key_hash_address(key_hash: bytes, network: Network = Network.MAIN) -> Address:
    return (
        AddressBuilder()
        .network(network)
        .code_hash_by_index(CodeHashIndex.SECP256K1_BLAKE160)
        .args_simple(key_hash)
        .build()
    )
