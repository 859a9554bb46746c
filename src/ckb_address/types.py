"""Core value types for CKB addresses.

CodeHash and Args are closed unions: each variant is its own frozen
dataclass and callers dispatch with ``isinstance`` over the full set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union

from .config import CODE_HASH_SIZE, PREFIX_MAINNET, PREFIX_TESTNET
from .crypto.blake2b import blake160
from .errors import AddressError, ErrorCode


class Network(Enum):
    MAIN = PREFIX_MAINNET
    TEST = PREFIX_TESTNET

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _NETWORK_NAMES[self]

    def __str__(self) -> str:
        return self.display_name

    @classmethod
    def from_prefix(cls, prefix: str) -> "Network":
        for network in cls:
            if network.value == prefix:
                return network
        raise AddressError(ErrorCode.UNKNOWN_NETWORK, f"unknown network: {prefix}")

    @classmethod
    def from_name(cls, name: str) -> "Network":
        for network, display_name in _NETWORK_NAMES.items():
            if display_name == name:
                return network
        raise ValueError(f"unknown network name: {name}")


_NETWORK_NAMES = {
    Network.MAIN: "mainnet",
    Network.TEST: "testnet",
}


class CodeHashType(IntEnum):
    DATA = 0x02
    TYPE = 0x04

    @property
    def cli_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_byte(cls, value: int) -> "CodeHashType":
        try:
            return cls(value)
        except ValueError:
            raise AddressError(
                ErrorCode.UNKNOWN_PAYLOAD_FORMAT, f"unknown code hash type: {value}"
            ) from None

    @classmethod
    def from_name(cls, name: str) -> "CodeHashType":
        return cls[name.upper()]


class PayloadFormat(IntEnum):
    SHORT = 0x01
    FULL_DATA = 0x02
    FULL_TYPE = 0x04

    def to_byte(self) -> int:
        return int(self)

    @classmethod
    def from_byte(cls, value: int) -> "PayloadFormat":
        try:
            return cls(value)
        except ValueError:
            raise AddressError(
                ErrorCode.UNKNOWN_PAYLOAD_FORMAT, f"unknown payload format: {value}"
            ) from None

    @classmethod
    def full(cls, hash_type: CodeHashType) -> "PayloadFormat":
        return _FULL_FORMATS[hash_type]

    @property
    def hash_type(self) -> Optional[CodeHashType]:
        """Resolution rule of a full format; None for the short format."""
        if self is PayloadFormat.SHORT:
            return None
        return CodeHashType(int(self))

    @classmethod
    def for_code_hash(cls, code_hash: "CodeHash") -> "PayloadFormat":
        if isinstance(code_hash, CodeHashByIndex):
            return cls.SHORT
        if isinstance(code_hash, CodeHashByData):
            return cls.full(code_hash.hash_type)
        raise TypeError(f"not a code hash: {type(code_hash).__name__}")


_FULL_FORMATS = {
    CodeHashType.DATA: PayloadFormat.FULL_DATA,
    CodeHashType.TYPE: PayloadFormat.FULL_TYPE,
}


class CodeHashIndex(IntEnum):
    """Well-known lock scripts addressable by a single index byte."""

    SECP256K1_BLAKE160 = 0x00
    SECP256K1_MULTISIG = 0x01

    def to_byte(self) -> int:
        return int(self)

    @classmethod
    def from_byte(cls, value: int) -> "CodeHashIndex":
        try:
            return cls(value)
        except ValueError:
            raise AddressError(
                ErrorCode.UNKNOWN_CODE_HASH_INDEX, f"unknown code hash index: {value}"
            ) from None

    @classmethod
    def default(cls) -> "CodeHashIndex":
        return cls.SECP256K1_BLAKE160

    @property
    def accepts_multisig(self) -> bool:
        return self in _MULTISIG_INDEXES

    @property
    def cli_name(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_name(cls, name: str) -> "CodeHashIndex":
        return cls[name.upper().replace("-", "_")]


_MULTISIG_INDEXES = frozenset({CodeHashIndex.SECP256K1_MULTISIG})


# --- CodeHash ---


@dataclass(frozen=True)
class CodeHashByIndex:
    index: CodeHashIndex = field(default_factory=CodeHashIndex.default)

    def __post_init__(self) -> None:
        if not isinstance(self.index, CodeHashIndex):
            object.__setattr__(self, "index", CodeHashIndex.from_byte(self.index))


@dataclass(frozen=True)
class CodeHashByData:
    hash_type: CodeHashType
    content: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash_type", CodeHashType.from_byte(self.hash_type))
        object.__setattr__(self, "content", bytes(self.content))
        if len(self.content) != CODE_HASH_SIZE:
            raise AddressError(
                ErrorCode.HASH_SIZE,
                f"the size(={len(self.content)}) of code hash is not {CODE_HASH_SIZE}",
            )


CodeHash = Union[CodeHashByIndex, CodeHashByData]


# --- Args ---


@dataclass(frozen=True)
class SimpleArgs:
    blob: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "blob", bytes(self.blob))


@dataclass(frozen=True)
class MultiSigArgs:
    """Raw multisig descriptor; only its commitment is ever serialized."""

    first_n_required: int
    threshold: int
    contents: Tuple[bytes, ...]
    version: int = 0
    since: Optional[bytes] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "contents", tuple(bytes(c) for c in self.contents))
        if self.since is not None:
            object.__setattr__(self, "since", bytes(self.since))

    def script(self) -> bytes:
        header = bytes([self.version, self.first_n_required, self.threshold, len(self.contents)])
        return header + b"".join(self.contents)

    def commitment(self) -> bytes:
        return blake160(self.script())


Args = Union[SimpleArgs, MultiSigArgs]
