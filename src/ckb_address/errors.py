"""CKB address error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ErrorCategory(IntEnum):
    DECODING = 0x01
    SHAPE = 0x02
    INTERNAL = 0xFF


class ErrorCode(IntEnum):
    # Decoding
    BECH32 = 0x0100
    UNKNOWN_NETWORK = 0x0101
    UNKNOWN_PAYLOAD_FORMAT = 0x0102
    UNKNOWN_CODE_HASH_INDEX = 0x0103
    INVALID_DATA_SINCE = 0x0104

    # Shape
    SHORT_FORMAT_ARGS = 0x0200
    SECP256K1_BLAKE160_ARGS = 0x0201
    MULTISIG_ARGS = 0x0202
    HASH_SIZE = 0x0203

    # Internal
    UNREACHABLE = 0xFF00

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self.value >> 8)


@dataclass(frozen=True)
class AddressError(Exception):
    code: ErrorCode
    message: str
    offset: Optional[int] = None

    @property
    def category(self) -> ErrorCategory:
        return self.code.category

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__", "__suppress_context__"))
_frozen_setattr = AddressError.__setattr__


def _address_error_setattr(self: AddressError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


AddressError.__setattr__ = _address_error_setattr  # type: ignore[method-assign]


def err(code: ErrorCode, message: str) -> AddressError:
    return AddressError(code=code, message=message)


def invalid_data_since(offset: int) -> AddressError:
    return AddressError(
        code=ErrorCode.INVALID_DATA_SINCE,
        message=f"invalid data since offset {offset}",
        offset=offset,
    )


def unreachable(message: str) -> AddressError:
    return AddressError(
        code=ErrorCode.UNREACHABLE,
        message=f"internal error: should be unreachable, {message}",
    )
