"""Bech32 glue for CKB addresses.

The checksum and the 8/5-bit regrouping come from the ``bech32`` package.
CKB lifts the 90-character limit of BIP-173 (full-format addresses are
longer), so decoding splits the string itself and hands the checksum and bit
conversion back to the library instead of calling ``bech32_decode``.
"""

from __future__ import annotations

import bech32

from .errors import ErrorCode, AddressError

CHECKSUM_LENGTH = 6
SEPARATOR = "1"


def _bech32_error(message: str) -> AddressError:
    return AddressError(ErrorCode.BECH32, f"bech32 error: {message}")


def encode(prefix: str, payload: bytes) -> str:
    data = bech32.convertbits(payload, 8, 5)
    if data is None:
        raise _bech32_error("payload cannot be regrouped into 5-bit words")
    return bech32.bech32_encode(prefix, data)


def decode(text: str) -> tuple[str, bytes]:
    """Split a checksummed address into ``(prefix, payload)``.

    Raises:
        AddressError: BECH32 on charset, case, separator, checksum or padding errors.
    """
    if any(ord(ch) < 33 or ord(ch) > 126 for ch in text):
        raise _bech32_error("invalid character")
    if text.lower() != text and text.upper() != text:
        raise _bech32_error("mixed case")
    text = text.lower()

    pos = text.rfind(SEPARATOR)
    if pos < 1:
        raise _bech32_error("missing human-readable part")
    if pos + CHECKSUM_LENGTH + 1 > len(text):
        raise _bech32_error("invalid length")

    prefix = text[:pos]
    words = []
    for ch in text[pos + 1:]:
        value = bech32.CHARSET.find(ch)
        if value < 0:
            raise _bech32_error(f"invalid data character {ch!r}")
        words.append(value)

    if not bech32.bech32_verify_checksum(prefix, words):
        raise _bech32_error("invalid checksum")

    payload = bech32.convertbits(words[:-CHECKSUM_LENGTH], 5, 8, False)
    if payload is None:
        raise _bech32_error("invalid padding")
    return prefix, bytes(payload)
