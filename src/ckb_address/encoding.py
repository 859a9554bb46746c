"""Address payload encoding and decoding.

Payload layout (single-byte fields only):

    [0]        format tag (0x01 short | 0x02 full-data | 0x04 full-type)
    short:
      [1]      code hash index
      [2..22]  20-byte argument
    full:
      [1..33]  32-byte code hash
      [33..]   argument blob, runs to the end of the payload
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import CODE_HASH_SIZE, SHORT_ARGS_SIZE
from .errors import AddressError, ErrorCode, invalid_data_since, unreachable
from .types import (
    Args,
    CodeHash,
    CodeHashByData,
    CodeHashByIndex,
    CodeHashIndex,
    MultiSigArgs,
    PayloadFormat,
    SimpleArgs,
)

logger = logging.getLogger(__name__)


@dataclass
class Writer:
    buf: bytearray = field(default_factory=bytearray)

    def write_u8(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(1, "big", signed=False))

    def write_bytes(self, b: bytes) -> None:
        self.buf.extend(b)

    def to_bytes(self) -> bytes:
        return bytes(self.buf)


@dataclass
class Reader:
    """Single left-to-right cursor; ``offset`` is kept for error reporting."""

    data: bytes
    offset: int = 0

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read_u8(self) -> int:
        if self.remaining() < 1:
            raise invalid_data_since(self.offset)
        value = self.data[self.offset]
        self.offset += 1
        return value

    def read_bytes(self, size: int) -> bytes:
        if self.remaining() < size:
            raise invalid_data_since(self.offset)
        value = self.data[self.offset:self.offset + size]
        self.offset += size
        return bytes(value)

    def read_rest(self) -> bytes:
        value = self.data[self.offset:]
        self.offset = len(self.data)
        return bytes(value)


def _expect_len(name: str, value: bytes, size: int) -> None:
    if len(value) != size:
        raise unreachable(f"{name} must be {size} bytes, got {len(value)}")


def serialize_args(w: Writer, args: Args) -> None:
    if isinstance(args, SimpleArgs):
        w.write_bytes(args.blob)
    elif isinstance(args, MultiSigArgs):
        w.write_bytes(args.commitment())
        if args.since is not None:
            w.write_bytes(args.since)
    else:
        raise unreachable(f"unknown args variant {type(args).__name__}")


def encode_args(args: Args) -> bytes:
    w = Writer()
    serialize_args(w, args)
    return w.to_bytes()


def encode_payload(code_hash: CodeHash, args: Args) -> bytes:
    w = Writer()
    fmt = PayloadFormat.for_code_hash(code_hash)
    w.write_u8(fmt.to_byte())
    if isinstance(code_hash, CodeHashByIndex):
        w.write_u8(code_hash.index.to_byte())
        serialize_args(w, args)
        # Re-check the serialized width: the short format has no length field.
        _expect_len("short format args", bytes(w.buf[2:]), SHORT_ARGS_SIZE)
    elif isinstance(code_hash, CodeHashByData):
        _expect_len("code hash", code_hash.content, CODE_HASH_SIZE)
        w.write_bytes(code_hash.content)
        serialize_args(w, args)
    else:
        raise unreachable(f"unknown code hash variant {type(code_hash).__name__}")
    return w.to_bytes()


def decode_payload(payload: bytes) -> tuple[CodeHash, SimpleArgs]:
    """Split a raw payload into its code hash and (always simple) args.

    A multisig commitment cannot be expanded back into its descriptor, so
    the args always come back as ``SimpleArgs``.
    """
    r = Reader(payload)
    fmt = PayloadFormat.from_byte(r.read_u8())
    logger.debug("decoding %s payload of %d bytes", fmt.name, len(payload))

    if fmt is PayloadFormat.SHORT:
        index = CodeHashIndex.from_byte(r.read_u8())
        blob = r.read_rest()
        if len(blob) != SHORT_ARGS_SIZE:
            raise AddressError(
                ErrorCode.SHORT_FORMAT_ARGS,
                f"short format args must be {SHORT_ARGS_SIZE} bytes, got {len(blob)}",
            )
        return CodeHashByIndex(index), SimpleArgs(blob)

    content = r.read_bytes(CODE_HASH_SIZE)
    return CodeHashByData(fmt.hash_type, content), SimpleArgs(r.read_rest())
