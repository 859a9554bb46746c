"""Binary payload serialization and deserialization."""

from __future__ import annotations

import pytest

from ckb_address.encoding import Reader, Writer, decode_payload, encode_args, encode_payload
from ckb_address.errors import AddressError, ErrorCode
from ckb_address.types import (
    CodeHashByData,
    CodeHashByIndex,
    CodeHashIndex,
    CodeHashType,
    MultiSigArgs,
    SimpleArgs,
)


def _hash(b: int) -> bytes:
    return bytes([b]) * 32


def _members(n: int) -> list[bytes]:
    return [bytes([i + 1]) * 20 for i in range(n)]


def test_writer_and_reader() -> None:
    w = Writer()
    w.write_u8(0x04)
    w.write_bytes(b"\xaa\xbb")
    assert w.to_bytes() == b"\x04\xaa\xbb"

    r = Reader(w.to_bytes())
    assert r.read_u8() == 0x04
    assert r.offset == 1
    assert r.read_bytes(1) == b"\xaa"
    assert r.read_rest() == b"\xbb"
    assert r.remaining() == 0


def test_reader_reports_offset() -> None:
    r = Reader(b"\x01\x02")
    r.read_u8()
    with pytest.raises(AddressError) as info:
        r.read_bytes(32)
    assert info.value.code is ErrorCode.INVALID_DATA_SINCE
    assert info.value.offset == 1


def test_simple_args_are_verbatim() -> None:
    assert encode_args(SimpleArgs(b"\x01\x02\x03")) == b"\x01\x02\x03"
    assert encode_args(SimpleArgs(b"")) == b""


def test_multisig_args_serialize_to_commitment() -> None:
    args = MultiSigArgs(first_n_required=1, threshold=2, contents=_members(3))
    assert encode_args(args) == args.commitment()


def test_multisig_args_append_since() -> None:
    since = bytes.fromhex("0100000000000020")
    args = MultiSigArgs(first_n_required=0, threshold=1, contents=_members(2), since=since)
    encoded = encode_args(args)
    assert len(encoded) == 28
    assert encoded[:20] == args.commitment()
    assert encoded[20:] == since


def test_short_payload_layout() -> None:
    key_hash = bytes(range(20))
    payload = encode_payload(CodeHashByIndex(CodeHashIndex.SECP256K1_BLAKE160), SimpleArgs(key_hash))
    assert payload == b"\x01\x00" + key_hash


def test_full_payload_layout() -> None:
    args = b"\x10" * 41
    payload = encode_payload(CodeHashByData(CodeHashType.DATA, _hash(7)), SimpleArgs(args))
    assert payload[0] == 0x02
    assert payload[1:33] == _hash(7)
    assert payload[33:] == args


def test_short_payload_rejects_wrong_width() -> None:
    with pytest.raises(AddressError) as info:
        encode_payload(CodeHashByIndex(), SimpleArgs(bytes(19)))
    assert info.value.code is ErrorCode.UNREACHABLE


def test_decode_short_payload() -> None:
    key_hash = bytes(range(20))
    code_hash, args = decode_payload(b"\x01\x01" + key_hash)
    assert code_hash == CodeHashByIndex(CodeHashIndex.SECP256K1_MULTISIG)
    assert args == SimpleArgs(key_hash)


def test_decode_full_payload_keeps_args_verbatim() -> None:
    blob = bytes(range(28))
    code_hash, args = decode_payload(b"\x04" + _hash(9) + blob)
    assert code_hash == CodeHashByData(CodeHashType.TYPE, _hash(9))
    assert args == SimpleArgs(blob)


def test_decode_full_payload_without_args() -> None:
    code_hash, args = decode_payload(b"\x02" + _hash(1))
    assert code_hash.hash_type is CodeHashType.DATA
    assert args == SimpleArgs(b"")


@pytest.mark.parametrize(
    "payload, code, offset",
    [
        (b"", ErrorCode.INVALID_DATA_SINCE, 0),
        (b"\x03" + bytes(21), ErrorCode.UNKNOWN_PAYLOAD_FORMAT, None),
        (b"\x01", ErrorCode.INVALID_DATA_SINCE, 1),
        (b"\x01\x05" + bytes(20), ErrorCode.UNKNOWN_CODE_HASH_INDEX, None),
        (b"\x01\x00" + bytes(19), ErrorCode.SHORT_FORMAT_ARGS, None),
        (b"\x01\x00" + bytes(28), ErrorCode.SHORT_FORMAT_ARGS, None),
        (b"\x04" + bytes(31), ErrorCode.INVALID_DATA_SINCE, 1),
    ],
    ids=[
        "empty",
        "unknown_format",
        "short_missing_index",
        "unknown_index",
        "short_args_19",
        "short_args_28",
        "full_truncated_code_hash",
    ],
)
def test_decode_payload_errors(payload: bytes, code: ErrorCode, offset) -> None:
    with pytest.raises(AddressError) as info:
        decode_payload(payload)
    assert info.value.code is code
    assert info.value.offset == offset
