"""CKB addresses: the validating builder, rendering and parsing.

``AddressBuilder.build()`` is the only gate that produces an ``Address``.
Rendering re-runs the same checks; a failure there means an invalid value
slipped past the builder and is reported as an internal error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from . import text_codec
from .config import (
    BLAKE160_SIZE,
    CODE_HASH_SIZE,
    MAX_MULTISIG_HEADER_VALUE,
    MAX_MULTISIG_MEMBERS,
    SHORT_ARGS_SIZE,
    SINCE_SIZE,
)
from .encoding import decode_payload, encode_args, encode_payload
from .errors import AddressError, ErrorCode, unreachable
from .types import (
    Args,
    CodeHash,
    CodeHashByData,
    CodeHashByIndex,
    CodeHashIndex,
    CodeHashType,
    MultiSigArgs,
    Network,
    PayloadFormat,
    SimpleArgs,
)

logger = logging.getLogger(__name__)


def _check_multisig(args: MultiSigArgs) -> None:
    for name, value in (
        ("version", args.version),
        ("first_n_required", args.first_n_required),
        ("threshold", args.threshold),
    ):
        if not isinstance(value, int) or not 0 <= value <= MAX_MULTISIG_HEADER_VALUE:
            raise AddressError(ErrorCode.MULTISIG_ARGS, f"multisig {name}(={value}) must fit in a byte")
    if len(args.contents) > MAX_MULTISIG_MEMBERS:
        raise AddressError(ErrorCode.MULTISIG_ARGS, f"too many multisig members: {len(args.contents)}")
    for index, member in enumerate(args.contents):
        if len(member) != BLAKE160_SIZE:
            raise AddressError(
                ErrorCode.MULTISIG_ARGS,
                f"multisig member No.{index} must be {BLAKE160_SIZE} bytes, got {len(member)}",
            )
    if args.since is not None and len(args.since) != SINCE_SIZE:
        raise AddressError(
            ErrorCode.MULTISIG_ARGS, f"multisig since must be {SINCE_SIZE} bytes, got {len(args.since)}"
        )
    if not args.first_n_required <= args.threshold <= len(args.contents):
        raise AddressError(
            ErrorCode.MULTISIG_ARGS,
            f"require first_n_required(={args.first_n_required}) <= threshold(={args.threshold})"
            f" <= members(={len(args.contents)})",
        )


def _check_index_args(index: CodeHashIndex, args: Args) -> None:
    if isinstance(args, SimpleArgs):
        if len(args.blob) != SHORT_ARGS_SIZE:
            raise AddressError(
                ErrorCode.SHORT_FORMAT_ARGS,
                f"short format args must be {SHORT_ARGS_SIZE} bytes, got {len(args.blob)}",
            )
    elif isinstance(args, MultiSigArgs):
        if not index.accepts_multisig:
            raise AddressError(
                ErrorCode.SECP256K1_BLAKE160_ARGS,
                f"{index.cli_name} takes a {SHORT_ARGS_SIZE}-byte key hash, not a multisig descriptor",
            )
        if args.since is not None:
            raise AddressError(ErrorCode.SHORT_FORMAT_ARGS, "short format cannot carry multisig since")
    else:
        raise unreachable(f"unknown args variant {type(args).__name__}")


def _check_fields(network: Network, code_hash: CodeHash, args: Args) -> None:
    if not isinstance(network, Network):
        raise unreachable(f"unknown network value {network!r}")
    if isinstance(code_hash, CodeHashByIndex):
        _check_index_args(code_hash.index, args)
    elif isinstance(code_hash, CodeHashByData):
        if len(code_hash.content) != CODE_HASH_SIZE:
            raise AddressError(
                ErrorCode.HASH_SIZE,
                f"the size(={len(code_hash.content)}) of code hash is not {CODE_HASH_SIZE}",
            )
    else:
        raise unreachable(f"unknown code hash variant {type(code_hash).__name__}")
    if isinstance(args, MultiSigArgs):
        _check_multisig(args)
    elif not isinstance(args, SimpleArgs):
        raise unreachable(f"unknown args variant {type(args).__name__}")


@dataclass(frozen=True, repr=False)
class Address:
    """An immutable, validated address. Obtain one from ``AddressBuilder.build()``."""

    network: Network
    code_hash: CodeHash
    args: Args

    @property
    def payload_format(self) -> PayloadFormat:
        return PayloadFormat.for_code_hash(self.code_hash)

    def into_builder(self) -> "AddressBuilder":
        return AddressBuilder(network=self.network, code_hash=self.code_hash, args=self.args)

    def payload(self) -> bytes:
        try:
            _check_fields(self.network, self.code_hash, self.args)
        except AddressError as exc:
            logger.error("invalid address reached the renderer: %s", exc)
            if exc.code is ErrorCode.UNREACHABLE:
                raise
            raise unreachable(str(exc)) from exc
        return encode_payload(self.code_hash, self.args)

    def to_string(self) -> str:
        return text_codec.encode(self.network.prefix, self.payload())

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def parse(cls, text: str) -> "Address":
        prefix, payload = text_codec.decode(text)
        network = Network.from_prefix(prefix)
        code_hash, args = decode_payload(payload)
        logger.debug("parsed %s address with %s", network, type(code_hash).__name__)
        return AddressBuilder().network(network).code_hash(code_hash).args(args).build()

    def describe(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "network": str(self.network),
            "prefix": self.network.prefix,
            "format": self.payload_format.name.lower(),
        }
        if isinstance(self.code_hash, CodeHashByIndex):
            info["code_hash_index"] = self.code_hash.index.cli_name
        else:
            info["code_hash"] = self.code_hash.content.hex()
            info["hash_type"] = self.code_hash.hash_type.cli_name
        info["args"] = encode_args(self.args).hex()
        if isinstance(self.args, MultiSigArgs):
            info["multisig"] = {
                "version": self.args.version,
                "first_n_required": self.args.first_n_required,
                "threshold": self.args.threshold,
                "members": [member.hex() for member in self.args.contents],
                "since": self.args.since.hex() if self.args.since is not None else None,
            }
        return info

    def __repr__(self) -> str:
        if isinstance(self.code_hash, CodeHashByIndex):
            code_hash = f"Index({self.code_hash.index.name})"
        else:
            code_hash = f"Data(hash_type={self.code_hash.hash_type.name}, content={self.code_hash.content.hex()})"
        if isinstance(self.args, SimpleArgs):
            args = f"Simple({self.args.blob.hex()})"
        else:
            args = (
                f"MultiSig(version={self.args.version}, first_n_required={self.args.first_n_required},"
                f" threshold={self.args.threshold}, contents=[{', '.join(c.hex() for c in self.args.contents)}],"
                f" since={self.args.since.hex() if self.args.since is not None else None})"
            )
        return f"Address(network={self.network}, code_hash={code_hash}, args={args})"


class AddressBuilder:
    """Mutable staging area for an ``Address``; setters return the builder."""

    def __init__(
        self,
        network: Network = Network.MAIN,
        code_hash: Optional[CodeHash] = None,
        args: Optional[Args] = None,
    ) -> None:
        self._network = network
        self._code_hash = code_hash if code_hash is not None else CodeHashByIndex()
        self._args = args if args is not None else SimpleArgs(bytes(SHORT_ARGS_SIZE))

    def network(self, network: Network) -> "AddressBuilder":
        self._network = network
        return self

    def code_hash(self, code_hash: CodeHash) -> "AddressBuilder":
        self._code_hash = code_hash
        return self

    def code_hash_by_index(self, index: CodeHashIndex) -> "AddressBuilder":
        self._code_hash = CodeHashByIndex(index)
        return self

    def code_hash_by_data(self, hash_type: CodeHashType, content: bytes) -> "AddressBuilder":
        self._code_hash = CodeHashByData(hash_type, content)
        return self

    def args(self, args: Args) -> "AddressBuilder":
        self._args = args
        return self

    def args_simple(self, blob: bytes) -> "AddressBuilder":
        self._args = SimpleArgs(blob)
        return self

    def args_multisig(
        self,
        first_n_required: int,
        threshold: int,
        contents: Iterable[bytes],
        version: int = 0,
        since: Optional[bytes] = None,
    ) -> "AddressBuilder":
        self._args = MultiSigArgs(
            first_n_required=first_n_required,
            threshold=threshold,
            contents=tuple(contents),
            version=version,
            since=since,
        )
        return self

    def build(self) -> Address:
        _check_fields(self._network, self._code_hash, self._args)
        return Address(network=self._network, code_hash=self._code_hash, args=self._args)
