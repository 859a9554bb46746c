"""CKB hash primitives (BLAKE2b-256 with the ckb personalization)."""

from __future__ import annotations

import hashlib

from ..config import BLAKE160_SIZE, CKB_HASH_PERSONALIZATION, HASH_SIZE


def new_blake2b():
    return hashlib.blake2b(digest_size=HASH_SIZE, person=CKB_HASH_PERSONALIZATION)


def blake2b_256(data: bytes) -> bytes:
    hasher = new_blake2b()
    hasher.update(data)
    return hasher.digest()


def blake160(data: bytes) -> bytes:
    """First 20 bytes of the ckb hash; used for key hashes and multisig commitments."""
    return blake2b_256(data)[:BLAKE160_SIZE]


def pubkey_hash(compressed_pubkey: bytes) -> bytes:
    return blake160(compressed_pubkey)
