"""
Commitment signing for settlement hosts.

A host that pre-commits an order hash for a period (see
`CommitmentGuard.commit`) authenticates itself with a BLS12-381 signature.

Signed message: SHA256( domain_sep("commitment", v1) || period (u64 BE) || order_hash ).
"""

from __future__ import annotations

import hashlib

from py_ecc.bls import G2Basic

from ..state.canonical import bytes_to_hex, domain_sep_bytes, hex_to_bytes_fixed
from ..state.commitments import COMMITMENT_BYTES

PUBKEY_BYTES = 48
SIGNATURE_BYTES = 96


def derive_keypair(seed: bytes) -> tuple[int, str]:
    """
    Deterministic (private_key, 0x-pubkey) from at least 32 bytes of seed.

    Args:
        seed: Input keying material

    Returns:
        Tuple of (private key as int, public key hex string)
    """
    if not isinstance(seed, (bytes, bytearray)) or len(seed) < 32:
        raise ValueError("seed must be at least 32 bytes")
    private_key = G2Basic.KeyGen(bytes(seed))
    return private_key, bytes_to_hex(G2Basic.SkToPk(private_key))


def commitment_message_hash(period: int, order_hash: str) -> bytes:
    if not isinstance(period, int) or isinstance(period, bool) or period < 0:
        raise ValueError("period must be a non-negative int")
    digest = hex_to_bytes_fixed(order_hash, nbytes=COMMITMENT_BYTES, name="order_hash")
    msg = domain_sep_bytes("commitment", version=1) + period.to_bytes(8, "big") + digest
    return hashlib.sha256(msg).digest()


def sign_commitment(period: int, order_hash: str, private_key: int) -> str:
    """
    Sign a commitment.

    Returns:
        0x-prefixed 96-byte BLS signature
    """
    return bytes_to_hex(G2Basic.Sign(private_key, commitment_message_hash(period, order_hash)))


def verify_commitment_signature(period: int, order_hash: str, signature: str, pubkey: str) -> bool:
    """True iff `signature` is `pubkey`'s signature over the commitment."""
    msg_hash = commitment_message_hash(period, order_hash)
    try:
        pubkey_bytes = hex_to_bytes_fixed(pubkey, nbytes=PUBKEY_BYTES, name="pubkey")
        sig_bytes = hex_to_bytes_fixed(signature, nbytes=SIGNATURE_BYTES, name="signature")
    except (TypeError, ValueError):
        return False
    return bool(G2Basic.Verify(pubkey_bytes, msg_hash, sig_bytes))
