"""
Host-side signing helpers
"""

from .commitment_signer import (
    commitment_message_hash,
    derive_keypair,
    sign_commitment,
    verify_commitment_signature,
)

__all__ = [
    "commitment_message_hash",
    "derive_keypair",
    "sign_commitment",
    "verify_commitment_signature",
]
