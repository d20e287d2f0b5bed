
"""
commitment.py
Keyed commitments over small integers: HMAC with SHA3-256.
Related modules:
- protocol.py: Commits each round's secret number.
- audit.py: Re-verifies revealed rounds.
"""

import hashlib
import hmac


def encode_number(number: int) -> bytes:
    """
    Minimal big-endian encoding; values below 256 encode to a single byte.
    Raises:
        ValueError: If number is negative.
    """
    if number < 0:
        raise ValueError("committed number must be non-negative")
    return number.to_bytes(max(1, (number.bit_length() + 7) // 8), "big")


def commit(secret_number: int, key: bytes) -> bytes:
    """
    Compute the commitment tag for secret_number under key.
    Args:
        secret_number (int): Committed value.
        key (bytes): Commitment key (MAC key).
    Returns:
        bytes: 32-byte tag.
    """
    return hmac.new(key, encode_number(secret_number), hashlib.sha3_256).digest()


def verify(secret_number: int, key: bytes, tag: bytes) -> bool:
    """
    Recompute the tag and compare it in constant time.
    Returns:
        bool: True if tag commits to secret_number under key.
    """
    if secret_number < 0:
        return False
    return hmac.compare_digest(commit(secret_number, key), tag)


def tag_hex(tag: bytes) -> str:
    return tag.hex().upper()


def key_hex(key: bytes) -> str:
    return key.hex().upper()
