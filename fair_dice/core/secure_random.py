
"""
secure_random.py
Cryptographically secure random integers and commitment keys.
SecureRandom is a small service object so tests can inject a deterministic stand-in.
Related modules:
- protocol.py: Draws the secret number and key of every round.
- engine.py: Picks the house die.
"""

import logging
import secrets

logger = logging.getLogger(__name__)


class EntropyUnavailable(RuntimeError):
    """
    Raised when the platform's secure random source cannot supply randomness. Fatal, never retried.
    """
    pass


class SecureRandom:
    """
    Draws from the platform CSPRNG (`secrets`). There is no fallback to a non-cryptographic generator.
    """
    def __init__(self, key_size: int = 32):
        self.key_size = key_size

    def uniform_int(self, range_: int) -> int:
        """
        Return an integer uniformly drawn from [0, range_).
        secrets.randbelow rejection-samples over getrandbits, so there is no modulo bias.
        Args:
            range_ (int): Exclusive upper bound, at least 1.
        Returns:
            int: The drawn value.
        Raises:
            ValueError: If range_ < 1.
            EntropyUnavailable: If the platform source fails.
        """
        if range_ < 1:
            raise ValueError("range must be at least 1")
        try:
            return secrets.randbelow(range_)
        except (OSError, NotImplementedError) as e:
            logger.error("secure random source failed: %s", e)
            raise EntropyUnavailable(str(e)) from e

    def secret_key(self) -> bytes:
        """
        Return key_size fresh random bytes for a single commitment.
        Raises:
            EntropyUnavailable: If the platform source fails.
        """
        try:
            return secrets.token_bytes(self.key_size)
        except (OSError, NotImplementedError) as e:
            logger.error("secure random source failed: %s", e)
            raise EntropyUnavailable(str(e)) from e

    def choice_index(self, n: int) -> int:
        """Uniform index into a sequence of length n."""
        return self.uniform_int(n)
