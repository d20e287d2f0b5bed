
"""
protocol.py
Implements one round of the commit -> contribute -> reveal exchange that produces a fair shared value.
The committer (house) fixes and hides a secret number, the counterpart (human) contributes a number or a guess,
and only then is the secret revealed with its key.
Related modules:
- secure_random.py: Source of the secret number and key.
- commitment.py: Tag computation and verification.
- engine.py: Creates a fresh FairnessRound for every round of the game.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from . import commitment
from .secure_random import SecureRandom

logger = logging.getLogger(__name__)


class ProtocolStateError(RuntimeError):
    """
    Raised on an illegal transition of a FairnessRound (reveal before commit, double start, ...).
    Indicates a programming defect, not a user-facing condition.
    """
    pass


class RoundStatus(enum.Enum):
    IDLE = "IDLE"
    COMMITTED = "COMMITTED"
    CONTRIBUTED = "CONTRIBUTED"
    REVEALED = "REVEALED"


@dataclass(frozen=True)
class Reveal:
    """
    What the committer discloses at the end of a round.
    Fields:
        secret_number (int): The committed number.
        key (bytes): The commitment key.
    """
    secret_number: int
    key: bytes

    def verify(self, tag: bytes) -> bool:
        return commitment.verify(self.secret_number, self.key, tag)


def combine(secret_number: int, contribution: int, range_: int) -> int:
    """Modular combination of both parties' numbers."""
    return (secret_number + contribution) % range_


class FairnessRound:
    """
    State machine for a single round: IDLE -> COMMITTED -> CONTRIBUTED -> REVEALED.
    A round is used exactly once; every call out of order raises ProtocolStateError.
    """
    def __init__(self, range_: int, rng: Optional[SecureRandom] = None):
        """
        Args:
            range_ (int): Numbers are drawn from [0, range_).
            rng (SecureRandom|None): Randomness service; a fresh SecureRandom if omitted.
        """
        if range_ < 1:
            raise ValueError("range must be at least 1")
        self.range = range_
        self.rng = rng or SecureRandom()
        self.status = RoundStatus.IDLE
        self.tag: Optional[bytes] = None
        self.contribution: Optional[int] = None
        self._key: Optional[bytes] = None
        self._secret_number: Optional[int] = None

    def _require(self, status: RoundStatus, op: str) -> None:
        if self.status is not status:
            raise ProtocolStateError(f"cannot {op} in state {self.status.value} (expected {status.value})")

    def start(self) -> bytes:
        """
        Generate key and secret number, compute the tag and publish it.
        Returns:
            bytes: The tag (the only value disclosed at commit time).
        Raises:
            ProtocolStateError: If the round was already started.
        """
        self._require(RoundStatus.IDLE, "start")
        self._key = self.rng.secret_key()
        self._secret_number = self.rng.uniform_int(self.range)
        self.tag = commitment.commit(self._secret_number, self._key)
        self.status = RoundStatus.COMMITTED
        logger.debug("round committed: range=%d tag=%s", self.range, commitment.tag_hex(self.tag))
        return self.tag

    def contribute(self, value: int) -> None:
        """
        Accept the counterpart's number (or guess). Only allowed once the tag is published.
        Raises:
            ProtocolStateError: If the round is not committed, or already has a contribution.
            ValueError: If value is outside [0, range).
        """
        self._require(RoundStatus.COMMITTED, "contribute")
        if not 0 <= value < self.range:
            raise ValueError(f"contribution must be in [0, {self.range})")
        self.contribution = value
        self.status = RoundStatus.CONTRIBUTED
        logger.debug("round contribution accepted: %d", value)

    def reveal(self) -> Reveal:
        """
        Disclose the secret number and key. Requires the counterpart's contribution first.
        Raises:
            ProtocolStateError: If nothing was committed, no contribution was made, or already revealed.
        """
        if self.status is RoundStatus.IDLE:
            raise ProtocolStateError("nothing to reveal: round not started")
        self._require(RoundStatus.CONTRIBUTED, "reveal")
        self.status = RoundStatus.REVEALED
        logger.debug("round revealed: secret=%d", self._secret_number)
        return Reveal(self._secret_number, self._key)

    def fair_value(self) -> int:
        """(secret_number + contribution) mod range, available after reveal."""
        self._require(RoundStatus.REVEALED, "compute fair value")
        return combine(self._secret_number, self.contribution, self.range)

    def guessed(self) -> bool:
        """True if the contribution, read as a guess, equals the secret number. Available after reveal."""
        self._require(RoundStatus.REVEALED, "evaluate guess")
        return self.contribution == self._secret_number
