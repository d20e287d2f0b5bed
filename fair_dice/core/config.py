
"""
config.py
Defines the GameConfig dataclass, which centralizes the numeric constraints of the fair dice game,
and the parser that turns raw dice arguments into a DiceSet.
Related modules:
- dice.py: Die and DiceSet built by parse_dice_args.
- engine.py: Uses GameConfig for round ranges.
- secure_random.py: Uses key_size for commitment keys.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .dice import Die, DiceSet


class ConfigurationError(ValueError):
    """
    Raised when the dice configuration is malformed (too few dice, too few faces, non-integer face).
    Carries the offending raw entry, if any, in `entry`.
    """
    def __init__(self, message: str, entry: Optional[str] = None):
        super().__init__(message)
        self.entry = entry


@dataclass(frozen=True)
class GameConfig:
    """
    Centralizes all numeric constraints for a fair dice game.
    Fields:
        min_dice (int): Minimum number of dice in the configuration.
        min_faces (int): Minimum number of faces per die.
        first_move_range (int): Range of the first-move guess round.
        key_size (int): Commitment key length in bytes.
        probability_digits (int): Decimal digits shown for win probabilities.
    """
    min_dice: int = 3
    min_faces: int = 2
    first_move_range: int = 2
    key_size: int = 32
    probability_digits: int = 3


def parse_die(entry: str, config: GameConfig = GameConfig()) -> Die:
    """
    Parse one comma-separated entry such as "2,2,4,4,9,9" into a Die.
    Args:
        entry (str): Raw configuration entry.
        config (GameConfig): Constraints to enforce.
    Returns:
        Die: The parsed die.
    Raises:
        ConfigurationError: If a face is not an integer or there are too few faces.
    """
    parts = [p.strip() for p in str(entry).split(",")]
    faces = []
    for part in parts:
        try:
            faces.append(int(part))
        except ValueError:
            raise ConfigurationError(
                f'Invalid dice configuration: "{entry}". Expected comma-separated integers.', entry
            ) from None
    if len(faces) < config.min_faces:
        raise ConfigurationError(
            f'Invalid dice configuration: "{entry}". A die needs at least {config.min_faces} faces.', entry
        )
    return Die(tuple(faces))


def parse_dice_args(entries: Iterable[str], config: GameConfig = GameConfig()) -> DiceSet:
    """
    Parse every raw entry into a DiceSet, failing before any round can start.
    Args:
        entries (iterable[str]): Raw dice configurations, one per die.
        config (GameConfig): Constraints to enforce.
    Returns:
        DiceSet: The configured dice, in argument order.
    Raises:
        ConfigurationError: If there are fewer than min_dice entries or any entry is malformed.
    """
    entries = list(entries)
    if len(entries) < config.min_dice:
        raise ConfigurationError(
            f"You must provide at least {config.min_dice} dice configurations (got {len(entries)})."
        )
    return DiceSet([parse_die(entry, config) for entry in entries])
