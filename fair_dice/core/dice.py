
"""
dice.py
Defines the Die value type and the DiceSet collection used by the fair dice game.
Related modules:
- config.py: Builds a DiceSet from raw arguments.
- probability.py: Compares dice face by face.
- engine.py: Withdraws dice from the DiceSet as they are assigned.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class Die:
    """
    An immutable die: an ordered sequence of integer faces.
    Args:
        faces (tuple[int]): Face values, at least two.
    """
    faces: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "faces", tuple(self.faces))
        if len(self.faces) < 2:
            raise ValueError("a die needs at least 2 faces")

    def __len__(self) -> int:
        return len(self.faces)

    def roll(self, index: int) -> int:
        """
        Return the face shown for a rolled index.
        Args:
            index (int): Index in [0, len(die)).
        Returns:
            int: Face value.
        """
        return self.faces[index]

    @property
    def label(self) -> str:
        return "[" + ",".join(str(f) for f in self.faces) + "]"

    def __str__(self) -> str:
        return self.label


class DiceSet:
    """
    Ordered collection of dice. Only shrinks: take() withdraws a die once it is assigned to a party.
    Not thread-safe; one game instance progresses linearly.
    """
    def __init__(self, dice: Iterable[Die]):
        self._dice: List[Die] = list(dice)

    def __len__(self) -> int:
        return len(self._dice)

    def __getitem__(self, index: int) -> Die:
        return self._dice[index]

    def __iter__(self) -> Iterator[Die]:
        return iter(self._dice)

    def labels(self) -> List[str]:
        return [d.label for d in self._dice]

    def take(self, index: int) -> Die:
        """
        Remove and return the die at index.
        Raises:
            IndexError: If index is out of range.
        """
        if not 0 <= index < len(self._dice):
            raise IndexError(f"no die at index {index}")
        return self._dice.pop(index)

    def copy(self) -> "DiceSet":
        return DiceSet(self._dice)
