from abc import ABC, abstractmethod
from typing import Any


GUESS = "guess"
PICK_DIE = "pick_die"
CONTRIBUTE = "contribute"


class Player(ABC):
    """
    Abstract base class for the counterpart (human seat) of a fair dice game.
    Players implement choose(view), which receives a request view from the engine and returns an option index.
    """

    @abstractmethod
    def choose(self, view: Any) -> int:
        """
        Given a request view, return the index of the chosen option.
        Args:
            view (dict): Keys 'request' (guess, pick_die or contribute), 'options' (labels),
                'range', 'tag' (hex of the pending commitment, or None) and 'dice' (initial DiceSet).
                pick_die requests also carry 'available' (list of Die) and 'house_die' (Die or None).
        Returns:
            int: Index into view['options'].
        """
        raise NotImplementedError

    def option_count(self, view) -> int:
        """
        Number of options offered by a view.
        Args:
            view (dict): Request view.
        Returns:
            int: len(view['options']).
        """
        return len(view["options"])
