import random

from .base import Player, PICK_DIE
from ..core.probability import win_probability
from . import register_player


@register_player("random")
class RandomPlayer(Player):
    """
    A player that answers every request uniformly at random. Used by simulations and tests.
    The RNG only drives this player's own choices; the house's numbers always come from SecureRandom.
    """
    def __init__(self, rng=None):
        """
        Args:
            rng: Optional random number generator (random.Random) for reproducible choices.
        """
        self.rng = rng or random.Random()

    def choose(self, view):
        return self.rng.randrange(self.option_count(view))


@register_player("greedy")
class GreedyPlayer(RandomPlayer):
    """
    Picks the die whose worst win probability against the other offered dice is highest.
    Guesses and contributions stay random, since no contribution can improve a fair roll.
    """
    def choose(self, view):
        if view["request"] != PICK_DIE:
            return super().choose(view)
        dice = view["available"]
        if len(dice) == 1:
            return 0
        house_die = view.get("house_die")
        if house_die is not None:
            # house already picked: take the die most likely to beat it
            return max(range(len(dice)), key=lambda i: win_probability(dice[i], house_die))
        best_index, best_score = 0, None
        for i, die in enumerate(dice):
            score = min(win_probability(die, other) for j, other in enumerate(dice) if j != i)
            if best_score is None or score > best_score:
                best_index, best_score = i, score
        return best_index
