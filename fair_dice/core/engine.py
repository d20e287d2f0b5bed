
"""
engine.py
Implements the GameEngine class, which sequences the three fair rounds of a non-transitive dice game
(first move, house roll, human roll), assigns dice, and derives the outcome.
Related modules:
- config.py: GameConfig with the round ranges.
- dice.py: DiceSet the dice are withdrawn from.
- protocol.py: One FairnessRound per round, never reused.
- secure_random.py: House die selection and round randomness.
- players/base.py: The counterpart answering guess, pick and contribution requests.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from . import commitment
from .config import GameConfig
from .dice import Die, DiceSet
from .protocol import FairnessRound
from .secure_random import SecureRandom
from ..players.base import Player, GUESS, PICK_DIE, CONTRIBUTE

logger = logging.getLogger(__name__)

HUMAN = "human"
HOUSE = "house"

FIRST_MOVE_ROUND = "first_move"
HOUSE_ROLL_ROUND = "house_roll"
HUMAN_ROLL_ROUND = "human_roll"


class Outcome(enum.Enum):
    HUMAN_WINS = "HUMAN_WINS"
    HOUSE_WINS = "HOUSE_WINS"
    DRAW = "DRAW"


@dataclass(frozen=True)
class GameResult:
    """
    Final result of one game.
    Fields:
        human_die (Die), house_die (Die): Assigned dice.
        human_roll (int), house_roll (int): Rolled faces.
        outcome (Outcome): Winner, or DRAW.
        human_first (bool): True if the human guessed the first-move round.
    """
    human_die: Die
    house_die: Die
    human_roll: int
    house_roll: int
    outcome: Outcome
    human_first: bool


def decide(human_roll: int, house_roll: int) -> Outcome:
    if human_roll > house_roll:
        return Outcome.HUMAN_WINS
    if human_roll < house_roll:
        return Outcome.HOUSE_WINS
    return Outcome.DRAW


class GameEngine:
    """
    Runs one game linearly. The house side is played by the engine itself; the human seat is a Player.
    Emits event dicts for the display and recording layers.
    """
    def __init__(self, dice: DiceSet, player: Player, rng: Optional[SecureRandom] = None,
                 config: GameConfig = GameConfig(),
                 listeners: Optional[List[Callable[[Dict], None]]] = None):
        """
        Args:
            dice (DiceSet): Configured dice; the engine withdraws from it as dice are assigned.
            player (Player): Counterpart for the human seat.
            rng (SecureRandom|None): Randomness service shared by all rounds.
            config (GameConfig): Game configuration.
            listeners (list|None): Callables invoked with every emitted event.
        """
        self.config = config
        self.dice = dice
        self.all_dice = dice.copy()
        self.player = player
        self.rng = rng or SecureRandom(config.key_size)
        self.listeners = list(listeners or [])
        self.human_die: Optional[Die] = None
        self.house_die: Optional[Die] = None
        self.result: Optional[GameResult] = None
        self._events = []

    def _emit(self, event: Dict):
        """
        Internal: Record an event and hand it to every listener.
        """
        self._events.append(event)
        for listener in self.listeners:
            listener(event)

    def pop_events(self):
        """
        Return and clear all emitted events since last call.
        Returns:
            list[dict]: List of event dicts.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self):
        """
        Return all events emitted so far (does not clear).
        """
        return list(self._events)

    def _ask(self, request: str, options: List[str], tag: Optional[bytes] = None, **extra) -> int:
        """
        Internal: Ask the player until it answers with a valid option index.
        """
        view = {
            "request": request,
            "options": list(options),
            "range": len(options),
            "tag": commitment.tag_hex(tag) if tag is not None else None,
            "dice": self.all_dice,
        }
        view.update(extra)
        while True:
            answer = self.player.choose(view)
            if isinstance(answer, int) and 0 <= answer < len(options):
                return answer
            logger.warning("rejected %s answer %r (expected 0..%d)", request, answer, len(options) - 1)

    def _commit(self, name: str, rng_range: int) -> FairnessRound:
        fair_round = FairnessRound(rng_range, self.rng)
        tag = fair_round.start()
        self._emit({"type": "Committed", "round": name, "range": rng_range, "tag": tag})
        return fair_round

    def _reveal(self, name: str, fair_round: FairnessRound):
        reveal = fair_round.reveal()
        self._emit({"type": "Revealed", "round": name, "range": fair_round.range,
                    "secret_number": reveal.secret_number, "key": reveal.key})
        return reveal

    def _take_house_die(self) -> Die:
        self.house_die = self.dice.take(self.rng.choice_index(len(self.dice)))
        self._emit({"type": "DieAssigned", "side": HOUSE, "die": self.house_die.label})
        return self.house_die

    def _take_human_die(self) -> Die:
        index = self._ask(PICK_DIE, self.dice.labels(), available=list(self.dice), house_die=self.house_die)
        self.human_die = self.dice.take(index)
        self._emit({"type": "DieAssigned", "side": HUMAN, "die": self.human_die.label})
        return self.human_die

    def determine_first_move(self) -> bool:
        """
        First-move round: the human guesses the committed bit. A correct guess lets the human pick first.
        Assigns both dice.
        Returns:
            bool: True if the human moved first.
        """
        rng_range = self.config.first_move_range
        fair_round = self._commit(FIRST_MOVE_ROUND, rng_range)
        guess = self._ask(GUESS, [str(i) for i in range(rng_range)], tag=fair_round.tag)
        fair_round.contribute(guess)
        self._emit({"type": "Contributed", "round": FIRST_MOVE_ROUND, "contribution": guess})
        self._reveal(FIRST_MOVE_ROUND, fair_round)
        human_first = fair_round.guessed()
        self._emit({"type": "FirstMove", "side": HUMAN if human_first else HOUSE})
        if human_first:
            self._take_human_die()
            self._take_house_die()
        else:
            self._take_house_die()
            self._take_human_die()
        return human_first

    def roll(self, side: str) -> int:
        """
        Fair roll of one side's die: committed house number plus the human's contribution, modulo the die size.
        Args:
            side (str): HOUSE or HUMAN.
        Returns:
            int: Rolled face.
        """
        die = self.house_die if side == HOUSE else self.human_die
        if die is None:
            raise RuntimeError(f"{side} has no die yet")
        name = HOUSE_ROLL_ROUND if side == HOUSE else HUMAN_ROLL_ROUND
        fair_round = self._commit(name, len(die))
        contribution = self._ask(CONTRIBUTE, [str(i) for i in range(len(die))], tag=fair_round.tag, side=side)
        fair_round.contribute(contribution)
        self._emit({"type": "Contributed", "round": name, "contribution": contribution})
        reveal = self._reveal(name, fair_round)
        index = fair_round.fair_value()
        self._emit({"type": "FairValue", "round": name, "secret_number": reveal.secret_number,
                    "contribution": contribution, "range": fair_round.range, "value": index})
        face = die.roll(index)
        self._emit({"type": "Rolled", "side": side, "die": die.label, "index": index, "face": face})
        return face

    def play(self) -> GameResult:
        """
        Play the whole game in its fixed order: first move, house roll, human roll, outcome.
        Returns:
            GameResult: The final result.
        """
        self._emit({"type": "GameStarted", "dice": self.all_dice.labels()})
        human_first = self.determine_first_move()
        house_roll = self.roll(HOUSE)
        human_roll = self.roll(HUMAN)
        outcome = decide(human_roll, house_roll)
        self.result = GameResult(self.human_die, self.house_die, human_roll, house_roll, outcome, human_first)
        self._emit({"type": "GameEnded", "outcome": outcome.value,
                    "human_roll": human_roll, "house_roll": house_roll})
        logger.info("game ended: %s (%d vs %d)", outcome.value, human_roll, house_roll)
        return self.result
