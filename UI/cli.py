import argparse
import logging
import sys
from typing import List, Optional

from tabulate import tabulate

from fair_dice.core.config import GameConfig, ConfigurationError, parse_dice_args
from fair_dice.core.engine import GameEngine, HUMAN, HOUSE, HOUSE_ROLL_ROUND, Outcome
from fair_dice.core.commitment import tag_hex, key_hex
from fair_dice.core.probability import probability_table
from fair_dice.core.secure_random import SecureRandom, EntropyUnavailable
from fair_dice.core.audit import audit_events
from fair_dice.players.base import Player, GUESS, PICK_DIE, CONTRIBUTE
from fair_dice.players import create_player, UnknownPlayerError
from fair_dice.persistence.recorder import InMemoryRecorder
from fair_dice.persistence import serializer

import os
import datetime
import hashlib


EXIT = "X"
HELP = "?"


def render_help(dice, config: GameConfig = GameConfig()) -> str:
    """
    Render the win probability table of all configured dice.
    Args:
        dice: Sequence of Die (rows: user die, columns: opponent die).
        config (GameConfig): Supplies the display precision.
    Returns:
        str: The table text.
    """
    headers, rows = probability_table(dice, config.probability_digits)
    intro = "Probability of the win for the user (rows) against each dice (columns):"
    return intro + "\n" + tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)


class Menu:
    """
    Input surface: numbered options, plus X to exit and ? for help. Invalid input re-prompts forever.
    """
    def __init__(self, dice, config: GameConfig = GameConfig(), input_fn=input, output=print):
        self.dice = dice
        self.config = config
        self.input_fn = input_fn
        self.output = output

    def prompt_selection(self, message: str, options: List[str]) -> int:
        """
        Print the options and read a selection.
        Args:
            message (str): Prompt headline.
            options (list[str]): Labels of the selectable options.
        Returns:
            int: Index of the chosen option.
        """
        self.output(message)
        for i, option in enumerate(options):
            self.output(f"{i} - {option}")
        self.output(f"{EXIT} - exit")
        self.output(f"{HELP} - help")
        valid = [str(i) for i in range(len(options))]
        while True:
            answer = self.input_fn("Your selection: ").strip()
            if answer.upper() == EXIT:
                self.output("Goodbye")
                sys.exit(1)
            if answer == HELP:
                self.output(render_help(self.dice, self.config))
                continue
            if answer in valid:
                return int(answer)
            self.output("Please, select from the options provided.")


class HumanPlayer(Player):
    """
    The human seat, answering engine requests through the console Menu.
    """
    def __init__(self, menu: Menu):
        self.menu = menu

    def choose(self, view):
        request = view["request"]
        if request == GUESS:
            message = "Try to guess my selection."
        elif request == PICK_DIE:
            message = "Choose your dice:"
        elif request == CONTRIBUTE:
            message = f"Add your number modulo {view['range']}."
        else:
            raise ValueError(f"Unknown request: {request}")
        return self.menu.prompt_selection(message, view["options"])


def print_event(event, output=print):
    """
    Display surface: print what the engine discloses, in the order it discloses it.
    Args:
        event (dict): Engine event.
    """
    t = event["type"]
    if t == "Committed":
        if event["round"] == "first_move":
            output("Let's determine who makes the first move.")
        else:
            whose = "my" if event["round"] == HOUSE_ROLL_ROUND else "your"
            output(f"It's time for {whose} roll.")
        output(f"I selected a random value in the range 0..{event['range'] - 1} (HMAC={tag_hex(event['tag'])}).")
    elif t == "Revealed":
        output(f"My selection: {event['secret_number']} (KEY={key_hex(event['key'])}).")
    elif t == "FirstMove":
        if event["side"] == HUMAN:
            output("You guessed it. You make the first move.")
        else:
            output("I make the first move.")
    elif t == "DieAssigned":
        if event["side"] == HOUSE:
            output(f"I choose the {event['die']} dice.")
        else:
            output(f"You chose the {event['die']} dice.")
    elif t == "FairValue":
        output(f"The fair number generation result is {event['secret_number']} + {event['contribution']} "
               f"= {event['value']} (mod {event['range']}).")
    elif t == "Rolled":
        whose = "My" if event["side"] == HOUSE else "Your"
        output(f"{whose} roll result is {event['face']}.")
    elif t == "GameEnded":
        human, house = event["human_roll"], event["house_roll"]
        if event["outcome"] == Outcome.HUMAN_WINS.value:
            output(f"You win ({human} > {house})!")
        elif event["outcome"] == Outcome.HOUSE_WINS.value:
            output(f"I win ({human} < {house})!")
        else:
            output(f"It's a draw ({human} = {house})!")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Non-transitive dice game with provably fair random generation")
    parser.add_argument("dice", nargs="*", help='Dice configurations, e.g. 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7')
    parser.add_argument("--player", type=str, default=None, help="Let an automated player from the registry take the human seat")
    parser.add_argument("--transcript", type=str, default=None, help="Write the game's events as JSON lines to this path")
    parser.add_argument("--verify", type=str, default=None, help="Audit a saved transcript and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def verify_transcript(path: str) -> int:
    """
    Audit a transcript file.
    Returns:
        int: Process exit status, 0 if every commitment checks out.
    """
    try:
        findings = audit_events(serializer.read_transcript(path))
    except (OSError, ValueError, KeyError) as e:
        print(f"Error: cannot read transcript {path}: {e}", file=sys.stderr)
        return 1
    if findings:
        for finding in findings:
            print(f"{finding.round}: {finding.problem}")
        return 1
    print(f"All commitments in {path} verified.")
    return 0


def play(dice_args: List[str], player_name: Optional[str] = None, transcript: Optional[str] = None,
         config: Optional[GameConfig] = None) -> int:
    """
    Play one game in the console.
    Args:
        dice_args (list[str]): Raw dice configurations.
        player_name (str|None): Registry name of an automated player for the human seat, or None for the console.
        transcript (str|None): Path to write the event transcript to.
        config (GameConfig|None): Game configuration; defaults if None.
    Returns:
        int: Process exit status.
    """
    if config is None:
        config = GameConfig()
    try:
        dice = parse_dice_args(dice_args, config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if player_name is None:
        player = HumanPlayer(Menu(dice.copy(), config))
        player_type = "Human"
    else:
        try:
            player = create_player(player_name)
        except UnknownPlayerError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        player_type = type(player).__name__

    # Generate a hashed game_id for the transcript
    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    raw_id = f"cli_{timestamp}_{os.getpid()}_{player_type}"
    game_id = hashlib.sha256(raw_id.encode()).hexdigest()[:16]
    recorder = InMemoryRecorder()

    engine = GameEngine(dice, player, rng=SecureRandom(config.key_size), config=config,
                        listeners=[print_event, recorder.listener(game_id, player_type)])
    try:
        engine.play()
    except EntropyUnavailable as e:
        print(f"Error: secure random source unavailable: {e}", file=sys.stderr)
        return 1

    if transcript:
        serializer.write_transcript(transcript, recorder.events())
        print(f"[Game transcript saved to {transcript}]")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if args.verify:
        return verify_transcript(args.verify)
    try:
        return play(args.dice, player_name=args.player, transcript=args.transcript)
    except (KeyboardInterrupt, EOFError):
        print("\nExiting game.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
