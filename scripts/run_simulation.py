"""
Play many automated fair dice games and compare empirical win rates with the exact probability matrix.
Every game's events are audited; game summaries go to CSV and a chart compares empirical and exact rates.
Usage: python scripts/run_simulation.py --player greedy --games 1000 --data-dir data 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7
"""
import os
import argparse
import datetime
import hashlib
import logging
from collections import defaultdict
from typing import Dict, List, Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from fair_dice.persistence import csv_io
from fair_dice.players import PLAYER_MAP, UnknownPlayerError, create_player
from fair_dice.core.audit import audit_events
from fair_dice.core.config import GameConfig, ConfigurationError, parse_dice_args
from fair_dice.core.engine import GameEngine, Outcome
from fair_dice.core.probability import win_probability, format_probability


def run_games(dice_args: List[str], player_key: str, games: int, cfg: GameConfig):
    """
    Play `games` games with a fresh DiceSet each time.
    Returns:
        tuple: (summary rows, per-pair stats keyed by (human_die, house_die)).
    """
    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    rows = []
    pair_stats: Dict[Tuple, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for i in range(games):
        dice = parse_dice_args(dice_args, cfg)
        player = create_player(player_key)
        engine = GameEngine(dice, player, config=cfg)
        result = engine.play()
        findings = audit_events(engine.get_events())
        if findings:
            raise SystemExit(f"Game {i} failed its audit: {findings}")
        game_id = hashlib.sha256(f"{timestamp}_{player_key}_{i}".encode()).hexdigest()[:16]
        rows.append(csv_io.summary_row(result, game_id, i, timestamp, type(player).__name__))
        stats = pair_stats[(result.human_die, result.house_die)]
        stats["games"] += 1
        if result.outcome is Outcome.HUMAN_WINS:
            stats["human_wins"] += 1
        elif result.outcome is Outcome.DRAW:
            stats["draws"] += 1
    return rows, pair_stats


def plot_pairs(pair_stats, out_path: str):
    labels, empirical, exact = [], [], []
    for (human_die, house_die), stats in sorted(pair_stats.items(), key=lambda kv: (kv[0][0].label, kv[0][1].label)):
        labels.append(f"{human_die.label}\nvs {house_die.label}")
        empirical.append(stats["human_wins"] / stats["games"])
        exact.append(float(win_probability(human_die, house_die)))

    xs = range(len(labels))
    width = max(6, int(len(labels) * 1.2))
    plt.figure(figsize=(width, 4))
    plt.bar([x - 0.2 for x in xs], empirical, width=0.4, color='C0', label='empirical')
    plt.bar([x + 0.2 for x in xs], exact, width=0.4, color='C1', label='exact')
    plt.xticks(list(xs), labels, fontsize=7)
    plt.ylabel('Human win rate')
    plt.ylim(0, 1)
    plt.title('Fair dice: empirical vs exact win rate per pairing')
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def main():
    parser = argparse.ArgumentParser(description='Simulate fair dice games between the house and an automated player')
    parser.add_argument('dice', nargs='+', help='Dice configurations, e.g. 2,2,4,4,9,9')
    parser.add_argument('--player', type=str, default='random', help='Player key from PLAYER_MAP')
    parser.add_argument('--games', type=int, default=100, help='Number of games to play')
    parser.add_argument('--data-dir', type=str, default='data', help='Directory to save csv and charts')
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    if args.player.lower() not in PLAYER_MAP:
        raise SystemExit(f"Error: {UnknownPlayerError(args.player)}")

    cfg = GameConfig()
    try:
        parse_dice_args(args.dice, cfg)
    except ConfigurationError as e:
        raise SystemExit(f"Error: {e}")
    os.makedirs(args.data_dir, exist_ok=True)
    rows, pair_stats = run_games(args.dice, args.player, args.games, cfg)

    summary_csv = os.path.join(args.data_dir, 'game_summary.csv')
    csv_io.append_rows_to_csv(rows, summary_csv, csv_io.get_summary_header())
    chart_png = os.path.join(args.data_dir, 'win_rates.png')
    plot_pairs(pair_stats, chart_png)

    for (human_die, house_die), stats in pair_stats.items():
        rate = stats["human_wins"] / stats["games"]
        exact = format_probability(win_probability(human_die, house_die), cfg.probability_digits)
        print(f"{human_die} vs {house_die}: {stats['games']} games, human win rate {rate:.3f} (exact {exact}), draws {stats['draws']}")
    print(f"Simulation finished. Game summaries saved to {summary_csv}, chart to {chart_png}")


if __name__ == '__main__':
    main()
