
"""
probability.py
Win probabilities between non-transitive dice, computed from exact counts.
Related modules:
- dice.py: Die faces being compared.
- UI/cli.py: Renders probability_table on help requests.
"""

from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import List, Sequence, Tuple

from .dice import Die


def win_counts(die_a: Die, die_b: Die) -> Tuple[int, int]:
    """
    Count ordered face pairs where die_a shows strictly more than die_b.
    Returns:
        tuple: (wins, total) with total = len(die_a) * len(die_b). Ties are in total only.
    """
    wins = sum(1 for a in die_a.faces for b in die_b.faces if a > b)
    return wins, len(die_a.faces) * len(die_b.faces)


def win_probability(die_a: Die, die_b: Die) -> Fraction:
    """P(die_a beats die_b) on independent uniform rolls."""
    wins, total = win_counts(die_a, die_b)
    return Fraction(wins, total)


def probability_matrix(dice: Sequence[Die]) -> List[List[Fraction]]:
    """
    Full square matrix; entry [i][j] is P(dice[i] beats dice[j]). The diagonal uses the same formula.
    """
    return [[win_probability(a, b) for b in dice] for a in dice]


def format_probability(p: Fraction, digits: int = 3) -> str:
    """Round the exact value half-up to `digits` decimals."""
    quantum = Decimal(1).scaleb(-digits)
    value = Decimal(p.numerator) / Decimal(p.denominator)
    return str(value.quantize(quantum, rounding=ROUND_HALF_UP))


def probability_table(dice: Sequence[Die], digits: int = 3) -> Tuple[List[str], List[List[str]]]:
    """
    Headers and rows for displaying the matrix, keyed by each die's face-sequence label.
    Returns:
        tuple: (headers, rows); each row starts with the row die's label.
    """
    headers = ["VS \\ Dice"] + [d.label for d in dice]
    rows = []
    for die, probs in zip(dice, probability_matrix(dice)):
        rows.append([die.label] + [format_probability(p, digits) for p in probs])
    return headers, rows
