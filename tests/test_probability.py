import unittest
from fractions import Fraction

from fair_dice.core.dice import Die, DiceSet
from fair_dice.core.probability import (
    win_counts, win_probability, probability_matrix, format_probability, probability_table,
)


A = Die((2, 2, 4, 4, 9, 9))
B = Die((1, 1, 6, 6, 8, 8))
C = Die((3, 3, 5, 5, 7, 7))


class TestProbability(unittest.TestCase):
    def test_classic_pair(self):
        self.assertEqual(win_counts(A, B), (20, 36))
        self.assertEqual(win_probability(A, B), Fraction(5, 9))

    def test_non_transitive_cycle(self):
        # A beats B, B beats C, C beats A
        self.assertGreater(win_probability(A, B), Fraction(1, 2))
        self.assertGreater(win_probability(B, C), Fraction(1, 2))
        self.assertGreater(win_probability(C, A), Fraction(1, 2))

    def test_ties_only_in_denominator(self):
        x = Die((1, 2))
        y = Die((1, 2))
        # pairs: (1,1) tie, (1,2) loss, (2,1) win, (2,2) tie
        self.assertEqual(win_probability(x, y), Fraction(1, 4))
        self.assertLess(win_probability(x, y) + win_probability(y, x), 1)

    def test_self_comparison_not_forced_to_half(self):
        self.assertEqual(win_probability(A, A), Fraction(12, 36))

    def test_matrix_shape_and_diagonal(self):
        m = probability_matrix([A, B, C])
        self.assertEqual(len(m), 3)
        self.assertTrue(all(len(row) == 3 for row in m))
        for i, d in enumerate([A, B, C]):
            self.assertEqual(m[i][i], win_probability(d, d))
        self.assertEqual(m[0][1], Fraction(5, 9))

    def test_format_probability_half_up(self):
        self.assertEqual(format_probability(Fraction(5, 9)), "0.556")
        self.assertEqual(format_probability(Fraction(1, 2000)), "0.001")
        self.assertEqual(format_probability(Fraction(1)), "1.000")
        self.assertEqual(format_probability(Fraction(0)), "0.000")
        self.assertEqual(format_probability(Fraction(1, 3), digits=4), "0.3333")

    def test_table_keyed_by_labels(self):
        dice = DiceSet([A, B, C])
        headers, rows = probability_table(dice)
        self.assertEqual(headers, ["VS \\ Dice", "[2,2,4,4,9,9]", "[1,1,6,6,8,8]", "[3,3,5,5,7,7]"])
        self.assertEqual(rows[0][0], "[2,2,4,4,9,9]")
        self.assertEqual(rows[0][2], "0.556")
        # querying does not mutate the dice
        self.assertEqual(len(dice), 3)
        probability_table(dice)
        self.assertEqual(dice.labels(), headers[1:])


if __name__ == '__main__':
    unittest.main()
