import unittest
from collections import Counter
from unittest import mock

from fair_dice.core.secure_random import SecureRandom, EntropyUnavailable


class TestSecureRandom(unittest.TestCase):
    """
    Tests for `SecureRandom`:
      - uniform_int stays inside [0, range) for every range, including range 1.
      - Draws over a six-value range pass a chi-square uniformity check.
      - Keys are 32 fresh bytes.
      - A failing platform source raises EntropyUnavailable instead of falling back.
    """

    def test_uniform_int_within_range(self):
        rng = SecureRandom()
        for r in (1, 2, 3, 6, 7, 255, 256, 1000):
            for _ in range(200):
                v = rng.uniform_int(r)
                self.assertTrue(0 <= v < r)

    def test_range_one_always_zero(self):
        rng = SecureRandom()
        self.assertEqual({rng.uniform_int(1) for _ in range(50)}, {0})

    def test_rejects_empty_range(self):
        rng = SecureRandom()
        with self.assertRaises(ValueError):
            rng.uniform_int(0)
        with self.assertRaises(ValueError):
            rng.uniform_int(-3)

    def test_chi_square_uniformity(self):
        rng = SecureRandom()
        samples = 6000
        counts = Counter(rng.uniform_int(6) for _ in range(samples))
        expected = samples / 6
        chi2 = sum((counts.get(k, 0) - expected) ** 2 / expected for k in range(6))
        # critical value for 5 degrees of freedom at p = 0.001
        self.assertLess(chi2, 20.515)

    def test_secret_key_is_fresh_32_bytes(self):
        rng = SecureRandom()
        keys = {rng.secret_key() for _ in range(20)}
        self.assertEqual(len(keys), 20)
        for k in keys:
            self.assertEqual(len(k), 32)

    def test_entropy_failure_is_fatal(self):
        rng = SecureRandom()
        with mock.patch("fair_dice.core.secure_random.secrets.randbelow", side_effect=OSError("no entropy")):
            with self.assertRaises(EntropyUnavailable):
                rng.uniform_int(6)
        with mock.patch("fair_dice.core.secure_random.secrets.token_bytes", side_effect=NotImplementedError("no source")):
            with self.assertRaises(EntropyUnavailable):
                rng.secret_key()


if __name__ == '__main__':
    unittest.main()
