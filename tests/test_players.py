import random
import unittest

from fair_dice.core.dice import Die
from fair_dice.players import PLAYER_MAP, UnknownPlayerError, create_player, register_player
from fair_dice.players.random_player import RandomPlayer, GreedyPlayer


A = Die((2, 2, 4, 4, 9, 9))
B = Die((1, 1, 6, 6, 8, 8))
C = Die((3, 3, 5, 5, 7, 7))


def pick_view(available, house_die=None):
    return {"request": "pick_die", "options": [d.label for d in available], "range": len(available),
            "tag": None, "available": available, "house_die": house_die}


class TestPlayers(unittest.TestCase):
    def test_registry(self):
        self.assertIs(PLAYER_MAP["random"], RandomPlayer)
        self.assertIs(PLAYER_MAP["greedy"], GreedyPlayer)
        self.assertNotIn("scripted", PLAYER_MAP)

    def test_create_player_by_name(self):
        self.assertIsInstance(create_player("Greedy"), GreedyPlayer)
        player = create_player("random", rng=random.Random(1))
        self.assertIsInstance(player, RandomPlayer)
        with self.assertRaises(UnknownPlayerError) as ctx:
            create_player("nobody")
        self.assertIn("greedy, random", str(ctx.exception))

    def test_name_cannot_be_taken_twice(self):
        with self.assertRaises(ValueError):
            register_player("random")(GreedyPlayer)
        self.assertIs(PLAYER_MAP["random"], RandomPlayer)

    def test_random_player_stays_in_range(self):
        player = RandomPlayer(rng=random.Random(3))
        view = {"request": "contribute", "options": [str(i) for i in range(6)], "range": 6}
        for _ in range(100):
            self.assertTrue(0 <= player.choose(view) < 6)

    def test_greedy_counters_house_die(self):
        player = GreedyPlayer(rng=random.Random(0))
        # C beats A, A beats B
        self.assertEqual(player.choose(pick_view([B, C], house_die=A)), 1)
        self.assertEqual(player.choose(pick_view([A, C], house_die=B)), 0)

    def test_greedy_first_pick_in_a_cycle(self):
        player = GreedyPlayer(rng=random.Random(0))
        # every die of a balanced cycle has worst case 4/9; the first wins ties
        self.assertEqual(player.choose(pick_view([A, B, C])), 0)
        self.assertEqual(player.choose(pick_view([Die((1, 1)), Die((5, 6)), Die((2, 3))])), 1)


if __name__ == '__main__':
    unittest.main()
