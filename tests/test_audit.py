import os
import tempfile
import unittest

from fair_dice.core.audit import audit_events
from fair_dice.core.config import parse_dice_args
from fair_dice.core.engine import GameEngine
from fair_dice.players.random_player import RandomPlayer
from fair_dice.persistence.recorder import InMemoryRecorder
from fair_dice.persistence import serializer


CONFIG = ["2,2,4,4,9,9", "1,1,6,6,8,8", "3,3,5,5,7,7"]


def play_recorded():
    recorder = InMemoryRecorder()
    engine = GameEngine(parse_dice_args(CONFIG), RandomPlayer(), listeners=[recorder.listener("g1", "RandomPlayer")])
    engine.play()
    return engine, recorder


class TestAudit(unittest.TestCase):
    """
    Tests for `audit_events`:
      - A played game audits clean, from engine dicts, recorded GameEvents and a transcript file.
      - Tampering with a revealed secret, key or fair value is detected.
      - A reveal that skips the contribution, or a missing reveal, is detected.
      - A second commitment for a round and non-integer fields are reported, not raised.
    """

    def test_clean_game(self):
        engine, recorder = play_recorded()
        self.assertEqual(audit_events(engine.get_events()), [])
        self.assertEqual(audit_events(recorder.events()), [])
        self.assertEqual(recorder.events()[0].player_type, "RandomPlayer")

    def test_transcript_file_round_trip(self):
        _, recorder = play_recorded()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "game.jsonl")
            serializer.write_transcript(path, recorder.events())
            events = serializer.read_transcript(path)
        self.assertEqual(len(events), len(recorder.events()))
        committed = [e for e in events if e.event_type == "Committed"][0]
        self.assertEqual(committed.payload["tag"], committed.payload["tag"].upper())
        self.assertEqual(audit_events(events), [])

    def test_tampered_secret_detected(self):
        engine, _ = play_recorded()
        events = engine.get_events()
        for e in events:
            if e["type"] == "Revealed" and e["round"] == "house_roll":
                e["secret_number"] = (e["secret_number"] + 1) % e["range"]
        problems = [(f.round, f.problem) for f in audit_events(events)]
        self.assertIn(("house_roll", "tag does not match revealed secret number and key"), problems)

    def test_tampered_key_detected(self):
        engine, _ = play_recorded()
        events = engine.get_events()
        for e in events:
            if e["type"] == "Revealed" and e["round"] == "first_move":
                e["key"] = bytes(32)
        rounds = {f.round for f in audit_events(events)}
        self.assertIn("first_move", rounds)

    def test_tampered_fair_value_detected(self):
        engine, _ = play_recorded()
        events = engine.get_events()
        for e in events:
            if e["type"] == "FairValue" and e["round"] == "human_roll":
                e["value"] = (e["value"] + 1) % e["range"]
        rounds = {f.round for f in audit_events(events)}
        self.assertEqual(rounds, {"human_roll"})

    def test_reveal_without_contribution_detected(self):
        engine, _ = play_recorded()
        events = [e for e in engine.get_events() if not (e["type"] == "Contributed" and e["round"] == "house_roll")]
        problems = [f.problem for f in audit_events(events)]
        self.assertIn("revealed before the contribution was accepted", problems)

    def test_missing_reveal_detected(self):
        engine, _ = play_recorded()
        events = [e for e in engine.get_events() if not (e["type"] == "Revealed" and e["round"] == "human_roll")]
        problems = [(f.round, f.problem) for f in audit_events(events)]
        self.assertIn(("human_roll", "commitment never revealed"), problems)

    def test_second_commitment_for_a_round_detected(self):
        engine, _ = play_recorded()
        events = engine.get_events()
        original = next(i for i, e in enumerate(events) if e["type"] == "Committed" and e["round"] == "house_roll")
        forged = dict(events[original], tag=bytes(32), range=6)
        events.insert(original + 1, forged)
        problems = [(f.round, f.problem) for f in audit_events(events)]
        self.assertIn(("house_roll", "round committed more than once"), problems)
        # the first tag stays binding, so the real reveal still verifies
        self.assertNotIn(("house_roll", "tag does not match revealed secret number and key"), problems)

    def test_non_integer_fields_reported(self):
        engine, _ = play_recorded()
        events = engine.get_events()
        for e in events:
            if e["type"] == "Contributed" and e["round"] == "human_roll":
                e["contribution"] = "2"
            if e["type"] == "Committed" and e["round"] == "house_roll":
                e["range"] = 6.0
        problems = [(f.round, f.problem) for f in audit_events(events)]
        self.assertIn(("human_roll", "malformed contribution '2'"), problems)
        self.assertIn(("house_roll", "malformed range 6.0"), problems)


if __name__ == '__main__':
    unittest.main()
