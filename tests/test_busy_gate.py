import threading
import unittest

import numpy as np

from rubik_player.engine import RubikEngine
from rubik_player.sequences import BUSY_MESSAGE


class TestBusyGate(unittest.TestCase):
    def test_nested_requests_are_rejected_while_a_move_is_in_progress(self):
        nested = []

        def observer(move, state):
            nested.append(
                (
                    engine.apply_move("U"),
                    engine.undo_last_move(),
                    engine.scramble(5),
                    engine.solve().message,
                    engine.reset(),
                    engine.busy,
                )
            )

        engine = RubikEngine(on_move=observer)
        self.assertTrue(engine.apply_move("R"))
        self.assertEqual(nested, [(False, None, [], BUSY_MESSAGE, None, True)])
        self.assertEqual(engine.history, ["R"])
        self.assertFalse(engine.busy)

    def test_observer_sees_each_scramble_step(self):
        seen = []
        engine = RubikEngine(on_move=lambda move, state: seen.append((move, state)))
        moves = engine.scramble(12, seed=8)

        self.assertEqual([m for m, _ in seen], moves)
        self.assertTrue(np.array_equal(seen[-1][1], engine.get_state()))
        for _, state in seen:
            self.assertTrue(np.all(np.bincount(state.astype(np.int64), minlength=6) == 9))

    def test_reads_are_allowed_during_an_operation(self):
        faces = []
        engine = RubikEngine(on_move=lambda move, state: faces.append(engine.get_face_colors("U")))
        engine.apply_move("F")
        self.assertEqual(len(faces), 1)
        self.assertEqual(faces[0][6:], ["orange"] * 3)

    def test_concurrent_request_from_other_thread_is_rejected(self):
        entered = threading.Event()
        release = threading.Event()
        results = []

        def observer(move, state):
            entered.set()
            release.wait(timeout=2.0)

        engine = RubikEngine(on_move=observer)
        worker = threading.Thread(target=lambda: results.append(engine.apply_move("R")))
        worker.start()
        self.assertTrue(entered.wait(timeout=2.0))

        self.assertFalse(engine.apply_move("L"))
        release.set()
        worker.join(timeout=2.0)

        self.assertEqual(results, [True])
        self.assertEqual(engine.history, ["R"])
        engine.on_move = None
        self.assertTrue(engine.apply_move("L"))


def stop_after(limit: int):
    seen = []

    def observer(move, state):
        seen.append(move)
        return len(seen) < limit

    return observer, seen


class TestObserverStop(unittest.TestCase):
    def test_observer_stops_playback(self):
        engine = RubikEngine()
        engine.scramble(20, seed=6)
        engine.on_move, seen = stop_after(10)

        result = engine.solve()
        self.assertTrue(result.stopped)
        self.assertEqual(len(result.moves), 10)
        self.assertEqual([s.name for s in result.stages], ["cross"])
        self.assertEqual(engine.history, seen)
        self.assertEqual(result.solved, engine.is_solved())
        self.assertTrue(result.message.startswith("Stopped during cross after 10 moves"))
        self.assertTrue(result.as_dict()["stopped"])

    def test_stop_does_not_leak_into_next_operation(self):
        engine = RubikEngine()
        engine.scramble(20, seed=6)
        engine.on_move, _ = stop_after(1)
        self.assertEqual(len(engine.solve().moves), 1)

        engine.on_move = lambda move, state: None
        result = engine.solve()
        self.assertFalse(result.stopped)
        self.assertEqual(len(result.moves), 144)

    def test_observer_stops_scramble(self):
        engine = RubikEngine()
        engine.on_move, seen = stop_after(5)
        moves = engine.scramble(20, seed=2)
        self.assertEqual(moves, seen)
        self.assertEqual(len(moves), 5)
        self.assertEqual(engine.history, [])

        replay = RubikEngine()
        replay.apply_sequence(moves)
        self.assertTrue(np.array_equal(engine.get_state(), replay.get_state()))

    def test_observer_stops_demo(self):
        engine = RubikEngine()
        engine.on_move, _ = stop_after(1)
        self.assertEqual(engine.demonstrate("sexy"), ["R"])
        self.assertEqual(engine.history, ["R"])

    def test_returning_none_keeps_going(self):
        engine = RubikEngine(on_move=lambda move, state: None)
        self.assertEqual(len(engine.scramble(20, seed=3)), 20)


if __name__ == "__main__":
    unittest.main()
