import unittest

import numpy as np

from rubik_player.moves import solved_state
from rubik_player.solved_check import is_solved
from rubik_player.state_codec import (
    StateValidationError,
    faces_to_flat,
    flat_to_faces,
    state_to_color_names,
    state_to_text,
    validate_state,
)


class TestSolvedCheck(unittest.TestCase):
    def test_solved_state_is_true(self):
        self.assertTrue(is_solved(solved_state()))

    def test_corrupted_state_is_false(self):
        state = solved_state().copy()
        state[0], state[9] = state[9], state[0]
        self.assertFalse(is_solved(state))

    def test_solved_is_relative_to_centres(self):
        # Swapping whole faces keeps every face uniform.
        faces = flat_to_faces(solved_state())
        faces["U"], faces["D"] = faces["D"], faces["U"]
        self.assertTrue(is_solved(faces_to_flat(faces)))


class TestStateCodec(unittest.TestCase):
    def test_rejects_wrong_size(self):
        with self.assertRaises(StateValidationError):
            validate_state([0] * 53)

    def test_rejects_bad_counts(self):
        state = solved_state().astype(int).tolist()
        state[0] = 1
        with self.assertRaises(StateValidationError):
            validate_state(state)

    def test_rejects_out_of_range(self):
        state = solved_state().astype(int).tolist()
        state[0] = 6
        with self.assertRaises(StateValidationError):
            validate_state(state)

    def test_accepts_face_grid(self):
        arr = validate_state(solved_state().reshape(6, 9))
        self.assertTrue(np.array_equal(arr, solved_state()))

    def test_color_names_and_text(self):
        names = state_to_color_names(solved_state())
        self.assertEqual(names["F"], ["blue"] * 9)
        self.assertEqual(names["L"], ["orange"] * 9)
        text = state_to_text(solved_state())
        self.assertTrue(text.startswith("U: [0,0,0,0,0,0,0,0,0]\n"))
        self.assertIn("D: [5,5,5,5,5,5,5,5,5]", text)

    def test_faces_to_flat_requires_all_faces(self):
        faces = flat_to_faces(solved_state())
        del faces["B"]
        with self.assertRaises(StateValidationError):
            faces_to_flat(faces)


if __name__ == "__main__":
    unittest.main()
