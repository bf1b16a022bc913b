from unittest import TestCase, main

import numpy as np
from numpy import array

from tilemerge.core.gameboard import check_game_over, latent_state
from tilemerge.core.gamemove import ACTIONS, can_move, legal_actions, resolve_direction


class TestGameMove(TestCase):
    def test_can_move(self):
        """
        Test if a left move is detected on slides and merges only.
        """
        self.assertTrue(can_move(array([[0, 2, 0, 0]])))
        self.assertTrue(can_move(array([[4, 4, 8, 16]])))
        self.assertFalse(can_move(array([[2, 4, 0, 0], [8, 0, 0, 0]])))
        self.assertFalse(can_move(array([[0, 0], [0, 0]])))

    def test_legal_actions(self):
        """
        Test if legal actions are correctly identified.
        """
        board = array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        legal = legal_actions(board)
        self.assertEqual(set(legal), {1, 2, 3})

    def test_no_legal_actions(self):
        """
        Test if a locked grid has no legal action.
        """
        board = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])
        self.assertEqual(legal_actions(board), [])

    def test_legal_actions_match_moves(self):
        """
        Legal actions are exactly the moves that change the grid.
        """
        generator = np.random.default_rng(3)
        for _ in range(50):
            board = generator.choice([0, 2, 2, 4, 8, 16], size=(4, 4))
            changing = [a for a in range(4) if not np.array_equal(latent_state(board, a)[0], board)]
            self.assertEqual(legal_actions(board), changing)
            self.assertEqual(check_game_over(board), not changing)

    def test_resolve_direction(self):
        """
        Names and action numbers resolve to the same action.
        """
        for name, action in ACTIONS.items():
            self.assertEqual(resolve_direction(name), action)
            self.assertEqual(resolve_direction(name.upper()), action)
            self.assertEqual(resolve_direction(action), action)
            self.assertEqual(resolve_direction(np.int64(action)), action)

    def test_resolve_unknown_direction(self):
        """
        Unknown directions raise.
        """
        for direction in ('north', '', 5, 1.0, False):
            with self.assertRaises(ValueError):
                resolve_direction(direction)


if __name__ == '__main__':
    main()
