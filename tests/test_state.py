import unittest

from ballsort_core.containers import (
    GameConfig,
    color_counts,
    free_space,
    is_full,
    is_same_color,
    top_color,
    top_run_length,
    total_balls,
)
from ballsort_core.state import GameState


def _cfg(capacity, num_containers=2, colors=("red", "blue")):
    return GameConfig(num_containers=num_containers, max_balls_per_container=capacity, colors=colors)


class TestContainers(unittest.TestCase):
    def test_given_containers_when_inspecting_top_then_run_and_color_correct(self):
        self.assertEqual(top_run_length(()), 0)
        self.assertEqual(top_run_length((1, 2, 2)), 2)
        self.assertEqual(top_run_length((2, 1, 2)), 1)
        self.assertEqual(top_run_length((3, 3, 3)), 3)
        self.assertIsNone(top_color(()))
        self.assertEqual(top_color((1, 2)), 2)

    def test_given_containers_when_checking_color_then_empty_counts_as_same_color(self):
        self.assertTrue(is_same_color(()))
        self.assertTrue(is_same_color((2, 2)))
        self.assertFalse(is_same_color((2, 1)))

    def test_given_capacity_when_checking_space_then_full_and_free_space_correct(self):
        cfg = _cfg(3)
        self.assertEqual(free_space((1,), cfg), 2)
        self.assertFalse(is_full((1, 1), cfg))
        self.assertTrue(is_full((1, 1, 2), cfg))

    def test_given_colors_when_mapping_names_then_codes_are_one_based(self):
        cfg = _cfg(2)
        self.assertEqual(cfg.num_colors, 2)
        self.assertEqual(cfg.color_name(1), "red")
        self.assertEqual(cfg.color_name(2), "blue")

    def test_given_containers_when_counting_then_totals_per_color(self):
        containers = [(1, 2, 2), (), (1,)]
        self.assertEqual(total_balls(containers), 4)
        self.assertEqual(color_counts(containers), {1: 2, 2: 2})


class TestTerminal(unittest.TestCase):
    def test_given_all_empty_when_checking_terminal_then_true(self):
        self.assertTrue(GameState.from_lists([[], []]).is_terminal(_cfg(2)))

    def test_given_single_full_monochrome_container_when_checking_terminal_then_true(self):
        self.assertTrue(GameState.from_lists([[1, 1]]).is_terminal(_cfg(2, num_containers=1)))

    def test_given_full_container_with_two_colors_when_checking_terminal_then_false(self):
        self.assertFalse(GameState.from_lists([[1, 2]]).is_terminal(_cfg(2, num_containers=1)))

    def test_given_partial_monochrome_container_when_checking_terminal_then_false(self):
        self.assertFalse(GameState.from_lists([[1], [2, 2]]).is_terminal(_cfg(2)))

    def test_given_sorted_layout_with_empties_when_checking_terminal_then_true(self):
        s = GameState.from_lists([[1, 1], [], [2, 2]])
        self.assertTrue(s.is_terminal(_cfg(2, num_containers=3)))


class TestClone(unittest.TestCase):
    def test_given_state_when_cloning_with_pour_then_balls_moved_and_original_untouched(self):
        s = GameState.from_lists([[1, 2, 2], [2]])
        moved = s.clone_with_balls_moved(0, 1, 2)
        self.assertEqual(moved.containers, ((1,), (2, 2, 2)))
        self.assertEqual(s.containers, ((1, 2, 2), (2,)))
        self.assertEqual(moved.to_lists(), [[1], [2, 2, 2]])


if __name__ == "__main__":
    unittest.main(verbosity=2)
