import random
import unittest

from calgrid.coloring import by_start_end, greedy_lanes, max_concurrency, overlap_components


def _random_intervals(rng: random.Random, n: int, axis: int) -> list:
    out = []
    for _ in range(n):
        lo = rng.randrange(0, axis - 1)
        hi = rng.randrange(lo + 1, min(axis, lo + axis // 3) + 1)
        out.append((lo, hi))
    return out


class TestColoringContract(unittest.TestCase):
    def test_smallest_free_lane(self) -> None:
        lanes = greedy_lanes([(0, 3), (1, 4), (3, 5), (4, 6)])
        self.assertEqual(lanes, [0, 1, 0, 1])

    def test_touching_intervals_share_a_lane(self) -> None:
        self.assertEqual(greedy_lanes([(0, 10), (10, 20)]), [0, 0])
        self.assertEqual(overlap_components([(0, 10), (10, 20)]), [0, 1])

    def test_ties_follow_input_order(self) -> None:
        self.assertEqual(greedy_lanes([(5, 6), (5, 9), (0, 1)]), [0, 1, 0])
        self.assertEqual(greedy_lanes([(5, 9), (5, 6), (0, 1)]), [0, 1, 0])
        # Ordering by end first changes which interval wins the tie.
        self.assertEqual(greedy_lanes([(5, 9), (5, 6)], key=by_start_end), [1, 0])

    def test_empty_interval_rejected(self) -> None:
        with self.assertRaises(ValueError):
            greedy_lanes([(3, 3)])
        self.assertEqual(greedy_lanes([]), [])

    def test_components_are_transitive(self) -> None:
        comps = overlap_components([(20, 30), (0, 10), (5, 15), (12, 20)])
        self.assertEqual(comps, [1, 0, 0, 0])

    def test_max_concurrency(self) -> None:
        self.assertEqual(max_concurrency([]), 0)
        self.assertEqual(max_concurrency([(0, 10), (10, 20)]), 1)
        self.assertEqual(max_concurrency([(0, 10), (2, 8), (4, 6), (7, 12)]), 3)

    def test_random_sets_are_proper_and_minimal(self) -> None:
        rng = random.Random(20240310)
        for _ in range(200):
            ivs = _random_intervals(rng, rng.randrange(1, 25), 60)
            for key in (None, by_start_end):
                lanes = greedy_lanes(ivs) if key is None else greedy_lanes(ivs, key=key)
                for i in range(len(ivs)):
                    for j in range(i + 1, len(ivs)):
                        a, b = ivs[i], ivs[j]
                        if a[0] < b[1] and a[1] > b[0]:
                            self.assertNotEqual(lanes[i], lanes[j], (ivs, lanes))

                comps = overlap_components(ivs)
                for comp in set(comps):
                    idxs = [i for i, c in enumerate(comps) if c == comp]
                    used = {lanes[i] for i in idxs}
                    self.assertEqual(len(used), max_concurrency([ivs[i] for i in idxs]))
                    self.assertEqual(max(used) + 1, len(used))

    def test_deterministic(self) -> None:
        rng = random.Random(7)
        ivs = _random_intervals(rng, 30, 100)
        self.assertEqual(greedy_lanes(ivs), greedy_lanes(list(ivs)))
        self.assertEqual(overlap_components(ivs), overlap_components(list(ivs)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
