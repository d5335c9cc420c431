import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazes.algo.distances import Distances, compute, diameter, longest_path
from mazes.algo.generators import generate
from mazes.core.errors import InvalidCellError, UnreachedTargetError
from mazes.core.grid import Grid
from mazes.core.mask import Mask


class TestDistances(unittest.TestCase):
    def create_simple_maze(self):
        # 5x5 maze, simple path (row, col):
        # 0,0 -> 1,0 -> 2,0 -> 2,1 -> 2,2 -> 2,3 -> 2,4 -> 3,4 -> 4,4
        grid = Grid(5, 5)
        at = grid.to_id
        grid.carve(at(0, 0), Grid.SOUTH) # to 1,0
        grid.carve(at(1, 0), Grid.SOUTH) # to 2,0
        grid.carve(at(2, 0), Grid.EAST)  # to 2,1
        grid.carve(at(2, 1), Grid.EAST)  # to 2,2
        grid.carve(at(2, 2), Grid.EAST)  # to 2,3
        grid.carve(at(2, 3), Grid.EAST)  # to 2,4
        grid.carve(at(2, 4), Grid.SOUTH) # to 3,4
        grid.carve(at(3, 4), Grid.SOUTH) # to 4,4
        return grid

    def test_bfs_path(self):
        grid = self.create_simple_maze()
        distances = compute(grid, 0)

        self.assertEqual(distances.distance_to(24), 8)
        path = distances.path_to(24)
        # Expected path has 9 cells
        self.assertEqual(len(path), 9)
        self.assertEqual(path[0], 0)
        self.assertEqual(path[-1], 24)
        for a, b in zip(path, path[1:]):
            self.assertTrue(grid.is_linked(a, b))

    def test_unreached_cells(self):
        grid = self.create_simple_maze()
        distances = Distances(grid, 0)

        self.assertEqual(len(distances), 9)
        self.assertIsNone(distances.distance_to(grid.to_id(0, 1)))
        self.assertNotIn(grid.to_id(0, 1), distances)
        self.assertIn(24, distances)
        with self.assertRaises(UnreachedTargetError):
            distances.path_to(grid.to_id(0, 1))

    def test_no_path(self):
        grid = Grid(5, 5) # All walls
        distances = Distances(grid, 0)
        self.assertEqual(list(distances.reached()), [(0, 0)])
        self.assertEqual(distances.farthest(), (0, 0))
        with self.assertRaises(UnreachedTargetError):
            distances.path_to(24)

    def test_farthest(self):
        grid = self.create_simple_maze()
        self.assertEqual(Distances(grid, 0).farthest(), (24, 8))
        self.assertEqual(Distances(grid, grid.to_id(2, 2)).farthest(), (0, 4))

    def test_open_grid_tie_break(self):
        grid = Grid(2, 2)
        grid.link(0, 1)
        grid.link(0, 2)
        grid.link(1, 3)
        grid.link(2, 3)

        distances = Distances(grid, 0)
        self.assertEqual([distances[c] for c in range(4)], [0, 1, 1, 2])
        self.assertEqual(distances.max_distance, 2)
        # Cell 3 reaches back through its north neighbour first
        self.assertEqual(distances.path_to(3), [0, 1, 3])
        # Cells 1 and 2 tie at distance 1; farthest picks 3, the only one at 2
        self.assertEqual(distances.farthest(), (3, 2))

    def test_invalid_source(self):
        grid = Grid(3, 3)
        with self.assertRaises(InvalidCellError):
            Distances(grid, 9)

        mask = Mask(3, 3)
        mask.disable(1, 1)
        masked = Grid(3, 3, mask=mask)
        with self.assertRaises(InvalidCellError):
            Distances(masked, 4)
        self.assertIsNone(Distances(masked, 0).distance_to(4))

    def test_paths_match_distances_on_tree(self):
        grid = Grid(10, 10)
        generate("wilson", grid, seed=8)
        distances = Distances(grid, grid.to_id(4, 6))

        for target in grid.cells():
            path = distances.path_to(target)
            self.assertEqual(len(path) - 1, distances.distance_to(target))
            self.assertEqual(path[0], distances.source)
            self.assertEqual(path[-1], target)

    def test_diameter_is_exact_on_trees(self):
        grid = Grid(6, 6)
        generate("recursive_backtracker", grid, seed=17)

        brute = max(Distances(grid, cell).max_distance for cell in grid.cells())
        start, end, distance = diameter(grid)
        self.assertEqual(distance, brute)
        self.assertEqual(Distances(grid, start).distance_to(end), brute)

        path = longest_path(grid)
        self.assertEqual(len(path) - 1, brute)
        self.assertEqual((path[0], path[-1]), (start, end))

    def test_diameter_simple_maze(self):
        grid = self.create_simple_maze()
        self.assertEqual(diameter(grid), (24, 0, 8))

    def test_as_array(self):
        grid = self.create_simple_maze()
        arr = Distances(grid, 0).as_array()
        self.assertEqual(arr.shape, (5, 5))
        self.assertEqual(arr[4, 4], 8)
        self.assertEqual(arr[2, 2], 4)
        self.assertEqual(arr[0, 1], -1)

    def test_strip(self):
        n = 12
        grid = Grid(1, n)
        generate("sidewinder", grid, seed=0)
        self.assertEqual(Distances(grid, 0).farthest(), (n - 1, n - 1))

if __name__ == '__main__':
    unittest.main()
