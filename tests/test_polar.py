import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazes.algo.base import Algorithm
from mazes.algo.distances import Distances, diameter
from mazes.algo.generators import generate, is_spanning_tree
from mazes.core.cells import PolarCellIndex
from mazes.core.errors import InvalidDimensionsError, OutOfBoundsError
from mazes.core.polar import PolarGrid, ring_lengths


class TestPolarGrid(unittest.TestCase):
    def test_ring_lengths(self):
        self.assertEqual(ring_lengths(1), [1])
        self.assertEqual(ring_lengths(4), [1, 6, 12, 24])
        self.assertEqual(ring_lengths(5), [1, 6, 12, 24, 24])
        with self.assertRaises(InvalidDimensionsError):
            ring_lengths(0)

    def test_index(self):
        index = PolarCellIndex([1, 6, 12])
        self.assertEqual(index.size, 19)
        self.assertEqual(index.to_id(2, 3), 10)
        self.assertEqual(index.to_coordinate(10), (2, 3))
        self.assertEqual(index.to_coordinate(0), (0, 0))
        with self.assertRaises(OutOfBoundsError):
            index.to_id(1, 6)
        with self.assertRaises(OutOfBoundsError):
            index.to_coordinate(19)

    def test_centre_neighbours(self):
        grid = PolarGrid(4)
        self.assertEqual(len(grid), 43)
        self.assertEqual(grid.neighbors(0), [1, 2, 3, 4, 5, 6])
        self.assertEqual(grid.neighbors(0, PolarGrid.OUTWARD), [1, 2, 3, 4, 5, 6])
        self.assertEqual(grid.neighbors(0, PolarGrid.INWARD), [])

    def test_ring_neighbours(self):
        grid = PolarGrid(4)
        cell = grid.to_id(1, 0)
        # CW, CCW, INWARD, OUTWARD x2
        self.assertEqual(grid.neighbors(cell), [grid.to_id(1, 1), grid.to_id(1, 5), 0,
                                                grid.to_id(2, 0), grid.to_id(2, 1)])
        self.assertEqual(grid.neighbor(grid.to_id(2, 3), PolarGrid.INWARD), grid.to_id(1, 1))
        # Outermost ring has no outward neighbours
        self.assertEqual(grid.neighbors(grid.to_id(3, 0), PolarGrid.OUTWARD), [])

    def test_adjacency_is_symmetric(self):
        grid = PolarGrid(6)
        for cell in grid.cells():
            for n in grid.neighbors(cell):
                self.assertIn(cell, grid.neighbors(n))

    def test_biased_neighbors_do_not_wrap(self):
        grid = PolarGrid(3)
        last = grid.to_id(1, 5)
        self.assertEqual(grid.biased_neighbors(last), (0, None))
        self.assertEqual(grid.biased_neighbors(grid.to_id(1, 2)), (0, grid.to_id(1, 3)))
        self.assertEqual(grid.biased_neighbors(0), (None, None))

    def test_rows_of_cells(self):
        grid = PolarGrid(3)
        self.assertEqual(list(grid.rows_of_cells()), [[0], list(range(1, 7)), list(range(7, 19))])

    def test_every_algorithm_spans(self):
        for algo in Algorithm:
            with self.subTest(algo=algo.value):
                grid = PolarGrid(6)
                generate(algo, grid, seed=21)
                self.assertTrue(is_spanning_tree(grid))
                self.assertEqual(grid.link_count(), len(grid) - 1)

    def test_distances(self):
        grid = PolarGrid(5)
        generate("wilson", grid, seed=4)
        start, end, distance = diameter(grid)
        path = Distances(grid, start).path_to(end)
        self.assertEqual(len(path) - 1, distance)
        self.assertEqual(Distances(grid, 0).as_array().shape, (grid.size,))

if __name__ == '__main__':
    unittest.main()
