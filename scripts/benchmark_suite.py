import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazes.core.grid import Grid
from mazes.core.polar import PolarGrid
from mazes.algo.base import Algorithm
from mazes.algo.generators import generate
from mazes.algo.distances import diameter
from mazes.core.complexity import MazePostProcessor

# Random walks get slow past ~40k cells; keep them off the big sizes
WALK_ALGORITHMS = (Algorithm.ALDOUS_BRODER, Algorithm.WILSON)
WALK_MAX_CELLS = 40_000


def benchmark_grid(label: str, make_grid):
    print(f"\n--- Benchmarking {label} ---")

    for algo in Algorithm:
        start_time = time.time()
        grid = make_grid()
        init_time = time.time() - start_time

        if algo in WALK_ALGORITHMS and grid.cell_count() > WALK_MAX_CELLS:
            print(f"{algo.value:<24} skipped ({grid.cell_count():,} cells)")
            continue

        gen_start = time.time()
        generate(algo, grid, seed=42)
        gen_time = time.time() - gen_start

        path_start = time.time()
        _, _, distance = diameter(grid)
        path_time = time.time() - path_start

        stats = MazePostProcessor.calculate_stats(grid)
        speed = grid.cell_count() / gen_time if gen_time > 0 else float('inf')
        print(f"{algo.value:<24} init {init_time:.4f}s | gen {gen_time:.4f}s ({speed:,.0f} cells/sec) | "
              f"diameter {distance} in {path_time:.4f}s | dead ends {stats['dead_end_percent']:.1f}%")


def run_suite():
    sizes = [
        (50, 50),
        (200, 200),     # 40k
        (400, 400),     # 160k
    ]

    for rows, cols in sizes:
        benchmark_grid(f"{rows}x{cols} ({rows * cols / 1e3:.1f}k cells)",
                       lambda rows=rows, cols=cols: Grid(rows, cols))

    benchmark_grid("polar, 40 rings", lambda: PolarGrid(40))


if __name__ == "__main__":
    run_suite()
