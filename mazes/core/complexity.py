import random
from typing import Dict, List, Optional

from mazes.core.grid import Grid


class MazePostProcessor:
    @staticmethod
    def dead_ends(grid: Grid) -> List[int]:
        """Cells with exactly one passage, in grid cell order."""
        return [cell for cell in grid.cells() if grid.degree(cell) == 1]

    @staticmethod
    def braid(grid: Grid, factor: float = 1.0, seed: Optional[int] = None) -> int:
        """
        Removes dead ends to create loops.
        factor: 0.0 = Remove NO dead ends (Perfect Maze)
                1.0 = Remove ALL dead ends (No dead ends)
        Only ever adds passages. Returns the number of dead ends removed.
        """
        if not 0.0 <= factor <= 1.0:
            raise ValueError(f"Braid factor must be within [0, 1], got {factor}")
        rng = random.Random(seed)

        dead_ends = MazePostProcessor.dead_ends(grid)
        rng.shuffle(dead_ends)

        # Number to remove
        target_remove = int(len(dead_ends) * factor)
        removed_count = 0

        for cell in dead_ends:
            if removed_count >= target_remove:
                break

            # Re-check if it's still a dead end (neighbor updates might have changed it)
            if grid.degree(cell) != 1:
                continue

            linked = grid.linked_neighbors(cell)
            closed_neighbors = [n for n in grid.neighbors(cell) if n not in linked]
            if not closed_neighbors:
                continue

            grid.link(cell, rng.choice(closed_neighbors))
            removed_count += 1

        return removed_count

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0
        junctions = 0
        isolated = 0

        for cell in grid.cells():
            degree = grid.degree(cell)
            if degree == 0: isolated += 1
            elif degree == 1: dead_ends += 1
            elif degree == 2: corridors += 1
            else: junctions += 1

        total = grid.cell_count()
        return {
            "cells": total,
            "links": grid.link_count(),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "isolated": isolated,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
