from __future__ import annotations

from typing import Dict, List

import numpy as np

from .board import GameBoard


class BoardAnalytics:
    """Helper class for measuring stack shape (heights, holes, bumpiness)"""

    @staticmethod
    def column_heights(grid: np.ndarray) -> List[int]:
        height = grid.shape[0]
        filled = grid != 0
        heights: List[int] = []
        for col in range(grid.shape[1]):
            rows = np.flatnonzero(filled[:, col])
            heights.append(height - int(rows[0]) if rows.size else 0)
        return heights

    @staticmethod
    def count_holes(grid: np.ndarray) -> int:
        holes = 0
        for col in range(grid.shape[1]):
            column = grid[:, col]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    @classmethod
    def get_board_features(cls, board: GameBoard) -> Dict[str, float]:
        grid = board.to_array()
        heights = cls.column_heights(grid)
        bumpiness = sum(abs(heights[i] - heights[i + 1]) for i in range(len(heights) - 1))
        return {
            "max_height": max(heights) if heights else 0,
            "avg_height": float(np.mean(heights)) if heights else 0.0,
            "holes": cls.count_holes(grid),
            "bumpiness": bumpiness,
            "filled_cells": int(np.count_nonzero(grid)),
            "fill_ratio": float(np.count_nonzero(grid)) / float(board.width * board.height),
        }
