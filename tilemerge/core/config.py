# -*- coding: utf-8 -*-
"""
Rule set configuration for the tile-merging game.
"""
from dataclasses import dataclass

# ##>: Default rule set: 4x4 grid, win on the 2048 tile, keep the five best scores.
GRID_SIZE = 4
WIN_TILE = 2048
HIGH_SCORE_LIMIT = 5
HIGH_SCORE_KEY = 'highScores'


@dataclass(frozen=True)
class GameConfiguration:
    """
    Rule set used by a game session.

    Parameters
    ----------
    size : int
        Side of the square grid.
    win_tile : int
        Tile value that ends the game with a win.
    high_score_limit : int
        Number of scores kept in the high-score table.
    """

    size: int = GRID_SIZE
    win_tile: int = WIN_TILE
    high_score_limit: int = HIGH_SCORE_LIMIT

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f'size must be >= 1, got {self.size}')
        if self.win_tile < 4 or self.win_tile & (self.win_tile - 1):
            raise ValueError(f'win_tile must be a power of two >= 4, got {self.win_tile}')
        if self.high_score_limit < 1:
            raise ValueError(f'high_score_limit must be >= 1, got {self.high_score_limit}')
