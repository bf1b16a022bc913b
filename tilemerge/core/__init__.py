# -*- coding: utf-8 -*-
"""
Grid engine of the tile-merging game.

It includes functions for creating grids, sliding and merging tiles, spawning new tiles,
checking legal moves and detecting won or lost grids.
"""

from .config import GRID_SIZE, HIGH_SCORE_KEY, HIGH_SCORE_LIMIT, WIN_TILE, GameConfiguration
from .gameboard import (
    TILE_SPAWN_PROBS,
    add_random_tile,
    as_board,
    check_game_over,
    check_win,
    create_empty_grid,
    generate_initial_grid,
    is_ragged,
    latent_state,
    max_tile,
    merge_row,
    move_grid,
    slide_and_merge,
)
from .gamemove import ACTIONS, can_move, legal_actions, resolve_direction

__all__ = [
    'ACTIONS',
    'GRID_SIZE',
    'HIGH_SCORE_KEY',
    'HIGH_SCORE_LIMIT',
    'TILE_SPAWN_PROBS',
    'WIN_TILE',
    'GameConfiguration',
    'add_random_tile',
    'as_board',
    'can_move',
    'check_game_over',
    'check_win',
    'create_empty_grid',
    'generate_initial_grid',
    'is_ragged',
    'latent_state',
    'legal_actions',
    'max_tile',
    'merge_row',
    'move_grid',
    'resolve_direction',
    'slide_and_merge',
]
