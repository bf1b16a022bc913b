"""
Grid engine of the tile-merging game: grid creation, moves, tile spawning and terminal detection.

Every function returns a new grid and never modifies the one it receives.

Grids are two-dimensional integer arrays. Plain lists of rows are accepted too; when their rows have different
lengths (ragged grids) only the cells that exist take part in spawning and in win or game over detection, and
horizontal moves keep the length of every row.
"""

from collections.abc import Sequence

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, asarray, int64, ndarray, ones, rot90, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

from tilemerge.core.config import GRID_SIZE, WIN_TILE
from tilemerge.core.gamemove import ACTIONS, can_move, resolve_direction

Grid = ndarray | Sequence[Sequence[int]]

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Pre-computed tile values and probabilities for fast sampling.
_TILE_VALUES = list(TILE_SPAWN_PROBS)
_TILE_PROBS = list(TILE_SPAWN_PROBS.values())

# ##>: Module-level generator, used when the caller injects none.
_GENERATOR = default_rng(PCG64DXSM())


def is_ragged(grid: Grid) -> bool:
    """Check if the rows of a grid have different lengths."""
    if isinstance(grid, ndarray):
        return False
    return len({len(row) for row in grid}) > 1


def as_board(grid: Grid) -> ndarray:
    """
    Copy a grid into a two-dimensional integer array.

    Parameters
    ----------
    grid : ndarray or sequence of rows
        The grid to normalise.

    Returns
    -------
    ndarray
        A new ``int64`` array of shape (rows, columns).

    Notes
    -----
    - Ragged rows are padded on the right with empty cells up to the widest row.
    - An empty sequence gives a (0, 0) array.
    """
    if isinstance(grid, ndarray) and grid.ndim == 2:
        return grid.astype(int64, copy=True)

    rows = [list(row) for row in grid]
    width = max((len(row) for row in rows), default=0)
    board = zeros((len(rows), width), dtype=int64)
    for i, row in enumerate(rows):
        board[i, : len(row)] = row
    return board


def _existing_cells(grid: Grid) -> tuple[ndarray, ndarray]:
    """Padded board and the mask of the cells that exist in the given rows."""
    board = as_board(grid)
    exists = ones(board.shape, dtype=bool)
    if is_ragged(grid):
        for i, row in enumerate(grid):
            exists[i, len(row) :] = False
    return board, exists


def _as_rows(grid: Grid) -> list[list[int]]:
    return [[int(value) for value in row] for row in grid]


def create_empty_grid(size: int = GRID_SIZE) -> ndarray:
    """Create a size x size grid of empty cells."""
    return zeros((max(size, 0), max(size, 0)), dtype=int64)


def add_random_tile(grid: Grid, rng: Generator | None = None) -> ndarray | list[list[int]]:
    """
    Spawn a tile (2 or 4) in one empty cell chosen uniformly at random.

    Parameters
    ----------
    grid : ndarray or sequence of rows
        The current grid. It is not modified.
    rng : Generator, optional
        Source of randomness. The module-level generator is used when omitted.

    Returns
    -------
    ndarray or list of rows
        A new grid with exactly one more tile, or an equal copy when the grid is full.
        Ragged grids come back as lists of rows of the same lengths.

    Notes
    -----
    New tiles have a 90% chance of being 2 and a 10% chance of being 4.
    """
    board, exists = _existing_cells(grid)
    result = _as_rows(grid) if is_ragged(grid) else board

    empty_cells = argwhere(exists & (board == 0))
    if len(empty_cells) == 0:
        return result

    generator = rng if rng is not None else _GENERATOR
    row, col = empty_cells[generator.integers(len(empty_cells))]
    result[row][col] = int(generator.choice(_TILE_VALUES, p=_TILE_PROBS))
    return result


def generate_initial_grid(size: int = GRID_SIZE, rng: Generator | None = None) -> ndarray:
    """Create an empty grid and spawn two tiles on it."""
    grid = create_empty_grid(size)
    grid = add_random_tile(grid, rng=rng)
    return add_random_tile(grid, rng=rng)


def merge_row(row: ndarray) -> tuple[int, ndarray]:
    """
    Collapse one row towards its start and compute the score of the merges.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the grid.

    Returns
    -------
    score : int
        The sum of the values produced by merges.
    merged_row : ndarray
        The non-empty cells after merging, without padding.

    Notes
    -----
    - Empty cells are removed before merging.
    - Pairs are merged in a single pass from the start of the row.
    - A tile produced by a merge never merges again in the same pass: ``[2, 2, 2]`` gives ``[4, 2]``.
    """
    non_zero = row[row != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = non_zero[i] * 2
            result.append(merged)
            score += int(merged)
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=row.dtype)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of the board to the left, merge adjacent cells and compute the score.

    Parameters
    ----------
    board : ndarray
        The grid represented as a 2D array.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        The board after sliding and merging, padded with empty cells on the right.

    Notes
    -----
    Rotate the board beforehand to slide in another direction.
    """
    result = zeros(board.shape, dtype=board.dtype)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row = merge_row(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


def _slide_rows(rows: Sequence[Sequence[int]], reverse: bool) -> tuple[list[list[int]], int]:
    """Horizontal move on a ragged grid: every row keeps its own length."""
    result = []
    score = 0
    for row in rows:
        line = asarray(row, dtype=int64)
        if reverse:
            line = line[::-1]
        score_row, merged_row = merge_row(line)
        padded = zeros(len(line), dtype=int64)
        padded[: len(merged_row)] = merged_row
        result.append((padded[::-1] if reverse else padded).tolist())
        score += score_row
    return result, score


def latent_state(grid: Grid, direction: str | int) -> tuple[ndarray | list[list[int]], int]:
    """
    Apply a move without spawning a new tile.

    Parameters
    ----------
    grid : ndarray or sequence of rows
        The current grid.
    direction : str or int
        The direction (``left``, ``up``, ``right``, ``down`` or 0 to 3).

    Returns
    -------
    new_grid : ndarray or list of rows
        The grid after sliding and merging.
    score : int
        The score gained by the merges.

    Raises
    ------
    ValueError
        If the direction is unknown.

    Notes
    -----
    On a ragged grid, left and right moves keep every row length and return lists of rows, while up and down
    moves work on the padded board.
    """
    action = resolve_direction(direction)
    if action in (ACTIONS['left'], ACTIONS['right']) and is_ragged(grid):
        return _slide_rows(grid, reverse=action == ACTIONS['right'])

    rotated = rot90(as_board(grid), k=action)
    score, updated = slide_and_merge(rotated)
    return rot90(updated, k=-action).copy(), score


def move_grid(grid: Grid, direction: str | int, rng: Generator | None = None) -> tuple[ndarray | list[list[int]], int]:
    """
    Apply a move and spawn a new tile when the move changed the grid.

    Parameters
    ----------
    grid : ndarray or sequence of rows
        The current grid. It is not modified.
    direction : str or int
        The direction (``left``, ``up``, ``right``, ``down`` or 0 to 3).
    rng : Generator, optional
        Source of randomness for the spawned tile.

    Returns
    -------
    new_grid : ndarray or list of rows
        The grid after the move and the spawn.
    score : int
        The score gained by the merges of this move.

    Raises
    ------
    ValueError
        If the direction is unknown.

    Notes
    -----
    A move that changes nothing returns an equal grid, a score of 0, and spawns no tile.
    """
    action = resolve_direction(direction)
    if is_ragged(grid):
        new_grid, score = latent_state(grid, action)
        if _as_rows(new_grid) != _as_rows(grid):
            new_grid = add_random_tile(new_grid, rng=rng)
        return new_grid, score

    board = as_board(grid)
    rotated = rot90(board, k=action)
    if not can_move(rotated):
        return board, 0

    score, updated = slide_and_merge(rotated)
    return add_random_tile(rot90(updated, k=-action), rng=rng), score


def check_win(grid: Grid, win_tile: int = WIN_TILE) -> bool:
    """Check if any cell holds the winning tile."""
    board, exists = _existing_cells(grid)
    return bool(np_any(exists & (board == win_tile)))


def check_game_over(grid: Grid) -> bool:
    """
    Check if no move can change the grid.

    Parameters
    ----------
    grid : ndarray or sequence of rows
        The current grid.

    Returns
    -------
    bool
        True if the game is over, False otherwise.

    Notes
    -----
    - The game is over when there are no empty cells AND no adjacent cells have the same value.
    - On a ragged grid, only cells that exist on both sides of a pair are compared.
    """
    state, exists = _existing_cells(grid)
    horizontal = exists[:, :-1] & exists[:, 1:] & (state[:, :-1] == state[:, 1:])
    vertical = exists[:-1] & exists[1:] & (state[:-1] == state[1:])
    return bool(np_all(state[exists] != 0) and not np_any(horizontal) and not np_any(vertical))


def max_tile(grid: Grid) -> int:
    """Highest tile on the grid, 0 when the grid is empty."""
    state = as_board(grid)
    return int(state.max()) if state.size else 0
