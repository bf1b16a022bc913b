"""
Move utilities for the grid engine: direction resolution and legal move detection.
"""

from numpy import integer, ndarray, rot90

# ##: All Actions, valued by the number of quarter turns that bring the direction to the left.
ACTIONS = {'left': 0, 'up': 1, 'right': 2, 'down': 3}


def resolve_direction(direction: str | int) -> int:
    """
    Convert a direction name or action number into an action number.

    Parameters
    ----------
    direction : str or int
        Either one of ``left``, ``up``, ``right``, ``down`` or the matching action (0 to 3).

    Returns
    -------
    int
        The action (0: left, 1: up, 2: right, 3: down).

    Raises
    ------
    ValueError
        If the direction is unknown.
    """
    if isinstance(direction, str):
        action = ACTIONS.get(direction.strip().lower())
        if action is not None:
            return action
    elif isinstance(direction, (int, integer)) and not isinstance(direction, bool) and direction in ACTIONS.values():
        return int(direction)
    raise ValueError(f'Unknown direction: {direction!r}, expected one of {list(ACTIONS)}')


def can_move(board: ndarray) -> bool:
    """
    Check if any tile can move left on the given board.

    Parameters
    ----------
    board : ndarray
        The grid to check.

    Returns
    -------
    bool
        True if a left move changes the grid, False otherwise.

    Notes
    -----
    - Rotate the board by the action beforehand to test another direction.
    - A move is possible if an empty cell sits left of a tile, or if two adjacent tiles are equal.
    """
    left_cols = board[:, :-1]
    right_cols = board[:, 1:]

    # ##>: Empty cell left of a tile.
    if ((left_cols == 0) & (right_cols != 0)).any():
        return True

    # ##>: Two adjacent equal tiles.
    return bool(((left_cols != 0) & (left_cols == right_cols)).any())


def legal_actions(state: ndarray) -> list[int]:
    """
    Determine the actions that change the grid.

    Parameters
    ----------
    state : ndarray
        The current state of the grid.

    Returns
    -------
    list[int]
        A list of legal actions (0: left, 1: up, 2: right, 3: down).
    """
    return [action for action in ACTIONS.values() if can_move(rot90(state, k=action))]
