"""Game session driving the grid engine: score, win and loss state, events and high scores."""

import logging
from collections.abc import Callable
from enum import Enum

from numpy import ndarray
from numpy.random import Generator, default_rng

from tilemerge.core.config import GameConfiguration
from tilemerge.core.gameboard import (
    check_game_over,
    check_win,
    create_empty_grid,
    generate_initial_grid,
    max_tile,
    move_grid,
)
from tilemerge.core.gamemove import ACTIONS, legal_actions, resolve_direction
from tilemerge.utils.scores import HighScores

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    """Lifecycle of a session."""

    NOT_STARTED = 'not_started'
    PLAYING = 'playing'
    WON = 'won'
    LOST = 'lost'


class GameEvent(str, Enum):
    """Notifications sent to listeners (sound, display) after a move."""

    GRID_CHANGED = 'grid_changed'
    WIN_REACHED = 'win_reached'
    GAME_OVER_REACHED = 'game_over_reached'


Listener = Callable[[GameEvent], None]


class GameSession:
    """
    Single-player game session.

    This class owns the state the grid engine leaves to its caller: the current grid, the cumulative score
    and the lifecycle status. Won and lost are terminal: moves are ignored until the session is restarted.
    """

    # ##: All Actions.
    ACTIONS = ACTIONS

    def __init__(
        self,
        config: GameConfiguration | None = None,
        high_scores: HighScores | None = None,
        seed: int | None = None,
        rng: Generator | None = None,
    ):
        """
        Initialize a session on the entry screen.

        Parameters
        ----------
        config : GameConfiguration, optional
            Rule set (default 4x4 grid, win on 2048).
        high_scores : HighScores, optional
            Table receiving final scores (an in-memory table by default).
        seed : int, optional
            Seed of the random generator, ignored when ``rng`` is given.
        rng : Generator, optional
            Source of randomness for spawned tiles.
        """
        self.config = config if config is not None else GameConfiguration()
        self.high_scores = high_scores if high_scores is not None else HighScores(limit=self.config.high_score_limit)
        self._rng = rng if rng is not None else default_rng(seed)
        self._listeners: list[Listener] = []

        self._grid = create_empty_grid(self.config.size)
        self._score = 0
        self._status = GameStatus.NOT_STARTED

    @property
    def observation(self) -> ndarray:
        """Copy of the current grid."""
        return self._grid.copy()

    @property
    def score(self) -> int:
        """Cumulative score of the current game."""
        return self._score

    @property
    def status(self) -> GameStatus:
        """Current lifecycle status."""
        return self._status

    @property
    def started(self) -> bool:
        """True once a game has been started from the entry screen."""
        return self._status is not GameStatus.NOT_STARTED

    @property
    def win(self) -> bool:
        """True when the current game is won."""
        return self._status is GameStatus.WON

    @property
    def game_over(self) -> bool:
        """True when the current game is lost."""
        return self._status is GameStatus.LOST

    @property
    def is_finished(self) -> bool:
        """True once the game is won or lost."""
        return self._status in (GameStatus.WON, GameStatus.LOST)

    @property
    def max_tile(self) -> int:
        """Highest tile on the current grid."""
        return max_tile(self._grid)

    @property
    def legal_moves(self) -> list[str]:
        """
        Directions that would change the current grid.

        Returns
        -------
        list[str]
            Direction names, empty unless the game is playing.
        """
        if self._status is not GameStatus.PLAYING:
            return []
        names = {action: name for name, action in ACTIONS.items()}
        return [names[action] for action in legal_actions(self._grid)]

    def subscribe(self, listener: Listener) -> None:
        """Register a callback receiving every ``GameEvent``."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a callback registered with ``subscribe``."""
        self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.exception('Listener %r failed on %s', listener, event.value)

    def start(self) -> ndarray:
        """
        Start a new game: fresh grid with two tiles and a score of 0.

        Returns
        -------
        ndarray
            The new grid.
        """
        self._grid = generate_initial_grid(self.config.size, rng=self._rng)
        self._score = 0
        self._status = GameStatus.PLAYING
        _logger.debug('New game started on a %dx%d grid', self.config.size, self.config.size)
        return self.observation

    def restart(self) -> ndarray:
        """Start again from a fresh grid, from any status."""
        return self.start()

    def go_home(self) -> None:
        """Leave the game for the entry screen."""
        self._grid = create_empty_grid(self.config.size)
        self._score = 0
        self._status = GameStatus.NOT_STARTED

    def move(self, direction: str | int) -> bool:
        """
        Apply a move to the current game.

        Parameters
        ----------
        direction : str or int
            The direction (``left``, ``up``, ``right``, ``down`` or 0 to 3).

        Returns
        -------
        bool
            True if the grid changed, False if the move was blocked or ignored.

        Raises
        ------
        ValueError
            If the direction is unknown.

        Notes
        -----
        - Moves are ignored unless the game is playing.
        - Win is checked before game over: a move that fills the board with the winning tile wins.
        - The final score goes to the high-score table once, when the game ends.
        """
        action = resolve_direction(direction)
        if self._status is not GameStatus.PLAYING:
            _logger.debug('Ignoring move %d while %s', action, self._status.value)
            return False

        previous = self._grid
        self._grid, gained = move_grid(previous, action, rng=self._rng)
        self._score += gained
        changed = bool((self._grid != previous).any())
        if changed:
            self._emit(GameEvent.GRID_CHANGED)

        if check_win(self._grid, win_tile=self.config.win_tile):
            self._finish(GameStatus.WON, GameEvent.WIN_REACHED)
        elif check_game_over(self._grid):
            self._finish(GameStatus.LOST, GameEvent.GAME_OVER_REACHED)
        return changed

    def _finish(self, status: GameStatus, event: GameEvent) -> None:
        self._status = status
        _logger.info('Game %s with score %d and max tile %d', status.value, self._score, self.max_tile)
        self.high_scores.record(self._score)
        self._emit(event)

    def render(self) -> None:
        """
        Render the grid. This method prints the current grid to the console.
        """
        for row in self._grid.tolist():
            print(' \t'.join(map(str, row)))
