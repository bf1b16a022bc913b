"""High-score table stored as a JSON list in an external key-value store."""

import json
import logging
from collections.abc import MutableMapping

from tilemerge.core.config import HIGH_SCORE_KEY, HIGH_SCORE_LIMIT

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class HighScores:
    """
    Best final scores, highest first.

    Parameters
    ----------
    store : MutableMapping[str, str], optional
        Key-value store holding the serialized table (an in-memory dict by default).
    limit : int
        Number of scores kept.
    key : str
        Key of the table in the store.
    """

    def __init__(
        self, store: MutableMapping[str, str] | None = None, limit: int = HIGH_SCORE_LIMIT, key: str = HIGH_SCORE_KEY
    ):
        if limit < 1:
            raise ValueError(f'limit must be >= 1, got {limit}')
        self._store = store if store is not None else {}
        self._limit = limit
        self._key = key
        self._scores = self._load()

    @property
    def limit(self) -> int:
        """Number of scores kept."""
        return self._limit

    @property
    def scores(self) -> list[int]:
        """Kept scores, highest first."""
        return list(self._scores)

    def _load(self) -> list[int]:
        try:
            raw = self._store.get(self._key)
        except Exception:
            _logger.exception('Failed to read high scores under %r', self._key)
            return []
        if not raw:
            return []
        try:
            values = json.loads(raw)
            scores = sorted((int(value) for value in values), reverse=True)
        except (TypeError, ValueError) as error:
            _logger.warning('Ignoring unreadable high scores under %r: %s', self._key, error)
            return []
        return scores[: self._limit]

    def _save(self) -> None:
        try:
            self._store[self._key] = json.dumps(self._scores)
        except Exception:
            _logger.exception('Failed to save high scores under %r', self._key)

    def record(self, score: int) -> list[int]:
        """
        Add a final score to the table.

        Parameters
        ----------
        score : int
            Final score of a finished game.

        Returns
        -------
        list[int]
            The updated table, highest first.
        """
        if score < 0:
            raise ValueError(f'score must be >= 0, got {score}')
        self._scores = sorted([*self._scores, int(score)], reverse=True)[: self._limit]
        self._save()
        return self.scores

    def clear(self) -> None:
        """Forget every score."""
        self._scores = []
        self._save()
