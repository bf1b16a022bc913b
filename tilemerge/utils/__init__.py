# -*- coding: utf-8 -*-
"""
Utilities around the game: the high-score table.
"""

from .scores import HighScores

__all__ = ['HighScores']
