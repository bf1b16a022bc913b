# -*- coding: utf-8 -*-
"""
Game session built on the grid engine.

This module provides the `GameSession` class, which keeps the grid, score and win or loss status of one player.
"""

from .session import GameEvent, GameSession, GameStatus

__all__ = ['GameEvent', 'GameSession', 'GameStatus']
