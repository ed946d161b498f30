"""
fourinarow.game - Board and game management for Four-in-a-Row

Board holds the grid and the rules. FourInARowGame and FourInARowEnv live in
fourinarow.game.rules, which depends on the AI package.
"""

from fourinarow.game.board import Board

__all__ = ['Board']
