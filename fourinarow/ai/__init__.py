"""
fourinarow.ai - Computer player for Four-in-a-Row

Import from the submodules (fourinarow.ai.heuristic, fourinarow.ai.utils);
they depend on fourinarow.game.board.
"""

__all__ = ['heuristic', 'utils']
