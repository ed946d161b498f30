"""
fourinarow - Four-in-a-Row on a 6x6 board against a heuristic computer player

This package provides the board engine, the computer player, a command-line
host, a gymnasium environment, and JSON storage for settings and scores.
"""

# Version number
__version__ = '0.1.0'
