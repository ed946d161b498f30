"""
fourinarow.interfaces - User interfaces for Four-in-a-Row

Currently the command-line host in fourinarow.interfaces.cli.
"""

# Don't import anything here to avoid circular imports
__all__ = []
