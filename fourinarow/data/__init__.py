"""
fourinarow.data - Host-side storage for Four-in-a-Row

Settings, scores and finished games saved as JSON files by
fourinarow.data.data_manager.
"""

__all__ = []
