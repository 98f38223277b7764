"""
Game metadata
"""

GAME_TITLE = "Shrinking Maze"
GAME_VERSION = "1.0.0"
