"""
Color palette for Shrinking Maze
"""

# Background colors
COLOR_BG = (26, 26, 46)           # Main background
COLOR_PATH = (26, 26, 46)         # Path cells (same as background)
COLOR_PANEL_BG = (14, 14, 30)     # Score bar background

# Maze
COLOR_WALL = (22, 33, 62)         # Wall cells
COLOR_WALL_EDGE = (40, 60, 110)   # Wall outline
COLOR_SHRINK_WARNING = (233, 69, 96)  # Pulsing cells about to solidify

# UI colors
COLOR_TEXT = (235, 235, 235)      # Normal text
COLOR_TEXT_DIM = (150, 150, 170)  # Dimmed text
COLOR_HIGHLIGHT = (76, 201, 240)  # Cyan highlights and effects
COLOR_OVERLAY = (0, 0, 0, 180)    # Screen overlays (with alpha)

# Entity colors
COLOR_PLAYER = (14, 173, 105)     # Player
COLOR_PLAYER_EYE = (255, 255, 255)
COLOR_GEM = (255, 119, 0)         # Gems

# Enemy colors
COLOR_ENEMY_CHASER = (233, 69, 96)     # Chasers
COLOR_ENEMY_WANDERER = (157, 78, 221)  # Wanderers
COLOR_ENEMY_FRIGHTENED = (102, 102, 170)  # While the player is invincible
COLOR_ENEMY_EYE = (255, 255, 255)
COLOR_ENEMY_PUPIL = (10, 10, 20)

# Power-up colors
COLOR_POWERUP_SPEED = (0, 255, 0)
COLOR_POWERUP_INVINCIBILITY = (255, 255, 0)
COLOR_POWERUP_GHOST = (170, 170, 255)

POWERUP_COLORS = {
    'speed': COLOR_POWERUP_SPEED,
    'invincibility': COLOR_POWERUP_INVINCIBILITY,
    'ghost': COLOR_POWERUP_GHOST,
}

ENEMY_COLORS = {
    'chaser': COLOR_ENEMY_CHASER,
    'wanderer': COLOR_ENEMY_WANDERER,
}
