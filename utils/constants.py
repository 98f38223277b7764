"""
Global constants for Shrinking Maze
"""

# Screen settings
CELL_SIZE = 32
GRID_WIDTH = 21   # Odd so the carver keeps a wall border
GRID_HEIGHT = 15
FPS = 60
STEP_MS = 1000.0 / FPS

# HUD panel height (score bar above the maze)
PANEL_H = 44

# Cell values
PATH = 0
WALL = 1

# Carving offsets on the 2-step lattice: N, S, W, E
CARVE_DIRS = [(0, -2), (0, 2), (-2, 0), (2, 0)]

# Single-step neighbor offsets: N, S, W, E
DIRS = [(0, -1), (0, 1), (-1, 0), (1, 0)]

# Maze generation
START_CELL = (1, 1)
CYCLE_FACTOR = 1.5
OPEN_AREA_CHANCE = 0.3

# Shrinking
SHRINK_INTERVAL_MS = 8000
SHRINK_WARNING_MS = 2000
MIN_SHRINK_SPAN = 7
SHRINK_POWERUP_CHANCE = 0.5
MAX_ACTIVE_POWERUPS = 3

# Collision
PADDING = 1e-6  # keeps a box flush with a wall face out of the wall cell

# Player settings
PLAYER_SPEED = CELL_SIZE / 6
PLAYER_SIZE = CELL_SIZE * 0.6
PLAYER_MAX_TRAIL = 5
SPEED_BOOST = 1.8

# Power-ups (durations in frames)
POWERUP_TYPES = ['speed', 'invincibility', 'ghost']
POWERUP_DURATIONS = {
    'speed': FPS * 5,
    'invincibility': FPS * 3,
    'ghost': FPS * 4,
}
POWERUP_SIZE = CELL_SIZE * 0.5

# Gems
NUM_GEMS = 20
GEM_SIZE = CELL_SIZE * 0.4

# Enemy settings
NUM_ENEMIES = 5
MAX_ENEMIES = 8
ENEMY_SPEED = PLAYER_SPEED * 0.5
CHASER_SPEED = ENEMY_SPEED * 1.1
WANDERER_SPEED = ENEMY_SPEED * 0.9
CHASER_SIZE = CELL_SIZE * 0.7
WANDERER_SIZE = CELL_SIZE * 0.65
CHASER_COOLDOWN = 0.5 * FPS
WANDERER_COOLDOWN = 1.5 * FPS
STUCK_COOLDOWN = 10
CHASER_SAFE_DISTANCE = 4
WANDERER_SAFE_DISTANCE = 3

# Timing
VICTORY_DELAY_MS = 3000
MAX_STEPS_PER_FRAME = 5
