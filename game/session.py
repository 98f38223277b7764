"""
Game session - owns one game's worth of mutable state and runs the tick

Everything the core knows lives here: the maze, the shrink engine, the
entities and the score. The pygame layer only calls start/restart/tick and
reads snapshot().
"""

import logging
import random

from utils.constants import (
    GRID_WIDTH, GRID_HEIGHT, CELL_SIZE, STEP_MS, NUM_GEMS,
    VICTORY_DELAY_MS
)
from maze.generator import generate_maze
from maze.maze_core import ActiveBounds
from maze.shrink import ShrinkEngine
from entities.player import Player
from entities.enemy import EnemyManager
from entities.gem import GemManager
from entities.powerup import PowerUpManager
from game.collision import CollisionHandler
from game.events import EventType, GameEvent
from game.game_state import GameState, GameStateManager, TransitionAction

logger = logging.getLogger(__name__)


class GameSession:
    """
    Aggregate of all game state, driven one fixed step at a time
    """
    def __init__(self, width=GRID_WIDTH, height=GRID_HEIGHT, cell_size=CELL_SIZE,
                 rng=None, seed=None):
        if rng is None:
            rng = random.Random(seed)
        self.rng = rng
        self.seed = seed
        self.width = width
        self.height = height
        self.cell_size = cell_size

        self.state_manager = GameStateManager()
        self.collision_handler = CollisionHandler()
        self.enemy_manager = EnemyManager()
        self.gem_manager = GemManager()
        self.powerup_manager = PowerUpManager()

        self.grid = None
        self.bounds = None
        self.shrink_engine = None
        self.player = None
        self.score = 0
        self.ticks = 0
        self.events = []

        self._build_maze(0)

    # ========== LIFECYCLE ==========

    def _build_maze(self, now_ms):
        """Generate a maze and place every entity on it"""
        self.grid = generate_maze(self.width, self.height, rng=self.rng, cell_size=self.cell_size)
        self.bounds = ActiveBounds.full(self.grid)
        if self.shrink_engine is None:
            self.shrink_engine = ShrinkEngine(self.grid, self.bounds, now_ms=now_ms)
        else:
            self.shrink_engine.reset(self.grid, self.bounds, now_ms)

        self.player = Player.at_start(self.cell_size)
        self.gem_manager.place_gems(self.grid, self.bounds, self.rng)
        self.powerup_manager.place_powerups(self.grid, self.gem_manager, self.rng)
        self.enemy_manager.place_enemies(self.grid, self.bounds, self.rng)

    def regenerate(self, now_ms):
        """New maze, same score"""
        self.state_manager.cancel_pending()
        self._build_maze(now_ms)
        logger.info("Maze regenerated (score %d)", self.score)

    def start_game(self, now_ms):
        """Fresh game from zero"""
        self.score = 0
        self.regenerate(now_ms)
        self.state_manager.transition_to(GameState.PLAYING)
        self._emit(EventType.GAME_STARTED)
        return self._drain_events()

    def restart_level(self, now_ms):
        """Quick restart while playing: new maze, score kept"""
        if not self.state_manager.is_playing():
            return []
        self.regenerate(now_ms)
        self._emit(EventType.GAME_STARTED, restart=True)
        return self._drain_events()

    def handle_start_trigger(self, now_ms):
        """Start/continue from the title or game-over screen"""
        if not self.state_manager.can_start():
            return []
        return self.start_game(now_ms)

    # ========== TICK ==========

    def tick(self, now_ms, intent=(0, 0), dt_ms=STEP_MS):
        """
        Advance the game by one fixed step

        Args:
            now_ms: Wall clock in milliseconds (drives shrink firing and
                delayed transitions)
            intent: Normalized (dx, dy) from the input layer
            dt_ms: Step length used for the warning countdowns

        Returns:
            List of GameEvent produced this tick
        """
        action = self.state_manager.pop_due(now_ms)
        if action is TransitionAction.REGENERATE:
            self.regenerate(now_ms)

        if not self.state_manager.is_playing():
            return self._drain_events()

        self.ticks += 1
        self._update_player(intent)
        if self.state_manager.is_playing():
            self.enemy_manager.update(self.grid, self.player, self.rng)
            self.powerup_manager.update()
            self._update_shrink(now_ms, dt_ms)
            self._check_gems(now_ms)

        return self._drain_events()

    def _update_player(self, intent):
        player = self.player
        player.set_intent(*intent)
        player.move(self.grid)

        for kind in player.tick_power_ups():
            self._emit(EventType.POWERUP_EXPIRED, player.x, player.y, kind=kind)

        hits = self.collision_handler.check_player(
            player, self.gem_manager, self.powerup_manager, self.enemy_manager
        )

        for gem in hits['gems']:
            self.gem_manager.remove(gem)
            self.score += 1
            self._emit(EventType.GEM_COLLECTED, gem.x, gem.y, score=self.score)

        for powerup in hits['powerups']:
            kind = self.powerup_manager.collect(powerup, player)
            self._emit(EventType.POWERUP_COLLECTED, powerup.x, powerup.y, kind=kind)

        if hits['enemy'] is not None and not player.is_invincible():
            self._emit(EventType.ENEMY_COLLISION, player.x, player.y)
            self._game_over()

    def _update_shrink(self, now_ms, dt_ms):
        engine = self.shrink_engine
        self.events.extend(engine.update_markers(dt_ms))

        if not engine.should_fire(now_ms):
            return

        result = engine.fire(now_ms)
        if result.halted:
            if len(self.gem_manager) == 0:
                self._victory(now_ms, reason='maze_minimum')
            return

        self._emit(EventType.LEVEL_SHRINK_BEGAN, cells=len(result.markers))

        powerup = self.powerup_manager.spawn_at_center(self.grid, self.bounds, self.rng)
        if powerup is not None:
            self._emit(EventType.POWERUP_SPAWNED, powerup.x, powerup.y, kind=powerup.type)

    def _check_gems(self, now_ms):
        """Refill gems once the last one is taken, or declare victory"""
        if len(self.gem_manager) > 0 or self.state_manager.pending is not None:
            return

        placed = self.gem_manager.place_gems(self.grid, self.bounds, self.rng)
        if placed == 0:
            self._victory(now_ms, reason='no_room')
            return

        self._emit(EventType.GEMS_REPLENISHED, self.player.x, self.player.y, count=placed)

        if self.score % NUM_GEMS == 0:
            enemy = self.enemy_manager.spawn_reinforcement(self.grid, self.bounds, self.rng)
            if enemy is not None:
                logger.debug("Reinforcement spawned: %s", enemy)

    def _victory(self, now_ms, reason):
        if not self.state_manager.schedule(TransitionAction.REGENERATE, now_ms + VICTORY_DELAY_MS):
            return
        logger.info("Victory (%s) with score %d", reason, self.score)
        self._emit(EventType.VICTORY, score=self.score, reason=reason)

    def _game_over(self):
        self.state_manager.cancel_pending()
        self.state_manager.transition_to(GameState.GAME_OVER)
        logger.info("Game over with score %d", self.score)
        self._emit(EventType.GAME_OVER, self.player.x, self.player.y, score=self.score)

    # ========== QUERIES ==========

    def is_player_trapped(self):
        """No open cell next to the player (shown as a restart prompt)"""
        gx, gy = self.grid.cell_at_pixel(self.player.x, self.player.y)
        return len(self.grid.neighbors_open(gx, gy)) == 0

    @property
    def state(self):
        return self.state_manager.current_state

    @property
    def victory_pending(self):
        return self.state_manager.pending is not None

    def snapshot(self):
        """Read-only view of everything the renderer needs"""
        return {
            'grid': self.grid.to_rows(),
            'cell_size': self.grid.cell_size,
            'bounds': self.bounds.as_dict(),
            'shrinking_walls': [
                {'x': w.x, 'y': w.y, 'remaining': w.remaining_fraction}
                for w in self.shrink_engine.shrinking_walls
            ],
            'player': self.player.snapshot(),
            'enemies': [e.snapshot() for e in self.enemy_manager],
            'gems': [{'x': g.x, 'y': g.y, 'size': g.size, 'angle': g.angle}
                     for g in self.gem_manager],
            'powerups': [p.snapshot() for p in self.powerup_manager],
            'score': self.score,
            'state': self.state_manager.get_state_name().lower(),
            'trapped': self.state_manager.is_playing() and self.is_player_trapped(),
            'victory_pending': self.victory_pending,
        }

    # ========== EVENTS ==========

    def _emit(self, event_type, x=None, y=None, **data):
        self.events.append(GameEvent(event_type, x, y, **data))

    def _drain_events(self):
        events = self.events
        self.events = []
        return events

    def __repr__(self):
        return f"GameSession(state={self.state.name}, score={self.score}, grid={self.grid})"
