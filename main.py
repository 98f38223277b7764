"""
Shrinking Maze
Collect gems, dodge enemies and outlast the closing walls
"""

import argparse
import logging
import os
import sys

os.environ.setdefault('SDL_VIDEO_ALLOW_SCREENSAVER', '1')

import pygame

from game.session import GameSession
from game.game_state import GameState
from game.ui_manager import UIManager
from game.renderer import BoardRenderer
from game.audio import SoundBoard
from game.clock import FixedStepClock
from game.input import intent_from_keys
from entities.particle import ParticleSystem, ParticleEffects
from utils.constants import FPS, PANEL_H, GRID_WIDTH, GRID_HEIGHT, CELL_SIZE
from utils.colors import COLOR_BG
from config import GAME_TITLE, GAME_VERSION

logger = logging.getLogger(__name__)


class ShrinkingMazeGame:
    """
    Main game class
    """
    def __init__(self, seed=None, mute=False):
        pygame.init()

        self.session = GameSession(GRID_WIDTH, GRID_HEIGHT, CELL_SIZE, seed=seed)

        # Managers
        self.ui_manager = UIManager()
        self.renderer = BoardRenderer()
        self.sound_board = SoundBoard(enabled=not mute)
        self.sound_board.init()

        # Visual effects
        self.particle_system = ParticleSystem()
        self.particle_effects = ParticleEffects(self.particle_system)

        # Native layout: score bar on top, board below, scaled to the window
        self.board_w = self.session.grid.pixel_width
        self.board_h = self.session.grid.pixel_height
        self.native = pygame.Surface((self.board_w, self.board_h + PANEL_H))
        self.board = pygame.Surface((self.board_w, self.board_h))

        self.screen = None
        self._create_screen(self.board_w, self.board_h + PANEL_H)

        self.clock = pygame.time.Clock()
        self.step_clock = FixedStepClock(FPS)
        self.running = True

    def _create_screen(self, width, height):
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(f"{GAME_TITLE} v{GAME_VERSION}")

    # ========== INPUT ==========

    def handle_events(self, now_ms):
        """Handle input events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.VIDEORESIZE:
                self._create_screen(max(200, event.w), max(150, event.h))
                continue

            if event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key, now_ms)

    def _handle_keydown(self, key, now_ms):
        """Handle key press based on current state"""
        if key == pygame.K_ESCAPE:
            self.running = False
            return

        if key == pygame.K_m:
            self.sound_board.toggle()
            return

        if self.session.state_manager.can_start():
            self._dispatch(self.session.handle_start_trigger(now_ms))
        elif key == pygame.K_r:
            self._dispatch(self.session.restart_level(now_ms))

    # ========== UPDATE ==========

    def update(self, now_ms):
        """Run however many fixed steps are due"""
        steps = self.step_clock.advance(now_ms)
        intent = intent_from_keys(pygame.key.get_pressed())

        for _ in range(steps):
            self._dispatch(self.session.tick(now_ms, intent))
            self.particle_effects.update()
            self.particle_system.update(1.0 / FPS)
            self.sound_board.update()
            self.renderer.update(1.0 / FPS)

    def _dispatch(self, events):
        """Hand core events to the effect and sound layers"""
        for event in events:
            logger.debug("Event %r", event)
            self.particle_effects.handle_event(event, (self.board_w, self.board_h))
            self.sound_board.handle_event(event)

    # ========== RENDER ==========

    def render(self):
        snapshot = self.session.snapshot()

        self.renderer.render(self.board, snapshot)
        self.particle_system.render(self.board)

        self.native.fill(COLOR_BG)
        self.native.blit(self.board, (0, PANEL_H))
        self.ui_manager.draw_hud(
            self.native, snapshot, self.sound_board.enabled and self.sound_board.available,
            self.board_w, PANEL_H
        )

        states = self.session.state_manager
        if states.is_state(GameState.START):
            self.ui_manager.draw_start_screen(self.native)
        elif states.is_state(GameState.GAME_OVER):
            self.ui_manager.draw_game_over(self.native, snapshot['score'])
        elif snapshot['victory_pending']:
            self.ui_manager.draw_victory(self.native)
        elif snapshot['trapped']:
            self.ui_manager.draw_trapped(self.native)

        self._present()

    def _present(self):
        """Scale the native frame into the window, keeping aspect ratio"""
        screen_w, screen_h = self.screen.get_size()
        native_w, native_h = self.native.get_size()
        scale = min(screen_w / native_w, screen_h / native_h)
        target = (max(1, int(native_w * scale)), max(1, int(native_h * scale)))

        self.screen.fill(COLOR_BG)
        if target == (native_w, native_h):
            frame = self.native
        else:
            frame = pygame.transform.smoothscale(self.native, target)
        self.screen.blit(frame, ((screen_w - target[0]) // 2, (screen_h - target[1]) // 2))
        pygame.display.flip()

    def run(self):
        """Main game loop"""
        while self.running:
            self.clock.tick(FPS)
            now_ms = pygame.time.get_ticks()

            self.handle_events(now_ms)
            if not self.running:
                break
            self.update(now_ms)
            self.render()

        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"{GAME_TITLE} v{GAME_VERSION}")
    parser.add_argument('--seed', type=int, default=None, help="seed for reproducible mazes")
    parser.add_argument('--mute', action='store_true', help="start with sound off")
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="logging level (default: WARNING)")
    parser.add_argument('--debug', action='store_true', help="shortcut for --log-level DEBUG")
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point"""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = ShrinkingMazeGame(seed=args.seed, mute=args.mute)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
