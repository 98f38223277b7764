"""
UI Manager - handles all UI rendering (score bar, screens, prompts)
"""

import pygame
from utils.colors import (
    COLOR_TEXT, COLOR_TEXT_DIM, COLOR_HIGHLIGHT, COLOR_PANEL_BG, COLOR_OVERLAY,
    COLOR_GEM, COLOR_SHRINK_WARNING, POWERUP_COLORS
)
from utils.helpers import format_score
from utils.constants import POWERUP_TYPES, POWERUP_DURATIONS
from entities.powerup import POWERUP_NAMES
from config import GAME_TITLE


class UIManager:
    """
    Manages all UI rendering
    """
    def __init__(self):
        # Fonts
        self.font_small = None
        self.font_medium = None
        self.font_large = None
        self.font_title = None
        self._init_fonts()

    def _init_fonts(self):
        """Initialize fonts"""
        pygame.font.init()
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.font_medium = pygame.font.SysFont("consolas", 18)
        self.font_large = pygame.font.SysFont("consolas", 28, bold=True)
        self.font_title = pygame.font.SysFont("consolas", 48, bold=True)

    def draw_hud(self, screen, snapshot, sound_on, screen_w, panel_h):
        """
        Draw the score bar above the maze

        Args:
            screen: Pygame screen
            snapshot: Dict from GameSession.snapshot()
            sound_on: Whether audio is currently enabled
            screen_w: Screen width
            panel_h: Panel height
        """
        pygame.draw.rect(screen, COLOR_PANEL_BG, (0, 0, screen_w, panel_h))

        # Score (left)
        score = self.font_large.render(f"Gems: {format_score(snapshot['score'])}", True, COLOR_GEM)
        screen.blit(score, (10, (panel_h - score.get_height()) // 2))

        # Active power-ups (centre)
        self._draw_power_up_bars(screen, snapshot['player']['power_ups'], screen_w // 2 - 120, 6)

        # Sound indicator (right)
        label = "Sound: ON (M)" if sound_on else "Sound: OFF (M)"
        text = self.font_small.render(label, True, COLOR_TEXT if sound_on else COLOR_TEXT_DIM)
        screen.blit(text, (screen_w - text.get_width() - 10, (panel_h - text.get_height()) // 2))

    def _draw_power_up_bars(self, screen, power_ups, x, y, width=240, height=8):
        """One shrinking bar per active power-up"""
        row = 0
        for kind in POWERUP_TYPES:
            frames = power_ups.get(kind, 0)
            if frames <= 0:
                continue

            top = y + row * (height + 4)
            color = POWERUP_COLORS[kind]
            fraction = frames / POWERUP_DURATIONS[kind]

            pygame.draw.rect(screen, (40, 40, 60), (x, top, width, height), border_radius=3)
            pygame.draw.rect(screen, color, (x, top, int(width * fraction), height), border_radius=3)

            text = self.font_small.render(POWERUP_NAMES[kind], True, color)
            screen.blit(text, (x + width + 8, top - 4))
            row += 1

    def _draw_overlay(self, screen):
        screen_w, screen_h = screen.get_size()
        overlay = pygame.Surface((screen_w, screen_h), pygame.SRCALPHA)
        overlay.fill(COLOR_OVERLAY)
        screen.blit(overlay, (0, 0))

    def _draw_centered(self, screen, lines, start_y, gap):
        screen_w = screen.get_width()
        for i, (font, text, color) in enumerate(lines):
            surf = font.render(text, True, color)
            rect = surf.get_rect(center=(screen_w // 2, start_y + i * gap))
            screen.blit(surf, rect)

    def draw_start_screen(self, screen):
        """Title screen with controls"""
        self._draw_overlay(screen)
        screen_h = screen.get_height()

        self._draw_centered(screen, [
            (self.font_title, GAME_TITLE.upper(), COLOR_HIGHLIGHT),
            (self.font_medium, "Collect the gems before the walls close in", COLOR_TEXT),
        ], screen_h // 2 - 90, 50)

        self._draw_centered(screen, [
            (self.font_small, "Arrows / WASD: Move", COLOR_TEXT_DIM),
            (self.font_small, "R: Restart maze | M: Sound | ESC: Quit", COLOR_TEXT_DIM),
            (self.font_medium, "Press any key to start", COLOR_TEXT),
        ], screen_h // 2 + 20, 28)

    def draw_game_over(self, screen, score):
        """Draw game over screen"""
        self._draw_overlay(screen)
        screen_h = screen.get_height()

        self._draw_centered(screen, [
            (self.font_title, "GAME OVER", (255, 100, 100)),
            (self.font_large, f"Gems collected: {format_score(score)}", COLOR_GEM),
            (self.font_medium, "Press any key to play again", COLOR_TEXT_DIM),
        ], screen_h // 2 - 50, 55)

    def draw_victory(self, screen):
        """Banner while the next maze is on its way"""
        screen_w, screen_h = screen.get_size()
        banner = pygame.Surface((screen_w, 90), pygame.SRCALPHA)
        banner.fill((0, 0, 0, 150))
        screen.blit(banner, (0, screen_h // 2 - 45))

        self._draw_centered(screen, [
            (self.font_title, "MAZE CLEARED!", (100, 255, 150)),
            (self.font_small, "A new maze is coming...", COLOR_TEXT),
        ], screen_h // 2 - 12, 40)

    def draw_trapped(self, screen):
        """Prompt shown when the walls have closed around the player"""
        screen_w, screen_h = screen.get_size()
        text = self.font_large.render("Trapped! Press 'R'", True, COLOR_SHRINK_WARNING)
        rect = text.get_rect(center=(screen_w // 2, screen_h - 30))
        box = rect.inflate(24, 12)
        pygame.draw.rect(screen, COLOR_PANEL_BG, box, border_radius=8)
        pygame.draw.rect(screen, COLOR_SHRINK_WARNING, box, 2, border_radius=8)
        screen.blit(text, rect)
