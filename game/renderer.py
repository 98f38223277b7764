"""
Board renderer - draws a GameSession snapshot onto a pygame surface

Only reads the snapshot dict; never touches core objects directly.
"""

import math

import pygame

from utils.constants import PATH, POWERUP_DURATIONS
from utils.colors import (
    COLOR_BG, COLOR_PATH, COLOR_WALL, COLOR_WALL_EDGE, COLOR_SHRINK_WARNING,
    COLOR_GEM, COLOR_PLAYER, COLOR_PLAYER_EYE, COLOR_ENEMY_FRIGHTENED,
    COLOR_ENEMY_EYE, COLOR_ENEMY_PUPIL, COLOR_POWERUP_INVINCIBILITY,
    POWERUP_COLORS, ENEMY_COLORS
)
from utils.helpers import color_lerp, pulse


class BoardRenderer:
    """
    Draws the maze and everything on it at native resolution
    """
    def __init__(self):
        self.time = 0.0  # Seconds, drives pulsing

    def update(self, dt):
        self.time += dt

    def render(self, surface, snapshot):
        """
        Draw one frame of the board

        Args:
            surface: Target surface sized to the board in pixels
            snapshot: Dict from GameSession.snapshot()
        """
        surface.fill(COLOR_BG)
        cell = snapshot['cell_size']
        invincible = snapshot['player']['power_ups'].get('invincibility', 0) > 0

        self._draw_grid(surface, snapshot['grid'], cell)
        self._draw_shrinking_walls(surface, snapshot['shrinking_walls'], cell)

        for gem in snapshot['gems']:
            self._draw_gem(surface, gem)
        for powerup in snapshot['powerups']:
            self._draw_powerup(surface, powerup)
        for enemy in snapshot['enemies']:
            self._draw_enemy(surface, enemy, invincible)

        self._draw_player(surface, snapshot['player'])

    # ========== MAZE ==========

    def _draw_grid(self, surface, rows, cell):
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                rect = (x * cell, y * cell, cell, cell)
                if value == PATH:
                    pygame.draw.rect(surface, COLOR_PATH, rect)
                else:
                    pygame.draw.rect(surface, COLOR_WALL, rect)
                    pygame.draw.rect(surface, COLOR_WALL_EDGE, rect, 1)

    def _draw_shrinking_walls(self, surface, walls, cell):
        """Warning cells pulse faster and redder as they run out"""
        for wall in walls:
            urgency = 1.0 - wall['remaining']
            glow = pulse(self.time, 2.0 + urgency * 6.0)
            color = color_lerp(COLOR_WALL, COLOR_SHRINK_WARNING, 0.4 + 0.6 * glow * (0.5 + urgency / 2))

            overlay = pygame.Surface((cell, cell), pygame.SRCALPHA)
            overlay.fill((*color, int(120 + 120 * urgency)))
            surface.blit(overlay, (wall['x'] * cell, wall['y'] * cell))

    # ========== PICKUPS ==========

    def _draw_gem(self, surface, gem):
        half = gem['size'] / 2
        spin = gem['angle'] + self.time * 2
        points = []
        for i in range(4):
            a = spin + i * math.pi / 2
            points.append((gem['x'] + math.cos(a) * half, gem['y'] + math.sin(a) * half))
        pygame.draw.polygon(surface, COLOR_GEM, points)
        pygame.draw.polygon(surface, (255, 200, 120), points, 1)

    def _draw_powerup(self, surface, powerup):
        color = POWERUP_COLORS[powerup['type']]
        radius = max(2, int(powerup['size'] / 2 * powerup.get('pulse', 1.0)))
        center = (int(powerup['x']), int(powerup['y']))

        # Soft halo
        halo = pygame.Surface((radius * 4, radius * 4), pygame.SRCALPHA)
        pygame.draw.circle(halo, (*color, 60), (radius * 2, radius * 2), radius * 2)
        surface.blit(halo, (center[0] - radius * 2, center[1] - radius * 2))

        pygame.draw.circle(surface, color, center, radius)

        # Type glyph
        x, y = center
        r = radius * 0.6
        if powerup['type'] == 'speed':
            pygame.draw.polygon(surface, COLOR_BG, [(x - r, y - r), (x + r, y), (x - r, y + r)])
        elif powerup['type'] == 'invincibility':
            pygame.draw.circle(surface, COLOR_BG, center, int(r), 2)
        else:
            pygame.draw.line(surface, COLOR_BG, (x - r, y), (x + r, y), 2)

    # ========== ENEMIES ==========

    def _draw_enemy(self, surface, enemy, frightened):
        x, y = enemy['x'], enemy['y']
        size = enemy['size']
        color = COLOR_ENEMY_FRIGHTENED if frightened else ENEMY_COLORS[enemy['variant']]

        rect = pygame.Rect(0, 0, int(size), int(size))
        rect.center = (int(x), int(y))
        if enemy['variant'] == 'chaser':
            pygame.draw.rect(surface, color, rect, border_radius=int(size / 4))
        else:
            pygame.draw.ellipse(surface, color, rect)

        self._draw_enemy_eyes(surface, enemy)

    def _draw_enemy_eyes(self, surface, enemy):
        x, y = enemy['x'], enemy['y']
        size = enemy['size']
        eye_r = max(2, int(size * 0.15))
        offset_x = size * 0.2
        eye_y = y - size * 0.1

        for side in (-1, 1):
            ex = int(x + side * offset_x)
            if enemy['blinking']:
                pygame.draw.line(surface, COLOR_ENEMY_EYE, (ex - eye_r, int(eye_y)), (ex + eye_r, int(eye_y)), 2)
                continue
            pygame.draw.circle(surface, COLOR_ENEMY_EYE, (ex, int(eye_y)), eye_r)
            px = ex + math.cos(enemy['eye_angle']) * eye_r * 0.5
            py = eye_y + math.sin(enemy['eye_angle']) * eye_r * 0.5
            pygame.draw.circle(surface, COLOR_ENEMY_PUPIL, (int(px), int(py)), max(1, eye_r // 2))

    # ========== PLAYER ==========

    def _draw_player(self, surface, player):
        size = player['size']
        power_ups = player['power_ups']
        ghost = power_ups.get('ghost', 0) > 0
        alpha = 128 if ghost else 255

        # Trail, oldest faintest
        trail = player['trail']
        for i, (tx, ty) in enumerate(trail):
            fade = (i + 1) / (len(trail) + 1)
            radius = max(1, int(size / 2 * fade))
            dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*COLOR_PLAYER, int(alpha * fade * 0.5)), (radius, radius), radius)
            surface.blit(dot, (int(tx) - radius, int(ty) - radius))

        # Body on its own surface so ghost mode can fade it
        extent = int(size) + 8
        body = pygame.Surface((extent, extent), pygame.SRCALPHA)
        mid = extent // 2
        pygame.draw.circle(body, (*COLOR_PLAYER, alpha), (mid, mid), int(size / 2))

        # Facing indicator
        angle = player['angle']
        eye_x = mid + math.cos(angle) * size * 0.25
        eye_y = mid + math.sin(angle) * size * 0.25
        pygame.draw.circle(body, (*COLOR_PLAYER_EYE, alpha), (int(eye_x), int(eye_y)), max(2, int(size * 0.12)))

        # Speed streaks
        if power_ups.get('speed', 0) > 0 and (player['vx'] or player['vy']):
            back = angle + math.pi
            for spread in (-0.4, 0, 0.4):
                sx = mid + math.cos(back + spread) * size * 0.5
                sy = mid + math.sin(back + spread) * size * 0.5
                ex = mid + math.cos(back + spread) * size * 0.7
                ey = mid + math.sin(back + spread) * size * 0.7
                pygame.draw.line(body, (*POWERUP_COLORS['speed'], alpha), (sx, sy), (ex, ey), 1)

        surface.blit(body, (int(player['x']) - mid, int(player['y']) - mid))

        # Shield ring while invincible, flickering in the last second
        frames_left = power_ups.get('invincibility', 0)
        if frames_left > 0:
            flicker = frames_left > POWERUP_DURATIONS['invincibility'] // 3 or int(self.time * 10) % 2 == 0
            if flicker:
                pygame.draw.circle(
                    surface, COLOR_POWERUP_INVINCIBILITY,
                    (int(player['x']), int(player['y'])), int(size / 2) + 3, 2
                )
