"""
Particle Effects System
Turns game events into short-lived visual particles
"""

import math
import random

import pygame

from game.events import EventType
from utils.colors import (
    COLOR_GEM, COLOR_PLAYER, COLOR_HIGHLIGHT, COLOR_WALL_EDGE
)


class Particle:
    """
    Single particle
    """
    def __init__(self, x, y, vx, vy, color, size, lifetime):
        """
        Args:
            x, y: Starting position (pixels)
            vx, vy: Velocity (pixels per frame at 60 FPS)
            color: RGB color
            size: Particle radius
            lifetime: How long particle lives (seconds)
        """
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.color = color
        self.size = size
        self.initial_size = size
        self.lifetime = lifetime
        self.max_lifetime = lifetime
        self.alive = True

    def update(self, dt):
        """Update particle"""
        if not self.alive:
            return

        self.x += self.vx * dt * 60
        self.y += self.vy * dt * 60

        self.lifetime -= dt
        if self.lifetime <= 0:
            self.alive = False
            return

        # Shrink as it fades
        self.size = self.initial_size * (self.lifetime / self.max_lifetime)

    def render(self, screen, offset=(0, 0)):
        """Render particle"""
        if not self.alive or self.size < 0.5:
            return

        alpha = int(255 * (self.lifetime / self.max_lifetime))
        alpha = max(0, min(255, alpha))
        color = (*self.color[:3], alpha)

        radius = max(1, int(self.size))
        surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(surf, color, (radius, radius), radius)
        screen.blit(surf, (int(self.x - radius + offset[0]), int(self.y - radius + offset[1])))


class ParticleSystem:
    """
    Manages all particles
    """
    def __init__(self):
        self.particles = []

    def add_particle(self, particle):
        """Add a particle"""
        self.particles.append(particle)

    def update(self, dt):
        """Update all particles"""
        for particle in self.particles:
            particle.update(dt)
        self.particles = [p for p in self.particles if p.alive]

    def render(self, screen, offset=(0, 0)):
        """Render all particles"""
        for particle in self.particles:
            particle.render(screen, offset)

    def clear(self):
        """Remove all particles"""
        self.particles.clear()

    def __len__(self):
        return len(self.particles)


class ParticleEffects:
    """
    Helper class to create common particle effects from game events
    """
    def __init__(self, particle_system, rng=random):
        """
        Args:
            particle_system: ParticleSystem instance
        """
        self.system = particle_system
        self.rng = rng
        # Delayed bursts for the victory celebration: [frames_left, x, y, color]
        self.scheduled = []

    def burst(self, x, y, color, count=10):
        """
        Radial burst at a pixel position

        Args:
            x, y: Pixel position
            color: Particle color
            count: Number of particles
        """
        for _ in range(count):
            angle = self.rng.uniform(0, 2 * math.pi)
            speed = self.rng.uniform(0.5, 2.5)

            particle = Particle(
                x, y,
                math.cos(angle) * speed,
                math.sin(angle) * speed,
                color,
                self.rng.uniform(2, 5),
                self.rng.uniform(20, 40) / 60
            )
            self.system.add_particle(particle)

    def celebrate(self, width, height, bursts=100, spacing_frames=2):
        """Queue bursts all over the board"""
        palette = (COLOR_GEM, COLOR_PLAYER, COLOR_HIGHLIGHT)
        for i in range(bursts):
            self.scheduled.append([
                i * spacing_frames,
                self.rng.uniform(0, width),
                self.rng.uniform(0, height),
                self.rng.choice(palette),
            ])

    def update(self):
        """Fire any queued bursts whose delay has run out"""
        remaining = []
        for entry in self.scheduled:
            entry[0] -= 1
            if entry[0] <= 0:
                self.burst(entry[1], entry[2], entry[3], count=5)
            else:
                remaining.append(entry)
        self.scheduled = remaining

    def handle_event(self, event, board_size):
        """
        Spawn the effect that goes with a game event

        Args:
            event: GameEvent
            board_size: (width, height) in pixels, for full-board effects
        """
        kind = event.type

        if kind == EventType.GEM_COLLECTED:
            self.burst(event.x, event.y, COLOR_GEM, 10)
        elif kind in (EventType.POWERUP_COLLECTED, EventType.POWERUP_SPAWNED):
            self.burst(event.x, event.y, COLOR_HIGHLIGHT, 15 if kind == EventType.POWERUP_COLLECTED else 10)
        elif kind == EventType.POWERUP_EXPIRED:
            self.burst(event.x, event.y, COLOR_HIGHLIGHT, 10)
        elif kind == EventType.WALL_SOLIDIFIED:
            self.burst(event.x, event.y, COLOR_WALL_EDGE, 5)
        elif kind == EventType.ENEMY_COLLISION:
            self.burst(event.x, event.y, COLOR_PLAYER, 20)
        elif kind == EventType.GEMS_REPLENISHED:
            self.burst(event.x, event.y, COLOR_GEM, 30)
        elif kind == EventType.VICTORY:
            self.celebrate(*board_size)
        elif kind == EventType.GAME_STARTED:
            self.scheduled = []
            self.system.clear()
