"""
Small math and formatting helpers shared by the core and the pygame layer
"""

import math


def clamp(value, low, high):
    """Pin value into [low, high]"""
    return max(low, min(value, high))


def sign(value):
    """-1, 0 or 1"""
    return (value > 0) - (value < 0)


def outside_square(cell, center, radius):
    """
    True if cell lies outside the square of the given radius around center

    Used to keep spawns away from the start cell.
    """
    return abs(cell[0] - center[0]) > radius or abs(cell[1] - center[1]) > radius


def circles_collide(x1, y1, r1, x2, y2, r2):
    """Strict overlap of two circles (touching does not count)"""
    return math.hypot(x2 - x1, y2 - y1) < r1 + r2


def color_lerp(color1, color2, t):
    """Blend two RGB colors, t clamped to 0-1"""
    t = clamp(t, 0.0, 1.0)
    return tuple(int(a + (b - a) * t) for a, b in zip(color1[:3], color2[:3]))


def pulse(time, frequency=1.0):
    """0-1 sine wave over time (seconds) at frequency Hz"""
    return (math.sin(time * frequency * math.tau) + 1) / 2


def format_score(score):
    """Score with thousands separator"""
    return f"{score:,}"
