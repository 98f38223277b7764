"""
Input normalization - many keys in, one direction out
"""


def normalize_intent(left=False, right=False, up=False, down=False):
    """
    Collapse directional flags into a single (dx, dy)

    Right beats left, down beats up, and horizontal movement cancels
    vertical so the result is never diagonal.
    """
    dx = 0
    dy = 0

    if left:
        dx = -1
    if right:
        dx = 1
    if up:
        dy = -1
    if down:
        dy = 1

    if dx != 0:
        dy = 0
    return dx, dy


def intent_from_keys(pressed):
    """
    Direction from a pygame key state (pygame.key.get_pressed())

    Arrow keys and WASD.
    """
    import pygame

    return normalize_intent(
        left=pressed[pygame.K_LEFT] or pressed[pygame.K_a],
        right=pressed[pygame.K_RIGHT] or pressed[pygame.K_d],
        up=pressed[pygame.K_UP] or pressed[pygame.K_w],
        down=pressed[pygame.K_DOWN] or pressed[pygame.K_s],
    )
