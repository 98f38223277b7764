"""
Game events - what the core reports to the effects, audio and UI layers
"""

from enum import Enum, auto


class EventType(Enum):
    """Discrete things that happened during a tick"""
    GAME_STARTED = auto()
    GAME_OVER = auto()
    GEM_COLLECTED = auto()
    GEMS_REPLENISHED = auto()
    POWERUP_COLLECTED = auto()
    POWERUP_EXPIRED = auto()
    POWERUP_SPAWNED = auto()
    ENEMY_COLLISION = auto()
    WALL_SOLIDIFIED = auto()
    LEVEL_SHRINK_BEGAN = auto()
    VICTORY = auto()


class GameEvent:
    """
    Single event, optionally placed in the world (pixel coordinates)
    """
    __slots__ = ('type', 'x', 'y', 'data')

    def __init__(self, event_type, x=None, y=None, **data):
        self.type = event_type
        self.x = x
        self.y = y
        self.data = data

    @property
    def position(self):
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)

    def __eq__(self, other):
        if not isinstance(other, GameEvent):
            return NotImplemented
        return (self.type, self.x, self.y, self.data) == (other.type, other.x, other.y, other.data)

    def __repr__(self):
        if self.position is None:
            return f"GameEvent({self.type.name}, {self.data})"
        return f"GameEvent({self.type.name}, pos=({self.x:.0f},{self.y:.0f}), {self.data})"


def events_of(events, event_type):
    """Filter an event list by type"""
    return [e for e in events if e.type == event_type]
