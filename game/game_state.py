"""
Game State Machine - manages game states and delayed transitions
"""

import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game states"""
    START = auto()
    PLAYING = auto()
    GAME_OVER = auto()


class TransitionAction(Enum):
    """Things that can be scheduled for later"""
    REGENERATE = auto()


class PendingTransition:
    """
    An action due at a given time, checked every tick
    """
    __slots__ = ('at_ms', 'action')

    def __init__(self, at_ms, action):
        self.at_ms = at_ms
        self.action = action

    def is_due(self, now_ms):
        return now_ms >= self.at_ms

    def __repr__(self):
        return f"PendingTransition({self.action.name} at {self.at_ms:.0f}ms)"


class GameStateManager:
    """
    Manages game state transitions and flow
    """
    def __init__(self):
        self.current_state = GameState.START
        self.previous_state = None
        self.pending = None

    def transition_to(self, new_state):
        """
        Transition to a new state

        Args:
            new_state: GameState enum value
        """
        self.previous_state = self.current_state
        self.current_state = new_state
        logger.info("State %s -> %s", self.previous_state.name, new_state.name)

    def schedule(self, action, at_ms):
        """
        Schedule an action unless one is already waiting

        Returns:
            True if scheduled
        """
        if self.pending is not None:
            return False
        self.pending = PendingTransition(at_ms, action)
        logger.debug("Scheduled %s", self.pending)
        return True

    def pop_due(self, now_ms):
        """Take the pending action if its time has come"""
        if self.pending is None or not self.pending.is_due(now_ms):
            return None
        action = self.pending.action
        self.pending = None
        return action

    def cancel_pending(self):
        self.pending = None

    def is_state(self, state):
        """Check if current state matches"""
        return self.current_state == state

    def is_playing(self):
        return self.current_state == GameState.PLAYING

    def can_start(self):
        """Start/continue trigger only works outside of play"""
        return self.current_state in (GameState.START, GameState.GAME_OVER)

    def get_state_name(self):
        """Get current state name"""
        return self.current_state.name

    def __repr__(self):
        return f"GameStateManager(state={self.current_state.name}, pending={self.pending})"
