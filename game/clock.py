"""
Fixed step clock - turns real elapsed time into whole simulation steps
"""

from utils.constants import FPS, MAX_STEPS_PER_FRAME


class FixedStepClock:
    """
    Accumulates elapsed milliseconds and hands out fixed steps

    The remainder carries over to the next call. Long stalls are capped at
    max_steps so the game does not fast-forward after a freeze.
    """
    def __init__(self, fps=FPS, max_steps=MAX_STEPS_PER_FRAME):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.step_ms = 1000.0 / fps
        self.max_steps = max_steps
        self.last_ms = None
        self.accumulator = 0.0

    def advance(self, now_ms):
        """
        Args:
            now_ms: Current time in milliseconds

        Returns:
            Number of steps to run now
        """
        if self.last_ms is None:
            self.last_ms = now_ms
            return 0

        self.accumulator += max(0.0, now_ms - self.last_ms)
        self.last_ms = now_ms

        steps = int(self.accumulator // self.step_ms)
        if steps > self.max_steps:
            steps = self.max_steps
            self.accumulator = 0.0
        else:
            self.accumulator -= steps * self.step_ms
        return steps

    def reset(self):
        self.last_ms = None
        self.accumulator = 0.0
