"""
Sound effects - synthesized tones played on game events
"""

import logging

import numpy as np
import pygame

from game.events import EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# name: (wave type, frequency Hz, duration s, volume)
TONES = {
    'gem_collect': ('triangle', 880, 0.1, 0.15),
    'enemy_hit': ('sawtooth', 150, 0.5, 0.3),
    'wall_shift': ('sine', 300, 0.3, 0.1),
    'game_start': ('square', 440, 0.2, 0.2),
    'game_over': ('sawtooth', 220, 1.0, 0.3),
    'power_up': ('sine', 660, 0.3, 0.2),
}


def generate_wave(wave_type, frequency, duration, volume=0.2, sample_rate=SAMPLE_RATE,
                  channels=2):
    """
    Build a decaying tone as 16-bit samples

    Mono gives a flat array, otherwise one column per channel.

    The exponential decay mirrors a gain ramp down to silence.
    """
    n_samples = max(1, int(sample_rate * duration))
    t = np.linspace(0, duration, n_samples, False)
    phase = t * frequency

    if wave_type == 'sine':
        wave = np.sin(2 * np.pi * phase)
    elif wave_type == 'square':
        wave = np.sign(np.sin(2 * np.pi * phase))
    elif wave_type == 'sawtooth':
        wave = 2 * (phase - np.floor(0.5 + phase))
    elif wave_type == 'triangle':
        wave = 2 * np.abs(2 * (phase - np.floor(0.5 + phase))) - 1
    else:
        raise ValueError(f"unknown wave type {wave_type!r}")

    envelope = np.exp(np.linspace(0, np.log(0.0001), n_samples))
    wave = wave * envelope * volume

    samples = (wave * 32767).astype(np.int16)
    if channels == 1:
        return samples
    return np.column_stack([samples] * channels)


class SoundBoard:
    """
    Owns the synthesized sounds and plays them for game events
    """
    EVENT_SOUNDS = {
        EventType.GEM_COLLECTED: ('gem_collect',),
        EventType.POWERUP_COLLECTED: ('power_up',),
        EventType.ENEMY_COLLISION: ('enemy_hit',),
        EventType.LEVEL_SHRINK_BEGAN: ('wall_shift',),
        EventType.GAME_STARTED: ('game_start',),
        EventType.GAME_OVER: ('game_over',),
        EventType.VICTORY: ('gem_collect', 'gem_collect', 'gem_collect', 'power_up'),
    }

    def __init__(self, enabled=True):
        self.enabled = enabled
        self.available = False
        self.sounds = {}
        # Queued (frames_left, name) so melodies play as a sequence
        self.queue = []

    def init(self):
        """
        Start the mixer and synthesize every tone

        Failure leaves sound off; the game runs silently.
        """
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2)
            # The mixer may already be running in another format
            sample_rate, _, channels = pygame.mixer.get_init()
            for name, (wave_type, freq, duration, volume) in TONES.items():
                samples = generate_wave(wave_type, freq, duration, volume,
                                        sample_rate, channels)
                self.sounds[name] = pygame.sndarray.make_sound(samples)
            self.available = True
        except (pygame.error, ValueError) as e:
            logger.warning("Audio couldn't be initialized: %s", e)
            self.available = False
            self.sounds = {}
        return self.available

    def toggle(self):
        """Flip mute; returns the new enabled flag"""
        self.enabled = not self.enabled
        logger.info("Sound %s", "on" if self.enabled else "off")
        return self.enabled

    def play(self, name):
        if not (self.enabled and self.available):
            return
        sound = self.sounds.get(name)
        if sound is not None:
            sound.play()

    def handle_event(self, event):
        """Play (or queue) the sounds for one game event"""
        names = self.EVENT_SOUNDS.get(event.type)
        if not names:
            return
        for i, name in enumerate(names):
            if i == 0:
                self.play(name)
            else:
                # About 200 ms apart at 60 FPS
                self.queue.append([i * 12, name])

    def update(self):
        """Play queued notes whose delay has elapsed"""
        remaining = []
        for entry in self.queue:
            entry[0] -= 1
            if entry[0] <= 0:
                self.play(entry[1])
            else:
                remaining.append(entry)
        self.queue = remaining
