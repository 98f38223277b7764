import os
import random

import pytest

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

pygame = pytest.importorskip("pygame")
np = pytest.importorskip("numpy")

import pygame.sndarray  # noqa: E402

from entities.particle import ParticleSystem, ParticleEffects  # noqa: E402
from game.audio import SoundBoard, generate_wave  # noqa: E402
from game.events import EventType, GameEvent  # noqa: E402
from game.renderer import BoardRenderer  # noqa: E402
from game.session import GameSession  # noqa: E402


@pytest.fixture(scope="module", autouse=True)
def display():
    pygame.display.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.display.quit()


@pytest.mark.parametrize("wave_type", ['sine', 'square', 'sawtooth', 'triangle'])
def test_generate_wave(wave_type):
    samples = generate_wave(wave_type, 440, 0.1, 0.2)
    assert samples.shape == (4410, 2)
    assert samples.dtype == np.int16
    assert np.abs(samples).max() <= int(0.2 * 32767) + 1


def test_generate_wave_mono():
    samples = generate_wave('sine', 440, 0.1, sample_rate=22050, channels=1)
    assert samples.shape == (2205,)


def test_generate_wave_rejects_unknown_type():
    with pytest.raises(ValueError):
        generate_wave('noise', 440, 0.1)


def test_sound_board_follows_mixer_format(monkeypatch):
    monkeypatch.setattr(pygame.mixer, 'get_init', lambda: (22050, -16, 1))
    monkeypatch.setattr(pygame.sndarray, 'make_sound', lambda samples: samples)

    board = SoundBoard()
    assert board.init() is True
    assert board.sounds['gem_collect'].shape == (2205,)


def test_sound_board_survives_mismatched_mixer(monkeypatch):
    def reject(samples):
        raise ValueError("Array depth must match number of mixer channels")

    monkeypatch.setattr(pygame.mixer, 'get_init', lambda: (44100, -16, 2))
    monkeypatch.setattr(pygame.sndarray, 'make_sound', reject)

    board = SoundBoard()
    assert board.init() is False
    assert board.sounds == {}
    board.play('gem_collect')


def test_muted_sound_board_plays_nothing():
    board = SoundBoard(enabled=False)
    board.handle_event(GameEvent(EventType.VICTORY, score=3))
    assert len(board.queue) == 3
    for _ in range(40):
        board.update()
    assert board.queue == []
    assert board.toggle() is True


def test_particles_follow_events():
    system = ParticleSystem()
    effects = ParticleEffects(system, random.Random(1))

    effects.handle_event(GameEvent(EventType.GEM_COLLECTED, 48, 48, score=1), (672, 480))
    assert len(system) == 10

    effects.handle_event(GameEvent(EventType.VICTORY, score=1), (672, 480))
    effects.update()
    assert len(system) > 10

    for _ in range(120):
        system.update(1 / 60)
    effects.handle_event(GameEvent(EventType.GAME_STARTED), (672, 480))
    assert len(system) == 0
    assert effects.scheduled == []


def test_renderer_draws_a_snapshot():
    session = GameSession(seed=2)
    session.start_game(0)
    session.player.apply_power_up('ghost')
    session.player.apply_power_up('invincibility')
    session.tick(8001, (1, 0))
    session.tick(16001, (1, 0))

    surface = pygame.Surface((session.grid.pixel_width, session.grid.pixel_height))
    renderer = BoardRenderer()
    renderer.update(0.5)
    renderer.render(surface, session.snapshot())
    assert surface.get_at((5, 5))[:3] != (0, 0, 0)
