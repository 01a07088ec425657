"""Shared pytest fixtures for Perimeter tests."""
import os

# Headless pygame for every test module
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import random

import pygame
import pytest

from models import GameEventType
from perimeter.events import EventBus
from perimeter.scheduler import TaskScheduler
from perimeter.session import GameSession
from perimeter.spawner import EnemySpawner

WIDTH, HEIGHT = 800, 600


class FakeClock:
    """Manually advanced millisecond clock for the scheduler."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def viewport():
    """Fixed 800x600 viewport callable."""
    return lambda: (WIDTH, HEIGHT)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scheduler(fake_clock):
    return TaskScheduler(clock=fake_clock)


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def rng():
    """Seeded random source for reproducible spawns."""
    return random.Random(1234)


@pytest.fixture
def recorder(events):
    """Collects every emitted event, in order."""
    received = []
    for event_type in GameEventType:
        events.subscribe(event_type, received.append)
    return received


@pytest.fixture
def session(viewport, scheduler, events, rng):
    """Idle session on an 800x600 viewport driven by the fake clock."""
    spawner = EnemySpawner(viewport, rng=rng)
    return GameSession(
        viewport=viewport,
        scheduler=scheduler,
        events=events,
        spawner=spawner,
        player_name='ada',
    )


@pytest.fixture
def pygame_init():
    """Initialize pygame for testing."""
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def test_screen(pygame_init):
    """Create a test pygame surface."""
    return pygame.display.set_mode((WIDTH, HEIGHT))
