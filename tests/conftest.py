"""
Shared fixtures
"""
import random
from pathlib import Path

import pytest

from turfwars.core.registry import PlayerRegistry
from turfwars.core.session import GameSession
from turfwars.models import Coordinate, GameConfig, Player
from turfwars.roster import build_registry


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "game.yaml"

START = Coordinate(lat=37.77, lng=-122.41)


def square(lat: float, lng: float, size: float = 0.01):
    """Open square path, clockwise from the north-west corner"""
    return [
        Coordinate(lat=lat + size, lng=lng),
        Coordinate(lat=lat + size, lng=lng + size),
        Coordinate(lat=lat, lng=lng + size),
        Coordinate(lat=lat, lng=lng),
    ]


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def registry(config):
    """Default four-player roster"""
    return build_registry(config)


@pytest.fixture
def abc_registry():
    """A(100), B(100), C(50) in that insertion order"""
    return PlayerRegistry([
        Player(id="A", name="Alpha", color="#FF5733", score=100),
        Player(id="B", name="Bravo", color="#33FF57", score=100),
        Player(id="C", name="Charlie", color="#3357FF", score=50),
    ])


@pytest.fixture
def session(registry, config):
    return GameSession(registry, config.active_player_id, config, rng=random.Random(7))
