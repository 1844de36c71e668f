import pytest

from balatro_rules.engine.game import Game

from .helpers import FixedRandom


@pytest.fixture
def fixed_rng():
    return FixedRandom()


@pytest.fixture
def game(fixed_rng):
    # Canonical deal: AS KS QS JS 10S 9S 8S 7S 6S, deck starts at 5S
    return Game(rng=fixed_rng)
