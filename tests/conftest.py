"""Shared fixtures for the SCM simulator tests."""
import pytest

from scm_data import SCMDataLoader
from scm_sim.config import SCMConfig
from scm_sim.core.state import create_initial_state
from scm_sim.engine.turn import TurnProcessor
from scm_sim.utils.rng import RandomSource


class ScriptedRandom(RandomSource):
    """
    RandomSource with scripted draws.

    random() pops from ``draws`` and falls back to ``default`` once they run
    out (0.99: no event, no lifecycle advance). uniform() returns ``jitter``
    (0.0: no exchange-rate gain). choice() picks ``choice_index``.
    """

    def __init__(self, draws=None, default=0.99, jitter=0.0, choice_index=0):
        super().__init__(seed=0)
        self.draws = list(draws or [])
        self.default = default
        self.jitter = jitter
        self.choice_index = choice_index
        self.random_calls = 0
        self.uniform_calls = 0

    def random(self):
        self.random_calls += 1
        if self.draws:
            return self.draws.pop(0)
        return self.default

    def uniform(self, low, high):
        self.uniform_calls += 1
        return self.jitter

    def choice(self, options):
        return options[self.choice_index]


@pytest.fixture
def config():
    return SCMConfig()


@pytest.fixture
def data_loader():
    return SCMDataLoader()


@pytest.fixture
def quiet_rng():
    """No events, no lifecycle advances, no exchange-rate gain."""
    return ScriptedRandom()


@pytest.fixture
def processor(config, data_loader):
    return TurnProcessor(config, data_loader)


@pytest.fixture
def initial_state(config, data_loader):
    return create_initial_state(config, data_loader)


@pytest.fixture
def single_product_state(initial_state):
    """One product ("Product A", introduction, supplier 1) and one player."""
    initial_state.products = initial_state.products[:1]
    return initial_state


@pytest.fixture
def make_rng():
    """Factory for ScriptedRandom with custom draws."""
    return ScriptedRandom
