"""
Shared fixtures for the farmhand_sim tests.
"""

import random

import pytest

from farmhand_sim.core.memoize import CacheRegistry
from farmhand_sim.data import COW_NAMES, load_default_catalog
from farmhand_sim.simulation.engine import FarmEngine
from farmhand_sim.systems.cows import CowBreeder
from farmhand_sim.systems.crops import CropLifecycle
from farmhand_sim.systems.market import Market


@pytest.fixture
def catalog():
    return load_default_catalog()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def caches():
    return CacheRegistry()


@pytest.fixture
def crops(catalog, caches):
    return CropLifecycle(catalog, caches)


@pytest.fixture
def market(catalog, rng, caches):
    return Market(catalog, rng, caches)


@pytest.fixture
def breeder(catalog, rng):
    return CowBreeder(catalog, rng, COW_NAMES)


@pytest.fixture
def engine(catalog):
    return FarmEngine(catalog=catalog, seed=42)
