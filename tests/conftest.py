import os
import sys

# headless plotting for the plotter and CLI tests
os.environ.setdefault('MPLBACKEND', 'Agg')

import pytest

# Make the package importable when running tests from a source checkout
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cachesim.config import CacheConfig
from cachesim.core.cache import Cache
from cachesim.core.simulator import AccessSimulator

TRACES_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'traces'))


@pytest.fixture
def make_cache():
    def _make(s=4, E=1, b=4):
        return Cache(CacheConfig(s, E, b))
    return _make


@pytest.fixture
def make_simulator(make_cache):
    def _make(s=4, E=1, b=4):
        return AccessSimulator(make_cache(s, E, b))
    return _make


@pytest.fixture
def yi_trace():
    return os.path.join(TRACES_DIR, 'yi.trace')


@pytest.fixture
def write_trace(tmp_path):
    def _write(text, name='test.trace'):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return _write
