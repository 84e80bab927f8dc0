"""cachesim: a set-associative LRU cache simulator driven by memory traces."""

from cachesim.config import CacheConfig, Config
from cachesim.core.cache import AccessOutcome, Cache
from cachesim.core.simulator import AccessSimulator, Operation, Summary, TraceRecord, simulate
from cachesim.errors import AllocationError, CacheSimError, ConfigurationError, MalformedRecordError

__version__ = '0.1'
