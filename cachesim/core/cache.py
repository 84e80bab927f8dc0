import enum
import logging
from typing import Optional, Tuple

from cachesim.config import MAX_SET_BITS, CacheConfig
from cachesim.core.address import AddressDecoder
from cachesim.core.cache_set import CacheSet
from cachesim.errors import AllocationError

logger = logging.getLogger(__name__)


class AccessOutcome(enum.Enum):
    HIT = 'hit'
    MISS = 'miss'
    MISS_EVICTION = 'miss eviction'

    @property
    def is_hit(self) -> bool:
        return self is AccessOutcome.HIT


class Counters:
    """Hit / miss / eviction tallies for one cache."""

    __slots__ = ('hits', 'misses', 'evictions')

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def record(self, outcome: AccessOutcome):
        if outcome.is_hit:
            self.hits += 1
            return
        self.misses += 1
        if outcome is AccessOutcome.MISS_EVICTION:
            self.evictions += 1

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.hits, self.misses, self.evictions

    def __repr__(self):
        return f"Counters(hits={self.hits}, misses={self.misses}, evictions={self.evictions})"


class Cache:
    """A set-associative cache of 2**s LRU sets, each holding up to E lines.

    Only tags are tracked; no data moves. Every access is decoded, looked up
    in its set, and either promoted (hit) or inserted (miss, evicting the LRU
    line when the set is full). Counters are updated on every access.

    The table of 2**s set slots is sized up front; each set's line arena is
    built the first time an address maps to it.

    Args:
        config: Validated (s, E, b) geometry
        max_set_bits: Largest s accepted before raising AllocationError
    """

    def __init__(self, config: CacheConfig, max_set_bits: int = MAX_SET_BITS):
        self.config = CacheConfig(*config).validate()
        self.decoder = AddressDecoder(self.config.s, self.config.b)
        self.counters = Counters()
        self.last_evicted: Optional[int] = None

        num_sets = self.config.num_sets
        if self.config.s > max_set_bits:
            raise AllocationError(
                f"s={self.config.s} needs {num_sets} sets; at most 2**{max_set_bits} are supported")
        try:
            self.sets = [None] * num_sets
        except (MemoryError, OverflowError) as e:
            raise AllocationError(
                f"cannot allocate {num_sets} sets of {self.config.E} lines") from e
        logger.debug("allocated cache: %d sets x %d ways, %d-byte blocks",
                     num_sets, self.config.E, self.config.block_size)

    @property
    def hits(self) -> int:
        return self.counters.hits

    @property
    def misses(self) -> int:
        return self.counters.misses

    @property
    def evictions(self) -> int:
        return self.counters.evictions

    def _set(self, index: int) -> CacheSet:
        cache_set = self.sets[index]
        if cache_set is None:
            cache_set = self.sets[index] = CacheSet(self.config.E)
        return cache_set

    def set_for(self, addr: int) -> CacheSet:
        return self._set(self.decoder.set_index(addr))

    def contains(self, addr: int) -> bool:
        """Return True if the block holding addr is resident. Does not touch recency."""
        return self.set_for(addr).lookup(self.decoder.tag(addr))

    def access(self, addr: int, is_store: bool = False) -> AccessOutcome:
        """Simulate one load or store of addr.

        Loads and stores behave the same for occupancy; is_store is kept for
        callers only.
        """
        decoded = self.decoder.decode(addr)
        cache_set = self._set(decoded.set_index)
        self.last_evicted = None

        if cache_set.lookup(decoded.tag):
            cache_set.promote(decoded.tag)
            outcome = AccessOutcome.HIT
        else:
            evicted = cache_set.insert(decoded.tag)
            if evicted is None:
                outcome = AccessOutcome.MISS
            else:
                self.last_evicted = evicted
                outcome = AccessOutcome.MISS_EVICTION

        self.counters.record(outcome)
        return outcome

    def occupancy(self) -> int:
        """Number of valid lines across all sets."""
        return sum(len(s) for s in self.sets if s is not None)

    def stats(self) -> dict:
        return {
            'num_sets': self.config.num_sets,
            'associativity': self.config.E,
            'block_size': self.config.block_size,
            'capacity_bytes': self.config.capacity,
            'used_lines': self.occupancy(),
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
        }
