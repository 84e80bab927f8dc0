import pytest

from cachesim.config import CacheConfig, Config
from cachesim.core.cache import AccessOutcome, Cache
from cachesim.errors import AllocationError, ConfigurationError

HIT = AccessOutcome.HIT
MISS = AccessOutcome.MISS
EVICT = AccessOutcome.MISS_EVICTION


@pytest.mark.parametrize('s,E,b', [(1, 1, 1), (4, 1, 4), (2, 4, 6), (8, 16, 3)])
def test_cold_start_is_miss(s, E, b):
    cache = Cache(CacheConfig(s, E, b))
    for addr in (0, 0x7ff000398, (1 << 64) - 1):
        assert cache.access(addr) is MISS
    assert cache.evictions == 0


def test_reaccess_hits(make_cache):
    cache = make_cache()
    assert cache.access(0x40) is MISS
    assert cache.access(0x40) is HIT
    # same block, different offset
    assert cache.access(0x4f, is_store=True) is HIT
    assert cache.counters.as_tuple() == (2, 1, 0)


def test_direct_mapped_conflict_evicts(make_cache):
    cache = make_cache(s=4, E=1, b=4)
    a = cache.decoder.compose(tag=1, set_index=3)
    b = cache.decoder.compose(tag=2, set_index=3)
    assert cache.access(a) is MISS
    assert cache.access(b) is EVICT
    assert cache.last_evicted == 1
    assert cache.set_for(a).tags() == [2]
    assert cache.access(a) is EVICT
    assert cache.counters.as_tuple() == (0, 3, 2)


def test_lru_order_two_way(make_cache):
    cache = make_cache(s=2, E=2, b=2)
    A, B, C = (cache.decoder.compose(tag=t, set_index=1) for t in (0xA, 0xB, 0xC))
    outcomes = [cache.access(x) for x in (A, B, A, C)]
    assert outcomes == [MISS, MISS, HIT, EVICT]
    assert cache.last_evicted == 0xB
    assert cache.contains(A)
    assert not cache.contains(B)


def test_sets_are_independent(make_cache):
    cache = make_cache(s=2, E=1, b=2)
    addrs = [cache.decoder.compose(tag=5, set_index=i) for i in range(4)]
    for addr in addrs:
        assert cache.access(addr) is MISS
    for addr in addrs:
        assert cache.access(addr) is HIT
    assert cache.occupancy() == 4
    assert cache.evictions == 0


def test_contains_does_not_update_recency(make_cache):
    cache = make_cache(s=1, E=2, b=1)
    A, B, C = (cache.decoder.compose(tag=t, set_index=0) for t in (1, 2, 3))
    cache.access(A)
    cache.access(B)
    assert cache.contains(A)
    cache.access(C)
    assert cache.last_evicted == 1


def test_stats(make_cache):
    cache = make_cache(s=3, E=2, b=5)
    cache.access(0)
    stats = cache.stats()
    assert stats['num_sets'] == 8
    assert stats['block_size'] == 32
    assert stats['capacity_bytes'] == 8 * 2 * 32
    assert stats['used_lines'] == 1
    assert stats['misses'] == 1


@pytest.mark.parametrize('config', [
    (0, 1, 4), (4, 0, 4), (4, 1, 0), (-1, 1, 1), (40, 1, 30), (4, 1.5, 4), (True, 1, 1),
])
def test_bad_configuration(config):
    with pytest.raises(ConfigurationError):
        Cache(CacheConfig(*config))


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        CacheConfig(1, -2, 1).validate()


def test_s_plus_b_may_fill_address_width():
    assert CacheConfig(1, 1, 63).validate().num_sets == 2


def test_oversized_set_table_is_allocation_error():
    with pytest.raises(AllocationError):
        Cache(CacheConfig(61, 1, 2))


def test_set_bits_above_limit_is_allocation_error():
    with pytest.raises(AllocationError):
        Cache(CacheConfig(30, 1, 4))
    with pytest.raises(AllocationError):
        Cache(CacheConfig(5, 1, 4), max_set_bits=4)


def test_sets_are_built_on_first_use():
    cache = Cache(CacheConfig(20, 4, 4))
    assert len(cache.sets) == 1 << 20
    assert all(s is None for s in cache.sets[:16])
    cache.access(0x30)
    assert cache.sets[3] is not None
    assert cache.sets[3].ways == 4
    assert cache.occupancy() == 1


def test_cache_config_from_defaults():
    class Small(Config):
        set_bits = 2
        associativity = 4
        block_bits = 5

    assert CacheConfig.from_config(Small) == (2, 4, 5)
    assert CacheConfig.from_config() == (Config.set_bits, Config.associativity, Config.block_bits)


def test_outcome_is_hit():
    assert AccessOutcome.HIT.is_hit
    assert not AccessOutcome.MISS.is_hit
    assert not AccessOutcome.MISS_EVICTION.is_hit
