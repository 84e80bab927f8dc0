from cachesim.compare import compare_associativity, format_table
from cachesim.core.simulator import Operation, TraceRecord


def thrash_trace(blocks, rounds, s=2, b=4):
    # `blocks` distinct tags all mapping to set 0
    return [TraceRecord(Operation.LOAD, (t << (s + b))) for _ in range(rounds) for t in range(blocks)]


def test_associativity_removes_conflict_misses():
    trace = thrash_trace(blocks=4, rounds=5)
    results = compare_associativity(trace, s=2, b=4, ways=(1, 2, 4, 8))
    assert list(results) == [1, 2, 4, 8]
    # cyclic reuse of 4 blocks thrashes LRU until all 4 fit
    assert results[1].hits == 0
    assert results[2].hits == 0
    assert results[4] == (16, 4, 0)
    assert results[8] == (16, 4, 0)


def test_accepts_generators():
    results = compare_associativity(iter(thrash_trace(2, 3)), s=2, b=4, ways=(1, 2))
    assert results[2].hits == 4


def test_format_table():
    results = compare_associativity(thrash_trace(2, 2), s=2, b=4, ways=(1, 2))
    table = format_table(results).splitlines()
    assert table[0].split() == ['E', 'hits', 'misses', 'evictions', 'hit', 'rate']
    assert table[2].split()[:4] == ['2', '2', '2', '0']
