"""Compare cache geometries over the same trace."""

from cachesim.config import CacheConfig
from cachesim.core.simulator import simulate


def compare_associativity(trace, s, b, ways=(1, 2, 4, 8)):
    """Replay `trace` once per associativity in `ways`.

    Returns a dict mapping E -> Summary, in the order given.
    """
    trace = list(trace)
    return {E: simulate(CacheConfig(s, E, b), trace) for E in ways}


def format_table(results):
    rows = [f"{'E':>4} {'hits':>8} {'misses':>8} {'evictions':>10} {'hit rate':>9}"]
    for E, summary in results.items():
        rows.append(f"{E:>4} {summary.hits:>8} {summary.misses:>8} "
                    f"{summary.evictions:>10} {summary.hit_rate * 100:>8.2f}%")
    return '\n'.join(rows)
