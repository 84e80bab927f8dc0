"""Quick CLI demo comparing associativities on one synthetic trace, without GUI.

Run from project root:
    python compare_demo.py
"""
import numpy as np
from cachesim.compare import compare_associativity, format_table
from cachesim.config import Config
from cachesim.utils.trace_generator import generate_sample_trace


def run_demo(trace_size=Config.synthetic_length, s=Config.set_bits, b=Config.block_bits,
             ways=Config.sweep_ways):
    for pattern in ('sequential', 'loop', 'mixed', 'random'):
        trace = generate_sample_trace(size=trace_size, pattern_type=pattern,
                                      block_size=1 << b, seed=Config.synthetic_seed)
        results = compare_associativity(trace, s, b, ways)
        rates = np.array([r.hit_rate for r in results.values()])
        print(f"Pattern: {pattern} ({len(trace)} records, s={s} b={b})")
        print(format_table(results))
        print(f"Best E: {list(results)[int(np.argmax(rates))]}\n")


if __name__ == '__main__':
    run_demo()
