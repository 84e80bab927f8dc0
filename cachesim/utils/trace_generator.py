import numpy as np

from cachesim.core.simulator import Operation, TraceRecord
from cachesim.utils.trace_reader import TraceLoader

# Data access kinds and how often each appears in a generated trace.
_DATA_KINDS = [Operation.LOAD, Operation.STORE, Operation.MODIFY]
_KIND_WEIGHTS = [0.6, 0.25, 0.15]
# fraction of records that are instruction fetches
_INSTRUCTION_RATE = 0.1
_INSTRUCTION_BASE = 0x400000


def _addresses(size, pattern_type, block_size, rng):
    if pattern_type == 'sequential':
        # Sequential access pattern
        return np.arange(size) * block_size

    elif pattern_type == 'random':
        # Random access pattern
        return rng.integers(0, size * block_size, size)

    elif pattern_type == 'mixed':
        # Mix of sequential and random, shuffled together
        addrs = np.concatenate([
            np.arange(size // 2) * block_size,
            rng.integers(0, size * block_size, size - size // 2),
        ])
        rng.shuffle(addrs)
        return addrs

    elif pattern_type == 'loop':
        # Loop pattern (simulating program loops over 100 blocks)
        base_pattern = np.arange(100) * block_size
        repeats = size // 100 + 1
        return np.tile(base_pattern, repeats)[:size]

    else:
        raise ValueError(f"Unknown pattern type: {pattern_type}")


def generate_sample_trace(size=10000, pattern_type='mixed', block_size=64, seed=None):
    """Generate a synthetic memory access trace as a list of TraceRecords.

    Data accesses follow `pattern_type`; kinds are drawn at random with loads
    most common, and about one record in ten is an instruction fetch.
    """
    rng = np.random.default_rng(seed)
    addrs = _addresses(size, pattern_type, block_size, rng)
    kinds = rng.choice(len(_DATA_KINDS), size=size, p=_KIND_WEIGHTS)
    fetches = rng.random(size) < _INSTRUCTION_RATE
    sizes = rng.choice([1, 2, 4, 8], size=size)

    trace = []
    pc = _INSTRUCTION_BASE
    for addr, kind, fetch, nbytes in zip(addrs, kinds, fetches, sizes):
        if fetch:
            trace.append(TraceRecord(Operation.INSTRUCTION, pc, 4))
            pc += 4
        trace.append(TraceRecord(_DATA_KINDS[int(kind)], int(addr), int(nbytes)))
    return trace


def save_trace(trace, filename):
    """Save trace to a file in valgrind lackey format"""
    with open(filename, 'w') as f:
        for record in trace:
            # lackey indents data accesses by one space
            prefix = '' if record.kind is Operation.INSTRUCTION else ' '
            f.write(f"{prefix}{record}\n")


def load_trace(filename):
    """Load trace from a file"""
    return TraceLoader().load_trace(filename)
