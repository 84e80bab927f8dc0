import pytest

from cachesim.core.simulator import Operation
from cachesim.utils.trace_generator import generate_sample_trace, load_trace, save_trace


@pytest.mark.parametrize('pattern', ['sequential', 'random', 'mixed', 'loop'])
def test_patterns_produce_requested_data_records(pattern):
    trace = generate_sample_trace(size=250, pattern_type=pattern, seed=1)
    data = [r for r in trace if r.kind is not Operation.INSTRUCTION]
    assert len(data) == 250
    assert all(isinstance(r.address, int) and r.address >= 0 for r in trace)


def test_sequential_addresses_step_by_block():
    trace = generate_sample_trace(size=10, pattern_type='sequential', block_size=32, seed=0)
    data = [r.address for r in trace if r.kind is not Operation.INSTRUCTION]
    assert data == [i * 32 for i in range(10)]


def test_loop_repeats_hundred_blocks():
    trace = generate_sample_trace(size=300, pattern_type='loop', block_size=64, seed=0)
    data = [r.address for r in trace if r.kind is not Operation.INSTRUCTION]
    assert data[:100] == data[100:200] == data[200:]


def test_seed_makes_traces_reproducible():
    assert generate_sample_trace(100, 'mixed', seed=5) == generate_sample_trace(100, 'mixed', seed=5)


def test_unknown_pattern():
    with pytest.raises(ValueError):
        generate_sample_trace(10, pattern_type='zigzag')


def test_save_then_load_preserves_records(tmp_path):
    trace = generate_sample_trace(size=50, pattern_type='random', seed=2)
    path = str(tmp_path / 'sample.trace')
    save_trace(trace, path)
    assert load_trace(path) == trace
    with open(path) as f:
        first_data = next(line for line in f if not line.startswith('I'))
    assert first_data.startswith(' ')
