import pytest

from cachesim.core.simulator import Operation, TraceRecord
from cachesim.errors import MalformedRecordError
from cachesim.utils.trace_reader import TraceLoader, iter_lines, parse_line


def test_parse_data_and_instruction_lines():
    assert parse_line(' L 7ff000398,8\n') == TraceRecord(Operation.LOAD, 0x7ff000398, 8)
    assert parse_line(' S 18,1') == TraceRecord(Operation.STORE, 0x18, 1)
    assert parse_line(' M 0421c7f0,4') == TraceRecord(Operation.MODIFY, 0x421c7f0, 4)
    assert parse_line('I  0400d7d4,8') == TraceRecord(Operation.INSTRUCTION, 0x400d7d4, 8)


def test_blank_and_comment_lines_are_none():
    assert parse_line('') is None
    assert parse_line('   \n') is None
    assert parse_line('# generated trace') is None


@pytest.mark.parametrize('line', [
    ' X 10,1',
    ' L',
    ' L zz,1',
    ' L 10000000000000000,1',
    ' L -10,1',
    'garbage',
])
def test_malformed_lines_raise(line):
    with pytest.raises(MalformedRecordError):
        parse_line(line)


def test_size_is_optional():
    assert parse_line(' L 10') == TraceRecord(Operation.LOAD, 0x10, 1)
    assert parse_line(' S 10,big') == TraceRecord(Operation.STORE, 0x10, 1)
    assert parse_line(' M 20,') == TraceRecord(Operation.MODIFY, 0x20, 1)


def test_largest_address_is_accepted():
    assert parse_line(' L ffffffffffffffff,8').address == (1 << 64) - 1


def test_iter_lines_skips_malformed(caplog):
    lines = [' L 10,1', 'bogus line', '', ' S 20,4', ' L 1x,1']
    with caplog.at_level('DEBUG', logger='cachesim.utils.trace_reader'):
        records = list(iter_lines(lines))
    assert [r.kind for r in records] == [Operation.LOAD, Operation.STORE]
    assert 'skipping line 2' in caplog.text
    assert 'skipping line 5' in caplog.text


def test_loader_reads_file_in_order(yi_trace):
    records = TraceLoader().load_trace(yi_trace)
    assert len(records) == 7
    assert records[0] == TraceRecord(Operation.LOAD, 0x10, 1)
    assert records[-1] == TraceRecord(Operation.MODIFY, 0x12, 1)


def test_iter_records_is_lazy(write_trace):
    path = write_trace(' L 10,1\n S 20,1\n')
    it = TraceLoader().iter_records(path)
    assert next(it).address == 0x10
    assert next(it).address == 0x20
    with pytest.raises(StopIteration):
        next(it)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        TraceLoader().load_trace(str(tmp_path / 'nope.trace'))


def test_undecodable_bytes_skip_only_that_line(tmp_path):
    path = tmp_path / 'binary.trace'
    path.write_bytes(b' L 10,1\n\xff\xfe garbage\n S 20,\xff4\n L 10,1\n')
    records = TraceLoader().load_trace(str(path))
    assert [(r.kind, r.address) for r in records] == [
        (Operation.LOAD, 0x10), (Operation.STORE, 0x20), (Operation.LOAD, 0x10)]
