import logging

from cachesim.config import ADDRESS_WIDTH
from cachesim.core.simulator import Operation, TraceRecord
from cachesim.errors import MalformedRecordError

logger = logging.getLogger(__name__)

_KINDS = {op.value: op for op in Operation}
# size recorded when a line carries none
DEFAULT_SIZE = 1


def parse_line(line):
    """Parse one valgrind lackey line such as ' L 7ff000398,8'.

    Returns None for blank lines and '#' comments, a TraceRecord otherwise.
    Only the kind and address must decode; a missing or unreadable size
    falls back to 1. Raises MalformedRecordError otherwise.
    """
    s = line.strip()
    if not s or s.startswith('#'):
        return None

    parts = s.split(None, 1)
    if len(parts) != 2:
        raise MalformedRecordError(f"expected '<kind> <addr>[,<size>]': {s!r}")
    kind_str, operand = parts
    kind = _KINDS.get(kind_str)
    if kind is None:
        raise MalformedRecordError(f"unknown access kind {kind_str!r}")

    addr_str, _, size_str = operand.partition(',')
    try:
        address = int(addr_str.strip(), 16)
    except ValueError:
        raise MalformedRecordError(f"bad address {addr_str!r}") from None
    if not 0 <= address < (1 << ADDRESS_WIDTH):
        raise MalformedRecordError(f"address {addr_str!r} is not a {ADDRESS_WIDTH}-bit value")
    try:
        size = int(size_str.strip())
    except ValueError:
        logger.debug("bad size %r at %#x, using %d", size_str, address, DEFAULT_SIZE)
        size = DEFAULT_SIZE

    return TraceRecord(kind, address, size)


def iter_lines(lines):
    """Yield a TraceRecord for each well-formed line, skipping the rest."""
    for lineno, line in enumerate(lines, 1):
        try:
            record = parse_line(line)
        except MalformedRecordError as e:
            logger.debug("skipping line %d: %s", lineno, e)
            continue
        if record is not None:
            yield record


class TraceLoader:
    def iter_records(self, path):
        # lazy: records are produced one at a time in file order.
        # Undecodable bytes become U+FFFD so the line is skipped as malformed.
        with open(path, 'r', errors='replace') as f:
            yield from iter_lines(f)

    def load_trace(self, path):
        return list(self.iter_records(path))
