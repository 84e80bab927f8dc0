import enum
import logging
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional

from cachesim.config import CacheConfig
from cachesim.core.cache import AccessOutcome, Cache

logger = logging.getLogger(__name__)


class Operation(enum.Enum):
    INSTRUCTION = 'I'
    LOAD = 'L'
    STORE = 'S'
    MODIFY = 'M'


class TraceRecord(NamedTuple):
    kind: Operation
    address: int
    size: int = 1

    def __str__(self):
        return f"{self.kind.value} {self.address:x},{self.size}"


class Summary(NamedTuple):
    hits: int
    misses: int
    evictions: int

    @property
    def accesses(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.accesses if self.accesses > 0 else 0.0

    @property
    def miss_rate(self) -> float:
        return self.misses / self.accesses if self.accesses > 0 else 0.0

    def format(self) -> str:
        return f"hits:{self.hits} misses:{self.misses} evictions:{self.evictions}"


class Progress(NamedTuple):
    """Snapshot taken while replaying a trace."""
    records: int
    hits: int
    misses: int
    evictions: int

    @property
    def hit_rate(self) -> float:
        accesses = self.hits + self.misses
        return self.hits / accesses if accesses > 0 else 0.0


RecordHook = Optional[Callable[[TraceRecord, List[AccessOutcome]], None]]


def describe(record: TraceRecord, outcomes: List[AccessOutcome]) -> str:
    """Verbose trace line, e.g. 'M 20,1 miss eviction hit'."""
    words = ' '.join(o.value for o in outcomes)
    return f"{record} {words}" if words else str(record)


class AccessSimulator:
    """Drive a Cache with load / store / modify records.

    Instruction fetches never reach the cache. A modify is a load followed by
    a store to the same address; the store sees the state the load left
    behind, so it is always a hit.
    """

    def __init__(self, cache: Cache):
        self.cache = cache

    def apply(self, record: TraceRecord) -> List[AccessOutcome]:
        kind = record.kind
        if kind is Operation.INSTRUCTION:
            return []
        if kind is Operation.LOAD:
            return [self.cache.access(record.address)]
        if kind is Operation.STORE:
            return [self.cache.access(record.address, is_store=True)]
        if kind is Operation.MODIFY:
            first = self.cache.access(record.address)
            second = self.cache.access(record.address, is_store=True)
            return [first, second]
        raise ValueError(f"unknown operation: {kind!r}")

    def summary(self) -> Summary:
        return Summary(*self.cache.counters.as_tuple())

    def replay(self, records: Iterable[TraceRecord], on_record: RecordHook = None) -> Summary:
        """Apply every record in order and return the final counts.

        on_record, if given, is called with (record, outcomes) after each record.
        """
        logger.info("replaying trace with s=%d E=%d b=%d", *self.cache.config)
        count = 0
        for record in records:
            outcomes = self.apply(record)
            if on_record is not None:
                on_record(record, outcomes)
            count += 1
        summary = self.summary()
        logger.info("replayed %d records: %s", count, summary.format())
        return summary

    def iter_progress(self, records: Iterable[TraceRecord], interval: int = 100,
                      on_record: RecordHook = None) -> Iterator[Progress]:
        """Replay records, yielding a Progress every `interval` records and once at the end."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        count = 0
        last = None
        for record in records:
            outcomes = self.apply(record)
            if on_record is not None:
                on_record(record, outcomes)
            count += 1
            if count % interval == 0:
                last = count
                yield Progress(count, *self.cache.counters.as_tuple())
        if last != count:
            yield Progress(count, *self.cache.counters.as_tuple())


def simulate(config, records: Iterable[TraceRecord]) -> Summary:
    """Build a fresh cache from config and replay records through it."""
    return AccessSimulator(Cache(CacheConfig(*config))).replay(records)
