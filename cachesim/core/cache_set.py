from typing import Iterator, List, Optional

# Slot index meaning "no line".
NIL = -1


class CacheLine:
    """One resident block: its tag, a valid bit, and its links in the LRU list."""

    __slots__ = ('tag', 'valid', 'prev', 'next')

    def __init__(self):
        self.tag = 0
        self.valid = False
        self.prev = NIL
        self.next = NIL

    def __repr__(self):
        return f"CacheLine(tag={self.tag:#x}, valid={self.valid})"


class CacheSet:
    """An LRU-ordered set of at most `ways` lines.

    The lines live in a fixed arena of `ways` slots allocated up front and
    are chained into a doubly linked recency list by slot index, head = most
    recently used, tail = least recently used. Moving a line to the front and
    dropping the tail are O(1) relinks; no line is allocated per access.

    Slots are handed out in order while the set fills (slot i is used once
    size > i) and are only recycled by eviction, so `size` alone tracks
    occupancy.
    """

    def __init__(self, ways: int):
        self.ways = ways
        self.lines = [CacheLine() for _ in range(ways)]
        self.head = NIL
        self.tail = NIL
        self.size = 0

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[int]:
        """Yield resident tags from MRU to LRU."""
        slot = self.head
        while slot != NIL:
            line = self.lines[slot]
            yield line.tag
            slot = line.next

    def __repr__(self):
        return f"CacheSet(ways={self.ways}, tags={[hex(t) for t in self]})"

    def tags(self) -> List[int]:
        return list(self)

    def is_full(self) -> bool:
        return self.size == self.ways

    @property
    def mru(self) -> Optional[int]:
        return self.lines[self.head].tag if self.head != NIL else None

    @property
    def lru(self) -> Optional[int]:
        return self.lines[self.tail].tag if self.tail != NIL else None

    def _find(self, tag: int) -> int:
        slot = self.head
        while slot != NIL:
            line = self.lines[slot]
            if line.valid and line.tag == tag:
                return slot
            slot = line.next
        return NIL

    def _unlink(self, slot: int):
        line = self.lines[slot]
        if line.prev != NIL:
            self.lines[line.prev].next = line.next
        else:
            self.head = line.next
        if line.next != NIL:
            self.lines[line.next].prev = line.prev
        else:
            self.tail = line.prev
        line.prev = line.next = NIL

    def _push_front(self, slot: int):
        line = self.lines[slot]
        line.prev = NIL
        line.next = self.head
        if self.head != NIL:
            self.lines[self.head].prev = slot
        self.head = slot
        if self.tail == NIL:
            self.tail = slot

    def lookup(self, tag: int) -> bool:
        """Return True if a valid line holds `tag`. Does not touch recency."""
        return self._find(tag) != NIL

    def promote(self, tag: int):
        """Move the line holding `tag` to the MRU position."""
        slot = self._find(tag)
        if slot == NIL:
            raise KeyError(f"tag {tag:#x} is not resident")
        if slot != self.head:
            self._unlink(slot)
            self._push_front(slot)

    def insert(self, tag: int) -> Optional[int]:
        """Place `tag` at the MRU position.

        When the set is full the LRU line is evicted first and its tag is
        returned; otherwise returns None.
        """
        if self._find(tag) != NIL:
            raise ValueError(f"tag {tag:#x} is already resident")

        evicted = None
        if self.size < self.ways:
            slot = self.size
            self.size += 1
        else:
            slot = self.tail
            victim = self.lines[slot]
            evicted = victim.tag
            victim.valid = False
            self._unlink(slot)

        line = self.lines[slot]
        line.tag = tag
        line.valid = True
        self._push_front(slot)
        return evicted
