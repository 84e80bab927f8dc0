class CacheSimError(Exception):
    """Base class for simulator errors."""


class ConfigurationError(CacheSimError, ValueError):
    """The (s, E, b) geometry cannot describe a cache."""


class MalformedRecordError(CacheSimError, ValueError):
    """A trace line could not be decoded into (kind, address, size)."""


class AllocationError(CacheSimError, MemoryError):
    """The set table for 2**s sets could not be allocated."""
