from collections import namedtuple

from cachesim.errors import ConfigurationError

# Width of a simulated address in bits.
ADDRESS_WIDTH = 64
# Largest s the simulator will allocate a set table for (16M sets).
MAX_SET_BITS = 24


class Config:
    # Cache geometry
    set_bits = 4               # s: number of set index bits (2**s sets)
    associativity = 1          # E: lines per set
    block_bits = 4             # b: number of block offset bits (2**b bytes per block)

    # records between progress snapshots (GUI, plots)
    progress_interval = 100

    # Synthetic trace options for demos and the GUI
    synthetic_length = 2000
    synthetic_pattern = 'mixed'
    synthetic_seed = 0

    # associativities compared by compare_demo.py
    sweep_ways = (1, 2, 4, 8)


class CacheConfig(namedtuple('CacheConfig', ['s', 'E', 'b'])):
    """Immutable cache geometry.

    s: set index bits, E: associativity, b: block offset bits.
    """

    __slots__ = ()

    @classmethod
    def from_config(cls, cfg=Config):
        return cls(cfg.set_bits, cfg.associativity, cfg.block_bits)

    def validate(self):
        """Raise ConfigurationError unless every field is a positive int and s + b fits an address."""
        for name, value in zip(self._fields, self):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.s + self.b > ADDRESS_WIDTH:
            raise ConfigurationError(
                f"s + b = {self.s + self.b} exceeds the {ADDRESS_WIDTH}-bit address width")
        return self

    @property
    def num_sets(self):
        return 1 << self.s

    @property
    def block_size(self):
        return 1 << self.b

    @property
    def capacity(self):
        """Total bytes the cache can hold."""
        return self.num_sets * self.E * self.block_size
