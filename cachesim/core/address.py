from typing import NamedTuple


class DecodedAddress(NamedTuple):
    tag: int
    set_index: int
    block_offset: int


class AddressDecoder:
    """Split an address into tag, set index and block offset fields.

    Layout, high to low bits: | tag | s set-index bits | b offset bits |

    Args:
        s: Number of set index bits
        b: Number of block offset bits
    """

    def __init__(self, s: int, b: int):
        self.s = s
        self.b = b
        self.set_mask = (1 << s) - 1
        self.offset_mask = (1 << b) - 1

    def decode(self, addr: int) -> DecodedAddress:
        return DecodedAddress(
            tag=addr >> (self.s + self.b),
            set_index=(addr >> self.b) & self.set_mask,
            block_offset=addr & self.offset_mask,
        )

    def set_index(self, addr: int) -> int:
        return (addr >> self.b) & self.set_mask

    def tag(self, addr: int) -> int:
        return addr >> (self.s + self.b)

    def compose(self, tag: int, set_index: int, block_offset: int = 0) -> int:
        """Inverse of decode(); handy for building conflicting addresses."""
        return (tag << (self.s + self.b)) | (set_index << self.b) | block_offset


def decode_address(addr: int, s: int, b: int) -> DecodedAddress:
    return AddressDecoder(s, b).decode(addr)
