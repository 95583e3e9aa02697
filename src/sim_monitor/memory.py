"""Byte-addressed emulated memory.

Flat little-endian address space starting at 0, backed by a ``uint8``
array. Multi-byte accesses are 1, 2 or 4 bytes wide, matching the
monitor's word size.
"""

import numpy as np

from .errors import MemoryAccessError

DEFAULT_MEM_SIZE = 8 * 1024 * 1024    # 8MB
DEFAULT_LOAD_ADDR = 0x100000          # image load address / initial eip

_WIDTHS = (1, 2, 4)


class Memory:
    """Flat physical memory of *size* bytes, zero-filled."""

    def __init__(self, size: int = DEFAULT_MEM_SIZE):
        if size <= 0:
            raise ValueError(f"Memory size must be positive, got {size}")
        self._mem = np.zeros(size, dtype=np.uint8)

    @property
    def size(self) -> int:
        return len(self._mem)

    def _check(self, addr, length):
        if addr < 0 or addr + length > len(self._mem):
            raise MemoryAccessError(
                f"Address ${addr:08X} (+{length}) outside memory "
                f"($00000000-${len(self._mem) - 1:08X})")

    def read(self, addr: int, width: int = 4) -> int:
        """Read a little-endian value of *width* bytes at *addr*."""
        if width not in _WIDTHS:
            raise ValueError(f"width must be 1, 2 or 4, got {width}")
        self._check(addr, width)
        return int.from_bytes(self._mem[addr:addr + width].tobytes(), 'little')

    def write(self, addr: int, value: int, width: int = 4):
        """Write the low *width* bytes of *value* at *addr*, little-endian."""
        if width not in _WIDTHS:
            raise ValueError(f"width must be 1, 2 or 4, got {width}")
        self._check(addr, width)
        value &= (1 << (8 * width)) - 1
        self._mem[addr:addr + width] = np.frombuffer(
            value.to_bytes(width, 'little'), dtype=np.uint8)

    def load(self, data: bytes, addr: int = DEFAULT_LOAD_ADDR):
        """Copy a raw image into memory at *addr*."""
        self._check(addr, len(data))
        self._mem[addr:addr + len(data)] = np.frombuffer(bytes(data), dtype=np.uint8)
