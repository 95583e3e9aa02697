"""Register file of the simulated x86 CPU.

Eight 32-bit general purpose registers in encoding order, plus the
instruction pointer:

    eax ecx edx ebx esp ebp esi edi   eip

Names are lowercase and case-sensitive, without the ``$`` used in
expressions.
"""

import numpy as np

from .errors import UnknownRegister

GPR_NAMES = ('eax', 'ecx', 'edx', 'ebx', 'esp', 'ebp', 'esi', 'edi')
EIP = 'eip'
REG_NAMES = GPR_NAMES + (EIP,)

_INDEX = {name: i for i, name in enumerate(REG_NAMES)}


class RegisterFile:
    """32-bit register storage backed by a ``uint32`` array."""

    def __init__(self):
        self._regs = np.zeros(len(REG_NAMES), dtype=np.uint32)

    def read(self, name: str):
        """Value of register *name*, or None if there is no such register."""
        i = _INDEX.get(name)
        if i is None:
            return None
        return int(self._regs[i])

    def write(self, name: str, value: int):
        i = _INDEX.get(name)
        if i is None:
            raise UnknownRegister(f"Unknown register '{name}'")
        self._regs[i] = value & 0xFFFFFFFF

    @property
    def eip(self) -> int:
        return int(self._regs[_INDEX[EIP]])

    @eip.setter
    def eip(self, value: int):
        self.write(EIP, value)

    def items(self):
        """``(name, value)`` pairs, general purpose registers first."""
        return [(name, int(v)) for name, v in zip(REG_NAMES, self._regs)]

    def __repr__(self):
        regs = ' '.join(f"{n}=${v:08X}" for n, v in self.items())
        return f"Regs({regs})"
