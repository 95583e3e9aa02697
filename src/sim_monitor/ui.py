"""Interactive monitor console.

Commands::

    help [CMD]     list commands, or describe one
    q              quit
    info r         dump registers
    x N EXPR       examine N 4-byte words starting at EXPR
    p EXPR         print the value of EXPR

Every user error is reported on the output stream; nothing typed at
the prompt raises.
"""

import sys

from .errors import MonitorError, MemoryAccessError
from .expr import Evaluator

PROMPT = '(monitor) '
WORDS_PER_LINE = 4


class Monitor:
    """Command dispatcher bound to one register file and memory."""

    def __init__(self, registers, memory, out=None):
        self.registers = registers
        self.memory = memory
        self.out = out if out is not None else sys.stdout
        self.evaluator = Evaluator(registers.read, memory.read)
        # (name, description, handler)
        self.commands = (
            ('help', 'Display information about all supported commands', self.cmd_help),
            ('q', 'Exit the monitor', self.cmd_q),
            ('info', 'Display the register status (info r)', self.cmd_info),
            ('x', 'Evaluate EXPR and print N consecutive 4-byte words '
                  'starting at that address (x N EXPR)', self.cmd_x),
            ('p', 'Print the value of expression EXPR (p EXPR)', self.cmd_p),
        )

    def _print(self, *args, **kwargs):
        print(*args, file=self.out, **kwargs)

    # ── Dispatch ──

    def execute(self, line):
        """Run one command line. Returns False when the monitor should exit."""
        parts = line.strip().split(None, 1)
        if not parts:
            return True
        name = parts[0]
        args = parts[1] if len(parts) > 1 else None
        for cmd_name, _, handler in self.commands:
            if cmd_name == name:
                return handler(args)
        self._print(f"Unknown command '{name}'")
        return True

    def run(self, input_fn=input):
        """Read-eval loop until ``q`` or end of input."""
        while True:
            try:
                line = input_fn(PROMPT)
            except EOFError:
                self._print()
                return
            if not self.execute(line):
                return

    # ── Commands ──

    def cmd_help(self, args):
        if args is None:
            for name, desc, _ in self.commands:
                self._print(f"{name} - {desc}")
            return True
        arg = args.split()[0]
        for name, desc, _ in self.commands:
            if name == arg:
                self._print(f"{name} - {desc}")
                return True
        self._print(f"Unknown command '{arg}'")
        return True

    def cmd_q(self, args):
        return False

    def cmd_info(self, args):
        if args is None or not args.strip().startswith('r'):
            self._print("Usage: info r")
            return True
        for name, value in self.registers.items():
            self._print(f"${name}\t0x{value:08x}\t{value}")
        return True

    def cmd_x(self, args):
        parts = args.split(None, 1) if args else []
        if len(parts) < 2:
            self._print("Input error: usage is x N EXPR")
            return True
        try:
            n = int(parts[0])
        except ValueError:
            self._print(f"Input error: bad count '{parts[0]}'")
            return True
        try:
            addr = self.evaluator.value(parts[1])
        except MonitorError as e:
            self._print(f"Invalid expression: {e}")
            return True

        for row in range(0, n, WORDS_PER_LINE):
            base = (addr + 4 * row) & 0xFFFFFFFF
            words = []
            try:
                for i in range(min(WORDS_PER_LINE, n - row)):
                    words.append(self.memory.read((base + 4 * i) & 0xFFFFFFFF, 4))
            except MemoryAccessError as e:
                if words:
                    self._print(self._format_row(base, words))
                self._print(f"Cannot access memory: {e}")
                return True
            self._print(self._format_row(base, words))
        return True

    @staticmethod
    def _format_row(base, words):
        return f"0x{base:08x}: " + ' '.join(f"0x{w:08x}" for w in words)

    def cmd_p(self, args):
        if not args:
            self._print("Input error: usage is p EXPR")
            return True
        try:
            value = self.evaluator.value(args)
        except MonitorError as e:
            self._print(f"Invalid expression: {e}")
            return True
        self._print(f"0x{value:08x}\t{value}")
        return True
