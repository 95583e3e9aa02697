"""sim-monitor CLI: evaluate expressions against a simulated x86 CPU.

Usage:
    sim-monitor                              Interactive monitor
    sim-monitor '2+3*4' '0x10 == 16'         Evaluate and exit
    sim-monitor -r eax=0x1000 '$eax + 4'     Preset registers
    sim-monitor -i prog.bin '*$eip'          Load a raw image at 0x100000
    sim-monitor -- '-5+2'                    Leading '-' needs --

Setup order:
    1. Allocate memory (--mem-size)
    2. Load image (-i), eip := load address
    3. Apply register presets (-r), left to right
    4. Evaluate EXPRs, or start the interactive monitor
"""

import argparse
import logging
import sys

from .cpu import RegisterFile
from .errors import MonitorError, ExprError, MemoryAccessError
from .memory import Memory, DEFAULT_MEM_SIZE, DEFAULT_LOAD_ADDR
from .ui import Monitor

logger = logging.getLogger(__name__)


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='sim-monitor',
        description='Debug monitor for a simulated x86 CPU.',
        epilog="""Examples:
  sim-monitor                          interactive (help lists commands)
  sim-monitor -- '8-3-2' '-5+2'        evaluate expressions
  sim-monitor -r esp=0x7c00 '*$esp'    read the word at $esp
  sim-monitor -i kernel.bin -v         load image, debug logging""")

    parser.add_argument('expressions', nargs='*', metavar='EXPR',
                        help='Expressions to evaluate (default: interactive)')
    parser.add_argument('-r', '--reg', action='append', default=[],
                        metavar='NAME=EXPR',
                        help='Set a register before evaluating (repeatable)')
    parser.add_argument('-i', '--image', default=None,
                        help='Raw binary image to load into memory')
    parser.add_argument('--load-addr', default=hex(DEFAULT_LOAD_ADDR),
                        metavar='EXPR',
                        help=f'Image load address (default: {DEFAULT_LOAD_ADDR:#x})')
    parser.add_argument('--mem-size', type=int, default=DEFAULT_MEM_SIZE,
                        metavar='BYTES',
                        help=f'Emulated memory size (default: {DEFAULT_MEM_SIZE})')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging (lexer matches, evaluation errors)')

    args = parser.parse_args(argv)

    if args.mem_size <= 0:
        parser.error(f"--mem-size must be positive, got {args.mem_size}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    try:
        return run(args)
    except MonitorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130


def _apply_register(monitor, assignment):
    """Apply one ``NAME=EXPR`` preset."""
    name, sep, expr = assignment.partition('=')
    name = name.strip().lstrip('$')
    if not sep or not name:
        raise MonitorError(
            f"Bad register preset '{assignment}' (expected NAME=EXPR)")
    value = monitor.evaluator.value(expr)
    monitor.registers.write(name, value)
    logger.debug("Preset $%s = 0x%08x", name, value)


def _load_image(monitor, path, load_addr):
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise MonitorError(f"Cannot read image {path}: {e.strerror}")
    addr = monitor.evaluator.value(load_addr)
    monitor.memory.load(data, addr)
    monitor.registers.eip = addr
    print(f"Loaded: {path} ({len(data):,} bytes at 0x{addr:08x})")


def run(args) -> int:
    """Set up the machine and evaluate or go interactive."""
    monitor = Monitor(RegisterFile(), Memory(args.mem_size))

    if args.image:
        _load_image(monitor, args.image, args.load_addr)
    for assignment in args.reg:
        _apply_register(monitor, assignment)

    if not args.expressions:
        monitor.run()
        return 0

    status = 0
    for expr in args.expressions:
        try:
            value = monitor.evaluator.value(expr)
        except (ExprError, MemoryAccessError) as e:
            print(f"{expr}: {e}", file=sys.stderr)
            status = 1
            continue
        print(f"{expr} = 0x{value:08x} ({value})")
    return status
