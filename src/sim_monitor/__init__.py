"""sim-monitor: Debug monitor for a simulated x86 CPU.

Supports:
  - Expression evaluation: decimal/hex literals, $registers, + - * / ==,
    parentheses, unary negate and dereference
  - Unsigned 32-bit wraparound arithmetic throughout
  - Register file (eax..edi, eip) and flat little-endian memory
  - Monitor commands: help, q, info r, x N EXPR, p EXPR

Architecture:
  expr/       lexer → unary disambiguation → recursive range evaluator
  cpu, memory collaborators queried by the evaluator
  ui, cli     command layer
"""

__version__ = '1.0.0'
