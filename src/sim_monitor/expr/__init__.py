"""Monitor expression language.

Expressions combine:
  - Decimal (``42``) and hex (``0x2A``) literals
  - Registers (``$eax`` ... ``$edi``, ``$eip``)
  - Binary ``+ - * /`` and ``==``, with parentheses
  - Unary ``-`` (negate) and ``*`` (read 4 bytes at address)

Usage as library:
    from sim_monitor.expr import Evaluator
    ev = Evaluator(regs.read, mem.read)
    value, ok = ev.evaluate('*($esp + 4) == 0x10')
"""

from .evaluator import Evaluator, parse_decimal, parse_hex, MASK, DEREF_WIDTH
from .lexer import lex, disambiguate
from .tokens import Token, TokenKind, RULES, MAX_TOKENS, MAX_TOKEN_TEXT


def evaluate(text, registers, memory):
    """Evaluate *text* against a RegisterFile and Memory.

    Returns:
        ``(value, True)`` on success, ``(0, False)`` on failure.
    """
    return Evaluator(registers.read, memory.read).evaluate(text)
