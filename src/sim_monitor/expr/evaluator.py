"""Recursive range evaluator for monitor expressions.

No syntax tree is built. ``_eval(tokens, l, r)`` works directly on the
inclusive token range ``[l, r]``:

  1. empty range            → error
  2. single token           → literal or register value
  3. ``( ... )`` spanning   → strip and recurse
  4. otherwise split at the *dominant operator*: the lowest-precedence
     operator outside parentheses, rightmost among equals (so
     ``8-3-2`` is ``(8-3)-2``)
  5. unary operator at the split: only ``[op+1, r]`` is evaluated, so
     in ``--5`` the leading ``-`` is dropped and the result is ``-5``

Precedence (higher binds tighter)::

    ==          1
    + -         2
    * /         3
    unary * -   4

All arithmetic is unsigned 32-bit and wraps silently.
"""

import logging

from ..cpu import REG_NAMES
from ..errors import (ExprError, ParseError, DivisionByZero, UnknownRegister,
                      NumericFormatError, MemoryAccessError)
from .lexer import lex, disambiguate
from .tokens import TokenKind, MAX_TOKENS

logger = logging.getLogger(__name__)

MASK = 0xFFFFFFFF
DEREF_WIDTH = 4

_PRECEDENCE = {
    TokenKind.EQ: 1,
    TokenKind.PLUS: 2,
    TokenKind.MINUS: 2,
    TokenKind.STAR: 3,
    TokenKind.SLASH: 3,
    TokenKind.DEREF: 4,
    TokenKind.NEG: 4,
}

_UNARY_OPS = frozenset((TokenKind.DEREF, TokenKind.NEG))

_HEX_DIGITS = '0123456789abcdefABCDEF'


# ── Leaf resolvers ───────────────────────────────────────────────────

def parse_decimal(text):
    """Decimal digits to a 32-bit value (wraps on overflow)."""
    v = 0
    for c in text:
        if not '0' <= c <= '9':
            raise NumericFormatError(f"Bad decimal literal '{text}'")
        v = (v * 10 + ord(c) - ord('0')) & MASK
    return v


def parse_hex(text):
    """Hex digits, optional ``0x``/``0X`` prefix, to a 32-bit value."""
    digits = text[2:] if text[:2] in ('0x', '0X') else text
    v = 0
    for c in digits:
        if c not in _HEX_DIGITS:
            raise NumericFormatError(f"Bad hex literal '{text}'")
        v = ((v << 4) | int(c, 16)) & MASK
    return v


# ── Evaluator ────────────────────────────────────────────────────────

class Evaluator:
    """Evaluate monitor expressions against a register file and memory.

    Args:
        read_register: ``name -> int | None``; name has no ``$`` prefix.
        read_memory: ``(address, width) -> int``; called with width 4.
        max_tokens: Token sequence capacity per expression.

    The evaluator keeps no per-call state, one instance can serve
    any number of callers.
    """

    def __init__(self, read_register, read_memory, max_tokens=MAX_TOKENS):
        self._read_register = read_register
        self._read_memory = read_memory
        self.max_tokens = max_tokens

    def tokenize(self, text):
        """Lex *text* and tag unary operators."""
        return disambiguate(lex(text, self.max_tokens))

    def value(self, text) -> int:
        """Evaluate *text*, raising ExprError / MemoryAccessError on failure."""
        tokens = self.tokenize(text)
        if not tokens:
            raise ParseError("Empty expression")
        return self._eval(tokens, 0, len(tokens) - 1)

    def evaluate(self, text) -> tuple:
        """Evaluate *text*.

        Returns:
            ``(value, True)`` on success, ``(0, False)`` on any failure.
        """
        try:
            return self.value(text), True
        except (ExprError, MemoryAccessError) as e:
            logger.debug("Cannot evaluate %r: %s", text, e)
            return 0, False

    # ── Range evaluation ──

    def _eval(self, tokens, l, r):
        if l > r:
            raise ParseError("Missing operand")
        if l == r:
            return self._leaf(tokens[l])

        if _spans_parens(tokens, l, r):
            return self._eval(tokens, l + 1, r - 1)

        op = _dominant_op(tokens, l, r)
        if op < 0:
            raise ParseError(
                f"No operator between positions {tokens[l].pos} and {tokens[r].pos}")

        kind = tokens[op].kind
        if kind in _UNARY_OPS:
            rhs = self._eval(tokens, op + 1, r)
            if kind is TokenKind.NEG:
                return -rhs & MASK
            return int(self._read_memory(rhs, DEREF_WIDTH)) & MASK

        lhs = self._eval(tokens, l, op - 1)
        rhs = self._eval(tokens, op + 1, r)

        if kind is TokenKind.PLUS:
            return (lhs + rhs) & MASK
        if kind is TokenKind.MINUS:
            return (lhs - rhs) & MASK
        if kind is TokenKind.STAR:
            return (lhs * rhs) & MASK
        if kind is TokenKind.SLASH:
            if rhs == 0:
                raise DivisionByZero(f"Division by zero at position {tokens[op].pos}")
            return lhs // rhs
        if kind is TokenKind.EQ:
            return int(lhs == rhs)
        raise ParseError(f"Unknown operator '{kind.value}'")

    def _leaf(self, tok):
        if tok.kind is TokenKind.NUM:
            return parse_decimal(tok.text)
        if tok.kind is TokenKind.HEX:
            return parse_hex(tok.text)
        if tok.kind is TokenKind.REG:
            return self._register(tok.text)
        raise ParseError(f"Unexpected '{tok.kind.value}' at position {tok.pos}")

    def _register(self, text):
        name = text[1:] if text.startswith('$') else text
        if name not in REG_NAMES:
            raise UnknownRegister(f"Unknown register '{text}'")
        v = self._read_register(name)
        if v is None:
            raise UnknownRegister(f"Unknown register '{text}'")
        return int(v) & MASK


def _spans_parens(tokens, l, r):
    """True when ``tokens[l]`` and ``tokens[r]`` are one matching pair."""
    if tokens[l].kind is not TokenKind.LPAREN or tokens[r].kind is not TokenKind.RPAREN:
        return False
    depth = 0
    for i in range(l, r + 1):
        kind = tokens[i].kind
        if kind is TokenKind.LPAREN:
            depth += 1
        elif kind is TokenKind.RPAREN:
            depth -= 1
            if depth < 0:
                raise ParseError(f"Unbalanced ')' at position {tokens[i].pos}")
        if i < r and depth == 0:
            return False    # closes early: (a)+(b)
    if depth != 0:
        raise ParseError(f"Unclosed '(' at position {tokens[l].pos}")
    return True


def _dominant_op(tokens, l, r):
    """Index of the operator to split ``[l, r]`` at, or -1."""
    pos, best = -1, None
    depth = 0
    for i in range(l, r + 1):
        kind = tokens[i].kind
        if kind is TokenKind.LPAREN:
            depth += 1
            continue
        if kind is TokenKind.RPAREN:
            depth -= 1
            if depth < 0:
                raise ParseError(f"Unbalanced ')' at position {tokens[i].pos}")
            continue
        if depth:
            continue
        prec = _PRECEDENCE.get(kind)
        if prec is None:
            continue
        if best is None or prec <= best:
            pos, best = i, prec
    return pos
