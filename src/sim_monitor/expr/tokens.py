"""Token kinds and the lexer rule table.

Rules are tried strictly in table order and the first anchored match wins,
so order matters where patterns overlap: hex (``0x1F``) must precede
decimal, or the decimal rule would take the leading ``0``.
"""

import enum
import re
from collections import namedtuple

MAX_TOKENS = 32        # token sequence capacity
MAX_TOKEN_TEXT = 31    # literal/register payload cap (longer is truncated)


class TokenKind(enum.Enum):
    END = 'end'
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    EQ = '=='
    LPAREN = '('
    RPAREN = ')'
    NUM = 'num'
    HEX = 'hex'
    REG = 'reg'
    DEREF = 'deref'
    NEG = 'neg'


# Kinds that carry their matched text.
PAYLOAD_KINDS = frozenset((TokenKind.NUM, TokenKind.HEX, TokenKind.REG))

# Kinds after which ``*`` / ``-`` are binary.
OPERAND_KINDS = frozenset((TokenKind.NUM, TokenKind.HEX, TokenKind.REG,
                           TokenKind.RPAREN))


Token = namedtuple('Token', ('kind', 'text', 'pos'))
Token.__doc__ = """One lexed token.

``text`` is the matched substring for literal/register kinds, ``''``
otherwise. ``pos`` is the offset of the match in the input.
"""


# ── Rule table ───────────────────────────────────────────────────────

# None marks whitespace: matched and skipped, no token emitted.
RULES = tuple((re.compile(pattern), kind) for pattern, kind in (
    (r' +',                        None),
    (r'\+',                        TokenKind.PLUS),
    (r'==',                        TokenKind.EQ),
    (r'0[xX][0-9a-fA-F]+',         TokenKind.HEX),
    (r'[0-9]+',                    TokenKind.NUM),
    (r'\$[a-zA-Z_][a-zA-Z0-9_]*',  TokenKind.REG),
    (r'\(',                        TokenKind.LPAREN),
    (r'\)',                        TokenKind.RPAREN),
    (r'\*',                        TokenKind.STAR),
    (r'/',                         TokenKind.SLASH),
    (r'-',                         TokenKind.MINUS),
))
