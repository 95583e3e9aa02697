"""Lexer and unary disambiguation pass.

``lex`` turns text into a flat token list; ``disambiguate`` then decides
for every ``*`` and ``-`` whether it is unary (dereference / negate) or
binary (multiply / subtract), looking one token back.
"""

import logging

from ..errors import LexError, TokenCapacityExceeded
from .tokens import (RULES, Token, TokenKind, PAYLOAD_KINDS, OPERAND_KINDS,
                     MAX_TOKENS, MAX_TOKEN_TEXT)

logger = logging.getLogger(__name__)

_UNARY = {
    TokenKind.STAR: TokenKind.DEREF,
    TokenKind.MINUS: TokenKind.NEG,
}


def lex(text, max_tokens=MAX_TOKENS):
    """Split *text* into tokens using the first matching rule.

    Args:
        text: Expression source, e.g. ``"*($esp + 4) == 0x10"``.
        max_tokens: Token sequence capacity.

    Returns:
        ``list[Token]`` in input order (whitespace dropped).

    Raises:
        LexError: no rule matches at some position.
        TokenCapacityExceeded: more than *max_tokens* tokens.
    """
    tokens = []
    pos = 0
    n = len(text)
    while pos < n:
        for i, (pattern, kind) in enumerate(RULES):
            m = pattern.match(text, pos)
            if m is None:
                continue
            matched = m.group()
            logger.debug('match rules[%d] = "%s" at position %d with len %d: %s',
                         i, pattern.pattern, pos, len(matched), matched)
            if kind is not None:
                if len(tokens) >= max_tokens:
                    raise TokenCapacityExceeded(
                        f"Expression has more than {max_tokens} tokens")
                tokens.append(_make_token(kind, matched, pos))
            pos = m.end()
            break
        else:
            raise LexError(text, pos)
    return tokens


def _make_token(kind, matched, pos):
    if kind not in PAYLOAD_KINDS:
        return Token(kind, '', pos)
    if len(matched) > MAX_TOKEN_TEXT:
        logger.warning("Token at position %d truncated to %d characters: %s",
                       pos, MAX_TOKEN_TEXT, matched)
        matched = matched[:MAX_TOKEN_TEXT]
    return Token(kind, matched, pos)


def disambiguate(tokens):
    """Return a copy of *tokens* with unary ``*`` / ``-`` retagged.

    A ``*`` or ``-`` is unary when it starts the expression or follows
    anything other than a literal, a register or ``)``.
    """
    out = []
    prev = None
    for tok in tokens:
        if tok.kind in _UNARY and (prev is None or prev.kind not in OPERAND_KINDS):
            tok = tok._replace(kind=_UNARY[tok.kind])
        out.append(tok)
        prev = tok
    return out
