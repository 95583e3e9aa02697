"""Error types for sim-monitor."""


class MonitorError(Exception):
    """Base error for sim-monitor."""
    pass


class ExprError(MonitorError):
    """Expression could not be evaluated."""
    pass


class LexError(ExprError):
    """No lexer rule matches at some input position.

    Renders as::

        no match at position 2
        1 # 2
          ^
    """

    def __init__(self, text, position):
        self.text = text
        self.position = position
        super().__init__(self._format())

    def _format(self):
        return (f"no match at position {self.position}\n"
                f"{self.text}\n"
                f"{' ' * self.position}^")


class TokenCapacityExceeded(ExprError):
    """Expression produced more tokens than the token sequence holds."""
    pass


class ParseError(ExprError):
    """Malformed token range: bad parentheses, missing operator, etc."""
    pass


class DivisionByZero(ExprError):
    """Right operand of ``/`` evaluated to zero."""
    pass


class UnknownRegister(ExprError):
    """Register name is not in the register table."""
    pass


class NumericFormatError(ExprError):
    """Literal payload holds a character outside its digit set."""
    pass


class MemoryAccessError(MonitorError):
    """Address range falls outside the emulated memory."""
    pass
