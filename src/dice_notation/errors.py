from __future__ import annotations


class DiceError(ValueError):
    """Base for every notation, building and evaluation failure."""


class InvalidDiceError(DiceError):
    """A dice term with non-positive sides reached the roll engine."""


class InvalidArgumentError(DiceError):
    """A number generator was asked for a value below 1."""


class MalformedExpressionError(DiceError):
    """Operand and operator counts do not fold into a single tree."""


class UnsupportedOperatorError(DiceError):
    """An operator token other than + - * /."""


class DivisionByZeroError(DiceError):
    pass


class NotationSyntaxError(DiceError):
    """Text the front end cannot turn into parse events."""


class LimitExceededError(DiceError):
    pass
