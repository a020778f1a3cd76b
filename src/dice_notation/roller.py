"""Roll engine and the transformers that evaluate an expression tree."""

from __future__ import annotations

import logging
from typing import assert_never

from .errors import DivisionByZeroError, InvalidDiceError
from .generator import NumberGenerator, from_settings
from .models import (
    BinaryOperation,
    ConstantOperand,
    Dice,
    DiceOperand,
    Expression,
    OperationKind,
    RollHistory,
    RollResult,
)


logger = logging.getLogger(__name__)


def roll_dice(dice: Dice, generator: NumberGenerator) -> RollResult:
    """Roll every die of a term.

    A negative quantity rolls ``abs(quantity)`` dice and negates each value,
    so the whole term counts against the total.
    """

    if dice.sides <= 0:
        raise InvalidDiceError(
            f"[INVALID_DIE] Dice need at least one side, got '{dice.notation}'. Example: '2d6'."
        )

    sign = -1 if dice.quantity < 0 else 1
    rolls = tuple(sign * generator.generate(dice.sides) for _ in range(abs(dice.quantity)))
    return RollResult(dice=dice, rolls=rolls)


def divide(left: int, right: int) -> int:
    """Integer division truncating toward zero (``-7 / 2 == -3``)."""

    if right == 0:
        raise DivisionByZeroError(f"[DIVISION_BY_ZERO] Cannot divide {left} by zero.")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class RollTransformer:
    """Evaluates a tree to its total, keeping the roll of every dice term.

    ``results`` belongs to the last ``transform`` call and is replaced on the
    next one.
    """

    def __init__(self, generator: NumberGenerator | None = None) -> None:
        self.generator = generator if generator is not None else from_settings()
        self.results: list[RollResult] = []

    def transform(self, root: Expression) -> int:
        self.results = []
        return root.transform(self)

    def visit_constant(self, node: ConstantOperand) -> int:
        return node.value

    def visit_dice(self, node: DiceOperand) -> int:
        result = roll_dice(node.dice, self.generator)
        logger.debug("Rolled %s: %s", node.dice, list(result.rolls))
        self.results.append(result)
        return result.total_roll

    def visit_binary(self, node: BinaryOperation, left: int, right: int) -> int:
        match node.kind:
            case OperationKind.ADD:
                return left + right
            case OperationKind.SUBTRACT:
                return left - right
            case OperationKind.MULTIPLY:
                return left * right
            case OperationKind.DIVIDE:
                return divide(left, right)
            case _ as unreachable:
                assert_never(unreachable)


class DiceRoller:
    """Rolls a tree and reports the full history of the evaluation."""

    def __init__(self, generator: NumberGenerator | None = None) -> None:
        self._transformer = RollTransformer(generator)

    def transform(self, root: Expression) -> RollHistory:
        total = self._transformer.transform(root)
        return RollHistory(results=tuple(self._transformer.results), total_roll=total, text=root.expression)


def roll(root: Expression, generator: NumberGenerator | None = None) -> int:
    return RollTransformer(generator).transform(root)
