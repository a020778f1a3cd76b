"""Folds a post-order stream of parse events into an expression tree.

The front end resolves precedence and grouping. It emits operand events as it
meets literals and one group event each time it closes an additive or
multiplicative group, so a group always consumes the operands pushed most
recently. For ``1+2*3`` the stream is::

    NumberEvent("1"), NumberEvent("2"), NumberEvent("3"),
    MultGroupEvent(("*",)), AddGroupEvent(("+",))

Groups fold left to right, which keeps ``1-2-3`` as ``(1-2)-3``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from .errors import MalformedExpressionError, UnsupportedOperatorError
from .models import BinaryOperation, ConstantOperand, Dice, DiceOperand, Expression, OperationKind


logger = logging.getLogger(__name__)

ADDITIVE_OPERATORS: dict[str, OperationKind] = {
    "+": OperationKind.ADD,
    "-": OperationKind.SUBTRACT,
}

MULTIPLICATIVE_OPERATORS: dict[str, OperationKind] = {
    "*": OperationKind.MULTIPLY,
    "/": OperationKind.DIVIDE,
}


@dataclass(frozen=True)
class NumberEvent:
    text: str


@dataclass(frozen=True)
class DiceEvent:
    sides: str
    quantity: str | None = None
    sign: str | None = None


@dataclass(frozen=True)
class AddGroupEvent:
    operators: tuple[str, ...]


@dataclass(frozen=True)
class MultGroupEvent:
    operators: tuple[str, ...]


ParseEvent: TypeAlias = NumberEvent | DiceEvent | AddGroupEvent | MultGroupEvent


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise MalformedExpressionError(f"[MALFORMED_EXPRESSION] '{text}' is not an integer literal.") from None


def constant_operand(text: str) -> ConstantOperand:
    return ConstantOperand(value=_parse_int(text))


def dice_operand(event: DiceEvent) -> DiceOperand:
    if event.sign not in (None, "+", "-"):
        raise MalformedExpressionError(f"[MALFORMED_EXPRESSION] {event.sign!r} is not a sign for a dice literal.")
    if event.quantity and not event.quantity.isdigit():
        raise MalformedExpressionError(f"[MALFORMED_EXPRESSION] Dice quantity {event.quantity!r} must be unsigned digits.")

    # Only an explicit unary sign on the literal makes the quantity negative.
    quantity = _parse_int(event.quantity) if event.quantity else 1
    if event.sign == "-":
        quantity = -quantity
    return DiceOperand(dice=Dice(quantity=quantity, sides=_parse_int(event.sides)))


def fold_group(
    operands: list[Expression], operators: tuple[str, ...], table: dict[str, OperationKind]
) -> Expression:
    """Combine ``len(operators) + 1`` operands left to right."""

    if len(operands) != len(operators) + 1:
        raise MalformedExpressionError(
            f"[MALFORMED_EXPRESSION] {len(operators)} operator(s) need {len(operators) + 1} operands,"
            f" got {len(operands)}."
        )

    node = operands[0]
    for operator, right in zip(operators, operands[1:]):
        kind = table.get(operator)
        if kind is None:
            raise UnsupportedOperatorError(f"[UNSUPPORTED_OPERATOR] The {operator!r} operator is invalid here.")
        node = BinaryOperation(kind=kind, left=node, right=right)
    return node


def build_tree(events: Iterable[ParseEvent]) -> Expression:
    """Build the single-rooted tree described by ``events``."""

    stack: list[Expression] = []

    for event in events:
        match event:
            case NumberEvent(text=text):
                node = constant_operand(text)
            case DiceEvent():
                node = dice_operand(event)
            case AddGroupEvent(operators=operators) | MultGroupEvent(operators=operators):
                table = ADDITIVE_OPERATORS if isinstance(event, AddGroupEvent) else MULTIPLICATIVE_OPERATORS
                needed = len(operators) + 1
                if len(stack) < needed:
                    raise MalformedExpressionError(
                        f"[MALFORMED_EXPRESSION] {len(operators)} operator(s) need {needed} operands,"
                        f" only {len(stack)} available."
                    )
                operands = stack[-needed:]
                del stack[-needed:]
                node = fold_group(operands, operators, table)
            case _:
                raise MalformedExpressionError(f"[MALFORMED_EXPRESSION] Unknown parse event {event!r}.")

        logger.debug("Parsed %s, %d operand(s) on the stack", type(node).__name__, len(stack) + 1)
        stack.append(node)

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"[MALFORMED_EXPRESSION] Expected a single root expression, found {len(stack)}."
        )
    return stack[0]
