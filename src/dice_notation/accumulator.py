"""Flattened walks over an expression tree.

``interpret`` hands every node of the in-order sequence to an accumulator,
which keeps whatever state it needs between nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Protocol, TypeVar

from .models import BinaryOperation, ConstantOperand, Dice, DiceOperand, Expression, OperationKind


logger = logging.getLogger(__name__)

V = TypeVar("V", covariant=True)


class NotationAccumulator(Protocol[V]):
    def binary_operation(self, node: BinaryOperation) -> None: ...

    def constant_operand(self, node: ConstantOperand) -> None: ...

    def dice_operand(self, node: DiceOperand) -> None: ...

    def get_value(self) -> V: ...

    def reset(self) -> None: ...


def inorder(root: Expression) -> Iterator[Expression]:
    """Yield the left subtree, the node itself, then the right subtree."""

    stack: list[BinaryOperation] = []
    node = root
    while True:
        while isinstance(node, BinaryOperation):
            stack.append(node)
            node = node.left
        yield node
        if not stack:
            return
        parent = stack.pop()
        yield parent
        node = parent.right


def interpret(root: Expression, accumulator: NotationAccumulator[V]) -> V:
    logger.debug("Interpreting %s root", type(root).__name__)

    accumulator.reset()
    for node in inorder(root):
        match node:
            case BinaryOperation():
                accumulator.binary_operation(node)
            case ConstantOperand():
                accumulator.constant_operand(node)
            case DiceOperand():
                accumulator.dice_operand(node)
            case _:
                logger.warning("Unsupported expression of type %s", type(node).__name__)
    return accumulator.get_value()


class DiceAccumulator:
    """Collects every dice term, reversing those that follow a subtraction.

    The sign is a single flag, not a stack. Each binary node overwrites it and
    each constant clears it. Nothing is inherited from enclosing nodes:
    in ``1-2d4*3d6`` the multiplication resets the flag, so only ``2d4`` is
    reported as negative.
    """

    def __init__(self) -> None:
        self._dice: list[Dice] = []
        self._negative = False

    def binary_operation(self, node: BinaryOperation) -> None:
        self._negative = node.kind is OperationKind.SUBTRACT

    def constant_operand(self, node: ConstantOperand) -> None:
        self._negative = False

    def dice_operand(self, node: DiceOperand) -> None:
        self._dice.append(node.dice.reversed() if self._negative else node.dice)

    def get_value(self) -> list[Dice]:
        return list(self._dice)

    def reset(self) -> None:
        self._negative = False
        self._dice.clear()

    def transform(self, root: Expression) -> list[Dice]:
        return interpret(root, self)


def collect_dice(root: Expression) -> list[Dice]:
    return DiceAccumulator().transform(root)
