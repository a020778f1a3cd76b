from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol, TypeAlias, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Dice:
    quantity: int
    sides: int

    @property
    def notation(self) -> str:
        if self.quantity == 1:
            return f"d{self.sides}"
        return f"{self.quantity}d{self.sides}"

    def reversed(self) -> Dice:
        return Dice(quantity=-self.quantity, sides=self.sides)

    def __str__(self) -> str:
        return self.notation


class OperationKind(enum.Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return self.value


class Transformer(Protocol[T]):
    """Strategy applied by ``Expression.transform``.

    Leaves are handed over as they are; a binary node is handed over together
    with the already transformed values of its two children.
    """

    def visit_constant(self, node: ConstantOperand) -> T: ...

    def visit_dice(self, node: DiceOperand) -> T: ...

    def visit_binary(self, node: BinaryOperation, left: T, right: T) -> T: ...


@dataclass(frozen=True)
class ConstantOperand:
    value: int

    @property
    def expression(self) -> str:
        return str(self.value)

    def transform(self, transformer: Transformer[T]) -> T:
        return transformer.visit_constant(self)


@dataclass(frozen=True)
class DiceOperand:
    dice: Dice

    @property
    def expression(self) -> str:
        return self.dice.notation

    def transform(self, transformer: Transformer[T]) -> T:
        return transformer.visit_dice(self)


@dataclass(frozen=True)
class BinaryOperation:
    kind: OperationKind
    left: Expression
    right: Expression

    @property
    def expression(self) -> str:
        return f"{self.left.expression}{self.kind.symbol}{self.right.expression}"

    def transform(self, transformer: Transformer[T]) -> T:
        left = self.left.transform(transformer)
        right = self.right.transform(transformer)
        return transformer.visit_binary(self, left, right)


Expression: TypeAlias = ConstantOperand | DiceOperand | BinaryOperation


@dataclass(frozen=True)
class RollResult:
    dice: Dice
    rolls: tuple[int, ...]

    @property
    def total_roll(self) -> int:
        return sum(self.rolls)


@dataclass(frozen=True)
class RollHistory:
    results: tuple[RollResult, ...]
    total_roll: int
    text: str

    def __str__(self) -> str:
        return self.text
