from __future__ import annotations

import re
from dataclasses import dataclass

from .builder import AddGroupEvent, DiceEvent, MultGroupEvent, NumberEvent, ParseEvent, build_tree
from .errors import NotationSyntaxError
from .models import Expression


_TOKEN_RE = re.compile(r"(?P<number>\d+)|(?P<dice>d)|(?P<add>[+-])|(?P<mult>[*/])|(?P<space>\s+)")


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int


def _reject_out_of_scope_syntax(raw_text: str) -> None:
    if any(ch in raw_text for ch in ("(", ")")):
        raise NotationSyntaxError(
            "[OUT_OF_SCOPE_SYNTAX] Parentheses are not supported. Example: '2d6 * 2 + 3'."
        )
    if "%" in raw_text:
        raise NotationSyntaxError(
            "[OUT_OF_SCOPE_SYNTAX] Percentile dice are not supported, use d100 instead. Example: '1d100'."
        )


def tokenize(text: str) -> list[Token]:
    if not text or not text.strip():
        raise NotationSyntaxError("[UNPARSEABLE_INPUT] Empty input. Example: '3d6 + 2' or '1d20 - 1d4 * 2'.")

    _reject_out_of_scope_syntax(text)

    s = text.strip().lower()
    tokens: list[Token] = []
    pos = 0
    while pos < len(s):
        m = _TOKEN_RE.match(s, pos)
        if not m:
            raise NotationSyntaxError(
                f"[UNPARSEABLE_INPUT] Could not understand '{s[pos]}' at position {pos}. Example: '3d6 + 2'."
            )
        if m.lastgroup != "space":
            tokens.append(Token(kind=m.lastgroup, text=m.group(), position=pos))
        pos = m.end()
    return tokens


class _EventEmitter:
    """Recursive descent over the tokens, emitting events in post-order.

    notation       := additive
    additive       := multiplicative (('+' | '-') multiplicative)*
    multiplicative := operand (('*' | '/') operand)*
    operand        := sign? (digits? 'd' digits | digits)
    """

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._index = 0
        self.events: list[ParseEvent] = []

    def _peek(self, kind: str) -> bool:
        return self._index < len(self._tokens) and self._tokens[self._index].kind == kind

    def _next(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _expect(self, kind: str, what: str) -> Token:
        if not self._peek(kind):
            raise self._unexpected(what)
        return self._next()

    def _unexpected(self, what: str) -> NotationSyntaxError:
        if self._index >= len(self._tokens):
            return NotationSyntaxError(f"[UNPARSEABLE_INPUT] Expected {what} but the input ended. Example: '3d6 + 2'.")
        token = self._tokens[self._index]
        return NotationSyntaxError(
            f"[UNPARSEABLE_INPUT] Expected {what} but found '{token.text}' at position {token.position}."
            " Example: '3d6 + 2'."
        )

    def notation(self) -> list[ParseEvent]:
        self._additive()
        if self._index < len(self._tokens):
            raise self._unexpected("an operator")
        return self.events

    def _additive(self) -> None:
        operators: list[str] = []
        self._multiplicative()
        while self._peek("add"):
            operators.append(self._next().text)
            self._multiplicative()
        if operators:
            self.events.append(AddGroupEvent(operators=tuple(operators)))

    def _multiplicative(self) -> None:
        operators: list[str] = []
        self._operand()
        while self._peek("mult"):
            operators.append(self._next().text)
            self._operand()
        if operators:
            self.events.append(MultGroupEvent(operators=tuple(operators)))

    def _operand(self) -> None:
        sign = self._next().text if self._peek("add") else None

        quantity = None
        if self._peek("number"):
            quantity = self._next().text
            if not self._peek("dice"):
                self.events.append(NumberEvent(text=f"-{quantity}" if sign == "-" else quantity))
                return
        elif not self._peek("dice"):
            raise self._unexpected("a number or a dice term")

        self._next()
        sides = self._expect("number", "the number of sides")
        self.events.append(DiceEvent(sides=sides.text, quantity=quantity, sign=sign))


def parse_events(text: str) -> list[ParseEvent]:
    return _EventEmitter(tokenize(text)).notation()


def parse(text: str) -> Expression:
    """Parse dice notation such as ``3d6+2`` or ``1d20-1d4*2`` into a tree."""

    return build_tree(parse_events(text))
