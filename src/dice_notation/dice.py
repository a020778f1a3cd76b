from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from .accumulator import collect_dice
from .builder import DiceEvent, NumberEvent, ParseEvent, build_tree
from .config import Settings, settings
from .errors import LimitExceededError
from .generator import NumberGenerator, from_settings
from .models import Dice, Expression
from .parser import parse_events
from .roller import DiceRoller


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def check_limits(dice: list[Dice], config: Settings = settings) -> None:
    for d in dice:
        if abs(d.quantity) > config.max_quantity:
            raise LimitExceededError(
                f"[LIMIT_EXCEEDED] Too many dice in '{d.notation}' (max {config.max_quantity})."
            )
        if d.sides > config.max_sides:
            raise LimitExceededError(f"[LIMIT_EXCEEDED] Too many sides in '{d.notation}' (max {config.max_sides}).")


def check_term_count(events: list[ParseEvent], config: Settings = settings) -> None:
    terms = sum(1 for event in events if isinstance(event, (NumberEvent, DiceEvent)))
    if terms > config.max_terms:
        raise LimitExceededError(f"[LIMIT_EXCEEDED] Too many terms in the expression (max {config.max_terms}).")


def _parse_checked(text: str) -> tuple[Expression, list[Dice]]:
    events = parse_events(text)
    check_term_count(events)
    root = build_tree(events)
    dice = collect_dice(root)
    check_limits(dice)
    return root, dice


def roll_from_text(text: str, generator: NumberGenerator | None = None) -> dict[str, Any]:
    """Parse, validate, then roll. Raises DiceError for invalid input."""

    root, _dice = _parse_checked(text)

    if generator is None:
        generator = from_settings()
    history = DiceRoller(generator).transform(root)

    evaluated_terms: list[dict[str, Any]] = [
        {
            "dice": result.dice.notation,
            "quantity": result.dice.quantity,
            "sides": result.dice.sides,
            "rolls": list(result.rolls),
            "subtotal": result.total_roll,
        }
        for result in history.results
    ]

    explanation_parts = [f"{t['dice']}: rolls {t['rolls']} => {t['subtotal']}" for t in evaluated_terms]
    explanation_parts.append(f"{history.text} => {history.total_roll}")

    return {
        "request_id": uuid.uuid4().hex,
        "timestamp": _now_utc_iso(),
        "input": text,
        "normalized_expression": history.text,
        "rng": {
            "source": getattr(generator, "source", type(generator).__name__),
            "nonce": str(uuid.uuid4()),
        },
        "terms": evaluated_terms,
        "total": history.total_roll,
        "explanation": "; ".join(explanation_parts),
    }


def dice_from_text(text: str) -> dict[str, Any]:
    """List the dice terms of an expression, negated where they are subtracted."""

    root, dice = _parse_checked(text)
    return {
        "input": text,
        "normalized_expression": root.expression,
        "dice": [{"dice": d.notation, "quantity": d.quantity, "sides": d.sides} for d in dice],
    }
