"""Load calculation from a max weight and a percentage expression."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict, List, Optional

from ..models.progression import ProgressionStep

RANGE_SEPARATOR = "–"  # en dash, as written in the progression tables

# wide enough for any finite float at one decimal place
_ROUNDING = Context(prec=400, rounding=ROUND_HALF_UP)


def parse_number(value: str) -> Optional[float]:
    """Finite float from user input, accepting a decimal comma; None otherwise."""
    try:
        number = float(str(value).replace(",", ".").strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _fixed(value: float) -> str:
    # half-way cases round up on the exact binary value
    return str(Decimal(value).quantize(Decimal("0.1"), context=_ROUNDING))


def display_weight(max_weight: str, percentage_expression: str) -> str:
    """
    "100", "50%"     -> "50.0 kg"
    "100", "65–70%"  -> "65.0 – 70.0 kg"

    Returns "" when the max weight is missing, non-positive or unparsable,
    or when the percentage expression is not one or two numbers.
    """
    max_value = parse_number(max_weight or "")
    if max_value is None or max_value <= 0:
        return ""

    parts = (percentage_expression or "").replace("%", "").split(RANGE_SEPARATOR)
    percents = [parse_number(p) for p in parts]
    if any(p is None for p in percents):
        return ""

    if len(percents) == 1:
        return f"{_fixed(max_value * percents[0] / 100)} kg"
    if len(percents) == 2:
        low, high = (max_value * p / 100 for p in percents)
        return f"{_fixed(low)} {RANGE_SEPARATOR} {_fixed(high)} kg"
    return ""


def prescribed_loads(max_weight: Optional[str], steps: List[ProgressionStep]) -> List[Dict[str, Any]]:
    """Progression steps with the computed load next to each one."""
    return [
        {**step.to_dict(), "set": idx + 1, "load": display_weight(max_weight or "", step.percentage_expression)}
        for idx, step in enumerate(steps)
    ]
