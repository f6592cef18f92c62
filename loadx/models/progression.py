from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class StepKind(str, Enum):
    WARMUP = "warmup"
    RECOGNITION = "recognition"
    WORK = "work"


@dataclass(frozen=True)
class ProgressionStep:
    """One prescribed set: rep range, percentage of max and set category."""

    rep_range: str
    percentage_expression: str
    kind: StepKind
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repRange": self.rep_range,
            "percentageExpression": self.percentage_expression,
            "label": self.label,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressionStep":
        return cls(
            rep_range=data["repRange"],
            percentage_expression=data["percentageExpression"],
            kind=StepKind(data["kind"]),
            label=data.get("label"),
        )
