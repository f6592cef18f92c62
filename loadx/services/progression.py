"""
Progression rule table.

Maps a sub-module name to the prescribed sets for an exercise. The first
exercise of a cycle gets an introductory scheme with a recognition set;
later exercises get the plain warmup/work scheme. The tables are literal
periodization prescriptions, not derived values.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from ..models.progression import ProgressionStep, StepKind

WARMUP = StepKind.WARMUP
RECOGNITION = StepKind.RECOGNITION
WORK = StepKind.WORK

FULL_BODY_FIRST = (
    ProgressionStep("10–12", "50%", WARMUP, "Aquecimento"),
    ProgressionStep("6–8", "65%", RECOGNITION, "Reconhecimento"),
    ProgressionStep("4–6", "75–80%", WORK, "Trabalho"),
    ProgressionStep("4–6", "80–85%", WORK, "Trabalho Principal"),
)
FULL_BODY_NEXT = (
    ProgressionStep("8–12", "60–65%", WARMUP),
    ProgressionStep("8–12", "65–75%", WORK),
    ProgressionStep("8–12", "65–75%", WORK),
)

PPL_FIRST = (
    ProgressionStep("8–10", "50–55%", WARMUP),
    ProgressionStep("5–6", "65–70%", RECOGNITION),
    ProgressionStep("4–6", "80–85%", WORK),
    ProgressionStep("3–5", "85–90%", WORK),
)
PPL_NEXT = (
    ProgressionStep("8–12", "60–70%", WARMUP),
    ProgressionStep("8–12", "65–75%", WORK),
    ProgressionStep("8–12", "65–75%", WORK),
    ProgressionStep("10–12", "60–70%", WORK),
)

UPPER_LOWER_FIRST = (
    ProgressionStep("8–10", "50–55%", WARMUP),
    ProgressionStep("5–6", "65–70%", RECOGNITION),
    ProgressionStep("4–6", "75–85%", WORK),
    ProgressionStep("4–6", "80–87%", WORK),
)
UPPER_LOWER_NEXT = (
    ProgressionStep("8–10", "60–70%", WARMUP),
    ProgressionStep("8–10", "65–75%", WORK),
    ProgressionStep("8–10", "65–75%", WORK),
)

# Same scheme whether or not the exercise opens the cycle.
TORSO_LIMBS = (
    ProgressionStep("10–12", "55–60%", WARMUP),
    ProgressionStep("8–10", "65–70%", RECOGNITION),
    ProgressionStep("8–10", "70–75%", WORK),
    ProgressionStep("10–12", "60–65%", WORK),
)

SERIES_LABELS: Dict[StepKind, str] = {
    WARMUP: "Aquecimento",
    RECOGNITION: "Reconhecimento",
    WORK: "Unidades de Trabalho",
}


def progression_for(style_name: str, is_first_exercise: bool) -> List[ProgressionStep]:
    """
    Prescribed steps for an exercise of ``style_name``.

    Matching is case-insensitive on substrings, first match wins:
    tradicional (none), full body, ppl, upper/lower, torso/limbs.
    Unknown names get no prescription.
    """
    name = style_name.lower()
    if "tradicional" in name:
        return []
    if "full body" in name:
        return list(FULL_BODY_FIRST if is_first_exercise else FULL_BODY_NEXT)
    if "ppl" in name:
        return list(PPL_FIRST if is_first_exercise else PPL_NEXT)
    if "upper" in name or "lower" in name:
        return list(UPPER_LOWER_FIRST if is_first_exercise else UPPER_LOWER_NEXT)
    if "torso" in name or "limbs" in name:
        return list(TORSO_LIMBS)
    return []


def group_by_kind(steps: List[ProgressionStep]) -> List[Tuple[StepKind, List[Tuple[int, ProgressionStep]]]]:
    """Groups steps as warmup, recognition, work (empty groups dropped), keeping each step's set index."""
    groups = []
    for kind in (WARMUP, RECOGNITION, WORK):
        members = [(idx, step) for idx, step in enumerate(steps) if step.kind is kind]
        if members:
            groups.append((kind, members))
    return groups


def labelled_series(steps: List[ProgressionStep]) -> List[Dict[str, Any]]:
    """Series view of ``steps``: one row per kind with its pt-BR label and 1-based set numbers."""
    return [
        {"kind": kind.value, "label": SERIES_LABELS[kind], "sets": [idx + 1 for idx, _ in members]}
        for kind, members in group_by_kind(steps)
    ]
