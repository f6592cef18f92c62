"""
Fixed training catalog: styles, their sub-modules and the muscle groups
offered when logging or prescribing an exercise.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .errors import UnknownSubModule

LOW_VOLUME = "low-volume"
MODO_FREE = "modo-free"

STYLE_TITLES: Dict[str, str] = {
    LOW_VOLUME: "Low Volume",
    MODO_FREE: "Modo Free",
}

SUB_MODULES: Dict[str, Tuple[str, ...]] = {
    LOW_VOLUME: ("Full Body", "PPL", "Upper e Lower", "Torso e Limbs"),
    MODO_FREE: ("Tradicional",),
}

MUSCLE_GROUPS: Tuple[str, ...] = (
    "Peito", "Costas", "Pernas", "Ombros",
    "Bíceps", "Tríceps", "Antebraço", "Abdominais",
    "Cardio", "Outros",
)


def style_of(sub_module: str) -> str:
    for style, names in SUB_MODULES.items():
        if sub_module in names:
            return style
    raise UnknownSubModule()


def require_sub_module(sub_module: str) -> str:
    """Returns ``sub_module`` if it is part of the catalog, raises otherwise."""
    style_of(sub_module)
    return sub_module
