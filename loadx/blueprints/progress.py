# loadx/blueprints/progress.py
from __future__ import annotations

import io
from datetime import date
from typing import List, Tuple

from flask import Blueprint, Response, request

# Matplotlib im Headless-Mode
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..catalog import require_sub_module
from ..db import get_history
from ..errors import MissingField
from ..services.timestamps import LocaleFormatter
from ..services.weights import parse_number
from ..web import current_account, formatter

progress_bp = Blueprint("progress", __name__, url_prefix="/progress")


def exercise_history(sessions, exercise_name: str, fmt: LocaleFormatter) -> List[Tuple[date, float]]:
    """
    (session date, max weight) for every archived entry named ``exercise_name``,
    oldest first. Entries without a usable weight or date are skipped.
    """
    points: List[Tuple[date, float]] = []
    for session in reversed(sessions):
        day = fmt.parse_date(session.date)
        if day is None:
            continue
        for entry in session.exercises:
            if entry.name != exercise_name:
                continue
            weight = parse_number(entry.max_weight)
            if weight is not None and weight > 0:
                points.append((day, weight))
    return points


@progress_bp.get("/<style>/exercise.png")
def exercise_png(style: str):
    """
    Liniendiagramm: max weight of one exercise across the archived sessions.
    ``?name=...`` selects the exercise, ``?download=1`` sets an attachment header.
    """
    style = require_sub_module(style)
    name = (request.args.get("name") or "").strip()
    if not name:
        raise MissingField("Informe o nome do exercício.")

    account = current_account()
    history = exercise_history(get_history().sessions(account.email, style), name, formatter())
    dates = [day for day, _ in history]
    weights = [w for _, w in history]

    fig, ax = plt.subplots(figsize=(7.5, 3.2), dpi=140)

    if weights:
        ax.plot(dates, weights, marker="o", linewidth=2)
    else:
        ax.text(
            0.5, 0.5,
            "Sem dados ainda",
            ha="center", va="center", transform=ax.transAxes
        )

    ax.set_title(f"Carga máxima – {name} ({style})")
    ax.set_ylabel("Carga (kg)")
    ax.set_xlabel("Data")
    ax.grid(True, linestyle=":", alpha=0.4)
    fig.autofmt_xdate()
    plt.tight_layout()

    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    buf.seek(0)

    headers = {}
    if request.args.get("download", type=int) == 1:
        safe_name = name.replace('"', "'")
        headers["Content-Disposition"] = f'attachment; filename="progress_{safe_name}.png"'
    return Response(buf.getvalue(), mimetype="image/png", headers=headers)
