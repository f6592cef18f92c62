"""Request helpers shared by the blueprints: signed-in account, form data, pending actions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from flask import current_app, request, session

from .db import get_accounts
from .errors import Forbidden, NotAuthenticated
from .models.account import Account
from .models.progression import ProgressionStep
from .services.confirmations import PendingActions
from .services.timestamps import LocaleFormatter, formatter_from_config
from .services.progression import labelled_series
from .services.weights import prescribed_loads


def current_account() -> Account:
    """The signed-in account, read fresh from the account repository."""
    email = session.get("email")
    account = get_accounts().find_by_email(email) if email else None
    if account is None:
        session.pop("email", None)
        raise NotAuthenticated()
    return account


def current_coach() -> Account:
    account = current_account()
    if not account.is_coach:
        raise Forbidden()
    return account


def form_data() -> Dict[str, Any]:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def pending_actions() -> PendingActions:
    state = session.setdefault("pending", {})
    session.modified = True
    return PendingActions(state)


def formatter() -> LocaleFormatter:
    return formatter_from_config(current_app.config)


def with_loads(data: Dict[str, Any], max_weight: Optional[str], steps: List[ProgressionStep]) -> Dict[str, Any]:
    """Adds the prescribed loads and their warmup, recognition and work series to ``data``."""
    return {**data, "progression": prescribed_loads(max_weight, steps), "series": labelled_series(steps)}
