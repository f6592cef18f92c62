"""
Two-step confirmation for destructive actions.

A request arms a pending action for one target; a later confirm consumes it.
Expiry is up to the caller: pass ``max_age`` to confirm, or cancel.
"""

from __future__ import annotations

import time
from typing import Callable, MutableMapping, Optional

from ..errors import NoPendingAction


class PendingActions:
    def __init__(self, state: MutableMapping[str, dict], clock: Callable[[], float] = time.time) -> None:
        self._state = state
        self._clock = clock

    def request(self, action: str, target: str) -> None:
        self._state[action] = {"target": target, "requestedAt": self._clock()}

    def pending(self, action: str) -> Optional[str]:
        entry = self._state.get(action)
        return entry["target"] if entry else None

    def confirm(self, action: str, target: Optional[str] = None, max_age: Optional[float] = None) -> str:
        """
        Consumes the pending action and returns its target. Raises
        NoPendingAction if nothing is armed, the target differs or the
        request is older than ``max_age`` seconds.
        """
        entry = self._state.pop(action, None)
        if entry is None:
            raise NoPendingAction()
        if target is not None and entry["target"] != target:
            raise NoPendingAction()
        if max_age is not None and self._clock() - entry["requestedAt"] > max_age:
            raise NoPendingAction("A confirmação expirou. Tente novamente.")
        return entry["target"]

    def cancel(self, action: str) -> bool:
        return self._state.pop(action, None) is not None
