import pytest

from loadx.errors import NoPendingAction
from loadx.services.confirmations import PendingActions


def test_confirm_returns_target_once():
    pending = PendingActions({})
    pending.request("delete", "abc")
    assert pending.pending("delete") == "abc"
    assert pending.confirm("delete") == "abc"
    with pytest.raises(NoPendingAction):
        pending.confirm("delete")


def test_pending_does_not_expire_without_max_age():
    now = [0.0]
    pending = PendingActions({}, clock=lambda: now[0])
    pending.request("clear", "PPL")
    now[0] = 10_000.0
    assert pending.confirm("clear") == "PPL"


def test_new_request_replaces_old_target():
    pending = PendingActions({})
    pending.request("delete", "a")
    pending.request("delete", "b")
    with pytest.raises(NoPendingAction):
        pending.confirm("delete", "a")


def test_state_lives_in_given_mapping():
    state = {}
    PendingActions(state).request("delete", "a")
    assert PendingActions(state).pending("delete") == "a"
    assert PendingActions(state).cancel("delete") is True
    assert state == {}
