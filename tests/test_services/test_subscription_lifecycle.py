from __future__ import annotations

import pytest

from app.services.subscription_lifecycle import (
    SubscriptionStatus,
    can_transition,
    is_cancellable,
    is_terminal,
    parse_status,
)


@pytest.mark.parametrize(
    "status, cancellable",
    [("active", True), ("suspended", True), ("canceled", False), ("expired", False), ("terminated", False)],
)
def test_cancellable(status, cancellable):
    assert is_cancellable(status) is cancellable


def test_terminal_states():
    assert is_terminal("canceled")
    assert is_terminal("expired")
    assert not is_terminal("active")
    assert not is_terminal("suspended")


def test_suspended_can_resume():
    assert can_transition("suspended", SubscriptionStatus.ACTIVE)
    assert not can_transition("canceled", SubscriptionStatus.ACTIVE)


def test_unknown_status_is_kept_out_of_the_model():
    assert parse_status("Active") is SubscriptionStatus.ACTIVE
    assert parse_status("pending") is None
    assert parse_status(None) is None
    assert not is_cancellable("pending")
    assert not is_terminal("pending")
