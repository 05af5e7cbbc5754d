"""Persisted State Schemas - defaults, cooldown query, transaction ids.

Tests cover:
    - Fresh records carry first-run defaults
    - correction_cooldown_elapsed: none / old / recent / future timestamps
    - record_correction stores an aware timestamp and rejects naive ones
    - next_txn_id is strictly monotonic from the stored counter
    - Negative counters and unknown keys are rejected
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from mxbot.schemas.state import (
    CORRECTION_COOLDOWN,
    ListenerState,
    ResponderState,
    SessionState,
)

ROOM = "!room:example.org"
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_defaults():
    assert SessionState().access_token is None
    listener = ListenerState()
    assert listener.last_sync is None
    assert listener.last_correction_time == {}
    assert ResponderState().last_txn_id == 0


# ─── Cooldown ────────────────────────────────────────────────────

def test_cooldown_elapsed_without_timestamp():
    assert ListenerState().correction_cooldown_elapsed(ROOM, now=NOW)


def test_cooldown_elapsed_after_400_seconds():
    state = ListenerState(last_correction_time={ROOM: NOW - timedelta(seconds=400)})
    assert state.correction_cooldown_elapsed(ROOM, now=NOW)


def test_cooldown_not_elapsed_after_100_seconds():
    state = ListenerState(last_correction_time={ROOM: NOW - timedelta(seconds=100)})
    assert not state.correction_cooldown_elapsed(ROOM, now=NOW)


def test_cooldown_elapsed_exactly_at_boundary():
    state = ListenerState(last_correction_time={ROOM: NOW - CORRECTION_COOLDOWN})
    assert state.correction_cooldown_elapsed(ROOM, now=NOW)


def test_cooldown_future_timestamp_is_false():
    state = ListenerState(last_correction_time={ROOM: NOW + timedelta(hours=1)})
    assert not state.correction_cooldown_elapsed(ROOM, now=NOW)


def test_cooldown_uses_wall_clock_by_default():
    recent = datetime.now(timezone.utc) - timedelta(seconds=10)
    old = datetime.now(timezone.utc) - timedelta(seconds=1000)
    state = ListenerState(last_correction_time={ROOM: recent, "!old:example.org": old})
    assert not state.correction_cooldown_elapsed(ROOM)
    assert state.correction_cooldown_elapsed("!old:example.org")


def test_cooldown_accepts_naive_now_as_local_time():
    local_now = datetime.now()
    recent = ListenerState(last_correction_time={ROOM: local_now.astimezone(timezone.utc)})
    assert not recent.correction_cooldown_elapsed(ROOM, now=local_now)
    old = ListenerState(last_correction_time={ROOM: NOW})
    assert old.correction_cooldown_elapsed(ROOM, now=datetime(2030, 1, 1))


def test_cooldown_is_per_room():
    state = ListenerState(last_correction_time={ROOM: NOW})
    assert state.correction_cooldown_elapsed("!other:example.org", now=NOW)


def test_record_correction_starts_cooldown():
    state = ListenerState()
    state.record_correction(ROOM, now=NOW)
    assert state.last_correction_time[ROOM] == NOW
    assert not state.correction_cooldown_elapsed(ROOM, now=NOW + timedelta(seconds=299))
    assert state.correction_cooldown_elapsed(ROOM, now=NOW + timedelta(seconds=300))


def test_record_correction_rejects_naive_timestamp():
    with pytest.raises(ValidationError):
        ListenerState().record_correction(ROOM, now=datetime(2024, 5, 1, 12, 0))


# ─── Transaction ids ─────────────────────────────────────────────

def test_next_txn_id_from_zero():
    state = ResponderState()
    assert state.next_txn_id() == "1"
    assert state.next_txn_id() == "2"
    assert state.last_txn_id == 2


def test_next_txn_id_continues_from_stored_counter():
    state = ResponderState(last_txn_id=41)
    ids = [state.next_txn_id() for _ in range(3)]
    assert ids == ["42", "43", "44"]


def test_negative_counter_rejected():
    with pytest.raises(ValidationError):
        ResponderState(last_txn_id=-1)


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        SessionState.model_validate({"access_token": "t", "device_id": "x"})
