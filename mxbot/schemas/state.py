"""Persisted State Schemas - durable records the bot mutates at runtime.

Invariants:
    - Every field has a default: a fresh instance is the first-run record
    - Records are never auto-saved; callers persist through StateStore.save()
    - last_txn_id only grows within a process lifetime
    - Cooldown is CORRECTION_COOLDOWN (300s); a timestamp in the future never
      satisfies it

Design Decisions:
    - AwareDatetime for correction times: naive timestamps on disk are rejected as corrupt
    - validate_assignment: runtime mutation goes through the same checks as loading
"""

from datetime import datetime, timedelta, timezone

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


CORRECTION_COOLDOWN = timedelta(seconds=300)


class StateRecord(BaseModel):
    """Base for persisted records."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class SessionState(StateRecord):
    """Matrix login session."""
    access_token: str | None = None


class ListenerState(StateRecord):
    """Sync position and per-room correction timestamps."""
    last_sync: str | None = None
    last_correction_time: dict[str, AwareDatetime] = Field(default_factory=dict)

    def correction_cooldown_elapsed(
        self, room_id: str, now: datetime | None = None,
    ) -> bool:
        """True if a correction may be sent in room_id.

        Also true when the bot has never corrected anyone in that room.
        A naive now is taken as local time.
        """
        last = self.last_correction_time.get(room_id)
        if last is None:
            return True
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.astimezone(timezone.utc)
        elapsed = now - last
        if elapsed < timedelta(0):
            return False
        return elapsed >= CORRECTION_COOLDOWN

    def record_correction(self, room_id: str, now: datetime | None = None) -> None:
        self.last_correction_time = {
            **self.last_correction_time,
            room_id: now or datetime.now(timezone.utc),
        }


class ResponderState(StateRecord):
    """Transaction id of the last message sent."""
    last_txn_id: int = Field(default=0, ge=0)

    def next_txn_id(self) -> str:
        """Advance the counter and return the new id.

        Must be saved after the id is used successfully, or the same id can be
        handed out again after a restart.
        """
        self.last_txn_id += 1
        return str(self.last_txn_id)
