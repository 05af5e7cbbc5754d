"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and RoomId are only created through parse_user_id / parse_room_id
    - A Matrix identifier is sigil + localpart, optionally ':' + server name, max 255 chars
    - SpellCheckEntry order is match-check order downstream
    - NAME and VERSION are the single source of truth for the program identity

Design Decisions:
    - NewType over wrapper classes: identifiers stay plain str for JSON and dict keys
    - str Enum for SpellCheckKind: serializes without custom encoders
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import NewType


NAME: str = "mxbot"
VERSION: str = "0.8.0"


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
RoomId = NewType("RoomId", str)

USER_SIGIL = "@"
ROOM_SIGIL = "!"
MAX_IDENTIFIER_LENGTH = 255

_IDENTIFIER_BODY = re.compile(r"^[^\s:]+(:[^\s:]+(:\d{1,5})?)?$")


class InvalidIdentifierError(ValueError):
    """Raised when a string is not a well-formed Matrix identifier."""


def _check_identifier(value: str, sigil: str, kind: str) -> str:
    if not isinstance(value, str):
        raise InvalidIdentifierError(f"{kind} must be a string, got {type(value).__name__}")
    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(f"{kind} exceeds {MAX_IDENTIFIER_LENGTH} characters")
    if not value.startswith(sigil):
        raise InvalidIdentifierError(f"{kind} must start with '{sigil}'")
    if not _IDENTIFIER_BODY.match(value[1:]):
        raise InvalidIdentifierError(
            f"{kind} must look like {sigil}localpart:server.name",
        )
    return value


def parse_user_id(value: str) -> UserId:
    """Validate a user ID such as '@alice:example.org'."""
    return UserId(_check_identifier(value, USER_SIGIL, "User ID"))


def parse_room_id(value: str) -> RoomId:
    """Validate a room ID such as '!abcdef:example.org'."""
    return RoomId(_check_identifier(value, ROOM_SIGIL, "Room ID"))


# ─── Spell Check ─────────────────────────────────────────────────

class SpellCheckKind(str, Enum):
    """How a spelling is compared against message text."""
    INSENSITIVE = "insensitive"
    SENSITIVE = "sensitive"


@dataclass(frozen=True)
class SpellCheckEntry:
    """One incorrect spelling to watch for."""
    kind: SpellCheckKind
    spelling: str

    @classmethod
    def insensitive(cls, spelling: str) -> "SpellCheckEntry":
        return cls(SpellCheckKind.INSENSITIVE, spelling)

    @classmethod
    def sensitive(cls, spelling: str) -> "SpellCheckEntry":
        return cls(SpellCheckKind.SENSITIVE, spelling)

    def matches(self, text: str) -> bool:
        if self.kind is SpellCheckKind.INSENSITIVE:
            return self.spelling.lower() in text.lower()
        return self.spelling in text

    def __str__(self) -> str:
        return self.spelling
