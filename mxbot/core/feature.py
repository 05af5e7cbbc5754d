"""Feature Variant - explicit Disabled / Enabled(payload) outcome per feature.

Invariants:
    - A disabled feature carries no payload, so it can never be used by accident
    - An enabled feature always carries its payload, even if the payload is empty
    - Disabled records why, for startup logging

Design Decisions:
    - Frozen dataclasses + Union over a class hierarchy: match/case friendly, hashable
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Disabled:
    """Feature intentionally switched off by configuration."""
    reason: str = ""


@dataclass(frozen=True)
class Enabled(Generic[T]):
    """Feature switched on, with its resolved settings."""
    payload: T


Feature = Union[Disabled, Enabled[T]]


def is_enabled(feature: "Feature[T]") -> bool:
    return isinstance(feature, Enabled)


def payload_or(feature: "Feature[T]", default: T) -> T:
    """Return the payload of an enabled feature, else the given default."""
    if isinstance(feature, Enabled):
        return feature.payload
    return default
