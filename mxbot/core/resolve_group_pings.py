"""Group Ping Resolver - expands group -> member tokens into flat user sets.

Invariants:
    - "all" / "%all" is reserved anywhere in the section -> ReservedNameUsedError
    - Eligible users = every literal "@user" token in any group
    - Alias "%name" pulls ONLY the literal users of group "name" from the raw
      mapping; that group's own aliases are not followed (single hop)
    - Alias to a missing group -> UnresolvedAliasReferenceError
    - A literal user token that does not parse -> InvalidConfigValueError
    - Tokens that are neither "@..." nor "%..." are ignored
    - Absent section -> Disabled

Design Decisions:
    - Two passes over the raw mapping: the reserved-name check runs before any expansion
    - Single hop only; alias chains are not resolved transitively
"""

import logging

from mxbot.core.domain_types import (
    InvalidIdentifierError,
    USER_SIGIL,
    UserId,
    parse_user_id,
)
from mxbot.core.errors import (
    InvalidConfigValueError,
    ReservedNameUsedError,
    UnresolvedAliasReferenceError,
)
from mxbot.core.feature import Disabled, Enabled, Feature
from mxbot.core.resolved_config import GroupPings, frozen_mapping

logger = logging.getLogger(__name__)

ALIAS_SIGIL = "%"
RESERVED_GROUP = "all"
RESERVED_TOKENS: frozenset[str] = frozenset({RESERVED_GROUP, ALIAS_SIGIL + RESERVED_GROUP})


def resolve_group_pings(raw: dict[str, list[str]] | None) -> Feature[GroupPings]:
    """Expand group aliases. Pure apart from logging."""
    if raw is None:
        logger.info("No group pings defined. Disabling feature...")
        return Disabled("no group_pings section")

    eligible_users = collect_eligible_users(raw)
    groups = {
        name: frozenset(_expand_group(name, tokens, raw))
        for name, tokens in raw.items()
    }
    return Enabled(GroupPings(
        groups=frozen_mapping(groups),
        eligible_users=frozenset(eligible_users),
    ))


def collect_eligible_users(raw: dict[str, list[str]]) -> set[UserId]:
    """First pass: reserved-name check plus every literal user in every group."""
    users: set[UserId] = set()
    for group, tokens in raw.items():
        for token in tokens:
            if token in RESERVED_TOKENS:
                raise ReservedNameUsedError(group, token)
            if token.startswith(USER_SIGIL):
                users.add(_parse_member(group, token))
    return users


def _expand_group(
    group: str, tokens: list[str], raw: dict[str, list[str]],
) -> set[UserId]:
    members: set[UserId] = set()
    for token in tokens:
        if token.startswith(USER_SIGIL):
            members.add(_parse_member(group, token))
        elif token.startswith(ALIAS_SIGIL):
            members.update(_expand_alias(group, token[len(ALIAS_SIGIL):], raw))
        else:
            logger.debug("Ignoring unrecognised token %r in group %r", token, group)
    return members


def _expand_alias(
    group: str, alias: str, raw: dict[str, list[str]],
) -> set[UserId]:
    if alias not in raw:
        raise UnresolvedAliasReferenceError(group, alias)
    return {
        _parse_member(alias, token)
        for token in raw[alias]
        if token.startswith(USER_SIGIL)
    }


def _parse_member(group: str, token: str) -> UserId:
    try:
        return parse_user_id(token)
    except InvalidIdentifierError as exc:
        raise InvalidConfigValueError(
            f"group_pings.{group}", token, str(exc),
        ) from exc
