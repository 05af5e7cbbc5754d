"""Resolved Config - the immutable runtime configuration and its projections.

Invariants:
    - Config is frozen; every collection is a frozenset, tuple, or read-only mapping
    - A Config only exists in fully valid form: resolve_config() builds it or raises
    - Secrets (password, webhook token, GitHub token) never appear in repr()
    - ListenerConfig carries everything except the webhook token;
      WebhookConfig carries only the webhook token

Design Decisions:
    - Feature[...] per optional feature instead of empty collections, so an
      empty-but-enabled feature is distinguishable from a disabled one
    - Flattening properties (repos, links, ...) for consumers that only iterate
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from mxbot.core.domain_types import RoomId, SpellCheckEntry, UserId
from mxbot.core.feature import Feature, payload_or

_EMPTY_MAP: Mapping = MappingProxyType({})


def frozen_mapping(data: dict) -> Mapping:
    """Read-only copy of a dict."""
    return MappingProxyType(dict(data))


# ─── Feature Payloads ────────────────────────────────────────────

@dataclass(frozen=True)
class GithubSearch:
    """Repo short names searchable by the bot, and the token used to search them."""
    repos: Mapping[str, str]
    access_token: str = field(repr=False)


@dataclass(frozen=True)
class LinkKeywords:
    """Matchers that trigger linking, and the keyword -> URL map."""
    matchers: frozenset[str]
    links: Mapping[str, str]


@dataclass(frozen=True)
class SpellCorrections:
    """Spellings to correct, in match order, with the reply template."""
    entries: tuple[SpellCheckEntry, ...]
    correction_text: str
    excluded_rooms: frozenset[RoomId]


@dataclass(frozen=True)
class GroupPings:
    """Expanded group membership and the users allowed to ping groups."""
    groups: Mapping[str, frozenset[UserId]]
    eligible_users: frozenset[UserId]


# ─── Config ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Config:
    """Fully resolved configuration. Shared read-only for the process lifetime."""
    homeserver_url: str
    username: UserId
    password: str = field(repr=False)
    enable_unit_conversions: bool
    enable_corrections: bool
    github_search: Feature[GithubSearch]
    link_keywords: Feature[LinkKeywords]
    text_expansions: Mapping[str, str]
    unit_conversion_exclusions: frozenset[str]
    spell_corrections: Feature[SpellCorrections]
    admins: frozenset[UserId]
    # empty: help allowed in every room
    help_rooms: frozenset[RoomId]
    # empty: ban feature disabled
    ban_rooms: frozenset[RoomId]
    group_pings: Feature[GroupPings]
    user_agent: str
    webhook_token: str = field(repr=False)

    @property
    def repos(self) -> Mapping[str, str]:
        github = payload_or(self.github_search, None)
        return github.repos if github else _EMPTY_MAP

    @property
    def gh_access_token(self) -> str:
        github = payload_or(self.github_search, None)
        return github.access_token if github else ""

    @property
    def links(self) -> Mapping[str, str]:
        linking = payload_or(self.link_keywords, None)
        return linking.links if linking else _EMPTY_MAP

    @property
    def linkers(self) -> frozenset[str]:
        linking = payload_or(self.link_keywords, None)
        return linking.matchers if linking else frozenset()

    @property
    def incorrect_spellings(self) -> tuple[SpellCheckEntry, ...]:
        corrections = payload_or(self.spell_corrections, None)
        return corrections.entries if corrections else ()

    @property
    def correction_text(self) -> str:
        corrections = payload_or(self.spell_corrections, None)
        return corrections.correction_text if corrections else ""

    @property
    def correction_exclusion(self) -> frozenset[RoomId]:
        corrections = payload_or(self.spell_corrections, None)
        return corrections.excluded_rooms if corrections else frozenset()

    @property
    def group_ping_map(self) -> Mapping[str, frozenset[UserId]]:
        pings = payload_or(self.group_pings, None)
        return pings.groups if pings else _EMPTY_MAP

    @property
    def group_ping_users(self) -> frozenset[UserId]:
        pings = payload_or(self.group_pings, None)
        return pings.eligible_users if pings else frozenset()


# ─── Projections ─────────────────────────────────────────────────

@dataclass(frozen=True)
class ListenerConfig:
    """What the message-dispatch layer is allowed to see."""
    homeserver_url: str
    username: UserId
    password: str = field(repr=False)
    enable_unit_conversions: bool
    enable_corrections: bool
    github_search: Feature[GithubSearch]
    link_keywords: Feature[LinkKeywords]
    text_expansions: Mapping[str, str]
    unit_conversion_exclusions: frozenset[str]
    spell_corrections: Feature[SpellCorrections]
    admins: frozenset[UserId]
    help_rooms: frozenset[RoomId]
    ban_rooms: frozenset[RoomId]
    group_pings: Feature[GroupPings]
    user_agent: str

    @classmethod
    def from_config(cls, config: Config) -> "ListenerConfig":
        return cls(
            homeserver_url=config.homeserver_url,
            username=config.username,
            password=config.password,
            enable_unit_conversions=config.enable_unit_conversions,
            enable_corrections=config.enable_corrections,
            github_search=config.github_search,
            link_keywords=config.link_keywords,
            text_expansions=config.text_expansions,
            unit_conversion_exclusions=config.unit_conversion_exclusions,
            spell_corrections=config.spell_corrections,
            admins=config.admins,
            help_rooms=config.help_rooms,
            ban_rooms=config.ban_rooms,
            group_pings=config.group_pings,
            user_agent=config.user_agent,
        )


@dataclass(frozen=True)
class WebhookConfig:
    """What the webhook listener is allowed to see."""
    token: str = field(repr=False)

    @classmethod
    def from_config(cls, config: Config) -> "WebhookConfig":
        return cls(token=config.webhook_token)
