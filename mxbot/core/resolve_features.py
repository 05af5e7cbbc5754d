"""Feature Resolution Rules - one pure rule per config area, RawConfig in, resolved value out.

Invariants:
    - Each rule reads only its own section(s) of RawConfig and never mutates it
    - A rule either returns its resolved value or raises an MxBotError; no partial values
    - Disabling a feature is logged at INFO, never raised
    - Rules are independent: evaluation order does not change the outcome

Rules:
    - GitHub search: repos + token -> Enabled; repos without token -> error; no repos -> Disabled
    - Link keywords: urls + matchers -> Enabled; empty urls with matchers -> error;
      urls without matchers -> Disabled; every URL must be absolute
    - Text expansion: used as-is
    - Unit conversion exclusions: each prefixed with one space
    - Spell corrections: when enabled, both lists and the text are required
    - Admins: required
    - Help rooms / ban rooms: optional, empty when absent
"""

import logging
from typing import Mapping

from pydantic import AnyUrl, TypeAdapter, ValidationError

from mxbot.core.domain_types import (
    NAME,
    VERSION,
    InvalidIdentifierError,
    RoomId,
    SpellCheckEntry,
    UserId,
    parse_room_id,
    parse_user_id,
)
from mxbot.core.errors import (
    InconsistentFeatureConfigError,
    InvalidConfigValueError,
    MissingRequiredFieldError,
)
from mxbot.core.feature import Disabled, Enabled, Feature
from mxbot.core.resolved_config import (
    GithubSearch,
    LinkKeywords,
    SpellCorrections,
    frozen_mapping,
)
from mxbot.schemas.raw_config import RawConfig, RawMatrixAuthentication

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(AnyUrl)


# ─── Value Parsers ───────────────────────────────────────────────

def parse_absolute_url(field: str, value: str) -> str:
    """Validate that value is an absolute URL with a host. Returns it stripped."""
    value = value.strip()
    try:
        url = _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise InvalidConfigValueError(
            field, value, exc.errors()[0]["msg"],
        ) from exc
    if not url.host:
        raise InvalidConfigValueError(field, value, "URL has no host")
    return value


def _parse_users(field: str, values: set[str]) -> frozenset[UserId]:
    users = set()
    for value in values:
        try:
            users.add(parse_user_id(value))
        except InvalidIdentifierError as exc:
            raise InvalidConfigValueError(field, value, str(exc)) from exc
    return frozenset(users)


def _parse_rooms(field: str, values: set[str]) -> frozenset[RoomId]:
    rooms = set()
    for value in values:
        try:
            rooms.add(parse_room_id(value))
        except InvalidIdentifierError as exc:
            raise InvalidConfigValueError(field, value, str(exc)) from exc
    return frozenset(rooms)


# ─── Rules ───────────────────────────────────────────────────────

def resolve_matrix_authentication(
    auth: RawMatrixAuthentication,
) -> tuple[str, UserId, str]:
    """Homeserver URL, bot user ID, password."""
    url = parse_absolute_url("matrix_authentication.url", auth.url)
    try:
        username = parse_user_id(auth.username)
    except InvalidIdentifierError as exc:
        raise InvalidConfigValueError(
            "matrix_authentication.username", auth.username, str(exc),
        ) from exc
    return url, username, auth.password


def resolve_github_search(raw: RawConfig) -> Feature[GithubSearch]:
    if raw.searchable_repos is None:
        logger.info("No searchable repos found. Disabling feature...")
        return Disabled("no searchable_repos section")
    token = raw.github_authentication.access_token if raw.github_authentication else None
    if token is None:
        raise InconsistentFeatureConfigError(
            "github_search",
            "Searchable repos configured, but no github access token found. "
            "Unable to continue...",
        )
    return Enabled(GithubSearch(
        repos=frozen_mapping(raw.searchable_repos),
        access_token=token,
    ))


def resolve_link_keywords(raw: RawConfig) -> Feature[LinkKeywords]:
    if raw.linkable_urls is None:
        logger.info("No linkable urls found. Disabling feature...")
        return Disabled("no linkable_urls section")
    matchers = raw.general.link_matchers
    if matchers is None:
        logger.info("No link matchers found. Disabling feature...")
        return Disabled("no general.link_matchers")
    if not raw.linkable_urls:
        raise InconsistentFeatureConfigError(
            "link_keywords",
            "Link matchers exist, but no linkable urls are set. Exiting...",
        )
    links = {
        keyword: parse_absolute_url(f"linkable_urls.{keyword}", url)
        for keyword, url in raw.linkable_urls.items()
    }
    return Enabled(LinkKeywords(
        matchers=frozenset(matchers), links=frozen_mapping(links),
    ))


def resolve_text_expansions(raw: RawConfig) -> Mapping[str, str]:
    if raw.text_expansion is None:
        logger.info("No text expansions found. Disabling feature...")
        return frozen_mapping({})
    return frozen_mapping(raw.text_expansion)


def resolve_unit_conversion_exclusions(raw: RawConfig) -> frozenset[str]:
    """Prefix each unit with a space to match '<quantity> <unit>'."""
    exclusions = raw.general.unit_conversion_exclusion
    if exclusions is None:
        logger.info("No unit conversion exclusions found. Disabling feature...")
        return frozenset()
    return frozenset(" " + unit for unit in exclusions)


def resolve_spell_corrections(raw: RawConfig) -> Feature[SpellCorrections]:
    general = raw.general
    if not general.enable_corrections:
        logger.info("Disabling corrections feature")
        return Disabled("general.enable_corrections is false")

    if general.insensitive_corrections is None:
        raise MissingRequiredFieldError(
            "general.insensitive_corrections",
            "required when corrections are enabled",
        )
    if general.sensitive_corrections is None:
        raise MissingRequiredFieldError(
            "general.sensitive_corrections",
            "required when corrections are enabled",
        )
    if general.correction_text is None:
        raise MissingRequiredFieldError(
            "general.correction_text",
            "required when corrections are enabled",
        )

    if not general.correction_exclusion:
        logger.info("No exclusion list found. No rooms will be excluded from corrections")
        excluded: frozenset[RoomId] = frozenset()
    else:
        excluded = _parse_rooms("general.correction_exclusion", general.correction_exclusion)

    entries = tuple(
        [SpellCheckEntry.insensitive(s) for s in general.insensitive_corrections]
        + [SpellCheckEntry.sensitive(s) for s in general.sensitive_corrections]
    )
    return Enabled(SpellCorrections(
        entries=entries,
        correction_text=general.correction_text,
        excluded_rooms=excluded,
    ))


def resolve_admins(raw: RawConfig) -> frozenset[UserId]:
    if raw.general.authorized_users is None:
        raise MissingRequiredFieldError(
            "general.authorized_users",
            "you must provide at least 1 authorized user",
        )
    return _parse_users("general.authorized_users", raw.general.authorized_users)


def resolve_help_rooms(raw: RawConfig) -> frozenset[RoomId]:
    if raw.general.help_rooms is None:
        logger.info("No help rooms specified. Allowing all rooms.")
        return frozenset()
    return _parse_rooms("general.help_rooms", raw.general.help_rooms)


def resolve_ban_rooms(raw: RawConfig) -> frozenset[RoomId]:
    if raw.general.ban_rooms is None:
        logger.info("No ban rooms specified. Disabling feature.")
        return frozenset()
    return _parse_rooms("general.ban_rooms", raw.general.ban_rooms)


def build_user_agent(name: str = NAME, version: str = VERSION) -> str:
    """'<name>/<version>', usable as an HTTP User-Agent header value."""
    agent = f"{name}/{version}"
    if not name or not version or not agent.isprintable() or any(c.isspace() for c in agent):
        raise InvalidConfigValueError(
            "user_agent", agent,
            f"Unable to create valid user agent from {name!r} and {version!r}",
        )
    return agent
