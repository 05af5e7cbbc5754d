"""Config Resolver - folds a RawConfig into an immutable Config.

Invariants:
    - Pure: RawConfig in, Config out; the first rule that raises aborts the fold
    - No partially-built Config is ever returned or stored
    - Every rule in resolve_features / resolve_group_pings runs exactly once
"""

from mxbot.core.resolve_features import (
    build_user_agent,
    resolve_admins,
    resolve_ban_rooms,
    resolve_github_search,
    resolve_help_rooms,
    resolve_link_keywords,
    resolve_matrix_authentication,
    resolve_spell_corrections,
    resolve_text_expansions,
    resolve_unit_conversion_exclusions,
)
from mxbot.core.resolve_group_pings import resolve_group_pings
from mxbot.core.resolved_config import Config
from mxbot.schemas.raw_config import RawConfig


def resolve_config(raw: RawConfig) -> Config:
    homeserver_url, username, password = resolve_matrix_authentication(
        raw.matrix_authentication,
    )
    return Config(
        homeserver_url=homeserver_url,
        username=username,
        password=password,
        enable_unit_conversions=raw.general.enable_unit_conversions,
        enable_corrections=raw.general.enable_corrections,
        github_search=resolve_github_search(raw),
        link_keywords=resolve_link_keywords(raw),
        text_expansions=resolve_text_expansions(raw),
        unit_conversion_exclusions=resolve_unit_conversion_exclusions(raw),
        spell_corrections=resolve_spell_corrections(raw),
        admins=resolve_admins(raw),
        help_rooms=resolve_help_rooms(raw),
        ban_rooms=resolve_ban_rooms(raw),
        group_pings=resolve_group_pings(raw.group_pings),
        user_agent=build_user_agent(),
        webhook_token=raw.general.webhook_token,
    )
