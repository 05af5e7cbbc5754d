"""Root conftest - shared test configuration and config.toml fixtures."""

import os
import textwrap

import pytest

from mxbot.config import get_settings

# Ensure tests never read a developer's real config or state directories
for _name in list(os.environ):
    if _name.startswith("MATRIX_BOT_"):
        del os.environ[_name]


MINIMAL_TOML = textwrap.dedent("""\
    [general]
    webhook_token = "hook-secret"
    enable_unit_conversions = true
    enable_corrections = false
    authorized_users = ["@admin:example.org"]

    [matrix_authentication]
    url = "https://matrix.example.org"
    username = "@bot:example.org"
    password = "hunter2"
""")

FULL_TOML = textwrap.dedent("""\
    [general]
    webhook_token = "hook-secret"
    enable_unit_conversions = true
    enable_corrections = true
    authorized_users = ["@admin:example.org", "@ops:example.org"]
    help_rooms = ["!help:example.org"]
    ban_rooms = ["!ban1:example.org", "!ban2:example.org"]
    unit_conversion_exclusion = ["in", "m"]
    insensitive_corrections = ["linux"]
    sensitive_corrections = ["Github", "Javascript"]
    correction_text = "Did you mean {} instead of {}?"
    correction_exclusion = ["!offtopic:example.org"]
    link_matchers = ["link", "docs"]

    [matrix_authentication]
    url = "https://matrix.example.org"
    username = "@bot:example.org"
    password = "hunter2"

    [github_authentication]
    access_token = "ghp_token"

    [searchable_repos]
    bot = "example/matrix-bot"
    web = "example/website"

    [linkable_urls]
    wiki = "https://wiki.example.org"
    faq = "https://example.org/faq"

    [text_expansion]
    afk = "away from keyboard"

    [group_pings]
    mods = ["@mod1:example.org", "@mod2:example.org"]
    staff = ["%mods", "@admin:example.org"]
""")


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def minimal_toml() -> str:
    return MINIMAL_TOML


@pytest.fixture
def full_toml() -> str:
    return FULL_TOML


@pytest.fixture
def config_dir(tmp_path):
    """Directory holding config.toml; write with config_dir.joinpath(...)."""
    path = tmp_path / "config"
    path.mkdir()
    return path
