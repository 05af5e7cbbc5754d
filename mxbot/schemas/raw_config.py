"""Raw Config Schema - Pydantic models for the on-disk config.toml document.

Invariants:
    - Only document-level required fields are enforced here: general.webhook_token,
      the two general toggles, and the three matrix_authentication strings
    - Every other field is Optional; None means "absent from the document"
    - Cross-field rules live in core/resolve_features.py, never here

Design Decisions:
    - StrictBool for toggles: "yes" or 1 in the document is a typing error, not True
    - extra="ignore": unknown keys from newer or older documents do not fail the load
"""

from pydantic import BaseModel, ConfigDict, StrictBool


class RawSection(BaseModel):
    """Base for every document section."""
    model_config = ConfigDict(extra="ignore", frozen=True)


class RawGeneral(RawSection):
    """[general] - toggles, admin list, corrections, link matchers."""
    webhook_token: str
    enable_unit_conversions: StrictBool
    enable_corrections: StrictBool

    authorized_users: set[str] | None = None
    help_rooms: set[str] | None = None
    ban_rooms: set[str] | None = None
    unit_conversion_exclusion: set[str] | None = None

    # Corrections (required only when enable_corrections is true)
    insensitive_corrections: list[str] | None = None
    sensitive_corrections: list[str] | None = None
    correction_text: str | None = None
    correction_exclusion: set[str] | None = None

    link_matchers: set[str] | None = None


class RawMatrixAuthentication(RawSection):
    """[matrix_authentication] - bot account credentials."""
    url: str
    username: str
    password: str


class RawGithubAuthentication(RawSection):
    """[github_authentication] - token used by repo search."""
    access_token: str | None = None


class RawConfig(RawSection):
    """Whole config.toml document prior to resolution."""
    general: RawGeneral
    matrix_authentication: RawMatrixAuthentication
    github_authentication: RawGithubAuthentication | None = None

    # short name -> "org/repo"
    searchable_repos: dict[str, str] | None = None
    # keyword -> URL
    linkable_urls: dict[str, str] | None = None
    text_expansion: dict[str, str] | None = None
    # group name -> member tokens ("@user:server" or "%group")
    group_pings: dict[str, list[str]] | None = None
