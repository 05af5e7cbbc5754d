"""Error Hierarchy - codes, categories, recoverability, cause chain.

Tests:
    - Every concrete error is an MxBotError with its own code
    - Only StateWriteError is recoverable
    - to_report() includes context and the __cause__ chain
"""

import pytest

from mxbot.core.errors import (
    ConfigFileError,
    ConfigSyntaxError,
    CorruptPersistedStateError,
    ErrorCategory,
    InconsistentFeatureConfigError,
    InvalidConfigValueError,
    MissingRequiredFieldError,
    MxBotError,
    ReservedNameUsedError,
    StateAccessDeniedError,
    StateReadError,
    StateSerializationError,
    StateWriteError,
    UnresolvedAliasReferenceError,
)


ALL_ERRORS = [
    ConfigFileError("/etc/config.toml", "file not found"),
    ConfigSyntaxError("bad"),
    MissingRequiredFieldError("general.authorized_users"),
    InconsistentFeatureConfigError("github_search", "no token"),
    InvalidConfigValueError("linkable_urls.wiki", "nope", "relative URL"),
    ReservedNameUsedError("staff", "%all"),
    UnresolvedAliasReferenceError("staff", "missing"),
    StateAccessDeniedError("session.json", "/data/session.json"),
    StateReadError("session.json", "/data/session.json"),
    CorruptPersistedStateError("session.json", "/data/session.json"),
    StateSerializationError("session.json"),
    StateWriteError("session.json", "/data/session.json"),
]


def test_codes_are_unique():
    codes = [e.code for e in ALL_ERRORS]
    assert len(codes) == len(set(codes))


@pytest.mark.parametrize("error", ALL_ERRORS, ids=lambda e: type(e).__name__)
def test_all_errors_share_base(error):
    assert isinstance(error, MxBotError)
    assert str(error) == error.message


def test_only_write_errors_are_recoverable():
    recoverable = [type(e).__name__ for e in ALL_ERRORS if e.recoverable]
    assert recoverable == ["StateWriteError"]


def test_validation_errors_are_categorized():
    assert MissingRequiredFieldError("x").category is ErrorCategory.VALIDATION
    assert StateWriteError("r", "p").category is ErrorCategory.PERSISTENCE


def test_missing_field_message_names_field():
    err = MissingRequiredFieldError("general.correction_text", "required when corrections are enabled")
    assert "general.correction_text" in err.message
    assert err.field == "general.correction_text"
    assert err.context.field_name == "general.correction_text"


def test_report_includes_cause_chain():
    try:
        try:
            raise PermissionError("EACCES")
        except PermissionError as exc:
            raise StateAccessDeniedError("session.json", "/data/session.json") from exc
    except StateAccessDeniedError as err:
        report = err.to_report()["error"]

    assert report["code"] == "STATE_ACCESS_DENIED"
    assert report["context"]["path"] == "/data/session.json"
    assert report["causes"] == ["PermissionError: EACCES"]
