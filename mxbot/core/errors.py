"""Error Hierarchy - typed, categorized exceptions for config and state failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Config validation errors are fatal at startup; StateWriteError is the only
      error a caller is expected to recover from
    - to_report() walks __cause__ so the full chain reaches the log

Design Decisions:
    - Single hierarchy with MxBotError base: bootstrap catches one type and reports uniformly
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    section: str | None = None
    field_name: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class MxBotError(Exception):
    """Base exception for all mxbot errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_report(self) -> dict:
        """Convert to a structured report, including the cause chain."""
        causes = []
        cause = self.__cause__
        while cause is not None:
            causes.append(f"{type(cause).__name__}: {cause}")
            cause = cause.__cause__
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "section": self.context.section,
                    "field": self.context.field_name,
                    "path": self.context.path,
                },
                "causes": causes,
            }
        }


# ─── Configuration Errors ───────────────────────────────────────

class ConfigFileError(MxBotError):
    """Config document could not be opened or read."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Unable to read config file at {path}: {reason}",
            "CONFIG_FILE_UNREADABLE", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, ctx,
        )


class ConfigSyntaxError(MxBotError):
    """Config document is not valid TOML or has a wrongly typed field."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid config document: {message}",
            "CONFIG_SYNTAX", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, context,
        )


class MissingRequiredFieldError(MxBotError):
    """A field required by the document or by an enabled feature is absent."""
    def __init__(self, field: str, reason: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        message = f"Missing required field '{field}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message, "MISSING_REQUIRED_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.field = field


class InconsistentFeatureConfigError(MxBotError):
    """Two sections that configure one feature contradict each other."""
    def __init__(self, feature: str, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.section = feature
        super().__init__(
            message, "INCONSISTENT_FEATURE_CONFIG", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.feature = feature


class InvalidConfigValueError(MxBotError):
    """A present field holds a value that cannot be parsed (URL, user ID, room ID)."""
    def __init__(self, field: str, value: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            f"Invalid value {value!r} for '{field}': {reason}",
            "INVALID_CONFIG_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.field = field
        self.value = value


class ReservedNameUsedError(MxBotError):
    """A group ping lists the reserved 'all' token as a member."""
    def __init__(self, group: str, token: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.section = "group_pings"
        ctx.field_name = group
        super().__init__(
            f"{token} is a reserved group_ping name, do not configure it manually "
            f"(found in group '{group}')",
            "RESERVED_NAME_USED", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.group = group


class UnresolvedAliasReferenceError(MxBotError):
    """A group ping alias names a group that does not exist."""
    def __init__(self, group: str, alias: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.section = "group_pings"
        ctx.field_name = group
        super().__init__(
            f"Group alias %{alias} in group '{group}' has no corresponding group",
            "UNRESOLVED_ALIAS", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.group = group
        self.alias = alias


# ─── Persisted State Errors ─────────────────────────────────────

class StateAccessDeniedError(MxBotError):
    """Permission denied when opening a state record."""
    def __init__(self, record: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Permission denied when opening state record {record}",
            "STATE_ACCESS_DENIED", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.record = record


class StateReadError(MxBotError):
    """State record exists but could not be opened or read."""
    def __init__(self, record: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Unable to read state record {record}",
            "STATE_READ_FAILED", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.record = record


class CorruptPersistedStateError(MxBotError):
    """State record content does not deserialize into its model."""
    def __init__(self, record: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Unable to load {record}: content is not a valid state record",
            "CORRUPT_PERSISTED_STATE", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.record = record


class StateSerializationError(MxBotError):
    """In-memory state could not be serialized. Should never occur."""
    def __init__(self, record: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unable to format {record} save data. This should never occur!",
            "STATE_SERIALIZATION", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context,
        )
        self.record = record


class StateWriteError(MxBotError):
    """Writing a state record failed. The previous durable copy is untouched."""
    def __init__(self, record: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"Unable to write state record {record}",
            "STATE_WRITE_FAILED", ErrorCategory.PERSISTENCE,
            ErrorSeverity.WARNING, ctx,
        )
        self.record = record
