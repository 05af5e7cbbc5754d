"""Raw Config Parser - bytes of config.toml to a RawConfig, nothing more.

Invariants:
    - Pure: takes bytes, returns RawConfig or raises; no file access here
    - TOML or UTF-8 failure -> ConfigSyntaxError with line/column when known
    - A missing required field -> MissingRequiredFieldError naming the dotted path
    - Any other schema mismatch (wrong type) -> ConfigSyntaxError naming the field
"""

import tomllib

from pydantic import ValidationError

from mxbot.core.errors import (
    ConfigSyntaxError,
    ErrorContext,
    MissingRequiredFieldError,
)
from mxbot.schemas.raw_config import RawConfig


def parse_raw_config(data: bytes) -> RawConfig:
    """Deserialize a config document. Enforces document-level required fields only."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ConfigSyntaxError(f"document is not UTF-8 ({exc.reason})") from exc

    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigSyntaxError(
            f"invalid TOML: {exc}", ErrorContext(debug_info=_decode_location(exc)),
        ) from exc

    try:
        return RawConfig.model_validate(document)
    except ValidationError as exc:
        raise _map_validation_error(exc) from exc


def _decode_location(exc: tomllib.TOMLDecodeError) -> dict | None:
    lineno = getattr(exc, "lineno", None)
    colno = getattr(exc, "colno", None)
    if lineno is None:
        return None
    return {"line": lineno, "column": colno}


def _map_validation_error(exc: ValidationError) -> Exception:
    """Pick the most useful domain error out of a pydantic ValidationError."""
    errors = exc.errors()
    for err in errors:
        if err["type"] == "missing":
            return MissingRequiredFieldError(_dotted(err["loc"]))
    details = "; ".join(
        f"{_dotted(err['loc']) or '<document>'}: {err['msg']}" for err in errors
    )
    ctx = ErrorContext(field_name=_dotted(errors[0]["loc"]) if errors else None)
    return ConfigSyntaxError(details, ctx)


def _dotted(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)
