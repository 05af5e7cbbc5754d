"""Persisted State Store - one generic load-or-default / overwrite-save store, three records.

Invariants:
    - load(): missing record -> default instance, saved immediately, returned
    - load(): permission denied -> StateAccessDeniedError; other OS errors -> StateReadError
    - load(): content that does not validate -> CorruptPersistedStateError, never a default
    - save(): full overwrite via temp file + os.replace; the old record survives a failed write
    - save(): OS failure -> StateWriteError (recoverable, returned to the caller as an exception)
    - No locking: one writer process per data directory

Design Decisions:
    - Generic over the pydantic model: the three records share identical error semantics
    - JSON via model_dump_json / model_validate_json: the schema is the pydantic model itself
    - Blocking IO: async callers wrap load/save in asyncio.to_thread
"""

import contextlib
import logging
import os
from pathlib import Path
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from mxbot.core.errors import (
    CorruptPersistedStateError,
    StateAccessDeniedError,
    StateReadError,
    StateSerializationError,
    StateWriteError,
)
from mxbot.infrastructure.observability import trace
from mxbot.schemas.state import ListenerState, ResponderState, SessionState

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)

SESSION_RECORD = "session.json"
LISTENER_RECORD = "matrix_listener.json"
RESPONDER_RECORD = "matrix_responder.json"


class StateStore(Generic[StateT]):
    """Durable home of one state record under a data directory."""

    def __init__(
        self,
        data_dir: Path,
        record: str,
        model: type[StateT],
        default_factory: Callable[[], StateT] | None = None,
    ):
        self.data_dir = Path(data_dir)
        self.record = record
        self.model = model
        self._default_factory = default_factory or model

    @property
    def path(self) -> Path:
        return self.data_dir / self.record

    @property
    def _tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def load(self) -> StateT:
        """Read the record, creating it with defaults on first run."""
        try:
            content = self.path.read_bytes()
        except FileNotFoundError:
            state = self._default_factory()
            trace(logger, f"{self.record} not found. The next save is a default save",
                  extra={"record": self.record})
            self.save(state)
            return state
        except PermissionError as exc:
            raise StateAccessDeniedError(self.record, str(self.path)) from exc
        except OSError as exc:
            raise StateReadError(self.record, str(self.path)) from exc

        try:
            return self.model.model_validate_json(content)
        except ValidationError as exc:
            raise CorruptPersistedStateError(self.record, str(self.path)) from exc

    def save(self, state: StateT) -> None:
        """Overwrite the record with state."""
        if not isinstance(state, self.model):
            raise StateSerializationError(self.record)
        try:
            payload = state.model_dump_json()
        except (ValueError, TypeError) as exc:
            raise StateSerializationError(self.record) from exc

        tmp = self._tmp_path
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            logger.warning(f"Unable to write {self.record}: {exc}",
                           extra={"record": self.record, "path": str(self.path)})
            raise StateWriteError(self.record, str(self.path)) from exc
        trace(logger, f"Saved {self.record}", extra={"record": self.record})


def session_store(data_dir: Path) -> StateStore[SessionState]:
    return StateStore(data_dir, SESSION_RECORD, SessionState)


def listener_store(data_dir: Path) -> StateStore[ListenerState]:
    return StateStore(data_dir, LISTENER_RECORD, ListenerState)


def responder_store(data_dir: Path) -> StateStore[ResponderState]:
    return StateStore(data_dir, RESPONDER_RECORD, ResponderState)
