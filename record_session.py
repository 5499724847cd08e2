import functools
import os
import threading
from typing import Callable, Iterable, Mapping, Optional

import pandas as pd

from app_logging import get_logger
from config_paths import EXPORT_FILENAME_DEFAULT, READ_ONLY_FIELDS_DEFAULT
from errors import (
    CONFIRMATION,
    BoundaryNotice,
    InvalidFieldError,
    Notice,
    StaleRecordError,
)
from file_type_handler import FileTypeHandler, parse_table, serialize_table

log = get_logger(__name__)


def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class RecordSession:
    """Loaded table, editable-field selection and a 1-based record cursor.

    All public operations run under one lock, so a session shared between
    threads still sees load/select/submit/navigate/export one at a time.
    """

    def __init__(
        self,
        read_only_fields: Optional[Iterable[str]] = None,
        notify_cb: Optional[Callable[[Notice], None]] = None,
        export_filename: str = EXPORT_FILENAME_DEFAULT,
    ):
        self._lock = threading.RLock()
        self.read_only_fields = tuple(
            READ_ONLY_FIELDS_DEFAULT if read_only_fields is None else read_only_fields
        )
        self._notify = notify_cb
        self.export_filename = export_filename or EXPORT_FILENAME_DEFAULT

        self._df: pd.DataFrame | None = None
        self._editable: list[str] = []
        self._cursor = 0
        self.generation = 0
        self.file_path: str | None = None

    # ---------- read-only views ----------
    @property
    def df(self) -> pd.DataFrame | None:
        return self._df

    @property
    def is_loaded(self) -> bool:
        return self._df is not None

    @property
    def columns(self) -> list[str]:
        return [] if self._df is None else list(self._df.columns)

    @property
    def row_count(self) -> int:
        return 0 if self._df is None else len(self._df)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def editable_fields(self) -> tuple[str, ...]:
        return tuple(self._editable)

    @property
    def available_fields(self) -> list[str]:
        return [c for c in self.columns if c not in self.read_only_fields]

    @_locked
    def current_record(self) -> dict | None:
        if self._df is None or self._cursor < 1:
            return None
        row = self._df.iloc[self._cursor - 1]
        return {col: row[col] for col in self._df.columns}

    # ---------- loader ----------
    @_locked
    def load(self, data, file_path: Optional[str] = None) -> pd.DataFrame:
        """Replace the whole session with the table parsed from ``data``.

        Parsing happens before anything is replaced, so a ParseError leaves
        the previous table, selection and cursor in place.
        """
        df = parse_table(data)
        self._df = df
        self._editable = []
        self._cursor = 1 if len(df) > 0 else 0
        self.generation += 1
        self.file_path = file_path
        log.info(
            "Loaded %d rows x %d columns%s",
            len(df),
            len(df.columns),
            f" from {file_path}" if file_path else "",
        )
        return df

    def load_path(self, path: str) -> pd.DataFrame:
        handler = FileTypeHandler(path)
        return self.load(handler.read_bytes(), file_path=path)

    # ---------- field selector ----------
    @_locked
    def set_editable_fields(self, names: Iterable[str]) -> tuple[str, ...]:
        wanted = set(names)
        allowed = set(self.available_fields)
        bad = wanted - allowed
        if bad:
            log.warning("Rejected field selection: %s", ", ".join(sorted(bad)))
            readonly = bad & set(self.read_only_fields)
            if readonly and readonly == bad:
                msg = f"Read-only fields cannot be edited: {', '.join(sorted(bad))}"
            else:
                msg = f"Unknown fields: {', '.join(sorted(bad))}"
            raise InvalidFieldError(msg, bad)
        self._editable = [c for c in self.available_fields if c in wanted]
        log.info("Editable fields: %s", ", ".join(self._editable) or "(none)")
        return self.editable_fields

    # ---------- navigator ----------
    @_locked
    def next(self) -> int:
        if self._cursor < self.row_count:
            self._cursor += 1
            return self._cursor
        raise BoundaryNotice()

    @_locked
    def previous(self) -> int:
        if self._cursor > 1:
            self._cursor -= 1
        return self._cursor

    # ---------- submit ----------
    @_locked
    def submit(
        self, values: Mapping[str, object], displayed_cursor: Optional[int] = None
    ) -> Notice:
        """Write ``values`` for the editable fields of the current record.

        Keys outside the editable set are ignored. An empty editable set
        writes nothing and still confirms.
        """
        if displayed_cursor is not None and displayed_cursor != self._cursor:
            log.warning(
                "Stale submit for paper %s (current %s)", displayed_cursor, self._cursor
            )
            raise StaleRecordError(displayed_cursor, self._cursor)

        written = []
        if self._df is not None and self._cursor >= 1:
            row = self._cursor - 1
            for field in self._editable:
                if field not in values:
                    continue
                value = values[field]
                self._df.at[row, field] = "" if value is None else str(value)
                written.append(field)

        log.info(
            "Saved paper %d: %s", self._cursor, ", ".join(written) or "no fields"
        )
        if self._notify is not None:
            self._notify(CONFIRMATION)
        return CONFIRMATION

    # ---------- exporter ----------
    @_locked
    def export(self) -> bytes:
        df = self._df if self._df is not None else pd.DataFrame()
        return serialize_table(df)

    @_locked
    def export_path(self, path: Optional[str] = None) -> str:
        """Write the table to ``path``, or to ``export_filename`` when omitted.

        A directory target gets ``export_filename`` joined onto it.
        """
        target = path or self.export_filename
        if os.path.isdir(target):
            target = os.path.join(target, self.export_filename)
        df = self._df if self._df is not None else pd.DataFrame()
        FileTypeHandler(target).save(df)
        log.info("Exported %d rows to %s", self.row_count, target)
        return target


class SessionRegistry:
    """One RecordSession per session key, for hosts serving several users."""

    def __init__(self, factory: Optional[Callable[[], RecordSession]] = None):
        self._factory = factory or RecordSession
        self._sessions: dict[str, RecordSession] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> RecordSession:
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                session = self._factory()
                self._sessions[key] = session
            return session

    def drop(self, key: str) -> bool:
        with self._lock:
            return self._sessions.pop(key, None) is not None

    def __contains__(self, key) -> bool:
        with self._lock:
            return key in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
