import curses
from typing import Callable, Optional

from app_logging import get_logger
from config_paths import KEY_BINDINGS_DEFAULT
from errors import BoundaryNotice, Notice

log = get_logger(__name__)

SUBMIT = "submit"
NEXT = "next"
PREVIOUS = "previous"
TRIGGERS = (SUBMIT, NEXT, PREVIOUS)

ENTER_CODES = (10, 13, curses.KEY_ENTER)


def key_codes(name: str) -> list[int]:
    if name == "enter":
        return list(ENTER_CODES)
    if isinstance(name, str) and len(name) == 1:
        return [ord(name)]
    raise ValueError(f"Unsupported key name: {name!r}")


def build_key_map(bindings: Optional[dict] = None) -> dict[int, str]:
    """Translate ``{trigger: [key names]}`` into ``{key code: trigger}``."""
    merged = {k: list(v) for k, v in KEY_BINDINGS_DEFAULT.items()}
    for trigger, names in (bindings or {}).items():
        if trigger in merged:
            merged[trigger] = list(names)

    key_map: dict[int, str] = {}
    for trigger in TRIGGERS:
        for name in merged[trigger]:
            for code in key_codes(name):
                key_map.setdefault(code, trigger)
    return key_map


class ActionDispatcher:
    """Runs submit/next/previous for any input source.

    Keyboard shortcuts, `:` commands and tests all go through ``dispatch``,
    so the three operations behave the same whatever produced the trigger.
    """

    def __init__(
        self,
        session,
        form,
        notify_cb: Optional[Callable[[Notice], None]] = None,
        key_bindings: Optional[dict] = None,
    ):
        self.session = session
        self.form = form
        self._notify = notify_cb
        self.key_map = build_key_map(key_bindings)
        self._handlers = {
            SUBMIT: self._submit,
            NEXT: self._next,
            PREVIOUS: self._previous,
        }

    def trigger_for_key(self, ch) -> Optional[str]:
        return self.key_map.get(ch)

    def dispatch(self, trigger: str) -> Optional[Notice]:
        handler = self._handlers[trigger]
        notice = handler()
        if notice is not None and self._notify is not None:
            self._notify(notice)
        return notice

    # ---------- handlers ----------
    def _submit(self) -> Notice:
        if self.form.seeded_cursor is None:
            self.form.sync()
        return self.session.submit(
            self.form.pending(), displayed_cursor=self.form.seeded_cursor
        )

    def _next(self) -> Optional[Notice]:
        try:
            self.session.next()
        except BoundaryNotice as notice:
            log.info("Next requested at last paper %d", self.session.cursor)
            return notice.notice
        finally:
            self.form.sync()
        return None

    def _previous(self) -> None:
        self.session.previous()
        self.form.sync()
        return None
