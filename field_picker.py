import curses
from typing import Callable, Optional

from errors import InvalidFieldError


class FieldPicker:
    """Checkbox list for choosing which fields are editable."""

    def __init__(self, session, set_status_cb: Callable[[str, int], None], on_applied: Optional[Callable[[], None]] = None):
        self.session = session
        self._set_status = set_status_cb
        self._on_applied = on_applied

        self.active = False
        self.choices: list[str] = []
        self.checked: set[str] = set()
        self.index = 0
        self.scroll = 0

    # ---------- public API ----------
    def start(self):
        choices = self.session.available_fields
        if not choices:
            self._set_status("No editable fields in this file", 3)
            return
        self.active = True
        self.choices = choices
        self.checked = set(self.session.editable_fields)
        self.index = 0
        self.scroll = 0

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13, curses.KEY_ENTER):
            self._apply()
            return

        if ch in (27, ord("q")):
            self._reset()
            self._set_status("Field selection canceled", 3)
            return

        if ch in (ord("j"), curses.KEY_DOWN):
            self.index = min(len(self.choices) - 1, self.index + 1)
            return

        if ch in (ord("k"), curses.KEY_UP):
            self.index = max(0, self.index - 1)
            return

        if ch in (ord(" "), ord("x")):
            name = self.choices[self.index]
            if name in self.checked:
                self.checked.discard(name)
            else:
                self.checked.add(name)
            return

        if ch == ord("a"):
            if len(self.checked) == len(self.choices):
                self.checked = set()
            else:
                self.checked = set(self.choices)
            return

    def selected(self) -> list[str]:
        return [c for c in self.choices if c in self.checked]

    # ---------- internals ----------
    def _apply(self):
        try:
            fields = self.session.set_editable_fields(self.selected())
        except InvalidFieldError as e:
            self._set_status(str(e), 4)
            return
        self._reset()
        if fields:
            self._set_status(f"Editing: {', '.join(fields)}", 3)
        else:
            self._set_status("No fields selected", 3)
        if self._on_applied:
            self._on_applied()

    def _reset(self):
        self.active = False
        self.choices = []
        self.checked = set()
        self.index = 0
        self.scroll = 0

    def draw(self, win):
        if not self.active:
            return
        win.erase()
        h, w = win.getmaxyx()
        header = "Select fields to edit:  space toggle  a all  Enter apply  Esc cancel"
        try:
            win.addnstr(0, 0, header, w - 1, curses.A_BOLD)
        except curses.error:
            pass

        rows = max(1, h - 2)
        if self.index < self.scroll:
            self.scroll = self.index
        elif self.index >= self.scroll + rows:
            self.scroll = self.index - rows + 1

        for i, name in enumerate(self.choices[self.scroll : self.scroll + rows]):
            abs_i = self.scroll + i
            mark = "[x]" if name in self.checked else "[ ]"
            attr = curses.A_REVERSE if abs_i == self.index else 0
            try:
                win.addnstr(2 + i, 1, f"{mark} {name}", w - 2, attr)
            except curses.error:
                pass
        win.refresh()
