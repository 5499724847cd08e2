import curses

from actions import NEXT, PREVIOUS, SUBMIT
from errors import RecordEditorError
from line_buffer import LineBuffer


class RecordEditor:
    """Handles record key interactions: shortcuts, field focus and field editing."""

    def __init__(self, session, form, dispatcher, set_status_cb):
        self.session = session
        self.form = form
        self.dispatcher = dispatcher
        self._set_status = set_status_cb

        self.mode = "normal"  # normal | insert
        self.line = LineBuffer()
        self.edit_field = None

    # ---------- actions ----------
    def run(self, trigger):
        """Dispatch a trigger, reporting recoverable errors on the status bar."""
        try:
            return self.dispatcher.dispatch(trigger)
        except RecordEditorError as e:
            self._set_status(str(e), 4)
            self.form.sync()
            return None

    def submit(self):
        return self.run(SUBMIT)

    def next(self):
        return self.run(NEXT)

    def previous(self):
        return self.run(PREVIOUS)

    # ---------- insert mode ----------
    def start_insert(self, at_end=True):
        if not self.session.is_loaded:
            self._set_status("No file loaded", 3)
            return
        self.form.sync()
        field = self.form.focused_field()
        if field is None:
            self._set_status("No fields selected (press f)", 3)
            return
        self.edit_field = field
        self.line.set(self.form.get_value(field))
        if not at_end:
            self.line.cursor = 0
        self.mode = "insert"

    def _commit_insert(self):
        if self.edit_field is not None and self.edit_field in self.form.values:
            self.form.set_value(self.edit_field, self.line.text)
        self.mode = "normal"
        self.edit_field = None
        self.line.clear()

    def cancel_insert(self):
        self.mode = "normal"
        self.edit_field = None
        self.line.clear()

    # ---------- key handling ----------
    def handle_key(self, ch):
        if self.mode == "insert":
            self._handle_insert_key(ch)
            return
        self._handle_normal_key(ch)

    def _handle_insert_key(self, ch):
        if ch in (10, 13, curses.KEY_ENTER):
            self._commit_insert()
            self.submit()
            return
        if ch == 27:  # Esc keeps the pending value
            self._commit_insert()
            return
        if ch in (curses.KEY_UP, curses.KEY_DOWN, 9):
            self._commit_insert()
            self.form.move_focus(-1 if ch == curses.KEY_UP else 1)
            self.start_insert()
            return
        self.line.handle_key(ch)

    def _handle_normal_key(self, ch):
        trigger = self.dispatcher.trigger_for_key(ch)
        if trigger is not None:
            self.run(trigger)
            return

        if ch in (ord("j"), curses.KEY_DOWN, 9):
            self.form.move_focus(1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.form.move_focus(-1)
        elif ch in (ord("i"), ord("a"), ord("e")):
            self.start_insert(at_end=(ch != ord("i")))
        elif ch in (ord("n"), curses.KEY_RIGHT):
            self.next()
        elif ch in (ord("p"), curses.KEY_LEFT):
            self.previous()
