import curses
import textwrap


def wrap_text(text: str, width: int) -> list[str]:
    width = max(1, width)
    lines: list[str] = []
    for part in (text or "").split("\n"):
        wrapped = textwrap.wrap(part, width=width, drop_whitespace=True)
        lines.extend(wrapped if wrapped else [""])
    return lines


class RecordPane:
    """Draws one record: title, read-only abstract and the editable fields."""

    ABSTRACT_MIN_LINES = 3
    ABSTRACT_MAX_LINES = 10
    LABEL_MAX_WIDTH = 24

    def draw(self, win, view, focus=0, insert_line=None, active=True):
        """Render ``view`` into ``win``.

        ``insert_line`` is the LineBuffer of the field being edited, if any;
        the focused field then shows its live text and cursor.
        """
        win.erase()
        h, w = win.getmaxyx()
        if view is None:
            self._addline(win, 0, "No file loaded. Press o to open a CSV file, ? for help.", w)
            win.refresh()
            return
        if view.empty:
            self._addline(win, 0, "The file has no papers.", w)
            win.refresh()
            return

        y = 0
        for line in wrap_text(view.title, w - 1)[:2]:
            self._addline(win, y, line, w, curses.A_BOLD)
            y += 1
        y += 1

        reserved = len(view.fields) + 2
        room = max(self.ABSTRACT_MIN_LINES, min(self.ABSTRACT_MAX_LINES, h - y - reserved))
        abstract = wrap_text(view.abstract, w - 3)
        self._addline(win, y, "Abstract", w, curses.A_UNDERLINE)
        y += 1
        for line in abstract[:room]:
            self._addline(win, y, " " + line, w, curses.A_DIM)
            y += 1
        if len(abstract) > room:
            self._addline(win, y, f" … ({len(abstract) - room} more lines)", w, curses.A_DIM)
            y += 1
        y += 1

        if not view.fields:
            self._addline(win, y, "No fields selected. Press f to choose fields to edit.", w)

        label_w = min(self.LABEL_MAX_WIDTH, max((len(n) for n, _ in view.fields), default=0))
        cursor_pos = None
        for idx, (name, value) in enumerate(view.fields):
            if y >= h:
                break
            label = f"{name[:label_w].rjust(label_w)}: "
            focused = active and idx == focus
            attr = curses.A_REVERSE if focused and insert_line is None else 0
            self._addline(win, y, label, w, curses.A_BOLD if focused else 0)
            text_w = max(1, w - len(label) - 1)
            if focused and insert_line is not None:
                visible, cx = insert_line.visible(text_w)
                self._addstr(win, y, len(label), visible, text_w, curses.A_UNDERLINE)
                cursor_pos = (y, len(label) + cx)
            else:
                self._addstr(win, y, len(label), value.replace("\n", " "), text_w, attr)
            y += 1

        if cursor_pos is not None:
            try:
                win.move(*cursor_pos)
            except curses.error:
                pass
        win.refresh()

    @staticmethod
    def _addline(win, y, text, w, attr=0):
        try:
            win.addnstr(y, 0, text, max(1, w - 1), attr)
        except curses.error:
            pass

    @staticmethod
    def _addstr(win, y, x, text, n, attr=0):
        try:
            win.addnstr(y, x, text, n, attr)
        except curses.error:
            pass
