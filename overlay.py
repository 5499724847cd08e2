import curses
from typing import List


class OverlayView:
    """Modal box over the record area: notices and the help screen."""

    CLOSE_KEYS = (27, ord("q"), 10, 13, curses.KEY_ENTER, ord("?"), ord(" "))

    def __init__(self, layout):
        self.layout = layout
        self.visible = False
        self.title = ""
        self.lines: List[str] = []
        self.scroll = 0
        self.win = None
        self.mode: str | None = None

    def open_help(self, lines: List[str]):
        self._open("Help", lines, mode="help")

    def open_notice(self, notice):
        self._open(notice.title, [notice.message, "", "(Enter or Esc to close)"], mode="notice")

    def _open(self, title, lines, *, mode):
        self.mode = mode
        self.title = title
        self.lines = list(lines or [])
        self.scroll = 0

        if mode == "help":
            overlay_h = max(3, self.layout.table_h)
            overlay_w = self.layout.W
            overlay_y, overlay_x = 0, 0
        else:
            content_w = max([len(title)] + [len(l) for l in self.lines]) + 4
            overlay_w = max(20, min(self.layout.W, content_w))
            overlay_h = max(3, min(self.layout.table_h, len(self.lines) + 2))
            overlay_y = max(0, (self.layout.table_h - overlay_h) // 2)
            overlay_x = max(0, (self.layout.W - overlay_w) // 2)

        self.win = curses.newwin(overlay_h, overlay_w, overlay_y, overlay_x)
        self.win.leaveok(True)
        self.visible = True

    def close(self):
        self.visible = False
        self.title = ""
        self.lines = []
        self.scroll = 0
        self.win = None
        self.mode = None

    def handle_key(self, ch):
        if not self.visible or self.win is None or ch == -1:
            return

        if ch in self.CLOSE_KEYS:
            self.close()
            return

        h, _ = self.win.getmaxyx()
        max_scroll = max(0, len(self.lines) - max(0, h - 2))
        if ch in (ord("j"), curses.KEY_DOWN):
            self.scroll = min(max_scroll, self.scroll + 1)
        elif ch in (ord("k"), curses.KEY_UP):
            self.scroll = max(0, self.scroll - 1)
        elif ch in (curses.KEY_HOME, ord("g")):
            self.scroll = 0
        elif ch in (curses.KEY_END, ord("G")):
            self.scroll = max_scroll

    def draw(self):
        if not self.visible or not self.win:
            return

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()
        try:
            win.addnstr(0, 2, f" {self.title} ", max(1, w - 4), curses.A_BOLD)
        except curses.error:
            pass

        max_visible = max(0, h - 2)
        for i, line in enumerate(self.lines[self.scroll : self.scroll + max_visible]):
            try:
                win.addnstr(1 + i, 2, line, max(1, w - 4))
            except curses.error:
                pass

        win.refresh()
