import curses

from line_buffer import LineBuffer


class CommandPane:
    def __init__(self):
        self.line = LineBuffer()
        self.active = False
        self.history = []
        self.history_idx = None  # None means not navigating history

    # ---------- state helpers ----------
    def reset(self):
        self.line.clear()
        self.active = False
        self.history_idx = None

    def activate(self):
        self.active = True
        self.history_idx = None

    def get_buffer(self):
        return self.line.text

    def set_buffer(self, text):
        self.line.set(text)
        self.history_idx = None

    def remember(self, entry):
        if entry and (not self.history or self.history[-1] != entry):
            self.history.append(entry)
            self.history = self.history[-100:]

    def _apply_history(self):
        if self.history_idx is not None and 0 <= self.history_idx < len(self.history):
            self.line.set(self.history[self.history_idx])
        else:
            self.line.clear()

    # ---------- input handling ----------
    def handle_key(self, ch):
        if not self.active:
            return None

        if ch in (16, curses.KEY_UP):  # Ctrl+P
            if self.history:
                if self.history_idx is None:
                    self.history_idx = len(self.history) - 1
                else:
                    self.history_idx = max(0, self.history_idx - 1)
                self._apply_history()
            return None

        if ch in (14, curses.KEY_DOWN):  # Ctrl+N
            if self.history_idx is not None:
                self.history_idx += 1
                if self.history_idx >= len(self.history):
                    self.history_idx = None
                self._apply_history()
            return None

        if ch in (10, 13, curses.KEY_ENTER):
            return "submit"

        if ch == 27:  # Esc
            self.reset()
            return "cancel"

        if ch in (curses.KEY_BACKSPACE, 127, 8) and not self.line.text:
            self.reset()
            return "cancel"

        if self.line.handle_key(ch):
            self.history_idx = None
        return None

    # ---------- rendering ----------
    def draw(self, win, active=False):
        win.erase()
        self.line.draw(win, ":")
        win.refresh()
