import curses


def read_key(win):
    """Read one key with get_wch; ASCII comes back as its code, -1 on timeout.

    Non-ASCII characters stay one-character strings so they can be typed.
    """
    try:
        ch = win.get_wch()
    except curses.error:
        return -1
    if isinstance(ch, str) and len(ch) == 1 and ord(ch) < 128:
        return ord(ch)
    return ch


class LineBuffer:
    """Single-line text editing shared by prompts and field insert mode."""

    def __init__(self, text: str = ""):
        self.buffer = text
        self.cursor = len(text)
        self.hscroll = 0

    def set(self, text: str):
        self.buffer = text or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def clear(self):
        self.set("")

    @property
    def text(self) -> str:
        return self.buffer

    @staticmethod
    def _is_word_char(ch):
        return ch.isalnum() or ch == "_"

    def _word_boundary_left(self):
        i = self.cursor
        while i > 0 and self.buffer[i - 1].isspace():
            i -= 1
        while i > 0 and not self._is_word_char(self.buffer[i - 1]) and not self.buffer[i - 1].isspace():
            i -= 1
        while i > 0 and self._is_word_char(self.buffer[i - 1]):
            i -= 1
        return i

    def handle_key(self, ch) -> bool:
        """Apply an editing key; return False when the key is not an edit."""
        if ch == 23:  # Ctrl+W, delete word backward
            start = self._word_boundary_left()
            self.buffer = self.buffer[:start] + self.buffer[self.cursor :]
            self.cursor = start
            return True

        if ch == 21:  # Ctrl+U, kill to line start
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
            return True

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
            return True

        if ch == curses.KEY_DC:
            self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
            return True

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return True

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return True

        if ch in (curses.KEY_HOME, 1):  # Home or Ctrl+A
            self.cursor = 0
            return True

        if ch in (curses.KEY_END, 5):  # End or Ctrl+E
            self.cursor = len(self.buffer)
            return True

        if isinstance(ch, int) and 32 <= ch <= 126:
            ch = chr(ch)
        if isinstance(ch, str) and len(ch) == 1 and ch.isprintable():
            self.buffer = self.buffer[: self.cursor] + ch + self.buffer[self.cursor :]
            self.cursor += 1
            return True

        return False

    def visible(self, width: int) -> tuple[str, int]:
        """Slice of the buffer that fits ``width`` and the cursor column in it."""
        width = max(1, width)
        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + width - 1:
            self.hscroll = self.cursor - width + 1
        start = self.hscroll
        return self.buffer[start : start + width], self.cursor - start

    def draw(self, win, prompt: str, y: int = 0, attr: int = 0):
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)
        visible, cx = self.visible(text_w)
        try:
            win.addnstr(y, 0, prompt, len(prompt))
            win.addnstr(y, len(prompt), visible, text_w, attr)
            win.move(y, min(w - 1, len(prompt) + cx))
        except curses.error:
            pass
