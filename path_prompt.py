from typing import Callable, Optional

from errors import RecordEditorError
from line_buffer import LineBuffer


class PathPrompt:
    """Status-line prompt asking for a path to open or export to."""

    PROMPTS = {"open": "Open: ", "export": "Export as: "}

    def __init__(self, session, set_status_cb: Callable[[str, int], None], on_loaded: Optional[Callable[[], None]] = None):
        self.session = session
        self._set_status = set_status_cb
        self._on_loaded = on_loaded

        self.active = False
        self.kind: Optional[str] = None
        self.line = LineBuffer()

    def start(self, kind: str, default: Optional[str] = None):
        if kind not in self.PROMPTS:
            raise ValueError(kind)
        self.active = True
        self.kind = kind
        self.line.set(default or "")

    def _reset(self):
        self.active = False
        self.kind = None
        self.line.clear()

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in (10, 13):  # Enter
            path = self.line.text.strip()
            if not path:
                self._set_status("Path required", 3)
                return
            if self.kind == "open":
                self._open(path)
            else:
                self._export(path)
            return

        if ch == 27:  # Esc
            label = "Open" if self.kind == "open" else "Export"
            self._reset()
            self._set_status(f"{label} canceled", 3)
            return

        self.line.handle_key(ch)

    def _open(self, path):
        try:
            self.session.load_path(path)
        except RecordEditorError as e:
            self._set_status(f"Load failed: {e}", 4)
            return
        self._reset()
        self._set_status(f"Loaded {path} ({self.session.row_count} papers)", 3)
        if self._on_loaded:
            self._on_loaded()

    def _export(self, path):
        try:
            written = self.session.export_path(path)
        except OSError as e:
            self._set_status(f"Export failed: {e}", 4)
            return
        self._reset()
        self._set_status(f"Exported {written}", 3)

    def draw(self, win):
        self.line.draw(win, self.PROMPTS.get(self.kind, "Path: "))
        win.refresh()
