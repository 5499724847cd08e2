import shlex

from app_logging import get_logger
from errors import RecordEditorError

log = get_logger(__name__)

HELP_LINES = [
    "litrev - literature review record editor",
    "",
    "Record keys",
    "  Enter          save changes to this paper",
    "  2 / n / Right  next paper",
    "  3 / p / Left   previous paper",
    "  j / k          move between editable fields",
    "  i / a / e      edit the focused field (Enter saves, Esc keeps)",
    "  f              choose fields to edit",
    "  o              open a CSV file",
    "  Ctrl+S         export CSV",
    "  :              command line",
    "  ?              this help",
    "  Ctrl+X         quit",
    "",
    "Commands",
    "  :submit  :next  :prev",
    "  :fields [a,b,...]   choose fields (no argument opens the picker)",
    "  :open <path>",
    "  :export [path] / :w [path]",
    "  :help  :q",
]


class CommandExecutor:
    """Runs `:` commands against the editor. Explicit twins of every shortcut."""

    def __init__(self, session, editor, field_picker, path_prompt, set_status_cb, export_filename):
        self.session = session
        self.editor = editor
        self.field_picker = field_picker
        self.path_prompt = path_prompt
        self._set_status = set_status_cb
        self.export_filename = export_filename
        self.quit_requested = False
        self._last_success = False

    def execute(self, code):
        """Run one command; returns lines for the overlay, or None."""
        self._last_success = False
        try:
            parts = shlex.split(code)
        except ValueError as e:
            self._set_status(f"Bad command: {e}", 4)
            return None
        if not parts:
            return None

        name, args = parts[0].lower(), parts[1:]
        handler = getattr(self, f"_cmd_{name}", None)
        if handler is None:
            aliases = {"previous": "prev", "w": "export", "e": "open", "quit": "q"}
            handler = getattr(self, f"_cmd_{aliases.get(name, '')}", None)
        if handler is None:
            self._set_status(f"Unknown command: {name}", 4)
            return None

        try:
            result = handler(args)
        except RecordEditorError as e:
            log.warning("Command %r failed: %s", code, e)
            self._set_status(str(e), 4)
            return None
        except OSError as e:
            log.warning("Command %r failed: %s", code, e)
            self._set_status(f"{name.capitalize()} failed: {e}", 4)
            return None
        self._last_success = True
        return result

    # ---------- commands ----------
    def _cmd_submit(self, args):
        self.editor.submit()

    def _cmd_next(self, args):
        self.editor.next()

    def _cmd_prev(self, args):
        self.editor.previous()

    def _cmd_fields(self, args):
        if not args:
            self.field_picker.start()
            return None
        names = [n.strip() for n in " ".join(args).split(",") if n.strip()]
        fields = self.session.set_editable_fields(names)
        self.editor.form.sync()
        self._set_status(f"Editing: {', '.join(fields) or '(none)'}", 3)
        return None

    def _cmd_open(self, args):
        if not args:
            self.path_prompt.start("open", self.session.file_path)
            return None
        path = " ".join(args)
        self.session.load_path(path)
        self.editor.form.sync()
        self._set_status(f"Loaded {path} ({self.session.row_count} papers)", 3)
        self.field_picker.start()
        return None

    def _cmd_export(self, args):
        target = " ".join(args) if args else self.export_filename
        written = self.session.export_path(target)
        self._set_status(f"Exported {written}", 3)
        return None

    def _cmd_help(self, args):
        return list(HELP_LINES)

    def _cmd_q(self, args):
        self.quit_requested = True
