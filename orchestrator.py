import curses
import time

from actions import ActionDispatcher
from app_logging import get_logger
from command_executor import HELP_LINES, CommandExecutor
from command_pane import CommandPane
from config_paths import ensure_config_dirs
from field_picker import FieldPicker
from line_buffer import read_key
from overlay import OverlayView
from path_prompt import PathPrompt
from record_editor import RecordEditor
from record_form import RecordForm
from record_pane import RecordPane
from record_view import build_record_view
from screen_layout import ScreenLayout
from status_bar import render_status

log = get_logger(__name__)


class Orchestrator:
    def __init__(self, stdscr, session, config):
        self.stdscr = stdscr
        curses.curs_set(0)
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        ensure_config_dirs()

        self.session = session
        self.config = config
        self.layout = ScreenLayout(stdscr)
        self.pane = RecordPane()

        self.focus = 0  # 0=record, 1=cmd, 2=overlay

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0
        self.status_seconds = config.get("STATUS_SECONDS", 3)

        # ---- overlay ----
        self.overlay = OverlayView(self.layout)

        # ---- record editing ----
        self.form = RecordForm(session)
        self.dispatcher = ActionDispatcher(
            session,
            self.form,
            notify_cb=self._show_notice,
            key_bindings=config.get("KEY_BINDINGS"),
        )
        self.editor = RecordEditor(session, self.form, self.dispatcher, self._set_status)

        # ---- prompts ----
        self.field_picker = FieldPicker(session, self._set_status, on_applied=self.form.sync)
        self.path_prompt = PathPrompt(session, self._set_status, on_loaded=self._after_load)

        self.command = CommandPane()
        self.export_filename = config.get("EXPORT_FILENAME", "updated_data.csv")
        self.exec = CommandExecutor(
            session,
            self.editor,
            self.field_picker,
            self.path_prompt,
            self._set_status,
            self.export_filename,
        )

        read_only = list(session.read_only_fields) + ["", ""]
        self.title_field, self.abstract_field = read_only[0], read_only[1]

        if session.is_loaded:
            self._after_load()
        else:
            self.path_prompt.start("open")

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=None):
        self.status_msg = msg
        self.status_msg_until = time.time() + (seconds or self.status_seconds)

    def _show_notice(self, notice):
        self.overlay.open_notice(notice)
        self.focus = 2

    def _after_load(self):
        self.form.sync()
        self.field_picker.start()

    # ---------------- UI ----------------

    def redraw(self):
        self.form.sync()
        insert = self.editor.mode == "insert"
        prompt_active = self.path_prompt.active or (self.focus == 1 and self.command.active)
        try:
            if self.overlay.visible or self.field_picker.active:
                curses.curs_set(0)
            elif prompt_active:
                curses.curs_set(1)
            else:
                curses.curs_set(1 if insert else 0)
        except curses.error:
            pass

        self._draw_status()
        # whichever window owns the terminal cursor is drawn last
        if prompt_active:
            self._draw_record(insert)
            self._draw_cmd()
        else:
            self._draw_cmd()
            self._draw_record(insert)

        if self.overlay.visible:
            self.overlay.draw()

    def _draw_record(self, insert):
        rw = self.layout.record_win
        if self.field_picker.active:
            self.field_picker.draw(rw)
            return
        view = build_record_view(
            self.session, self.form, self.title_field, self.abstract_field
        )
        self.pane.draw(
            rw,
            view,
            focus=self.form.focus,
            insert_line=self.editor.line if insert else None,
            active=(self.focus == 0),
        )

    def _draw_status(self):
        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "mode": self.editor.mode,
            "file_path": self.session.file_path,
            "position": self.session.cursor,
            "total": self.session.row_count,
            "editable_fields": self.session.editable_fields,
            "dirty": self.form.is_dirty(),
        }
        try:
            sw.addnstr(0, 0, render_status(context, w), max(1, w - 1), curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

    def _draw_cmd(self):
        cw = self.layout.cmd_win
        if self.path_prompt.active:
            cw.erase()
            self.path_prompt.draw(cw)
        elif self.focus == 1 and self.command.active:
            self.command.draw(cw, active=True)
        else:
            cw.erase()
            cw.refresh()

    # ---------------- command exec ----------------

    def _execute_command_buffer(self):
        code = self.command.get_buffer().strip()
        self.command.reset()
        self.focus = 0

        if not code:
            return

        lines = self.exec.execute(code)
        if self.exec._last_success:
            self.command.remember(code)
        if lines:
            self.overlay.open_help(lines)
            self.focus = 2

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = read_key(self.stdscr)

            if ch == 24:  # Ctrl+X
                break

            if ch == -1:
                self.redraw()
                continue

            if self.overlay.visible:
                self.overlay.handle_key(ch)
                if not self.overlay.visible:
                    self.focus = 0
                self.redraw()
                continue

            if self.field_picker.active:
                self.field_picker.handle_key(ch)
                self.redraw()
                continue

            if self.path_prompt.active:
                self.path_prompt.handle_key(ch)
                self.redraw()
                continue

            if self.focus == 1:
                result = self.command.handle_key(ch)
                if result == "submit":
                    self._execute_command_buffer()
                elif result == "cancel":
                    self.focus = 0
                if self.exec.quit_requested:
                    break
                self.redraw()
                continue

            if self.editor.mode == "insert":
                self.editor.handle_key(ch)
            elif ch == 19:  # Ctrl+S
                if not self.session.is_loaded:
                    self._set_status("Nothing to export", 3)
                else:
                    self.path_prompt.start("export", self.export_filename)
            elif ch == ord(":"):
                self.command.activate()
                self.focus = 1
            elif ch == ord("?"):
                self.overlay.open_help(HELP_LINES)
                self.focus = 2
            elif ch == ord("f"):
                if self.session.is_loaded:
                    self.field_picker.start()
                else:
                    self._set_status("No file loaded", 3)
            elif ch == ord("o"):
                self.path_prompt.start("open", self.session.file_path)
            elif ch == ord("q"):
                self._set_status("Press Ctrl+X to quit", 3)
            else:
                self.editor.handle_key(ch)

            self.redraw()

        log.info("Session closed at paper %d of %d", self.session.cursor, self.session.row_count)
