import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: record (main), status bar (1 line), command bar (1 line); overlays float above
        self.status_h = 1
        self.cmd_h = 1

        self.table_h = max(1, self.H - self.status_h - self.cmd_h)

        # record pane owns the cursor while a field is edited
        self.record_win = curses.newwin(self.table_h, self.W, 0, 0)

        self.status_win = curses.newwin(self.status_h, self.W, self.table_h, 0)
        # do not let status bar steal cursor
        self.status_win.leaveok(True)

        self.cmd_win = curses.newwin(self.cmd_h, self.W, self.table_h + self.status_h, 0)
