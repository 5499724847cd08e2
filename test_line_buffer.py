import curses

from line_buffer import LineBuffer, read_key


class KeyWin:
    def __init__(self, keys):
        self.keys = list(keys)

    def get_wch(self):
        if not self.keys:
            raise curses.error("no input")
        return self.keys.pop(0)


def test_read_key_maps_ascii_to_codes_and_keeps_wide_chars():
    win = KeyWin(["a", "\n", "\x18", "é", curses.KEY_LEFT])
    assert [read_key(win) for _ in range(5)] == [97, 10, 24, "é", curses.KEY_LEFT]
    assert read_key(win) == -1


def test_accented_characters_are_typed():
    buf = LineBuffer("Mller")
    buf.cursor = 1
    assert buf.handle_key("ü")
    assert buf.text == "Müller"
    assert buf.cursor == 2


def test_non_printable_strings_are_not_edits():
    buf = LineBuffer("x")
    assert not buf.handle_key("\x00")
    assert not buf.handle_key("ab")
    assert buf.text == "x"
