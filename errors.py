from dataclasses import dataclass


class RecordEditorError(Exception):
    """Base class for recoverable editor errors."""


class ParseError(RecordEditorError):
    pass


class InvalidFieldError(RecordEditorError):
    def __init__(self, message, names=None):
        super().__init__(message)
        self.names = sorted(names or [])


class StaleRecordError(RecordEditorError):
    def __init__(self, displayed, current):
        super().__init__(
            f"Form shows paper {displayed} but the current paper is {current}"
        )
        self.displayed = displayed
        self.current = current


@dataclass(frozen=True)
class Notice:
    title: str
    message: str


CONFIRMATION = Notice("Confirmation", "Changes saved successfully!")
END_OF_DATA = Notice("End of Papers", "You have reached the last paper.")


class BoundaryNotice(Exception):
    """Raised when navigation is requested past the last record.

    Informational only: the cursor is left unchanged.
    """

    def __init__(self, notice: Notice = END_OF_DATA):
        super().__init__(notice.message)
        self.notice = notice
