import csv
import io
import os

import pandas as pd

from errors import ParseError


SUPPORTED_EXTENSIONS = {".csv", ".txt"}


def _decode(data) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"File is not valid UTF-8 ({exc.reason})") from exc


def _is_blank(record) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())


def _check_field_counts(text: str):
    """Fail on the first data record whose field count differs from the header.

    The parser below pads short rows with empty strings, so counts are
    checked on the raw records first. Newlines are normalised here only;
    a quoted line break never changes how many fields a record has.
    """
    try:
        records = [r for r in csv.reader(io.StringIO(text, newline=None)) if not _is_blank(r)]
    except csv.Error as exc:
        raise ParseError(f"Malformed CSV: {exc}") from exc
    if not records:
        return
    expected = len(records[0])
    for n, record in enumerate(records[1:], start=1):
        if len(record) != expected:
            raise ParseError(
                f"Expected {expected} fields in data row {n}, found {len(record)}"
            )


def parse_table(data) -> pd.DataFrame:
    """Parse comma-separated bytes with a header row into a string DataFrame.

    Every cell is kept as the exact text read; empty cells stay empty strings.
    Rows whose field count differs from the header fail the whole parse.
    """
    text = _decode(data)
    if not text.strip():
        raise ParseError("File is empty")

    _check_field_counts(text)

    try:
        raw = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise ParseError("File is empty") from exc
    except pd.errors.ParserError as exc:
        raise ParseError(f"Malformed CSV: {exc}") from exc

    if raw.empty:
        raise ParseError("File is empty")

    columns = [str(c) for c in raw.iloc[0].tolist()]
    seen = set()
    dupes = []
    for col in columns:
        if col in seen and col not in dupes:
            dupes.append(col)
        seen.add(col)
    if dupes:
        raise ParseError(f"Duplicate column names: {', '.join(dupes)}")

    body = raw.iloc[1:].reset_index(drop=True)
    body.columns = columns
    return body.astype(object)


def _has_carriage_return(df: pd.DataFrame) -> bool:
    return any(
        df[col].astype(str).str.contains("\r", regex=False).any() for col in df.columns
    )


def serialize_table(df: pd.DataFrame) -> bytes:
    # a bare \r is a record break on reload unless the cell is quoted
    quoting = csv.QUOTE_ALL if _has_carriage_return(df) else csv.QUOTE_MINIMAL
    return df.to_csv(index=False, lineterminator="\n", quoting=quoting).encode("utf-8")


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

    def ensure_supported(self):
        if self.ext not in SUPPORTED_EXTENSIONS:
            raise ParseError("Unsupported file type (use .csv or .txt)")

    def read_bytes(self) -> bytes:
        self.ensure_supported()
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as exc:
            raise ParseError(f"Cannot read {self.path}: {exc.strerror}") from exc

    def save(self, df: pd.DataFrame) -> None:
        with open(self.path, "wb") as f:
            f.write(serialize_table(df))
