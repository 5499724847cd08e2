import pandas as pd
import pytest

from errors import ParseError
from file_type_handler import FileTypeHandler, parse_table, serialize_table


def test_parse_keeps_cells_as_text():
    df = parse_table(b"Title,Year,Score\nA,007,\nB,NA,1.50\n")
    assert list(df.columns) == ["Title", "Year", "Score"]
    assert df["Year"].tolist() == ["007", "NA"]
    assert df["Score"].tolist() == ["", "1.50"]


def test_parse_strips_utf8_bom():
    df = parse_table("\ufeffTitle,Year\nA,1\n".encode("utf-8"))
    assert list(df.columns) == ["Title", "Year"]


def test_parse_handles_quoted_commas_and_newlines():
    df = parse_table(b'Title,Abstract\n"A, B","line one\nline two"\n')
    assert df.at[0, "Title"] == "A, B"
    assert df.at[0, "Abstract"] == "line one\nline two"


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"   \n",
        b"a,b\n1,2,3\n",
        b"a,b,c\n1,2\n",
        b"Title,Abstract,Year\nA,B,1\nb\n",
        b"Title,Abstract,Year\rA,B\r",
        b"Title,Abstract,Year\r\nA,B\r\n",
        b"a,a\n1,2\n",
        b"Title\n\xff\xfe\xfa\n",
    ],
)
def test_parse_rejects_malformed_input(data):
    with pytest.raises(ParseError):
        parse_table(data)


def test_parse_names_the_short_row():
    with pytest.raises(ParseError, match="Expected 3 fields in data row 2, found 1"):
        parse_table(b"Title,Abstract,Year\nA,B,1\n\nb\n")


def test_parse_keeps_trailing_empty_cells():
    df = parse_table(b"Title,Abstract,Notes\r\nA,B,\r\n,,\r\n")
    assert df.values.tolist() == [["A", "B", ""], ["", "", ""]]


def test_serialize_has_no_index_and_keeps_order():
    df = pd.DataFrame({"b": ["1", "2"], "a": ["x", ""]}, dtype=object)
    assert serialize_table(df) == b"b,a\n1,x\n2,\n"


def test_handler_rejects_unsupported_extension(tmp_path):
    path = tmp_path / "papers.xlsx"
    path.write_bytes(b"Title\nA\n")
    with pytest.raises(ParseError, match="Unsupported"):
        FileTypeHandler(str(path)).read_bytes()


def test_handler_missing_file_is_a_parse_error(tmp_path):
    with pytest.raises(ParseError, match="Cannot read"):
        FileTypeHandler(str(tmp_path / "missing.csv")).read_bytes()


def test_handler_save_then_load(tmp_path):
    path = tmp_path / "out.csv"
    df = parse_table(b"Title,Abstract,Year\nA,B,2020\n")
    handler = FileTypeHandler(str(path))
    handler.save(df)
    pd.testing.assert_frame_equal(parse_table(handler.read_bytes()), df)


def test_serialize_quotes_cells_with_carriage_returns():
    df = pd.DataFrame({"Title": ["A"], "Year": ["a\rb"]}, dtype=object)
    data = serialize_table(df)
    assert b'"a\rb"' in data
    pd.testing.assert_frame_equal(parse_table(data), df)
