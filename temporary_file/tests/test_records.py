from io import BytesIO

import pytest

from common.errors import TemporaryFileError
from common.validation import ValidationError
from temporary_file.core import END_OF_DATA, CsvDialect, read_record


def test_read_record_with_defaults():
    handle = BytesIO(b'hoge,fuga,"piyo"\n1,2,3\n')
    assert read_record(handle, CsvDialect()) == ["hoge", "fuga", "piyo"]
    assert read_record(handle, CsvDialect()) == ["1", "2", "3"]
    assert read_record(handle, CsvDialect()) is END_OF_DATA


def test_read_record_leaves_handle_after_record():
    handle = BytesIO(b"a,b\nc,d\n")
    read_record(handle, CsvDialect())
    assert handle.tell() == 4
    assert handle.read() == b"c,d\n"


def test_read_record_custom_enclosure_and_delimiter():
    dialect = CsvDialect(delimiter="\t", enclosure="'")
    handle = BytesIO(b"'x\ty'\tz\n")
    assert read_record(handle, dialect) == ["x\ty", "z"]


def test_read_record_doubled_enclosure_is_literal():
    handle = BytesIO(b'"say ""hi""",b\n')
    assert read_record(handle, CsvDialect()) == ['say "hi"', "b"]


def test_read_record_blank_line_yields_no_fields():
    handle = BytesIO(b"\nnext\n")
    assert read_record(handle, CsvDialect()) == []
    assert read_record(handle, CsvDialect()) == ["next"]


def test_read_record_respects_length_limit():
    handle = BytesIO(b"abc,def\n")
    assert read_record(handle, CsvDialect(length=4)) == ["abc", ""]
    assert handle.tell() == 4


def test_read_record_reports_undecodable_bytes():
    handle = BytesIO(b"\xff\xfe,a\n")
    with pytest.raises(TemporaryFileError) as excinfo:
        read_record(handle, CsvDialect())
    assert excinfo.value.code == "csv_error"


def test_end_of_data_is_falsy_singleton():
    assert not END_OF_DATA
    assert END_OF_DATA is not None
    assert repr(END_OF_DATA) == "END_OF_DATA"


@pytest.mark.parametrize(
    "options",
    [
        {"delimiter": ""},
        {"delimiter": ";;"},
        {"enclosure": ","},
        {"delimiter": "\n"},
        {"escape": '"'},
        {"length": -1},
    ],
)
def test_invalid_dialect_is_rejected(instance, options):
    with pytest.raises(ValidationError) as excinfo:
        instance.getcsv(**options)
    assert excinfo.value.details


def test_getcsv_keeps_backslash_in_unquoted_field(instance):
    instance.put("C:\\temp,x\n")
    instance.head()
    assert instance.getcsv() == ["C:\\temp", "x"]


def test_getcsv_escaped_enclosure_stays_in_field(instance):
    instance.put('"a\\"b",c\n')
    instance.head()
    assert instance.getcsv() == ['a\\"b', "c"]


def test_getcsv_custom_escape_character(instance):
    instance.put("'it~'s';z\n")
    instance.head()
    assert instance.getcsv(delimiter=";", enclosure="'", escape="~") == ["it~'s", "z"]


def test_getcsv_empty_escape_lets_enclosure_close_field(instance):
    instance.put('"x\\",y\n')
    instance.head()
    assert instance.getcsv(escape="") == ["x\\", "y"]


def test_read_record_text_after_closing_enclosure_is_kept():
    handle = BytesIO(b'"ab"cd,e\n')
    assert read_record(handle, CsvDialect()) == ["abcd", "e"]


def test_read_record_unterminated_enclosure_runs_to_end_of_data():
    handle = BytesIO(b'"open,field')
    assert read_record(handle, CsvDialect()) == ["open,field"]
    assert read_record(handle, CsvDialect()) is END_OF_DATA
