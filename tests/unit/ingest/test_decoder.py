"""Tests for SpreadsheetDecoder."""

from __future__ import annotations

import pytest

from sheetmerge.core.exceptions import DecodeError, SheetNotFoundError, UnreadableFileError
from sheetmerge.ingest.decoder import SpreadsheetDecoder, sniff_format
from tests.fakes import make_csv, make_xlsx


@pytest.fixture
def workbook() -> bytes:
    return make_xlsx({
        "People": [["Name", "Age", "City"], ["Ann", 31, "Oslo"], ["Bob", None, "Rome"]],
        "Totals": [["Total"], [2]],
    })


class TestSniffFormat:
    def test_xlsx_is_zip(self, workbook):
        assert sniff_format(workbook) == "xlsx"

    def test_xls_is_ole(self):
        assert sniff_format(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1rest") == "xls"

    def test_anything_else_is_csv(self):
        assert sniff_format(b"a,b\n1,2\n") == "csv"

    def test_csv_name_is_read_as_text(self):
        assert sniff_format(b"a,b\n1,2\n", "Data.CSV") == "csv"

    def test_signature_wins_over_name(self, workbook):
        assert sniff_format(workbook, "export.csv") == "xlsx"

    @pytest.mark.parametrize("name", ["bad.xlsx", "bad.xls"])
    def test_workbook_name_without_signature_is_unreadable(self, name):
        with pytest.raises(UnreadableFileError, match=name):
            sniff_format(b"\x89PNG\r\n\x1a\n garbage", name)


class TestDecodeXlsx:
    def test_first_row_supplies_headers(self, decoder, workbook):
        table = decoder.decode(workbook, 0)
        assert table.headers == ["Name", "Age", "City"]
        assert table.row_count == 2

    def test_values_are_kept(self, decoder, workbook):
        table = decoder.decode(workbook, 0)
        assert table.rows[0] == {"Name": "Ann", "Age": 31, "City": "Oslo"}

    def test_missing_cell_defaults_to_empty_string(self, decoder, workbook):
        table = decoder.decode(workbook, 0)
        assert table.rows[1]["Age"] == ""
        assert set(table.rows[1]) == set(table.headers)

    def test_sheet_index_selects_by_position(self, decoder, workbook):
        table = decoder.decode(workbook, 1)
        assert table.headers == ["Total"]
        assert table.rows == [{"Total": 2}]

    def test_out_of_range_sheet_names_available_sheets(self, decoder, workbook):
        with pytest.raises(SheetNotFoundError) as info:
            decoder.decode(workbook, 2)
        assert info.value.available == ["People", "Totals"]
        assert "People, Totals" in str(info.value)

    def test_header_only_sheet_has_no_rows_or_headers(self, decoder):
        table = decoder.decode(make_xlsx({"S": [["A", "B"]]}), 0)
        assert table.rows == []
        assert table.headers == []

    def test_blank_rows_are_skipped(self, decoder):
        data = make_xlsx({"S": [["A"], [1], [None], [2]]})
        assert [row["A"] for row in decoder.decode(data, 0).rows] == [1, 2]

    def test_sheet_names(self, decoder, workbook):
        assert decoder.sheet_names(workbook) == ["People", "Totals"]


class TestDecodeCsv:
    def test_csv_rows(self, decoder):
        table = decoder.decode(make_csv([["id", "name"], [1, "x"], [2, "y"]]), 0)
        assert table.headers == ["id", "name"]
        assert [row["name"] for row in table.rows] == ["x", "y"]

    def test_csv_empty_field_is_empty_string(self, decoder):
        table = decoder.decode(make_csv([["a", "b"], ["1", None]]), 0)
        assert table.rows[0]["b"] == ""

    def test_csv_has_a_single_sheet(self, decoder):
        with pytest.raises(SheetNotFoundError):
            decoder.decode(make_csv([["a"], ["1"]]), 1)

    def test_utf8_bom_is_stripped(self, decoder):
        table = decoder.decode("\ufeff名称,数量\n苹果,3\n".encode("utf-8"), 0)
        assert table.headers == ["名称", "数量"]

    def test_trailing_comma_does_not_shift_columns(self, decoder):
        table = decoder.decode(b"a,b\n1,2,\n3,4,\n", 0)
        assert table.headers == ["a", "b"]
        assert table.rows == [{"a": 1, "b": 2}, {"a": 3, "b": 4}]

    def test_short_row_is_padded(self, decoder):
        table = decoder.decode(b"a,b,c\n1,2\n", 0)
        assert table.rows == [{"a": 1, "b": 2, "c": ""}]


class TestUnreadable:
    def test_corrupt_zip_is_unreadable(self, decoder):
        with pytest.raises(UnreadableFileError):
            decoder.decode(b"PK\x03\x04 definitely not a workbook", 0)

    def test_empty_bytes_are_unreadable(self, decoder):
        with pytest.raises(UnreadableFileError):
            decoder.decode(b"", 0)

    def test_garbage_named_as_workbook_is_unreadable(self, decoder):
        with pytest.raises(UnreadableFileError):
            decoder.decode(b"\x89PNG\r\n\x1a\n garbage", 0, name="bad.xlsx")

    def test_unreadable_is_a_decode_error(self, decoder):
        with pytest.raises(DecodeError):
            decoder.decode(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1garbage", 0)
