"""
Tests for the chart payload decoder.

The payload is split on row boundaries rather than parsed, so the malformed
cases below document exactly what the splitter tolerates.
"""

import pytest
from bs4 import BeautifulSoup

from airkorea.errors import ExtractionError
from airkorea.script import (
    decode_rows,
    decode_series,
    find_calls,
    find_script_text,
    first_token,
    split_rows,
)


class TestSplitRows:
    def test_basic(self):
        assert split_rows("[74,'19시'],[68,'20시']") == ["74,'19시'", "68,'20시'"]

    def test_whitespace_between_rows(self):
        assert split_rows("[1, 'a'] ,\n [2, 'b']") == ["1, 'a'", "2, 'b'"]

    def test_trailing_comma_after_last_row(self):
        assert split_rows("[1,'a'],[2,'b'],") == ["1,'a'", "2,'b'"]

    def test_empty(self):
        assert split_rows("") == []
        assert split_rows("  ") == []


@pytest.mark.parametrize(
    "row, token",
    [
        ("74,'19시'", "74"),
        ("[74]", "74"),
        (" 0.003 , 'ppm' ", "0.003"),
        ("81]", "81"),
        (",81", ""),
    ],
)
def test_first_token(row, token):
    assert first_token(row) == token


class TestDecodeRows:
    def test_preserves_count_and_order(self):
        assert decode_rows("[3,'a'],[1,'b'],[2,'c']") == [3.0, 1.0, 2.0]

    def test_non_numeric_row_does_not_affect_siblings(self):
        assert decode_rows("[74,'a'],['-','b'],[null,'c'],[68,'d']") == [74.0, None, None, 68.0]

    def test_trailing_comma_inside_row(self):
        assert decode_rows("[74,],[68,'b',]") == [74.0, 68.0]

    def test_missing_closing_bracket_on_last_row(self):
        assert decode_rows("[74,'a'],[68,'b'") == [74.0, 68.0]

    def test_embedded_unit_suffix_is_not_a_number(self):
        assert decode_rows("[0.003ppm,'a'],[0.004,'ppm']") == [None, 0.004]

    def test_blank_first_token(self):
        assert decode_rows("[,'a'],[ ,'b'],[5,'c']") == [None, None, 5.0]

    def test_quoted_numbers(self):
        assert decode_rows("['74','a'],[\"0.5\",'b']") == [74.0, 0.5]


class TestDecodeSeries:
    SCRIPT = """
        var chart = new google.visualization.LineChart(el);
        data.addColumn('number', 'CAI');
        data.addRows([[74,'19시'],[68,'20시'],[81,'21시']]);
        drawChart('chart1', data);
        other.addRows([[0.004,'19시'],[null,'20시']]);
        console.log('addRows is drawn later');
    """

    def test_one_vector_per_call_in_order(self):
        assert decode_series(self.SCRIPT) == [[74.0, 68.0, 81.0], [0.004, None]]

    def test_truncated_series_is_not_padded(self):
        series = decode_series("data.addRows([[1,'00시'],[2,'01시']]);")
        assert series == [[1.0, 2.0]]

    def test_multiline_payload(self):
        script = "data.addRows([\n  [1, '00시'],\n  [2, '01시']\n]);"
        assert decode_series(script) == [[1.0, 2.0]]

    def test_empty_call(self):
        assert decode_series("data.addRows([]);") == [[]]

    def test_other_call_names_are_ignored(self):
        script = "data.addRowsLater([[1]]); data.myaddRows([[2]]); data.addRows([[3]]);"
        assert decode_series(script) == [[3.0]]

    def test_custom_call_name(self):
        assert decode_series("chart.setData([[5,'a']]);", call_name="setData") == [[5.0]]

    def test_no_calls(self):
        assert decode_series("var x = 1;") == []
        assert decode_series("") == []

    def test_find_calls_returns_raw_payloads(self):
        assert find_calls("a.addRows([[1,'x']]); b.addRows([[2,'y']]);", "addRows") == [
            "[1,'x']",
            "[2,'y']",
        ]


class TestQuasiJsonPayload:
    def test_object_rows(self):
        script = "data.addRows([{v: 74, f: '19시'}, {v: null, f: '20시'}, {v: '0.5'}]);"
        assert decode_series(script, payload_format="quasi_json") == [[74.0, None, 0.5]]

    def test_array_rows(self):
        script = "data.addRows([[74, '19시'], ['-', '20시'], [81, '21시']]);"
        assert decode_series(script, payload_format="quasi_json") == [[74.0, None, 81.0]]

    def test_compact_object_rows(self):
        script = "data.addRows([{v:74,f:'19시'},{v:68,f:'20시'}]);"
        assert decode_series(script, payload_format="quasi_json") == [[74.0, 68.0]]

    def test_leading_zero_numbers_are_decimal(self):
        script = "data.addRows([[010,'a'],[68,'b']]);"
        assert decode_series(script, payload_format="quasi_json") == [[10.0, 68.0]]

    def test_comments_between_rows(self):
        script = "data.addRows([\n  [74, '19시'], // yesterday\n  [68, '20시']\n]);"
        assert decode_series(script, payload_format="quasi_json") == [[74.0, 68.0]]

    def test_unreadable_literal_falls_back_to_row_splitter(self):
        # `{` leaves an unclosed mapping, so the literal is split by rows instead.
        script = "data.addRows([[74,'a'],[68,{]]);"
        assert decode_series(script, payload_format="quasi_json") == [[74.0, 68.0]]


class TestFindScriptText:
    def test_picks_the_node_with_the_call(self):
        document = BeautifulSoup(
            "<html><head><script src='x.js'></script><script>var a = 1;</script></head>"
            "<body><script>data.addRows([[1,'a']]);</script></body></html>",
            "html.parser",
        )
        assert find_script_text(document, "script", "addRows") == "data.addRows([[1,'a']]);"

    def test_joins_every_node_with_calls_in_order(self):
        document = BeautifulSoup(
            "<script>var a = 1;</script>"
            "<script>d1.addRows([[1,'a']]);</script>"
            "<script>d2.addRows([[2,'b']]);</script>",
            "html.parser",
        )
        text = find_script_text(document, "script", "addRows")
        assert decode_series(text) == [[1.0], [2.0]]

    def test_missing_script_node_is_structural_failure(self):
        document = BeautifulSoup("<html><body><p class='tit'>x</p></body></html>", "html.parser")
        with pytest.raises(ExtractionError) as excinfo:
            find_script_text(document, "script", "addRows")
        assert excinfo.value.suggestion

    def test_script_without_call_is_structural_failure(self):
        document = BeautifulSoup("<script>var a = 1;</script>", "html.parser")
        with pytest.raises(ExtractionError, match="addRows"):
            find_script_text(document, "script", "addRows")
