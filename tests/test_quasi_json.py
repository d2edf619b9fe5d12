import json

import pytest

from airkorea.quasi_json import QuasiJsonError, convert, loads


def test_unquoted_keys_and_single_quotes():
    converted = convert("{name: 'PM10', unit: '㎍/㎥', data: [52, 47.5, null]}")
    assert json.loads(converted) == {"name": "PM10", "unit": "㎍/㎥", "data": [52, 47.5, None]}


def test_output_is_pretty_printed_and_keeps_hangul():
    converted = convert("{name: '미세먼지'}")
    assert converted == '{\n  "name": "미세먼지"\n}'


def test_nested_rows():
    assert loads("[[74, '19시'], [68, '20시']]") == [[74, "19시"], [68, "20시"]]


@pytest.mark.parametrize("text", ["", "   ", "[1, 2", "{a: [}"])
def test_unreadable_literal(text):
    with pytest.raises(QuasiJsonError):
        convert(text)


def test_error_is_a_value_error():
    assert issubclass(QuasiJsonError, ValueError)


def test_compact_object_rows():
    assert loads("[{v:74,f:'19시'},{v:68,f:'20시'}]") == [{"v": 74, "f": "19시"}, {"v": 68, "f": "20시"}]


def test_comments_are_skipped():
    assert loads("[\n  1,\n  // 19시\n  2,\n  # 20시\n  3\n]") == [1, 2, 3]
    assert loads("[1, /* 19시 */ 2]") == [1, 2]


def test_words_stay_strings():
    converted = convert("{\n  a: yes\n  b: off\n  d: '1:30'\n}")
    assert json.loads(converted) == {"a": "yes", "b": "off", "d": "1:30"}


def test_tabs_between_values():
    assert loads("[1,\t2]") == [1, 2]
