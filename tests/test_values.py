from datetime import datetime, timezone, timedelta
from ipaddress import IPv4Address, IPv6Address

from events.base import EventCategory, LearningMethod, TriageScore
from events.values import ABSENT, bare, format_list, format_timestamp, format_value, quote


def test_strings_are_quoted_with_escapes():
    assert format_value("hi") == '"hi"'
    assert format_value('say "hi"') == '"say \\"hi\\""'
    assert format_value("a\nb") == '"a\\nb"'
    assert format_value("a\x00b") == '"a\\u0000b"'
    assert format_value("") == '""'


def test_non_ascii_text_is_kept():
    assert quote("café") == '"café"'


def test_bytes_are_decoded_lossily():
    assert format_value(b"ab") == '"ab"'
    assert format_value(b"\xff") == '"�"'


def test_numbers_and_booleans():
    assert format_value(3) == "3"
    assert format_value(0.5) == "0.5"
    assert format_value(0.1) == "0.1"
    assert format_value(True) == "true"
    assert format_value(False) == "false"


def test_none_is_absent():
    assert format_value(None) == ABSENT == "-"


def test_enums_render_bare():
    assert format_value(EventCategory.COMMAND_AND_CONTROL) == "CommandAndControl"
    assert format_value(LearningMethod.SEMI_SUPERVISED) == "SemiSupervised"


def test_addresses_render_bare():
    assert format_value(IPv4Address("10.0.0.1")) == "10.0.0.1"
    assert format_value(IPv6Address("2001:db8::1")) == "2001:db8::1"


def test_timestamps_are_rfc3339():
    aware = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=9)))
    assert format_value(aware) == "2024-01-02T03:04:05+09:00"
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05+00:00"


def test_lists_use_brackets():
    assert format_value([1, 2]) == "[1,2]"
    assert format_value(("a", "b")) == '["a","b"]'
    assert format_list([]) == "[]"


def test_triage_score():
    assert format_value(TriageScore(policy_id=1, score=0.5)) == "1:0.5"
    assert format_value([TriageScore(1, 0.5), TriageScore(2, 1.0)]) == "[1:0.5,2:1.0]"


def test_bare_falls_back_to_quoting():
    assert bare("US") == "US"
    assert bare("a b") == '"a b"'
    assert bare("a=b") == '"a=b"'
    assert bare('a"b') == '"a\\"b"'
    assert bare("") == '""'
