from wordguard.utils.text_utils import (
    clean_json_string,
    mask_occurrences,
    parse_legacy_dict,
)


def test_parse_legacy_pairs():
    assert parse_legacy_dict("(1.foo)( 2 . bar baz )") == [("1", "foo"), ("2", "bar baz")]


def test_parse_legacy_plain_list_fallback():
    assert parse_legacy_dict("foo, bar，baz\nqux\r\n") == [
        ("1", "foo"),
        ("2", "bar"),
        ("3", "baz"),
        ("4", "qux"),
    ]


def test_parse_legacy_empty():
    assert parse_legacy_dict("") == []
    assert parse_legacy_dict("   ") == []


def test_mask_occurrences_replaces_every_occurrence():
    assert mask_occurrences("foo and foofoo", "foo") == "*** and ******"
    assert mask_occurrences("nothing here", "foo") == "nothing here"


def test_clean_json_string_strips_markdown():
    raw = '```json\n{"isAbuse": true}\n```'
    assert clean_json_string(raw) == '{"isAbuse": true}'
    assert clean_json_string('Verdict: {"a": 1} done') == '{"a": 1}'
