import datetime

import pytest

from dokube._cogs.structs.wire import compact, decode_bytes, format_rfc3339, parse_timestamp


def test_compact_drops_zeros():
    raw = compact({'a': '', 'b': 0, 'c': False, 'd': [], 'e': {}, 'f': None, 'g': 'x', 'h': 1})
    assert raw == {'g': 'x', 'h': 1}


def test_compact_keeps_explicit_zeros_of_nullable_fields():
    raw = compact({'a': 0, 'b': False, 'c': [], 'd': None}, nullable={'a', 'b', 'c', 'd'})
    assert raw == {'a': 0, 'b': False, 'c': []}


def test_compact_keeps_required_fields_always():
    raw = compact({'a': False, 'b': None, 'c': ''}, required={'a', 'b'})
    assert raw == {'a': False, 'b': None}


def test_timestamps_parsing():
    value = parse_timestamp('2024-01-02T03:04:05Z')
    assert value == datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)


@pytest.mark.parametrize('value', [None, ''])
def test_absent_timestamps(value):
    assert parse_timestamp(value) is None


@pytest.mark.parametrize('value, expected', [
    (datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc), '2024-01-02T03:04:05Z'),
    (datetime.datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=datetime.timezone.utc), '2024-01-02T03:04:05Z'),
    (datetime.datetime(2024, 1, 2, 3, 4, 5), '2024-01-02T03:04:05Z'),
    (datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone(datetime.timedelta(hours=2))),
     '2024-01-02T03:04:05+02:00'),
], ids=['utc', 'utc-with-micros', 'naive-as-utc', 'with-offset'])
def test_rfc3339_formatting(value, expected):
    assert format_rfc3339(value) == expected


def test_bytes_decoding():
    assert decode_bytes('aGVsbG8=') == b'hello'
    assert decode_bytes('') == b''
    assert decode_bytes(None) == b''
