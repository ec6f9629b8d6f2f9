"""
Low-level conversions between the wire (JSON) values and the Python values.

The API omits the fields with zero values in most of its payloads, and expects
the same from the clients. Some fields, however, must distinguish an explicitly
set zero/false value from the absent value; those are "nullable" and are only
omitted when they are ``None``. A few fields are always sent, even if empty.
"""
import base64
import datetime
from collections.abc import Collection, Iterable, Mapping
from typing import Any, TypeVar

import iso8601

_T = TypeVar('_T')


def is_zero(value: Any) -> bool:
    return value is None or (not value and isinstance(value, (str, int, float, list, tuple, dict)))


def compact(
        raw: Mapping[str, Any],
        *,
        nullable: Collection[str] = (),
        required: Collection[str] = (),
) -> dict[str, Any]:
    """
    Drop the zero-valued fields from the payload, except as instructed.

    The ``required`` fields are always kept, even if ``None`` (sent as nulls).
    The ``nullable`` fields are kept if set to anything but ``None``.
    All other fields are kept only if they are non-zero & non-empty.
    """
    result: dict[str, Any] = {}
    for key, value in raw.items():
        if key in required:
            result[key] = value
        elif key in nullable:
            if value is not None:
                result[key] = value
        elif not is_zero(value):
            result[key] = value
    return result


def parse_timestamp(value: str | None) -> datetime.datetime | None:
    return iso8601.parse_date(value) if value else None


def format_rfc3339(value: datetime.datetime) -> str:
    """
    Render a timestamp as RFC 3339 with seconds precision: ``2024-01-02T03:04:05Z``.

    Naive timestamps are assumed to be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    return text[:-6] + 'Z' if text.endswith('+00:00') else text


def decode_bytes(value: str | None) -> bytes:
    return base64.b64decode(value) if value else b''


def strings(values: Iterable[str] | None) -> list[str]:
    return list(values) if values else []


def mapping(values: Mapping[str, _T] | None) -> dict[str, _T]:
    return dict(values) if values else {}
