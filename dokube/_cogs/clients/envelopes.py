"""
Unwrapping of the JSON envelopes of the API responses.

The API wraps the payloads into single-key objects: e.g. ``{"node_pool": {...}}``
or ``{"kubernetes_clusters": [...], "links": {...}, "meta": {...}}``.
Any mismatch of the body with the expected envelope is a decoding error,
not a silent ``None``, so that it does not propagate further as a valid result.
"""
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from dokube._cogs.clients import auth, errors
from dokube._cogs.structs import pagination

_T = TypeVar('_T')


def decode(
        factory: Callable[[Any], _T],
        raw: Any,
        *,
        response: pagination.Response,
) -> _T:
    if not isinstance(raw, Mapping):
        raise errors.APIDecodeError(f"Expected a JSON object, got {raw!r}.", response=response)
    try:
        return factory(raw)
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise errors.APIDecodeError(f"Cannot decode the response: {e}", response=response) from e


def unwrap_one(
        factory: Callable[[Any], _T],
        raw: Any,
        key: str,
        *,
        response: pagination.Response,
) -> _T:
    if not isinstance(raw, Mapping) or raw.get(key) is None:
        raise errors.APIDecodeError(f"Expected a JSON object with {key!r}, got {raw!r}.", response=response)
    return decode(factory, raw[key], response=response)


def unwrap_many(
        factory: Callable[[Any], _T],
        raw: Any,
        key: str,
        *,
        response: pagination.Response,
) -> list[_T]:
    if not isinstance(raw, Mapping):
        raise errors.APIDecodeError(f"Expected a JSON object with {key!r}, got {raw!r}.", response=response)
    items = raw.get(key) or []  # the key is omitted when the list is empty.
    if not isinstance(items, list):
        raise errors.APIDecodeError(f"Expected a JSON list in {key!r}, got {items!r}.", response=response)
    return [decode(factory, item, response=response) for item in items]


def list_params(
        options: pagination.ListOptions | None,
        *,
        context: auth.APIContext,
) -> dict[str, str]:
    options = options if options is not None else pagination.ListOptions()
    if options.per_page is None and context.settings.listing.per_page is not None:
        options = pagination.ListOptions(page=options.page, per_page=context.settings.listing.per_page)
    if options.page is not None and options.page < 0:
        raise errors.APIRequestError(f"Page numbers cannot be negative, got {options.page}.")
    if options.per_page is not None and options.per_page < 0:
        raise errors.APIRequestError(f"Page sizes cannot be negative, got {options.per_page}.")
    return options.as_params()


def paginate(
        raw: Any,
        *,
        response: pagination.Response,
) -> pagination.Response:
    """ Copy the envelope's links & meta onto the response, strictly as in `decode`. """
    return decode(response.paginated, raw, response=response)
