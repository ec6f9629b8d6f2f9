import asyncio
import json
import logging
import urllib.parse
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar, Union

import aiohttp

from dokube._cogs.clients import auth, errors
from dokube._cogs.helpers import typedefs
from dokube._cogs.structs import pagination

BASE_PATH = '/v2/kubernetes'

# Anything that can be awaited till it is "set": a future is set when it is done.
Stopper = Union[asyncio.Event, 'asyncio.Future[Any]']

default_logger = logging.getLogger(__name__)

_T = TypeVar('_T')


def build_url(
        *segments: str,
        params: Mapping[str, str] | None = None,
) -> str:
    """
    Build a URL relative to the server's root: ``/v2/kubernetes/seg1/seg2?params``.

    All segments are inserted as individual path segments: i.e. the identifiers
    with slashes or other special characters cannot change the URL's structure.
    Empty identifiers are prohibited, since they would change the URL's meaning
    (e.g. from getting an individual resource to listing all of them).
    """
    for segment in segments:
        if not isinstance(segment, str) or not segment:
            raise errors.APIRequestError(f"Path segments must be non-empty strings, got {segment!r}.")
    parts = [BASE_PATH] + [urllib.parse.quote(segment, safe='') for segment in segments]
    query = urllib.parse.urlencode(params, encoding='utf-8') if params else ''
    return '/'.join(parts) + ('?' if query else '') + query


def is_stopped(stopper: Stopper | None) -> bool:
    if stopper is None:
        return False
    elif isinstance(stopper, asyncio.Event):
        return stopper.is_set()
    else:
        return stopper.done()


async def _wait_stopper(stopper: Stopper) -> None:
    if isinstance(stopper, asyncio.Event):
        await stopper.wait()
    else:
        await asyncio.wait([stopper])  # never cancels the caller's future, never raises its errors.


async def stoppable(
        coro: Awaitable[_T],
        *,
        stopper: Stopper | None,
) -> _T:
    """
    Await for the coroutine, but abort it as soon as the stopper is set.

    The stopper is checked before the coroutine is even started, so that
    no request is made at all if the stopper is already set.
    """
    if is_stopped(stopper):
        if asyncio.iscoroutine(coro):
            coro.close()
        raise errors.APICancelledError("The request is cancelled before it started.")
    if stopper is None:
        return await coro

    task = asyncio.ensure_future(coro)
    waiter = asyncio.create_task(_wait_stopper(stopper))
    try:
        await asyncio.wait([task, waiter], return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
        await asyncio.wait([task, waiter])  # never raises their errors or cancellations

    if task.cancelled():
        raise errors.APICancelledError("The request is cancelled while in flight.")
    return task.result()


@auth.authenticated
async def request(
        method: str,
        url: str,  # relative to the server/api root.
        *,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger = default_logger,
) -> aiohttp.ClientResponse:
    """
    Perform a request and check it for errors, but do not read or parse it.

    There are no retries: every failure is escalated to the caller as is.
    ``None`` as the payload means no body at all (not even ``null``).
    """
    if context is None:  # for type-checking!
        raise RuntimeError("API instance is not injected by the decorator.")

    if '://' not in url:
        url = context.server.rstrip('/') + '/' + url.lstrip('/')

    if timeout is None:
        timeout = context.settings.networking.make_timeout()

    what = f"{method.upper()} {url}"
    try:
        response = await context.session.request(
            method=method,
            url=url,
            json=payload,
            headers=headers,
            timeout=timeout,
        )
        await errors.check_response(response)  # but do not parse it!
    except (aiohttp.ClientError, errors.APIError, asyncio.TimeoutError) as e:
        logger.debug(f"Request failed: {what} -> {e!r}")
        raise
    else:
        logger.debug(f"Request succeeded: {what} -> {response.status}")
        return response


async def _fetch(
        method: str,
        url: str,
        *,
        reader: Callable[[aiohttp.ClientResponse, pagination.Response], Awaitable[_T]],
        payload: object | None,
        headers: Mapping[str, str] | None,
        timeout: aiohttp.ClientTimeout | None,
        stopper: Stopper | None,
        context: auth.APIContext | None,
        logger: typedefs.Logger | None,
) -> tuple[_T, pagination.Response]:

    async def fetch() -> tuple[_T, pagination.Response]:
        response = await request(
            method=method,
            url=url,
            payload=payload,
            headers=headers,
            timeout=timeout,
            context=context,
            logger=logger if logger is not None else default_logger,
        )
        async with response:
            meta = errors.make_response(response)
            return await reader(response, meta), meta

    return await stoppable(fetch(), stopper=stopper)


async def _read_json(response: aiohttp.ClientResponse, meta: pagination.Response) -> Any:
    body = await response.read()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise errors.APIDecodeError(f"The response is not a valid JSON: {e}", response=meta) from e


async def _read_bytes(response: aiohttp.ClientResponse, meta: pagination.Response) -> bytes:
    return await response.read()


async def get(
        url: str,  # relative to the server/api root.
        *,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        stopper: Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> tuple[Any, pagination.Response]:
    return await _fetch(
        'get', url, reader=_read_json, payload=None,
        headers=headers, timeout=timeout, stopper=stopper, context=context, logger=logger,
    )


async def read(
        url: str,  # relative to the server/api root.
        *,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        stopper: Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> tuple[bytes, pagination.Response]:
    """ Get the raw content of a resource, unparsed. """
    return await _fetch(
        'get', url, reader=_read_bytes, payload=None,
        headers=headers, timeout=timeout, stopper=stopper, context=context, logger=logger,
    )


async def post(
        url: str,  # relative to the server/api root.
        *,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        stopper: Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> tuple[Any, pagination.Response]:
    return await _fetch(
        'post', url, reader=_read_json, payload=payload,
        headers=headers, timeout=timeout, stopper=stopper, context=context, logger=logger,
    )


async def put(
        url: str,  # relative to the server/api root.
        *,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        stopper: Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> tuple[Any, pagination.Response]:
    return await _fetch(
        'put', url, reader=_read_json, payload=payload,
        headers=headers, timeout=timeout, stopper=stopper, context=context, logger=logger,
    )


async def delete(
        url: str,  # relative to the server/api root.
        *,
        payload: object | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        stopper: Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> tuple[Any, pagination.Response]:
    return await _fetch(
        'delete', url, reader=_read_json, payload=payload,
        headers=headers, timeout=timeout, stopper=stopper, context=context, logger=logger,
    )
