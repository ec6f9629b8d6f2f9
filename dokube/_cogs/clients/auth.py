import contextlib
import dataclasses
import functools
import ssl
from collections.abc import AsyncIterator, Callable
from contextvars import ContextVar
from typing import Any, TypeVar, cast

import aiohttp

from dokube._cogs.configs import configuration
from dokube._cogs.helpers import versions
from dokube._cogs.structs import credentials

# The current API context for the operations called without an explicit one.
# Set by `connected()`, so that all operations in its block use the same session.
context_var: ContextVar['APIContext'] = ContextVar('context_var')

# A typevar to show that we return a function with the same signature as given.
_F = TypeVar('_F', bound=Callable[..., Any])


def authenticated(fn: _F) -> _F:
    """
    A decorator to inject a pre-authenticated context to a requesting routine.

    If the context is passed explicitly, it is used as is. Otherwise, the context
    of the surrounding `connected` block is used. There is no re-authentication:
    the tokens are static, and the 401 errors are escalated to the caller.
    """
    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        if kwargs.get('context') is None:
            try:
                kwargs['context'] = context_var.get()
            except LookupError:
                raise credentials.LoginError(
                    "No API context: use `async with dokube.connected(...)` or pass `context=`."
                ) from None
        return await fn(*args, **kwargs)

    return cast(_F, wrapper)


class APIContext:
    """
    A container for an aiohttp session and the information for URL building.

    The context is created once per connection info and is re-used for all
    requests. It is safe to use from multiple coroutines of the same event loop:
    the operations do not keep any state between the calls.
    """

    # The main contained object used by the API methods.
    session: aiohttp.ClientSession

    # Contextual information for URL building.
    server: str

    settings: configuration.ClientSettings

    def __init__(
            self,
            info: credentials.ConnectionInfo,
            *,
            settings: configuration.ClientSettings | None = None,
            session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__()
        self.server = info.server
        self.settings = settings if settings is not None else configuration.ClientSettings()
        self.session = session if session is not None else self.make_aiohttp_session(info)

        # It is a good practice to self-identify a bit, even with a user-provided session.
        if self.session.headers.get('User-Agent') is None:
            self.session.headers['User-Agent'] = info.user_agent or f'dokube/{versions.version or "unknown"}'

    def make_aiohttp_session(self, info: credentials.ConnectionInfo) -> aiohttp.ClientSession:

        # The SSL part: only the CA verification, no client certificates.
        context = ssl.create_default_context(cafile=info.ca_path)
        if info.insecure:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        # The token auth part.
        headers: dict[str, str] = {}
        if info.token:
            headers['Authorization'] = f'Bearer {info.token}'

        return aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=context),
            headers=headers,
        )

    async def close(self) -> None:
        await self.session.close()


@contextlib.asynccontextmanager
async def connected(
        info: credentials.ConnectionInfo | None = None,
        *,
        token: str | None = None,
        server: str | None = None,
        settings: configuration.ClientSettings | None = None,
        session: aiohttp.ClientSession | None = None,
) -> AsyncIterator[APIContext]:
    """
    Connect to the API for the duration of the block.

    Usage::

        async with dokube.connected(token='...'):
            clusters, response = await dokube.list_clusters()

    Without an explicit connection info or token, it is taken from the environment.
    A user-provided session is not closed on exit; an own session is.
    """
    if info is None and token is None:
        info = credentials.ConnectionInfo.from_env()
    elif info is None:
        info = credentials.ConnectionInfo(token=token)
    if server is not None:
        info = dataclasses.replace(info, server=server)

    context = APIContext(info, settings=settings, session=session)
    token_ = context_var.set(context)
    try:
        yield context
    finally:
        context_var.reset(token_)
        if session is None:
            await context.close()
