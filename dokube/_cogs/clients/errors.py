"""
API errors.

The underlying client library (now, ``aiohttp``) can be replaced in the future.
We cannot rely on embedding its exceptions all over the code of the package.
Hence, we have our own hierarchy of exceptions for the API errors.

Low-level errors, such as the network connectivity issues, SSL/HTTPS issues,
timeouts, etc, are escalated from the client library as is, since they are
related not to the domain of the API, but rather to networking and encryption.

The original errors of the client library are chained as the causes of our own
specialised errors -- for better explainability of errors in the stack traces.

Some selected HTTP statuses are made into their own classes, so that they could
be intercepted and handled by the callers. All other statuses are raised as the
base error class and are distinguishable only via the exception's fields.

Unlike the underlying client library's errors, the API errors contain more
information about the reasons -- as provided by the API in the response bodies,
plus the response's metadata (headers, rate limits) as a `Response` wrapper,
so that the callers can inspect it without a second request.

The errors of other kinds are never mixed with the HTTP errors:

* `APIRequestError` is raised before any request is made (e.g. empty IDs).
* `APIDecodeError` is raised for successful responses with unexpected bodies.
* `APICancelledError` is raised when the caller's stopper is set.
"""
import collections.abc

import aiohttp
from typing_extensions import TypedDict

from dokube._cogs.structs import pagination


class RawError(TypedDict, total=False):
    id: str  # e.g. "not_found", "unauthorized", "too_many_requests"
    message: str
    request_id: str


class APIRequestError(ValueError):
    """ The request cannot be constructed from the given arguments. """


class APICancelledError(Exception):
    """ The request was cancelled by the caller's stopper, before or during the call. """


class APIDecodeError(Exception):
    """ The response is successful, but its body does not match the expectations. """

    def __init__(self, message: str, *, response: pagination.Response) -> None:
        super().__init__(message)
        self.response = response


class APIError(Exception):

    def __init__(
            self,
            payload: RawError | None,
            *,
            status: int,
            response: pagination.Response | None = None,
    ) -> None:
        message = payload.get('message') if payload else None
        super().__init__(message, payload)
        self._status = status
        self._payload = payload
        self._response = response

    def __str__(self) -> str:
        return f"{self._status} {self.id or 'error'}: {self.message or 'no details'}"

    @property
    def status(self) -> int:
        return self._status

    @property
    def id(self) -> str | None:
        return self._payload.get('id') if self._payload else None

    @property
    def message(self) -> str | None:
        return self._payload.get('message') if self._payload else None

    @property
    def request_id(self) -> str | None:
        return self._payload.get('request_id') if self._payload else None

    @property
    def response(self) -> pagination.Response | None:
        return self._response


class APIUnauthorizedError(APIError):
    pass


class APIForbiddenError(APIError):
    pass


class APINotFoundError(APIError):
    pass


class APIConflictError(APIError):
    pass


class APIUnprocessableError(APIError):
    pass


class APITooManyRequestsError(APIError):
    pass


class APIServerError(APIError):
    pass


def make_response(response: aiohttp.ClientResponse) -> pagination.Response:
    return pagination.Response(status=response.status, headers=response.headers)


async def check_response(
        response: aiohttp.ClientResponse,
) -> None:
    """
    Check for specialised API errors, and raise with extended information.
    """
    if response.status >= 400:

        # Read the response's body before it is closed by raise_for_status().
        payload: RawError | None
        try:
            payload = await response.json(content_type=None)
        except (ValueError, aiohttp.ContentTypeError, aiohttp.ClientConnectionError):  # incl. non-UTF-8 bodies
            payload = None

        # Only the documented error fields; who knows what else can be dumped in the body.
        if not isinstance(payload, collections.abc.Mapping):
            payload = None
        else:
            payload = RawError(**{key: val for key, val in payload.items() if key in RawError.__annotations__})

        cls = (
            APIUnauthorizedError if response.status == 401 else
            APIForbiddenError if response.status == 403 else
            APINotFoundError if response.status == 404 else
            APIConflictError if response.status == 409 else
            APIUnprocessableError if response.status == 422 else
            APITooManyRequestsError if response.status == 429 else
            APIServerError if response.status >= 500 else
            APIError
        )

        # Raise the package-specific error while keeping the original error in scope.
        # This call also closes the response's body, so it cannot be read afterwards.
        try:
            response.raise_for_status()
        except aiohttp.ClientResponseError as e:
            raise cls(payload, status=response.status, response=make_response(response)) from e
