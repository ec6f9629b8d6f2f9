"""
All configuration flags, options, settings to fine-tune the API client.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

The settings are attached to an API context when it is created
(see :func:`dokube.connected`), and are used by every request in it.
All of them have reasonable defaults; most of them are optional.
"""
import dataclasses

import aiohttp


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: float | None = None
    """
    A total timeout (in seconds) for a single API request, including reading
    of the response's body. ``None`` means no timeout (the default):
    the callers are expected to bound the duration via cancellation.
    """

    connect_timeout: float | None = None
    """
    A timeout (in seconds) for establishing a connection to the API server.
    """

    def make_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.request_timeout,
            sock_connect=self.connect_timeout,
        )


@dataclasses.dataclass
class ListingSettings:

    per_page: int | None = None
    """
    The page size used by the listing operations when the caller does not
    specify it explicitly. ``None`` leaves it to the server's default.
    """


@dataclasses.dataclass
class ClientSettings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
    listing: ListingSettings = dataclasses.field(default_factory=ListingSettings)
