"""
Connection information to reach the API server.

Only static bearer tokens are supported: they are issued by the cloud provider
for the account (or a team) and are passed as is in every request.
There is no re-authentication or token refreshing.
"""
import dataclasses
import os
from collections.abc import Mapping

DEFAULT_SERVER = 'https://api.digitalocean.com'
TOKEN_ENVVAR = 'DIGITALOCEAN_ACCESS_TOKEN'
SERVER_ENVVAR = 'DIGITALOCEAN_API_URL'


class LoginError(Exception):
    """ Raised when the connection information is absent or insufficient. """


@dataclasses.dataclass(frozen=True)
class ConnectionInfo:
    """
    A single endpoint with specific credentials and connection flags to use.
    """
    server: str = DEFAULT_SERVER  # e.g. "https://api.digitalocean.com"
    token: str | None = None
    ca_path: str | None = None
    insecure: bool | None = None
    user_agent: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'ConnectionInfo':
        environ = os.environ if environ is None else environ
        token = environ.get(TOKEN_ENVVAR)
        if not token:
            raise LoginError(f"No API token is provided; set ${TOKEN_ENVVAR}.")
        return cls(
            server=environ.get(SERVER_ENVVAR) or DEFAULT_SERVER,
            token=token,
        )
