"""
Detecting the package's own version.

The version is determined only once at startup when the code is loaded,
and is used for self-identification in the API requests (``User-Agent``).
"""
import importlib.metadata

version: str | None = None

try:
    name, *_ = __name__.split('.')  # usually "dokube", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # used from a source tree without the installed metadata.
