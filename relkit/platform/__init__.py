"""Platform layer: filesystem, subprocess and HTTP adapters."""

from .files import atomic_write_text, read_text_exact
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .process import ProcessError, run, run_live

__all__ = [
    # files
    "atomic_write_text",
    "read_text_exact",
    # http
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # process
    "ProcessError",
    "run",
    "run_live",
]
