"""Loading raw configuration data from a local path or an HTTP(S) URL."""

from __future__ import annotations

import os
import urllib.error
import urllib.request
from urllib.parse import urlparse


class LoadError(OSError):
    """Raised when configuration data cannot be loaded."""


def _read_local(path: str) -> bytes:
    if not os.path.exists(path):
        raise LoadError(f"Cannot read from file: '{path}' because it does not exist.")
    with open(path, "rb") as handle:
        return handle.read()


def load_data_from(path: str) -> bytes:
    """Read bytes from a local file, or fetch them over HTTP or HTTPS."""
    try:
        parsed = urlparse(path)
        host = parsed.hostname
    except ValueError as exc:
        raise LoadError(str(exc)) from exc

    if host:
        if parsed.scheme not in ("http", "https"):
            raise LoadError(f"scheme of {path} is unsupported")
        try:
            with urllib.request.urlopen(path) as response:
                return response.read()
        except urllib.error.HTTPError as exc:
            with exc:
                return exc.read()
        except urllib.error.URLError as exc:
            raise LoadError(str(exc.reason)) from exc

    if parsed.path:
        return _read_local(path)
    if os.name == "nt" and "\\" in path:
        return _read_local(path)

    raise LoadError(f"unable to determine how to load from path {path}")