"""Upstream hash sources.

A hash source turns the fixed upstream URL into the artifact's current
``sha256-`` SRI hash. Two implementations are provided:

- ``nix``: ``nix-prefetch-url`` downloads into the Nix store and prints a
  base32 digest, which ``nix hash convert`` turns into SRI form.
- ``http``: streams the URL with :mod:`urllib.request` and hashes locally.

Both raise :class:`~flake_updater.errors.FetchError` on any failure and
never retry.
"""

from __future__ import annotations

import base64
import hashlib
import http.client
import subprocess
import urllib.error
import urllib.request
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..errors import FetchError
from ..logging_utils import log_event
from .types import is_content_hash

_CHUNK_SIZE = 1 << 16


class HashSource(Protocol):
    def fetch(self, url: str) -> str:
        ...


def sri_from_digest(digest: bytes) -> str:
    """Encode a raw sha256 digest as ``sha256-<base64>``."""
    return "sha256-" + base64.b64encode(digest).decode("ascii")


class NixPrefetchSource:
    """Hash source backed by ``nix-prefetch-url`` and ``nix hash convert``."""

    required_tools = ("nix", "nix-prefetch-url")

    def __init__(self, nix: str = "nix", prefetch: str = "nix-prefetch-url") -> None:
        self.nix = nix
        self.prefetch = prefetch

    def fetch(self, url: str) -> str:
        raw = self._run([self.prefetch, "--quiet", url])
        if not raw:
            raise FetchError(f"nix-prefetch-url returned no hash for {url}")
        sri = self._run(
            [self.nix, "hash", "convert", "--hash-algo", "sha256", "--to", "sri", raw]
        )
        if not is_content_hash(sri):
            raise FetchError(f"unexpected hash from nix hash convert: {sri!r}")
        log_event("hash_fetched", url=url, hash=sri)
        return sri

    @staticmethod
    def _run(cmd: List[str]) -> str:
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip().splitlines()
            reason = detail[-1] if detail else f"exit status {e.returncode}"
            raise FetchError(f"{cmd[0]} failed: {reason}") from e
        except OSError as e:
            raise FetchError(f"could not run {cmd[0]}: {e}") from e
        return (proc.stdout or "").strip()


class HttpDigestSource:
    """Hash source that downloads the artifact and hashes it in-process."""

    required_tools: Sequence[str] = ()

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def fetch(self, url: str) -> str:
        digest = hashlib.sha256()
        size = 0
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as resp:
                while True:
                    chunk = resp.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    digest.update(chunk)
                    size += len(chunk)
        except urllib.error.HTTPError as e:
            raise FetchError(f"HTTP {e.code}: {e.reason}") from e
        except (urllib.error.URLError, OSError, http.client.HTTPException) as e:
            raise FetchError(f"failed to download {url}: {e}") from e
        except ValueError as e:
            raise FetchError(f"invalid URL {url!r}: {e}") from e
        if size == 0:
            raise FetchError(f"empty response from {url}")
        sri = sri_from_digest(digest.digest())
        log_event("hash_fetched", url=url, hash=sri)
        return sri


_SOURCES: Dict[str, Callable[..., HashSource]] = {
    "nix": lambda timeout=None: NixPrefetchSource(),
    "http": lambda timeout=None: HttpDigestSource(timeout=timeout),
}


def determine_hash_source(name: str, timeout: Optional[float] = None) -> HashSource:
    """Return the hash source registered under ``name`` (``nix`` or ``http``)."""
    key = (name or "").strip().lower()
    try:
        factory = _SOURCES[key]
    except KeyError:
        raise ValueError(f"unknown hash source: {name!r}") from None
    return factory(timeout=timeout)


HASH_SOURCE_NAMES = tuple(_SOURCES)
