import base64
import hashlib
import http.client
import io
import subprocess
import unittest
import urllib.error
from unittest import mock

import pytest

from flake_updater.errors import FetchError
from flake_updater.updatesets import (
    HttpDigestSource,
    NixPrefetchSource,
    determine_hash_source,
    sri_from_digest,
)

URL = "https://example.invalid/artifact.flatpak"
RAW = "1b8m03r63zqhnjf7l5wnldhh7c134ap5vpj0850ymkq1iyzicy5s"
SRI = "sha256-" + "Q" * 43 + "="


def _completed(cmd, stdout="", returncode=0):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")


class NixPrefetchSourceTests(unittest.TestCase):
    def test_prefetch_then_convert(self) -> None:
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            if cmd[0] == "nix-prefetch-url":
                return _completed(cmd, RAW + "\n")
            return _completed(cmd, SRI + "\n")

        with mock.patch("flake_updater.updatesets.sources.subprocess.run", fake_run):
            result = NixPrefetchSource().fetch(URL)
        self.assertEqual(result, SRI)
        self.assertEqual(calls[0], ["nix-prefetch-url", "--quiet", URL])
        self.assertEqual(
            calls[1],
            ["nix", "hash", "convert", "--hash-algo", "sha256", "--to", "sri", RAW],
        )

    def test_empty_prefetch_output_is_fetch_error(self) -> None:
        with mock.patch(
            "flake_updater.updatesets.sources.subprocess.run",
            lambda cmd, **kw: _completed(cmd, ""),
        ):
            with self.assertRaises(FetchError):
                NixPrefetchSource().fetch(URL)

    def test_tool_failure_is_fetch_error(self) -> None:
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(
                1, cmd, output="", stderr="error: unable to download 'x': HTTP error 404\n"
            )

        with mock.patch("flake_updater.updatesets.sources.subprocess.run", fake_run):
            with self.assertRaises(FetchError) as ctx:
                NixPrefetchSource().fetch(URL)
        self.assertIn("HTTP error 404", str(ctx.exception))

    def test_missing_tool_is_fetch_error(self) -> None:
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        with mock.patch("flake_updater.updatesets.sources.subprocess.run", fake_run):
            with self.assertRaises(FetchError):
                NixPrefetchSource().fetch(URL)

    def test_non_sri_conversion_is_fetch_error(self) -> None:
        with mock.patch(
            "flake_updater.updatesets.sources.subprocess.run",
            lambda cmd, **kw: _completed(cmd, RAW),
        ):
            with self.assertRaises(FetchError):
                NixPrefetchSource().fetch(URL)


def test_http_source_hashes_body(monkeypatch):
    body = b"flatpak bytes" * 10000
    seen = {}

    def fake_urlopen(url, timeout=None):
        seen["url"] = url
        seen["timeout"] = timeout
        return io.BytesIO(body)

    monkeypatch.setattr(
        "flake_updater.updatesets.sources.urllib.request.urlopen", fake_urlopen
    )
    result = HttpDigestSource(timeout=12.5).fetch(URL)
    expected = "sha256-" + base64.b64encode(hashlib.sha256(body).digest()).decode()
    assert result == expected
    assert seen == {"url": URL, "timeout": 12.5}


def test_http_source_empty_body(monkeypatch):
    monkeypatch.setattr(
        "flake_updater.updatesets.sources.urllib.request.urlopen",
        lambda url, timeout=None: io.BytesIO(b""),
    )
    with pytest.raises(FetchError, match="empty response"):
        HttpDigestSource().fetch(URL)


def test_http_source_http_error(monkeypatch):
    def fake_urlopen(url, timeout=None):
        raise urllib.error.HTTPError(url, 404, "Not Found", {}, None)

    monkeypatch.setattr(
        "flake_updater.updatesets.sources.urllib.request.urlopen", fake_urlopen
    )
    with pytest.raises(FetchError, match="HTTP 404"):
        HttpDigestSource().fetch(URL)


def test_http_source_network_error(monkeypatch):
    def fake_urlopen(url, timeout=None):
        raise urllib.error.URLError("timed out")

    monkeypatch.setattr(
        "flake_updater.updatesets.sources.urllib.request.urlopen", fake_urlopen
    )
    with pytest.raises(FetchError, match="timed out"):
        HttpDigestSource().fetch(URL)


def test_http_source_unknown_url_type():
    with pytest.raises(FetchError, match="invalid URL"):
        HttpDigestSource().fetch("notaurl")


def test_http_source_truncated_body(monkeypatch):
    class Truncated(io.BytesIO):
        def read(self, size=-1):
            chunk = super().read(size)
            if not chunk:
                raise http.client.IncompleteRead(b"", 4096)
            return chunk

    monkeypatch.setattr(
        "flake_updater.updatesets.sources.urllib.request.urlopen",
        lambda url, timeout=None: Truncated(b"partial"),
    )
    with pytest.raises(FetchError, match="IncompleteRead"):
        HttpDigestSource().fetch(URL)


def test_sri_from_digest_known_value():
    assert sri_from_digest(hashlib.sha256(b"hello").digest()) == (
        "sha256-LPJNul+wow4m6DsqxbninhsWHlwfp0JecwQzYpOLmCQ="
    )


def test_determine_hash_source():
    assert isinstance(determine_hash_source("nix"), NixPrefetchSource)
    http = determine_hash_source(" HTTP ", timeout=3.0)
    assert isinstance(http, HttpDigestSource) and http.timeout == 3.0
    with pytest.raises(ValueError):
        determine_hash_source("ftp")
