import subprocess

import pytest

from flake_updater.builder import NixBuilder, run_best_effort
from flake_updater.errors import BuildError


def test_verify_runs_nix_build_in_root(monkeypatch, tmp_path):
    calls = []

    def fake_run(cmd, cwd=None):
        calls.append((cmd, cwd))
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr("flake_updater.builder.subprocess.run", fake_run)
    result = NixBuilder(tmp_path, "hytale-launcher").verify()
    assert result.success
    assert calls == [
        (["nix", "build", ".#hytale-launcher", "--no-link"], str(tmp_path))
    ]


def test_verify_reports_failure(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "flake_updater.builder.subprocess.run",
        lambda cmd, cwd=None: subprocess.CompletedProcess(cmd, 1),
    )
    builder = NixBuilder(tmp_path, "pkg")
    result = builder.verify()
    assert not result.success
    assert "exited with 1" in result.detail
    with pytest.raises(BuildError, match="exited with 1"):
        builder.verify_or_raise()


def test_verify_when_nix_cannot_start(monkeypatch, tmp_path):
    def fake_run(cmd, cwd=None):
        raise FileNotFoundError("nix")

    monkeypatch.setattr("flake_updater.builder.subprocess.run", fake_run)
    result = NixBuilder(tmp_path, "pkg").verify()
    assert not result.success
    assert "could not run nix" in result.detail


def test_run_best_effort(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "flake_updater.builder.subprocess.run",
        lambda cmd, cwd=None: subprocess.CompletedProcess(cmd, 3),
    )
    assert run_best_effort(["git", "diff"], tmp_path) == 3

    def boom(cmd, cwd=None):
        raise OSError("no git")

    monkeypatch.setattr("flake_updater.builder.subprocess.run", boom)
    assert run_best_effort(["git", "diff"], tmp_path) is None
