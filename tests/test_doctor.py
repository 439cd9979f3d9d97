from flake_updater.doctor import ensure_preflight, run_preflight
from flake_updater.errors import PreflightError

import pytest


def test_preflight_passes(repo, tmp_path, monkeypatch):
    manifest = repo()
    monkeypatch.setattr("flake_updater.doctor.shutil.which", lambda name: "/bin/" + name)
    checks = run_preflight(tmp_path, tmp_path / "flake.nix", manifest, ["nix", "nix"])
    assert [c.name for c in checks] == ["Repository root", "Tool nix"]
    assert all(c.success for c in checks)


def test_preflight_missing_flake(tmp_path):
    manifest = tmp_path / "package.nix"
    manifest.write_text("{}", encoding="utf-8")
    with pytest.raises(PreflightError, match="Run from repository root"):
        ensure_preflight(tmp_path, tmp_path / "flake.nix", manifest, [])


def test_preflight_missing_tool(repo, tmp_path, monkeypatch):
    manifest = repo()
    monkeypatch.setattr(
        "flake_updater.doctor.shutil.which",
        lambda name: None if name == "nix-prefetch-url" else "/bin/" + name,
    )
    with pytest.raises(PreflightError, match="nix-prefetch-url is required"):
        ensure_preflight(
            tmp_path, tmp_path / "flake.nix", manifest, ["nix", "nix-prefetch-url"]
        )
