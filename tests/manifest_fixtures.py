"""Shared manifest fixtures for the test suite."""

HASH_X = "sha256-" + "X" * 43 + "="
HASH_Y = "sha256-" + "Y" * 43 + "="
HASH_Z = "sha256-" + "Z" * 43 + "="

PACKAGE_TEMPLATE = """\
{ lib, stdenv, fetchurl, flatpak, ... }:

let
  /* previously: version = "1999.01.01"; */
  pname = "hytale-launcher";
  # sha256 = "sha256-stale";
  version = "%(version)s";

  src = fetchurl {
    url = "https://launcher.hytale.com/builds/release/linux/amd64/hytale-launcher-latest.flatpak";
    sha256 = "%(hash)s";
  };

  notes = ''
    version = "not-this-one"
    ''${pname} keeps ${version}
  '';
in
{
  hytale-launcher-unwrapped = stdenv.mkDerivation {
    inherit pname version src;
    meta.description = "Hytale launcher (version = \\"fake\\")";
  };
}
"""

FLAKE = """\
{
  description = "Hytale Launcher";
  outputs = { self, nixpkgs }: { };
}
"""


def package_text(version: str, hash_: str) -> str:
    return PACKAGE_TEMPLATE % {"version": version, "hash": hash_}
