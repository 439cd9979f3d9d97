"""Package manifest access (``package.nix``).

The manifest is a Nix expression holding, among everything else, a
``version = "YYYY.MM.DD[.N]";`` binding and a ``sha256 = "sha256-...";``
binding. :class:`ManifestDocument` scans the source once, skipping comments
and string bodies, and records where the two string literals sit. Updating
the document splices new values into exactly those spans, so every other
byte of the file is preserved.

:class:`ManifestStore` reads the pair and stages writes through a
:class:`ManifestTransaction`: the staged file is written atomically (the
build reads it from disk), the prior bytes are held in memory, and exactly
one of ``commit()`` or ``rollback()`` finishes the transaction. Leaving a
``with`` block without committing rolls back.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple

from .errors import ManifestFormatError, TransactionError
from .io_safe import atomic_write_bytes
from .logging_utils import log_event
from .updatesets.types import PackageState, VersionLabel, is_content_hash

VERSION_FIELD = "version"
HASH_FIELD = "sha256"
_TRACKED = (VERSION_FIELD, HASH_FIELD)
# fetchers may still carry legacy nix32 `sha256` values; only SRI ones are ours
_ACCEPT: Mapping[str, Callable[[str], bool]] = {
    HASH_FIELD: lambda value: value.startswith("sha256-"),
}


@dataclass(frozen=True)
class ManifestField:
    """A tracked string binding; ``start``/``end`` delimit the literal's body."""

    name: str
    value: str
    start: int
    end: int


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_'-"


class _Scanner:
    """Just enough of a Nix lexer to find ``name = "literal";`` bindings."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.n = len(text)

    def skip_trivia(self, i: int) -> int:
        text, n = self.text, self.n
        while i < n:
            ch = text[i]
            if ch.isspace():
                i += 1
            elif ch == "#":
                nl = text.find("\n", i)
                i = n if nl == -1 else nl + 1
            elif text.startswith("/*", i):
                close = text.find("*/", i + 2)
                if close == -1:
                    raise ManifestFormatError("unterminated block comment")
                i = close + 2
            else:
                break
        return i

    def skip_string(self, i: int) -> int:
        """Skip a ``"..."`` string starting at ``i``; return the index after it."""
        text, n = self.text, self.n
        i += 1
        while i < n:
            ch = text[i]
            if ch == "\\":
                i += 2
            elif ch == '"':
                return i + 1
            elif text.startswith("${", i):
                i = self.skip_braces(i + 2)
            else:
                i += 1
        raise ManifestFormatError("unterminated string literal")

    def skip_indented_string(self, i: int) -> int:
        """Skip a ``''...''`` string starting at ``i``."""
        text, n = self.text, self.n
        i += 2
        while i < n:
            if text.startswith("''", i):
                nxt = text[i + 2 : i + 3]
                if nxt in ("'", "$"):
                    i += 3
                elif nxt == "\\":
                    i += 4
                else:
                    return i + 2
            elif text.startswith("${", i):
                i = self.skip_braces(i + 2)
            else:
                i += 1
        raise ManifestFormatError("unterminated indented string")

    def skip_braces(self, i: int) -> int:
        """Skip code up to the ``}`` closing an antiquotation opened before ``i``."""
        depth = 1
        while i < self.n:
            i = self.skip_trivia(i)
            if i >= self.n:
                break
            ch = self.text[i]
            if ch == '"':
                i = self.skip_string(i)
            elif self.text.startswith("''", i):
                i = self.skip_indented_string(i)
            elif ch == "{":
                depth += 1
                i += 1
            elif ch == "}":
                depth -= 1
                i += 1
                if depth == 0:
                    return i
            else:
                i += 1
        raise ManifestFormatError("unterminated antiquotation")

    def plain_literal(self, i: int) -> Optional[Tuple[int, int]]:
        """Return the body span of a ``"..."`` literal at ``i`` without escapes."""
        text = self.text
        if i >= self.n or text[i] != '"':
            return None
        j = i + 1
        while j < self.n:
            ch = text[j]
            if ch == '"':
                return i + 1, j
            if ch == "\\" or text.startswith("${", j):
                return None
            j += 1
        return None

    def bindings(
        self,
        names: Tuple[str, ...],
        accept: Optional[Mapping[str, Callable[[str], bool]]] = None,
    ) -> Dict[str, ManifestField]:
        accept = accept or {}
        found: Dict[str, ManifestField] = {}
        text, n = self.text, self.n
        i = 0
        prev = ""
        while i < n and len(found) < len(names):
            i = self.skip_trivia(i)
            if i >= n:
                break
            ch = text[i]
            if ch == '"':
                i = self.skip_string(i)
                prev = '"'
                continue
            if text.startswith("''", i):
                i = self.skip_indented_string(i)
                prev = "'"
                continue
            if not _is_ident_start(ch):
                i += 1
                prev = ch
                continue
            j = i + 1
            while j < n and _is_ident_char(text[j]):
                j += 1
            name = text[i:j]
            after_dot = prev == "."
            prev = name
            i = j
            if name not in names or name in found or after_dot:
                continue
            k = self.skip_trivia(j)
            if not (text.startswith("=", k) and not text.startswith("==", k)):
                continue
            k = self.skip_trivia(k + 1)
            span = self.plain_literal(k)
            if span is None:
                continue
            start, end = span
            if name in accept and not accept[name](text[start:end]):
                continue
            found[name] = ManifestField(name, text[start:end], start, end)
            i = end + 1
            prev = '"'
        return found


class ManifestDocument:
    """In-memory manifest: the full source plus the tracked field spans."""

    def __init__(self, text: str, fields: Dict[str, ManifestField]) -> None:
        self.text = text
        self.fields = fields

    @classmethod
    def parse(cls, text: str) -> "ManifestDocument":
        return cls(text, _Scanner(text).bindings(_TRACKED, _ACCEPT))

    def get(self, name: str) -> Optional[str]:
        field = self.fields.get(name)
        return field.value if field else None

    def with_values(self, **values: str) -> "ManifestDocument":
        """Return a new document with the named tracked fields replaced."""
        text = self.text
        for name in values:
            if name not in self.fields:
                raise ManifestFormatError(f"{name} field not found in manifest")
        # splice from the end so earlier offsets stay valid
        ordered = sorted(values.items(), key=lambda kv: self.fields[kv[0]].start, reverse=True)
        for name, value in ordered:
            if any(bad in value for bad in ('"', "\\", "${", "\n")):
                raise ValueError(f"refusing to write unsafe {name} value: {value!r}")
            field = self.fields[name]
            text = text[: field.start] + value + text[field.end :]
        return ManifestDocument.parse(text)

    def with_state(self, state: PackageState) -> "ManifestDocument":
        return self.with_values(
            **{VERSION_FIELD: str(state.version), HASH_FIELD: state.hash}
        )

    def state(self) -> PackageState:
        """Validate and return the tracked pair."""
        raw_version = self.get(VERSION_FIELD)
        if raw_version is None:
            raise ManifestFormatError('no `version = "...";` field in manifest')
        raw_hash = self.get(HASH_FIELD)
        if raw_hash is None:
            raise ManifestFormatError('no `sha256 = "...";` field in manifest')
        try:
            version = VersionLabel.parse(raw_version)
        except ValueError as e:
            raise ManifestFormatError(f"malformed version field: {e}") from e
        if not is_content_hash(raw_hash):
            raise ManifestFormatError(
                f"malformed sha256 field (expected sha256-<base64>): {raw_hash!r}"
            )
        return PackageState(version, raw_hash)

    def render(self) -> str:
        return self.text


class ManifestTransaction:
    """A staged manifest write finished by exactly one commit or rollback."""

    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"

    def __init__(self, path: Path, original: bytes, staged: bytes) -> None:
        self.path = path
        self.original = original
        self.staged = staged
        self.status = self.PENDING

    def _stage(self) -> None:
        try:
            atomic_write_bytes(self.path, self.staged)
        except OSError as e:
            raise TransactionError(f"could not stage {self.path}: {e}") from e

    def _ensure_pending(self) -> None:
        if self.status != self.PENDING:
            raise TransactionError(
                f"manifest transaction already {self.status.replace('_', ' ')}"
            )

    def commit(self) -> None:
        self._ensure_pending()
        self.status = self.COMMITTED
        log_event("manifest_committed", path=str(self.path))

    def rollback(self) -> None:
        """Restore the prior bytes; the transaction stays pending if that fails."""
        self._ensure_pending()
        try:
            atomic_write_bytes(self.path, self.original)
        except OSError as e:
            raise TransactionError(f"could not restore {self.path}: {e}") from e
        self.status = self.ROLLED_BACK
        log_event("manifest_rolled_back", path=str(self.path))

    @property
    def pending(self) -> bool:
        return self.status == self.PENDING

    def __enter__(self) -> "ManifestTransaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        # a failed restore already raised; do not retry it on the way out
        if self.pending and not isinstance(exc, TransactionError):
            self.rollback()
        return False


class ManifestStore:
    """Reads and stages the ``(version, sha256)`` pair in a manifest file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_bytes(self) -> bytes:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            raise ManifestFormatError(f"{self.path} not found") from None
        except OSError as e:
            raise ManifestFormatError(f"cannot read {self.path}: {e}") from e

    def _document(self, raw: bytes) -> ManifestDocument:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ManifestFormatError(f"{self.path} is not valid UTF-8") from e
        return ManifestDocument.parse(text)

    def read(self) -> PackageState:
        state = self._document(self._read_bytes()).state()
        log_event(
            "manifest_loaded",
            path=str(self.path),
            version=str(state.version),
            hash=state.hash,
        )
        return state

    def write(self, state: PackageState) -> ManifestTransaction:
        """Stage ``state`` on disk and return the open transaction."""
        original = self._read_bytes()
        staged = self._document(original).with_state(state).render().encode("utf-8")
        tx = ManifestTransaction(self.path, original, staged)
        tx._stage()
        log_event(
            "manifest_staged",
            path=str(self.path),
            version=str(state.version),
            hash=state.hash,
        )
        return tx


__all__ = [
    "VERSION_FIELD",
    "HASH_FIELD",
    "ManifestField",
    "ManifestDocument",
    "ManifestTransaction",
    "ManifestStore",
]
