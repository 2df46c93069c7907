"""Detection cache — remember auto-detected libraries per application version.

Detection can be slow, so the defined names of the last detection result
are stored together with the application version code they were computed
for.  The cache holds exactly two values: the version code (-1 when unset)
and a ``;``-joined string of defined names.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

# ── Constants ──

UNSET_VERSION = -1

_CACHE_DIR_ENV = "ABOUTLIBS_CACHE_DIR"
_DEFAULT_CACHE_DIR = Path.home() / ".aboutlibs"
_CACHE_FILENAME = "detection-cache.json"

_VERSION_KEY = "versionCode"
_NAMES_KEY = "autoDetectedLibraries"


# ── Cache Protocol ──


class DetectionCache(Protocol):
    """Protocol for the persisted detection result."""

    def get_version(self) -> int:
        """Version code the cached names belong to, or -1 if unset."""
        ...

    def get_cached_names(self) -> str:
        """Delimiter-joined defined names, or "" if unset."""
        ...

    def set_version(self, version: int) -> None:
        ...

    def set_cached_names(self, names: str) -> None:
        ...


# ── Implementations ──


class InMemoryDetectionCache:
    """Detection cache that lives for the lifetime of the object."""

    def __init__(self, version: int = UNSET_VERSION, names: str = "") -> None:
        self._version = version
        self._names = names

    def get_version(self) -> int:
        return self._version

    def get_cached_names(self) -> str:
        return self._names

    def set_version(self, version: int) -> None:
        self._version = version

    def set_cached_names(self, names: str) -> None:
        self._names = names


class JsonFileDetectionCache:
    """Detection cache persisted to a small JSON file.

    The file is read lazily on first access and rewritten on every set.
    A missing or corrupt file reads as an empty cache; write failures are
    logged and otherwise ignored, so the cache never blocks detection.

    Args:
        path: Cache file path.  Defaults to ``detection-cache.json`` under
            ``$ABOUTLIBS_CACHE_DIR`` or ``~/.aboutlibs``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path else default_cache_path()
        self._data: Optional[dict] = None

    @property
    def path(self) -> Path:
        return self._path

    def get_version(self) -> int:
        value = self._load().get(_VERSION_KEY, UNSET_VERSION)
        return value if isinstance(value, int) else UNSET_VERSION

    def get_cached_names(self) -> str:
        value = self._load().get(_NAMES_KEY, "")
        return value if isinstance(value, str) else ""

    def set_version(self, version: int) -> None:
        self._load()[_VERSION_KEY] = version
        self._save()

    def set_cached_names(self, names: str) -> None:
        self._load()[_NAMES_KEY] = names
        self._save()

    # ── Internal ──

    def _load(self) -> dict:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self._path.is_file():
            return self._data

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring corrupt detection cache %s: %s", self._path, exc)
            return self._data
        except OSError as exc:
            logger.warning("Failed to read detection cache %s: %s", self._path, exc)
            return self._data

        if isinstance(raw, dict):
            self._data = raw
        else:
            logger.warning("Ignoring malformed detection cache %s", self._path)
        return self._data

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to write detection cache %s: %s", self._path, exc)


def default_cache_path() -> Path:
    """Default cache file location, honoring ``ABOUTLIBS_CACHE_DIR``."""
    override = (os.environ.get(_CACHE_DIR_ENV) or "").strip()
    base = Path(override) if override else _DEFAULT_CACHE_DIR
    return base / _CACHE_FILENAME
