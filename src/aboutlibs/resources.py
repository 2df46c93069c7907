"""Resource providers — flat key→string lookup for library definitions.

The resolution core only needs ``get_string(key)``, returning an empty
string for absent keys.  Two providers ship with the package: an
in-memory mapping and a JSON file holding a single flat object of
string resources.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Mapping, Protocol

logger = logging.getLogger(__name__)


# ── Exceptions ──


class AboutLibsError(Exception):
    """Base exception for aboutlibs errors."""


class ResourceError(AboutLibsError):
    """Raised when a resource file cannot be loaded."""


# ── Provider Protocol ──


class ResourceProvider(Protocol):
    """Protocol for string resource lookup — injectable for testing."""

    def get_string(self, key: str) -> str:
        """Return the resource value for *key*, or "" if absent."""
        ...


# ── Providers ──


class DictResourceProvider:
    """Resource provider backed by an in-memory mapping.

    Non-string values are coerced with ``str()``; ``None`` counts as absent.
    """

    def __init__(self, resources: Mapping[str, object] | None = None) -> None:
        self._resources: dict[str, str] = {}
        for key, value in (resources or {}).items():
            if value is not None:
                self._resources[key] = str(value)

    def get_string(self, key: str) -> str:
        return self._resources.get(key, "")

    def keys(self) -> list[str]:
        """All resource names, in insertion order."""
        return list(self._resources)

    def update(self, resources: Mapping[str, object]) -> None:
        """Merge additional resources, overriding existing keys."""
        for key, value in resources.items():
            if value is None:
                self._resources.pop(key, None)
            else:
                self._resources[key] = str(value)

    def __len__(self) -> int:
        return len(self._resources)


class JsonResourceProvider(DictResourceProvider):
    """Resource provider loaded from one or more JSON files.

    Each file must contain a single JSON object mapping resource names to
    string values.  Later files override earlier ones, so an application's
    own definitions can be layered over a bundled catalog.

    Args:
        paths: One path or several paths to JSON resource files.

    Raises:
        ResourceError: If a file is missing, unreadable, not valid JSON,
            or not a JSON object.
    """

    def __init__(self, paths: str | Path | Iterable[str | Path]) -> None:
        super().__init__()
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        for path in self._paths:
            self.update(_load_resource_file(path))

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)


# ── Helpers ──


def _load_resource_file(path: Path) -> dict:
    """Read and validate a flat JSON resource file."""
    if not path.is_file():
        raise ResourceError(f"Resource file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ResourceError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise ResourceError(f"Could not read {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ResourceError(
            f"Resource file {path} must contain a JSON object, "
            f"got {type(raw).__name__}"
        )

    nested = sorted(k for k, v in raw.items() if isinstance(v, (dict, list)))
    if nested:
        logger.warning(
            "Ignoring non-scalar resources in %s: %s", path, ", ".join(nested)
        )
        raw = {k: v for k, v in raw.items() if k not in nested}

    logger.debug("Loaded %d resources from %s", len(raw), path)
    return raw
