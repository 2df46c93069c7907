"""Library detection — find which known libraries are actually installed.

A library is detected when its ``class_path`` (a dotted module path such as
``requests`` or ``yaml.loader``) can be located by the import system.
Modules are located with ``importlib.util.find_spec`` rather than
imported, apart from parent packages the import system must load to
resolve a dotted path.
"""

import importlib.util
import logging
from typing import Callable, Optional, Protocol

from aboutlibs.entity import Library

logger = logging.getLogger(__name__)


# ── Detector Protocol ──


class Detector(Protocol):
    """Protocol for auto-detection — injectable for testing."""

    def detect(self, libraries: list[Library]) -> list[Library]:
        """Return the subset of *libraries* present in the running application."""
        ...


# ── Import-based Detector ──


class ImportDetector:
    """Detects libraries whose ``class_path`` is importable.

    Libraries without a class path are never detected.  Results preserve
    the input order.

    Args:
        finder: Callable that takes a dotted module path and returns a
            truthy value when the module exists.  Defaults to
            ``importlib.util.find_spec``.
    """

    def __init__(self, finder: Optional[Callable[[str], object]] = None) -> None:
        self._finder = finder or importlib.util.find_spec

    def detect(self, libraries: list[Library]) -> list[Library]:
        detected: list[Library] = []
        for library in libraries:
            if library.class_path and self._is_available(library.class_path):
                detected.append(library)

        logger.debug("Detected %d of %d known libraries", len(detected), len(libraries))
        return detected

    def _is_available(self, class_path: str) -> bool:
        try:
            return self._finder(class_path) is not None
        except (ImportError, ValueError) as exc:
            # Parent package missing, or a malformed dotted path
            logger.debug("Class path %s not available: %s", class_path, exc)
            return False
        except Exception as exc:
            # Locating a submodule runs the parent package's __init__
            logger.warning("Failed to inspect class path %s: %s", class_path, exc)
            return False
