"""Aggregation & Resolution Engine — the library catalog of an application.

Builds License and Library records from definition resources, then merges
auto-detected, application-declared and manually requested catalog
libraries into the list an "about" screen displays.

Usage::

    resources = JsonResourceProvider(["catalog.json", "app.json"])
    libs = Libs(resources, resources.keys(), detector=ImportDetector())
    for lib in libs.prepare_libraries(exclude_libraries=["legacy_lib"]):
        print(lib.library_name, lib.library_version)

Pure Python. No third-party dependency.
"""

import logging
from typing import Callable, Iterable, Mapping, Optional

from aboutlibs.builder import LibraryBuilder
from aboutlibs.config import LibsConfig
from aboutlibs.detection import DetectionCache, Detector
from aboutlibs.entity import Library, License
from aboutlibs.keys import classify_keys
from aboutlibs.modifications import modify_libraries
from aboutlibs.resources import ResourceProvider
from aboutlibs.variables import DELIMITER

logger = logging.getLogger(__name__)

# Sentinel limit for find(): return every match
NO_LIMIT = -1


class Libs:
    """Library catalog built from definition resources.

    Licenses are built first so libraries can reference them, then the
    internal (``define_int_``) and external (``define_``) libraries.
    Identifiers whose records fail to build are skipped.

    Args:
        resources: Provider for the string resources.
        fields: Candidate resource names to classify.  Typically the
            provider's full key list.
        detector: Auto-detection collaborator.  Without one, auto-detection
            finds nothing.
        cache: Store for the last detection result.  Without one, results
            are never cached.
        version_provider: Returns the current application version code, or
            None when unknown (caching is then skipped).
    """

    def __init__(
        self,
        resources: ResourceProvider,
        fields: Optional[Iterable[str]] = None,
        detector: Optional[Detector] = None,
        cache: Optional[DetectionCache] = None,
        version_provider: Optional[Callable[[], Optional[int]]] = None,
    ) -> None:
        self._resources = resources
        self._detector = detector
        self._cache = cache
        self._version_provider = version_provider

        self._licenses: list[License] = []
        self._intern_libraries: list[Library] = []
        self._extern_libraries: list[Library] = []

        self._init(fields)

    def _init(self, fields: Optional[Iterable[str]]) -> None:
        keys = classify_keys(fields)
        builder = LibraryBuilder(self._resources)

        for identifier in keys.licenses:
            license = builder.build_license(identifier)
            if license is not None:
                builder.add_license(license)
                self._licenses.append(license)

        for identifier in keys.internal:
            library = builder.build_library(identifier, internal=True)
            if library is not None:
                self._intern_libraries.append(library)

        for identifier in keys.external:
            library = builder.build_library(identifier, internal=False)
            if library is not None:
                self._extern_libraries.append(library)

        logger.debug(
            "Loaded %d licenses, %d internal and %d external libraries",
            len(self._licenses),
            len(self._intern_libraries),
            len(self._extern_libraries),
        )

    # ── Accessors ──

    def get_intern_libraries(self) -> list[Library]:
        return list(self._intern_libraries)

    def get_extern_libraries(self) -> list[Library]:
        return list(self._extern_libraries)

    def get_licenses(self) -> list[License]:
        return list(self._licenses)

    def get_libraries(self) -> list[Library]:
        """All libraries, internal first."""
        return self.get_intern_libraries() + self.get_extern_libraries()

    # ── Resolution ──

    def prepare(self, config: LibsConfig) -> list[Library]:
        """Apply the configured modifications, then assemble the library list."""
        self.modify_libraries(config.modifications)
        return self.prepare_libraries(
            internal_libraries=config.internal_libraries,
            exclude_libraries=config.exclude_libraries,
            auto_detect=config.auto_detect,
            check_cached_detection=config.check_cached_detection,
            sort=config.sort,
        )

    def prepare_libraries(
        self,
        internal_libraries: Optional[Iterable[str]] = None,
        exclude_libraries: Optional[Iterable[str]] = None,
        auto_detect: bool = True,
        check_cached_detection: bool = True,
        sort: bool = True,
    ) -> list[Library]:
        """Assemble the libraries to display.

        The result holds the auto-detected libraries (if ``auto_detect``),
        then every external library.  Overlapping sources are not
        deduplicated; use ``exclude_libraries`` for that.

        Args:
            internal_libraries: Catalog libraries to add by name.  These are
                only added when ``exclude_libraries`` is not None.
            exclude_libraries: Defined names to remove (exact,
                case-sensitive).  Each name removes at most one entry.
            auto_detect: Include auto-detected libraries.
            check_cached_detection: Allow the cached detection result.
            sort: Sort by library name.

        Returns:
            The assembled list.
        """
        is_excluding = exclude_libraries is not None
        by_name: dict[str, Library] = {}
        result: list[Library] = []

        def add(libraries: list[Library]) -> None:
            result.extend(libraries)
            if is_excluding:
                for lib in libraries:
                    by_name[lib.defined_name] = lib

        if auto_detect:
            add(self.get_auto_detected_libraries(check_cached_detection))

        add(self.get_extern_libraries())

        if internal_libraries is not None:
            for name in internal_libraries:
                lib = self.get_library(name)
                if is_excluding and lib is not None:
                    add([lib])

        if is_excluding:
            for name in exclude_libraries:
                lib = by_name.get(name)
                if lib is not None:
                    _remove_identity(result, lib)

        if sort:
            result.sort(key=lambda lib: lib.library_name)

        return result

    def get_auto_detected_libraries(self, check_cached_detection: bool = True) -> list[Library]:
        """Libraries found by auto-detection, cached per application version.

        When ``check_cached_detection`` is set and the cache belongs to the
        current version, the cached names are resolved instead of running
        the detector; names that no longer resolve are dropped.  A fresh,
        non-empty detection result is cached when the cache is stale.
        """
        version = self._current_version()
        cache_up_to_date = (
            version is not None
            and self._cache is not None
            and self._cache.get_version() == version
        )

        if check_cached_detection and cache_up_to_date:
            cached = self._cache.get_cached_names()
            libraries = []
            for name in cached.split(DELIMITER):
                if not name:
                    continue
                lib = self.get_library(name)
                if lib is not None:
                    libraries.append(lib)
            logger.debug("Using cached detection for version %s", version)
            return libraries

        if self._detector is None:
            return []
        libraries = list(self._detector.detect(self.get_libraries()))

        if libraries and version is not None and self._cache is not None and not cache_up_to_date:
            # Version last, so a partial write leaves the entry stale
            self._cache.set_cached_names(
                DELIMITER.join(lib.defined_name for lib in libraries)
            )
            self._cache.set_version(version)
            logger.debug("Cached %d detected libraries for version %s", len(libraries), version)

        return libraries

    # ── Lookup ──

    def get_library(self, name: str) -> Optional[Library]:
        """Find a library by display name or defined name (case-insensitive, exact)."""
        wanted = name.lower()
        for library in self.get_libraries():
            if library.library_name.lower() == wanted:
                return library
            if library.defined_name.lower() == wanted:
                return library
        return None

    def get_license(self, name: str) -> Optional[License]:
        """Find a license by license name or defined name (case-insensitive, exact)."""
        wanted = name.lower()
        for license in self.get_licenses():
            if license.license_name.lower() == wanted:
                return license
            if license.defined_name.lower() == wanted:
                return license
        return None

    def find_library(self, search_term: str, limit: int = NO_LIMIT) -> list[Library]:
        """Search all libraries by display name or defined name."""
        return find(self.get_libraries(), search_term, False, limit)

    def find_in_internal_library(
        self, search_term: str, id_only: bool = False, limit: int = NO_LIMIT
    ) -> list[Library]:
        return find(self.get_intern_libraries(), search_term, id_only, limit)

    def find_in_external_library(
        self, search_term: str, id_only: bool = False, limit: int = NO_LIMIT
    ) -> list[Library]:
        return find(self.get_extern_libraries(), search_term, id_only, limit)

    # ── Modification ──

    def modify_libraries(self, modifications: Optional[Mapping[str, Mapping[str, str]]]) -> None:
        """Apply field overrides; see :func:`aboutlibs.modifications.modify_libraries`."""
        modify_libraries(self, modifications)

    # ── Internal ──

    def _current_version(self) -> Optional[int]:
        if self._version_provider is None:
            return None
        return self._version_provider()


# ── Helpers ──


def find(
    libraries: Iterable[Library],
    search_term: str,
    id_only: bool = False,
    limit: int = NO_LIMIT,
) -> list[Library]:
    """Case-insensitive substring search over libraries.

    Args:
        libraries: Pool to search, in the order results should appear.
        search_term: Substring to look for.
        id_only: Match the defined name only, not the display name.
        limit: Maximum number of results.  Only ``-1`` means unlimited;
            zero or any other negative value yields no results.

    Returns:
        Matching libraries in pool order.
    """
    term = search_term.lower()
    found: list[Library] = []

    for library in libraries:
        if limit != NO_LIMIT and len(found) >= limit:
            break
        if term in library.defined_name.lower():
            found.append(library)
        elif not id_only and term in library.library_name.lower():
            found.append(library)

    return found


def _remove_identity(libraries: list[Library], target: Library) -> None:
    """Remove the first entry that is *target* (by identity, not equality)."""
    for index, library in enumerate(libraries):
        if library is target:
            del libraries[index]
            return
