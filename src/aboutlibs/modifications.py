"""Override Applier — patch resolved libraries with user-supplied values.

Modifications map a library key to ``{field_name: value}`` patches::

    {
        "okhttp": {
            "LIBRARY_VERSION": "4.12.0",
            "license_name": "Apache Version 2.0",
        },
    }

The library key is matched as a case-insensitive substring of the
defined name, external libraries first.  Field names are case-insensitive
and must be one of :class:`LibraryField`; anything else is ignored.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from aboutlibs.builder import parse_bool
from aboutlibs.entity import Library, License

if TYPE_CHECKING:
    from aboutlibs.libs import Libs

logger = logging.getLogger(__name__)

# Searching for one more candidate than needed exposes ambiguous keys
_AMBIGUITY_PROBE = 2


# ── Fields ──


class LibraryField(str, Enum):
    """Library fields that can be overridden."""

    AUTHOR_NAME = "AUTHOR_NAME"
    AUTHOR_WEBSITE = "AUTHOR_WEBSITE"
    LIBRARY_NAME = "LIBRARY_NAME"
    LIBRARY_DESCRIPTION = "LIBRARY_DESCRIPTION"
    LIBRARY_VERSION = "LIBRARY_VERSION"
    LIBRARY_WEBSITE = "LIBRARY_WEBSITE"
    LIBRARY_OPEN_SOURCE = "LIBRARY_OPEN_SOURCE"
    LIBRARY_REPOSITORY_LINK = "LIBRARY_REPOSITORY_LINK"
    LIBRARY_CLASSPATH = "LIBRARY_CLASSPATH"
    LICENSE_NAME = "LICENSE_NAME"
    LICENSE_SHORT_DESCRIPTION = "LICENSE_SHORT_DESCRIPTION"
    LICENSE_DESCRIPTION = "LICENSE_DESCRIPTION"
    LICENSE_WEBSITE = "LICENSE_WEBSITE"

    @classmethod
    def parse(cls, name: str) -> Optional["LibraryField"]:
        """Resolve a field name case-insensitively, or None if unknown."""
        try:
            return cls(name.upper())
        except ValueError:
            return None

    def apply(self, library: Library, value: str) -> None:
        """Write *value* into the corresponding field of *library*."""
        _SETTERS[self](library, value)


def _ensure_license(library: Library) -> License:
    if library.license is None:
        library.license = License()
    return library.license


def _set_attr(name: str) -> Callable[[Library, str], None]:
    def setter(library: Library, value: str) -> None:
        setattr(library, name, value)
    return setter


def _set_license_attr(name: str) -> Callable[[Library, str], None]:
    def setter(library: Library, value: str) -> None:
        setattr(_ensure_license(library), name, value)
    return setter


def _set_open_source(library: Library, value: str) -> None:
    library.is_open_source = parse_bool(value)


_SETTERS: dict[LibraryField, Callable[[Library, str], None]] = {
    LibraryField.AUTHOR_NAME: _set_attr("author"),
    LibraryField.AUTHOR_WEBSITE: _set_attr("author_website"),
    LibraryField.LIBRARY_NAME: _set_attr("library_name"),
    LibraryField.LIBRARY_DESCRIPTION: _set_attr("library_description"),
    LibraryField.LIBRARY_VERSION: _set_attr("library_version"),
    LibraryField.LIBRARY_WEBSITE: _set_attr("library_website"),
    LibraryField.LIBRARY_OPEN_SOURCE: _set_open_source,
    LibraryField.LIBRARY_REPOSITORY_LINK: _set_attr("repository_link"),
    LibraryField.LIBRARY_CLASSPATH: _set_attr("class_path"),
    LibraryField.LICENSE_NAME: _set_license_attr("license_name"),
    LibraryField.LICENSE_SHORT_DESCRIPTION: _set_license_attr("license_short_description"),
    LibraryField.LICENSE_DESCRIPTION: _set_license_attr("license_description"),
    LibraryField.LICENSE_WEBSITE: _set_license_attr("license_website"),
}


# ── Applying ──


def apply_field_overrides(library: Library, fields: Mapping[str, str]) -> None:
    """Apply one ``{field_name: value}`` patch to a single library."""
    for name, value in fields.items():
        library_field = LibraryField.parse(name)
        if library_field is None:
            logger.debug("Ignoring unknown field %r for %s", name, library.defined_name)
            continue
        library_field.apply(library, value)


def modify_libraries(
    libs: "Libs",
    modifications: Optional[Mapping[str, Mapping[str, str]]],
) -> None:
    """Apply per-library overrides to the libraries held by *libs*.

    Each key is looked up by defined name among the external libraries,
    falling back to the internal ones.  A patch is applied only when
    exactly one library matches; ambiguous or unknown keys are skipped.
    """
    if not modifications:
        return

    for key, fields in modifications.items():
        found = libs.find_in_external_library(key, True, _AMBIGUITY_PROBE)
        if not found:
            found = libs.find_in_internal_library(key, True, _AMBIGUITY_PROBE)

        if len(found) != 1:
            logger.debug("Skipping modification %r: %d matching libraries", key, len(found))
            continue

        apply_field_overrides(found[0], fields)
