"""Library/License Builder — assemble records from string resources.

Each record is read from a fixed set of resource keys derived from its
identifier:

    license_<id>_licenseName, _licenseWebsite,
    license_<id>_licenseShortDescription, _licenseDescription

    library_<id>_author, _authorWebsite, _libraryName, _libraryDescription,
    library_<id>_libraryVersion, _libraryWebsite, _licenseId,
    library_<id>_licenseVersion, _licenseLink, _licenseContent,
    library_<id>_isOpenSource, _repositoryLink, _classPath

Build failures never propagate: the builder logs them and returns None,
which callers treat as "skip this identifier".
"""

import logging
from typing import Optional

from aboutlibs.entity import Library, License
from aboutlibs.resources import ResourceProvider
from aboutlibs.variables import collect_custom_variables, insert_variables

logger = logging.getLogger(__name__)


# ── Builder ──


class LibraryBuilder:
    """Builds License and Library records from a resource provider.

    Licenses must be built (and registered via :meth:`add_license`) before
    the libraries that reference them by ``licenseId``.

    Args:
        resources: Resource provider to query.
        licenses: Already-built licenses available to ``licenseId``
            references.
    """

    def __init__(
        self,
        resources: ResourceProvider,
        licenses: Optional[list[License]] = None,
    ) -> None:
        self._resources = resources
        self._licenses: list[License] = list(licenses) if licenses else []

    @property
    def licenses(self) -> list[License]:
        return list(self._licenses)

    def add_license(self, license: License) -> None:
        self._licenses.append(license)

    def find_license(self, name: str) -> Optional[License]:
        """Find a built license by license name or defined name (case-insensitive)."""
        wanted = name.lower()
        for license in self._licenses:
            if license.license_name.lower() == wanted:
                return license
            if license.defined_name.lower() == wanted:
                return license
        return None

    # ── Licenses ──

    def build_license(self, identifier: str) -> Optional[License]:
        """Build a License from ``license_<id>_*`` resources.

        Returns:
            The License, or None if reading the resources failed.  A
            license whose resources are all missing is still returned,
            with empty fields.
        """
        defined_name = identifier.replace("-", "_")

        try:
            prefix = f"license_{defined_name}_"
            return License(
                defined_name=defined_name,
                license_name=self._get(prefix + "licenseName"),
                license_website=self._get(prefix + "licenseWebsite"),
                license_short_description=self._get(prefix + "licenseShortDescription"),
                license_description=self._get(prefix + "licenseDescription"),
            )
        except Exception as exc:
            logger.error("Failed to generate license %s: %s", defined_name, exc)
            return None

    # ── Libraries ──

    def build_library(self, identifier: str, internal: bool = False) -> Optional[Library]:
        """Build a Library from ``library_<id>_*`` resources.

        The license is taken from a previously built License when
        ``library_<id>_licenseId`` is set (copied, then variables are
        inserted into the copy).  Otherwise an inline license is
        synthesized from the legacy ``licenseVersion`` / ``licenseLink`` /
        ``licenseContent`` keys.

        Args:
            identifier: Library identifier (dashes are normalized).
            internal: Whether the library belongs to the bundled catalog.

        Returns:
            The Library, or None if both its name and description are
            empty or reading the resources failed.
        """
        defined_name = identifier.replace("-", "_")

        try:
            variables = collect_custom_variables(self._resources, defined_name)
            prefix = f"library_{defined_name}_"

            library = Library(
                defined_name=defined_name,
                author=self._get(prefix + "author"),
                author_website=self._get(prefix + "authorWebsite"),
                library_name=self._get(prefix + "libraryName"),
                library_description=insert_variables(
                    self._get(prefix + "libraryDescription"), variables
                ),
                library_version=self._get(prefix + "libraryVersion"),
                library_website=self._get(prefix + "libraryWebsite"),
                is_internal=internal,
            )

            license_id = self._get(prefix + "licenseId")
            if license_id:
                shared = self.find_license(license_id)
                if shared is not None:
                    license = shared.copy()
                    license.license_short_description = insert_variables(
                        license.license_short_description, variables
                    )
                    license.license_description = insert_variables(
                        license.license_description, variables
                    )
                    library.license = license
                else:
                    logger.debug(
                        "Library %s references unknown license %s", defined_name, license_id
                    )
            else:
                library.license = License(
                    license_name=self._get(prefix + "licenseVersion"),
                    license_website=self._get(prefix + "licenseLink"),
                    license_short_description=insert_variables(
                        self._get(prefix + "licenseContent"), variables
                    ),
                )

            library.is_open_source = parse_bool(self._get(prefix + "isOpenSource"))
            library.repository_link = self._get(prefix + "repositoryLink")
            library.class_path = self._get(prefix + "classPath")
        except Exception as exc:
            logger.error("Failed to generate library %s: %s", defined_name, exc)
            return None

        if not library.library_name and not library.library_description:
            logger.debug("Skipping %s: no library name or description", defined_name)
            return None

        return library

    # ── Internal ──

    def _get(self, key: str) -> str:
        return self._resources.get_string(key) or ""


# ── Helpers ──


def parse_bool(value: Optional[str]) -> bool:
    """Parse a resource flag: only "true" (any case) is True."""
    return value is not None and value.lower() == "true"
