"""Record Model — Library and License entities.

Plain mutable records populated by the builder and patched by the
modification layer.  Both support explicit ``copy()`` so a shared License
template is never mutated through a library that references it.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional


@dataclass
class License:
    """A license definition.

    Attributes:
        defined_name: Normalized identifier (dashes replaced by underscores).
            Primary lookup key.
        license_name: Human-facing name (e.g. "Apache Version 2.0").  Also
            accepted as a lookup key.
        license_website: URL of the license text.
        license_short_description: Short notice shown in the list view.
        license_description: Full license text.
    """

    defined_name: str = ""
    license_name: str = ""
    license_website: str = ""
    license_short_description: str = ""
    license_description: str = ""

    def copy(self) -> "License":
        """Return an independent copy of this license."""
        return dataclasses.replace(self)


@dataclass
class Library:
    """A bundled library and its metadata.

    Libraries order by ``library_name`` (case-sensitive), which is what
    ``prepare_libraries(sort=True)`` sorts on.

    Attributes:
        defined_name: Normalized identifier (dashes replaced by underscores).
        author: Author or organization name.
        author_website: Author homepage.
        library_name: Display name.
        library_description: Description, after variable substitution.
        library_version: Version string as declared.
        library_website: Project homepage.
        license: Attached license, or None.
        is_open_source: Whether the library is declared open source.
        repository_link: Source repository URL.
        class_path: Dotted path used by auto-detection.
        is_internal: True if the library ships with the bundled catalog
            rather than being declared by the application.
    """

    defined_name: str = ""
    author: str = ""
    author_website: str = ""
    library_name: str = ""
    library_description: str = ""
    library_version: str = ""
    library_website: str = ""
    license: Optional[License] = None
    is_open_source: bool = True
    repository_link: str = ""
    class_path: str = ""
    is_internal: bool = False

    def __lt__(self, other: "Library") -> bool:
        if not isinstance(other, Library):
            return NotImplemented
        return self.library_name < other.library_name

    def copy(self) -> "Library":
        """Return a copy of this library with its own License copy."""
        return dataclasses.replace(
            self,
            license=self.license.copy() if self.license is not None else None,
        )
