"""Configuration for a library resolution pass."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LibsConfig:
    """Options for :meth:`aboutlibs.libs.Libs.prepare`.

    Attributes:
        internal_libraries: Catalog libraries to include by name.  Only
            honored when ``exclude_libraries`` is not None.
        exclude_libraries: Defined names to drop from the result.  None
            disables exclusion; an empty list enables it.
        auto_detect: Include auto-detected libraries.
        check_cached_detection: Reuse the detection result cached for the
            current application version.
        sort: Sort the result by library name.
        modifications: Per-library field overrides, applied before the
            result is assembled.
    """

    internal_libraries: list[str] = field(default_factory=list)
    exclude_libraries: Optional[list[str]] = None
    auto_detect: bool = True
    check_cached_detection: bool = True
    sort: bool = True
    modifications: dict[str, dict[str, str]] = field(default_factory=dict)
