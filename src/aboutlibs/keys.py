"""Resource Key Parser — sort raw resource names into definition buckets.

Resource names follow a prefix convention:

    define_license_<id>   a license definition
    define_int_<id>       an internal (catalog) library
    define_<id>           an external (application-declared) library

The generic ``define_`` prefix is a prefix of the other two, so it is
checked last.
"""

from dataclasses import dataclass, field
from typing import Iterable

# ── Constants ──

DEFINE_LICENSE = "define_license_"
DEFINE_INT = "define_int_"
DEFINE_EXT = "define_"


# ── Data Classes ──


@dataclass
class ResourceKeys:
    """Identifiers found in a list of resource names, in input order.

    Attributes:
        licenses: License identifiers (prefix stripped).
        internal: Internal library identifiers (prefix stripped).
        external: External library identifiers (prefix stripped).
    """

    licenses: list[str] = field(default_factory=list)
    internal: list[str] = field(default_factory=list)
    external: list[str] = field(default_factory=list)


# ── Parsing ──


def classify_keys(fields: Iterable[str] | None) -> ResourceKeys:
    """Classify resource names by definition prefix.

    Names without a recognized prefix are ignored.  Duplicates are kept;
    they resolve to the same record later.

    Args:
        fields: Raw resource names, or None.

    Returns:
        ResourceKeys with the stripped identifiers in each bucket.
    """
    keys = ResourceKeys()
    if fields is None:
        return keys

    for name in fields:
        if name.startswith(DEFINE_LICENSE):
            keys.licenses.append(name[len(DEFINE_LICENSE):])
        elif name.startswith(DEFINE_INT):
            keys.internal.append(name[len(DEFINE_INT):])
        elif name.startswith(DEFINE_EXT):
            keys.external.append(name[len(DEFINE_EXT):])

    return keys


def filter_define_keys(names: Iterable[str]) -> list[str]:
    """Keep only resource names that carry a definition marker.

    Useful for narrowing the full key set of a resource store down to the
    candidates passed to :func:`classify_keys`.
    """
    return [name for name in names if DEFINE_EXT in name]
