"""Variable Substitution — custom placeholder variables in library text.

A library may declare custom variables through its definition resource
(``define_<id>`` or ``define_int_<id>``), whose value is a ``;``-separated
list of variable names.  Each variable's value lives in
``library_<id>_<name>``.  Descriptions and license texts reference them as
``<<<NAME>>>`` (uppercase).
"""

import re

from aboutlibs.keys import DEFINE_EXT, DEFINE_INT
from aboutlibs.resources import ResourceProvider

# ── Constants ──

DELIMITER = ";"
PLACEHOLDER_OPEN = "<<<"
PLACEHOLDER_CLOSE = ">>>"

# A whole placeholder token (no whitespace) left unresolved after substitution
_UNRESOLVED_RE = re.compile(r"<<<[^<>\s]*>>>")


# ── Collection ──


def collect_custom_variables(resources: ResourceProvider, defined_name: str) -> dict[str, str]:
    """Collect the custom variables declared for a library.

    The external definition ``define_<id>`` is consulted first, then the
    internal one ``define_int_<id>``.  Variables with an empty value are
    left out.

    Args:
        resources: Resource provider to query.
        defined_name: Normalized library identifier.

    Returns:
        Mapping of variable name (as declared) to its value.
    """
    variables: dict[str, str] = {}

    manifest = resources.get_string(DEFINE_EXT + defined_name)
    if not manifest:
        manifest = resources.get_string(DEFINE_INT + defined_name)
    if not manifest:
        return variables

    for name in manifest.split(DELIMITER):
        if not name:
            continue
        value = resources.get_string(f"library_{defined_name}_{name}")
        if value:
            variables[name] = value

    return variables


# ── Substitution ──


def insert_variables(text: str, variables: dict[str, str]) -> str:
    """Replace ``<<<NAME>>>`` placeholders with variable values.

    Variables are applied in sorted key order; those with an empty value
    are skipped.  Placeholders still unresolved afterwards are removed
    entirely and any stray ``<<<`` or ``>>>`` is stripped, so template
    markup never reaches the display.

    >>> insert_variables("<<<YEAR>>> by <<<OWNER>>>", {"year": "2015"})
    '2015 by '
    """
    for key in sorted(variables):
        value = variables[key]
        if value:
            text = text.replace(PLACEHOLDER_OPEN + key.upper() + PLACEHOLDER_CLOSE, value)

    text = _UNRESOLVED_RE.sub("", text)
    return text.replace(PLACEHOLDER_OPEN, "").replace(PLACEHOLDER_CLOSE, "")
