"""aboutlibs — metadata about the libraries bundled into an application."""

from aboutlibs.builder import LibraryBuilder, parse_bool
from aboutlibs.config import LibsConfig
from aboutlibs.detection import (
    DetectionCache,
    Detector,
    ImportDetector,
    InMemoryDetectionCache,
    JsonFileDetectionCache,
)
from aboutlibs.entity import Library, License
from aboutlibs.keys import ResourceKeys, classify_keys, filter_define_keys
from aboutlibs.libs import NO_LIMIT, Libs, find
from aboutlibs.modifications import LibraryField, apply_field_overrides, modify_libraries
from aboutlibs.resources import (
    AboutLibsError,
    DictResourceProvider,
    JsonResourceProvider,
    ResourceError,
    ResourceProvider,
)
from aboutlibs.variables import collect_custom_variables, insert_variables

__all__ = [
    # Record Model
    "Library",
    "License",
    # Resource Providers
    "ResourceProvider",
    "DictResourceProvider",
    "JsonResourceProvider",
    "AboutLibsError",
    "ResourceError",
    # Resource Key Parser
    "ResourceKeys",
    "classify_keys",
    "filter_define_keys",
    # Variable Substitution
    "collect_custom_variables",
    "insert_variables",
    # Builder
    "LibraryBuilder",
    "parse_bool",
    # Detection
    "Detector",
    "ImportDetector",
    "DetectionCache",
    "InMemoryDetectionCache",
    "JsonFileDetectionCache",
    # Aggregation & Resolution
    "Libs",
    "LibsConfig",
    "find",
    "NO_LIMIT",
    # Modifications
    "LibraryField",
    "apply_field_overrides",
    "modify_libraries",
]
