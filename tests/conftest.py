"""Shared test fixtures for aboutlibs tests."""

import sys
from pathlib import Path

import pytest

# Add src to path so tests can import aboutlibs
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from aboutlibs.resources import DictResourceProvider  # noqa: E402


# A small catalog: two shared licenses, two internal libraries, and three
# external declarations (one of which has neither name nor description).
CATALOG = {
    "define_license_apache_2_0": "",
    "license_apache_2_0_licenseName": "Apache Version 2.0",
    "license_apache_2_0_licenseWebsite": "https://www.apache.org/licenses/LICENSE-2.0",
    "license_apache_2_0_licenseShortDescription": "Copyright <<<YEAR>>> <<<OWNER>>>",
    "license_apache_2_0_licenseDescription": "Licensed under the Apache License, Version 2.0. <<<OWNER>>>",
    "define_license_mit": "",
    "license_mit_licenseName": "MIT License",
    "license_mit_licenseWebsite": "https://opensource.org/licenses/MIT",
    "license_mit_licenseShortDescription": "Permission is hereby granted, free of charge.",
    "license_mit_licenseDescription": "The MIT License (MIT)",
    # Internal catalog libraries
    "define_int_okhttp": "year;owner",
    "library_okhttp_author": "Square",
    "library_okhttp_authorWebsite": "https://squareup.com",
    "library_okhttp_libraryName": "OkHttp",
    "library_okhttp_libraryDescription": "An HTTP client by <<<OWNER>>>",
    "library_okhttp_libraryVersion": "4.12.0",
    "library_okhttp_libraryWebsite": "https://square.github.io/okhttp/",
    "library_okhttp_licenseId": "apache_2_0",
    "library_okhttp_isOpenSource": "true",
    "library_okhttp_repositoryLink": "https://github.com/square/okhttp",
    "library_okhttp_classPath": "json",
    "library_okhttp_year": "2019",
    "library_okhttp_owner": "Square, Inc.",
    "define_int_okio": "",
    "library_okio_author": "Square",
    "library_okio_libraryName": "Okio",
    "library_okio_libraryDescription": "A modern I/O library",
    "library_okio_libraryVersion": "3.9.0",
    "library_okio_licenseId": "apache_2_0",
    "library_okio_isOpenSource": "true",
    "library_okio_classPath": "okio_is_not_installed_here",
    # External (application-declared) libraries
    "define_app_core": "year",
    "library_app_core_author": "Example Corp",
    "library_app_core_libraryName": "App Core",
    "library_app_core_libraryDescription": "Shared application code",
    "library_app_core_libraryVersion": "1.0.0",
    "library_app_core_licenseVersion": "MIT",
    "library_app_core_licenseLink": "https://opensource.org/licenses/MIT",
    "library_app_core_licenseContent": "MIT, <<<YEAR>>>",
    "library_app_core_isOpenSource": "false",
    "library_app_core_year": "2024",
    "define_zlib": "",
    "library_zlib_libraryName": "Zlib",
    "library_zlib_libraryDescription": "Compression library",
    "library_zlib_licenseId": "mit",
    "define_ghost": "",
    "library_ghost_author": "Nobody",
    # Not a definition
    "app_name": "Example",
}


@pytest.fixture
def catalog() -> dict:
    return dict(CATALOG)


@pytest.fixture
def resources(catalog) -> DictResourceProvider:
    return DictResourceProvider(catalog)
