"""Tests for library detection and the detection cache."""

import json

import pytest

from aboutlibs.detection import (
    UNSET_VERSION,
    ImportDetector,
    InMemoryDetectionCache,
    JsonFileDetectionCache,
    default_cache_path,
)
from aboutlibs.entity import Library


# ── Detector ──


class TestImportDetector:
    def test_detects_importable_class_paths(self):
        libraries = [
            Library(defined_name="json_lib", class_path="json"),
            Library(defined_name="missing", class_path="definitely_not_installed_xyz"),
            Library(defined_name="decoder", class_path="json.decoder"),
        ]
        detected = ImportDetector().detect(libraries)
        assert [lib.defined_name for lib in detected] == ["json_lib", "decoder"]

    def test_missing_parent_package(self):
        lib = Library(defined_name="x", class_path="definitely_not_installed_xyz.sub")
        assert ImportDetector().detect([lib]) == []

    def test_malformed_class_path(self):
        lib = Library(defined_name="x", class_path=".relative")
        assert ImportDetector().detect([lib]) == []

    def test_libraries_without_class_path_skipped(self):
        calls = []
        detector = ImportDetector(finder=lambda path: calls.append(path) or True)
        assert detector.detect([Library(defined_name="x")]) == []
        assert calls == []

    def test_custom_finder(self):
        available = {"requests"}
        detector = ImportDetector(finder=lambda path: path if path in available else None)
        libraries = [
            Library(defined_name="requests", class_path="requests"),
            Library(defined_name="httpx", class_path="httpx"),
        ]
        assert [lib.defined_name for lib in detector.detect(libraries)] == ["requests"]

    def test_broken_parent_package_not_detected(self, tmp_path, monkeypatch, caplog):
        package = tmp_path / "aboutlibs_brokenpkg"
        package.mkdir()
        (package / "__init__.py").write_text("raise RuntimeError('broken install')\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        libraries = [
            Library(defined_name="broken", class_path="aboutlibs_brokenpkg.core"),
            Library(defined_name="json_lib", class_path="json"),
        ]
        detected = ImportDetector().detect(libraries)
        assert [lib.defined_name for lib in detected] == ["json_lib"]
        assert "broken install" in caplog.text

    def test_preserves_identity(self):
        lib = Library(defined_name="json_lib", class_path="json")
        assert ImportDetector().detect([lib])[0] is lib


# ── Caches ──


class TestInMemoryDetectionCache:
    def test_defaults(self):
        cache = InMemoryDetectionCache()
        assert cache.get_version() == UNSET_VERSION
        assert cache.get_cached_names() == ""

    def test_set_and_get(self):
        cache = InMemoryDetectionCache()
        cache.set_version(12)
        cache.set_cached_names("a;b")
        assert cache.get_version() == 12
        assert cache.get_cached_names() == "a;b"


class TestJsonFileDetectionCache:
    def test_missing_file_reads_empty(self, tmp_path):
        cache = JsonFileDetectionCache(tmp_path / "cache.json")
        assert cache.get_version() == UNSET_VERSION
        assert cache.get_cached_names() == ""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "cache.json"
        cache = JsonFileDetectionCache(path)
        cache.set_version(3)
        cache.set_cached_names("okhttp;okio")

        reloaded = JsonFileDetectionCache(path)
        assert reloaded.get_version() == 3
        assert reloaded.get_cached_names() == "okhttp;okio"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "versionCode": 3,
            "autoDetectedLibraries": "okhttp;okio",
        }

    def test_corrupt_file_reads_empty(self, tmp_path, caplog):
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        cache = JsonFileDetectionCache(path)
        assert cache.get_version() == UNSET_VERSION
        assert "corrupt" in caplog.text

    def test_malformed_values_ignored(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"versionCode": "7", "autoDetectedLibraries": 5}), encoding="utf-8")
        cache = JsonFileDetectionCache(path)
        assert cache.get_version() == UNSET_VERSION
        assert cache.get_cached_names() == ""

    def test_non_object_reads_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileDetectionCache(path).get_cached_names() == ""

    def test_write_failure_logged(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        cache = JsonFileDetectionCache(blocker / "cache.json")
        cache.set_version(1)
        assert cache.get_version() == 1
        assert "Failed to write detection cache" in caplog.text


class TestDefaultCachePath:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ABOUTLIBS_CACHE_DIR", str(tmp_path))
        assert default_cache_path() == tmp_path / "detection-cache.json"
        assert JsonFileDetectionCache().path == tmp_path / "detection-cache.json"

    def test_home_default(self, monkeypatch):
        monkeypatch.delenv("ABOUTLIBS_CACHE_DIR", raising=False)
        assert default_cache_path().parent.name == ".aboutlibs"
