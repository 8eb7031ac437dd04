"""Tests for package usage classification."""

from moduly.packages.classifier import bare_package_name, classify_packages, is_outdated_range
from moduly.packages.models import OutdatedPackage, PackageManifest


class TestBarePackageName:
    def test_plain(self):
        assert bare_package_name("react") == "react"

    def test_deep_import(self):
        assert bare_package_name("lodash/merge") == "lodash"

    def test_scoped(self):
        assert bare_package_name("@scope/pkg") == "@scope/pkg"
        assert bare_package_name("@scope/pkg/sub/path") == "@scope/pkg"


class TestClassifyPackages:
    def test_no_manifest_gives_empty_result(self):
        usage = classify_packages(None, ["react"])
        assert usage.used == []
        assert usage.unused == []
        assert usage.suggestions == []

    def test_used_and_unused(self):
        manifest = PackageManifest(
            dependencies={"react": "^18.2.0", "left-pad": "^1.3.0"},
            dev_dependencies={"eslint": "^8.0.0"},
        )
        usage = classify_packages(manifest, ["react", "react-dom/client"])
        assert usage.used == ["react"]
        assert usage.unused == ["left-pad"]
        assert usage.dependencies == {"react": "^18.2.0", "left-pad": "^1.3.0"}
        assert usage.dev_dependencies == {"eslint": "^8.0.0"}

    def test_build_time_package_in_both_maps_is_neither_used_nor_unused(self):
        manifest = PackageManifest(
            dependencies={"eslint": "^8.0.0"},
            dev_dependencies={"eslint": "^8.1.0"},
        )
        usage = classify_packages(manifest, [])
        assert "eslint" not in usage.used
        assert "eslint" not in usage.unused

    def test_types_packages_exempt(self):
        manifest = PackageManifest(dev_dependencies={"@types/node": "^20.0.0"})
        assert classify_packages(manifest, []).unused == []

    def test_deep_and_scoped_imports_count_as_usage(self):
        manifest = PackageManifest(
            dependencies={"lodash": "^4.17.21", "@tanstack/react-query": "^5.0.0"}
        )
        usage = classify_packages(manifest, ["lodash/merge", "@tanstack/react-query/devtools"])
        assert usage.used == ["lodash", "@tanstack/react-query"]
        assert usage.unused == []

    def test_undeclared_imports_ignored(self):
        manifest = PackageManifest(dependencies={"react": "^18.0.0"})
        usage = classify_packages(manifest, ["fs", "path", "react"])
        assert usage.used == ["react"]

    def test_outdated_is_exact_pins(self):
        manifest = PackageManifest(
            dependencies={"react": "18.2.0", "vue": "^3.0.0", "svelte": "~4.0.0", "x": "*"}
        )
        usage = classify_packages(manifest, [])
        assert usage.outdated == [OutdatedPackage(name="react", current="18.2.0")]
        assert usage.outdated[0].latest == "check npm registry"

    def test_suggestions_for_missing_tooling(self):
        manifest = PackageManifest(dev_dependencies={"typescript": "^5.0.0"})
        usage = classify_packages(manifest, [])
        assert usage.suggestions == [
            "eslint - Add code quality linting",
            "prettier - Add consistent code formatting",
        ]

    def test_no_suggestions_when_tooling_declared(self):
        manifest = PackageManifest(
            dev_dependencies={"typescript": "^5", "eslint": "^8", "prettier": "^3"}
        )
        assert classify_packages(manifest, []).suggestions == []


class TestIsOutdatedRange:
    def test_ranges(self):
        assert is_outdated_range("1.0.0")
        assert not is_outdated_range("^1.0.0")
        assert not is_outdated_range("~1.0.0")
        assert not is_outdated_range("*")
        assert not is_outdated_range("")
