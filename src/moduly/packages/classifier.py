"""Package usage classification.

Compares the external specifiers found anywhere in the project against the
declared manifest. A declared package counts as used as soon as one
specifier maps to it; unused packages that are only expected at build time
are exempt.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .models import OutdatedPackage, PackageManifest, PackageUsage

BUILD_TIME_PACKAGES = frozenset(
    {
        "typescript",
        "eslint",
        "prettier",
        "ts-node",
        "tsx",
        "jest",
        "mocha",
        "vitest",
        "webpack",
        "vite",
        "rollup",
        "esbuild",
        "turbo",
    }
)

TYPES_PREFIX = "@types/"

# Ranges with one of these prefixes float; anything else is treated as pinned.
FLOATING_RANGE_PREFIXES = ("^", "~", "*")

# (package, suggestion) pairs, each emitted independently when the package
# is not declared.
TOOLING_SUGGESTIONS = (
    ("typescript", "typescript - Add type safety to your project"),
    ("eslint", "eslint - Add code quality linting"),
    ("prettier", "prettier - Add consistent code formatting"),
)


def bare_package_name(specifier: str) -> str:
    """Manifest lookup key for an external specifier.

    >>> bare_package_name("@scope/pkg/sub")
    '@scope/pkg'
    >>> bare_package_name("lodash/merge")
    'lodash'
    """
    parts = specifier.split("/")
    if specifier.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


def is_build_time_package(name: str) -> bool:
    return name in BUILD_TIME_PACKAGES or name.startswith(TYPES_PREFIX)


def is_outdated_range(version: str) -> bool:
    return bool(version) and not version.startswith(FLOATING_RANGE_PREFIXES)


def classify_packages(
    manifest: Optional[PackageManifest], external_specifiers: Iterable[str]
) -> PackageUsage:
    """Classify declared packages as used, unused or exempt.

    Args:
        manifest: Parsed package.json, or None when the project has none
        external_specifiers: Every non-relative specifier in the project

    Returns:
        PackageUsage; empty when there is no manifest
    """
    if manifest is None:
        return PackageUsage()

    declared = manifest.all_dependencies
    found: set[str] = set()
    for specifier in external_specifiers:
        name = bare_package_name(specifier)
        if name in declared:
            found.add(name)
            if len(found) == len(declared):
                break

    used = [name for name in declared if name in found]
    unused = [
        name for name in declared if name not in found and not is_build_time_package(name)
    ]
    outdated = [
        OutdatedPackage(name=name, current=version)
        for name, version in declared.items()
        if is_outdated_range(version)
    ]
    suggestions = [text for package, text in TOOLING_SUGGESTIONS if package not in declared]

    return PackageUsage(
        dependencies=dict(manifest.dependencies),
        dev_dependencies=dict(manifest.dev_dependencies),
        used=used,
        unused=unused,
        outdated=outdated,
        suggestions=suggestions,
    )
