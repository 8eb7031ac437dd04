"""Package manifest loading and usage classification."""

from .classifier import (
    BUILD_TIME_PACKAGES,
    bare_package_name,
    classify_packages,
    is_build_time_package,
)
from .manifest import load_manifest, parse_manifest
from .models import OutdatedPackage, PackageManifest, PackageUsage

__all__ = [
    "BUILD_TIME_PACKAGES",
    "bare_package_name",
    "classify_packages",
    "is_build_time_package",
    "load_manifest",
    "parse_manifest",
    "OutdatedPackage",
    "PackageManifest",
    "PackageUsage",
]
