"""Package manifest and usage classification models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PackageManifest:
    """Declared dependencies from package.json (name -> version range)."""

    name: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    @property
    def all_dependencies(self) -> dict[str, str]:
        """Runtime and dev dependencies merged; dev ranges win on overlap.

        Key order is runtime names first, then dev-only names.
        """
        return {**self.dependencies, **self.dev_dependencies}


@dataclass
class OutdatedPackage:
    name: str
    current: str
    latest: str = "check npm registry"


@dataclass
class PackageUsage:
    """Declared dependencies classified by how the code uses them.

    ``outdated`` is a version-string heuristic (exact pins are flagged),
    not a registry comparison.
    """

    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    used: list[str] = field(default_factory=list)
    unused: list[str] = field(default_factory=list)
    outdated: list[OutdatedPackage] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
