"""Configuration loading and management for Moduly.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.moduly.toml)
    3. Project config (./moduly.toml)
    4. Explicit config file
    5. MODULY_* environment variables
    6. Keyword overrides (CLI flags)

Example:
    >>> config = load_config(enable_audit=False, workers=2)
    >>> config.enable_audit
    False
    >>> config.weights.security_penalty_cap
    30
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class ScoreWeights:
    """Thresholds, per-unit penalties and caps for the health score.

    The score starts at 100 and each signal subtracts an independent
    deduction. Per-unit penalties are multiplied by a count and then
    clamped to their cap.

    Attributes:
        Project size:
            large_project_files: File count above which size_penalty applies
            large_project_loc: Total lines above which loc_penalty applies

        Volatility:
            hotspot_commit_threshold: Commits above which a hotspot is "active"
            hotspot_penalty: Deduction per active hotspot
            hotspot_penalty_cap: Maximum hotspot deduction

        Coupling:
            coupling_ratio_threshold: edges / max(nodes, 1) above this is penalized
            coupling_penalty: Flat deduction when the ratio is exceeded

        Packages:
            unused_dependency_penalty: Deduction per unused dependency
            unused_dependency_penalty_cap: Maximum unused-dependency deduction

        Security:
            critical_weight / high_weight / medium_weight: Per-finding deductions
            security_penalty_cap: Maximum security deduction

        Documentation:
            min_comment_ratio: comment lines / code lines below this is penalized
            comment_penalty: Flat deduction for a low comment ratio
    """

    # === Project size ===
    large_project_files: int = 200
    size_penalty: int = 10
    large_project_loc: int = 10_000
    loc_penalty: int = 10

    # === Volatility ===
    hotspot_commit_threshold: int = 10
    hotspot_penalty: int = 3
    hotspot_penalty_cap: int = 15

    # === Coupling ===
    coupling_ratio_threshold: float = 3.0
    coupling_penalty: int = 15

    # === Packages ===
    unused_dependency_penalty: int = 2
    unused_dependency_penalty_cap: int = 15

    # === Security ===
    critical_weight: int = 10
    high_weight: int = 5
    medium_weight: int = 2
    security_penalty_cap: int = 30

    # === Documentation ===
    min_comment_ratio: float = 0.05
    comment_penalty: int = 5

    def __post_init__(self) -> None:
        """Validate weight configuration."""
        for name, value in self.__dict__.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

        if not 0.0 <= self.min_comment_ratio <= 1.0:
            raise ValueError("min_comment_ratio must be between 0.0 and 1.0")


DEFAULT_WEIGHTS = ScoreWeights()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        Performance tuning:
            workers: Number of parallel per-file workers (None = auto-detect)

        Graph projection:
            max_nodes: Nodes kept in the dependency graph (discovery order)
            max_edges: Edges kept in the dependency graph (discovery order)

        Optional collaborators:
            enable_audit: Run `npm audit` when a lockfile is present
            audit_timeout_seconds: Hard timeout for the audit subprocess
            enable_git: Mine git history for hotspots
            hotspot_limit: Number of hotspots kept, most-touched first

        File filtering:
            extensions: File extensions included in the scan
            exclude_dirs: Directory names never descended into
            exclude_files: File names never scanned

        Output:
            output_dir: Directory (relative to the project) for report artifacts
            verbosity: Logging verbosity level

        weights: Health score weights (nested config)
    """

    # Performance tuning
    workers: Optional[int] = None

    # Graph projection
    max_nodes: int = 1000
    max_edges: int = 2000

    # Optional collaborators
    enable_audit: bool = True
    audit_timeout_seconds: int = 30
    enable_git: bool = True
    hotspot_limit: int = 10

    # File filtering
    extensions: list[str] = field(
        default_factory=lambda: [
            ".js",
            ".jsx",
            ".ts",
            ".tsx",
            ".css",
            ".scss",
            ".html",
            ".json",
            ".py",
            ".yaml",
            ".yml",
            ".md",
        ]
    )
    exclude_dirs: list[str] = field(
        default_factory=lambda: [
            "node_modules",
            "dist",
            ".git",
            ".moduly",
            ".next",
            "build",
            "coverage",
        ]
    )
    exclude_files: list[str] = field(
        default_factory=lambda: ["package-lock.json", "yarn.lock", "pnpm-lock.yaml"]
    )

    # Output
    output_dir: str = ".moduly"
    verbosity: Verbosity = "normal"

    weights: ScoreWeights = field(default_factory=ScoreWeights)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")

        if self.max_nodes < 1:
            raise ValueError("max_nodes must be at least 1")
        if self.max_edges < 1:
            raise ValueError("max_edges must be at least 1")

        if self.audit_timeout_seconds < 1:
            raise ValueError("audit_timeout_seconds must be at least 1")
        if self.hotspot_limit < 0:
            raise ValueError("hotspot_limit must be non-negative")

        if not self.extensions:
            raise ValueError("extensions must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise ValueError(f"extension '{ext}' must start with '.'")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of: quiet, normal, verbose")


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Explicit TOML file, applied after the discovered ones
        **overrides: Field values with the highest priority. ``verbose`` and
            ``quiet`` booleans are translated to ``verbosity``.

    Returns:
        Validated AnalysisConfig

    Raises:
        ConfigurationError: If a config file is missing or malformed
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    # 1. Global config
    global_config = Path.home() / ".moduly.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    # 2. Project config
    project_config = Path.cwd() / "moduly.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    # 3. Explicit config file
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    # 4. Environment variables
    merged.update(_load_env_vars())

    # 5. Keyword overrides
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    weights = merged.pop("weights", None)
    if isinstance(weights, dict):
        try:
            merged["weights"] = ScoreWeights(**weights)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [weights] config: {e}")
        except ValueError as e:
            raise InvalidConfigError("weights", weights, str(e))
    elif isinstance(weights, ScoreWeights):
        merged["weights"] = weights

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise InvalidConfigError("config", merged, str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from MODULY_* environment variables.

    Only scalar fields are read (MODULY_WORKERS, MODULY_ENABLE_AUDIT,
    MODULY_AUDIT_TIMEOUT_SECONDS, MODULY_MAX_NODES, ...). List fields and
    the nested weights are file-only.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"MODULY_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot come from the environment.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list or type_hint is ScoreWeights:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    Raises:
        ConfigurationError: If the file can't be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
