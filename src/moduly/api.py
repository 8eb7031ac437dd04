"""Public API for Moduly.

``analyze()`` is the main entry point. It gathers every input the engine
needs (file contents, manifest, dependency audit, git hotspots), runs the
engine and returns a scored ``ProjectReport``.

Example:
    >>> from moduly import analyze
    >>>
    >>> report = analyze("/path/to/project")
    >>> report.score
    87
    >>>
    >>> # Skip the slow collaborators
    >>> report = analyze("/path/to/project", enable_audit=False, enable_git=False)
"""

from __future__ import annotations

import json
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from .analysis import AnalysisEngine, assemble_report, utc_timestamp
from .config import AnalysisConfig, load_config
from .exceptions import ConfigurationError
from .logging_config import get_logger
from .models import ProjectReport
from .packages.manifest import load_manifest
from .performance import analyze_performance
from .scanning.enumerator import enumerate_files
from .scanning.source import load_sources
from .security.audit import DependencyAuditor
from .security.models import SecurityFinding
from .temporal.git_extractor import GitExtractor
from .temporal.models import Hotspot

logger = get_logger(__name__)

REPORT_FILENAME = "report.json"
GITIGNORE_FILENAME = ".gitignore"


def analyze(
    path: Union[str, Path] = ".",
    config: Optional[AnalysisConfig] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> ProjectReport:
    """Analyze a JavaScript/TypeScript project and return its report.

    Pipeline:
    1. Load configuration (unless an AnalysisConfig is passed in)
    2. Enumerate and load project files
    3. Start the dependency audit and hotspot mining in the background
    4. Run the per-file engine (imports, graph, packages, code scan)
    5. Collect performance metrics and assemble the scored report

    Args:
        path: Project root (default: current directory)
        config: Ready-made configuration; ``config_file`` and ``overrides``
            are ignored when given
        config_file: Optional explicit TOML config file
        **overrides: Configuration overrides (e.g. enable_git=False)

    Returns:
        ProjectReport

    Raises:
        InvalidPathError: If the root does not exist or is not a directory
        FileAccessError: If the root cannot be listed
        ConfigurationError: If the configuration is invalid
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)

    root = Path(path).resolve()
    logger.info("Starting analysis of %s", root)

    rel_paths = enumerate_files(root, config.extensions, config.exclude_dirs, config.exclude_files)
    sources = load_sources(root, rel_paths, workers=config.workers)
    manifest = load_manifest(root)

    with ThreadPoolExecutor(max_workers=2) as side_pool:
        audit_future: Optional[Future] = None
        hotspot_future: Optional[Future] = None
        if config.enable_audit:
            auditor = DependencyAuditor(timeout_seconds=config.audit_timeout_seconds)
            audit_future = side_pool.submit(auditor.run, root)
        if config.enable_git:
            extractor = GitExtractor(str(root))
            hotspot_future = side_pool.submit(extractor.hotspots, config.hotspot_limit)

        engine = AnalysisEngine(config)
        analysis = engine.analyze_sources(sources, manifest)

        audit_findings: list[SecurityFinding] = (
            audit_future.result() if audit_future is not None else []
        )
        hotspots: list[Hotspot] = hotspot_future.result() if hotspot_future is not None else []

    performance = analyze_performance(root, analysis.stats, manifest)

    report = assemble_report(
        project_name=root.name,
        timestamp=utc_timestamp(),
        analysis=analysis,
        hotspots=hotspots,
        audit_findings=audit_findings,
        performance=performance,
        config=config,
    )
    logger.info(
        "Analysis complete: %d files, %d findings, score %d",
        report.stats.total_files,
        len(report.security),
        report.score,
    )
    return report


def write_report(root: Union[str, Path], report: ProjectReport, output_dir: str = ".moduly") -> Path:
    """Write ``report.json`` under ``<root>/<output_dir>`` and return its path.

    When the project has a ``.gitignore`` that does not mention the output
    directory, the directory is appended to it.

    Raises:
        ConfigurationError: If the output directory can't be written
    """
    root = Path(root)
    out_dir = root / output_dir
    out_path = out_dir / REPORT_FILENAME
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write report to {out_path}: {e}")

    ensure_gitignored(root, output_dir)
    logger.debug("Report written to %s", out_path)
    return out_path


def ensure_gitignored(root: Path, entry: str) -> bool:
    """Append ``entry`` to an existing .gitignore; True if the file changed."""
    gitignore = root / GITIGNORE_FILENAME
    if not gitignore.is_file():
        return False

    try:
        content = gitignore.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot read %s: %s", gitignore, e)
        return False

    entries = {line.strip().rstrip("/") for line in content.splitlines()}
    if entry.rstrip("/") in entries or f"/{entry.rstrip('/')}" in entries:
        return False

    prefix = "" if content == "" or content.endswith("\n") else "\n"
    try:
        with open(gitignore, "a", encoding="utf-8") as f:
            f.write(f"{prefix}{entry}\n")
    except OSError as e:
        logger.warning("Cannot update %s: %s", gitignore, e)
        return False
    return True
