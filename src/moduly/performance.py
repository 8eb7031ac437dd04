"""Performance metrics: source/bundle size, load-time estimate, heavy packages.

Bundle size is approximated by summing the installed size of each runtime
dependency under ``node_modules``; no bundler is invoked.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .logging_config import get_logger
from .models import HeavyDependency, LargeFile, PerformanceMetrics, ProjectStats
from .packages.models import PackageManifest

logger = get_logger(__name__)

LARGE_FILE_LINES = 500
LARGE_FILE_BYTES = 20 * 1024

# Assumed transfer speed (5 MiB/s, a decent 4G link) plus parse/render overhead
TRANSFER_BYTES_PER_SECOND = 5 * 1024 * 1024
PARSE_OVERHEAD_SECONDS = 0.3

HEAVY_PACKAGES: dict[str, str] = {
    "moment": "moment is 300KB+ with locale data. Use dayjs (~2KB) or date-fns as lighter alternatives.",
    "lodash": "lodash is ~70KB. Use lodash-es for tree-shaking or import individual functions (lodash/get).",
    "jquery": "jQuery is ~90KB. Modern browsers have native APIs (fetch, querySelector) that replace most jQuery use cases.",
    "axios": "axios is ~13KB. For simple use cases, the native fetch() API may be sufficient.",
    "underscore": "underscore is ~6KB. Most utility methods are now natively available in modern JavaScript.",
    "bluebird": "bluebird is ~18KB. Native Promises are now well-supported in all modern environments.",
    "request": "request is deprecated and ~500KB. Use node-fetch, got, or native fetch().",
    "async": "async is ~30KB. Native async/await and Promise.all() cover most use cases.",
    "rxjs": "rxjs is ~40KB minified. If only using a few operators, consider lighter alternatives.",
    "core-js": "core-js can add 100KB+. Only polyfill what you actually need, or use browserslist targeting.",
    "@fortawesome/fontawesome-free": "Font Awesome is 1.5MB+ with all icons. Use icon subsets or per-icon packages.",
    "animate.css": "animate.css is ~80KB. Consider using native CSS animations or a smaller library.",
}


def format_size(num_bytes: int) -> str:
    """Human-readable size: B, KB (1 dp) or MB (2 dp)."""
    if num_bytes < 1024:
        return f"{num_bytes}B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f}KB"
    return f"{num_bytes / (1024 * 1024):.2f}MB"


def estimate_load_time(num_bytes: int) -> str:
    seconds = num_bytes / TRANSFER_BYTES_PER_SECOND + PARSE_OVERHEAD_SECONDS
    return f"{seconds:.1f}s"


def directory_size(path: Path) -> int:
    """Total file size under ``path``, not descending into nested node_modules."""
    total = 0
    for dirpath, dirnames, filenames in os.walk(path):
        dirnames[:] = [d for d in dirnames if d != "node_modules"]
        for name in filenames:
            try:
                total += os.stat(os.path.join(dirpath, name)).st_size
            except OSError:
                continue
    return total


def estimate_bundle_size(root: Path, manifest: Optional[PackageManifest]) -> int:
    if manifest is None:
        return 0
    node_modules = root / "node_modules"
    if not node_modules.is_dir():
        return 0

    total = 0
    for dep in manifest.dependencies:
        dep_path = node_modules / dep
        if dep_path.is_dir():
            total += directory_size(dep_path)
    return total


def analyze_performance(
    root: Path, stats: ProjectStats, manifest: Optional[PackageManifest]
) -> PerformanceMetrics:
    source_bytes = sum(f.size for f in stats.file_list)
    bundle_bytes = estimate_bundle_size(root, manifest)
    effective_bytes = bundle_bytes if bundle_bytes > 0 else source_bytes

    large_files = [
        LargeFile(path=f.path, size=format_size(f.size), lines=f.loc.total_lines)
        for f in stats.file_list
        if f.loc.total_lines > LARGE_FILE_LINES or f.size > LARGE_FILE_BYTES
    ]

    heavy: list[HeavyDependency] = []
    if manifest is not None:
        heavy = [
            HeavyDependency(name=name, reason=HEAVY_PACKAGES[name])
            for name in manifest.all_dependencies
            if name in HEAVY_PACKAGES
        ]

    logger.debug("Source size %d bytes, bundle estimate %d bytes", source_bytes, bundle_bytes)
    return PerformanceMetrics(
        bundle_size=format_size(effective_bytes),
        source_size=format_size(source_bytes),
        load_time=estimate_load_time(effective_bytes),
        dependency_count=len(manifest.dependencies) if manifest is not None else 0,
        large_files=large_files,
        heavy_dependencies=heavy,
    )
