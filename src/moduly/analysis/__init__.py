"""Analysis engine orchestrating per-file work and report assembly."""

from .engine import AnalysisEngine, FileAnalysis, SourceAnalysis, assemble_report, utc_timestamp

__all__ = ["AnalysisEngine", "FileAnalysis", "SourceAnalysis", "assemble_report", "utc_timestamp"]
