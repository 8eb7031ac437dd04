"""Exception hierarchy for Moduly."""

from .analysis import AnalysisError, FileAccessError, ParsingError
from .base import ModulyError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "ModulyError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
