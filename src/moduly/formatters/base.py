"""Base formatter interface for Moduly report rendering."""

from abc import ABC, abstractmethod

from ..models import ProjectReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: ProjectReport) -> None:
        """Render the report to the terminal."""

    @abstractmethod
    def format(self, report: ProjectReport) -> str:
        """Return formatted string representation of the report."""
