"""JSON formatter for Moduly."""

import json

from ..models import ProjectReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as JSON."""

    def render(self, report: ProjectReport) -> None:
        print(self.format(report))

    def format(self, report: ProjectReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
