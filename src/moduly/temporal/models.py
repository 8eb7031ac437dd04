"""Data models for git-based hotspot mining."""

from dataclasses import dataclass


@dataclass
class Hotspot:
    file: str  # path relative to the repository root
    commits: int  # commits touching the file
