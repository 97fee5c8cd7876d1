"""Shared contract for project filters."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from repository.models import Project


class FilterConstructionError(ValueError):
    """A filter was configured with an unusable value."""


@dataclass
class FilterDecision:
    """Accept/reject outcome for one project."""
    accepted: bool
    reason: Optional[str] = None


class ProjectFilter(ABC):
    """Decides whether a project belongs in the generated configuration."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary used in log messages."""

    @abstractmethod
    def is_accepted(self, project: Project) -> bool:
        """Return True when ``project`` should be kept."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description}>"
