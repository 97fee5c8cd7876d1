"""Ordered conjunction of project filters."""
from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional

from filters.base import FilterDecision, ProjectFilter
from repository.models import Project

logger = logging.getLogger(__name__)

LogCallback = Callable[[int, str], None]


class FilterChain:
    """Accepts a project only if every registered filter accepts it.

    Filters run in insertion order and evaluation stops at the first
    rejection, so later filters never issue their network calls.
    """

    def __init__(self, filters: Optional[List[ProjectFilter]] = None, log: Optional[LogCallback] = None):
        self.filters: List[ProjectFilter] = list(filters or [])
        self._log = log or logger.log

    def add_filter(self, project_filter: ProjectFilter) -> "FilterChain":
        self.filters.append(project_filter)
        return self

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[ProjectFilter]:
        return iter(self.filters)

    def evaluate(self, project: Project) -> FilterDecision:
        for project_filter in self.filters:
            if not project_filter.is_accepted(project):
                reason = f"rejected by {type(project_filter).__name__} ({project_filter.description})"
                self._log(logging.DEBUG, f"{project.name} : {reason}")
                return FilterDecision(accepted=False, reason=reason)
        return FilterDecision(accepted=True)

    def is_accepted(self, project: Project) -> bool:
        return self.evaluate(project).accepted
