"""Reject projects whose qualified name matches a regular expression."""
from __future__ import annotations

import re

from filters.base import FilterConstructionError, ProjectFilter
from repository.models import Project


class IgnoreRegexpFilter(ProjectFilter):
    """Ignore projects according to a regexp, e.g. ``(^phpstorm|^typo3/library)``."""

    def __init__(self, pattern: str):
        if not isinstance(pattern, str):
            raise FilterConstructionError(f"ignore regexp must be a string, got {pattern!r}")
        try:
            self.regexp = re.compile(pattern)
        except re.error as exc:
            raise FilterConstructionError(f"invalid ignore regexp {pattern!r}: {exc}") from exc
        self.pattern = pattern

    @property
    def description(self) -> str:
        return f"project name does not match /{self.pattern}/"

    def is_accepted(self, project: Project) -> bool:
        return self.regexp.search(project.name) is None
