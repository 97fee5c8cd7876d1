"""Keep only projects from an allow-list of GitLab namespaces."""
from __future__ import annotations

from typing import List

from filters.base import FilterConstructionError, ProjectFilter
from repository.models import Project


class GitlabNamespaceFilter(ProjectFilter):
    """Accept a project if its namespace id or name is listed, e.g. ``"2,Diaspora"``."""

    def __init__(self, allowed: str):
        self.allowed: List[str] = [item.strip() for item in (allowed or "").split(",") if item.strip()]
        if not self.allowed:
            raise FilterConstructionError("gitlab-namespace requires at least one id or name")

    @property
    def description(self) -> str:
        return f"namespace in {','.join(self.allowed)}"

    def is_accepted(self, project: Project) -> bool:
        if project.namespace_id is not None and str(project.namespace_id) in self.allowed:
            return True
        return bool(project.namespace_name) and project.namespace_name in self.allowed
