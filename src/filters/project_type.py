"""Keep only projects of a given declared type (composer.json ``type``)."""
from __future__ import annotations

import logging
from typing import Optional

from filters.base import FilterConstructionError, ProjectFilter
from repository.models import Project
from scan.manifest import ManifestExtractor, ManifestReadError

logger = logging.getLogger(__name__)


class ProjectTypeFilter(ProjectFilter):
    """Accept a project only if its declared type equals ``project_type``.

    The comparison is exact and case-sensitive. The type comes from the
    project snapshot when present, otherwise from composer.json.
    """

    def __init__(self, project_type: str, client):
        if not project_type:
            raise FilterConstructionError("project-type requires a value")
        self.project_type = project_type
        self.extractor = ManifestExtractor(client)

    @property
    def description(self) -> str:
        return f"project type is {self.project_type}"

    def _declared_type(self, project: Project) -> Optional[str]:
        if project.project_type is not None:
            return project.project_type
        try:
            document = self.extractor.read_manifest(project)
        except ManifestReadError as exc:
            logger.debug("%s : no declared type (%s)", project.name, exc)
            return None
        declared = document.get("type")
        return declared if isinstance(declared, str) else None

    def is_accepted(self, project: Project) -> bool:
        return self._declared_type(project) == self.project_type
