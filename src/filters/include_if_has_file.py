"""Keep only projects that contain a given file in their default branch."""
from __future__ import annotations

import logging

from filters.base import FilterConstructionError, ProjectFilter
from repository.errors import TransportError
from repository.models import Project

logger = logging.getLogger(__name__)


class IncludeIfHasFileFilter(ProjectFilter):
    """Accept a project only if ``filename`` exists, e.g. ``.satisinclude``."""

    def __init__(self, client, filename: str):
        if not filename:
            raise FilterConstructionError("include-if-has-file requires a file name")
        self.client = client
        self.filename = filename

    @property
    def description(self) -> str:
        return f"project contains {self.filename}"

    def is_accepted(self, project: Project) -> bool:
        try:
            return self.client.has_file(project, self.filename, project.default_branch)
        except TransportError as exc:
            logger.debug("%s", exc)
            logger.warning(
                "%s (branch %s) : could not check for %s",
                project.name,
                project.default_branch,
                self.filename,
            )
            return False
