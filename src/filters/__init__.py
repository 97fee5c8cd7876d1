"""Project filters applied before a project's manifest is read."""

from .base import FilterConstructionError, FilterDecision, ProjectFilter
from .chain import FilterChain
from .gitlab_namespace import GitlabNamespaceFilter
from .ignore_regexp import IgnoreRegexpFilter
from .include_if_has_file import IncludeIfHasFileFilter
from .project_type import ProjectTypeFilter

__all__ = [
    "FilterChain",
    "FilterConstructionError",
    "FilterDecision",
    "GitlabNamespaceFilter",
    "IgnoreRegexpFilter",
    "IncludeIfHasFileFilter",
    "ProjectFilter",
    "ProjectTypeFilter",
]
