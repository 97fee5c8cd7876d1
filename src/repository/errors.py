"""Exceptions raised by the GitLab repository client."""
from __future__ import annotations

from typing import Optional


class GitLabError(Exception):
    """Base class for GitLab client failures."""


class TransportError(GitLabError):
    """The request could not be completed (network, TLS, auth or server error)."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RepositoryFileNotFound(GitLabError):
    """The requested file does not exist at the given ref."""

    def __init__(self, path: str, ref: Optional[str]):
        super().__init__(f"{path} not found (ref {ref})")
        self.path = path
        self.ref = ref
