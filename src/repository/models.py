"""Data models for GitLab connection settings and project snapshots."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlsplit


@dataclass(frozen=True)
class ClientOptions:
    """Connection settings for a GitLab instance."""
    url: str
    token: Optional[str] = None
    unsafe_ssl: bool = False

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @property
    def host(self) -> Optional[str]:
        """GitLab domain, as registered in the Satis config."""
        return urlsplit(self.url).hostname


@dataclass(frozen=True)
class Project:
    """Immutable snapshot of a project as returned by the listing API."""
    id: int
    name: str  # qualified name (path_with_namespace)
    http_url: str
    default_branch: Optional[str] = None
    namespace_id: Optional[int] = None
    namespace_name: Optional[str] = None
    namespace_path: Optional[str] = None
    project_type: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Project":
        """Build a Project from a ``GET /projects`` item (which must carry an ``id``)."""
        namespace = data.get("namespace")
        if not isinstance(namespace, dict):
            namespace = {}
        return cls(
            id=data["id"],
            name=data.get("path_with_namespace") or data.get("name", ""),
            http_url=data.get("http_url_to_repo", ""),
            default_branch=data.get("default_branch"),
            namespace_id=namespace.get("id"),
            namespace_name=namespace.get("name"),
            namespace_path=namespace.get("full_path") or namespace.get("path"),
            project_type=data.get("type"),
            raw=data,
        )
