"""GitLab API client for project discovery.

Provides a lightweight REST client for listing projects page by page and
reading files from a project's repository at a given ref.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import safe_get, safe_head
from repository.errors import RepositoryFileNotFound, TransportError
from repository.models import ClientOptions, Project

logger = logging.getLogger(__name__)


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    Authenticates with the ``Private-Token`` header when a token is configured.
    """

    def __init__(self, options: ClientOptions):
        """Initialize GitLab client.

        Args:
            options: Instance URL, optional token and TLS verification switch
        """
        self.options = options
        self.base_url = options.url.rstrip("/") + Constants.GITLAB_API_PATH

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.options.token:
            headers['Private-Token'] = self.options.token
        return headers

    def _request_kwargs(self) -> Dict[str, Any]:
        return {
            'headers': self._get_headers(),
            'verify': not self.options.unsafe_ssl,
        }

    def _file_url(self, project: Project, path: str) -> str:
        file_path = quote(path, safe='')
        return f"{self.base_url}/projects/{project.id}/repository/files/{file_path}"

    def find(self, find_options: Optional[Dict[str, Any]] = None) -> List[Project]:
        """Fetch one page of projects.

        Args:
            find_options: ``search`` (passed through to GitLab) and ``page`` (1-based)

        Returns:
            Projects on the requested page; an empty list once pages are exhausted

        Raises:
            TransportError: on network failure or a non-200 response
        """
        find_options = find_options or {}
        params: Dict[str, Any] = {
            'page': find_options.get('page', 1),
            'per_page': Constants.REPO_API_PER_PAGE,
            'order_by': 'id',
            'sort': 'asc',
        }
        if find_options.get('search'):
            params['search'] = find_options['search']

        url = f"{self.base_url}/projects"
        res = safe_get(url, context="gitlab", params=params, **self._request_kwargs())
        if res.status_code != 200:
            raise TransportError(
                f"GitLab project listing returned HTTP {res.status_code}",
                url=url,
                status_code=res.status_code,
            )
        try:
            data = res.json()
        except ValueError as exc:
            raise TransportError(f"GitLab project listing is not JSON: {exc}", url=url) from exc
        if not isinstance(data, list):
            raise TransportError("GitLab project listing is not a list", url=url)

        projects = []
        for item in data:
            if not isinstance(item, dict) or item.get('id') is None:
                logger.warning("Skipping malformed project entry on page %s: %r", params['page'], item)
                continue
            projects.append(Project.from_api(item))
        logger.debug("Page %s: %d project(s)", params['page'], len(projects))
        return projects

    def get_raw_file(self, project: Project, path: str, ref: Optional[str]) -> bytes:
        """Fetch raw file content at ``ref``.

        Args:
            project: Project owning the file
            path: File path within the repository
            ref: Branch, tag or commit

        Returns:
            The file content as bytes

        Raises:
            RepositoryFileNotFound: when the file does not exist at ``ref``
            TransportError: on any other failure
        """
        if not ref:
            raise RepositoryFileNotFound(path, ref)
        url = f"{self._file_url(project, path)}/raw"
        res = safe_get(url, context="gitlab", params={'ref': ref}, **self._request_kwargs())
        if res.status_code == 404:
            raise RepositoryFileNotFound(path, ref)
        if res.status_code != 200:
            raise TransportError(
                f"GitLab file download returned HTTP {res.status_code}",
                url=url,
                status_code=res.status_code,
            )
        return res.content

    def has_file(self, project: Project, path: str, ref: Optional[str]) -> bool:
        """Check that a file exists at ``ref`` without downloading it.

        Raises:
            TransportError: on any response other than 200 or 404
        """
        if not ref:
            return False
        url = self._file_url(project, path)
        res = safe_head(url, context="gitlab", params={'ref': ref}, **self._request_kwargs())
        if res.status_code == 200:
            return True
        if res.status_code == 404:
            return False
        raise TransportError(
            f"GitLab file lookup returned HTTP {res.status_code}",
            url=url,
            status_code=res.status_code,
        )
