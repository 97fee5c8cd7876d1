"""Paginated GitLab scan producing Satis repository entries.

Walks the project listing page by page until an empty page or the page cap,
filters each project, reads its composer.json and hands accepted packages to
the sink. Per-project failures are logged and skipped; a failure to fetch a
listing page propagates and ends the run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from constants import Constants
from repository.models import Project
from scan.manifest import ManifestError, ManifestExtractor, ManifestResult

logger = logging.getLogger(__name__)

LogCallback = Callable[[int, str], None]

# (level, message) reported for each extraction failure
_FAILURE_REPORTS = {
    ManifestError.MISSING: (logging.WARNING, "composer.json not found"),
    ManifestError.UNREACHABLE: (logging.WARNING, "composer.json could not be retrieved"),
    ManifestError.MALFORMED: (logging.WARNING, "composer.json is not valid JSON"),
    ManifestError.NAME_MISSING: (logging.ERROR, "name not defined in composer.json"),
}


@dataclass
class ScanResult:
    """Aggregate of a single scan run."""
    accepted_count: int = 0
    projects_seen: int = 0
    pages_scanned: int = 0
    page_cap_reached: bool = False
    repositories: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def no_project_found(self) -> bool:
        return self.accepted_count == 0


def project_message(project: Project, message: str) -> str:
    """Format a per-project log line."""
    return f"{project.name} (branch {project.default_branch}) : {message}"


class ScanOrchestrator:
    """Drives the page loop over ``client.find``.

    Args:
        client: object exposing ``find(find_options)``
        filter_chain: object exposing ``is_accepted(project)``
        extractor: ``ManifestExtractor`` (or compatible ``extract(project)``)
        sink: object exposing ``add_repository(name, url, unsafe_ssl)``
        max_pages: hard upper bound on listing requests
        unsafe_ssl: forwarded to the sink for each repository
        log: ``(level, message)`` callable; defaults to this module's logger
    """

    def __init__(
        self,
        client,
        filter_chain,
        extractor: ManifestExtractor,
        sink,
        *,
        max_pages: int = Constants.MAX_PAGES,
        unsafe_ssl: bool = False,
        log: Optional[LogCallback] = None,
    ):
        self.client = client
        self.filter_chain = filter_chain
        self.extractor = extractor
        self.sink = sink
        self.max_pages = max_pages
        self.unsafe_ssl = unsafe_ssl
        self._log = log or logger.log

    def run(self, search: Optional[str] = None) -> ScanResult:
        """Scan every page and return the run summary.

        Raises:
            TransportError: when a listing page cannot be fetched
        """
        result = ScanResult()
        if search:
            self._log(logging.INFO, f"Project filter : {search}...")

        page = 1
        while page <= self.max_pages:
            find_options = {"page": page}
            if search:
                find_options["search"] = search
            projects = self.client.find(find_options)
            result.pages_scanned += 1
            if not projects:
                break
            for project in projects:
                result.projects_seen += 1
                self._process_project(project, result)
            page += 1
        else:
            result.page_cap_reached = True
            self._log(logging.WARNING, f"Stopped after {self.max_pages} page(s), the page limit")

        if result.no_project_found:
            self._log(logging.ERROR, "No project found!")
        else:
            self._log(logging.INFO, f"Number of project found : {result.accepted_count}")
        return result

    def _process_project(self, project: Project, result: ScanResult) -> None:
        if not self.filter_chain.is_accepted(project):
            self._log(logging.INFO, f"Ignoring project {project.name}")
            return

        extracted: ManifestResult = self.extractor.extract(project)
        if not extracted.ok:
            level, message = _FAILURE_REPORTS[extracted.error or ManifestError.NAME_MISSING]
            if extracted.detail:
                self._log(logging.DEBUG, extracted.detail)
            self._log(level, project_message(project, message))
            return

        package_name = extracted.package_name
        self.sink.add_repository(package_name, project.http_url, self.unsafe_ssl)
        result.accepted_count += 1
        result.repositories.append((package_name, project.http_url))
        self._log(logging.INFO, project_message(project, f"{package_name}:*"))
