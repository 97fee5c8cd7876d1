"""composer.json retrieval and package name extraction.

Failures are returned as ``ManifestResult`` values rather than raised, so the
scan loop decides how loudly to report each one and moves on.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from constants import Constants
from repository.errors import RepositoryFileNotFound, TransportError
from repository.models import Project

logger = logging.getLogger(__name__)


class ManifestError(Enum):
    """Reasons a project's manifest did not yield a package name."""
    MISSING = "missing"
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"
    NAME_MISSING = "name_missing"


@dataclass
class ManifestResult:
    """Outcome of reading a project's package name."""
    package_name: Optional[str] = None
    error: Optional[ManifestError] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.package_name)


class ManifestReadError(Exception):
    """Raised by ``ManifestExtractor.read_manifest`` with the failure reason."""

    def __init__(self, error: ManifestError, detail: Optional[str] = None):
        super().__init__(detail or error.value)
        self.error = error
        self.detail = detail


class ManifestExtractor:
    """Reads the declared package name from a project's composer.json."""

    def __init__(self, client, path: str = Constants.COMPOSER_JSON_FILE):
        self.client = client
        self.path = path

    def read_manifest(self, project: Project) -> Dict[str, Any]:
        """Fetch and parse the manifest on the project's default branch.

        Raises:
            ManifestReadError: with MISSING, UNREACHABLE or MALFORMED
        """
        try:
            raw = self.client.get_raw_file(project, self.path, project.default_branch)
        except RepositoryFileNotFound as exc:
            raise ManifestReadError(ManifestError.MISSING, str(exc)) from exc
        except TransportError as exc:
            raise ManifestReadError(ManifestError.UNREACHABLE, str(exc)) from exc

        try:
            document = json.loads(raw)
        except (ValueError, TypeError) as exc:  # JSONDecodeError and UnicodeDecodeError are ValueErrors
            raise ManifestReadError(ManifestError.MALFORMED, str(exc)) from exc
        if not isinstance(document, dict):
            raise ManifestReadError(
                ManifestError.MALFORMED,
                f"expected a JSON object, got {type(document).__name__}",
            )
        return document

    def extract(self, project: Project) -> ManifestResult:
        """Return the package name declared by ``project``, or the failure reason."""
        try:
            document = self.read_manifest(project)
        except ManifestReadError as exc:
            return ManifestResult(error=exc.error, detail=exc.detail)

        name = document.get("name")
        if not isinstance(name, str) or not name.strip():
            return ManifestResult(error=ManifestError.NAME_MISSING)
        return ManifestResult(package_name=name)
