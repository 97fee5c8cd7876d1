"""Build a Satis configuration from a JSON template.

Accepted GitLab projects are registered as ``vcs`` repositories and required
with a ``*`` constraint so Satis mirrors every version.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = Path(__file__).parent / "resources" / "default-template.json"


class TemplateError(Exception):
    """The template could not be read or is not a JSON object."""


class ConfigBuilder:
    """Accumulates repositories and options into a Satis config dict."""

    def __init__(self, template_path: Optional[Union[str, Path]] = None):
        path = Path(template_path) if template_path else DEFAULT_TEMPLATE
        try:
            with open(path, encoding="utf-8") as fh:
                config = json.load(fh)
        except OSError as exc:
            raise TemplateError(f"cannot read template {path}: {exc}") from exc
        except ValueError as exc:
            raise TemplateError(f"template {path} is not valid JSON: {exc}") from exc
        if not isinstance(config, dict):
            raise TemplateError(f"template {path} must contain a JSON object")
        self.template_path = path
        self.config: Dict[str, Any] = config
        self._repositories: List[Tuple[str, str]] = []

    def get_config(self) -> Dict[str, Any]:
        return self.config

    @property
    def repositories(self) -> List[Tuple[str, str]]:
        """(package name, clone url) pairs in registration order."""
        return list(self._repositories)

    def set_homepage(self, homepage: str) -> None:
        self.config["homepage"] = homepage

    def enable_archive(self) -> None:
        self.config["archive"] = {
            "directory": "dist",
            "format": "tar",
            "skip-dev": True,
        }

    def _composer_config(self) -> Dict[str, Any]:
        return self.config.setdefault("config", {})

    def add_gitlab_domain(self, domain: str) -> None:
        """Register a GitLab domain so composer uses its gitlab-* auth."""
        domains = self._composer_config().setdefault("gitlab-domains", [])
        if domain not in domains:
            domains.append(domain)

    def add_gitlab_token(self, domain: str, token: str, unsafe_ssl: bool = False) -> None:
        composer_config = self._composer_config()
        composer_config.setdefault("gitlab-token", {})[domain] = token
        if unsafe_ssl:
            composer_config["disable-tls"] = True
            composer_config["secure-http"] = False

    def add_repository(self, name: str, url: str, unsafe_ssl: bool = False) -> None:
        repository: Dict[str, Any] = {"type": "vcs", "url": url}
        if unsafe_ssl:
            repository["options"] = {
                "ssl": {
                    "verify_peer": False,
                    "verify_peer_name": False,
                    "allow_self_signed": True,
                }
            }
        self.config.setdefault("repositories", []).append(repository)
        self.config.setdefault("require", {})[name] = "*"
        self._repositories.append((name, url))

    def to_json(self) -> str:
        return json.dumps(self.config, indent=4, ensure_ascii=False)

    def write(self, path: Union[str, Path]) -> None:
        """Serialize the configuration to ``path``.

        Raises:
            OSError: when the file cannot be written
        """
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(self.to_json())
            fh.write("\n")
        logger.debug("Wrote %d repositories to %s", len(self._repositories), path)
