"""Shared HTTP helpers used by the repository client.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks. Connection-level failures are retried a few
times; HTTP status codes are returned untouched for the caller to interpret.
"""
from __future__ import annotations

import logging
import time
from typing import Any

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from repository.errors import TransportError

logger = logging.getLogger(__name__)


def _request(method: str, url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Send a request, retrying on timeouts and connection errors."""
    safe_target = safe_url(url)
    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * attempt)
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action=method,
                        target=safe_target,
                        context=context,
                        attempt=attempt + 1,
                    )
                )
            try:
                res = requests.request(method, url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
            except requests.exceptions.SSLError as exc:
                # certificate problems do not go away on retry
                raise TransportError(f"{context} TLS error: {exc}", url=safe_target) from exc
            except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema,
                    requests.exceptions.InvalidSchema) as exc:
                raise TransportError(f"{context} invalid URL: {exc}", url=safe_target) from exc
            except requests.Timeout as exc:
                last_exception = exc
                logger.debug("%s request timed out (attempt %d)", context, attempt + 1)
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = exc
                logger.debug("%s connection error (attempt %d): %s", context, attempt + 1, exc)
                continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=method,
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                )
            )
        return res

    raise TransportError(
        f"{context} request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}",
        url=safe_target,
    )


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Raises:
        TransportError: when no response could be obtained.
    """
    return _request("GET", url, context=context, **kwargs)


def safe_head(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a HEAD request with consistent error handling and DEBUG traces.

    Raises:
        TransportError: when no response could be obtained.
    """
    return _request("HEAD", url, context=context, **kwargs)
