"""Health checks for backend routes."""

from __future__ import annotations

import http.client
import logging
import ssl
import urllib.error
import urllib.request
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

USER_AGENT = "goma-gateway"
HEALTHY = "healthy"
UNHEALTHY = "unhealthy"
HIDDEN_ERROR = "Route healthcheck errors disabled"


class HealthCheckError(Exception):
    """Raised when a backend does not pass its health check."""


def validate_status_code(status_code: int, healthy_statuses: Sequence[int] = ()) -> None:
    """Raise HealthCheckError unless ``status_code`` counts as healthy.

    With ``healthy_statuses`` given, only those codes are healthy; otherwise
    any code below 400 is.
    """
    if healthy_statuses:
        healthy = status_code in healthy_statuses
    else:
        healthy = status_code < 400
    if not healthy:
        raise HealthCheckError(f"health check failed with status code {status_code}")


@dataclass
class HealthResult:
    """Outcome of one route's health check."""

    name: str
    status: str
    error: str = ""

    @property
    def healthy(self) -> bool:
        return self.status == HEALTHY


@dataclass
class HealthCheck:
    """A GET request whose response status tells whether a backend is up."""

    name: str
    url: str
    timeout: float | None = None
    interval: str = ""
    healthy_statuses: list[int] = field(default_factory=list)
    insecure_skip_verify: bool = False

    def _opener(self) -> urllib.request.OpenerDirector:
        context = ssl.create_default_context()
        if self.insecure_skip_verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return urllib.request.build_opener(urllib.request.HTTPSHandler(context=context))

    def _status(self) -> int:
        """Perform the request and return the response status code."""
        try:
            parts = urlsplit(self.url)
        except ValueError as exc:
            raise HealthCheckError(f"error parsing HealthCheck URL: {exc}") from exc
        try:
            request = urllib.request.Request(
                self.url, method="GET", headers={"User-Agent": USER_AGENT}
            )
        except ValueError as exc:
            raise HealthCheckError(
                f"error creating HealthCheck request for route {self.name}: {exc}"
            ) from exc
        if parts.scheme.lower() not in ("http", "https"):
            raise HealthCheckError(
                f'error performing HealthCheck request: unsupported protocol scheme "{parts.scheme}"'
            )
        timeout = self.timeout if self.timeout else None
        try:
            with self._opener().open(request, timeout=timeout) as response:
                return response.status
        except urllib.error.HTTPError as exc:
            exc.close()
            return exc.code
        except (OSError, http.client.HTTPException, ValueError) as exc:
            logger.debug("Error performing HealthCheck request for route %s: %s", self.name, exc)
            raise HealthCheckError(f"error performing HealthCheck request: {exc}") from exc

    def check(self) -> None:
        """Run the check once; raise HealthCheckError if the backend is unhealthy."""
        status = self._status()
        try:
            validate_status_code(status, self.healthy_statuses)
        except HealthCheckError as exc:
            logger.debug("Health check failed for route %s: %s", self.name, exc)
            raise


def _run(check: HealthCheck, hide_errors: bool) -> HealthResult:
    try:
        check.check()
    except HealthCheckError as exc:
        error = HIDDEN_ERROR if hide_errors else f"Error: {exc}"
        return HealthResult(name=check.name, status=UNHEALTHY, error=error)
    logger.debug("Route %s is healthy", check.name)
    return HealthResult(name=check.name, status=HEALTHY)


def check_all(checks: Iterable[HealthCheck], hide_errors: bool = False) -> list[HealthResult]:
    """Run all checks concurrently; results follow the order of ``checks``.

    With ``hide_errors`` the reason for a failure is replaced by a fixed notice.
    """
    items = list(checks)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=len(items)) as pool:
        return list(pool.map(lambda c: _run(c, hide_errors), items))