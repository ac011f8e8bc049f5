"""Cross-origin resource sharing settings and response headers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def _canonical_key(key: str) -> str:
    """Canonical header form (``content-type`` -> ``Content-Type``)."""
    if not key or any(ch not in _TOKEN_CHARS for ch in key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


@dataclass
class Cors:
    """Allowed origins and extra headers added to every response."""

    origins: list[str] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)

    def response_headers(self, method: str, origin: str) -> tuple[dict[str, str], bool]:
        """Return the headers to set and whether the request is an answered preflight.

        When the second value is True the response is a 204 No Content and the
        request goes no further.
        """
        result = {_canonical_key(k): v for k, v in self.headers.items()}
        preflight = False
        if allowed_origin(self.origins, origin):
            result[ACCESS_CONTROL_ALLOW_ORIGIN] = origin
            preflight = method == "OPTIONS"
        return result, preflight


def allowed_origin(origins: Iterable[str], origin: str) -> bool:
    """Return True if ``origin`` is exactly one of ``origins``."""
    return any(o == origin for o in origins)


def parse_cors(data: Any) -> Cors:
    """Build a Cors from the ``cors`` section of a configuration."""
    if data is None:
        return Cors()
    if not isinstance(data, Mapping):
        raise TypeError("cors must be a mapping")
    origins = data.get("origins") or []
    if isinstance(origins, (str, bytes)) or not isinstance(origins, Iterable):
        raise TypeError("cors.origins must be a list")
    headers = data.get("headers") or {}
    if not isinstance(headers, Mapping):
        raise TypeError("cors.headers must be a mapping")
    return Cors(
        origins=[_scalar_text(o) for o in origins],
        headers={str(k): _scalar_text(v) for k, v in headers.items()},
    )