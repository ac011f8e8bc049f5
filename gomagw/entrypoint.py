"""Listening addresses for the plain and TLS entry points."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .netutil import validate_entrypoint


@dataclass
class EntryPointAddress:
    """A single listening address such as ``:8080``."""

    address: str = ""


@dataclass
class EntryPoint:
    """The ``web`` and ``webSecure`` entry points of the gateway."""

    web: EntryPointAddress = field(default_factory=EntryPointAddress)
    web_secure: EntryPointAddress = field(default_factory=EntryPointAddress)

    def resolve(self, web_default: str, web_secure_default: str) -> tuple[str, str]:
        """Return ``(web, web_secure)``, keeping a default where the address is empty or invalid."""
        web = web_default
        if self.web.address and validate_entrypoint(self.web.address):
            web = self.web.address
        web_secure = web_secure_default
        if self.web_secure.address and validate_entrypoint(self.web_secure.address):
            web_secure = self.web_secure.address
        return web, web_secure


def _parse_address(data: Any, key: str) -> EntryPointAddress:
    if data is None:
        return EntryPointAddress()
    if not isinstance(data, Mapping):
        raise TypeError(f"entryPoints.{key} must be a mapping")
    address = data.get("address") or ""
    if not isinstance(address, str):
        raise TypeError(f"entryPoints.{key}.address must be a string")
    return EntryPointAddress(address=address)


def parse_entrypoint(data: Any) -> EntryPoint:
    """Build an EntryPoint from the ``entryPoints`` section of a configuration."""
    if data is None:
        return EntryPoint()
    if not isinstance(data, Mapping):
        raise TypeError("entryPoints must be a mapping")
    return EntryPoint(
        web=_parse_address(data.get("web"), "web"),
        web_secure=_parse_address(data.get("webSecure"), "webSecure"),
    )