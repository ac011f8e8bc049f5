"""Address validation and request inspection helpers."""

from __future__ import annotations

import ipaddress
import logging
import re
from collections.abc import Mapping

logger = logging.getLogger(__name__)

_PORT_RE = re.compile(r"[+-]?[0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")


def _parse_ip(value: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    """Parse a plain IPv4 or IPv6 address, rejecting zones and surrounding text."""
    if not value or "%" in value or value.strip() != value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def validate_ip_address(ip: str) -> bool:
    """Return True if ``ip`` is a valid IPv4 or IPv6 address."""
    return _parse_ip(ip) is not None


def validate_cidr(cidr: str) -> bool:
    """Return True if ``cidr`` is an address followed by a prefix length."""
    address, sep, prefix = cidr.rpartition("/")
    if not sep:
        return False
    ip = _parse_ip(address)
    if ip is None or not _DIGITS_RE.fullmatch(prefix):
        return False
    return int(prefix) <= ip.max_prefixlen


def is_ip_or_cidr(value: str) -> tuple[bool, bool]:
    """Classify ``value``; returns ``(is_ip, is_cidr)``, at most one True."""
    if validate_ip_address(value):
        return True, False
    if validate_cidr(value):
        return False, True
    return False, False


def _split_host_port(hostport: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port``; raises ValueError when malformed."""
    colon = hostport.rfind(":")
    if colon < 0:
        raise ValueError(f"address {hostport}: missing port in address")
    start, end_search = 0, 0
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"address {hostport}: missing ']' in address")
        after = end + 1
        if after == len(hostport):
            raise ValueError(f"address {hostport}: missing port in address")
        if after != colon:
            if hostport[after] == ":":
                raise ValueError(f"address {hostport}: too many colons in address")
            raise ValueError(f"address {hostport}: missing port in address")
        host = hostport[1:end]
        start, end_search = 1, after
    else:
        host = hostport[:colon]
        if ":" in host:
            raise ValueError(f"address {hostport}: too many colons in address")
    if "[" in hostport[start:]:
        raise ValueError(f"address {hostport}: unexpected '[' in address")
    if "]" in hostport[end_search:]:
        raise ValueError(f"address {hostport}: unexpected ']' in address")
    return host, hostport[colon + 1:]


def validate_entrypoint(entrypoint: str) -> bool:
    """Return True for ``:<port>`` or ``<ip>:<port>`` with a port in 1-65535."""
    try:
        host, port_text = _split_host_port(entrypoint)
    except ValueError as exc:
        logger.error("Error validating entrypoint address: %s", exc)
        return False
    if host and not validate_ip_address(host):
        logger.error("Error validating entrypoint address: invalid IP address: %s", host)
        return False
    if not _PORT_RE.fullmatch(port_text):
        logger.error("Error validating entrypoint address: invalid port: %r", port_text)
        return False
    port = int(port_text)
    if not 1 <= port <= 65535:
        logger.error("Error validating entrypoint address: invalid port: %d", port)
        return False
    return True


def _header(headers: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup; missing headers read as ''."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def real_ip(headers: Mapping[str, str], remote_addr: str) -> str:
    """Return the client address from proxy headers or the remote address."""
    forwarded = _header(headers, "X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real = _header(headers, "X-Real-IP")
    if real:
        return real.strip()
    try:
        host, _ = _split_host_port(remote_addr)
    except ValueError:
        return remote_addr
    return host


def request_scheme(headers: Mapping[str, str], tls: bool) -> str:
    """Return the scheme the client used: the forwarded one, https or http."""
    proto = _header(headers, "X-Forwarded-Proto")
    if proto:
        return proto.lower()
    return "https" if tls else "http"


def is_websocket_request(headers: Mapping[str, str]) -> bool:
    """Return True if the headers ask for a WebSocket upgrade."""
    return (
        _header(headers, "Upgrade") == "websocket"
        and _header(headers, "Connection") == "Upgrade"
    )