"""Loading RSA public keys used to verify signed tokens."""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import Path

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_der_public_key

_PEM_RE = re.compile(
    r"-----BEGIN (?P<type>[^\r\n]*?)-----[ \t]*\r?\n(?P<body>.*?)-----END (?P=type)-----",
    re.DOTALL,
)


class KeyLoadError(ValueError):
    """Raised when a public key cannot be read or is not an RSA key."""


def _strip_pem_headers(body: str) -> str:
    """Drop RFC 1421 style ``Key: value`` headers that precede the data."""
    lines = body.splitlines()
    if not lines or ":" not in lines[0]:
        return body
    for position, line in enumerate(lines):
        if not line.strip():
            return "\n".join(lines[position + 1:])
        if ":" not in line:
            return body
    return ""


def _decode_pem(text: str) -> tuple[str, bytes] | None:
    """Return the type and payload of the first well-formed PEM block."""
    for match in _PEM_RE.finditer(text):
        body = "".join(_strip_pem_headers(match.group("body")).split())
        try:
            payload = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            continue
        return match.group("type"), payload
    return None


def load_rsa_public_key(source: str) -> rsa.RSAPublicKey:
    """Load an RSA public key from PEM text or from a PEM file.

    ``source`` is taken as PEM content when it holds a ``-----BEGIN`` marker,
    otherwise as a file path. Both ``PUBLIC KEY`` and ``CERTIFICATE`` blocks
    are accepted.
    """
    if "-----BEGIN" in source:
        text = source
    else:
        try:
            text = Path(source).read_bytes().decode("latin-1")
        except OSError as exc:
            raise KeyLoadError(f"failed to read file: {exc}") from exc

    block = _decode_pem(text)
    if block is None:
        raise KeyLoadError("invalid PEM format")
    block_type, payload = block

    if block_type == "PUBLIC KEY":
        try:
            key = load_der_public_key(payload)
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyLoadError(f"failed to parse public key: {exc}") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise KeyLoadError("key is not an RSA public key")
        return key

    if block_type == "CERTIFICATE":
        try:
            cert = x509.load_der_x509_certificate(payload)
        except ValueError as exc:
            raise KeyLoadError(f"failed to parse certificate: {exc}") from exc
        try:
            key = cert.public_key()
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyLoadError("certificate does not contain an RSA public key") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise KeyLoadError("certificate does not contain an RSA public key")
        return key

    raise KeyLoadError(f"unsupported PEM block type: {block_type}")