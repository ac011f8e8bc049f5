"""Middleware definitions and lookups."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .extra_files import find_extra_files


class MiddlewareNotFound(LookupError):
    """Raised when no middleware matches a requested name."""


@dataclass
class Middleware:
    """A named middleware of a given type protecting some paths."""

    name: str = ""
    type: str = ""
    paths: list[str] = field(default_factory=list)
    rule: Any = None


def _text(value: Any, label: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise TypeError(f"middleware {label} must be a string")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_middleware(data: Any) -> Middleware:
    """Build a Middleware from one entry of a ``middlewares`` list."""
    if not isinstance(data, Mapping):
        raise TypeError("middleware must be a mapping")
    paths = data.get("paths") or []
    if isinstance(paths, (str, bytes)) or not isinstance(paths, Iterable):
        raise TypeError("middleware paths must be a list")
    return Middleware(
        name=_text(data.get("name"), "name"),
        type=_text(data.get("type"), "type"),
        paths=[_text(p, "path") for p in paths],
        rule=data.get("rule"),
    )


def middleware_names(middlewares: Iterable[Middleware]) -> list[str]:
    """Return the names of the middlewares, in order."""
    return [m.name for m in middlewares]


def find_middleware(rules: Sequence[str], middlewares: Iterable[Middleware]) -> Middleware:
    """Return the first middleware whose name is one of ``rules``."""
    for middleware in middlewares:
        if middleware.name in rules:
            return middleware
    raise MiddlewareNotFound(
        "middleware not found with name:  [" + ";".join(rules) + "]"
    )


def get_middleware(rule: str, middlewares: Iterable[Middleware]) -> Middleware:
    """Return the first middleware whose name occurs within ``rule``."""
    for middleware in middlewares:
        if middleware.name in rule:
            return middleware
    raise MiddlewareNotFound("no middlewares found with name " + rule)


def find_duplicate_middleware_names(middlewares: Iterable[Middleware]) -> list[str]:
    """Return each name used more than once, in the order it repeats.

    Raises ValueError when a middleware has no name.
    """
    counts: Counter[str] = Counter()
    duplicates: list[str] = []
    for middleware in middlewares:
        if not middleware.name:
            raise ValueError("name should not be empty")
        counts[middleware.name] += 1
        if counts[middleware.name] == 2:
            duplicates.append(middleware.name)
    return duplicates


def load_extra_middlewares(directory: str) -> list[Middleware]:
    """Collect the middlewares defined in the YAML files under ``directory``."""
    extra: list[Middleware] = []
    for path in find_extra_files(directory):
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(f"error loading extra file: {exc}") from exc
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"in file {path!r}: {exc}") from exc
        if not isinstance(document, Mapping):
            continue
        entries = document.get("middlewares") or []
        if not isinstance(entries, list):
            raise ValueError(f"in file {path!r}: middlewares must be a list")
        try:
            extra.extend(parse_middleware(entry) for entry in entries)
        except TypeError as exc:
            raise ValueError(f"in file {path!r}: {exc}") from exc
    if not extra:
        raise MiddlewareNotFound("no extra middleware found")
    return extra