"""Discovery of additional YAML configuration files."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator

_YAML_EXTENSIONS = (".yaml", ".yml")


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _walk(path: str, info: os.stat_result) -> Iterator[str]:
    name = os.path.basename(os.path.normpath(path))
    if stat.S_ISDIR(info.st_mode):
        if name.startswith("."):
            return
        for entry_name in sorted(os.listdir(path)):
            child = os.path.join(path, entry_name)
            yield from _walk(child, os.lstat(child))
    elif _extension(name) in _YAML_EXTENSIONS:
        yield path


def find_extra_files(directory: str) -> list[str]:
    """Return the ``.yaml`` and ``.yml`` files under ``directory`` in lexical order.

    Directories whose name starts with a dot are skipped, the starting
    directory included. Symbolic links are not followed.
    """
    try:
        return list(_walk(directory, os.lstat(directory)))
    except OSError as exc:
        raise OSError(f"error loading extra config files: {exc}") from exc