"""Platform path helpers for pattern bases and document paths."""

from __future__ import annotations

import os
import re

_DRIVE_PATH_RE = re.compile(r"^/[A-Za-z]:")


def normalize_path(path: str) -> str:
    if not path:
        return path
    return os.path.normpath(path)


def uri_path_to_fs_path(scheme: str, authority: str, path: str) -> str:
    if authority and len(path) > 1 and scheme == "file":
        value = f"//{authority}{path}"
    elif _DRIVE_PATH_RE.match(path):
        value = path[1].lower() + path[2:]
    else:
        value = path
    if os.sep != "/":
        value = value.replace("/", os.sep)
    return value
