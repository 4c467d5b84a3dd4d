"""Glob matching for selector path patterns.

Supported syntax:

- ``*`` matches any run of characters inside one path segment
- ``?`` matches a single character inside one path segment
- ``**`` matches any number of segments, including none
- ``{a,b}`` matches either alternative (no nesting)
- ``[abc]``, ``[a-z]`` and ``[!abc]`` match character ranges

Both ``/`` and ``\\`` separate segments, so a backslash is never an escape.
"""

from __future__ import annotations

import re
from functools import lru_cache

from langselect.common.models import RelativePattern

_SEP = r"[/\\]"
_NOT_SEP = r"[^/\\]"
_SEPARATORS = "/\\"


def _translate(pattern: str) -> str:
    out: list[str] = []
    in_braces = False
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] in _SEPARATORS:
                    i += 1
                    out.append(f"(?:.*{_SEP})?")
                elif i == n and out and out[-1] == _SEP:
                    # Trailing sep-globstar also matches the folder itself.
                    out[-1] = f"(?:{_SEP}.*)?"
                else:
                    out.append(".*")
                continue
            out.append(f"{_NOT_SEP}*")
        elif c == "?":
            out.append(_NOT_SEP)
        elif c in _SEPARATORS:
            out.append(_SEP)
        elif c == "{" and not in_braces:
            in_braces = True
            out.append("(?:")
        elif c == "}" and in_braces:
            in_braces = False
            out.append(")")
        elif c == "," and in_braces:
            out.append("|")
        elif c == "[":
            end = pattern.find("]", i + 2)
            body = pattern[i + 1 : end] if end != -1 else ""
            if end == -1 or body in ("!", "^"):
                out.append(re.escape(c))
            else:
                negate = body[0] in "!^"
                if negate:
                    body = body[1:]
                body = body.replace("\\", "\\\\")
                out.append(f"[{'^' if negate else ''}{body}]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    if in_braces:
        # Unbalanced brace: treat the whole pattern literally.
        return re.escape(pattern)
    return "".join(out)


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> re.Pattern[str]:
    return re.compile(_translate(pattern), re.DOTALL)


def _strip_base(base: str, path: str) -> str | None:
    base = base.replace("\\", "/").rstrip("/")
    path = path.replace("\\", "/")
    prefix = f"{base}/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix) :]


def match(pattern: str | RelativePattern, path: str) -> bool:
    if not pattern or not path:
        return False
    if isinstance(pattern, RelativePattern):
        if not pattern.pattern:
            return False
        relative = _strip_base(pattern.base, path)
        if not relative:
            return False
        return compile_glob(pattern.pattern).fullmatch(relative) is not None
    return compile_glob(pattern).fullmatch(path) is not None
