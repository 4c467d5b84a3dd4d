"""Data models for selectors and candidate documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union
from urllib.parse import quote, unquote, urlsplit

from langselect.common.errors import CandidateError
from langselect.common.paths import uri_path_to_fs_path


@dataclass(frozen=True)
class DocumentUri:
    scheme: str
    path: str
    authority: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, text: str) -> "DocumentUri":
        try:
            parts = urlsplit(text)
        except ValueError as exc:
            raise CandidateError(f"Malformed URI {text!r}: {exc}") from exc
        if not parts.scheme:
            raise CandidateError(f"URI has no scheme: {text!r}")
        return cls(
            scheme=parts.scheme,
            path=unquote(parts.path),
            authority=parts.netloc,
            query=parts.query,
            fragment=parts.fragment,
        )

    @classmethod
    def file(cls, path: str) -> "DocumentUri":
        path = path.replace("\\", "/")
        authority = ""
        # UNC share: //server/share/...
        if path.startswith("//"):
            authority, _, rest = path[2:].partition("/")
            path = "/" + rest
        elif not path.startswith("/"):
            path = "/" + path
        return cls(scheme="file", path=path, authority=authority)

    @property
    def fs_path(self) -> str:
        return uri_path_to_fs_path(self.scheme, self.authority, self.path)

    def __str__(self) -> str:
        text = f"{self.scheme}:"
        if self.authority or self.scheme == "file":
            text += f"//{self.authority}"
        text += quote(self.path)
        if self.query:
            text += f"?{self.query}"
        if self.fragment:
            text += f"#{self.fragment}"
        return text


@dataclass(frozen=True)
class Candidate:
    uri: DocumentUri
    language_id: str
    is_synchronized: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "uri": str(self.uri),
            "scheme": self.uri.scheme,
            "fs_path": self.uri.fs_path,
            "language_id": self.language_id,
            "is_synchronized": self.is_synchronized,
        }


@dataclass(frozen=True)
class RelativePattern:
    """A glob anchored at a base folder."""

    base: str
    pattern: str


@dataclass(frozen=True)
class LanguageFilter:
    language: str | None = None
    scheme: str | None = None
    pattern: str | RelativePattern | None = None
    # Lets the filter match documents whose live state is not loaded.
    applies_when_not_synchronized: bool = False
    # Advisory; read by whoever dispatches to providers, never by scoring.
    exclusive: bool = False


SelectorItem = Union[str, LanguageFilter]
Selector = Union[SelectorItem, Sequence[SelectorItem]]
