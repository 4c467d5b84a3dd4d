"""Score how specifically a selector applies to a candidate document.

Scores are 0 (no match), 5 (wildcard match) or 10 (exact match). Callers
rank providers by comparing scores; a 10 cannot be beaten.
"""

from __future__ import annotations

import dataclasses

from langselect.common.constants import SCORE_EXACT, SCORE_NONE, SCORE_WILDCARD, WILDCARD
from langselect.common.models import Candidate, DocumentUri, LanguageFilter, RelativePattern, Selector
from langselect.common.paths import normalize_path
from langselect.glob import match as match_glob


def _normalize_pattern(pattern: str | RelativePattern) -> str | RelativePattern:
    if isinstance(pattern, str):
        return pattern
    # fs_path uses platform separators, so the base must too.
    return dataclasses.replace(pattern, base=normalize_path(pattern.base))


def _score_language_id(selector: str, candidate_language: str, candidate_is_synchronized: bool) -> int:
    # 'foo' is shorthand for {language: 'foo'} restricted to live documents.
    if not candidate_is_synchronized:
        return SCORE_NONE
    if selector == WILDCARD:
        return SCORE_WILDCARD
    if selector == candidate_language:
        return SCORE_EXACT
    return SCORE_NONE


def _score_filter(
    selector: LanguageFilter,
    candidate_uri: DocumentUri,
    candidate_language: str,
    candidate_is_synchronized: bool,
) -> int:
    if not candidate_is_synchronized and not selector.applies_when_not_synchronized:
        return SCORE_NONE

    ret = SCORE_NONE

    if selector.scheme:
        if selector.scheme == candidate_uri.scheme:
            ret = SCORE_EXACT
        elif selector.scheme == WILDCARD:
            ret = SCORE_WILDCARD
        else:
            return SCORE_NONE

    if selector.language:
        if selector.language == candidate_language:
            ret = SCORE_EXACT
        elif selector.language == WILDCARD:
            ret = max(ret, SCORE_WILDCARD)
        else:
            return SCORE_NONE

    if selector.pattern:
        pattern = _normalize_pattern(selector.pattern)
        fs_path = candidate_uri.fs_path
        if pattern == fs_path or match_glob(pattern, fs_path):
            ret = SCORE_EXACT
        else:
            return SCORE_NONE

    return ret


def score(
    selector: Selector | None,
    candidate_uri: DocumentUri,
    candidate_language: str,
    candidate_is_synchronized: bool,
) -> int:
    """Return 0, 5 or 10 for how well ``selector`` applies to the candidate.

    A collection scores the maximum of its elements and stops early at 10.
    A bare string is a language id (or ``*``) that only matches synchronized
    candidates. A :class:`LanguageFilter` is checked scheme first, then
    language, then pattern; any field that fails vetoes the whole filter.
    """
    if isinstance(selector, LanguageFilter):
        return _score_filter(selector, candidate_uri, candidate_language, candidate_is_synchronized)
    if isinstance(selector, str):
        return _score_language_id(selector, candidate_language, candidate_is_synchronized)
    if not isinstance(selector, (list, tuple)):
        return SCORE_NONE

    ret = SCORE_NONE
    for item in selector:
        value = score(item, candidate_uri, candidate_language, candidate_is_synchronized)
        if value == SCORE_EXACT:
            return value
        if value > ret:
            ret = value
    return ret


def score_candidate(selector: Selector | None, candidate: Candidate) -> int:
    return score(selector, candidate.uri, candidate.language_id, candidate.is_synchronized)
