"""Strict schemas for selector config validation and parsing."""

from __future__ import annotations

from langselect.common.errors import ConfigError
from langselect.common.models import LanguageFilter, RelativePattern, Selector, SelectorItem

FILTER_KEYS = {
    "language",
    "scheme",
    "pattern",
    "appliesWhenNotSynchronized",
    "hasAccessToAllModels",
    "exclusive",
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _optional_str(obj: dict, key: str, ctx: str) -> str | None:
    value = obj.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{ctx}.{key} must be a string")
    return value


def _optional_bool(obj: dict, key: str, ctx: str) -> bool:
    value = obj.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{ctx}.{key} must be a boolean")
    return value


def parse_pattern(value, ctx: str) -> str | RelativePattern | None:
    if value is None or isinstance(value, str):
        return value
    if not isinstance(value, dict):
        raise ConfigError(f"{ctx} must be a string or a mapping with base and pattern")
    _assert_required_keys(value, {"base", "pattern"}, ctx)
    _assert_no_unknown_keys(value, {"base", "pattern"}, ctx, allow_unknown=False)
    for key in ("base", "pattern"):
        if not isinstance(value[key], str) or not value[key]:
            raise ConfigError(f"{ctx}.{key} must be a non-empty string")
    return RelativePattern(base=value["base"], pattern=value["pattern"])


def parse_filter(obj: dict, ctx: str, *, allow_unknown: bool = False) -> LanguageFilter:
    _assert_no_unknown_keys(obj, FILTER_KEYS, ctx, allow_unknown)
    applies_when_not_synchronized = _optional_bool(obj, "appliesWhenNotSynchronized", ctx)
    has_access_to_all_models = _optional_bool(obj, "hasAccessToAllModels", ctx)
    return LanguageFilter(
        language=_optional_str(obj, "language", ctx),
        scheme=_optional_str(obj, "scheme", ctx),
        pattern=parse_pattern(obj.get("pattern"), f"{ctx}.pattern"),
        applies_when_not_synchronized=applies_when_not_synchronized or has_access_to_all_models,
        exclusive=_optional_bool(obj, "exclusive", ctx),
    )


def _parse_item(value, ctx: str, allow_unknown: bool) -> SelectorItem:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return parse_filter(value, ctx, allow_unknown=allow_unknown)
    raise ConfigError(f"{ctx} must be a language id or a filter mapping")


def parse_selector(value, ctx: str = "selector", *, allow_unknown: bool = False) -> Selector:
    if isinstance(value, list):
        return tuple(_parse_item(item, f"{ctx}[{idx}]", allow_unknown) for idx, item in enumerate(value))
    return _parse_item(value, ctx, allow_unknown)


def validate_selectors_config(cfg, *, allow_unknown: bool = False) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("selectors config must be a mapping")
    _assert_required_keys(cfg, {"version", "selectors"}, "selectors config")
    _assert_no_unknown_keys(cfg, {"version", "selectors"}, "selectors config", allow_unknown)
    if not isinstance(cfg["selectors"], dict) or not cfg["selectors"]:
        raise ConfigError("selectors config.selectors must be a non-empty mapping")
    for name in cfg["selectors"]:
        if not isinstance(name, str):
            raise ConfigError(f"Selector names must be strings, got {name!r}")
    return cfg
