"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from langselect.common.constants import SELECTORS_FILENAME
from langselect.common.errors import ConfigError
from langselect.common.fs import read_yaml
from langselect.common.models import Selector
from langselect.common.schema import parse_selector, validate_selectors_config


@dataclass(frozen=True)
class SelectorBundle:
    version: str
    selectors: dict[str, Selector]


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_selector_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> SelectorBundle:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / SELECTORS_FILENAME
    cfg = validate_selectors_config(
        _load_yaml_with_overlay(config_dir / SELECTORS_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )
    selectors = {
        name: parse_selector(value, f"selectors.{name}", allow_unknown=allow_unknown)
        for name, value in cfg["selectors"].items()
    }
    return SelectorBundle(version=str(cfg["version"]), selectors=selectors)


def resolve_selector_names(bundle: SelectorBundle, only: list[str] | None) -> list[str]:
    if not only:
        return list(bundle.selectors)
    unknown = [name for name in only if name not in bundle.selectors]
    if unknown:
        raise ConfigError(f"Unknown selectors: {', '.join(unknown)}")
    return list(only)
