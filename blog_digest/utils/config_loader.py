from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..processors.noise import NoiseFilter
from ..processors.translate import URDU_DICTIONARY, freeze_dictionary
from .pipeline_config import DEFAULT_NOISE_PATTERNS, ExtractionSettings, FetchSettings, SummarySettings


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""


DEFAULT_CONFIG_PATH = Path("config/digest.yaml")


@dataclass(frozen=True, slots=True)
class DigestConfig:
    """Process-wide, read-only pipeline configuration.

    Loaded once at startup and shared by every request.
    """

    fetch: FetchSettings = field(default_factory=FetchSettings)
    extraction: ExtractionSettings = field(default_factory=ExtractionSettings)
    summary: SummarySettings = field(default_factory=SummarySettings)
    noise: NoiseFilter = field(default_factory=NoiseFilter)
    dictionary: Mapping[str, str] = field(default_factory=lambda: URDU_DICTIONARY)


def _require_mapping(data: Any, section: str) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"'{section}' must be a mapping")
    return data


def _positive_int(section: Dict[str, Any], key: str, default: int, *, allow_zero: bool = False) -> int:
    if key not in section or section[key] is None:
        return default
    value = section[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got: {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        raise ConfigError(f"'{key}' must be {'>= 0' if allow_zero else '> 0'}, got: {value}")
    return value


def _string_list(section: Dict[str, Any], key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if key not in section or section[key] is None:
        return default
    values = section[key]
    if not isinstance(values, list) or not all(isinstance(v, str) and v.strip() for v in values):
        raise ConfigError(f"'{key}' must be a list of non-empty strings if provided")
    return tuple(v.strip() for v in values)


def _string_mapping(section: Dict[str, Any], key: str) -> Dict[str, str]:
    values = section.get(key) or {}
    if not isinstance(values, dict):
        raise ConfigError(f"'{key}' must be a mapping of strings to strings if provided")
    out: Dict[str, str] = {}
    for k, v in values.items():
        # YAML 1.1 reads bare on/off/yes/no as booleans
        if isinstance(k, bool) or isinstance(v, bool):
            raise ConfigError(f"'{key}' has a boolean entry {k!r} -> {v!r}; quote words like 'on' or 'no'")
        if not isinstance(k, (str, int, float)) or not isinstance(v, (str, int, float)):
            raise ConfigError(f"'{key}' must map strings to strings, got: {k!r} -> {v!r}")
        k_str = str(k)
        v_str = str(v)
        if not k_str.strip() or not v_str.strip():
            raise ConfigError(f"'{key}' entries must be non-empty, got: {k!r} -> {v!r}")
        out[k_str.strip()] = v_str
    return out


def _build_fetch(section: Dict[str, Any]) -> FetchSettings:
    defaults = FetchSettings()
    timeout = section.get("timeout_seconds", defaults.timeout_seconds)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"'timeout_seconds' must be a positive number, got: {timeout!r}")
    return FetchSettings(
        timeout_seconds=float(timeout),
        max_redirects=_positive_int(section, "max_redirects", defaults.max_redirects, allow_zero=True),
        max_response_bytes=_positive_int(section, "max_response_bytes", defaults.max_response_bytes),
        extra_headers=MappingProxyType(_string_mapping(section, "headers")),
    )


def _build_extraction(section: Dict[str, Any]) -> ExtractionSettings:
    defaults = ExtractionSettings()
    fallback_title = section.get("fallback_title", defaults.fallback_title)
    if not isinstance(fallback_title, str) or not fallback_title.strip():
        raise ConfigError("'fallback_title' must be a non-empty string")
    return ExtractionSettings(
        min_content_chars=_positive_int(section, "min_content_chars", defaults.min_content_chars, allow_zero=True),
        max_title_chars=_positive_int(section, "max_title_chars", defaults.max_title_chars),
        max_content_chars=_positive_int(section, "max_content_chars", defaults.max_content_chars),
        fallback_title=fallback_title.strip(),
        content_selectors=_string_list(section, "content_selectors", defaults.content_selectors),
        noise_selectors=_string_list(section, "noise_selectors", defaults.noise_selectors),
    )


def _build_noise(section: Dict[str, Any]) -> NoiseFilter:
    patterns = _string_list(section, "noise_patterns", DEFAULT_NOISE_PATTERNS)
    extra = _string_list(section, "extra_noise_patterns", ())
    for pattern in patterns + extra:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid noise pattern {pattern!r}: {exc}") from exc
    return NoiseFilter(patterns + extra)


def _build_summary(section: Dict[str, Any]) -> SummarySettings:
    defaults = SummarySettings()
    return SummarySettings(
        max_sentences=_positive_int(section, "max_sentences", defaults.max_sentences),
        min_sentence_chars=_positive_int(section, "min_sentence_chars", defaults.min_sentence_chars, allow_zero=True),
    )


def _build_dictionary(section: Dict[str, Any]) -> Mapping[str, str]:
    use_default = section.get("use_default_dictionary", True)
    if not isinstance(use_default, bool):
        raise ConfigError("'use_default_dictionary' must be a boolean")
    entries = dict(URDU_DICTIONARY) if use_default else {}
    entries.update({k.lower(): v for k, v in _string_mapping(section, "dictionary").items()})
    return freeze_dictionary(entries)


def build_config(data: Optional[Mapping[str, Any]]) -> DigestConfig:
    """Validate a parsed configuration mapping and build ``DigestConfig``.

    Sections: ``fetch``, ``extraction``, ``summary``, ``translation``.
    Unknown top-level keys are ignored for forward compatibility.
    """
    data = _require_mapping(data, "config")
    extraction = _require_mapping(data.get("extraction"), "extraction")
    return DigestConfig(
        fetch=_build_fetch(_require_mapping(data.get("fetch"), "fetch")),
        extraction=_build_extraction(extraction),
        summary=_build_summary(_require_mapping(data.get("summary"), "summary")),
        noise=_build_noise(extraction),
        dictionary=_build_dictionary(_require_mapping(data.get("translation"), "translation")),
    )


def load_config(path: Path | str | None = None, *, required: bool = False) -> DigestConfig:
    """Load ``digest.yaml`` into a ``DigestConfig``.

    A missing file yields the built-in defaults unless ``required`` is set.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if required:
            raise ConfigError(f"Config file not found: {config_path}")
        return DigestConfig()

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
    return build_config(data)
