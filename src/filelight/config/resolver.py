"""Layer configuration sources and map settings to environment variables.

Sources are applied in increasing priority: model defaults, the YAML file,
``FILELIGHT__SECTION__KEY`` environment variables, then CLI overrides. Every
layer may use nested mappings or dotted keys (``{"browser.root": "/srv"}``).
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Iterator, List, Mapping, Tuple

import yaml
from pydantic import ValidationError

from .errors import ConfigError, ConfigValidationError
from .models import FileLightConfig

ENV_PREFIX = "FILELIGHT__"
ENV_SEPARATOR = "__"


def resolve_with_precedence(
    *,
    defaults: FileLightConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> FileLightConfig:
    """Overlay each configuration layer on ``defaults`` and validate the result.

    Args:
        defaults: Baseline configuration.
        file_overrides: Values read from the configuration file.
        env_overrides: Values already extracted from the environment.
        cli_overrides: Values supplied on the command line.

    Returns:
        FileLightConfig: The validated effective configuration.

    Raises:
        ConfigError: If a layer is not a mapping or its keys conflict.
        ConfigValidationError: If the merged values fail validation.
    """
    merged: dict[str, Any] = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for source_name, layer in layers:
        if layer is not None:
            merged = _overlay(merged, _expand(layer, source_name))

    try:
        return FileLightConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(_describe_issues(exc)) from exc


def parse_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``FILELIGHT__SECTION__KEY`` variables into nested overrides.

    Values are parsed as YAML so ``true``, ``42`` and ``[a, b]`` keep their
    types; text that is not valid YAML is kept verbatim. Variables with an
    empty path segment are ignored.

    Args:
        env: Environment mapping, usually ``os.environ``.

    Returns:
        dict[str, Any]: Nested overrides keyed by lower-cased section and field.
    """
    overrides: dict[str, Any] = {}
    for name, raw_value in env.items():
        if not name.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in name[len(ENV_PREFIX) :].split(ENV_SEPARATOR)]
        if not all(path):
            continue
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        _set_path(overrides, path, value, source_name="environment")
    return overrides


def flatten_for_env(config: FileLightConfig) -> Dict[str, str]:
    """Render every leaf setting as the environment variable that overrides it."""
    flat: Dict[str, str] = {}
    for path, value in _leaves(config.model_dump(mode="python")):
        name = ENV_PREFIX + ENV_SEPARATOR.join(segment.upper() for segment in path)
        if isinstance(value, list):
            flat[name] = yaml.safe_dump(value, default_flow_style=True).strip()
        else:
            flat[name] = "null" if value is None else str(value)
    return flat


def _leaves(
    data: Mapping[str, Any], prefix: Tuple[str, ...] = ()
) -> Iterator[Tuple[Tuple[str, ...], Any]]:
    for key, value in data.items():
        path = (*prefix, str(key))
        if isinstance(value, MappingABC):
            yield from _leaves(value, path)
        else:
            yield path, value


def _expand(layer: Mapping[str, Any], source_name: str) -> dict[str, Any]:
    """Return ``layer`` with dotted keys turned into nested mappings."""
    if not isinstance(layer, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in layer.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = _expand(value, source_name)
        _set_path(expanded, key.split("."), value, source_name=source_name)
    return expanded


def _set_path(target: dict[str, Any], path: List[str], value: Any, *, source_name: str) -> None:
    node = target
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(
                f"{source_name.capitalize()} override for {'.'.join(path)} "
                "conflicts with existing value."
            )
        node = child

    leaf = path[-1]
    existing = node.get(leaf)
    if isinstance(value, dict) and isinstance(existing, dict):
        node[leaf] = _overlay(existing, value)
    else:
        node[leaf] = value


def _overlay(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``overrides`` applied recursively, leaving both untouched."""
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, dict):
            merged[key] = _overlay(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _describe_issues(exc: ValidationError) -> List[str]:
    issues = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        issues.append(f"{location}: {error['msg']}")
    return issues


__all__ = [
    "ENV_PREFIX",
    "flatten_for_env",
    "parse_env_overrides",
    "resolve_with_precedence",
]
