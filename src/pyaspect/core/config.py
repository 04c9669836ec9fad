# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Engine configuration: YAML/TOML files, env overrides and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10

_PREFIX_ATTR = "__pyaspect_config_prefix__"

_COERCIONS: dict[Any, Callable[[str], Any]] = {
    int: int,
    float: float,
    bool: lambda raw: raw.lower() in ("true", "1", "yes"),
}


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to the settings under *prefix*.

    Usage:
        @config_properties(prefix="pyaspect.weaving")
        @dataclass
        class WeavingProperties:
            include_private: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable that overrides *key*.

    >>> env_key("pyaspect.weaving.include-private")
    'PYASPECT_WEAVING_INCLUDE_PRIVATE'
    """
    return "PYASPECT_" + re.sub(r"[.-]", "_", key.removeprefix("pyaspect.")).upper()


def _read(source: Any) -> dict[str, Any]:
    if source.name.endswith(".toml"):
        with source.open("rb") as f:
            return tomllib.load(f)
    with source.open() as f:
        return yaml.safe_load(f) or {}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            value = _merge(merged[key], value)
        merged[key] = value
    return merged


class Config:
    """Nested settings read with dotted keys.

    Lookup order for :meth:`get` (first hit wins):
    1. Environment variable named by :func:`env_key`
    2. The nested data, from a dict or from :meth:`from_file`
    3. The caller's default
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Build a config from the packaged defaults, *path* and its profiles.

        Later layers win: ``pyaspect-defaults.yaml``, then *path* (YAML or
        TOML, skipped when missing), then ``{stem}-{profile}{suffix}`` for
        each active profile.
        """
        path = Path(path)
        layers: list[Any] = []
        if load_defaults:
            layers.append(importlib.resources.files("pyaspect.resources").joinpath("pyaspect-defaults.yaml"))
        if path.exists():
            layers.append(path)
            for profile in active_profiles or []:
                overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
                if overlay.exists():
                    layers.append(overlay)

        data: dict[str, Any] = {}
        for layer in layers:
            data = _merge(data, _read(layer))
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at dotted *key*.

        ``${NAME}``, ``${other.key}`` and ``${key:fallback}`` placeholders in
        string values are expanded, environment first.
        """
        override = os.environ.get(env_key(key))
        if override is not None:
            return override

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._expand(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping at *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its section.

        Each field is read as ``kebab-case`` first, then ``snake_case``.
        String values (typically env overrides) are coerced for ``int``,
        ``float`` and ``bool`` fields.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")
        if not dataclasses.is_dataclass(config_cls):
            raise ValueError(f"{config_cls.__name__} must be a dataclass to be bound")

        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):
            value = self.get(f"{prefix}.{field.name.replace('_', '-')}")
            if value is None:
                value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            coerce = _COERCIONS.get(hints.get(field.name))
            if coerce is not None and isinstance(value, str):
                value = coerce(value)
            values[field.name] = value
        return config_cls(**values)  # type: ignore[return-value]

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node

    def _expand(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def substitute(match: re.Match[str]) -> str:
            ref, _, fallback = match.group(1).partition(":")
            from_env = os.environ.get(ref)
            if from_env is not None:
                return from_env
            found = self._lookup(ref)
            if found is not None:
                text = str(found)
                return self._expand(text, depth + 1) if "${" in text else text
            if match.group(1) != ref:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{ref}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)
