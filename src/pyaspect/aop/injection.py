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
"""Query-based member selection across a namespace of classes."""

from __future__ import annotations

import sys
import types
from collections.abc import Mapping
from typing import Any

import structlog

from pyaspect.aop.enumerator import resolve_namespaces
from pyaspect.aop.filtering import filter_members
from pyaspect.aop.pointcut import compile_pointcut
from pyaspect.aop.types import NamespaceKind

logger = structlog.get_logger("pyaspect.aop.injection")


def classes_in_context(context: Any = None) -> dict[str, type]:
    """Collect the classes visible in *context*, keyed by the name they are bound to.

    * ``None`` — the ``__main__`` module.
    * A module — classes defined in that module (imports are ignored).
    * A class — the class itself plus its nested classes.
    * A mapping or any object with a ``__dict__`` — every class value.

    A class bound under several names is reported once, under the first.
    """
    if context is None:
        context = sys.modules["__main__"]

    if isinstance(context, types.ModuleType):
        items = [
            (name, value)
            for name, value in vars(context).items()
            if isinstance(value, type) and value.__module__ == context.__name__
        ]
    elif isinstance(context, type):
        items = [(context.__name__, context), *vars(context).items()]
    elif isinstance(context, Mapping):
        items = list(context.items())
    else:
        items = list(vars(context).items())

    found: dict[str, type] = {}
    seen: set[int] = set()
    for name, value in items:
        if isinstance(value, type) and id(value) not in seen:
            seen.add(id(value))
            found[name] = value
    return found


def select_members(
    query: str,
    context: Any = None,
    *,
    include_private: bool = True,
) -> dict[str, tuple[type, list[str]]]:
    """Resolve *query* to the members it selects, keyed by class name.

    Each eligible member of each class is tested as ``"ClassName.member"``
    against the pointcut *query*. Eligibility follows the empty-filter rules
    of :func:`pyaspect.aop.filtering.filter_members`.
    """
    pattern = compile_pointcut(query)
    selected: dict[str, tuple[type, list[str]]] = {}

    for class_name, cls in classes_in_context(context).items():
        namespaces = resolve_namespaces(cls)
        for kind in (NamespaceKind.INSTANCE, NamespaceKind.TYPE):
            for name in filter_members(namespaces.of_kind(kind), (), kind, include_private=include_private):
                if pattern.fullmatch(f"{class_name}.{name}"):
                    selected.setdefault(class_name, (cls, []))[1].append(name)

    logger.debug(
        "query_matched",
        query=query,
        matches={class_name: names for class_name, (_, names) in selected.items()},
    )
    return selected
