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
"""Member name filtering for weaving."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from pyaspect.aop.types import NamespaceKind

logger = structlog.get_logger("pyaspect.aop.filtering")

CONSTRUCTOR_NAME = "__init__"

# Reflective hooks Python looks up on the class itself.
TYPE_LEVEL_RESERVED: frozenset[str] = frozenset(
    {
        "__new__",
        "__init_subclass__",
        "__class_getitem__",
        "__subclasshook__",
    }
)


def filter_members(
    names: Iterable[str],
    method_filter: Iterable[str],
    kind: NamespaceKind,
    *,
    include_private: bool = True,
) -> list[str]:
    """Reduce candidate *names* to the ones that should be woven.

    * Instance level: the constructor is never a candidate.
    * Type level: names in :data:`TYPE_LEVEL_RESERVED` are skipped unless
      listed in *method_filter*.
    * With an empty *method_filter*, dunder names are skipped, and so are
      other underscore-prefixed names only when *include_private* is off.
    * A non-empty *method_filter* is intersected with the candidates.

    Candidate order is preserved. An empty result is valid.
    """
    wanted = frozenset(method_filter)
    retained: list[str] = []

    for name in names:
        if kind is NamespaceKind.INSTANCE and name == CONSTRUCTOR_NAME:
            continue
        if wanted:
            if name in wanted:
                retained.append(name)
            continue
        if kind is NamespaceKind.TYPE and name in TYPE_LEVEL_RESERVED:
            continue
        if name.startswith("__") and name.endswith("__"):
            continue
        if name.startswith("_") and not include_private:
            continue
        retained.append(name)

    return retained


def report_unmatched(owner: type, method_filter: Iterable[str], woven: Iterable[str]) -> list[str]:
    """Log and return filter names that did not resolve to any woven member."""
    missing = sorted(frozenset(method_filter) - frozenset(woven))
    if missing:
        logger.debug("filter_name_not_found", owner=owner.__qualname__, names=missing)
    return missing
