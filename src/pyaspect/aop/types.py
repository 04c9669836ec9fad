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
"""AOP core types — phases, namespace views, and the call argument payload."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

Handler = Callable[[str, Any], Any]
"""A handler receives ``(labeled_name, payload)`` and may return a new payload."""


class Phase(enum.Enum):
    """Interception point relative to the original call."""

    BEFORE = "before"
    AFTER = "after"

    def label(self, name: str) -> str:
        """Return the handler label for member *name*, e.g. ``"save:before"``."""
        return f"{name}:{self.value}"


BEFORE_ONLY: frozenset[Phase] = frozenset({Phase.BEFORE})
AFTER_ONLY: frozenset[Phase] = frozenset({Phase.AFTER})
AROUND: frozenset[Phase] = frozenset({Phase.BEFORE, Phase.AFTER})


class NamespaceKind(enum.Enum):
    """Which member table of a class a name was found in."""

    INSTANCE = "instance"
    TYPE = "type"


class CallArguments(list):
    """Positional arguments of a single intercepted call.

    Handed to before-phase handlers. Being a plain ``list``, it can be
    mutated in place (``args[0] += 1``, ``args.append(...)``); keyword
    arguments are exposed, equally mutable, as :attr:`kwargs`.
    """

    def __init__(self, args: Iterable[Any] = (), kwargs: Mapping[str, Any] | None = None) -> None:
        super().__init__(args)
        self.kwargs: dict[str, Any] = dict(kwargs or {})

    def __repr__(self) -> str:
        return f"CallArguments({list.__repr__(self)}, kwargs={self.kwargs!r})"


@dataclass(frozen=True)
class MemberNamespaces:
    """Snapshot of the two member tables of a target's owning class.

    Attributes:
        owner: The class whose ``__dict__`` is enumerated and later mutated.
        instance_level: Raw slot values shared by all instances.
        type_level: Raw ``staticmethod`` / ``classmethod`` slots owned by the class.
    """

    owner: type
    instance_level: dict[str, Any] = field(default_factory=dict)
    type_level: dict[str, Any] = field(default_factory=dict)

    def of_kind(self, kind: NamespaceKind) -> dict[str, Any]:
        if kind is NamespaceKind.INSTANCE:
            return self.instance_level
        return self.type_level
