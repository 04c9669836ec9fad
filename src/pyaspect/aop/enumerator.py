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
"""Member enumeration — splits a target's class table into its two namespaces."""

from __future__ import annotations

import functools
import inspect
from typing import Any

from pyaspect.aop.types import MemberNamespaces
from pyaspect.kernel.exceptions import UnsupportedTargetError


def is_bare_callable(target: Any) -> bool:
    """Return True for functions, methods, builtins and partials.

    Classes and instances of classes defining ``__call__`` are not bare
    callables; they own a member table that can be woven.
    """
    return inspect.isroutine(target) or isinstance(target, functools.partial)


def owner_of(target: Any) -> type:
    """Return the class whose member table backs *target*."""
    if is_bare_callable(target):
        raise UnsupportedTargetError(target)
    return target if isinstance(target, type) else type(target)


def resolve_namespaces(target: Any) -> MemberNamespaces:
    """Resolve the instance-level and type-level namespaces of *target*.

    Only the owner's own ``__dict__`` is read; inherited members belong to
    the class that defines them. Raw slot values are kept so that the
    descriptor kind (``staticmethod``, ``classmethod``, plain function)
    survives until the installer sees it.
    """
    owner = owner_of(target)
    instance_level: dict[str, Any] = {}
    type_level: dict[str, Any] = {}

    for name, raw in vars(owner).items():
        if isinstance(raw, (staticmethod, classmethod)):
            type_level[name] = raw
        else:
            instance_level[name] = raw

    return MemberNamespaces(owner=owner, instance_level=instance_level, type_level=type_level)
