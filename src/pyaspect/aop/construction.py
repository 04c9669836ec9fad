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
"""Construction hooks — interception around ``__init__``."""

from __future__ import annotations

import functools
from typing import Any

import structlog

from pyaspect.aop.types import CallArguments, Handler, Phase
from pyaspect.aop.weaver import bind_original
from pyaspect.kernel.exceptions import ConstructionHookError

logger = structlog.get_logger("pyaspect.aop.construction")


def install_construction_hook(cls: Any, handler: Handler, phase: Phase) -> None:
    """Wrap the effective ``__init__`` of *cls* with a single-phase hook.

    * ``Phase.BEFORE``: ``handler("<ClassName>:before", arguments)`` runs
      first and may mutate the constructor arguments in place.
    * ``Phase.AFTER``: ``handler("<ClassName>:after", instance)`` runs once
      ``__init__`` has returned. Its return value is ignored because an
      initializer cannot replace the instance being built.

    The hook is installed on *cls* itself, so subclasses that do not define
    their own ``__init__`` inherit it. Hooks compose like member wraps.
    """
    if not isinstance(cls, type):
        raise ConstructionHookError(cls)

    raw = vars(cls).get("__init__")
    if raw is None:
        raw = getattr(cls, "__init__")

    label = phase.label(cls.__name__)

    def call_original(self: Any, args: Any, kwargs: dict[str, Any]) -> None:
        # object.__init__ rejects arguments once __init__ is overridden; they
        # were meant for a custom __new__.
        if raw is object.__init__:
            raw(self)
        else:
            bind_original(raw, self, type(self))(*args, **kwargs)

    if phase is Phase.BEFORE:

        def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
            arguments = CallArguments(args, kwargs)
            handler(label, arguments)
            call_original(self, arguments, arguments.kwargs)

    else:

        def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
            call_original(self, args, kwargs)
            handler(label, self)

    functools.update_wrapper(__init__, raw)
    cls.__init__ = __init__  # type: ignore[misc]
    logger.debug("construction_hook_installed", owner=cls.__qualname__, phase=phase.value)
