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
"""AspectEngine — public entry points for weaving handlers into targets."""

from __future__ import annotations

from typing import Any

import structlog

from pyaspect.aop.construction import install_construction_hook
from pyaspect.aop.enumerator import resolve_namespaces
from pyaspect.aop.filtering import report_unmatched
from pyaspect.aop.injection import select_members
from pyaspect.aop.properties import WeavingProperties
from pyaspect.aop.types import AFTER_ONLY, AROUND, BEFORE_ONLY, Handler, Phase
from pyaspect.aop.weaver import install_interceptors
from pyaspect.core.config import Config
from pyaspect.logging.port import LoggingPort
from pyaspect.logging.structlog_adapter import StructlogAdapter

logger = structlog.get_logger("pyaspect.aop.engine")


class AspectEngine:
    """Weaves handlers into instances and classes.

    Every entry point mutates the target's class in place and returns once
    the interceptors are installed. Nothing is kept on the engine: calls to
    a woven member only run the closures installed on the class.

    Usage::

        engine = AspectEngine()
        engine.before(OrderService, audit)            # every public method
        engine.after(order_service, redact, "load")   # only ``load``
    """

    def __init__(self, properties: WeavingProperties | None = None) -> None:
        self._properties = properties if properties is not None else WeavingProperties()

    @classmethod
    def from_config(cls, config: Config) -> AspectEngine:
        """Build an engine from the ``pyaspect.weaving`` config section."""
        return cls(config.bind(WeavingProperties))

    @property
    def properties(self) -> WeavingProperties:
        return self._properties

    # ------------------------------------------------------------------
    # Member interception
    # ------------------------------------------------------------------

    def before(self, target: Any, handler: Handler, *method_names: str) -> None:
        """Call ``handler("<name>:before", arguments)`` ahead of each selected member.

        *arguments* is a mutable :class:`~pyaspect.aop.types.CallArguments`;
        in-place changes reach the original call. The handler's return
        value is ignored.
        """
        self._weave(target, handler, BEFORE_ONLY, method_names)

    def after(self, target: Any, handler: Handler, *method_names: str) -> None:
        """Replace each selected member's result with ``handler("<name>:after", result)``."""
        self._weave(target, handler, AFTER_ONLY, method_names)

    def around(self, target: Any, handler: Handler, *method_names: str) -> None:
        """Run *handler* in both phases; it tells them apart by the label suffix."""
        self._weave(target, handler, AROUND, method_names)

    def _weave(
        self,
        target: Any,
        handler: Handler,
        phases: frozenset[Phase],
        method_names: tuple[str, ...],
    ) -> list[str]:
        namespaces = resolve_namespaces(target)
        woven = install_interceptors(
            namespaces,
            handler,
            phases,
            method_names,
            include_private=self._properties.include_private,
            wrap_coroutines=self._properties.wrap_coroutines,
        )
        if method_names:
            report_unmatched(namespaces.owner, method_names, woven)
        logger.debug("target_woven", owner=namespaces.owner.__qualname__, members=woven)
        return woven

    # ------------------------------------------------------------------
    # Construction hooks
    # ------------------------------------------------------------------

    def before_init(self, cls: type, handler: Handler) -> None:
        """Call ``handler("<ClassName>:before", arguments)`` before ``__init__`` runs."""
        install_construction_hook(cls, handler, Phase.BEFORE)

    def after_init(self, cls: type, handler: Handler) -> None:
        """Call ``handler("<ClassName>:after", instance)`` once ``__init__`` returns."""
        install_construction_hook(cls, handler, Phase.AFTER)

    # ------------------------------------------------------------------
    # Query injection
    # ------------------------------------------------------------------

    def inject_before(self, query: str, handler: Handler, context: Any = None) -> list[str]:
        """Weave a before-handler into every member matching *query* in *context*.

        Returns the woven ``"ClassName.member"`` names, sorted.
        """
        return self._inject(query, handler, BEFORE_ONLY, context)

    def inject_after(self, query: str, handler: Handler, context: Any = None) -> list[str]:
        """Weave an after-handler into every member matching *query* in *context*."""
        return self._inject(query, handler, AFTER_ONLY, context)

    def _inject(self, query: str, handler: Handler, phases: frozenset[Phase], context: Any) -> list[str]:
        selected = select_members(query, context, include_private=self._properties.include_private)
        qualified: list[str] = []
        for class_name, (cls, names) in selected.items():
            woven = self._weave(cls, handler, phases, tuple(names))
            qualified.extend(f"{class_name}.{name}" for name in woven)
        return sorted(qualified)


# ---------------------------------------------------------------------------
# Module-level API backed by a default engine
# ---------------------------------------------------------------------------

_default_engine = AspectEngine()


def get_engine() -> AspectEngine:
    """Return the engine used by the module-level functions."""
    return _default_engine


def configure(config: Config, logging_port: LoggingPort | None = None) -> AspectEngine:
    """Configure logging and replace the default engine from *config*."""
    global _default_engine
    (logging_port or StructlogAdapter()).configure(config)
    _default_engine = AspectEngine.from_config(config)
    return _default_engine


def before(target: Any, handler: Handler, *method_names: str) -> None:
    get_engine().before(target, handler, *method_names)


def after(target: Any, handler: Handler, *method_names: str) -> None:
    get_engine().after(target, handler, *method_names)


def around(target: Any, handler: Handler, *method_names: str) -> None:
    get_engine().around(target, handler, *method_names)


def before_init(cls: type, handler: Handler) -> None:
    get_engine().before_init(cls, handler)


def after_init(cls: type, handler: Handler) -> None:
    get_engine().after_init(cls, handler)


def inject_before(query: str, handler: Handler, context: Any = None) -> list[str]:
    return get_engine().inject_before(query, handler, context)


def inject_after(query: str, handler: Handler, context: Any = None) -> list[str]:
    return get_engine().inject_after(query, handler, context)
