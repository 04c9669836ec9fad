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
"""StructlogAdapter — renders weaving events through structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from pyaspect.core.config import Config

ENGINE_NAMESPACE = "pyaspect.aop"

COMPONENTS: frozenset[str] = frozenset({"engine", "weaver", "filtering", "injection", "construction"})


def component_logger_name(component: str) -> str:
    """Map a short component name to its logger; dotted names pass through.

    >>> component_logger_name("weaver")
    'pyaspect.aop.weaver'
    >>> component_logger_name("myapp.aspects")
    'myapp.aspects'
    """
    if component in COMPONENTS:
        return f"{ENGINE_NAMESPACE}.{component}"
    return component


def tag_component(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add ``component`` to events emitted by the engine's own loggers."""
    name = event_dict.get("logger", "")
    if name.startswith(ENGINE_NAMESPACE + "."):
        event_dict["component"] = name[len(ENGINE_NAMESPACE) + 1 :]
    return event_dict


def _level(value: Any) -> int:
    return getattr(logging, str(value).upper(), logging.INFO)


class StructlogAdapter:
    """Default :class:`LoggingPort` backed by structlog and stdlib logging.

    Reads ``pyaspect.logging.format`` (``console`` or ``json``) and
    ``pyaspect.logging.level``. Under ``level``, ``root`` sets the overall
    threshold and every other key names an engine component or a logger.

    Events such as ``interceptor_installed`` and ``target_woven`` are logged
    at debug level, so ``level: {weaver: DEBUG}`` is enough to trace wraps.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("pyaspect.logging.level"))
        root = _level(levels.pop("root", "INFO"))
        json_output = str(config.get("pyaspect.logging.format", "console")).lower() == "json"

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                tag_component,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            # Engine modules hold module-level loggers; they must follow reconfiguration.
            cache_logger_on_first_use=False,
        )
        logging.basicConfig(format="%(message)s", stream=self._stream or sys.stdout, level=root, force=True)

        for component, level in levels.items():
            self.set_level(component, level)

    def set_level(self, component: str, level: str) -> None:
        logging.getLogger(component_logger_name(component)).setLevel(_level(level))
