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
"""Tests for LoggingPort protocol."""

from typing import Any

from pyaspect.logging.port import LoggingPort
from pyaspect.logging.structlog_adapter import StructlogAdapter


class TestLoggingPortProtocol:
    def test_conforming_class_is_instance(self):
        class RecordingLogging:
            def configure(self, config: Any) -> None:
                pass

            def set_level(self, component: str, level: str) -> None:
                pass

        assert isinstance(RecordingLogging(), LoggingPort)

    def test_configure_alone_is_not_enough(self):
        class ConfigureOnly:
            def configure(self, config: Any) -> None:
                pass

        assert not isinstance(ConfigureOnly(), LoggingPort)

    def test_structlog_adapter_implements_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)
