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
"""Weaving configuration properties."""

# NOTE: No `from __future__ import annotations`: Config.bind() resolves
# field types at runtime with typing.get_type_hints().

from dataclasses import dataclass

from pyaspect.core.config import config_properties


@config_properties(prefix="pyaspect.weaving")
@dataclass(frozen=True)
class WeavingProperties:
    """Settings applied to every wrap performed by an engine.

    Attributes:
        include_private: Treat ``_name`` members as eligible when no method
            filter is given. Disable to weave only public members. Dunder
            names stay excluded either way.
        wrap_coroutines: Build awaiting interceptors for coroutine functions.
            When disabled, the after phase receives the coroutine object.
    """

    include_private: bool = True
    wrap_coroutines: bool = True
