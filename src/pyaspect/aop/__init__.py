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
"""Aspect weaving: before/after/around interception of class members."""

from pyaspect.aop.engine import (
    AspectEngine,
    after,
    after_init,
    around,
    before,
    before_init,
    configure,
    get_engine,
    inject_after,
    inject_before,
)
from pyaspect.aop.enumerator import resolve_namespaces
from pyaspect.aop.filtering import TYPE_LEVEL_RESERVED, filter_members
from pyaspect.aop.pointcut import matches_pointcut
from pyaspect.aop.properties import WeavingProperties
from pyaspect.aop.types import CallArguments, Handler, MemberNamespaces, NamespaceKind, Phase
from pyaspect.aop.weaver import install_interceptors

__all__ = [
    "TYPE_LEVEL_RESERVED",
    "AspectEngine",
    "CallArguments",
    "Handler",
    "MemberNamespaces",
    "NamespaceKind",
    "Phase",
    "WeavingProperties",
    "after",
    "after_init",
    "around",
    "before",
    "before_init",
    "configure",
    "filter_members",
    "get_engine",
    "inject_after",
    "inject_before",
    "install_interceptors",
    "matches_pointcut",
    "resolve_namespaces",
]
