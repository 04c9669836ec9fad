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
"""AOP weaver — replaces class members with phase-dispatching interceptors."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Iterable
from typing import Any

import structlog

from pyaspect.aop.filtering import filter_members
from pyaspect.aop.types import CallArguments, Handler, MemberNamespaces, NamespaceKind, Phase

logger = structlog.get_logger("pyaspect.aop.weaver")


def install_interceptors(
    namespaces: MemberNamespaces,
    handler: Handler,
    phases: frozenset[Phase],
    method_filter: Iterable[str] = (),
    *,
    include_private: bool = True,
    wrap_coroutines: bool = True,
) -> list[str]:
    """Weave *handler* into the eligible members of ``namespaces.owner``.

    Each retained, callable slot is replaced in place on the owner with an
    interceptor that closes over the slot's current value. Wrapping the
    same member again therefore nests: the newest interceptor is outermost.

    Returns the names that were wrapped, instance level first.
    """
    method_filter = tuple(method_filter)
    owner = namespaces.owner
    woven: list[str] = []

    for kind in (NamespaceKind.INSTANCE, NamespaceKind.TYPE):
        table = namespaces.of_kind(kind)
        for name in filter_members(table, method_filter, kind, include_private=include_private):
            raw = table[name]
            if not _is_wrappable(raw):
                continue

            replacement = build_interceptor(owner, name, raw, handler, phases, wrap_coroutines=wrap_coroutines)
            setattr(owner, name, replacement)
            woven.append(name)
            logger.debug(
                "interceptor_installed",
                owner=owner.__qualname__,
                member=name,
                namespace=kind.value,
                phases=sorted(p.value for p in phases),
            )

    return woven


def build_interceptor(
    owner: type,
    name: str,
    raw: Any,
    handler: Handler,
    phases: frozenset[Phase],
    *,
    wrap_coroutines: bool = True,
    label: str | None = None,
) -> Any:
    """Build the slot value that replaces *raw* on *owner*.

    The replacement has the same descriptor kind as *raw* (plain function,
    ``staticmethod`` or ``classmethod``). Callables that do not bind a
    receiver on access are installed as ``staticmethod``. The replacement
    re-binds *raw* through the descriptor protocol on every call, so the
    original always sees the calling instance or class. *label* overrides
    the name handed to the handler and defaults to *name*.
    """
    func = getattr(raw, "__func__", raw)
    resolve = _receiver_resolver(owner, name, raw)
    label = name if label is None else label

    if wrap_coroutines and inspect.iscoroutinefunction(func):
        dispatch_async = _build_async_dispatcher(label, handler, phases)

        async def interceptor(*args: Any, **kwargs: Any) -> Any:
            bound, rest = resolve(args)
            return await dispatch_async(bound, CallArguments(rest, kwargs))

    else:
        dispatch = _build_sync_dispatcher(label, handler, phases)

        def interceptor(*args: Any, **kwargs: Any) -> Any:
            bound, rest = resolve(args)
            return dispatch(bound, CallArguments(rest, kwargs))

    functools.update_wrapper(interceptor, func)

    if isinstance(raw, staticmethod) or not _binds_receiver(raw):
        return staticmethod(interceptor)
    if isinstance(raw, classmethod):
        return classmethod(interceptor)
    return interceptor


def _binds_receiver(raw: Any) -> bool:
    """Whether attribute access on an instance would bind *raw* to that instance.

    Builtins such as ``len`` and instances defining ``__call__`` are returned
    as-is when read from a class and must keep being called without a
    receiver.
    """
    return getattr(type(raw), "__get__", None) is not None


def _is_wrappable(raw: Any) -> bool:
    """A slot is wrappable when it holds a callable that is not a nested class."""
    if isinstance(raw, type):
        return False
    return callable(getattr(raw, "__func__", raw))


def bind_original(raw: Any, receiver: Any, owner: type) -> Callable[..., Any]:
    """Resolve *raw* against *receiver* the way attribute access would."""
    getter = getattr(type(raw), "__get__", None)
    if getter is None:
        return raw
    return getter(raw, receiver, owner)


def _receiver_resolver(owner: type, name: str, raw: Any) -> Callable[[tuple], tuple[Callable[..., Any], tuple]]:
    """Return a function splitting interceptor ``args`` into (bound original, call args)."""
    if isinstance(raw, staticmethod) or not _binds_receiver(raw):

        def resolve_static(args: tuple) -> tuple[Callable[..., Any], tuple]:
            return bind_original(raw, None, owner), args

        return resolve_static

    if isinstance(raw, classmethod):

        def resolve_class(args: tuple) -> tuple[Callable[..., Any], tuple]:
            cls, *rest = args
            return bind_original(raw, None, cls), tuple(rest)

        return resolve_class

    def resolve_instance(args: tuple) -> tuple[Callable[..., Any], tuple]:
        if not args:
            raise TypeError(f"{owner.__qualname__}.{name}() missing its receiver argument")
        receiver, *rest = args
        return bind_original(raw, receiver, type(receiver)), tuple(rest)

    return resolve_instance


def _build_sync_dispatcher(
    name: str,
    handler: Handler,
    phases: frozenset[Phase],
) -> Callable[[Callable[..., Any], CallArguments], Any]:
    """Build the before -> original -> after sequence for a sync member."""
    run_before = Phase.BEFORE in phases
    run_after = Phase.AFTER in phases

    def dispatch(bound: Callable[..., Any], arguments: CallArguments) -> Any:
        if run_before:
            handler(Phase.BEFORE.label(name), arguments)

        result = bound(*arguments, **arguments.kwargs)

        if run_after:
            result = handler(Phase.AFTER.label(name), result)
        return result

    return dispatch


def _build_async_dispatcher(
    name: str,
    handler: Handler,
    phases: frozenset[Phase],
) -> Callable[[Callable[..., Any], CallArguments], Any]:
    """Async counterpart of :func:`_build_sync_dispatcher`.

    Handlers may be plain functions or coroutine functions. Only the results
    of a coroutine-function handler are awaited, so an awaitable returned by
    the original passes through a plain after-handler untouched.
    """
    run_before = Phase.BEFORE in phases
    run_after = Phase.AFTER in phases
    handler_is_async = inspect.iscoroutinefunction(handler)

    async def dispatch(bound: Callable[..., Any], arguments: CallArguments) -> Any:
        if run_before:
            outcome = handler(Phase.BEFORE.label(name), arguments)
            if handler_is_async:
                await outcome

        result = await bound(*arguments, **arguments.kwargs)

        if run_after:
            result = handler(Phase.AFTER.label(name), result)
            if handler_is_async:
                result = await result
        return result

    return dispatch
