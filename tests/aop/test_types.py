"""Tests for AOP core types."""

from __future__ import annotations

from pyaspect.aop.types import (
    AFTER_ONLY,
    AROUND,
    BEFORE_ONLY,
    CallArguments,
    MemberNamespaces,
    NamespaceKind,
    Phase,
)


class TestPhase:
    def test_label(self) -> None:
        assert Phase.BEFORE.label("save") == "save:before"
        assert Phase.AFTER.label("save") == "save:after"

    def test_phase_sets(self) -> None:
        assert BEFORE_ONLY == {Phase.BEFORE}
        assert AFTER_ONLY == {Phase.AFTER}
        assert AROUND == {Phase.BEFORE, Phase.AFTER}


class TestCallArguments:
    def test_behaves_like_a_list(self) -> None:
        args = CallArguments((1, 2))
        args[0] += 1
        args.append(3)
        assert args == [2, 2, 3]

    def test_kwargs_are_copied_and_mutable(self) -> None:
        source = {"a": 1}
        args = CallArguments((), source)
        args.kwargs["a"] = 2
        assert source == {"a": 1}
        assert args.kwargs == {"a": 2}

    def test_kwargs_default_to_empty(self) -> None:
        assert CallArguments().kwargs == {}

    def test_repr_shows_both_parts(self) -> None:
        assert repr(CallArguments([1], {"k": "v"})) == "CallArguments([1], kwargs={'k': 'v'})"


class TestMemberNamespaces:
    def test_of_kind(self) -> None:
        namespaces = MemberNamespaces(owner=object, instance_level={"a": 1}, type_level={"b": 2})
        assert namespaces.of_kind(NamespaceKind.INSTANCE) == {"a": 1}
        assert namespaces.of_kind(NamespaceKind.TYPE) == {"b": 2}
