"""Tests for member name filtering."""

from __future__ import annotations

from structlog.testing import capture_logs

from pyaspect.aop.filtering import TYPE_LEVEL_RESERVED, filter_members, report_unmatched
from pyaspect.aop.types import NamespaceKind

INSTANCE = NamespaceKind.INSTANCE
TYPE = NamespaceKind.TYPE


class TestInstanceLevel:
    def test_constructor_always_excluded(self) -> None:
        assert filter_members(["__init__", "save"], (), INSTANCE) == ["save"]
        assert filter_members(["__init__", "save"], ["__init__"], INSTANCE) == []

    def test_private_names_are_candidates_by_default(self) -> None:
        names = ["save", "_load", "__repr__"]
        assert filter_members(names, (), INSTANCE) == ["save", "_load"]

    def test_private_names_skipped_when_disabled(self) -> None:
        names = ["save", "_load", "__repr__"]
        assert filter_members(names, (), INSTANCE, include_private=False) == ["save"]

    def test_filter_intersects_and_keeps_candidate_order(self) -> None:
        names = ["a", "b", "c", "_d"]
        assert filter_members(names, ["c", "a", "_d", "zzz"], INSTANCE) == ["a", "c", "_d"]


class TestTypeLevel:
    def test_reserved_names_excluded_by_default(self) -> None:
        names = ["__new__", "__init_subclass__", "create"]
        assert filter_members(names, (), TYPE) == ["create"]

    def test_reserved_names_allowed_when_named(self) -> None:
        assert filter_members(["__new__", "create"], ["__new__"], TYPE) == ["__new__"]

    def test_reserved_set_contents(self) -> None:
        assert "__new__" in TYPE_LEVEL_RESERVED
        assert "__class_getitem__" in TYPE_LEVEL_RESERVED

    def test_empty_result_is_valid(self) -> None:
        assert filter_members([], (), TYPE) == []
        assert filter_members(["a"], ["b"], TYPE) == []


class TestReportUnmatched:
    def test_returns_and_logs_missing_names(self) -> None:
        class Owner:
            pass

        with capture_logs() as logs:
            missing = report_unmatched(Owner, ["save", "load"], ["save"])
        assert missing == ["load"]
        assert logs[0]["event"] == "filter_name_not_found"
        assert logs[0]["names"] == ["load"]

    def test_nothing_logged_when_all_matched(self) -> None:
        with capture_logs() as logs:
            assert report_unmatched(object, ["a"], ["a"]) == []
        assert logs == []
