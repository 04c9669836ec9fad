"""Tests for the pointcut expression matcher."""

from __future__ import annotations

import pytest

from pyaspect.aop.pointcut import compile_pointcut, matches_pointcut
from pyaspect.kernel.exceptions import InvalidQueryError


class TestMatchesPointcut:
    """matches_pointcut covers exact, single-star, double-star, partial globs and groups."""

    def test_exact_match(self) -> None:
        assert matches_pointcut("MyClass.setValue", "MyClass.setValue")

    def test_star_matches_any_member(self) -> None:
        assert matches_pointcut("MyClass.*", "MyClass.setValue")

    def test_star_matches_any_class(self) -> None:
        assert matches_pointcut("*.setValue", "YourClass.setValue")

    def test_partial_glob_inside_member(self) -> None:
        assert matches_pointcut("MyClass.set*Value", "MyClass.setMaxValue")
        assert not matches_pointcut("MyClass.set*Value", "MyClass.getMaxValue")

    def test_partial_glob_inside_class(self) -> None:
        assert matches_pointcut("My*Class.run", "MyOtherClass.run")

    def test_question_mark_matches_one_character(self) -> None:
        assert matches_pointcut("MyClass.setValues?", "MyClass.setValuesX")
        assert not matches_pointcut("MyClass.setValues?", "MyClass.setValues")

    def test_alternation_group(self) -> None:
        pattern = "(MyClass|YourClass|TheirClass).*"
        assert matches_pointcut(pattern, "YourClass.save")
        assert matches_pointcut(pattern, "TheirClass.load")
        assert not matches_pointcut(pattern, "OurClass.save")

    def test_alternation_inside_segment_with_globs(self) -> None:
        assert matches_pointcut("Repo.(get|find)_*", "Repo.find_all")
        assert not matches_pointcut("Repo.(get|find)_*", "Repo.delete_all")

    def test_doublestar_any_depth(self) -> None:
        assert matches_pointcut("**.save", "MyClass.save")
        assert matches_pointcut("**.save", "pkg.mod.MyClass.save")

    def test_star_does_not_cross_dots(self) -> None:
        assert not matches_pointcut("*.save", "pkg.MyClass.save")

    def test_regex_metacharacters_are_literal(self) -> None:
        assert not matches_pointcut("My+Class.run", "MyyClass.run")


class TestInvalidQueries:
    @pytest.mark.parametrize(
        "query",
        ["", "   ", "MyClass..run", ".run", "(MyClass.run", "MyClass).run", "((A|B)).run"],
    )
    def test_rejected(self, query: str) -> None:
        with pytest.raises(InvalidQueryError) as exc_info:
            compile_pointcut(query)
        assert exc_info.value.code == "ASPECT_INVALID_QUERY"

    def test_dots_inside_alternatives_rejected(self) -> None:
        with pytest.raises(InvalidQueryError, match="alternatives cannot contain dots"):
            compile_pointcut("(a.b|c).run")
