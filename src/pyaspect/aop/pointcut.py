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
"""Pointcut expressions — name patterns for selecting members to weave."""

from __future__ import annotations

import functools
import re

from pyaspect.kernel.exceptions import InvalidQueryError


def matches_pointcut(pattern: str, qualified_name: str) -> bool:
    """Check whether *qualified_name* matches a pointcut *pattern*.

    Pattern syntax
    --------------
    * ``*``  — matches exactly one dot-separated segment.
    * ``**`` — matches one or more segments (crosses dots).
    * Partial globs inside a segment use fnmatch rules,
      e.g. ``set*Value`` matches ``setMaxValue``.
    * ``(A|B|C)`` inside a segment matches any one alternative.

    Examples
    --------
    >>> matches_pointcut("Order.*", "Order.create")
    True
    >>> matches_pointcut("(Order|Invoice).create", "Invoice.create")
    True
    >>> matches_pointcut("My*Class.setValues?", "MyOtherClass.setValuesX")
    True
    >>> matches_pointcut("*.create", "pkg.Order.create")
    False
    """
    return compile_pointcut(pattern).fullmatch(qualified_name) is not None


@functools.lru_cache(maxsize=256)
def compile_pointcut(pattern: str) -> re.Pattern[str]:
    """Validate *pattern* and compile it into a regex.

    Raises:
        InvalidQueryError: if the pattern is blank, has an empty segment,
            or has unbalanced or nested parentheses.
    """
    if not pattern or not pattern.strip():
        raise InvalidQueryError(pattern, "query is empty")

    segments = _split_segments(pattern)
    if any(not seg for seg in segments):
        raise InvalidQueryError(pattern, "query has an empty segment")

    regex_parts = [_segment_to_regex(pattern, seg) for seg in segments]
    return re.compile(r"\.".join(regex_parts))


def _split_segments(pattern: str) -> list[str]:
    """Split on dots that are not inside an alternation group."""
    segments: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in pattern:
        if ch == "(":
            if depth:
                raise InvalidQueryError(pattern, "nested groups are not supported")
            depth += 1
        elif ch == ")":
            if not depth:
                raise InvalidQueryError(pattern, "unbalanced ')'")
            depth -= 1
        elif ch == "." and not depth:
            segments.append("".join(current))
            current = []
            continue
        current.append(ch)
    if depth:
        raise InvalidQueryError(pattern, "unbalanced '('")
    segments.append("".join(current))
    return segments


def _segment_to_regex(pattern: str, seg: str) -> str:
    """Convert a single pattern segment to a regex fragment."""
    if seg == "**":
        # One or more dot-separated segments.
        return r"(?:[^.]+\.)*[^.]+"
    if seg == "*":
        return r"[^.]+"

    parts: list[str] = []
    i = 0
    while i < len(seg):
        ch = seg[i]
        if ch == "(":
            end = seg.index(")", i)
            alternatives = seg[i + 1 : end].split("|")
            if any("." in alt for alt in alternatives):
                raise InvalidQueryError(pattern, "alternatives cannot contain dots")
            parts.append("(?:" + "|".join(_glob_to_regex(alt) for alt in alternatives) + ")")
            i = end + 1
            continue
        parts.append(_glob_to_regex(ch))
        i += 1
    return "".join(parts)


def _glob_to_regex(text: str) -> str:
    """Translate ``*`` and ``?`` within one segment, escaping everything else."""
    out: list[str] = []
    for ch in text:
        if ch == "*":
            out.append("[^.]*")
        elif ch == "?":
            out.append("[^.]")
        else:
            out.append(re.escape(ch))
    return "".join(out)
