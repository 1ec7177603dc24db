"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exclusions.py
Builds the path exclusion predicate from user-supplied regex fragments.
"""

import os
import re
from typing import List, Optional, Callable

EXCLUSION_FLAGS = re.IGNORECASE | re.DOTALL


def build_exclusion_pattern(patterns: List[str]) -> Optional["re.Pattern[str]"]:
    """
    Combines patterns into one regex that must match a whole path.

    The optional `(.*<sep>)?` prefix lets a bare pattern match the last path
    component(s), so "node_modules" excludes every directory of that name.
    Patterns may still describe whole paths.
    On Windows, "/" in a pattern stands for the path separator.
    Raises ValueError if the combined regex does not compile.
    """
    patterns = [p for p in patterns if p]
    if not patterns:
        return None

    regex = "(.*" + re.escape(os.sep) + ")?(" + "|".join(patterns) + ")"
    if os.sep == "\\":
        regex = regex.replace("/", "\\\\")

    try:
        return re.compile(regex, EXCLUSION_FLAGS)
    except re.error as e:
        raise ValueError("Please check the syntax of your regex.") from e


def build_exclusion_matcher(patterns: List[str]) -> Optional[Callable[[str], bool]]:
    """Returns a predicate `path -> excluded?`, or None when nothing is excluded."""
    compiled = build_exclusion_pattern(patterns)
    if compiled is None:
        return None

    def is_excluded(path: str) -> bool:
        return compiled.fullmatch(path) is not None

    return is_excluded
