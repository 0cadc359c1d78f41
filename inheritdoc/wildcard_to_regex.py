"""Conversion of ``*``/``?`` wildcard patterns to regular expressions."""

import re


def wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard pattern that must match the whole string."""
    escaped = re.escape(pattern.strip()).replace(r"\?", ".").replace(r"\*", ".*")
    return re.compile(f"^{escaped}$")


def split_patterns(value: str | list[str] | None) -> list[str]:
    """Normalize a comma delimited string or a list into a list of patterns."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [p.strip() for p in items if p and p.strip()]
