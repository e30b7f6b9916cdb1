"""
Display-name helpers.

Account names inside one asset category often repeat the same leading
words ("Savings Ally", "Savings Chase"). common_display_prefix() finds
that shared lead so the category can show "Ally" and "Chase".
"""

from typing import Sequence

MIN_PREFIX_LENGTH = 3


def common_display_prefix(names: Sequence[str], min_length: int = MIN_PREFIX_LENGTH) -> str:
    """
    The longest leading text shared by every name that ends on a word boundary.

    Returns "" when there are fewer than two names, when every name is the
    same, when the prefix would swallow a whole name, or when the trimmed
    prefix is shorter than min_length.
    """
    if len(names) < 2 or len(set(names)) == 1:
        return ""

    prefix = names[0]
    for name in names[1:]:
        while prefix and not name.startswith(prefix):
            prefix = prefix[:-1]
        if not prefix:
            return ""

    # The next character in every name must be a space
    at_boundary = prefix.endswith(" ") or all(
        len(name) > len(prefix) and name[len(prefix)] == " " for name in names
    )
    if not at_boundary:
        cut = prefix.rfind(" ")
        prefix = prefix[:cut + 1] if cut >= 0 else ""

    if len(prefix.strip()) < min_length:
        return ""
    if any(not name[len(prefix):].strip() for name in names):
        return ""
    return prefix


def strip_common_prefix(names: Sequence[str], min_length: int = MIN_PREFIX_LENGTH) -> list[str]:
    """Names with their shared prefix removed; unchanged when there is none."""
    prefix = common_display_prefix(names, min_length)
    if not prefix:
        return list(names)
    return [name[len(prefix):].strip() for name in names]
