import re
from typing import Optional, Pattern

from .errors import InvalidArgumentError, PatternError


MATCH_ALL = re.compile(r"^.*$", re.IGNORECASE | re.DOTALL)


def compile_glob(pattern: Optional[str]) -> Pattern[str]:
    # Compile a comma separated list of file name globs ("*.jpg, *.png")
    # into one case-insensitive, fully anchored matcher.
    if pattern is None or not pattern.strip():
        return MATCH_ALL

    fragments = []
    for fragment in pattern.split(','):
        fragment = fragment.strip()
        if not fragment:
            continue
        escaped = re.escape(fragment).replace(r'\*', '.*').replace(r'\?', '.')
        fragments.append(f"(?:{escaped})")

    if not fragments:
        return MATCH_ALL

    return re.compile("^(?:" + "|".join(fragments) + ")$", re.IGNORECASE)


def matches(regex: Pattern[str], name: str) -> bool:
    return regex.fullmatch(name) is not None


def compile_regex(pattern: str) -> Pattern[str]:
    # Raw regular expression, used as-is for text location.
    if pattern is None:
        raise InvalidArgumentError("pattern must not be None")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e
